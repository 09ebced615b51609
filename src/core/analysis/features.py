#!/usr/bin/env python3
"""
Linguistic feature extraction.

Two independent sub-analyses over anonymized text:
- Coherence: metaphor/modal density, pronoun distribution, sentence length
  and lexical-overlap coherence between consecutive sentences
- Entropy: sentiment-cue entropy, fragmentation and emotional stability

Tokenization is deliberately naive: case-folded whitespace splitting for
words and sentence-terminator splitting for sentences.
"""

import math
import re
import logging
from typing import List, Dict

from ..models.features import CoherenceFeatures, EntropyFeatures, FeatureSet
from ..vocabulary import (
    METAPHOR_CUES, PRONOUNS, PRONOUN_FAMILIES, MODAL_VERBS,
    POSITIVE_CUES, NEGATIVE_CUES, NEUTRAL_CUES, CONTRAST_CUES,
)

logger = logging.getLogger(__name__)

_SENTENCE_SPLIT_RE = re.compile(r'[.!?]+')

# Entropy of a three-outcome distribution never exceeds log2(3)
MAX_ENTROPY = math.log2(3)


def tokenize(text: str) -> List[str]:
    """Case-folded whitespace tokens."""
    if not text:
        return []
    return text.lower().split()


def split_sentences(text: str) -> List[str]:
    """Split on runs of sentence terminators, dropping blank segments."""
    if not text:
        return []
    return [part for part in _SENTENCE_SPLIT_RE.split(text) if part.strip()]


def _ratio(count: int, total: int) -> float:
    """
    count / total, or 0.0 when total is 0.

    An explicit zero-total guard rather than an additive epsilon in the
    denominator: non-empty totals give the exact ratio and empty input gives
    0.0, the same values an epsilon guard rounds to.
    """
    return count / total if total else 0.0


def _count_in(tokens: List[str], vocabulary) -> int:
    return sum(1 for token in tokens if token in vocabulary)


class FeatureExtractor:
    """Computes the FeatureSet of a single anonymized text sample."""

    def analyze_coherence(self, text: str) -> CoherenceFeatures:
        """
        Analyze linguistic coherence patterns.

        Args:
            text: Anonymized sample text

        Returns:
            CoherenceFeatures; empty text yields zero ratios and coherence 1.0
        """
        words = tokenize(text)
        sentences = split_sentences(text)
        word_count = len(words)

        pronoun_distribution = {
            pronoun: _ratio(words.count(pronoun), word_count) for pronoun in PRONOUNS
        }

        return CoherenceFeatures(
            metaphor_density=_ratio(_count_in(words, METAPHOR_CUES), word_count),
            pronoun_distribution=pronoun_distribution,
            modal_density=_ratio(_count_in(words, MODAL_VERBS), word_count),
            avg_sentence_length=word_count / max(1, len(sentences)) if word_count else 0.0,
            coherence_score=self.calculate_coherence_score(sentences),
            word_count=word_count,
            sentence_count=len(sentences),
        )

    @staticmethod
    def calculate_coherence_score(sentences: List[str]) -> float:
        """
        Mean Jaccard overlap between consecutive sentences.

        Defined as 1.0 when fewer than two sentences exist.
        """
        if len(sentences) < 2:
            return 1.0

        total = 0.0
        for previous, current in zip(sentences, sentences[1:]):
            prev_tokens = set(tokenize(previous))
            curr_tokens = set(tokenize(current))
            union = prev_tokens | curr_tokens
            total += _ratio(len(prev_tokens & curr_tokens), len(union))

        return total / (len(sentences) - 1)

    def analyze_entropy(self, text: str) -> EntropyFeatures:
        """
        Analyze sentiment entropy and emotional stability.

        Emotional stability is 1 - entropy / 2 and is intentionally left
        unclamped: at maximal sentiment disagreement it dips slightly below
        zero.

        Args:
            text: Anonymized sample text

        Returns:
            EntropyFeatures
        """
        words = tokenize(text)

        positive = _count_in(words, POSITIVE_CUES)
        negative = _count_in(words, NEGATIVE_CUES)
        neutral = _count_in(words, NEUTRAL_CUES)

        classified = positive + negative + neutral or 1
        proportions = [count / classified for count in (positive, negative, neutral)]
        entropy = -sum(p * math.log2(p) for p in proportions if p > 0)
        # Float rounding only; the formula itself stays within [0, log2(3)]
        entropy = min(max(0.0, entropy), MAX_ENTROPY)

        return EntropyFeatures(
            entropy=entropy,
            sentiment_distribution={'positive': positive, 'negative': negative, 'neutral': neutral},
            fragmentation_score=_ratio(_count_in(words, CONTRAST_CUES), len(words)),
            emotional_stability=1 - entropy / 2,
        )

    def extract(self, text: str) -> FeatureSet:
        """Run both sub-analyses and bundle them."""
        features = FeatureSet(
            coherence=self.analyze_coherence(text),
            entropy=self.analyze_entropy(text),
        )
        logger.debug(
            "Extracted features: %d words, %d sentences, entropy %.3f",
            features.coherence.word_count,
            features.coherence.sentence_count,
            features.entropy_value,
        )
        return features


def pronoun_cohesion(distribution: Dict[str, float]) -> float:
    """Share of collective pronouns among collective, individual and external ones."""
    collective, individual, external = (
        sum(distribution.get(p, 0.0) for p in PRONOUN_FAMILIES[family])
        for family in ('collective', 'individual', 'external')
    )
    return collective / (collective + individual + external + 0.001)
