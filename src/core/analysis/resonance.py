#!/usr/bin/env python3
"""
Mission resonance scoring.

Resonance is the mean of a token-level semantic alignment and a concept-level
alignment between the sample and the organization's mission statement.
"""

import logging
import re
from collections import Counter
from typing import List, Optional

from ..models.analysis import ResonanceResult
from ..thresholds import (
    NEUTRAL_RESONANCE_SCORE, RESONANCE_INDICATOR_THRESHOLD, RESONANCE_INDICATORS,
    RESONANCE_SATURATION_TOKENS,
)
from ..vocabulary import STOP_WORDS, CONCEPT_MIN_LENGTH, CONCEPT_MIN_FREQUENCY, CONCEPT_LIMIT
from .features import tokenize

logger = logging.getLogger(__name__)

_ALPHABETIC_RE = re.compile(r'^[a-zA-Z]+$')


def extract_key_concepts(text: str) -> List[str]:
    """
    Top frequency-ranked content words of a text.

    Content words are alphabetic, longer than three characters, not stop
    words and appear more than once. Ties keep first-occurrence order.
    """
    frequency = Counter(
        word for word in tokenize(text)
        if len(word) >= CONCEPT_MIN_LENGTH
        and word not in STOP_WORDS
        and _ALPHABETIC_RE.match(word)
    )
    # Counter preserves insertion order and sorted() is stable
    ranked = sorted(
        ((word, count) for word, count in frequency.items() if count >= CONCEPT_MIN_FREQUENCY),
        key=lambda item: item[1],
        reverse=True,
    )
    return [word for word, _ in ranked[:CONCEPT_LIMIT]]


class ResonanceScorer:
    """Scores alignment of anonymized text with a mission statement."""

    def score(self, text: str, mission_statement: Optional[str]) -> ResonanceResult:
        """
        Compute mission resonance.

        Args:
            text: Anonymized sample text
            mission_statement: Organization mission, may be absent

        Returns:
            ResonanceResult; an absent mission yields the neutral 0.5 score
            with zero confidence and no indicators
        """
        if not mission_statement or not mission_statement.strip():
            logger.debug("No mission statement, using neutral resonance")
            return ResonanceResult(resonance_score=NEUTRAL_RESONANCE_SCORE, confidence=0.0)

        text_words = tokenize(text)
        mission_words = tokenize(mission_statement)
        mission_vocabulary = set(mission_words)

        overlap = sum(1 for word in text_words if word in mission_vocabulary)
        semantic_alignment = overlap / max(len(text_words), len(mission_words), 1)

        mission_concepts = extract_key_concepts(mission_statement)
        text_concepts = set(extract_key_concepts(text))
        concept_overlap = sum(1 for concept in mission_concepts if concept in text_concepts)
        concept_alignment = concept_overlap / max(len(mission_concepts), 1)

        resonance_score = (semantic_alignment + concept_alignment) / 2
        indicators = RESONANCE_INDICATORS if resonance_score < RESONANCE_INDICATOR_THRESHOLD else ()

        logger.info(f"Resonance score {resonance_score:.3f} "
                    f"(semantic {semantic_alignment:.3f}, concept {concept_alignment:.3f})")

        return ResonanceResult(
            resonance_score=resonance_score,
            confidence=min(1.0, len(text_words) / RESONANCE_SATURATION_TOKENS),
            indicators=tuple(indicators),
            semantic_alignment=semantic_alignment,
            concept_alignment=concept_alignment,
        )
