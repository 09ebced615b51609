import math

import pytest

from core.analysis.features import FeatureExtractor, MAX_ENTROPY, pronoun_cohesion, split_sentences, tokenize


SAMPLES = [
    "",
    "Hello world.",
    "We will achieve great progress, but they might fail. I think our team should improve. However, the problem is unclear!",
    "good bad maybe",
    "like like like like",
    "but however although",
    "We we we. Our our. Us us us us!",
]


@pytest.mark.parametrize("text", SAMPLES)
def test_feature_ranges_hold_for_any_text(text):
    """Ratios stay in [0, 1], entropy in [0, log2(3)], stability in [1 - log2(3)/2, 1]."""
    features = FeatureExtractor().extract(text)
    coherence, entropy = features.coherence, features.entropy

    assert 0.0 <= coherence.metaphor_density <= 1.0
    assert 0.0 <= coherence.modal_density <= 1.0
    assert 0.0 <= coherence.coherence_score <= 1.0
    assert all(0.0 <= share <= 1.0 for share in coherence.pronoun_distribution.values())
    assert 0.0 <= entropy.fragmentation_score <= 1.0
    assert 0.0 <= entropy.entropy <= MAX_ENTROPY
    assert 1 - MAX_ENTROPY / 2 - 1e-12 <= entropy.emotional_stability <= 1.0


def test_single_sentence_has_perfect_coherence():
    coherence = FeatureExtractor().analyze_coherence("Hello world.")

    assert coherence.coherence_score == 1.0
    assert coherence.word_count == 2
    assert coherence.sentence_count == 1
    assert coherence.avg_sentence_length == 2.0


def test_empty_text_yields_zero_ratios():
    features = FeatureExtractor().extract("")

    assert features.coherence.word_count == 0
    assert features.coherence.metaphor_density == 0.0
    assert features.coherence.coherence_score == 1.0
    assert features.entropy.entropy == 0.0
    assert features.entropy.emotional_stability == 1.0


def test_ratios_are_exact_when_tokens_exist():
    coherence = FeatureExtractor().analyze_coherence("like it")

    assert coherence.metaphor_density == 0.5
    assert coherence.pronoun_distribution["we"] == 0.0


def test_coherence_is_mean_jaccard_of_consecutive_sentences():
    # {a b} vs {b c}: 1/3 ; {b c} vs {b c}: 1
    score = FeatureExtractor.calculate_coherence_score(["a b", "b c", "c b"])
    assert score == pytest.approx((1 / 3 + 1) / 2)


def test_balanced_sentiment_reaches_maximum_entropy():
    """Stability is left unclamped and dips below 0.25 at maximum disagreement."""
    entropy = FeatureExtractor().analyze_entropy("good bad maybe")

    assert entropy.entropy == pytest.approx(math.log2(3))
    assert entropy.emotional_stability == pytest.approx(1 - math.log2(3) / 2)
    assert entropy.sentiment_distribution == {"positive": 1, "negative": 1, "neutral": 1}


def test_densities_count_cue_words():
    coherence = FeatureExtractor().analyze_coherence("we should grow like a tree")

    assert coherence.metaphor_density == pytest.approx(1 / 6)
    assert coherence.modal_density == pytest.approx(1 / 6)
    assert coherence.pronoun_distribution["we"] == pytest.approx(1 / 6)
    assert list(coherence.pronoun_distribution) == ["i", "we", "you", "they", "us", "them", "our", "their"]


def test_tokenizer_and_sentence_splitter_are_naive():
    assert tokenize("We WILL go.") == ["we", "will", "go."]
    assert split_sentences("One. Two!! Three?") == ["One", " Two", " Three"]
    assert split_sentences("...") == []


def test_pronoun_cohesion_favours_collective_pronouns():
    assert pronoun_cohesion({"we": 0.2, "our": 0.1}) == pytest.approx(0.3 / 0.301)
    assert pronoun_cohesion({"i": 0.2, "they": 0.2}) == 0.0
    assert pronoun_cohesion({}) == 0.0
