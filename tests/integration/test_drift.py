import pytest

from core.analysis import DriftDetector, FeatureExtractor, trend
from core.models.features import Baseline


CURRENT = {"metaphorDensity": 0.30, "modalDensity": 0.05, "coherenceScore": 0.40, "entropy": 0.20}
BASELINE = {"metaphorDensity": 0.05, "modalDensity": 0.05, "coherenceScore": 0.90, "entropy": 0.90}


def test_drift_against_baseline_matches_worked_example():
    result = DriftDetector().detect(CURRENT, BASELINE)

    assert result.drift_score == pytest.approx(0.3625)
    assert result.indicators == ("metaphor_decay", "coherence_breakdown", "emotional_instability")
    assert result.confidence == pytest.approx(0.725)
    assert result.detailed_drift["modalDensity"] == pytest.approx(0.0)
    assert result.metric_severities == {
        "metaphorDensity": "high",
        "modalDensity": "low",
        "coherenceScore": "critical",
        "entropy": "critical",
    }


def test_drift_is_symmetric_in_time_order():
    detector = DriftDetector()
    forward = detector.detect(CURRENT, BASELINE)
    backward = detector.detect(BASELINE, CURRENT)

    assert forward.drift_score == pytest.approx(backward.drift_score)
    assert forward.indicators == backward.indicators


@pytest.mark.parametrize("text", ["", "Hello world.", "We must fail but they could improve."])
def test_missing_baseline_means_unknown_drift(text):
    features = FeatureExtractor().extract(text)
    detector = DriftDetector()

    for baseline in (None, {}):
        result = detector.detect(features, baseline)
        assert result.drift_score == 0
        assert result.indicators == ()
        assert result.confidence == 0.1


def test_baseline_record_is_accepted():
    baseline = Baseline(organization_id="org-1", metrics=BASELINE)
    result = DriftDetector().detect(CURRENT, baseline)

    assert result.drift_score == pytest.approx(0.3625)


def test_confidence_saturates_at_one():
    result = DriftDetector().detect(
        {"metaphorDensity": 1.0, "modalDensity": 1.0, "coherenceScore": 0.0, "entropy": 1.5},
        {"metaphorDensity": 0.0, "modalDensity": 0.0, "coherenceScore": 1.0, "entropy": 0.0},
    )
    assert result.confidence == 1.0


def test_trend_uses_significance_band():
    assert trend(0.50, 0.40) == "improving"
    assert trend(0.40, 0.50) == "degrading"
    assert trend(0.50, 0.52) == "stable"


def test_metric_report_covers_display_metrics():
    features = FeatureExtractor().extract("We should grow like a tree. We grow.")
    report = DriftDetector().build_metric_report(features, None)

    assert [row.metric for row in report] == [
        "Metaphor Coherence", "Pronoun Distribution", "Emotional Stability",
        "Narrative Continuity", "Modal Certainty",
    ]
    assert all(row.baseline == 0.0 for row in report)
    assert all(row.drift == pytest.approx(row.current) for row in report)
