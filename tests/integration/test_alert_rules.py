import pytest

from core.analysis import AlertRuleEngine
from core.models.alert import AlertType, Severity
from core.models.analysis import DriftResult, ResonanceResult
from core.thresholds import RESONANCE_INDICATORS


def _resonance(score: float) -> ResonanceResult:
    indicators = RESONANCE_INDICATORS if score < 0.3 else ()
    return ResonanceResult(resonance_score=score, confidence=1.0, indicators=indicators)


@pytest.mark.parametrize(
    "score, expected",
    [(0.10, Severity.CRITICAL), (0.25, Severity.MEDIUM), (0.50, None), (0.30, None)],
)
def test_resonance_alert_severity(score, expected):
    alerts = AlertRuleEngine().evaluate(None, _resonance(score), "org-1")

    if expected is None:
        assert alerts == []
    else:
        assert len(alerts) == 1
        assert alerts[0].alert_type is AlertType.RESONANCE
        assert alerts[0].severity is expected


@pytest.mark.parametrize(
    "score, expected",
    [(0.95, Severity.CRITICAL), (0.75, Severity.HIGH), (0.70, None), (0.40, None)],
)
def test_drift_alert_severity(score, expected):
    drift = DriftResult(drift_score=score, indicators=("metaphor_decay",), confidence=1.0)
    alerts = AlertRuleEngine().evaluate(drift, None, "org-1", "unit-7")

    if expected is None:
        assert alerts == []
    else:
        assert [a.severity for a in alerts] == [expected]
        assert alerts[0].unit_id == "unit-7"


def test_drift_alert_narrative_interpolates_score_and_indicators():
    drift = DriftResult(drift_score=0.8125, indicators=("metaphor_decay", "coherence_breakdown"), confidence=1.0)
    alert = AlertRuleEngine().evaluate(drift, None, "org-1")[0]

    assert alert.title == "Symbolic Drift Detected"
    assert alert.interpretive_analysis.startswith(
        "The symbolic patterns show metaphor_decay, coherence_breakdown with a drift magnitude of 81.2%."
    )
    assert alert.recommended_actions.immediate == [
        "Review recent communication patterns", "Schedule team alignment session",
    ]
    assert alert.drift_indicators == ["metaphor_decay", "coherence_breakdown"]
    assert alert.trigger_score == 0.8125


def test_both_rules_can_fire_for_one_sample_drift_first():
    drift = DriftResult(drift_score=0.9, indicators=(), confidence=1.0)
    alerts = AlertRuleEngine().evaluate(drift, _resonance(0.2), "org-1")

    assert [a.alert_type for a in alerts] == [AlertType.DRIFT, AlertType.RESONANCE]
    assert alerts[1].interpretive_analysis.startswith(
        "Current communication patterns show only 20.0% alignment with the organizational mission."
    )
