from datetime import datetime, timezone

import pytest

from core.exceptions import InvalidStateTransitionError
from core.models.alert import Alert, AlertType, RecommendedActions, Severity
from core.models.intervention import ImplementationStatus, Intervention, InterventionType
from core.models.sample import CommunicationSample, generate_fingerprint, parse_timestamp


def _alert() -> Alert:
    return Alert(
        alert_type=AlertType.RESONANCE,
        severity=Severity.MEDIUM,
        title="Mission Resonance Decline",
        description="Team language showing drift from organizational mission",
        interpretive_analysis="",
        recommended_actions=RecommendedActions(immediate=["a"], stabilization=["b"]),
        organization_id="org-1",
    )


def test_alert_resolves_once():
    alert = _alert()
    alert.resolve()

    assert alert.is_resolved
    assert alert.resolved_at is not None
    with pytest.raises(InvalidStateTransitionError):
        alert.resolve()


def test_alert_record_round_trip_parses_timestamps():
    alert = _alert()
    alert.resolve(datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc))
    record = dict(alert.to_record(), id="alert-9", created_at="2024-05-01T11:00:00+00:00")

    restored = Alert.from_record(record)

    assert restored.alert_id == "alert-9"
    assert restored.resolved_at == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    assert restored.created_at.hour == 11
    assert restored.recommended_actions.immediate == ["a"]


def test_intervention_moves_forward_only():
    intervention = Intervention(alert_id="alert-1", intervention_type=InterventionType.RITUAL, content={})

    intervention.mark_implemented()
    assert intervention.implementation_status is ImplementationStatus.IMPLEMENTED

    intervention.complete(1.7)
    assert intervention.implementation_status is ImplementationStatus.COMPLETED
    assert intervention.effectiveness_score == 1.0

    with pytest.raises(InvalidStateTransitionError):
        intervention.mark_implemented()


def test_suggested_intervention_can_complete_directly():
    intervention = Intervention(alert_id="alert-1", intervention_type=InterventionType.PROMPT, content={})
    intervention.complete(0.5)

    assert intervention.implementation_status is ImplementationStatus.COMPLETED
    assert intervention.implemented_at is None


def test_sample_fingerprint_and_timestamp_normalization():
    sample = CommunicationSample(text="We will grow.", organization_id="org-1", occurred_at="2024-01-02 03:04:05")

    assert sample.fingerprint == generate_fingerprint("We will grow.")
    assert len(sample.fingerprint) == 64
    assert sample.occurred_at.tzinfo is not None
    assert sample.to_record("We will grow.")["content_hash"] == sample.fingerprint


def test_parse_timestamp_keeps_missing_values_missing():
    assert parse_timestamp(None) is None
    assert parse_timestamp("") is None
    assert parse_timestamp("2024-01-02T03:04:05Z").tzinfo is not None
