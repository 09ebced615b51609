import pytest

from core.analysis import LinguisticEngine
from core.config import EngineConfig
from core.exceptions import InputValidationError, MissingFieldError, NotificationError, PipelineStageError
from core.models.alert import AlertType, Severity
from core.models.analysis import AnalysisRequest
from core.models.sample import generate_fingerprint
from core.vocabulary import VOCABULARY_VERSION


OFF_MISSION = "The weather today is sunny and warm."
EXTREME_BASELINE = {"metaphorDensity": 1.0, "modalDensity": 1.0, "coherenceScore": 0.0, "entropy": 1.5}


def _request(text: str = OFF_MISSION, **kwargs) -> AnalysisRequest:
    kwargs.setdefault("organization_id", "org-1")
    return AnalysisRequest(text=text, **kwargs)


def test_full_analysis_persists_result_and_alerts(store, mission):
    store.add_baseline("org-1", EXTREME_BASELINE)
    engine = LinguisticEngine(store=store)

    response = engine.process(_request("Hello world.", mission_statement=mission))

    assert response.success and response.persisted
    assert [a.alert_type for a in response.alerts] == [AlertType.DRIFT, AlertType.RESONANCE]
    assert response.alerts[0].severity is Severity.CRITICAL
    assert all(a.alert_id for a in response.alerts)

    assert len(store.analyses) == 1
    record = store.analyses[0]
    assert record["variance_score"] == pytest.approx(1.125)
    assert record["baseline_metrics"] == EXTREME_BASELINE
    assert set(record["metrics"]) == {"coherence", "entropy", "drift", "resonance"}
    assert len(store.alerts) == 2
    assert record["content_hash"] == generate_fingerprint("Hello world.")
    assert record["vocabulary_version"] == VOCABULARY_VERSION


def test_raw_text_is_never_stored(store):
    LinguisticEngine(store=store).process(_request("Jane Doe will improve the Platform Team."))

    event = next(iter(store.events.values()))
    assert event["anonymized_content"] == "[PERSON] will improve the [TEAM]."
    assert event["metadata"]["anonymization"] == {"team": 1, "person": 1}
    assert "Jane" not in str(store.analyses)


def test_resubmitted_sample_is_not_analyzed_twice(store, mission):
    engine = LinguisticEngine(store=store)

    first = engine.process(_request(mission_statement=mission))
    second = engine.process(_request(mission_statement=mission))

    assert first.alerts_opened == 1
    assert second.duplicate is True
    assert second.to_dict() == {"success": True, "duplicate": True, "analysis": {}, "alerts": 0, "confidence": 0.0}
    assert len(store.analyses) == 1
    assert len(store.alerts) == 1


def test_failed_invocation_leaves_sample_retryable(store, mission):
    store.add_baseline("org-1", {"metaphorDensity": "n/a"})
    engine = LinguisticEngine(store=store)

    with pytest.raises(PipelineStageError):
        engine.process(_request(mission_statement=mission))
    assert store.events == {}
    assert store.analyses == []

    store.add_baseline("org-1", EXTREME_BASELINE)
    response = engine.process(_request(mission_statement=mission))

    assert response.duplicate is False
    assert response.result.drift is not None
    assert len(store.events) == 1


def test_offline_engine_has_no_deduplication(mission):
    engine = LinguisticEngine()

    first = engine.process(_request(mission_statement=mission))
    second = engine.process(_request(mission_statement=mission))

    assert not first.duplicate and not second.duplicate
    assert first.persisted is False
    assert second.alerts_opened == 1


def test_persistence_failure_still_returns_scores(failing_store, mission):
    response = LinguisticEngine(store=failing_store).process(_request(mission_statement=mission))

    assert response.success is True
    assert response.persisted is False
    assert response.result.resonance.resonance_score < 0.3
    assert response.alerts_opened == 1


def test_mission_statement_is_loaded_from_store(store, mission):
    store.missions["org-1"] = mission
    response = LinguisticEngine(store=store).process(_request(mission, analysis_type="resonance"))

    assert response.result.resonance.resonance_score == pytest.approx(1.0)
    assert response.result.coherence is None
    assert response.result.drift is None


def test_missing_reference_data_is_not_an_error(store):
    response = LinguisticEngine(store=store).process(_request("We will grow."))

    assert response.result.drift.confidence == 0.1
    assert response.result.resonance.resonance_score == 0.5
    assert response.alerts == []


def test_coherence_only_request_reports_only_coherence():
    response = LinguisticEngine().process(_request("Hello world.", analysis_type="coherence"))

    assert list(response.to_dict()["analysis"]) == ["coherence"]
    assert response.confidence == 0.5


def test_drift_only_request_computes_features_without_reporting_them(store):
    store.add_baseline("org-1", EXTREME_BASELINE)
    response = LinguisticEngine(store=store).process(_request("Hello world.", analysis_type="drift"))

    assert response.result.coherence is None
    assert response.result.drift.drift_score == pytest.approx(1.125)
    assert response.confidence == 1.0


def test_validation_rejects_missing_fields():
    with pytest.raises(MissingFieldError) as excinfo:
        LinguisticEngine().process(AnalysisRequest(text="", organization_id=""))

    assert excinfo.value.message == "Missing required parameters: text and organizationId"


def test_validation_rejects_unknown_type_and_oversized_text():
    engine = LinguisticEngine(config=EngineConfig(max_text_length=10))

    with pytest.raises(InputValidationError, match="Unknown analysis type"):
        engine.process(_request("short", analysis_type="bogus"))
    with pytest.raises(InputValidationError, match="maximum length"):
        engine.process(_request("far too long for the limit"))


def test_process_dict_reports_failures_as_payload():
    engine = LinguisticEngine()

    assert engine.process_dict({"text": "Hello."}) == {
        "success": False,
        "error": "Missing required parameters: organizationId",
    }

    payload = engine.process_dict({"text": "Hello world.", "organizationId": "org-1", "analysisType": "entropy"})
    assert payload["success"] is True
    assert list(payload["analysis"]) == ["entropy"]


def test_alerts_are_sent_to_notifier(fake_notifier_factory, mission):
    notifier = fake_notifier_factory()
    engine = LinguisticEngine(config=EngineConfig(notify_alerts=True), notifier=notifier)

    engine.process(_request(mission_statement=mission))

    assert len(notifier.sent) == 1
    assert notifier.sent[0][0].alert_type is AlertType.RESONANCE


def test_notification_failure_does_not_fail_the_invocation(fake_notifier_factory, mission):
    notifier = fake_notifier_factory(NotificationError("slack", RuntimeError("HTTP 500")))
    engine = LinguisticEngine(config=EngineConfig(notify_alerts=True), notifier=notifier)

    response = engine.process(_request(mission_statement=mission))

    assert response.success is True
    assert response.alerts_opened == 1
