import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from core.config import Config, EngineConfig, IntegrationConfig  # noqa: E402
from core.container import Container  # noqa: E402
from core.exceptions import DatabaseOperationError, RecordNotFoundError  # noqa: E402
from core.models.alert import Alert  # noqa: E402
from core.models.features import Baseline  # noqa: E402
from core.models.intervention import Intervention  # noqa: E402


MISSION = (
    "We empower customers through innovation and collaboration. "
    "Customers trust our innovation because collaboration drives quality."
)


class InMemoryStore:
    """Store double with the same interface as DatabaseFacade."""

    def __init__(self) -> None:
        self.events: Dict[str, Dict[str, Any]] = {}
        self.analyses: List[Dict[str, Any]] = []
        self.alerts: Dict[str, Alert] = {}
        self.interventions: Dict[str, Dict[str, Any]] = {}
        self.baselines: Dict[tuple, Baseline] = {}
        self.missions: Dict[str, str] = {}
        self._next_id = 0

    def _new_id(self, prefix: str) -> str:
        self._next_id += 1
        return f"{prefix}-{self._next_id}"

    def add_baseline(self, organization_id: str, metrics: Dict[str, Any], unit_id: Optional[str] = None) -> None:
        self.baselines[(organization_id, unit_id)] = Baseline(
            organization_id=organization_id, unit_id=unit_id, metrics=metrics
        )

    def register_sample(self, record: Dict[str, Any]) -> Optional[str]:
        if record["content_hash"] in self.events:
            return None
        event_id = self._new_id("event")
        self.events[record["content_hash"]] = dict(record, id=event_id)
        return event_id

    def get_latest_baseline(self, organization_id: str, unit_id: Optional[str] = None,
                            baseline_type: str = "comprehensive") -> Optional[Baseline]:
        del baseline_type
        return self.baselines.get((organization_id, unit_id))

    def get_mission_statement(self, organization_id: str) -> Optional[str]:
        return self.missions.get(organization_id)

    def store_analysis(self, record: Dict[str, Any]) -> str:
        analysis_id = self._new_id("analysis")
        self.analyses.append(dict(record, id=analysis_id))
        return analysis_id

    def store_alert(self, alert: Alert) -> str:
        alert_id = self._new_id("alert")
        stored = Alert.from_record(dict(alert.to_record(), id=alert_id))
        self.alerts[alert_id] = stored
        return alert_id

    def get_alert(self, alert_id: str) -> Optional[Alert]:
        return self.alerts.get(alert_id)

    def list_alerts(self, organization_id: str, unit_id: Optional[str] = None,
                    include_resolved: bool = False) -> List[Alert]:
        return [a for a in self.alerts.values()
                if a.organization_id == organization_id
                and (unit_id is None or a.unit_id == unit_id)
                and (include_resolved or not a.is_resolved)]

    def resolve_alert(self, alert_id: str) -> Alert:
        alert = self.get_alert(alert_id)
        if alert is None:
            raise RecordNotFoundError("symbolic_alerts", alert_id)
        alert.resolve()
        return alert

    def store_intervention(self, intervention: Intervention) -> str:
        intervention_id = self._new_id("intervention")
        self.interventions[intervention_id] = dict(
            intervention.to_record(), id=intervention_id, created_at=datetime.now(timezone.utc)
        )
        return intervention_id

    def get_intervention(self, intervention_id: str) -> Optional[Dict[str, Any]]:
        record = self.interventions.get(intervention_id)
        return dict(record) if record else None

    def list_interventions(self, alert_id: str) -> List[Dict[str, Any]]:
        return [dict(r) for r in self.interventions.values() if r["alert_id"] == alert_id]

    def update_intervention(self, intervention: Intervention) -> None:
        record = intervention.to_record()
        self.interventions[intervention.intervention_id].update(
            implementation_status=record["implementation_status"],
            effectiveness_score=record["effectiveness_score"],
            implemented_at=record["implemented_at"],
        )

    def health_check(self) -> Dict[str, Any]:
        return {"connected": True, "connection_type": "memory", "tables": {"symbolic_alerts": len(self.alerts)}}

    def close(self) -> None:
        pass


class FailingStore(InMemoryStore):
    """Reads work; every write fails like an unreachable database."""

    def register_sample(self, record: Dict[str, Any]) -> Optional[str]:
        raise DatabaseOperationError("insert", "communication_events", RuntimeError("connection lost"))

    def store_analysis(self, record: Dict[str, Any]) -> str:
        raise DatabaseOperationError("insert", "linguistic_analyses", RuntimeError("connection lost"))

    def store_alert(self, alert: Alert) -> str:
        raise DatabaseOperationError("insert", "symbolic_alerts", RuntimeError("connection lost"))


class FakeNotifier:
    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error
        self.sent: List[List[Alert]] = []

    def notify_alerts(self, alerts: List[Alert]) -> None:
        if self.error:
            raise self.error
        self.sent.append(list(alerts))


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "ok") -> None:
        self.status_code = status_code
        self.text = text


class FakeSession:
    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None) -> None:
        self.response = response or FakeResponse()
        self.error = error
        self.posts: List[Dict[str, Any]] = []

    def post(self, url: str, json: Dict[str, Any], timeout: int, headers: Dict[str, str]) -> FakeResponse:
        self.posts.append({"url": url, "json": json, "timeout": timeout, "headers": headers})
        if self.error:
            raise self.error
        return self.response


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def failing_store() -> FailingStore:
    return FailingStore()


@pytest.fixture
def fake_notifier_factory():
    def _factory(error: Optional[Exception] = None) -> FakeNotifier:
        return FakeNotifier(error)

    return _factory


@pytest.fixture
def fake_session_factory():
    def _factory(status_code: int = 200, error: Optional[Exception] = None) -> FakeSession:
        return FakeSession(FakeResponse(status_code), error)

    return _factory


@pytest.fixture
def offline_config() -> Config:
    return Config(database=None, integrations=IntegrationConfig(), engine=EngineConfig())


@pytest.fixture
def container(store, offline_config) -> Container:
    """Container wired to the in-memory store."""
    from core.analysis import DriftDetector, LinguisticEngine
    from core.stabilization import StabilizationAdvisor, StabilizationService

    container = Container()
    advisor = StabilizationAdvisor()
    container.register_instance("config", offline_config)
    container.register_instance("database", store)
    container.register_instance("engine", LinguisticEngine(store=store, config=offline_config.engine))
    container.register_instance("stabilization_advisor", advisor)
    container.register_instance("stabilization_service", StabilizationService(store, advisor))
    container.register_instance("drift_detector", DriftDetector())
    return container


@pytest.fixture
def mission() -> str:
    return MISSION
