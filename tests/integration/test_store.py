from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import psycopg
import pytest

from core.database.database_facade import DatabaseFacade
from core.exceptions import DatabaseOperationError, InvalidStateTransitionError, RecordNotFoundError
from core.models.alert import AlertType
from core.supabase_adapter import SupabaseApiAdapter


class FakeCursor:
    def __init__(self, rows: List[Optional[Dict[str, Any]]], error: Optional[Exception] = None) -> None:
        self.rows = rows
        self.error = error
        self.executed: List[tuple] = []

    def execute(self, sql: str, params: tuple = ()) -> None:
        self.executed.append((" ".join(sql.split()), params))
        if self.error:
            raise self.error

    def fetchone(self) -> Optional[Dict[str, Any]]:
        return self.rows.pop(0) if self.rows else None

    def fetchall(self) -> List[Dict[str, Any]]:
        rows, self.rows = self.rows, []
        return rows


class FakeConnectionManager:
    def __init__(self, rows=None, error=None) -> None:
        self.cursor = FakeCursor(list(rows or []), error)

    @contextmanager
    def get_cursor(self):
        yield self.cursor

    def close(self) -> None:
        pass


ALERT_ROW = {
    "id": "a1", "organization_id": "org-1", "unit_id": None, "alert_type": "drift", "severity": "high",
    "title": "Symbolic Drift Detected", "description": "d", "interpretive_analysis": "n",
    "recommended_actions": {"immediate": ["x"], "stabilization": [], "drift_indicators": ["metaphor_decay"]},
    "is_resolved": False, "resolved_at": None, "created_at": "2024-01-01T00:00:00+00:00",
}


def test_register_sample_returns_none_on_fingerprint_conflict():
    manager = FakeConnectionManager(rows=[{"id": "e1"}, None])
    facade = DatabaseFacade(config=None, connection_manager=manager)
    record = {"organization_id": "org-1", "content_hash": "abc123", "anonymized_content": "text"}

    assert facade.register_sample(record) == "e1"
    assert facade.register_sample(record) is None
    assert "ON CONFLICT (content_hash) DO NOTHING" in manager.cursor.executed[0][0]


def test_database_errors_are_wrapped():
    manager = FakeConnectionManager(error=psycopg.OperationalError("server closed the connection"))
    facade = DatabaseFacade(config=None, connection_manager=manager)

    with pytest.raises(DatabaseOperationError) as excinfo:
        facade.store_analysis({
            "organization_id": "org-1", "analysis_type": "full", "time_window_start": "2024-01-01T00:00:00+00:00",
            "time_window_end": "2024-01-01T00:00:00+00:00", "metrics": {}, "variance_score": 0.0,
            "confidence_level": 0.5,
        })
    assert excinfo.value.context["table"] == "linguistic_analyses"


def test_store_analysis_writes_fingerprint_and_vocabulary_version():
    manager = FakeConnectionManager(rows=[{"id": "an-1"}])
    facade = DatabaseFacade(config=None, connection_manager=manager)

    analysis_id = facade.store_analysis({
        "organization_id": "org-1", "analysis_type": "full", "time_window_start": "2024-01-01T00:00:00+00:00",
        "time_window_end": "2024-01-01T00:00:00+00:00", "metrics": {}, "variance_score": 0.0,
        "confidence_level": 0.5, "content_hash": "abc123", "vocabulary_version": "1",
    })

    sql, params = manager.cursor.executed[0]
    assert analysis_id == "an-1"
    assert "content_hash, vocabulary_version" in sql
    assert params[-2:] == ("abc123", "1")


def test_baseline_lookup_matches_null_unit():
    row = {"id": "b1", "organization_id": "org-1", "unit_id": None, "baseline_type": "comprehensive",
           "baseline_data": {"entropy": 0.4}, "time_period_days": 30}
    manager = FakeConnectionManager(rows=[row])

    baseline = DatabaseFacade(config=None, connection_manager=manager).get_latest_baseline("org-1")

    assert baseline.metrics == {"entropy": 0.4}
    sql, params = manager.cursor.executed[0]
    assert "unit_id IS NOT DISTINCT FROM %s" in sql
    assert params == ("org-1", None, "comprehensive")


def test_resolve_alert_updates_open_alert():
    manager = FakeConnectionManager(rows=[dict(ALERT_ROW)])
    alert = DatabaseFacade(config=None, connection_manager=manager).resolve_alert("a1")

    assert alert.is_resolved
    assert alert.alert_type is AlertType.DRIFT
    assert manager.cursor.executed[-1][0].startswith("UPDATE symbolic_alerts SET is_resolved")


def test_resolve_alert_rejects_missing_and_resolved_alerts():
    with pytest.raises(RecordNotFoundError):
        DatabaseFacade(config=None, connection_manager=FakeConnectionManager()).resolve_alert("nope")

    resolved = dict(ALERT_ROW, is_resolved=True, resolved_at="2024-01-02T00:00:00+00:00")
    with pytest.raises(InvalidStateTransitionError):
        DatabaseFacade(config=None, connection_manager=FakeConnectionManager(rows=[resolved])).resolve_alert("a1")


class FakeResult:
    def __init__(self, data, count=None) -> None:
        self.data = data
        self.count = count


class FakeQuery:
    """Chainable stand-in for the supabase query builder."""

    def __init__(self, client: "FakeSupabaseClient", table: str) -> None:
        self.client = client
        self.table = table
        self.calls: List[tuple] = []

    def __getattr__(self, name):
        def _call(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self
        return _call

    def execute(self) -> FakeResult:
        self.client.queries.append(self)
        if self.client.error:
            raise self.client.error
        return self.client.results.pop(0) if self.client.results else FakeResult([])


class FakeSupabaseClient:
    def __init__(self, results=None, error=None) -> None:
        self.results = list(results or [])
        self.error = error
        self.queries: List[FakeQuery] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


def test_api_register_sample_uses_ignore_duplicates_upsert():
    client = FakeSupabaseClient(results=[FakeResult([{"id": 7}]), FakeResult([])])
    adapter = SupabaseApiAdapter(config=None, client=client)
    record = {"organization_id": "org-1", "content_hash": "abc123"}

    assert adapter.register_sample(record) == "7"
    assert adapter.register_sample(record) is None
    name, args, kwargs = client.queries[0].calls[0]
    assert name == "upsert"
    assert kwargs == {"on_conflict": "content_hash", "ignore_duplicates": True}


def test_api_baseline_without_unit_filters_null():
    client = FakeSupabaseClient(results=[FakeResult([])])

    assert SupabaseApiAdapter(config=None, client=client).get_latest_baseline("org-1") is None
    assert ("is_", ("unit_id", "null"), {}) in client.queries[0].calls


def test_api_errors_are_wrapped():
    adapter = SupabaseApiAdapter(config=None, client=FakeSupabaseClient(error=RuntimeError("503")))

    with pytest.raises(DatabaseOperationError):
        adapter.list_alerts("org-1")
    assert adapter.health_check()["connected"] is False
