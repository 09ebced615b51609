import json

import pytest

from cli_router import CLIRouter


OFF_MISSION = "The weather today is sunny and warm."


@pytest.fixture
def router(container) -> CLIRouter:
    return CLIRouter(container=container)


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "memo.txt"
    path.write_text(OFF_MISSION, encoding="utf-8")
    return str(path)


def _json_output(capsys):
    return json.loads(capsys.readouterr().out)


def test_analyze_text_persists_through_container_store(router, store, sample_file, mission, capsys):
    code = router.route_command([
        "analyze", "text", "--org", "org-1", "--mission", mission, "--file", sample_file, "--json",
    ])

    assert code == 0
    payload = _json_output(capsys)
    assert payload["success"] is True
    assert payload["alerts"] == 1
    assert set(payload["analysis"]) == {"coherence", "entropy", "drift", "resonance"}
    assert len(store.analyses) == 1


def test_analyze_text_without_store(router, store, sample_file, capsys):
    code = router.route_command(["analyze", "text", "--org", "org-1", "--file", sample_file, "--no-store"])

    assert code == 0
    assert "Linguistic Analysis" in capsys.readouterr().out
    assert store.analyses == []


def test_analyze_features_offline(router, sample_file, tmp_path, capsys):
    baseline = tmp_path / "baseline.json"
    baseline.write_text(json.dumps({"metaphorDensity": 0.5}), encoding="utf-8")

    code = router.route_command(["analyze", "features", "--file", sample_file, "--baseline", str(baseline), "--json"])

    assert code == 0
    payload = _json_output(capsys)
    assert payload["features"]["wordCount"] == 7
    assert payload["report"][0] == {
        "metric": "Metaphor Coherence", "current": 0.0, "baseline": 0.5,
        "drift": 0.5, "severity": "critical", "trend": "degrading",
    }


def test_alerts_list_and_resolve(router, store, sample_file, mission, capsys):
    router.route_command(["analyze", "text", "--org", "org-1", "--mission", mission, "--file", sample_file])
    alert_id = next(iter(store.alerts))
    capsys.readouterr()

    assert router.route_command(["alerts", "list", "--org", "org-1"]) == 0
    assert "Mission Resonance Decline" in capsys.readouterr().out

    assert router.route_command(["alerts", "resolve", "--alert-id", alert_id]) == 0
    assert store.alerts[alert_id].is_resolved
    assert router.route_command(["alerts", "resolve", "--alert-id", alert_id]) == 22
    assert router.route_command(["alerts", "resolve", "--alert-id", "missing"]) == 2

    capsys.readouterr()
    router.route_command(["alerts", "list", "--org", "org-1"])
    assert "No alerts found" in capsys.readouterr().out


def test_stabilize_generate_and_assess(router, store, sample_file, mission, tmp_path, capsys):
    router.route_command(["analyze", "text", "--org", "org-1", "--mission", mission, "--file", sample_file])
    alert_id = next(iter(store.alerts))
    capsys.readouterr()

    assert router.route_command(["stabilize", "generate", "--alert-id", alert_id, "--json"]) == 0
    generated = _json_output(capsys)
    assert generated["alertId"] == alert_id
    assert [p["title"] for p in generated["repairPrompts"]] == ["Mission Reconnection Ritual"]

    intervention_id = store.list_interventions(alert_id)[0]["id"]
    before = tmp_path / "before.json"
    after = tmp_path / "after.json"
    before.write_text(json.dumps({"resonanceScore": 0.1}), encoding="utf-8")
    after.write_text(json.dumps({"resonanceScore": 0.6}), encoding="utf-8")

    code = router.route_command([
        "stabilize", "assess", "--intervention-id", intervention_id,
        "--before", str(before), "--after", str(after),
    ])

    assert code == 0
    output = capsys.readouterr().out
    assert "Score: 0.60" in output
    assert "Recommendation: modify" in output


def test_stabilize_catalog_is_offline(router, capsys):
    code = router.route_command([
        "stabilize", "catalog", "--indicators", "metaphor_decay,unknown", "--severity", "critical", "--json",
    ])

    assert code == 0
    payload = _json_output(capsys)
    assert [p["title"] for p in payload["repairPrompts"]] == ["Metaphor Realignment Protocol"]
    assert len(payload["alignmentRituals"]) == 3


def test_health_check_reports_missing_database(router, capsys):
    assert router.route_command(["health", "check"]) == 1
    output = capsys.readouterr().out
    assert "database is not configured" in output
    assert "UNHEALTHY" in output


def test_invalid_arguments_exit_with_argparse_code(router):
    assert router.route_command(["analyze", "text"]) == 2
    assert router.route_command(["nonsense"]) == 2


def test_missing_input_file_maps_to_exit_code(router):
    assert router.route_command(["analyze", "features", "--file", "/nonexistent/memo.txt"]) == 2
