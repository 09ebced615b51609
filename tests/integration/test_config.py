import pytest

from core.config import ConfigManager


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for key in ("SUPABASE_URL", "SUPABASE_DB_PASSWORD", "SUPABASE_ANON_KEY", "SUPABASE_SERVICE_KEY",
                "USE_DIRECT_CONNECTION", "SLACK_WEBHOOK_URL", "NOTIFY_ALERTS", "MAX_TEXT_LENGTH",
                "LOG_LEVEL", "PERSIST_RESULTS", "BASELINE_TYPE"):
        monkeypatch.delenv(key, raising=False)
    return str(tmp_path / "missing.env")


def test_offline_config_needs_no_database(clean_env):
    config = ConfigManager(env_file_path=clean_env, requires_database=False).get_config()

    assert config.database is None
    assert config.engine.max_text_length == 100000
    assert config.engine.persist_results is True
    assert config.engine.notify_alerts is False


def test_database_config_is_required_by_default(clean_env):
    with pytest.raises(ValueError, match="SUPABASE_URL is not set"):
        ConfigManager(env_file_path=clean_env).get_config()


def test_all_validation_errors_are_reported_together(clean_env, monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "http://example.com")
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    monkeypatch.setenv("NOTIFY_ALERTS", "true")

    with pytest.raises(ValueError) as excinfo:
        ConfigManager(env_file_path=clean_env).get_config()

    message = str(excinfo.value)
    assert "must start with https://" in message
    assert "must end with .supabase.co" in message
    assert "SUPABASE_DB_PASSWORD is required" in message
    assert "LOG_LEVEL must be one of" in message
    assert "NOTIFY_ALERTS requires SLACK_WEBHOOK_URL" in message


def test_api_connection_config(clean_env, monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setenv("USE_DIRECT_CONNECTION", "false")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
    monkeypatch.setenv("SLACK_WEBHOOK_URL", "https://hooks.slack.com/services/x")

    manager = ConfigManager(env_file_path=clean_env)
    config = manager.get_config()

    assert config.database.use_direct_connection is False
    assert manager.get_integration_status() == {
        "database": True, "slack_webhook": True, "alert_notifications": False,
    }


def test_env_file_never_overrides_process_environment(monkeypatch, tmp_path):
    from core.env_loader import load_env_file

    env_file = tmp_path / ".env"
    env_file.write_text("# comment\nDRIFT_TEST_A='from file'\nDRIFT_TEST_B=file\nnot a pair\n", encoding="utf-8")
    monkeypatch.delenv("DRIFT_TEST_A", raising=False)
    monkeypatch.setenv("DRIFT_TEST_B", "process")

    try:
        assert load_env_file(str(env_file)) == 1
        import os
        assert os.environ["DRIFT_TEST_A"] == "from file"
        assert os.environ["DRIFT_TEST_B"] == "process"
    finally:
        monkeypatch.delenv("DRIFT_TEST_A", raising=False)
