import importlib.util
from pathlib import Path

import pytest
from typer.testing import CliRunner

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "configure_env.py"


@pytest.fixture()
def configure_env(tmp_path, monkeypatch):
    spec = importlib.util.spec_from_file_location("configure_env", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    monkeypatch.setattr(module, "ENV_PATH", tmp_path / ".env")
    return module


def test_format_env_value_quotes_special_characters(configure_env):
    assert configure_env._format_env_value("plain") == "plain"
    assert configure_env._format_env_value('has "quote" and space') == '"has \\"quote\\" and space"'


def test_validate_database_connection_against_sqlite(configure_env, tmp_path):
    ok, error = configure_env._validate_database_connection(f"sqlite:///{tmp_path / 'probe.db'}", "require")
    assert ok is True
    assert error == ""


def test_write_env_file_preserves_unmanaged_keys(configure_env):
    configure_env._write_env_file({"POSTGRES_URL": "postgres://u:p@db/app"}, {"OTHER": "1", "POSTGRES_URL": "old"})

    content = configure_env.ENV_PATH.read_text(encoding="utf-8")
    assert "POSTGRES_URL=postgres://u:p@db/app" in content
    assert "OTHER=1" in content
    assert "old" not in content


def test_run_command_writes_env_file(configure_env, tmp_path):
    db_url = f"sqlite:///{tmp_path / 'wizard.db'}"
    answers = "\n".join(
        [
            "require",  # POSTGRES_SSLMODE
            db_url,  # POSTGRES_URL
            "y",  # validate now
            "",  # POSTGRES_APPLICATION_NAME
            "",  # POSTGRES_CONNECT_TIMEOUT
            "2",  # SEED_PROBE_ATTEMPTS
            "",  # SEED_PROBE_TIMEOUT_SECONDS
            "",  # SEED_PROBE_RETRY_DELAY_SECONDS
            "",  # DASHBOARD_PATH
            "debug",  # LOG_LEVEL
            "y",  # save
        ]
    ) + "\n"

    result = CliRunner().invoke(configure_env.APP, [], input=answers)

    assert result.exit_code == 0, result.output
    content = configure_env.ENV_PATH.read_text(encoding="utf-8")
    assert f"POSTGRES_URL={db_url}" in content
    assert "SEED_PROBE_ATTEMPTS=2" in content
    assert "LOG_LEVEL=DEBUG" in content
    assert "DASHBOARD_PATH=/dashboard" in content
