"""Tests for the platec command line interface."""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from platec.presentation.cli.app import app
from platec_config import clear_settings_cache
from tests.shared.fixtures.database import TEST_JWT_SECRET

runner = CliRunner()


@pytest.fixture
def cli_env(monkeypatch, tmp_path):
    """Point the CLI at a throwaway SQLite file."""
    monkeypatch.setenv("JWT_SECRET_KEY", TEST_JWT_SECRET)
    monkeypatch.setenv("POSTGRES_PASSWORD", "unused")
    monkeypatch.setenv(
        "DATABASE_URL_OVERRIDE",
        f"sqlite+aiosqlite:///{tmp_path / 'data' / 'platec.db'}",
    )
    monkeypatch.setenv("PASSWORD_HASH_ROUNDS", "4")
    clear_settings_cache()
    yield monkeypatch
    clear_settings_cache()


class TestSecrets:
    def test_generate_prints_required_keys(self):
        result = runner.invoke(app, ["secrets", "generate"])

        assert result.exit_code == 0
        assert "JWT_SECRET_KEY=" in result.output
        assert "POSTGRES_PASSWORD=" in result.output
        assert "SEED_ADMIN_PASSWORD=" in result.output

    def test_generated_values_differ_between_runs(self):
        first = runner.invoke(app, ["secrets", "generate"]).output
        second = runner.invoke(app, ["secrets", "generate"]).output

        assert first != second


class TestDatabase:
    def test_init_creates_database_file(self, cli_env, tmp_path):
        result = runner.invoke(app, ["db", "init"])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "data" / "platec.db").exists()

    def test_seed_reports_changes_then_nothing(self, cli_env):
        first = runner.invoke(app, ["db", "seed"])

        assert first.exit_code == 0, first.output
        assert "admin seeded" in first.output
        assert "admin@example.com" in first.output

        second = runner.invoke(app, ["db", "seed"])

        assert second.exit_code == 0, second.output
        assert "Nothing to do" in second.output

    def test_seed_failure_exits_non_zero(self, cli_env):
        cli_env.setenv("SEED_ADMIN_PASSWORD", "abc")
        clear_settings_cache()

        result = runner.invoke(app, ["db", "seed"])

        assert result.exit_code == 1
        assert "Reconciliation failed" in result.output


class TestServe:
    def test_serve_uses_app_factory(self, cli_env):
        with patch("platec.presentation.cli.app.uvicorn.run") as run:
            result = runner.invoke(app, ["serve", "--port", "9000"])

        assert result.exit_code == 0, result.output
        run.assert_called_once()
        assert run.call_args.args == ("platec.presentation.api.app:create_app",)
        assert run.call_args.kwargs["factory"] is True
        assert run.call_args.kwargs["port"] == 9000
        assert run.call_args.kwargs["host"] == "0.0.0.0"
