"""Integration tests for the devlog CLI (click + SQLite + settings file)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from devlog import __version__
from devlog.cli.main import cli
from devlog.core.config import is_logging_enabled
from devlog.core.constants import DB_FILENAME, SETTINGS_FILENAME, ExitCode
from devlog.core.logger import DevLogger
from devlog.core.store.database import LogStore


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _invoke(runner: CliRunner, *args: str, **kwargs):
    return runner.invoke(cli, list(args), catch_exceptions=False, **kwargs)


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


class TestRoot:
    def test_help(self, runner: CliRunner) -> None:
        result = _invoke(runner, "--help")
        assert result.exit_code == 0
        for command in ("enable", "disable", "status", "show", "clear", "write", "db"):
            assert command in result.output

    def test_version_flag(self, runner: CliRunner) -> None:
        result = _invoke(runner, "--version")
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_version_command(self, runner: CliRunner) -> None:
        result = _invoke(runner, "version")
        assert result.exit_code == 0
        assert __version__ in result.output


# ---------------------------------------------------------------------------
# enable / disable / status
# ---------------------------------------------------------------------------


class TestSwitch:
    def test_status_defaults_to_disabled(self, runner: CliRunner, devlog_home: Path) -> None:
        result = _invoke(runner, "status", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["enabled"] is False
        assert data["settings_path"] == str(devlog_home / SETTINGS_FILENAME)
        assert data["db_path"] == str(devlog_home / DB_FILENAME)

    def test_enable_persists(self, runner: CliRunner) -> None:
        result = _invoke(runner, "enable")
        assert result.exit_code == 0
        assert "enabled" in result.output
        assert is_logging_enabled() is True
        assert json.loads(_invoke(runner, "status", "--json").output)["enabled"] is True

    def test_disable_persists(self, runner: CliRunner) -> None:
        _invoke(runner, "enable")
        result = _invoke(runner, "disable")
        assert result.exit_code == 0
        assert is_logging_enabled() is False

    def test_status_text(self, runner: CliRunner) -> None:
        _invoke(runner, "enable")
        result = _invoke(runner, "status")
        assert result.exit_code == 0
        assert "enabled" in result.output

    def test_status_bad_settings(self, runner: CliRunner, devlog_home: Path) -> None:
        devlog_home.mkdir(parents=True, exist_ok=True)
        (devlog_home / SETTINGS_FILENAME).write_text("[devlog\n")
        result = runner.invoke(cli, ["status"])
        assert result.exit_code == ExitCode.CONFIG_ERROR


# ---------------------------------------------------------------------------
# write / show / clear
# ---------------------------------------------------------------------------


class TestMessages:
    def test_write_while_disabled(self, runner: CliRunner, devlog_home: Path) -> None:
        result = _invoke(runner, "write", "ignored")
        assert result.exit_code == 0
        assert "disabled" in result.output
        assert not (devlog_home / DB_FILENAME).exists()

    def test_write_and_show(self, runner: CliRunner) -> None:
        _invoke(runner, "enable")
        _invoke(runner, "write", "started")
        _invoke(runner, "write", "--severity", "error", "--event-id", "7", "crash")

        result = _invoke(runner, "show")
        assert result.exit_code == 0
        first, second = result.output.strip().splitlines()
        assert ": INFO: started" in first
        assert ": ERROR: Event ID: 7, crash" in second

    def test_show_empty(self, runner: CliRunner) -> None:
        result = _invoke(runner, "show")
        assert result.exit_code == 0
        assert "No messages" in result.output

    def test_show_json(self, runner: CliRunner) -> None:
        DevLogger(enabled=True, clock=lambda: 1_000).warn(3, "careful")
        result = _invoke(runner, "show", "--json")
        assert result.exit_code == 0
        assert json.loads(result.output) == [
            {
                "time": 1_000,
                "severity": 1,
                "event_id": 3,
                "message": "careful",
                "severity_name": "WARNING",
            }
        ]

    def test_show_markup_printed_verbatim(self, runner: CliRunner) -> None:
        DevLogger(enabled=True).info("[bold]not styled[/bold]")
        result = _invoke(runner, "show")
        assert "[bold]not styled[/bold]" in result.output

    def test_env_enables_write(self, runner: CliRunner) -> None:
        _invoke(runner, "write", "via env", env={"DEVLOG_ENABLED": "1"})
        assert len(DevLogger(enabled=False).messages) == 1

    def test_write_storage_error(
        self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DEVLOG_ENABLED", "1")
        monkeypatch.setenv("DEVLOG_DB_PATH", str(tmp_path))
        result = runner.invoke(cli, ["write", "lost"])
        assert result.exit_code == ExitCode.STORAGE_ERROR
        assert "Storage error" in result.output

    def test_clear_with_yes(self, runner: CliRunner) -> None:
        log = DevLogger(enabled=True)
        log.info("old")
        log.info("older")
        result = _invoke(runner, "clear", "--yes")
        assert result.exit_code == 0
        assert "Cleared 2 message(s)" in result.output
        assert DevLogger(enabled=False).messages == []

    def test_clear_confirmation_declined(self, runner: CliRunner) -> None:
        DevLogger(enabled=True).info("kept")
        result = _invoke(runner, "clear", input="n\n")
        assert result.exit_code == 0
        assert "Aborted" in result.output
        assert len(DevLogger(enabled=False).messages) == 1

    def test_clear_confirmation_accepted(self, runner: CliRunner) -> None:
        DevLogger(enabled=True).info("gone")
        result = _invoke(runner, "clear", input="y\n")
        assert result.exit_code == 0
        assert DevLogger(enabled=False).messages == []

    def test_show_storage_error(
        self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DEVLOG_DB_PATH", str(tmp_path))
        result = runner.invoke(cli, ["show"])
        assert result.exit_code == ExitCode.STORAGE_ERROR


# ---------------------------------------------------------------------------
# db info
# ---------------------------------------------------------------------------


class TestDbInfo:
    def test_missing_database(self, runner: CliRunner) -> None:
        result = _invoke(runner, "db", "info", "--json")
        assert result.exit_code == 0
        assert json.loads(result.output)["exists"] is False

    def test_reports_rows_and_version(self, runner: CliRunner) -> None:
        log = DevLogger(enabled=True)
        log.info("a")
        log.info("b")
        result = _invoke(runner, "db", "info", "--json")
        data = json.loads(result.output)
        assert data["exists"] is True
        assert data["schema_version"] == data["latest_version"] == 1
        assert data["messages"] == 2

    def test_outdated_schema_not_dropped(self, runner: CliRunner, devlog_home: Path) -> None:
        db_path = devlog_home / DB_FILENAME
        with LogStore(db_path, schema_version=9) as store:
            store.append(0, 0, "from the future")

        result = _invoke(runner, "db", "info")
        assert result.exit_code == 0
        assert "Schema version: 9" in result.output
        assert "dropped" in result.output

        with LogStore(db_path, schema_version=9) as store:
            assert len(store.read_all()) == 1
