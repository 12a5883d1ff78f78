"""Shared fixtures: every test gets its own devlog home directory."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def devlog_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "devlog-home"
    monkeypatch.setenv("DEVLOG_HOME", str(home))
    for var in ("DEVLOG_SETTINGS", "DEVLOG_DB_PATH", "DEVLOG_ENABLED", "DEVLOG_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "devlog.db"


@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.toml"
