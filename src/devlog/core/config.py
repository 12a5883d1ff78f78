"""devlog settings: persisted key-value namespace, pydantic model, and the enablement gate."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, field_validator

from devlog.core.constants import (
    DB_FILENAME,
    DEVLOG_DIR_NAME,
    SETTINGS_FILENAME,
    SETTINGS_NAMESPACE,
)
from devlog.core.exceptions import ConfigError

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off", ""}


def devlog_dir() -> Path:
    """Return the devlog data directory (~/.devlog or $DEVLOG_HOME). Nothing is created here."""
    if env_home := os.environ.get("DEVLOG_HOME"):
        return Path(env_home).expanduser()
    return Path.home() / DEVLOG_DIR_NAME


def settings_file_path() -> Path:
    if env_path := os.environ.get("DEVLOG_SETTINGS"):
        return Path(env_path).expanduser()
    return devlog_dir() / SETTINGS_FILENAME


def default_db_path() -> Path:
    if env_path := os.environ.get("DEVLOG_DB_PATH"):
        return Path(env_path).expanduser()
    return devlog_dir() / DB_FILENAME


def parse_bool(value: Any) -> bool:
    """Coerce TOML/env values to bool. Strings accept 1/0, true/false, yes/no, on/off."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        v = value.strip().lower()
        if v in _TRUE_STRINGS:
            return True
        if v in _FALSE_STRINGS:
            return False
    raise ValueError(f"Not a boolean value: {value!r}")


# ---------------------------------------------------------------------------
# Key-value store
# ---------------------------------------------------------------------------


class SettingsStore:
    """
    One named namespace (a TOML table) inside a settings file.

    Other namespaces in the same file are preserved on write.
    """

    def __init__(self, path: Path | None = None, namespace: str = SETTINGS_NAMESPACE) -> None:
        self.path = path or settings_file_path()
        self.namespace = namespace

    def _read_document(self) -> dict[str, Any]:
        import tomllib

        if not self.path.exists():
            return {}
        try:
            with open(self.path, "rb") as f:
                return tomllib.load(f)
        except Exception as exc:
            raise ConfigError(f"Cannot read settings file {self.path}: {exc}") from exc

    def load(self) -> dict[str, Any]:
        """Return the namespace table, or an empty dict when it does not exist."""
        table = self._read_document().get(self.namespace, {})
        if not isinstance(table, dict):
            raise ConfigError(f"[{self.namespace}] in {self.path} is not a table")
        return table

    def get_bool(self, name: str, default: bool = False) -> bool:
        table = self.load()
        if name not in table:
            return default
        try:
            return parse_bool(table[name])
        except ValueError as exc:
            raise ConfigError(f"Invalid value for {self.namespace}.{name}: {exc}") from exc

    def set_bool(self, name: str, value: bool) -> None:
        document = self._read_document()
        table = document.setdefault(self.namespace, {})
        if not isinstance(table, dict):
            raise ConfigError(f"[{self.namespace}] in {self.path} is not a table")
        table[name] = bool(value)
        self._write_document(document)

    def _write_document(self, document: dict[str, Any]) -> None:
        """Write the whole document atomically with secure permissions (0600)."""
        import tomli_w

        try:
            self.path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigError(f"Cannot create {self.path.parent}: {exc}") from exc

        tmp_path = self.path.with_suffix(".tmp")
        try:
            with open(tmp_path, "wb") as f:
                tomli_w.dump(document, f)
            tmp_path.replace(self.path)
        except Exception as exc:
            tmp_path.unlink(missing_ok=True)
            raise ConfigError(f"Cannot write settings to {self.path}: {exc}") from exc

        self.path.chmod(0o600)


# ---------------------------------------------------------------------------
# Settings model
# ---------------------------------------------------------------------------


class DevLoggerSettings(BaseModel):
    """Persisted logger settings. Only the enablement switch for now."""

    enabled: bool = False

    @field_validator("enabled", mode="before")
    @classmethod
    def parse_enabled(cls, v: Any) -> Any:
        """Accept the same spellings as the DEVLOG_ENABLED environment variable."""
        return parse_bool(v)


def load_settings(path: Path | None = None) -> DevLoggerSettings:
    """
    Load DevLoggerSettings from the settings file, overlaid with environment variables.

    Priority (highest to lowest):
      1. DEVLOG_ENABLED
      2. [devlog] table in the settings file
      3. Model defaults (disabled)
    """
    data = dict(SettingsStore(path).load())

    if (enabled := os.environ.get("DEVLOG_ENABLED")) is not None:
        data["enabled"] = enabled

    try:
        return DevLoggerSettings.model_validate(data)
    except Exception as exc:
        raise ConfigError(f"Invalid devlog settings: {exc}") from exc


def save_settings(settings: DevLoggerSettings, path: Path | None = None) -> Path:
    store = SettingsStore(path)
    store.set_bool("enabled", settings.enabled)
    return store.path


def is_logging_enabled(path: Path | None = None) -> bool:
    """
    Return the persisted enablement flag, False if it was never set.

    Raises :class:`ConfigError` if the settings cannot be read; callers that
    must not fail treat that as disabled.
    """
    return load_settings(path).enabled
