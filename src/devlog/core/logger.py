"""
DevLogger — the facade host applications call.

The enablement flag is read once when the logger is built. A disabled
logger never touches the database for writes; reading and clearing the
history always work::

    log = DevLogger()
    log.info("started")
    log.error(7, "crash")

    for line in log.messages:
        print(line)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from devlog.core.config import default_db_path, is_logging_enabled
from devlog.core.constants import Severity
from devlog.core.exceptions import ConfigError, DevLogError
from devlog.core.store.database import LogStore
from devlog.core.store.models import LogRow

logger = logging.getLogger(__name__)

_SEPARATORS: dict[int, str] = {
    Severity.ERROR: ": ERROR: ",
    Severity.WARNING: ": WARNING: ",
    Severity.INFO: ": INFO: ",
    Severity.DEBUG: ": DEBUG: ",
}
_GENERIC_SEPARATOR = ": "


def format_timestamp(ms: int) -> str:
    """Locale date and time (``%x %X``) of an epoch-millisecond timestamp, local timezone."""
    return datetime.fromtimestamp(ms / 1000).strftime("%x %X")


def format_row(row: LogRow) -> str:
    """Render one stored row as ``<date time>: <SEVERITY>: [Event ID: <id>, ]<message>``."""
    parts = [format_timestamp(row.time), _SEPARATORS.get(row.severity, _GENERIC_SEPARATOR)]
    if row.event_id != 0:
        parts.append(f"Event ID: {row.event_id}, ")
    parts.append(row.message)
    return "".join(parts)


def _check_message(message: object) -> None:
    if not isinstance(message, str):
        raise TypeError(f"message must be a str, got {type(message).__name__}")


def _split_args(event_id: int | str, message: str | None) -> tuple[int, str]:
    # Called either as (message) or (event_id, message)
    if message is None:
        if not isinstance(event_id, str):
            raise TypeError("message is required")
        return 0, event_id
    if isinstance(event_id, bool) or not isinstance(event_id, int):
        raise TypeError(f"event_id must be an int, got {type(event_id).__name__}")
    _check_message(message)
    return event_id, message


class DevLogger:
    """
    Severity-leveled diagnostic logger backed by a LogStore.

    Every operation opens the store, does one unit of work and closes it
    again; no connection is held between calls.
    """

    def __init__(
        self,
        db_path: Path | None = None,
        settings_path: Path | None = None,
        *,
        enabled: bool | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.db_path = Path(db_path) if db_path is not None else default_db_path()
        self._clock = clock
        if enabled is None:
            enabled = self._read_gate(settings_path)
        self.enabled: bool = enabled

    @staticmethod
    def _read_gate(settings_path: Path | None) -> bool:
        try:
            return is_logging_enabled(settings_path)
        except (ConfigError, OSError) as exc:
            logger.warning("devlog settings unreadable, diagnostics disabled: %s", exc)
            return False

    def _store(self) -> LogStore:
        return LogStore(self.db_path, clock=self._clock)

    # ------------------------------------------------------------------
    # Write path
    # ------------------------------------------------------------------

    def log(self, severity: int, event_id: int, message: str) -> None:
        """
        Append one row if enabled.

        Store failures are reported, never raised. A non-str message raises TypeError.
        """
        if not self.enabled:
            return
        _check_message(message)
        try:
            with self._store() as store:
                store.append(severity, event_id, message)
        except DevLogError as exc:
            # Diagnostics must never break the host application
            logger.error("devlog: dropped message (severity=%s): %s", severity, exc)

    def error(self, event_id: int | str, message: str | None = None) -> None:
        if self.enabled:
            self.log(Severity.ERROR, *_split_args(event_id, message))

    def warn(self, event_id: int | str, message: str | None = None) -> None:
        if self.enabled:
            self.log(Severity.WARNING, *_split_args(event_id, message))

    def info(self, event_id: int | str, message: str | None = None) -> None:
        if self.enabled:
            self.log(Severity.INFO, *_split_args(event_id, message))

    def debug(self, event_id: int | str, message: str | None = None) -> None:
        if self.enabled:
            self.log(Severity.DEBUG, *_split_args(event_id, message))

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Delete the stored history. Allowed while disabled."""
        with self._store() as store:
            store.clear()

    def rows(self) -> list[LogRow]:
        """Read every stored row, oldest first."""
        with self._store() as store:
            return store.read_all()

    @property
    def messages(self) -> list[str]:
        """Formatted lines for every stored row, re-read from storage on each access."""
        return [format_row(row) for row in self.rows()]
