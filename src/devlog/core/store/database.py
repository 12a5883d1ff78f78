"""
LogStore — SQLite-backed append-only storage for diagnostic rows.

Each store instance wraps one short-lived connection::

    with LogStore(path) as store:
        store.append(Severity.INFO, 0, "started")
        rows = store.read_all()

The connection is opened on entry and closed on exit, on every path.
"""

from __future__ import annotations

import logging
import sqlite3
import time
from collections.abc import Callable
from pathlib import Path
from types import TracebackType

from devlog.core.constants import (
    BUSY_TIMEOUT_SECONDS,
    KEY_EVENT_ID,
    KEY_MESSAGE,
    KEY_SEVERITY,
    KEY_TIME,
    TABLE_NAME,
)
from devlog.core.exceptions import (
    ReadFailureError,
    StorageUnavailableError,
    WriteFailureError,
)
from devlog.core.store.migrations import LATEST_SCHEMA_VERSION, run_migrations
from devlog.core.store.models import LogRow

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _as_text(value: object) -> str:
    # msg is declared TEXT but SQLite keeps whatever type another writer stored
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value if isinstance(value, str) else str(value)


class LogStore:
    """
    Durable store for LogRow entries.

    Concurrent readers and writers (other instances, other processes) are
    coordinated only by SQLite itself: WAL journal plus a busy timeout.
    """

    def __init__(
        self,
        path: Path,
        *,
        schema_version: int = LATEST_SCHEMA_VERSION,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.path = Path(path)
        self.schema_version = schema_version
        self._clock = clock or _now_ms
        self._db: sqlite3.Connection | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def connect(self) -> None:
        """Open (creating if needed) the database and bring the schema up to date."""
        if self._db is not None:
            return
        conn: sqlite3.Connection | None = None
        try:
            self.path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
            conn = sqlite3.connect(
                str(self.path), timeout=BUSY_TIMEOUT_SECONDS, isolation_level=None
            )
            conn.execute("PRAGMA journal_mode=WAL")
            if run_migrations(conn, self.schema_version):
                logger.info("Log table ready at %s (schema v%d)", self.path, self.schema_version)
        except (sqlite3.Error, OSError) as exc:
            if conn is not None:
                conn.close()
            raise StorageUnavailableError(f"Cannot open log database {self.path}: {exc}") from exc
        self._db = conn

    def close(self) -> None:
        if self._db is not None:
            self._db.close()
            self._db = None

    def __enter__(self) -> LogStore:
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _conn(self) -> sqlite3.Connection:
        if self._db is None:
            raise StorageUnavailableError("Log store is not connected; call connect() first")
        return self._db

    # ------------------------------------------------------------------
    # Rows
    # ------------------------------------------------------------------

    def append(self, severity: int, event_id: int, message: str) -> None:
        """Insert one row stamped with the current wall-clock time."""
        conn = self._conn()
        try:
            with conn:
                conn.execute(
                    f"INSERT INTO {TABLE_NAME} "  # noqa: S608
                    f"({KEY_TIME}, {KEY_SEVERITY}, {KEY_EVENT_ID}, {KEY_MESSAGE}) "
                    "VALUES (?, ?, ?, ?)",
                    (self._clock(), int(severity), int(event_id), message),
                )
        except (sqlite3.Error, OverflowError) as exc:
            # OverflowError: event_id outside the signed 64-bit range
            raise WriteFailureError(f"Cannot append to {self.path}: {exc}") from exc

    def read_all(self) -> list[LogRow]:
        """Return every row, oldest first (insertion order)."""
        conn = self._conn()
        try:
            rows = conn.execute(
                f"SELECT {KEY_TIME}, {KEY_SEVERITY}, {KEY_EVENT_ID}, {KEY_MESSAGE} "  # noqa: S608
                f"FROM {TABLE_NAME} ORDER BY rowid"
            ).fetchall()
        except sqlite3.Error as exc:
            raise ReadFailureError(f"Cannot read {self.path}: {exc}") from exc
        return [
            LogRow(time=t, severity=sev, event_id=ev_id, message=_as_text(msg))
            for t, sev, ev_id, msg in rows
        ]

    def clear(self) -> None:
        """Delete all rows. Not coordinated with concurrent appends."""
        conn = self._conn()
        try:
            with conn:
                conn.execute(f"DELETE FROM {TABLE_NAME}")  # noqa: S608
        except sqlite3.Error as exc:
            raise WriteFailureError(f"Cannot clear {self.path}: {exc}") from exc

    def count(self) -> int:
        conn = self._conn()
        try:
            row = conn.execute(f"SELECT count(*) FROM {TABLE_NAME}").fetchone()  # noqa: S608
        except sqlite3.Error as exc:
            raise ReadFailureError(f"Cannot count rows in {self.path}: {exc}") from exc
        return int(row[0]) if row else 0
