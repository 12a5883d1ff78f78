"""
Schema versioning for the log database.

The version lives in ``PRAGMA user_version``. There is exactly one schema
at a time: whenever the on-disk version differs from the expected one the
``messages`` table is dropped and recreated empty. Rows are diagnostics,
not state, so nothing is carried over.

Connections are expected in autocommit mode (``isolation_level=None``);
the migration manages its own transaction.
"""

from __future__ import annotations

import logging
import sqlite3

from devlog.core.constants import (
    KEY_EVENT_ID,
    KEY_MESSAGE,
    KEY_SEVERITY,
    KEY_TIME,
    TABLE_NAME,
)

logger = logging.getLogger(__name__)

LATEST_SCHEMA_VERSION = 1

CREATE_MESSAGES_TABLE = (
    f"CREATE TABLE {TABLE_NAME} ("
    f"{KEY_TIME} INTEGER, "
    f"{KEY_SEVERITY} INTEGER, "
    f"{KEY_EVENT_ID} INTEGER, "
    f"{KEY_MESSAGE} TEXT"
    ")"
)


def get_user_version(conn: sqlite3.Connection) -> int:
    row = conn.execute("PRAGMA user_version").fetchone()
    return int(row[0]) if row else 0


def set_user_version(conn: sqlite3.Connection, version: int) -> None:
    # PRAGMA does not accept bound parameters
    conn.execute(f"PRAGMA user_version = {int(version)}")


def table_exists(conn: sqlite3.Connection, table: str = TABLE_NAME) -> bool:
    row = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name=?", (table,)
    ).fetchone()
    return row is not None


def run_migrations(conn: sqlite3.Connection, target_version: int = LATEST_SCHEMA_VERSION) -> bool:
    """
    Bring the database to *target_version*.

    Returns True when the table was (re)created, False when the schema was
    already current.

    The check and the drop/create/stamp run inside one ``BEGIN IMMEDIATE``
    transaction, so when several processes open a new file at once exactly
    one of them creates the table and the others see it as current. The
    connection must not be inside a transaction already.
    """
    if get_user_version(conn) == target_version and table_exists(conn):
        return False

    conn.execute("BEGIN IMMEDIATE")
    try:
        # Re-check under the write lock: another connection may have migrated meanwhile
        current = get_user_version(conn)
        exists = table_exists(conn)
        if current == target_version and exists:
            conn.execute("COMMIT")
            return False
        if exists:
            logger.info(
                "Log schema v%d does not match v%d, dropping %s",
                current,
                target_version,
                TABLE_NAME,
            )
            conn.execute(f"DROP TABLE {TABLE_NAME}")
        logger.debug("Creating log table: %s", CREATE_MESSAGES_TABLE)
        conn.execute(CREATE_MESSAGES_TABLE)
        set_user_version(conn, target_version)
        conn.execute("COMMIT")
    except Exception:
        if conn.in_transaction:
            conn.execute("ROLLBACK")
        raise
    return True
