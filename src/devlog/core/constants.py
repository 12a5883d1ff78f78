"""devlog constants: severities, filesystem layout, and storage names."""

from __future__ import annotations

from enum import IntEnum

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 1
    CONFIG_ERROR = 2
    STORAGE_ERROR = 3


# ---------------------------------------------------------------------------
# Severities
# ---------------------------------------------------------------------------


class Severity(IntEnum):
    ERROR = 0
    WARNING = 1
    INFO = 2
    DEBUG = 3


# ---------------------------------------------------------------------------
# Filesystem layout
# ---------------------------------------------------------------------------

DEVLOG_DIR_NAME = ".devlog"
SETTINGS_FILENAME = "settings.toml"
SETTINGS_NAMESPACE = "devlog"
DB_FILENAME = "devlogV1"

# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------

TABLE_NAME = "messages"
KEY_TIME = "time"
KEY_SEVERITY = "sev"
KEY_EVENT_ID = "evId"
KEY_MESSAGE = "msg"

BUSY_TIMEOUT_SECONDS = 5.0  # sqlite lock wait before giving up
