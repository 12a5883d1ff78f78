"""
devlog — on-device diagnostic log for host applications.

devlog records severity-tagged, optionally event-correlated messages into a
local SQLite database. Writes are gated by a persisted ``enabled`` switch so
that diagnostics cost nothing when they are turned off. Stored messages are
replayed later as human-readable lines.

Package layout (src/devlog/):
  core/         — settings gate, logger facade, exceptions, constants
  core/store/   — SQLite log store and schema versioning
  cli/          — Click CLI entry point
"""

from devlog.core.logger import DevLogger, format_row

__version__ = "0.1.0"
__all__ = ["DevLogger", "__version__", "format_row"]
