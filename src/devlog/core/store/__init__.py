"""
devlog.core.store — SQLite persistence layer.

Stores diagnostic rows in a single ``messages`` table. Uses raw sqlite3
(no ORM dependency).

Modules:
    database    LogStore: connection management, append/read/clear
    migrations  Schema version tracking and drop-and-recreate
    models      LogRow dataclass
"""

from devlog.core.store.database import LogStore
from devlog.core.store.models import LogRow

__all__ = ["LogRow", "LogStore"]
