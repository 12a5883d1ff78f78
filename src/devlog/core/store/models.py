"""Typed records read from the log store."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from devlog.core.constants import Severity


@dataclass(frozen=True)
class LogRow:
    time: int  # ms since epoch, stamped by the store
    severity: int
    event_id: int
    message: str

    @property
    def severity_name(self) -> str | None:
        """Name of a well-known severity, None for values outside the enum."""
        try:
            return Severity(self.severity).name
        except ValueError:
            return None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
