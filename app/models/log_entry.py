"""Audit log record."""

from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class LogEntry:
    """One row of the ``Logs`` table."""

    timestamp: str
    user_id: str
    action: str
    details: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, str]) -> "LogEntry":
        return cls(
            timestamp=row.get("Timestamp", ""),
            user_id=row.get("UserID", ""),
            action=row.get("Action", ""),
            details=row.get("Details", ""),
        )

    def to_values(self) -> list[str]:
        return [self.timestamp, self.user_id, self.action, self.details]
