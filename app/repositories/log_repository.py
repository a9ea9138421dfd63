"""Audit log repository."""

from app.models.enums import Table
from app.models.log_entry import LogEntry
from app.repositories.base import BaseRepository
from app.repositories.row_store import RowStore


class LogRepository(BaseRepository[LogEntry]):
    """Append-only repository for the ``Logs`` table."""

    def __init__(self, store: RowStore) -> None:
        super().__init__(store, Table.LOGS, "Timestamp", LogEntry.from_row)

    async def get_by_user(self, user_id: str) -> list[LogEntry]:
        return [entry for entry in await self.find_all() if entry.user_id == user_id]
