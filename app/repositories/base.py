"""
Base repository.

Typed access to one row-store table.
"""

from collections.abc import Callable, Mapping
from typing import Generic, TypeVar

from app.repositories.row_store import RowStore

RecordType = TypeVar("RecordType")


class BaseRepository(Generic[RecordType]):
    """
    Base repository mapping rows of one table to typed records.

    Type Parameters:
        RecordType: Record class with ``from_row``/``to_values``

    Example:
        class UserRepository(BaseRepository[User]):
            def __init__(self, store: RowStore):
                super().__init__(store, Table.USERS, "UserID", User.from_row)
    """

    def __init__(
        self,
        store: RowStore,
        table: str,
        key_column: str,
        from_row: Callable[[Mapping[str, str]], RecordType],
    ) -> None:
        """
        Initialize repository.

        Args:
            store: Row store
            table: Table name
            key_column: Column holding the record key
            from_row: Row -> record mapper
        """
        self.store = store
        self.table = table
        self.key_column = key_column
        self.from_row = from_row

    async def find_all(self) -> list[RecordType]:
        """All records in insertion order, skipping rows without a key."""
        rows = await self.store.list_rows(self.table)
        return [self.from_row(row) for row in rows if row.get(self.key_column)]

    async def get(self, key: str) -> RecordType | None:
        """
        Get record by key.

        Args:
            key: Key column value

        Returns:
            Record or None if not found
        """
        row = await self.store.find_row(self.table, self.key_column, key)
        return self.from_row(row) if row else None

    async def create(self, record: RecordType) -> RecordType:
        """Append record as a new row."""
        await self.store.append_row(self.table, record.to_values())  # type: ignore[attr-defined]
        return record

    async def update(self, key: str, patch: Mapping[str, str]) -> bool:
        """
        Patch record by key.

        Returns:
            True if found
        """
        return await self.store.update_row(self.table, self.key_column, key, patch)

    async def delete(self, key: str) -> bool:
        """
        Delete record by key.

        Returns:
            True if found
        """
        return await self.store.delete_row(self.table, self.key_column, key)
