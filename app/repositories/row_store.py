"""
Row store.

Schema-less table abstraction consumed by every repository. Rows are
mappings of column name to string cell; absent cells are omitted rather
than returned as empty strings. No operation is atomic across calls.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence

from loguru import logger

from app.models.tables import TABLE_COLUMNS
from app.utils.exceptions import StoreError

Row = dict[str, str]


class RowStore(ABC):
    """Abstract row-oriented table service."""

    @abstractmethod
    async def list_rows(self, table: str) -> list[Row]:
        """
        List all rows of a table in insertion order.

        Args:
            table: Table name

        Returns:
            Rows as column -> value mappings
        """

    @abstractmethod
    async def append_row(self, table: str, values: Sequence[str]) -> None:
        """
        Append a row.

        Args:
            table: Table name
            values: Cell values in header order
        """

    @abstractmethod
    async def update_row(
        self,
        table: str,
        match_column: str,
        match_value: str,
        patch: Mapping[str, str],
    ) -> bool:
        """
        Patch the first row whose match_column equals match_value.

        Returns:
            True if a row was found
        """

    @abstractmethod
    async def delete_row(
        self, table: str, match_column: str, match_value: str
    ) -> bool:
        """
        Delete the first row whose match_column equals match_value.

        Returns:
            True if a row was found
        """

    async def find_row(
        self, table: str, match_column: str, match_value: str
    ) -> Row | None:
        """Return the first matching row, or None."""
        for row in await self.list_rows(table):
            if row.get(match_column) == match_value:
                return row
        return None


def _columns(table: str) -> tuple[str, ...]:
    try:
        return TABLE_COLUMNS[table]
    except KeyError:
        raise StoreError(f"Unknown table: {table}") from None


class InMemoryRowStore(RowStore):
    """
    Row store kept in process memory.

    Each call yields to the event loop once so concurrent callers interleave
    the way they would against a remote store.
    """

    def __init__(self) -> None:
        self._tables: dict[str, list[Row]] = {name: [] for name in TABLE_COLUMNS}

    async def list_rows(self, table: str) -> list[Row]:
        _columns(table)
        await asyncio.sleep(0)
        return [dict(row) for row in self._tables[table]]

    async def append_row(self, table: str, values: Sequence[str]) -> None:
        columns = _columns(table)
        if len(values) > len(columns):
            raise StoreError(
                f"{table}: {len(values)} values for {len(columns)} columns"
            )
        await asyncio.sleep(0)
        row = {
            column: str(value)
            for column, value in zip(columns, values)
            if value is not None
        }
        self._tables[table].append(row)

    async def update_row(
        self,
        table: str,
        match_column: str,
        match_value: str,
        patch: Mapping[str, str],
    ) -> bool:
        columns = _columns(table)
        unknown = set(patch) - set(columns)
        if unknown:
            raise StoreError(f"{table}: unknown columns {sorted(unknown)}")
        await asyncio.sleep(0)
        for row in self._tables[table]:
            if row.get(match_column) == match_value:
                row.update({key: str(value) for key, value in patch.items()})
                return True
        logger.debug(f"{table}: no row with {match_column}={match_value}")
        return False

    async def delete_row(
        self, table: str, match_column: str, match_value: str
    ) -> bool:
        _columns(table)
        await asyncio.sleep(0)
        rows = self._tables[table]
        for index, row in enumerate(rows):
            if row.get(match_column) == match_value:
                del rows[index]
                return True
        return False
