"""
SQL row store.

Row store over SQLAlchemy async Core tables. Each call runs in its own short
transaction; callers needing read-modify-write must hold a KeyedLock.
"""

from collections.abc import Mapping, Sequence

from loguru import logger
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.tables import SQL_TABLES, TABLE_COLUMNS
from app.repositories.row_store import Row, RowStore
from app.utils.exceptions import StoreError


class SqlRowStore(RowStore):
    """Row store backed by a relational database."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """
        Initialize SQL row store.

        Args:
            session_factory: Async session factory
        """
        self.session_factory = session_factory

    @staticmethod
    def _table(name: str):
        try:
            return SQL_TABLES[name]
        except KeyError:
            raise StoreError(f"Unknown table: {name}") from None

    async def list_rows(self, table: str) -> list[Row]:
        sql_table = self._table(table)
        columns = TABLE_COLUMNS[table]
        stmt = select(sql_table).order_by(sql_table.c.row_id)
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                records = result.mappings().all()
        except SQLAlchemyError as e:
            logger.error(f"list_rows({table}) failed: {e}")
            raise StoreError(f"Could not read {table}") from e

        return [
            {
                column: record[column]
                for column in columns
                if record[column] is not None
            }
            for record in records
        ]

    async def append_row(self, table: str, values: Sequence[str]) -> None:
        sql_table = self._table(table)
        columns = TABLE_COLUMNS[table]
        if len(values) > len(columns):
            raise StoreError(
                f"{table}: {len(values)} values for {len(columns)} columns"
            )
        data = dict(zip(columns, (str(value) for value in values)))
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    await session.execute(sql_table.insert().values(**data))
        except SQLAlchemyError as e:
            logger.error(f"append_row({table}) failed: {e}")
            raise StoreError(f"Could not append to {table}") from e

    async def _first_row_id(
        self, session: AsyncSession, table: str, match_column: str, match_value: str
    ) -> int | None:
        sql_table = self._table(table)
        if match_column not in TABLE_COLUMNS[table]:
            raise StoreError(f"{table}: unknown column {match_column}")
        stmt = (
            select(sql_table.c.row_id)
            .where(sql_table.c[match_column] == match_value)
            .order_by(sql_table.c.row_id)
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_row(
        self,
        table: str,
        match_column: str,
        match_value: str,
        patch: Mapping[str, str],
    ) -> bool:
        sql_table = self._table(table)
        unknown = set(patch) - set(TABLE_COLUMNS[table])
        if unknown:
            raise StoreError(f"{table}: unknown columns {sorted(unknown)}")
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    row_id = await self._first_row_id(
                        session, table, match_column, match_value
                    )
                    if row_id is None:
                        return False
                    await session.execute(
                        update(sql_table)
                        .where(sql_table.c.row_id == row_id)
                        .values({key: str(value) for key, value in patch.items()})
                    )
        except SQLAlchemyError as e:
            logger.error(f"update_row({table}, {match_column}={match_value}) failed: {e}")
            raise StoreError(f"Could not update {table}") from e
        return True

    async def delete_row(
        self, table: str, match_column: str, match_value: str
    ) -> bool:
        sql_table = self._table(table)
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    row_id = await self._first_row_id(
                        session, table, match_column, match_value
                    )
                    if row_id is None:
                        return False
                    await session.execute(
                        delete(sql_table).where(sql_table.c.row_id == row_id)
                    )
        except SQLAlchemyError as e:
            logger.error(f"delete_row({table}, {match_column}={match_value}) failed: {e}")
            raise StoreError(f"Could not delete from {table}") from e
        return True
