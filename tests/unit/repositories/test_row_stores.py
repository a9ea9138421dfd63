"""
Unit tests for row stores.

The in-memory and SQL (aiosqlite) backends must behave identically.
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from app.config.database import create_session_maker
from app.models.enums import Table
from app.models.tables import metadata
from app.repositories.row_store import InMemoryRowStore
from app.repositories.sql_row_store import SqlRowStore
from app.utils.exceptions import StoreError


@pytest_asyncio.fixture(params=["memory", "sqlite"])
async def row_store(request):
    """Run each test against both backends."""
    if request.param == "memory":
        yield InMemoryRowStore()
        return

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield SqlRowStore(create_session_maker(engine))
    await engine.dispose()


@pytest.mark.asyncio
async def test_append_and_list_in_insertion_order(row_store):
    await row_store.append_row(Table.USERS, ["1", "A", "t", "Active", "Yes"])
    await row_store.append_row(Table.USERS, ["2", "B", "t", "Active", "No"])

    rows = await row_store.list_rows(Table.USERS)

    assert [row["UserID"] for row in rows] == ["1", "2"]
    assert rows[0] == {
        "UserID": "1",
        "Name": "A",
        "JoinedAt": "t",
        "Status": "Active",
        "Verified": "Yes",
    }


@pytest.mark.asyncio
async def test_short_rows_omit_missing_cells(row_store):
    await row_store.append_row(Table.LOGS, ["ts", "1"])

    rows = await row_store.list_rows(Table.LOGS)

    assert rows == [{"Timestamp": "ts", "UserID": "1"}]


@pytest.mark.asyncio
async def test_too_many_values_rejected(row_store):
    with pytest.raises(StoreError):
        await row_store.append_row(Table.LOGS, ["a", "b", "c", "d", "e"])


@pytest.mark.asyncio
async def test_update_patches_first_match_only(row_store):
    await row_store.append_row(Table.USERS, ["1", "A", "t", "Active", "No"])
    await row_store.append_row(Table.USERS, ["1", "dup", "t", "Active", "No"])

    found = await row_store.update_row(
        Table.USERS, "UserID", "1", {"Verified": "Yes"}
    )

    assert found is True
    rows = await row_store.list_rows(Table.USERS)
    assert rows[0]["Verified"] == "Yes"
    assert rows[1]["Verified"] == "No"


@pytest.mark.asyncio
async def test_update_missing_row(row_store):
    assert await row_store.update_row(
        Table.USERS, "UserID", "404", {"Status": "Blocked"}
    ) is False


@pytest.mark.asyncio
async def test_update_unknown_column_rejected(row_store):
    await row_store.append_row(Table.USERS, ["1", "A", "t", "Active", "No"])
    with pytest.raises(StoreError):
        await row_store.update_row(Table.USERS, "UserID", "1", {"Balance": "9"})


@pytest.mark.asyncio
async def test_delete_first_match(row_store):
    await row_store.append_row(Table.USERS, ["1", "A", "t", "Active", "No"])
    await row_store.append_row(Table.USERS, ["2", "B", "t", "Active", "No"])

    assert await row_store.delete_row(Table.USERS, "UserID", "1") is True
    assert await row_store.delete_row(Table.USERS, "UserID", "1") is False

    rows = await row_store.list_rows(Table.USERS)
    assert [row["UserID"] for row in rows] == ["2"]


@pytest.mark.asyncio
async def test_find_row(row_store):
    await row_store.append_row(Table.USERS, ["1", "A", "t", "Active", "No"])

    assert (await row_store.find_row(Table.USERS, "UserID", "1"))["Name"] == "A"
    assert await row_store.find_row(Table.USERS, "UserID", "2") is None


@pytest.mark.asyncio
async def test_unknown_table_rejected(row_store):
    with pytest.raises(StoreError, match="Unknown table"):
        await row_store.list_rows("Invoices")


@pytest.mark.asyncio
async def test_multiline_cells_survive(row_store):
    await row_store.append_row(
        Table.CATEGORIES, ["cat_1", "1", "", "", "", "", "", "2", "A\nB"]
    )

    row = await row_store.find_row(Table.CATEGORIES, "CategoryID", "cat_1")

    assert row["VoucherCodes"] == "A\nB"
    assert row["Price"] == ""
