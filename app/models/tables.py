"""
Row-store table definitions.

Every logical table is a plain list of string cells in fixed header order.
The SQL backend adds a surrogate ``row_id`` to keep insertion order.
"""

from sqlalchemy import Column, Integer, MetaData, Table, Text

from app.models.enums import Table as TableName

metadata = MetaData()

USERS_COLUMNS = ("UserID", "Name", "JoinedAt", "Status", "Verified")

CATEGORIES_COLUMNS = (
    "CategoryID",
    "Value",
    "Price",
    "Price1",
    "Price5",
    "Price10",
    "Price20Plus",
    "Stock",
    "VoucherCodes",
)

ORDERS_COLUMNS = (
    "OrderID",
    "UserID",
    "UserName",
    "CategoryID",
    "Quantity",
    "Total",
    "UTR",
    "Status",
    "VoucherCodeDelivered",
    "CreatedAt",
)

LOGS_COLUMNS = ("Timestamp", "UserID", "Action", "Details")

TABLE_COLUMNS: dict[str, tuple[str, ...]] = {
    TableName.USERS: USERS_COLUMNS,
    TableName.CATEGORIES: CATEGORIES_COLUMNS,
    TableName.ORDERS: ORDERS_COLUMNS,
    TableName.LOGS: LOGS_COLUMNS,
}


def _build_table(name: str, columns: tuple[str, ...]) -> Table:
    return Table(
        name,
        metadata,
        Column("row_id", Integer, primary_key=True, autoincrement=True),
        *(Column(column, Text, nullable=True) for column in columns),
    )


SQL_TABLES: dict[str, Table] = {
    name: _build_table(name, columns) for name, columns in TABLE_COLUMNS.items()
}
