"""
Records.

Typed records for every row-store table.
"""

from app.models.category import Category
from app.models.enums import (
    LogAction,
    OrderStatus,
    PriceTier,
    Table,
    UserStatus,
    VerifiedFlag,
)
from app.models.log_entry import LogEntry
from app.models.order import Order
from app.models.user import User

__all__ = [
    "Category",
    "LogAction",
    "LogEntry",
    "Order",
    "OrderStatus",
    "PriceTier",
    "Table",
    "User",
    "UserStatus",
    "VerifiedFlag",
]
