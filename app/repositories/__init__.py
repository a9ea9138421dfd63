"""
Repositories.

Data access layer over the row store.
"""

from app.repositories.base import BaseRepository
from app.repositories.category_repository import CategoryRepository
from app.repositories.log_repository import LogRepository
from app.repositories.order_repository import OrderRepository
from app.repositories.row_store import InMemoryRowStore, Row, RowStore
from app.repositories.sql_row_store import SqlRowStore
from app.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "CategoryRepository",
    "InMemoryRowStore",
    "LogRepository",
    "OrderRepository",
    "Row",
    "RowStore",
    "SqlRowStore",
    "UserRepository",
]
