"""Order repository."""

from app.models.enums import OrderStatus, Table
from app.models.order import Order
from app.repositories.base import BaseRepository
from app.repositories.row_store import RowStore


class OrderRepository(BaseRepository[Order]):
    """Repository for the ``Orders`` table."""

    def __init__(self, store: RowStore) -> None:
        super().__init__(store, Table.ORDERS, "OrderID", Order.from_row)

    async def get_by_user(self, user_id: str) -> list[Order]:
        return [order for order in await self.find_all() if order.user_id == user_id]

    async def get_by_status(self, status: OrderStatus) -> list[Order]:
        return [order for order in await self.find_all() if order.status == status]

    async def save_decision(self, order: Order) -> bool:
        """Persist status and delivered codes."""
        return await self.update(order.order_id, order.decision_patch())
