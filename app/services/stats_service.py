"""
Stats service.

Aggregates shop figures for the admin hub.
"""

from dataclasses import dataclass
from decimal import Decimal

from app.models.enums import OrderStatus
from app.repositories.category_repository import CategoryRepository
from app.repositories.order_repository import OrderRepository
from app.services.user_service import UserService


@dataclass(frozen=True)
class ShopStats:
    users_total: int
    users_blocked: int
    orders_pending: int
    orders_successful: int
    orders_declined: int
    revenue: Decimal
    codes_delivered: int
    stock_by_category: dict[str, int]

    @property
    def stock_total(self) -> int:
        return sum(self.stock_by_category.values())


class StatsService:
    """Read-only statistics."""

    def __init__(
        self,
        user_service: UserService,
        order_repo: OrderRepository,
        category_repo: CategoryRepository,
    ) -> None:
        self.user_service = user_service
        self.order_repo = order_repo
        self.category_repo = category_repo

    async def collect(self) -> ShopStats:
        users_total, users_blocked = await self.user_service.count_users()
        orders = await self.order_repo.find_all()
        successful = [o for o in orders if o.status == OrderStatus.SUCCESSFUL]
        categories = await self.category_repo.find_all()

        return ShopStats(
            users_total=users_total,
            users_blocked=users_blocked,
            orders_pending=sum(1 for o in orders if o.status == OrderStatus.PENDING),
            orders_successful=len(successful),
            orders_declined=sum(1 for o in orders if o.status == OrderStatus.DECLINED),
            revenue=sum((o.total_amount for o in successful), Decimal("0.00")),
            codes_delivered=sum(len(o.delivered_codes) for o in successful),
            stock_by_category={c.category_id: c.pool_size for c in categories},
        )
