"""
Service container.

Wires repositories and services over one row store, one messenger and one
keyed lock.
"""

from dataclasses import dataclass

from app.repositories.category_repository import CategoryRepository
from app.repositories.log_repository import LogRepository
from app.repositories.order_repository import OrderRepository
from app.repositories.row_store import RowStore
from app.repositories.user_repository import UserRepository
from app.services.admin_log_service import AdminLogService
from app.services.broadcast_service import BroadcastService
from app.services.catalog_service import CatalogService
from app.services.inventory_allocator import InventoryAllocator
from app.services.messenger import Messenger
from app.services.notification_service import NotificationService
from app.services.order_workflow import OrderWorkflow
from app.services.pricing_resolver import PricingResolver
from app.services.stats_service import StatsService
from app.services.user_service import UserService
from app.utils.distributed_lock import KeyedLock


@dataclass
class ServiceContainer:
    messenger: Messenger
    notifications: NotificationService
    users: UserService
    catalog: CatalogService
    allocator: InventoryAllocator
    pricing: PricingResolver
    orders: OrderWorkflow
    admin_log: AdminLogService
    broadcasts: BroadcastService
    stats: StatsService


def build_services(
    store: RowStore,
    messenger: Messenger,
    lock: KeyedLock,
    admin_id: str,
    orders_channel_id: str | None = None,
    currency: str = "₹",
    broadcast_rate_limit: int = 15,
) -> ServiceContainer:
    """
    Build every service over shared collaborators.

    Args:
        store: Row store
        messenger: Outbound messenger
        lock: Keyed lock shared by all pool and order writers
        admin_id: Admin user ID
        orders_channel_id: Channel for delivered-order posts
        currency: Currency symbol
        broadcast_rate_limit: Broadcast messages per second

    Returns:
        ServiceContainer
    """
    category_repo = CategoryRepository(store)
    order_repo = OrderRepository(store)

    notifications = NotificationService(messenger, admin_id)
    admin_log = AdminLogService(LogRepository(store))
    users = UserService(UserRepository(store))
    allocator = InventoryAllocator(category_repo, lock)

    return ServiceContainer(
        messenger=messenger,
        notifications=notifications,
        users=users,
        catalog=CatalogService(category_repo, allocator),
        allocator=allocator,
        pricing=PricingResolver(),
        orders=OrderWorkflow(
            order_repo,
            allocator,
            notifications,
            admin_log,
            lock,
            orders_channel_id=orders_channel_id,
            currency=currency,
        ),
        admin_log=admin_log,
        broadcasts=BroadcastService(
            notifications, users, admin_log, rate_limit=broadcast_rate_limit
        ),
        stats=StatsService(users, order_repo, category_repo),
    )
