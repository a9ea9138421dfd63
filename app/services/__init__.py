"""
Services.

Business logic layer.
"""

from app.services.admin_log_service import AdminLogService
from app.services.broadcast_service import BroadcastService
from app.services.catalog_service import CatalogService
from app.services.container import ServiceContainer, build_services
from app.services.inventory_allocator import InventoryAllocator, ReservedCodes
from app.services.messenger import Button, MembershipStatus, Menu, Messenger
from app.services.notification_service import NotificationService
from app.services.order_workflow import (
    ApprovalOutcome,
    DeclineOutcome,
    OrderWorkflow,
    RecoveryOutcome,
)
from app.services.pricing_resolver import PricingResolver
from app.services.stats_service import StatsService
from app.services.user_service import UserService

__all__ = [
    "AdminLogService",
    "ApprovalOutcome",
    "BroadcastService",
    "Button",
    "CatalogService",
    "DeclineOutcome",
    "InventoryAllocator",
    "MembershipStatus",
    "Menu",
    "Messenger",
    "NotificationService",
    "OrderWorkflow",
    "PricingResolver",
    "RecoveryOutcome",
    "ReservedCodes",
    "ServiceContainer",
    "StatsService",
    "UserService",
    "build_services",
]
