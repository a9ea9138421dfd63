"""
Record enums.

Centralized enums used across row-store records.
"""

from enum import StrEnum


class UserStatus(StrEnum):
    """User status values."""

    ACTIVE = "Active"
    BLOCKED = "Blocked"


class VerifiedFlag(StrEnum):
    """User verification flag values."""

    YES = "Yes"
    NO = "No"


class OrderStatus(StrEnum):
    """Order status values."""

    PENDING = "Pending"
    SUCCESSFUL = "Successful"
    DECLINED = "Declined"


class PriceTier(StrEnum):
    """Quantity breakpoints with their own unit price column."""

    TIER_1 = "Price1"
    TIER_5 = "Price5"
    TIER_10 = "Price10"
    TIER_20_PLUS = "Price20Plus"

    @property
    def threshold(self) -> int:
        """Minimum quantity at which this tier applies."""
        return _TIER_THRESHOLDS[self]

    @property
    def label(self) -> str:
        """Short human label."""
        if self is PriceTier.TIER_20_PLUS:
            return "20+"
        return str(self.threshold)


_TIER_THRESHOLDS = {
    PriceTier.TIER_1: 1,
    PriceTier.TIER_5: 5,
    PriceTier.TIER_10: 10,
    PriceTier.TIER_20_PLUS: 20,
}


class Table(StrEnum):
    """Logical row-store tables."""

    USERS = "Users"
    CATEGORIES = "Categories"
    ORDERS = "Orders"
    LOGS = "Logs"


class LogAction(StrEnum):
    """Audit log action names."""

    USER_VERIFIED = "user_verified"
    USER_BLOCKED = "user_blocked"
    USER_UNBLOCKED = "user_unblocked"
    ORDER_SUBMITTED = "order_submitted"
    ORDER_APPROVED = "order_approved"
    ORDER_DECLINED = "order_declined"
    ORDER_INCONSISTENT = "order_inconsistent"
    CATEGORY_ADDED = "category_added"
    CATEGORY_DELETED = "category_deleted"
    PRICE_SET = "price_set"
    STOCK_ADDED = "stock_added"
    CODE_REMOVED = "code_removed"
    BROADCAST = "broadcast"
    ADMIN_DM = "admin_dm"
