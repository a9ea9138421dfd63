"""
Order workflow.

Lifecycle of one purchase:

    (none) --submit--> Pending --approve--> Successful
                          +------decline--> Declined

Stock is only committed at approval; Pending orders hold no codes.
Decisions are serialized per order so a double-tapped Approve button can
never deliver twice.
"""

import re
import secrets
import string
from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum

from loguru import logger

from app.models.enums import LogAction
from app.models.order import Order
from app.repositories.order_repository import OrderRepository
from app.services.admin_log_service import AdminLogService, utc_timestamp
from app.services.inventory_allocator import InventoryAllocator
from app.services.messenger import Button
from app.services.notification_service import NotificationService
from app.utils.distributed_lock import KeyedLock
from app.utils.exceptions import (
    InsufficientStockError,
    InventoryInconsistencyError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from app.utils.formatters import escape_md, format_amount
from app.utils.money import format_money

ORDER_ID_ALPHABET = string.ascii_uppercase + string.digits
UTR_PATTERN = re.compile(r"^[0-9]{12}$")

APPROVE_CALLBACK = "adm:approve:"
DECLINE_CALLBACK = "adm:decline:"


def generate_order_id() -> str:
    """
    Generate order ID like ``SVH-7K2P9QX-M4T8ZB``.

    13 random characters over [A-Z0-9] (~67 bits).
    """
    head = "".join(secrets.choice(ORDER_ID_ALPHABET) for _ in range(7))
    tail = "".join(secrets.choice(ORDER_ID_ALPHABET) for _ in range(6))
    return f"SVH-{head}-{tail}"


def validate_utr(raw: str) -> str:
    """
    Validate a UPI transaction reference.

    Raises:
        ValidationError: not exactly 12 digits
    """
    utr = raw.strip()
    if not UTR_PATTERN.match(utr):
        raise ValidationError("UTR must be exactly 12 digits")
    return utr


def order_lock_key(order_id: str) -> str:
    return f"order:{order_id}"


class ApprovalOutcome(StrEnum):
    DELIVERED = "delivered"
    ALREADY_PROCESSED = "already_processed"
    INSUFFICIENT_STOCK = "insufficient_stock"
    ORDER_NOT_FOUND = "order_not_found"


class DeclineOutcome(StrEnum):
    DECLINED = "declined"
    ALREADY_PROCESSED = "already_processed"
    ORDER_NOT_FOUND = "order_not_found"


class RecoveryOutcome(StrEnum):
    DELIVERED = "delivered"
    NOT_OWNER = "not_owner"
    NOT_READY = "not_ready"
    ORDER_NOT_FOUND = "order_not_found"


@dataclass(frozen=True)
class ApprovalResult:
    outcome: ApprovalOutcome
    order: Order | None = None
    available: int | None = None


@dataclass(frozen=True)
class DeclineResult:
    outcome: DeclineOutcome
    order: Order | None = None


@dataclass(frozen=True)
class RecoveryResult:
    outcome: RecoveryOutcome
    order: Order | None = None

    @property
    def codes(self) -> tuple[str, ...]:
        if self.outcome is RecoveryOutcome.DELIVERED and self.order:
            return self.order.delivered_codes
        return ()


class OrderWorkflow:
    """Order state machine from submission to admin decision."""

    def __init__(
        self,
        order_repo: OrderRepository,
        allocator: InventoryAllocator,
        notifications: NotificationService,
        admin_log: AdminLogService,
        lock: KeyedLock,
        orders_channel_id: str | None = None,
        currency: str = "₹",
    ) -> None:
        """
        Initialize order workflow.

        Args:
            order_repo: Order repository
            allocator: Inventory allocator
            notifications: Outbound notifications
            admin_log: Audit log
            lock: Keyed lock for per-order decisions
            orders_channel_id: Public channel for delivered-order posts
            currency: Currency symbol for messages
        """
        self.order_repo = order_repo
        self.allocator = allocator
        self.notifications = notifications
        self.admin_log = admin_log
        self.lock = lock
        self.orders_channel_id = orders_channel_id
        self.currency = currency

    def _money(self, amount: Decimal) -> str:
        return format_amount(amount, self.currency)

    async def submit(
        self,
        user_id: str,
        user_name: str,
        category_id: str,
        quantity: int,
        total_amount: Decimal,
        utr: str,
        proof_ref: str,
    ) -> Order:
        """
        Persist a Pending order and hand it to the admin.

        Args:
            user_id: Buyer ID
            user_name: Buyer display name
            category_id: Category ID
            quantity: Number of codes
            total_amount: Amount quoted to the buyer
            utr: 12-digit payment reference
            proof_ref: Payment screenshot reference

        Returns:
            Created order

        Raises:
            ValidationError: bad UTR or quantity
            StoreError: order could not be written
        """
        utr = validate_utr(utr)
        if quantity <= 0:
            raise ValidationError("Quantity must be positive")

        order = Order(
            order_id=generate_order_id(),
            user_id=user_id,
            user_name=user_name,
            category_id=category_id,
            quantity=quantity,
            total_amount=total_amount,
            utr=utr,
            created_at=utc_timestamp(),
        )
        await self.order_repo.create(order)
        logger.info(f"Order submitted: {order.order_id} by {user_id}")

        caption = (
            f"🎯 *New Order Submitted*\n"
            f"ID: `{order.order_id}`\n"
            f"User: {escape_md(user_name)} (`{user_id}`)\n"
            f"Category: {escape_md(category_id)}\n"
            f"Quantity: {quantity}\n"
            f"Total: {self._money(total_amount)}\n"
            f"UTR: `{utr}`"
        )
        buttons = [
            [Button("✅ Approve", data=f"{APPROVE_CALLBACK}{order.order_id}")],
            [Button("❌ Decline", data=f"{DECLINE_CALLBACK}{order.order_id}")],
        ]
        if not await self.notifications.notify_photo(
            self.notifications.admin_id, proof_ref, caption, buttons
        ):
            await self.notifications.notify_admin(caption, buttons)

        await self.admin_log.log_action(
            user_id,
            LogAction.ORDER_SUBMITTED,
            f"{order.order_id} {category_id} x{quantity} {format_money(total_amount)}",
        )
        return order

    async def approve(self, order_id: str) -> ApprovalResult:
        """
        Deliver codes for a Pending order.

        Raises:
            InventoryInconsistencyError: codes left the pool but the order
                row was not updated
            StoreError: pool write failed (nothing delivered)
        """
        async with self.lock.lock(order_lock_key(order_id)):
            order = await self.order_repo.get(order_id)
            if order is None:
                return ApprovalResult(ApprovalOutcome.ORDER_NOT_FOUND)
            if not order.is_pending:
                logger.info(f"Approve ignored, {order_id} is {order.status}")
                return ApprovalResult(ApprovalOutcome.ALREADY_PROCESSED, order)

            try:
                reserved = await self.allocator.reserve(
                    order.category_id, order.quantity
                )
            except InsufficientStockError as e:
                return ApprovalResult(
                    ApprovalOutcome.INSUFFICIENT_STOCK, order, e.available
                )
            except NotFoundError:
                return ApprovalResult(ApprovalOutcome.INSUFFICIENT_STOCK, order, 0)

            delivered = order.delivered(reserved.codes)
            try:
                saved = await self.order_repo.save_decision(delivered)
            except StoreError as e:
                await self._flag_inconsistent(delivered)
                raise InventoryInconsistencyError(
                    order_id, order.category_id, reserved.codes
                ) from e
            if not saved:
                await self._flag_inconsistent(delivered)
                raise InventoryInconsistencyError(
                    order_id, order.category_id, reserved.codes
                )

        logger.info(f"Order approved: {order_id} ({order.quantity} codes)")
        await self._announce_delivery(delivered)
        return ApprovalResult(ApprovalOutcome.DELIVERED, delivered)

    async def _flag_inconsistent(self, order: Order) -> None:
        codes = "\n".join(order.delivered_codes)
        logger.critical(
            f"Inventory inconsistency: {order.order_id} took "
            f"{order.quantity} codes from {order.category_id} but is not "
            f"marked Successful. Codes:\n{codes}"
        )
        await self.admin_log.log_action(
            order.user_id,
            LogAction.ORDER_INCONSISTENT,
            f"{order.order_id} {order.category_id} codes={codes!r}",
        )
        await self.notifications.notify_admin(
            f"🚨 *Manual reconciliation required*\n"
            f"Order `{order.order_id}`: {order.quantity} codes were removed "
            f"from {order.category_id} but the order was not updated.\n\n"
            f"Codes:\n`{codes}`"
        )

    async def _announce_delivery(self, order: Order) -> None:
        codes = "\n".join(order.delivered_codes)
        await self.notifications.notify(
            order.user_id,
            f"✅ *Order Approved!*\n"
            f"Order ID: `{order.order_id}` is complete.\n\n"
            f"🎟 *Your Voucher Codes:*\n`{codes}`\n\n"
            f"_(Tap code to copy)_",
        )
        await self.admin_log.log_action(
            order.user_id,
            LogAction.ORDER_APPROVED,
            f"{order.order_id} {order.category_id} x{order.quantity}",
        )
        if self.orders_channel_id:
            await self.notifications.notify(
                self.orders_channel_id,
                f"🎯 *New Order Delivered*\n"
                f"━━━━━━━━━━━━━━━━━━━━\n"
                f"👤 User: {escape_md(order.user_name)}\n"
                f"🆔 User ID: `{order.user_id}`\n"
                f"📡 Status: ✅ Success\n"
                f"📦 Quantity: {order.quantity}\n"
                f"💳 Cost: {self._money(order.total_amount)}\n"
                f"━━━━━━━━━━━━━━━━━━━━",
            )

    async def decline(self, order_id: str) -> DeclineResult:
        """Decline a Pending order; inventory is untouched."""
        async with self.lock.lock(order_lock_key(order_id)):
            order = await self.order_repo.get(order_id)
            if order is None:
                return DeclineResult(DeclineOutcome.ORDER_NOT_FOUND)
            if not order.is_pending:
                logger.info(f"Decline ignored, {order_id} is {order.status}")
                return DeclineResult(DeclineOutcome.ALREADY_PROCESSED, order)

            declined = order.declined()
            if not await self.order_repo.save_decision(declined):
                return DeclineResult(DeclineOutcome.ORDER_NOT_FOUND)

        logger.info(f"Order declined: {order_id}")
        await self.notifications.notify(
            order.user_id,
            f"❌ *Your Order Has Been Declined*\n"
            f"Order ID: `{order_id}`\n\n"
            f"There was an issue with your payment proof or transaction ID. "
            f"Please contact support for assistance.",
        )
        await self.admin_log.log_action(
            order.user_id, LogAction.ORDER_DECLINED, order_id
        )
        return DeclineResult(DeclineOutcome.DECLINED, declined)

    async def recover(self, order_id: str, requesting_user_id: str) -> RecoveryResult:
        """
        Look up delivered codes for the order's owner.

        The ownership check runs before any status information is returned.
        """
        order = await self.order_repo.get(order_id.strip())
        if order is None:
            return RecoveryResult(RecoveryOutcome.ORDER_NOT_FOUND)
        if order.user_id != requesting_user_id:
            logger.warning(
                f"Recovery of {order_id} by non-owner {requesting_user_id}"
            )
            return RecoveryResult(RecoveryOutcome.NOT_OWNER)
        if not order.is_successful:
            return RecoveryResult(RecoveryOutcome.NOT_READY, order)
        return RecoveryResult(RecoveryOutcome.DELIVERED, order)

    async def list_user_orders(self, user_id: str) -> list[Order]:
        return await self.order_repo.get_by_user(user_id)
