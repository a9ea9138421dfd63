"""
Session state machine.

Routes every ChatEvent to exactly one handler:

1. global interrupts (/cancel, admin /msg)
2. button presses, by callback data
3. the handler of the user's active session state
4. idle commands and main-menu buttons, else the fallback reply

Handler failures are isolated here; a failing handler never leaves the
user without a reply.
"""

from collections.abc import Awaitable, Callable

from loguru import logger

from app.utils.exceptions import (
    InsufficientStockError,
    InventoryInconsistencyError,
    NotFoundError,
    NotPricedError,
    PermissionDeniedError,
    StoreError,
    ValidationError,
)
from app.utils.formatters import escape_md
from bot.context import FlowContext
from bot.events import ChatEvent
from bot.handlers import buy, menu, orders, support, verification
from bot.handlers.admin import (
    blacklist,
    broadcast,
    catalog,
    panel,
    user_messages,
)
from bot.handlers.admin import orders as admin_orders
from bot.states import session_states as s
from bot.utils import constants as c

EventHandler = Callable[[FlowContext, ChatEvent], Awaitable[None]]
CallbackHandler = Callable[[FlowContext, ChatEvent, str], Awaitable[None]]
StateHandler = Callable[[FlowContext, ChatEvent, object], Awaitable[None]]

# Exact callback data
CALLBACKS: dict[str, CallbackHandler] = {
    c.CB_CHECK_JOIN: verification.on_check_join,
    c.CB_BACK_TO_CATEGORIES: buy.on_back_to_categories,
    c.CB_SUBMIT_PROOF: buy.on_submit_proof,
    c.CB_ADMIN_HUB: panel.on_hub,
    c.CB_ADMIN_EXIT: panel.on_exit,
    c.CB_ADMIN_STATS: panel.on_stats,
    c.CB_ADMIN_ADD_CATEGORY: catalog.on_add_category,
    c.CB_ADMIN_DELETE_MENU: catalog.on_delete_menu,
    c.CB_ADMIN_STOCK_MENU: catalog.on_stock_menu,
    c.CB_ADMIN_PRICES_MENU: catalog.on_prices_menu,
    c.CB_ADMIN_REMOVE_CODE: catalog.on_remove_code,
    c.CB_ADMIN_BROADCAST: broadcast.on_broadcast,
    c.CB_ADMIN_DM: user_messages.on_dm,
    c.CB_ADMIN_BLOCK: blacklist.on_block,
}

# Prefixed callback data; the remainder is passed to the handler.
# Longer prefixes first where one prefix extends another.
CALLBACK_PREFIXES: tuple[tuple[str, CallbackHandler], ...] = (
    (c.CB_CATEGORY, buy.on_category),
    (c.CB_CUSTOM_QUANTITY, buy.on_custom_quantity),
    (c.CB_QUANTITY, buy.on_quantity),
    (c.CB_APPROVE, admin_orders.on_approve),
    (c.CB_DECLINE, admin_orders.on_decline),
    (c.CB_ADMIN_DELETE_CATEGORY, catalog.on_delete_category),
    (c.CB_ADMIN_STOCK, catalog.on_stock_category),
    (c.CB_ADMIN_PRICES, catalog.on_prices_category),
    (c.CB_ADMIN_TIER, catalog.on_tier),
)

STATE_HANDLERS: dict[type, StateHandler] = {
    s.AwaitingVerification: verification.handle_awaiting_verification,
    s.AwaitingCaptcha: verification.handle_captcha,
    s.AwaitingCategorySelection: buy.handle_category_selection,
    s.AwaitingQuantitySelection: buy.handle_quantity_selection,
    s.AwaitingCustomQuantity: buy.handle_custom_quantity,
    s.AwaitingPaymentProof: buy.handle_payment_proof,
    s.AwaitingScreenshot: buy.handle_screenshot,
    s.AwaitingUtr: buy.handle_utr,
    s.AwaitingRecoveryOrderId: orders.handle_recovery_order_id,
    s.InSupportMode: support.handle_support,
    s.AdminAwaitingCategoryValue: catalog.handle_category_value,
    s.AdminAwaitingCategoryPrice: catalog.handle_category_price,
    s.AdminAwaitingTierPrice: catalog.handle_tier_price,
    s.AdminAwaitingStockCodes: catalog.handle_stock_codes,
    s.AdminAwaitingCodeToRemove: catalog.handle_code_to_remove,
    s.AdminAwaitingBroadcastText: broadcast.handle_broadcast_text,
    s.AdminAwaitingDmTarget: user_messages.handle_dm_target,
    s.AdminAwaitingDmText: user_messages.handle_dm_text,
    s.AdminAwaitingBlockTarget: blacklist.handle_block_target,
}

IDLE_COMMANDS: dict[str, EventHandler] = {
    c.CMD_START: verification.start,
    c.CMD_ADMIN: panel.admin_command,
}

MENU_ACTIONS: dict[str, EventHandler] = {
    c.MENU_BUY: buy.open_catalog,
    c.MENU_ORDERS: orders.my_orders,
    c.MENU_RECOVER: orders.open_recovery,
    c.MENU_SUPPORT: support.open_support,
    c.MENU_DISCLAIMER: menu.disclaimer,
}

RETRY_TEXT = "⚠️ Something went wrong on our side. Please try again in a moment."


class SessionStateMachine:
    """Entry point for every incoming chat event."""

    def __init__(self, ctx: FlowContext) -> None:
        self.ctx = ctx

    async def dispatch(self, event: ChatEvent) -> None:
        """Handle one event; never raises domain errors."""
        if event.interaction_id:
            try:
                await self.ctx.messenger.answer_interaction(event.interaction_id)
            except StoreError as e:
                logger.warning(f"Could not answer interaction: {e}")

        try:
            await self._route(event)
        except ValidationError as e:
            await self._safe_reply(event, f"❌ {e}")
        except NotFoundError as e:
            logger.info(f"Not found for {event.user_id}: {e}")
            self.ctx.clear_state(event.user_id)
            await self._safe_reply(event, "❌ Not found. It may have been removed.")
        except InsufficientStockError as e:
            self.ctx.set_state(
                event.user_id, s.AwaitingQuantitySelection(e.category_id)
            )
            await self._safe_reply(
                event,
                f"❌ Only {e.available} code(s) left. "
                f"Choose a smaller quantity.",
            )
        except NotPricedError as e:
            logger.warning(str(e))
            self.ctx.clear_state(event.user_id)
            await self._safe_reply(
                event, "❌ This voucher has no price yet. Please try later."
            )
        except PermissionDeniedError:
            await self._safe_reply(event, "🚫 Access Denied.")
        except InventoryInconsistencyError as e:
            # Admin already alerted by the workflow
            logger.critical(f"Inventory inconsistency: {e}")
            await self._safe_reply(
                event,
                f"🚨 Order `{e.order_id}` needs manual reconciliation. "
                f"Check the alert above.",
            )
        except StoreError as e:
            logger.error(f"Store error handling event from {event.user_id}: {e}")
            if not self.ctx.is_admin(event.user_id):
                await self.ctx.services.notifications.notify_admin(
                    f"⚠️ Error for user `{event.user_id}`: {escape_md(str(e))}"
                )
            await self._safe_reply(event, RETRY_TEXT)

    async def _safe_reply(self, event: ChatEvent, text: str) -> None:
        try:
            await self.ctx.reply(event, text)
        except StoreError as e:
            logger.error(f"Could not reply to {event.user_id}: {e}")

    async def _route(self, event: ChatEvent) -> None:
        ctx = self.ctx
        user_id = event.user_id
        command = event.command

        # 1. Global interrupts
        if command == c.CMD_CANCEL:
            await menu.cancel(ctx, event)
            return
        if command == c.CMD_MSG and ctx.is_admin(user_id):
            await user_messages.msg_command(ctx, event)
            return

        # 2. Button presses
        if event.is_callback:
            await self._route_callback(event)
            return

        # 3. Active session
        state = ctx.get_state(user_id)
        if state is not None:
            if s.is_admin_state(state) and not ctx.is_admin(user_id):
                logger.warning(f"Discarding admin state for non-admin {user_id}")
                ctx.clear_state(user_id)
            else:
                await STATE_HANDLERS[type(state)](ctx, event, state)
                return

        # 4. Idle
        handler = IDLE_COMMANDS.get(command) if command else None
        if handler is None:
            handler = MENU_ACTIONS.get(event.stripped_text, menu.fallback)
        await handler(ctx, event)

    async def _route_callback(self, event: ChatEvent) -> None:
        data = event.callback_data or ""
        if data.startswith(c.CB_ADMIN_PREFIX) and not self.ctx.is_admin(
            event.user_id
        ):
            logger.warning(f"Admin callback {data!r} from {event.user_id}")
            raise PermissionDeniedError("Admin only")

        handler = CALLBACKS.get(data)
        if handler is not None:
            await handler(self.ctx, event, "")
            return

        for prefix, prefixed_handler in CALLBACK_PREFIXES:
            if data.startswith(prefix):
                await prefixed_handler(self.ctx, event, data[len(prefix):])
                return

        logger.debug(f"Unknown callback data {data!r} from {event.user_id}")
        await self.ctx.reply(event, "⌛ This button is no longer active.")

    async def enter_admin_hub(self, user_id: str) -> None:
        await panel.enter_admin_hub(self.ctx, user_id)

