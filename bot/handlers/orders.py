"""
Order history and voucher recovery.
"""

from loguru import logger

from app.services.order_workflow import RecoveryOutcome
from app.utils.formatters import escape_md, format_amount, status_emoji
from bot.context import FlowContext
from bot.events import ChatEvent
from bot.states.session_states import AwaitingRecoveryOrderId

HISTORY_LIMIT = 10


async def my_orders(ctx: FlowContext, event: ChatEvent) -> None:
    """My Orders menu button: latest orders first."""
    if await ctx.require_shopper(event) is None:
        return

    orders = await ctx.services.orders.list_user_orders(event.user_id)
    if not orders:
        await ctx.reply(event, "📦 You have no orders yet.")
        return

    lines = ["📦 *Your Orders*\n"]
    for order in reversed(orders[-HISTORY_LIMIT:]):
        lines.append(
            f"{status_emoji(order.status)} `{order.order_id}`\n"
            f"   {escape_md(order.category_id)} x{order.quantity} - "
            f"{format_amount(order.total_amount, ctx.config.currency)} "
            f"({order.status})"
        )
    if len(orders) > HISTORY_LIMIT:
        lines.append(f"\n_Showing the latest {HISTORY_LIMIT} of {len(orders)}._")
    await ctx.reply(event, "\n".join(lines))


async def open_recovery(ctx: FlowContext, event: ChatEvent) -> None:
    """Recover Vouchers menu button."""
    if await ctx.require_shopper(event) is None:
        return

    ctx.set_state(event.user_id, AwaitingRecoveryOrderId())
    await ctx.reply(
        event,
        "🔄 *Recover Vouchers*\n\n"
        "Send your Order ID (e.g. `SVH-XXXXXXX-XXXXXX`).\n"
        "Send /cancel to go back.",
    )


async def handle_recovery_order_id(
    ctx: FlowContext, event: ChatEvent, state: AwaitingRecoveryOrderId
) -> None:
    order_id = event.stripped_text.upper()
    if not order_id:
        await ctx.reply(event, "✏️ Please send the Order ID as text.")
        return

    result = await ctx.services.orders.recover(order_id, event.user_id)
    ctx.clear_state(event.user_id)

    if result.outcome is RecoveryOutcome.DELIVERED:
        codes = "\n".join(result.codes)
        logger.info(f"Codes recovered for {order_id} by {event.user_id}")
        await ctx.show_main_menu(
            event,
            f"✅ *Order* `{order_id}`\n\n"
            f"🎟 *Your Voucher Codes:*\n`{codes}`",
        )
    elif result.outcome is RecoveryOutcome.NOT_READY:
        await ctx.show_main_menu(
            event,
            f"⏳ Order `{order_id}` is {result.order.status}. "
            f"Codes are only available for successful orders.",
        )
    else:
        # Same reply for missing and foreign orders
        await ctx.show_main_menu(
            event, "❌ Order not found. Check the Order ID and try again."
        )
