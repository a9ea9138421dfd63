"""
Admin order decisions.

Approve/Decline buttons attached to each submitted order.
"""

from loguru import logger

from app.services.order_workflow import ApprovalOutcome, DeclineOutcome
from bot.context import FlowContext
from bot.events import ChatEvent


async def on_approve(ctx: FlowContext, event: ChatEvent, order_id: str) -> None:
    """
    Approve button.

    Raises:
        InventoryInconsistencyError: codes taken but order not updated
        StoreError: pool write failed
    """
    result = await ctx.services.orders.approve(order_id)
    logger.info(f"Admin {event.user_id} approve {order_id}: {result.outcome}")

    if result.outcome is ApprovalOutcome.DELIVERED:
        text = (
            f"✅ Order `{order_id}` approved. "
            f"{result.order.quantity} code(s) delivered."
        )
    elif result.outcome is ApprovalOutcome.ALREADY_PROCESSED:
        text = f"ℹ️ Order `{order_id}` is already {result.order.status}."
    elif result.outcome is ApprovalOutcome.INSUFFICIENT_STOCK:
        text = (
            f"❌ Not enough stock for `{order_id}`: needs "
            f"{result.order.quantity}, {result.available} available in "
            f"{result.order.category_id}.\n"
            f"The order stays Pending. Add stock and approve again."
        )
    else:
        text = f"❌ Order `{order_id}` not found."
    await ctx.reply(event, text)


async def on_decline(ctx: FlowContext, event: ChatEvent, order_id: str) -> None:
    result = await ctx.services.orders.decline(order_id)
    logger.info(f"Admin {event.user_id} decline {order_id}: {result.outcome}")

    if result.outcome is DeclineOutcome.DECLINED:
        text = f"❌ Order `{order_id}` declined."
    elif result.outcome is DeclineOutcome.ALREADY_PROCESSED:
        text = f"ℹ️ Order `{order_id}` is already {result.order.status}."
    else:
        text = f"❌ Order `{order_id}` not found."
    await ctx.reply(event, text)
