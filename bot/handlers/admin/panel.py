"""
Admin Panel Handler
Handles admin hub entry, exit and shop statistics
"""

from loguru import logger

from app.utils.exceptions import PermissionDeniedError
from app.utils.formatters import escape_md, format_amount
from bot.context import FlowContext
from bot.events import ChatEvent
from bot.keyboards.inline import admin_hub_keyboard, back_to_hub_keyboard


async def enter_admin_hub(
    ctx: FlowContext, user_id: str, notice: str | None = None
) -> None:
    """
    Clear the admin's session and show the hub.

    Admin flows call this directly when they finish.

    Args:
        ctx: Flow context
        user_id: Admin user ID
        notice: Optional result line shown above the hub
    """
    ctx.clear_state(user_id)
    text = "👑 *Admin Panel*\n\nChoose an action:"
    if notice:
        text = f"{notice}\n\n{text}"
    await ctx.messenger.send_text(user_id, text, admin_hub_keyboard())


async def admin_command(ctx: FlowContext, event: ChatEvent) -> None:
    """
    /admin

    Raises:
        PermissionDeniedError: caller is not the admin
    """
    if not ctx.is_admin(event.user_id):
        logger.warning(f"/admin attempt by non-admin {event.user_id}")
        raise PermissionDeniedError("Admin only")
    await enter_admin_hub(ctx, event.user_id)


async def on_hub(ctx: FlowContext, event: ChatEvent, _: str) -> None:
    await enter_admin_hub(ctx, event.user_id)


async def on_exit(ctx: FlowContext, event: ChatEvent, _: str) -> None:
    ctx.clear_state(event.user_id)
    await ctx.show_main_menu(event)


async def on_stats(ctx: FlowContext, event: ChatEvent, _: str) -> None:
    stats = await ctx.services.stats.collect()
    currency = ctx.config.currency

    stock_lines = [
        f"  • {escape_md(category_id)}: {count}"
        for category_id, count in sorted(stats.stock_by_category.items())
    ] or ["  • no categories"]

    text = (
        f"📊 *Shop Statistics*\n\n"
        f"👥 Users: {stats.users_total} (blocked {stats.users_blocked})\n\n"
        f"📦 Orders\n"
        f"  ⏳ Pending: {stats.orders_pending}\n"
        f"  ✅ Successful: {stats.orders_successful}\n"
        f"  ❌ Declined: {stats.orders_declined}\n\n"
        f"💰 Revenue: {format_amount(stats.revenue, currency)}\n"
        f"🎟 Codes delivered: {stats.codes_delivered}\n\n"
        f"🗃 Stock ({stats.stock_total} total)\n" + "\n".join(stock_lines)
    )
    await ctx.reply(event, text, back_to_hub_keyboard())
