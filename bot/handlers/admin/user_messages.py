"""
Admin direct messages.

The DM flow from the hub and the one-line ``/msg <UserID> <text>`` command.
"""

from loguru import logger

from app.models.enums import LogAction
from app.utils.exceptions import ValidationError
from bot.context import FlowContext
from bot.events import ChatEvent
from bot.handlers.admin.panel import enter_admin_hub
from bot.states.session_states import AdminAwaitingDmTarget, AdminAwaitingDmText
from bot.utils.text_utils import parse_user_id


async def send_admin_message(
    ctx: FlowContext, admin_id: str, target_id: str, text: str
) -> bool:
    """
    Deliver an admin message to a user and audit it.

    Returns:
        True if delivered
    """
    delivered = await ctx.services.notifications.notify(
        target_id, f"📩 *Message from Admin*\n\n{text}"
    )
    if delivered:
        await ctx.services.admin_log.log_action(
            admin_id, LogAction.ADMIN_DM, f"to={target_id}"
        )
    else:
        logger.warning(f"Admin message to {target_id} not delivered")
    return delivered


async def msg_command(ctx: FlowContext, event: ChatEvent) -> None:
    """``/msg <UserID> <text>``; leaves any active session untouched."""
    parts = event.stripped_text.split(maxsplit=2)
    if len(parts) < 3:
        await ctx.reply(event, "Usage: `/msg <UserID> <text>`")
        return

    try:
        target_id = parse_user_id(parts[1])
    except ValidationError:
        await ctx.reply(event, "❌ Invalid User ID. Usage: `/msg <UserID> <text>`")
        return

    if await send_admin_message(ctx, event.user_id, target_id, parts[2]):
        await ctx.reply(event, f"✅ Message sent to `{target_id}`.")
    else:
        await ctx.reply(
            event, f"❌ Could not message `{target_id}`. They may have blocked the bot."
        )


async def on_dm(ctx: FlowContext, event: ChatEvent, _: str) -> None:
    ctx.set_state(event.user_id, AdminAwaitingDmTarget())
    await ctx.reply(event, "✉️ Send the User ID to message:")


async def handle_dm_target(
    ctx: FlowContext, event: ChatEvent, state: AdminAwaitingDmTarget
) -> None:
    try:
        target_id = parse_user_id(event.stripped_text)
    except ValidationError:
        await ctx.reply(event, "❌ Invalid User ID. Send a numeric ID:")
        return

    ctx.set_state(event.user_id, AdminAwaitingDmText(target_id))
    await ctx.reply(event, f"✉️ Send the message for `{target_id}`:")


async def handle_dm_text(
    ctx: FlowContext, event: ChatEvent, state: AdminAwaitingDmText
) -> None:
    text = event.stripped_text
    if not text:
        await ctx.reply(event, "✏️ Send the message as text:")
        return

    if await send_admin_message(ctx, event.user_id, state.target_id, text):
        notice = f"✅ Message sent to `{state.target_id}`."
    else:
        notice = f"❌ Could not message `{state.target_id}`."
    await enter_admin_hub(ctx, event.user_id, notice)
