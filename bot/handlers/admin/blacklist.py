"""
Admin Blacklist Handler
Block or unblock a user by ID
"""

from app.models.enums import LogAction
from app.utils.exceptions import ValidationError
from bot.context import FlowContext
from bot.events import ChatEvent
from bot.handlers.admin.panel import enter_admin_hub
from bot.states.session_states import AdminAwaitingBlockTarget
from bot.utils.text_utils import parse_user_id


async def on_block(ctx: FlowContext, event: ChatEvent, _: str) -> None:
    ctx.set_state(event.user_id, AdminAwaitingBlockTarget())
    await ctx.reply(
        event,
        "🚫 Send the User ID to block. Sending a blocked user's ID unblocks them.",
    )


async def handle_block_target(
    ctx: FlowContext, event: ChatEvent, state: AdminAwaitingBlockTarget
) -> None:
    try:
        target_id = parse_user_id(event.stripped_text)
    except ValidationError:
        await ctx.reply(event, "❌ Invalid User ID. Send a numeric ID:")
        return

    if ctx.is_admin(target_id):
        await ctx.reply(event, "⚠️ You cannot block yourself. Send another ID:")
        return

    user = await ctx.services.users.toggle_block(target_id)
    action = LogAction.USER_BLOCKED if user.is_blocked else LogAction.USER_UNBLOCKED
    await ctx.services.admin_log.log_action(event.user_id, action, target_id)
    verb = "blocked" if user.is_blocked else "unblocked"
    await enter_admin_hub(ctx, event.user_id, f"✅ User `{target_id}` {verb}.")
