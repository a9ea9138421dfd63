"""
User Support Handler

Support mode relays every text or photo to the admin until /cancel.
"""

from app.utils.formatters import escape_md
from bot.context import FlowContext
from bot.events import ChatEvent
from bot.keyboards.reply import support_keyboard
from bot.states.session_states import InSupportMode


async def open_support(ctx: FlowContext, event: ChatEvent) -> None:
    """
    Support menu button.

    Open to blocked users too, so they can reach the admin.
    """
    ctx.set_state(event.user_id, InSupportMode())
    await ctx.reply(
        event,
        "🆘 *Support*\n\n"
        "Send your message or a screenshot and the admin will get back to you.\n"
        "Send /cancel to leave support mode.",
        support_keyboard(),
    )


async def handle_support(
    ctx: FlowContext, event: ChatEvent, state: InSupportMode
) -> None:
    """Forward to the admin; session stays in support mode."""
    header = (
        f"🆘 *Support message*\n"
        f"From: {escape_md(event.display_name)} (`{event.user_id}`)\n"
        f"Reply with: `/msg {event.user_id} <text>`"
    )
    notifications = ctx.services.notifications

    if event.photo_ref:
        caption = f"{header}\n\n{escape_md(event.caption)}" if event.caption else header
        delivered = await notifications.notify_photo(
            notifications.admin_id, event.photo_ref, caption
        )
    elif event.text:
        delivered = await notifications.notify_admin(
            f"{header}\n\n{escape_md(event.text)}"
        )
    else:
        await ctx.reply(event, "✏️ Only text messages and photos can be sent.")
        return

    if delivered:
        await ctx.reply(event, "✅ Sent to the admin. You can send more or /cancel.")
    else:
        await ctx.reply(event, "⚠️ Could not reach the admin. Please try again later.")
