"""
Admin Broadcast Handler
Collects the announcement text and starts a background broadcast
"""

from bot.context import FlowContext
from bot.events import ChatEvent
from bot.handlers.admin.panel import enter_admin_hub
from bot.states.session_states import AdminAwaitingBroadcastText


async def on_broadcast(ctx: FlowContext, event: ChatEvent, _: str) -> None:
    ctx.set_state(event.user_id, AdminAwaitingBroadcastText())
    await ctx.reply(
        event,
        "📢 *Broadcast*\n\n"
        "Send the announcement text. It goes to every non-blocked user.\n"
        "Send /cancel to abort.",
    )


async def handle_broadcast_text(
    ctx: FlowContext, event: ChatEvent, state: AdminAwaitingBroadcastText
) -> None:
    text = event.stripped_text
    if not text:
        await ctx.reply(event, "✏️ Broadcasts are text only. Send the text:")
        return

    broadcast_id = ctx.services.broadcasts.start_broadcast(event.user_id, text)
    await enter_admin_hub(
        ctx,
        event.user_id,
        f"🚀 Broadcast `{broadcast_id}` started. "
        f"You will get a report when it finishes.",
    )
