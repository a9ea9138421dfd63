"""
Menu handler.

/cancel, the disclaimer and the fallback reply for idle users.
"""

from bot.context import FlowContext
from bot.events import ChatEvent
from bot.states.session_states import InSupportMode
from bot.utils.constants import DISCLAIMER_TEXT


async def cancel(ctx: FlowContext, event: ChatEvent) -> None:
    """Global /cancel: drop any session and show the main menu."""
    state = ctx.get_state(event.user_id)
    ctx.clear_state(event.user_id)

    if isinstance(state, InSupportMode):
        text = "👋 Exited support mode."
    elif state is not None:
        text = "❌ Cancelled."
    else:
        text = "🏠 *Main Menu*"
    await ctx.show_main_menu(event, text)


async def disclaimer(ctx: FlowContext, event: ChatEvent) -> None:
    await ctx.reply(event, DISCLAIMER_TEXT)


async def fallback(ctx: FlowContext, event: ChatEvent) -> None:
    await ctx.show_main_menu(
        event, "🤔 I didn't understand that. Please use the menu below."
    )
