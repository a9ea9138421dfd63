"""
Verification handler.

/start -> channel join check -> arithmetic CAPTCHA -> verified user.
"""

import re
import secrets

from loguru import logger

from app.models.enums import LogAction
from bot.context import FlowContext
from bot.events import ChatEvent
from bot.keyboards.inline import join_channel_keyboard
from bot.states.session_states import AwaitingCaptcha, AwaitingVerification

CAPTCHA_ANSWER_PATTERN = re.compile(r"-?[0-9]{1,6}")

BLOCKED_TEXT = (
    "🚫 *Access Denied*\n\nYour account has been blocked. "
    "Use 🆘 Support to contact the admin."
)


def captcha_operands() -> tuple[int, int]:
    """Two operands in 1..10."""
    return secrets.randbelow(10) + 1, secrets.randbelow(10) + 1


async def start(ctx: FlowContext, event: ChatEvent) -> None:
    """Handle /start for an idle user."""
    user = await ctx.services.users.get_user(event.user_id)

    if user is not None and user.is_blocked:
        ctx.clear_state(event.user_id)
        await ctx.reply(event, BLOCKED_TEXT)
        return

    if user is not None and user.can_shop:
        ctx.clear_state(event.user_id)
        await ctx.show_main_menu(event, "👋 *Welcome back!*")
        return

    ctx.set_state(event.user_id, AwaitingVerification())
    await send_join_prompt(ctx, event)


async def send_join_prompt(ctx: FlowContext, event: ChatEvent) -> None:
    await ctx.reply(
        event,
        "👋 *Welcome to Voucher Hub!*\n\n"
        "To continue, join our channels and then tap *Verify*.",
        join_channel_keyboard(
            ctx.config.required_channel_url, ctx.config.orders_channel_url
        ),
    )


async def handle_awaiting_verification(
    ctx: FlowContext, event: ChatEvent, state: AwaitingVerification
) -> None:
    """Any message before the join check repeats the prompt."""
    await send_join_prompt(ctx, event)


async def on_check_join(ctx: FlowContext, event: ChatEvent, _: str) -> None:
    """
    Verify button press.

    Raises:
        StoreError: membership lookup failed
    """
    user = await ctx.services.users.get_user(event.user_id)
    if user is not None and user.can_shop:
        ctx.clear_state(event.user_id)
        await ctx.show_main_menu(event, "✅ You are already verified.")
        return
    if user is not None and user.is_blocked:
        await ctx.reply(event, "🚫 *Access Denied*")
        return

    status = await ctx.messenger.get_membership(
        ctx.config.required_channel, event.user_id
    )
    if not status.is_joined:
        logger.info(f"Join check failed for {event.user_id}: {status}")
        await ctx.reply(
            event,
            "❌ *Verification failed.*\n\n"
            "Please join the channel first, then tap *Verify* again.",
        )
        return

    await issue_captcha(ctx, event)


async def issue_captcha(
    ctx: FlowContext, event: ChatEvent, prefix: str = ""
) -> None:
    a, b = captcha_operands()
    ctx.set_state(event.user_id, AwaitingCaptcha(expected_answer=a + b))
    await ctx.reply(event, f"{prefix}🤖 *Human check*\n\nWhat is {a} + {b}?")


async def handle_captcha(
    ctx: FlowContext, event: ChatEvent, state: AwaitingCaptcha
) -> None:
    """Check the answer; a wrong or non-numeric answer gets fresh operands."""
    answer = event.stripped_text
    if (
        not CAPTCHA_ANSWER_PATTERN.fullmatch(answer)
        or int(answer) != state.expected_answer
    ):
        await issue_captcha(ctx, event, prefix="❌ Wrong answer. Try again.\n\n")
        return

    user = await ctx.services.users.get_user(event.user_id)
    if user is not None and user.is_blocked:
        ctx.clear_state(event.user_id)
        await ctx.reply(event, BLOCKED_TEXT)
        return

    await ctx.services.users.mark_verified(event.user_id, event.display_name)
    ctx.clear_state(event.user_id)
    await ctx.services.admin_log.log_action(
        event.user_id, LogAction.USER_VERIFIED, event.display_name
    )
    await ctx.show_main_menu(event, "✅ *Verification successful!*")
