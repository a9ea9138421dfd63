"""
Global Error Handler Middleware.

Catches exceptions that escape the session state machine (transport
failures, bugs) and notifies the admin.
Sends friendly message to users - never shows technical details.
"""

import traceback
from typing import Any, Awaitable, Callable

from aiogram import BaseMiddleware, Bot
from aiogram.exceptions import TelegramAPIError
from aiogram.types import CallbackQuery, Message, TelegramObject
from loguru import logger


class ErrorHandlerMiddleware(BaseMiddleware):
    """
    Global error handler middleware.

    - Logs all exceptions
    - Notifies the admin with technical details
    - Sends friendly message to user (no technical info!)
    """

    def __init__(self, admin_id: str) -> None:
        """
        Args:
            admin_id: Admin Telegram ID (canonical string)
        """
        self.admin_id = admin_id

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        """Execute middleware."""
        try:
            return await handler(event, data)
        except Exception as e:
            logger.exception(f"Unhandled exception: {e}")

            bot: Bot | None = data.get("bot")
            if bot is None:
                return None

            user = (
                event.from_user
                if isinstance(event, (Message, CallbackQuery))
                else None
            )

            if user is not None:
                try:
                    await bot.send_message(
                        chat_id=user.id,
                        text=(
                            "❌ A temporary error occurred.\n\n"
                            "The admin has been notified. Please try again later."
                        ),
                        parse_mode=None,
                    )
                except TelegramAPIError as user_notify_error:
                    logger.warning(f"Failed to notify user: {user_notify_error}")

            try:
                error_trace = traceback.format_exc()[-800:]
                user_info = "Unknown"
                if user is not None:
                    user_info = (
                        f"@{user.username}" if user.username else f"ID: {user.id}"
                    )

                text = (
                    f"🚨 CRITICAL ERROR\n\n"
                    f"👤 User: {user_info}\n"
                    f"❌ Exception: {type(e).__name__}\n"
                    f"📝 Message: {str(e)[:200]}\n\n"
                    f"{error_trace}"
                )
                await bot.send_message(
                    chat_id=int(self.admin_id), text=text[:4096], parse_mode=None
                )
            except TelegramAPIError as notify_error:
                logger.error(f"Failed to notify admin: {notify_error}")

            return None
