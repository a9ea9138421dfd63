"""Logger Middleware - Log all incoming updates."""

from collections.abc import Awaitable, Callable
from typing import Any
from uuid import uuid4

from aiogram import BaseMiddleware
from aiogram.types import CallbackQuery, Message, TelegramObject, User
from loguru import logger


class LoggerMiddleware(BaseMiddleware):
    """
    Logger middleware.

    Logs every incoming message and button press under a short request ID
    and binds it to log records emitted while the update is handled.
    """

    async def __call__(
        self,
        handler: Callable[
            [TelegramObject, dict[str, Any]], Awaitable[Any]
        ],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        """Log update and process."""
        request_id = uuid4().hex[:8]
        data["request_id"] = request_id

        user: User | None = data.get("event_from_user")
        user_id = user.id if user else None
        username = user.username if user else None

        if isinstance(event, CallbackQuery):
            logger.info(
                f"[{request_id}] callback_query from user {user_id} "
                f"(@{username}): {event.data!r}"
            )
        elif isinstance(event, Message):
            kind = "photo" if event.photo else "message"
            logger.info(f"[{request_id}] {kind} from user {user_id} (@{username})")
            if event.text:
                logger.debug(f"[{request_id}] Text: '{event.text}'")
        else:
            logger.info(f"[{request_id}] {type(event).__name__} from {user_id}")

        with logger.contextualize(request_id=request_id):
            try:
                result = await handler(event, data)
                logger.debug(f"[{request_id}] Handler completed successfully")
                return result
            except Exception as e:
                logger.error(f"[{request_id}] Handler error: {e}")
                raise
