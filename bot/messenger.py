"""
Aiogram messenger.

Messenger implementation over an aiogram Bot. Converts canonical string
IDs and transport-neutral markup to Telegram types, and retries without
Markdown when Telegram rejects the entities.
"""

import re
from typing import Any

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError, TelegramBadRequest
from aiogram.types import (
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    KeyboardButton,
    ReplyKeyboardMarkup,
    ReplyKeyboardRemove,
)
from aiogram.utils.keyboard import InlineKeyboardBuilder, ReplyKeyboardBuilder
from loguru import logger

from app.services.messenger import (
    Button,
    MembershipStatus,
    Markup,
    Menu,
    Messenger,
)
from app.utils.exceptions import StoreError

TelegramMarkup = InlineKeyboardMarkup | ReplyKeyboardMarkup | ReplyKeyboardRemove
NUMERIC_CHAT_ID = re.compile(r"-?[0-9]+")


def to_chat_id(recipient_id: str) -> int | str:
    """Numeric IDs become ints; ``@channel`` usernames pass through."""
    if NUMERIC_CHAT_ID.fullmatch(recipient_id):
        return int(recipient_id)
    return recipient_id


def _inline_button(button: Button) -> InlineKeyboardButton:
    if button.url:
        return InlineKeyboardButton(text=button.text, url=button.url)
    return InlineKeyboardButton(text=button.text, callback_data=button.data)


def to_telegram_markup(markup: Markup) -> TelegramMarkup | None:
    """Render Button rows or a Menu as aiogram markup."""
    if markup is None:
        return None

    if isinstance(markup, Menu):
        if not markup.rows:
            return ReplyKeyboardRemove()
        builder = ReplyKeyboardBuilder()
        for row in markup.rows:
            builder.row(*(KeyboardButton(text=text) for text in row))
        return builder.as_markup(resize_keyboard=True)

    inline = InlineKeyboardBuilder()
    for row in markup:
        inline.row(*(_inline_button(button) for button in row))
    return inline.as_markup()


def _is_parse_error(error: TelegramBadRequest) -> bool:
    return "can't parse entities" in str(error)


class AiogramMessenger(Messenger):
    """Messenger over the Telegram Bot API."""

    def __init__(self, bot: Bot) -> None:
        self.bot = bot

    async def _call(self, action: str, method: Any, **kwargs: Any) -> None:
        """
        Call a Bot method with Markdown fallback.

        Raises:
            StoreError: Telegram rejected the call
        """
        try:
            await method(**kwargs)
            return
        except TelegramBadRequest as e:
            if not _is_parse_error(e):
                raise StoreError(f"{action} failed: {e}") from e
            logger.warning(
                f"Markdown parsing failed, retrying without parse_mode: {e}"
            )
        except TelegramAPIError as e:
            raise StoreError(f"{action} failed: {e}") from e

        try:
            await method(parse_mode=None, **kwargs)
        except TelegramAPIError as e:
            raise StoreError(f"{action} failed without parse_mode: {e}") from e

    async def send_text(
        self, recipient_id: str, text: str, markup: Markup = None
    ) -> None:
        await self._call(
            f"send_message to {recipient_id}",
            self.bot.send_message,
            chat_id=to_chat_id(recipient_id),
            text=text,
            reply_markup=to_telegram_markup(markup),
        )

    async def send_photo(
        self,
        recipient_id: str,
        photo_ref: str,
        caption: str,
        markup: Markup = None,
    ) -> None:
        await self._call(
            f"send_photo to {recipient_id}",
            self.bot.send_photo,
            chat_id=to_chat_id(recipient_id),
            photo=photo_ref,
            caption=caption,
            reply_markup=to_telegram_markup(markup),
        )

    async def answer_interaction(self, interaction_id: str) -> None:
        try:
            await self.bot.answer_callback_query(interaction_id)
        except TelegramAPIError as e:
            raise StoreError(f"answer_callback_query failed: {e}") from e

    async def get_membership(
        self, channel_ref: str, user_id: str
    ) -> MembershipStatus:
        """
        Raises:
            StoreError: lookup failed (bot not in channel, bad channel)
        """
        try:
            member = await self.bot.get_chat_member(
                chat_id=to_chat_id(channel_ref), user_id=int(user_id)
            )
        except TelegramAPIError as e:
            raise StoreError(
                f"Membership check in {channel_ref} failed: {e}"
            ) from e
        return MembershipStatus(member.status)
