"""
Unit tests for the aiogram messenger adapter.

The Bot is mocked; no Telegram calls are made.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from aiogram.exceptions import TelegramBadRequest, TelegramForbiddenError
from aiogram.types import InlineKeyboardMarkup, ReplyKeyboardMarkup, ReplyKeyboardRemove

from app.services.messenger import Button, MembershipStatus, Menu
from app.utils.exceptions import StoreError
from bot.messenger import AiogramMessenger, to_chat_id, to_telegram_markup


def bad_request(message: str) -> TelegramBadRequest:
    return TelegramBadRequest(method=MagicMock(), message=message)


@pytest.fixture
def bot() -> MagicMock:
    bot = MagicMock()
    bot.send_message = AsyncMock()
    bot.send_photo = AsyncMock()
    bot.answer_callback_query = AsyncMock()
    bot.get_chat_member = AsyncMock()
    return bot


class TestConversions:
    """ID and markup conversion."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("1001", 1001),
            ("-1001234", -1001234),
            ("@orders", "@orders"),
            ("²", "²"),
        ],
    )
    def test_to_chat_id(self, raw, expected):
        assert to_chat_id(raw) == expected

    def test_no_markup(self):
        assert to_telegram_markup(None) is None

    def test_empty_menu_removes_keyboard(self):
        assert isinstance(to_telegram_markup(Menu()), ReplyKeyboardRemove)

    def test_menu_rows(self):
        markup = to_telegram_markup(Menu(rows=(("A",), ("B", "C"))))
        assert isinstance(markup, ReplyKeyboardMarkup)
        assert markup.resize_keyboard is True
        assert [[b.text for b in row] for row in markup.keyboard] == [["A"], ["B", "C"]]

    def test_inline_rows(self):
        markup = to_telegram_markup(
            [[Button("Go", data="go")], [Button("Site", url="https://example.com")]]
        )
        assert isinstance(markup, InlineKeyboardMarkup)
        first, second = markup.inline_keyboard
        assert first[0].callback_data == "go"
        assert second[0].url == "https://example.com"


class TestSend:
    """Sending and Markdown fallback."""

    @pytest.mark.asyncio
    async def test_send_text(self, bot):
        await AiogramMessenger(bot).send_text("1001", "hi")

        bot.send_message.assert_awaited_once_with(
            chat_id=1001, text="hi", reply_markup=None
        )

    @pytest.mark.asyncio
    async def test_parse_error_retries_without_markdown(self, bot):
        bot.send_message.side_effect = [
            bad_request("Bad Request: can't parse entities"),
            None,
        ]

        await AiogramMessenger(bot).send_text("1001", "a_b")

        assert bot.send_message.await_count == 2
        assert bot.send_message.await_args.kwargs["parse_mode"] is None

    @pytest.mark.asyncio
    async def test_other_bad_request_raises(self, bot):
        bot.send_message.side_effect = bad_request("Bad Request: chat not found")

        with pytest.raises(StoreError):
            await AiogramMessenger(bot).send_text("1001", "hi")
        assert bot.send_message.await_count == 1

    @pytest.mark.asyncio
    async def test_blocked_bot_raises_store_error(self, bot):
        bot.send_photo.side_effect = TelegramForbiddenError(
            method=MagicMock(), message="Forbidden: bot was blocked by the user"
        )

        with pytest.raises(StoreError):
            await AiogramMessenger(bot).send_photo("1001", "file-id", "caption")

    @pytest.mark.asyncio
    async def test_fallback_failure_raises(self, bot):
        bot.send_message.side_effect = [
            bad_request("Bad Request: can't parse entities"),
            bad_request("Bad Request: message is too long"),
        ]

        with pytest.raises(StoreError, match="without parse_mode"):
            await AiogramMessenger(bot).send_text("1001", "x")


class TestMembership:
    """Channel membership lookups."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status,joined",
        [
            ("member", True),
            ("administrator", True),
            ("creator", True),
            ("left", False),
            ("kicked", False),
            ("restricted", False),
        ],
    )
    async def test_status_mapping(self, bot, status, joined):
        bot.get_chat_member.return_value = MagicMock(status=status)

        result = await AiogramMessenger(bot).get_membership("@main", "1001")

        assert result is MembershipStatus(status)
        assert result.is_joined is joined
        bot.get_chat_member.assert_awaited_once_with(chat_id="@main", user_id=1001)

    @pytest.mark.asyncio
    async def test_lookup_failure(self, bot):
        bot.get_chat_member.side_effect = bad_request("Bad Request: chat not found")

        with pytest.raises(StoreError):
            await AiogramMessenger(bot).get_membership("@main", "1001")
