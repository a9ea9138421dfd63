"""
Bot Test Client for flow testing.

Drives the session state machine with ChatEvents and records everything
the bot sends, without the Telegram API.
"""

from dataclasses import dataclass
from decimal import Decimal

from app.models.category import Category
from app.models.enums import PriceTier, UserStatus, VerifiedFlag
from app.models.user import User
from app.repositories.category_repository import CategoryRepository
from app.repositories.row_store import RowStore
from app.repositories.user_repository import UserRepository
from app.services.messenger import (
    MembershipStatus,
    Markup,
    Menu,
    Messenger,
)
from app.utils.exceptions import StoreError
from bot.events import ChatEvent
from bot.machine import SessionStateMachine


@dataclass
class SentMessage:
    recipient_id: str
    text: str
    markup: Markup = None
    photo_ref: str | None = None

    @property
    def callback_data(self) -> list[str]:
        """Callback data of every inline button, row by row."""
        if not isinstance(self.markup, list):
            return []
        return [button.data for row in self.markup for button in row if button.data]


class RecordingMessenger(Messenger):
    """
    Messenger that records sends instead of calling Telegram.

    Recipients in ``failing_recipients`` raise StoreError.
    """

    def __init__(self) -> None:
        self.sent: list[SentMessage] = []
        self.answered: list[str] = []
        self.memberships: dict[str, MembershipStatus] = {}
        self.failing_recipients: set[str] = set()
        self.membership_error = False

    async def send_text(
        self, recipient_id: str, text: str, markup: Markup = None
    ) -> None:
        if recipient_id in self.failing_recipients:
            raise StoreError(f"send to {recipient_id} failed")
        self.sent.append(SentMessage(recipient_id, text, markup))

    async def send_photo(
        self,
        recipient_id: str,
        photo_ref: str,
        caption: str,
        markup: Markup = None,
    ) -> None:
        if recipient_id in self.failing_recipients:
            raise StoreError(f"photo to {recipient_id} failed")
        self.sent.append(SentMessage(recipient_id, caption, markup, photo_ref))

    async def answer_interaction(self, interaction_id: str) -> None:
        self.answered.append(interaction_id)

    async def get_membership(
        self, channel_ref: str, user_id: str
    ) -> MembershipStatus:
        if self.membership_error:
            raise StoreError("membership lookup failed")
        return self.memberships.get(user_id, MembershipStatus.LEFT)

    def to(self, recipient_id: str) -> list[SentMessage]:
        return [m for m in self.sent if m.recipient_id == recipient_id]

    def last_to(self, recipient_id: str) -> SentMessage:
        messages = self.to(recipient_id)
        assert messages, f"nothing sent to {recipient_id}"
        return messages[-1]

    def texts_to(self, recipient_id: str) -> list[str]:
        return [m.text for m in self.to(recipient_id)]


class BotTestClient:
    """
    Test client for the conversation flows.

    Usage:
        client = BotTestClient(machine, messenger)
        await client.send("1001", "/start")
        assert "Welcome" in client.last_text("1001")
    """

    def __init__(self, machine: SessionStateMachine, messenger: RecordingMessenger):
        self.machine = machine
        self.messenger = messenger
        self._interactions = 0

    async def send(
        self,
        user_id: str,
        text: str | None = None,
        photo_ref: str | None = None,
        caption: str | None = None,
        name: str = "Test User",
    ) -> None:
        await self.machine.dispatch(
            ChatEvent(
                user_id=user_id,
                chat_id=user_id,
                display_name=name,
                text=text,
                photo_ref=photo_ref,
                caption=caption,
            )
        )

    async def press(self, user_id: str, data: str, name: str = "Test User") -> None:
        self._interactions += 1
        await self.machine.dispatch(
            ChatEvent(
                user_id=user_id,
                chat_id=user_id,
                display_name=name,
                callback_data=data,
                interaction_id=f"cb-{self._interactions}",
            )
        )

    def last_text(self, user_id: str) -> str:
        return self.messenger.last_to(user_id).text

    def last_buttons(self, user_id: str) -> list[str]:
        return self.messenger.last_to(user_id).callback_data

    def last_menu(self, user_id: str) -> Menu | None:
        markup = self.messenger.last_to(user_id).markup
        return markup if isinstance(markup, Menu) else None


async def seed_category(
    store: RowStore,
    category_id: str = "cat_500",
    face_value: int = 500,
    base_price: str | None = "50.00",
    tiers: dict[PriceTier, str] | None = None,
    codes: tuple[str, ...] = (),
) -> Category:
    """Write a category row directly."""
    base = Decimal(base_price) if base_price is not None else None
    tier_prices = (
        {tier: Decimal(price) for tier, price in tiers.items()}
        if tiers is not None
        else {tier: base for tier in PriceTier}
    )
    category = Category(
        category_id=category_id,
        face_value=face_value,
        base_price=base,
        tier_prices=tier_prices,
    ).with_pool(codes)
    await CategoryRepository(store).create(category)
    return category


async def seed_user(
    store: RowStore,
    user_id: str,
    name: str = "Test User",
    verified: bool = True,
    blocked: bool = False,
) -> User:
    """Write a user row directly."""
    user = User(
        id=user_id,
        display_name=name,
        status=UserStatus.BLOCKED if blocked else UserStatus.ACTIVE,
        verified=VerifiedFlag.YES if verified else VerifiedFlag.NO,
        joined_at="2024-01-01 00:00:00",
    )
    await UserRepository(store).create(user)
    return user
