"""
Messenger interface.

Transport-neutral outbound channel used by services and the session state
machine. The aiogram adapter lives in ``bot.messenger``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import StrEnum


class MembershipStatus(StrEnum):
    """Channel membership as reported by the chat platform."""

    MEMBER = "member"
    ADMINISTRATOR = "administrator"
    CREATOR = "creator"
    RESTRICTED = "restricted"
    LEFT = "left"
    KICKED = "kicked"

    @property
    def is_joined(self) -> bool:
        return self in (
            MembershipStatus.MEMBER,
            MembershipStatus.ADMINISTRATOR,
            MembershipStatus.CREATOR,
        )


@dataclass(frozen=True)
class Button:
    """Inline button carrying either callback data or a URL."""

    text: str
    data: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class Menu:
    """Persistent reply keyboard; no rows removes the keyboard."""

    rows: tuple[tuple[str, ...], ...] = field(default_factory=tuple)


InlineKeyboard = list[list[Button]]
Markup = InlineKeyboard | Menu | None


class Messenger(ABC):
    """
    Outbound chat operations.

    Implementations raise StoreError when the platform call fails.
    """

    @abstractmethod
    async def send_text(
        self, recipient_id: str, text: str, markup: Markup = None
    ) -> None:
        """Send a text message."""

    @abstractmethod
    async def send_photo(
        self,
        recipient_id: str,
        photo_ref: str,
        caption: str,
        markup: Markup = None,
    ) -> None:
        """Send a photo by platform file ID or URL."""

    @abstractmethod
    async def answer_interaction(self, interaction_id: str) -> None:
        """Acknowledge a button press."""

    @abstractmethod
    async def get_membership(
        self, channel_ref: str, user_id: str
    ) -> MembershipStatus:
        """Look up a user's membership in a channel."""
