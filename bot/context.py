"""
Flow context.

Everything a handler needs: services, the session store and the bot's
static configuration.
"""

from dataclasses import dataclass

from app.config.settings import Settings
from app.models.user import User
from app.services.container import ServiceContainer
from app.services.messenger import Markup, Messenger
from bot.events import ChatEvent
from bot.keyboards.reply import main_menu_reply_keyboard
from bot.states.session_states import SessionState
from bot.storage.session_store import SessionStore


@dataclass(frozen=True)
class BotConfig:
    """Static bot configuration used by the conversation flows."""

    admin_id: str
    required_channel: str
    required_channel_url: str
    orders_channel_url: str
    payment_qr_url: str
    currency: str = "₹"

    @classmethod
    def from_settings(cls, settings: Settings) -> "BotConfig":
        return cls(
            admin_id=settings.admin_telegram_id,
            required_channel=settings.required_channel,
            required_channel_url=settings.required_channel_url,
            orders_channel_url=settings.orders_notify_channel_url,
            payment_qr_url=settings.payment_qr_url,
            currency=settings.currency_symbol,
        )


class FlowContext:
    """Shared handler dependencies plus small reply helpers."""

    def __init__(
        self,
        services: ServiceContainer,
        sessions: SessionStore,
        config: BotConfig,
    ) -> None:
        self.services = services
        self.sessions = sessions
        self.config = config

    @property
    def messenger(self) -> Messenger:
        return self.services.messenger

    def is_admin(self, user_id: str) -> bool:
        return user_id == self.config.admin_id

    def get_state(self, user_id: str) -> SessionState | None:
        return self.sessions.get(user_id)

    def set_state(self, user_id: str, state: SessionState) -> None:
        self.sessions.set(user_id, state)

    def clear_state(self, user_id: str) -> None:
        self.sessions.clear(user_id)

    async def reply(
        self, event: ChatEvent, text: str, markup: Markup = None
    ) -> None:
        await self.messenger.send_text(event.chat_id, text, markup)

    async def show_main_menu(
        self, event: ChatEvent, text: str = "🏠 *Main Menu*\n\nChoose an option below:"
    ) -> None:
        await self.reply(event, text, main_menu_reply_keyboard())

    async def require_shopper(self, event: ChatEvent) -> User | None:
        """
        Gate for menu actions.

        Returns:
            Verified, non-blocked user, or None after telling the user why
        """
        user = await self.services.users.get_user(event.user_id)
        if user is not None and user.is_blocked:
            await self.reply(
                event,
                "🚫 *Access Denied*\n\nYour account has been blocked. "
                "Use 🆘 Support to contact the admin.",
            )
            return None
        if user is None or not user.is_verified:
            await self.reply(
                event, "⚠️ Please verify first. Send /start to begin."
            )
            return None
        return user
