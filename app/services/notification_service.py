"""
Notification service.

Best-effort delivery of notifications that must not abort the flow that
triggered them.
"""

from loguru import logger

from app.services.messenger import Markup, Messenger
from app.utils.exceptions import StoreError


class NotificationService:
    """Wraps a Messenger with logging and failure isolation."""

    def __init__(self, messenger: Messenger, admin_id: str) -> None:
        """
        Initialize notification service.

        Args:
            messenger: Outbound messenger
            admin_id: Admin recipient ID
        """
        self.messenger = messenger
        self.admin_id = admin_id

    async def notify(
        self, recipient_id: str, text: str, markup: Markup = None
    ) -> bool:
        """
        Send text notification.

        Returns:
            True if delivered
        """
        try:
            await self.messenger.send_text(recipient_id, text, markup)
            return True
        except StoreError as e:
            logger.warning(f"Notification to {recipient_id} failed: {e}")
            return False

    async def notify_photo(
        self,
        recipient_id: str,
        photo_ref: str,
        caption: str,
        markup: Markup = None,
    ) -> bool:
        """
        Send photo notification.

        Returns:
            True if delivered
        """
        try:
            await self.messenger.send_photo(recipient_id, photo_ref, caption, markup)
            return True
        except StoreError as e:
            logger.warning(f"Photo notification to {recipient_id} failed: {e}")
            return False

    async def notify_admin(self, text: str, markup: Markup = None) -> bool:
        return await self.notify(self.admin_id, text, markup)
