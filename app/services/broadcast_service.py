"""
Broadcast Service.

Handles mass message sending with rate limiting and background execution.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime

from loguru import logger

from app.models.enums import LogAction
from app.services.admin_log_service import AdminLogService
from app.services.notification_service import NotificationService
from app.services.user_service import UserService
from app.utils.exceptions import StoreError


@dataclass(frozen=True)
class BroadcastReport:
    broadcast_id: str
    sent: int
    failed: int

    @property
    def total(self) -> int:
        return self.sent + self.failed


class BroadcastService:
    """Service for handling broadcasts."""

    def __init__(
        self,
        notifications: NotificationService,
        user_service: UserService,
        admin_log: AdminLogService,
        rate_limit: int = 15,
    ) -> None:
        """
        Initialize broadcast service.

        Args:
            notifications: Outbound notifications
            user_service: Recipient lookup
            admin_log: Audit log
            rate_limit: Messages per second
        """
        self.notifications = notifications
        self.user_service = user_service
        self.admin_log = admin_log
        self.delay = 1 / rate_limit
        self._tasks: set[asyncio.Task] = set()

    def start_broadcast(self, admin_id: str, text: str) -> str:
        """
        Start broadcast in background.

        Returns:
            Broadcast ID
        """
        broadcast_id = f"broadcast_{admin_id}_{int(datetime.now().timestamp())}"
        task = asyncio.create_task(self._broadcast_task(admin_id, text, broadcast_id))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return broadcast_id

    async def _broadcast_task(self, admin_id: str, text: str, broadcast_id: str) -> None:
        """Background broadcast task."""
        try:
            report = await self.run_broadcast(admin_id, text, broadcast_id)
        except StoreError as e:
            logger.error(f"Broadcast {broadcast_id} failed: {e}")
            await self.notifications.notify(
                admin_id, f"❌ Broadcast {broadcast_id} failed: {e}"
            )
            return

        await self.notifications.notify(
            admin_id,
            f"✅ *Broadcast finished*\n\n"
            f"✅ Sent: {report.sent}\n"
            f"❌ Failed: {report.failed}\n"
            f"👥 Total: {report.total}",
        )

    async def run_broadcast(
        self, admin_id: str, text: str, broadcast_id: str = "broadcast"
    ) -> BroadcastReport:
        """
        Send text to every non-blocked user.

        Raises:
            StoreError: recipient list could not be read
        """
        logger.info(f"Starting broadcast {broadcast_id}")
        recipients = await self.user_service.get_broadcast_recipients()

        sent = 0
        failed = 0
        for recipient_id in recipients:
            if await self.notifications.notify(
                recipient_id, f"📢 *Announcement*\n\n{text}"
            ):
                sent += 1
            else:
                failed += 1
            await asyncio.sleep(self.delay)

        await self.admin_log.log_action(
            admin_id, LogAction.BROADCAST, f"sent={sent} failed={failed}"
        )
        logger.info(f"Broadcast {broadcast_id} done: {sent} sent, {failed} failed")
        return BroadcastReport(broadcast_id, sent, failed)
