"""
Admin log service.

Writes the ``Logs`` audit table.
"""

from datetime import UTC, datetime

from loguru import logger

from app.models.enums import LogAction
from app.models.log_entry import LogEntry
from app.repositories.log_repository import LogRepository
from app.utils.exceptions import StoreError


def utc_timestamp() -> str:
    return datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")


class AdminLogService:
    """Service for logging actions for audit trail."""

    def __init__(self, log_repo: LogRepository) -> None:
        self.log_repo = log_repo

    async def log_action(
        self, user_id: str, action: LogAction, details: str = ""
    ) -> bool:
        """
        Log action.

        Audit failures are logged, never raised.

        Args:
            user_id: Acting or affected user
            action: Action name
            details: Free text

        Returns:
            True if written
        """
        entry = LogEntry(
            timestamp=utc_timestamp(),
            user_id=user_id,
            action=str(action),
            details=details,
        )
        try:
            await self.log_repo.create(entry)
        except StoreError as e:
            logger.error(f"Failed to write audit log {action} for {user_id}: {e}")
            return False

        logger.debug(f"Action logged: {action} by {user_id}")
        return True
