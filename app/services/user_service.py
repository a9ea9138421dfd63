"""
User service.

Verification state and admin block/unblock.
"""

from loguru import logger

from app.models.enums import UserStatus, VerifiedFlag
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.services.admin_log_service import utc_timestamp


class UserService:
    """User service for verification and moderation."""

    def __init__(self, user_repo: UserRepository) -> None:
        self.user_repo = user_repo

    async def get_user(self, user_id: str) -> User | None:
        return await self.user_repo.get(user_id)

    async def mark_verified(self, user_id: str, display_name: str) -> User:
        """
        Create or update the user as verified.

        New users are Active; an existing Blocked status is kept.

        Args:
            user_id: User ID
            display_name: Name shown to the admin

        Returns:
            Saved user
        """
        existing = await self.user_repo.get(user_id)
        user = User(
            id=user_id,
            display_name=display_name or (existing.display_name if existing else ""),
            status=existing.status if existing else UserStatus.ACTIVE,
            verified=VerifiedFlag.YES,
            joined_at=existing.joined_at if existing else utc_timestamp(),
        )
        await self.user_repo.save(user)
        logger.info(f"User verified: {user_id}")
        return user

    async def toggle_block(self, user_id: str) -> User:
        """
        Block an active user or unblock a blocked one.

        Unknown users get a Blocked, unverified row.

        Returns:
            User with the new status
        """
        existing = await self.user_repo.get(user_id)
        if existing is None:
            user = User(
                id=user_id,
                display_name="",
                status=UserStatus.BLOCKED,
                verified=VerifiedFlag.NO,
                joined_at=utc_timestamp(),
            )
            await self.user_repo.create(user)
        else:
            new_status = (
                UserStatus.ACTIVE if existing.is_blocked else UserStatus.BLOCKED
            )
            user = existing.with_status(new_status)
            await self.user_repo.set_status(user_id, new_status)

        logger.info(f"User {user_id} status -> {user.status}")
        return user

    async def get_broadcast_recipients(self) -> list[str]:
        """IDs of every non-blocked user."""
        return [user.id for user in await self.user_repo.find_active()]

    async def count_users(self) -> tuple[int, int]:
        """(total, blocked)."""
        users = await self.user_repo.find_all()
        return len(users), sum(1 for user in users if user.is_blocked)
