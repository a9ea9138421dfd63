"""User repository."""

from app.models.enums import Table, UserStatus
from app.models.user import User
from app.repositories.base import BaseRepository
from app.repositories.row_store import RowStore


class UserRepository(BaseRepository[User]):
    """Repository for the ``Users`` table."""

    def __init__(self, store: RowStore) -> None:
        super().__init__(store, Table.USERS, "UserID", User.from_row)

    async def save(self, user: User) -> User:
        """Update an existing row or append a new one."""
        found = await self.update(
            user.id,
            {
                "Name": user.display_name,
                "Status": str(user.status),
                "Verified": str(user.verified),
            },
        )
        if not found:
            await self.create(user)
        return user

    async def find_active(self) -> list[User]:
        return [user for user in await self.find_all() if not user.is_blocked]

    async def set_status(self, user_id: str, status: UserStatus) -> bool:
        return await self.update(user_id, {"Status": str(status)})
