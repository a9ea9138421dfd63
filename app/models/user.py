"""User record."""

from dataclasses import dataclass, replace
from typing import Mapping

from app.models.enums import UserStatus, VerifiedFlag


@dataclass(frozen=True)
class User:
    """Bot user as stored in the ``Users`` table."""

    id: str
    display_name: str
    status: UserStatus = UserStatus.ACTIVE
    verified: VerifiedFlag = VerifiedFlag.NO
    joined_at: str = ""

    @property
    def is_blocked(self) -> bool:
        return self.status == UserStatus.BLOCKED

    @property
    def is_verified(self) -> bool:
        return self.verified == VerifiedFlag.YES

    @property
    def can_shop(self) -> bool:
        """Verified and not blocked."""
        return self.is_verified and not self.is_blocked

    def with_status(self, status: UserStatus) -> "User":
        return replace(self, status=status)

    @classmethod
    def from_row(cls, row: Mapping[str, str]) -> "User":
        return cls(
            id=row["UserID"],
            display_name=row.get("Name", ""),
            status=(
                UserStatus.BLOCKED
                if row.get("Status") == UserStatus.BLOCKED
                else UserStatus.ACTIVE
            ),
            verified=(
                VerifiedFlag.YES
                if row.get("Verified") == VerifiedFlag.YES
                else VerifiedFlag.NO
            ),
            joined_at=row.get("JoinedAt", ""),
        )

    def to_values(self) -> list[str]:
        """Values in ``Users`` header order."""
        return [
            self.id,
            self.display_name,
            self.joined_at,
            str(self.status),
            str(self.verified),
        ]
