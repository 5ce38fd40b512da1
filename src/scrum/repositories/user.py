"""Repository for User entity."""

from datetime import datetime

from sqlalchemy import update
from sqlmodel import select

from src.scrum.models import User, UserStatus
from src.scrum.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email (emails are stored lower-cased)."""
        result = await self.session.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        return await self.get_by_email(email) is not None

    async def mark_idle_users_away(self, seen_before: datetime) -> int:
        """Move ONLINE users not seen since `seen_before` to AWAY.

        Returns the number of users updated.
        """
        stmt = (
            update(User)
            .where(User.status == UserStatus.ONLINE.value)  # type: ignore[arg-type]
            .where(User.last_seen_at < seen_before)  # type: ignore[arg-type, operator]
            .values(status=UserStatus.AWAY.value)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]
