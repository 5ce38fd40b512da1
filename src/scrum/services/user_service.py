"""User profile service."""

from datetime import timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.scrum.core.logging import get_logger
from src.scrum.models import User, UserStatus
from src.scrum.models.base import utc_now
from src.scrum.repositories import UserRepository
from src.scrum.schemas.user import UserUpdate
from src.scrum.services.common import apply_updates

logger = get_logger(__name__)

# Presence is refreshed at most this often to avoid a write per request
PRESENCE_REFRESH_INTERVAL = timedelta(minutes=1)


class UserService:
    def __init__(self, user_repo: UserRepository, session: AsyncSession):
        self.user_repo = user_repo
        self.session = session

    async def get_by_id(self, user_id: UUID) -> User | None:
        return await self.user_repo.get_by_id(user_id)

    async def update_profile(self, user: User, data: UserUpdate) -> User:
        """Apply a partial profile update."""
        try:
            changed = apply_updates(user, data)
            await self.session.commit()
            await self.session.refresh(user)
        except Exception:
            await self.session.rollback()
            raise
        logger.info("User profile updated", user_id=str(user.id), fields=sorted(changed))
        return user

    async def touch(self, user: User) -> None:
        """Record activity: mark the user ONLINE and bump last_seen_at."""
        now = utc_now()
        if (
            user.status == UserStatus.ONLINE.value
            and user.last_seen_at is not None
            and now - user.last_seen_at < PRESENCE_REFRESH_INTERVAL
        ):
            return
        try:
            user.status = UserStatus.ONLINE.value
            user.last_seen_at = now
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
