"""Notification inbox of the current user.

A notification belonging to someone else is reported as not found.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.scrum.core.exceptions import NotFoundError
from src.scrum.core.logging import get_logger
from src.scrum.models import Notification
from src.scrum.repositories import NotificationRepository

logger = get_logger(__name__)


class NotificationService:
    def __init__(self, notification_repo: NotificationRepository, session: AsyncSession):
        self.notification_repo = notification_repo
        self.session = session

    async def _get_owned(self, notification_id: UUID, user_id: UUID) -> Notification:
        notification = await self.notification_repo.get_for_user(notification_id, user_id)
        if notification is None:
            raise NotFoundError.for_entity("Notification", notification_id)
        return notification

    async def list_for_user(
        self, user_id: UUID, unread_only: bool, page: int, page_size: int
    ) -> tuple[list[Notification], int]:
        return await self.notification_repo.list_for_user(user_id, unread_only, page, page_size)

    async def count(self, user_id: UUID) -> tuple[int, int]:
        """Return (total, unread)."""
        return await self.notification_repo.count_for_user(user_id)

    async def mark_read(self, notification_id: UUID, user_id: UUID) -> Notification:
        notification = await self._get_owned(notification_id, user_id)
        try:
            notification.read = True
            await self.session.commit()
            await self.session.refresh(notification)
        except Exception:
            await self.session.rollback()
            raise
        return notification

    async def mark_all_read(self, user_id: UUID) -> int:
        try:
            updated = await self.notification_repo.mark_all_read(user_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return updated

    async def delete(self, notification_id: UUID, user_id: UUID) -> None:
        notification = await self._get_owned(notification_id, user_id)
        try:
            await self.notification_repo.delete(notification)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def delete_all(self, user_id: UUID) -> int:
        try:
            deleted = await self.notification_repo.delete_all_for_user(user_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Notifications cleared", user_id=str(user_id), deleted=deleted)
        return deleted
