"""Repository for Notification entity."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import case, delete, func, update
from sqlmodel import select

from src.scrum.models import Notification
from src.scrum.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    model = Notification

    def add_all(self, notifications: list[Notification]) -> None:
        self.session.add_all(notifications)

    async def get_for_user(self, notification_id: UUID, user_id: UUID) -> Notification | None:
        """Get a notification only if it belongs to the user."""
        result = await self.session.execute(
            select(Notification).where(
                Notification.id == notification_id,
                Notification.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_user(
        self, user_id: UUID, unread_only: bool, page: int, page_size: int
    ) -> tuple[list[Notification], int]:
        """List a user's notifications, newest first."""
        query = select(Notification).where(Notification.user_id == user_id)
        if unread_only:
            query = query.where(Notification.read == False)  # noqa: E712
        return await self.paginate(
            query,
            page,
            page_size,
            [Notification.created_at.desc(), Notification.id],  # type: ignore[attr-defined]
        )

    async def count_for_user(self, user_id: UUID) -> tuple[int, int]:
        """Return (total, unread) counts for a user."""
        result = await self.session.execute(
            select(
                func.count(),
                func.coalesce(func.sum(case((Notification.read == False, 1), else_=0)), 0),  # noqa: E712
            ).where(Notification.user_id == user_id)
        )
        total, unread = result.one()
        return int(total), int(unread)

    async def mark_all_read(self, user_id: UUID) -> int:
        stmt = (
            update(Notification)
            .where(Notification.user_id == user_id)  # type: ignore[arg-type]
            .where(Notification.read == False)  # type: ignore[arg-type]  # noqa: E712
            .values(read=True)
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def delete_all_for_user(self, user_id: UUID) -> int:
        result = await self.session.execute(
            delete(Notification).where(Notification.user_id == user_id)  # type: ignore[arg-type]
        )
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def delete_read_before(self, cutoff: datetime) -> int:
        """Delete read notifications created before `cutoff`."""
        result = await self.session.execute(
            delete(Notification).where(
                Notification.read == True,  # type: ignore[arg-type]  # noqa: E712
                Notification.created_at < cutoff,  # type: ignore[arg-type]
            )
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
