"""Repository for Sprint entity."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select

from src.scrum.models import Sprint, SprintStatus
from src.scrum.repositories.base import BaseRepository


class SprintRepository(BaseRepository[Sprint]):
    model = Sprint

    async def get_for_update(self, sprint_id: UUID) -> Sprint | None:
        """Get a sprint and lock its row until the transaction ends."""
        result = await self.session.execute(
            select(Sprint).where(Sprint.id == sprint_id).with_for_update()
        )
        return result.scalar_one_or_none()

    async def list_by_project(
        self, project_id: UUID, status: SprintStatus | None = None
    ) -> list[Sprint]:
        query = select(Sprint).where(Sprint.project_id == project_id)
        if status is not None:
            query = query.where(Sprint.status == status.value)
        result = await self.session.execute(query.order_by(Sprint.created_at))
        return list(result.scalars().all())

    async def list_active_ending_between(self, start: datetime, end: datetime) -> list[Sprint]:
        """ACTIVE sprints whose end_date falls in [start, end)."""
        result = await self.session.execute(
            select(Sprint).where(
                Sprint.status == SprintStatus.ACTIVE.value,
                Sprint.end_date >= start,  # type: ignore[operator]
                Sprint.end_date < end,  # type: ignore[operator]
            )
        )
        return list(result.scalars().all())

    async def list_active_ended_before(self, moment: datetime) -> list[Sprint]:
        """ACTIVE sprints whose end_date has passed."""
        result = await self.session.execute(
            select(Sprint).where(
                Sprint.status == SprintStatus.ACTIVE.value,
                Sprint.end_date < moment,  # type: ignore[operator]
            )
        )
        return list(result.scalars().all())

    async def delete_by_projects(self, project_ids: list[UUID]) -> int:
        if not project_ids:
            return 0
        result = await self.session.execute(
            delete(Sprint).where(Sprint.project_id.in_(project_ids))  # type: ignore[attr-defined]
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
