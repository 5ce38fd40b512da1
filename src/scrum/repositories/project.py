"""Repositories for Project and Label."""

from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select

from src.scrum.models import Label, Project, TaskLabel
from src.scrum.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    model = Project

    async def get_by_key(self, space_id: UUID, key: str) -> Project | None:
        result = await self.session.execute(
            select(Project).where(Project.space_id == space_id, Project.key == key)
        )
        return result.scalar_one_or_none()

    async def list_by_space(
        self, space_id: UUID, page: int, page_size: int
    ) -> tuple[list[Project], int]:
        query = select(Project).where(Project.space_id == space_id)
        return await self.paginate(query, page, page_size, Project.created_at)

    async def next_task_key(self, project_id: UUID) -> str | None:
        """Atomically bump the project's task counter and return the new task key.

        The UPDATE takes a row lock held until the surrounding transaction
        ends, so concurrent callers in one project are serialized and each
        gets a distinct number. Returns None if the project does not exist.
        """
        stmt = (
            update(Project)
            .where(Project.id == project_id)  # type: ignore[arg-type]
            .values(task_sequence=Project.task_sequence + 1)
            .returning(Project.key, Project.task_sequence)
            .execution_options(synchronize_session=False)
        )
        row = (await self.session.execute(stmt)).one_or_none()
        if row is None:
            return None
        key, number = row
        return f"{key}-{number}"

    async def ids_by_spaces(self, space_ids: list[UUID]) -> list[UUID]:
        if not space_ids:
            return []
        result = await self.session.execute(
            select(Project.id).where(Project.space_id.in_(space_ids))  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def delete_by_ids(self, project_ids: list[UUID]) -> int:
        if not project_ids:
            return 0
        result = await self.session.execute(
            delete(Project).where(Project.id.in_(project_ids))  # type: ignore[attr-defined]
        )
        return result.rowcount or 0  # type: ignore[attr-defined]


class LabelRepository(BaseRepository[Label]):
    model = Label

    async def list_by_project(self, project_id: UUID) -> list[Label]:
        result = await self.session.execute(
            select(Label).where(Label.project_id == project_id).order_by(Label.name)
        )
        return list(result.scalars().all())

    async def delete_with_links(self, label_id: UUID) -> None:
        """Delete a label and detach it from every task."""
        await self.session.execute(delete(TaskLabel).where(TaskLabel.label_id == label_id))  # type: ignore[arg-type]
        await self.session.execute(delete(Label).where(Label.id == label_id))  # type: ignore[arg-type]

    async def delete_by_projects(self, project_ids: list[UUID]) -> int:
        if not project_ids:
            return 0
        label_ids = select(Label.id).where(Label.project_id.in_(project_ids))  # type: ignore[attr-defined]
        await self.session.execute(delete(TaskLabel).where(TaskLabel.label_id.in_(label_ids)))  # type: ignore[attr-defined]
        result = await self.session.execute(
            delete(Label).where(Label.project_id.in_(project_ids))  # type: ignore[attr-defined]
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
