"""Repositories for Workspace and Space."""

from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select

from src.scrum.models import Space, Workspace, WorkspaceMember
from src.scrum.repositories.base import BaseRepository


class WorkspaceRepository(BaseRepository[Workspace]):
    model = Workspace

    async def list_for_member(
        self, user_id: UUID, page: int, page_size: int
    ) -> tuple[list[Workspace], int]:
        """List workspaces the user is a member of, newest first."""
        query = (
            select(Workspace)
            .join(
                WorkspaceMember,
                Workspace.id == WorkspaceMember.workspace_id,  # type: ignore[arg-type]
            )
            .where(WorkspaceMember.user_id == user_id)
        )
        return await self.paginate(query, page, page_size, Workspace.created_at.desc())  # type: ignore[attr-defined]

    async def delete_by_ids(self, workspace_ids: list[UUID]) -> int:
        if not workspace_ids:
            return 0
        result = await self.session.execute(
            delete(Workspace).where(Workspace.id.in_(workspace_ids))  # type: ignore[attr-defined]
        )
        return result.rowcount or 0  # type: ignore[attr-defined]


class SpaceRepository(BaseRepository[Space]):
    model = Space

    async def list_by_workspace(
        self, workspace_id: UUID, page: int, page_size: int
    ) -> tuple[list[Space], int]:
        query = select(Space).where(Space.workspace_id == workspace_id)
        return await self.paginate(query, page, page_size, Space.created_at)

    async def ids_by_workspaces(self, workspace_ids: list[UUID]) -> list[UUID]:
        if not workspace_ids:
            return []
        result = await self.session.execute(
            select(Space.id).where(Space.workspace_id.in_(workspace_ids))  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def delete_by_ids(self, space_ids: list[UUID]) -> int:
        if not space_ids:
            return 0
        result = await self.session.execute(
            delete(Space).where(Space.id.in_(space_ids))  # type: ignore[attr-defined]
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
