"""Workspace and space services."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.scrum.core.exceptions import NotFoundError
from src.scrum.core.logging import get_logger
from src.scrum.models import Space, Workspace, WorkspaceMember, WorkspaceRole
from src.scrum.repositories import (
    CascadeRepository,
    SpaceRepository,
    WorkspaceMemberRepository,
    WorkspaceRepository,
)
from src.scrum.schemas.workspace import SpaceCreate, SpaceUpdate, WorkspaceCreate, WorkspaceUpdate
from src.scrum.services.common import apply_updates

logger = get_logger(__name__)


class WorkspaceService:
    def __init__(
        self,
        workspace_repo: WorkspaceRepository,
        member_repo: WorkspaceMemberRepository,
        cascade_repo: CascadeRepository,
        session: AsyncSession,
    ):
        self.workspace_repo = workspace_repo
        self.member_repo = member_repo
        self.cascade_repo = cascade_repo
        self.session = session

    async def create(self, owner_id: UUID, data: WorkspaceCreate) -> Workspace:
        """Create a workspace; the creator becomes its owner and OWNER member."""
        try:
            workspace = Workspace(owner_id=owner_id, **data.model_dump())
            self.workspace_repo.add(workspace)
            await self.session.flush()
            self.member_repo.add(
                WorkspaceMember(
                    workspace_id=workspace.id,
                    user_id=owner_id,
                    role=WorkspaceRole.OWNER.value,
                )
            )
            await self.session.commit()
            await self.session.refresh(workspace)
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to create workspace", error=str(e))
            raise

        logger.info("Workspace created", workspace_id=str(workspace.id))
        return workspace

    async def get(self, workspace_id: UUID) -> Workspace:
        workspace = await self.workspace_repo.get_by_id(workspace_id)
        if workspace is None:
            raise NotFoundError.for_entity("Workspace", workspace_id)
        return workspace

    async def list_for_user(
        self, user_id: UUID, page: int, page_size: int
    ) -> tuple[list[Workspace], int]:
        return await self.workspace_repo.list_for_member(user_id, page, page_size)

    async def update(self, workspace: Workspace, data: WorkspaceUpdate) -> Workspace:
        try:
            apply_updates(workspace, data)
            await self.session.commit()
            await self.session.refresh(workspace)
        except Exception:
            await self.session.rollback()
            raise
        return workspace

    async def delete(self, workspace_id: UUID) -> None:
        """Delete a workspace and everything below it in one transaction."""
        try:
            counts = await self.cascade_repo.delete_workspaces([workspace_id])
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to delete workspace", workspace_id=str(workspace_id), error=str(e))
            raise

        logger.info("Workspace deleted", workspace_id=str(workspace_id), **counts)


class SpaceService:
    def __init__(
        self,
        space_repo: SpaceRepository,
        cascade_repo: CascadeRepository,
        session: AsyncSession,
    ):
        self.space_repo = space_repo
        self.cascade_repo = cascade_repo
        self.session = session

    async def create(self, workspace_id: UUID, data: SpaceCreate) -> Space:
        try:
            space = Space(workspace_id=workspace_id, **data.model_dump())
            self.space_repo.add(space)
            await self.session.commit()
            await self.session.refresh(space)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Space created", space_id=str(space.id), workspace_id=str(workspace_id))
        return space

    async def get(self, space_id: UUID) -> Space:
        space = await self.space_repo.get_by_id(space_id)
        if space is None:
            raise NotFoundError.for_entity("Space", space_id)
        return space

    async def list_by_workspace(
        self, workspace_id: UUID, page: int, page_size: int
    ) -> tuple[list[Space], int]:
        return await self.space_repo.list_by_workspace(workspace_id, page, page_size)

    async def update(self, space: Space, data: SpaceUpdate) -> Space:
        try:
            apply_updates(space, data)
            await self.session.commit()
            await self.session.refresh(space)
        except Exception:
            await self.session.rollback()
            raise
        return space

    async def delete(self, space_id: UUID) -> None:
        """Delete a space with all its projects in one transaction."""
        try:
            counts = await self.cascade_repo.delete_spaces([space_id])
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to delete space", space_id=str(space_id), error=str(e))
            raise

        logger.info("Space deleted", space_id=str(space_id), **counts)
