"""Bulk deletion of a container and everything it exclusively owns.

Deletes run bottom-up as set-based statements. Nothing here commits, so
the caller's transaction decides whether the whole cascade persists.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.scrum.core.logging import get_logger
from src.scrum.repositories.membership import ProjectMemberRepository, WorkspaceMemberRepository
from src.scrum.repositories.project import LabelRepository, ProjectRepository
from src.scrum.repositories.sprint import SprintRepository
from src.scrum.repositories.task import TaskRepository
from src.scrum.repositories.workspace import SpaceRepository, WorkspaceRepository

logger = get_logger(__name__)


class CascadeRepository:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.workspaces = WorkspaceRepository(session)
        self.workspace_members = WorkspaceMemberRepository(session)
        self.spaces = SpaceRepository(session)
        self.projects = ProjectRepository(session)
        self.project_members = ProjectMemberRepository(session)
        self.sprints = SprintRepository(session)
        self.labels = LabelRepository(session)
        self.tasks = TaskRepository(session)

    async def delete_projects(self, project_ids: list[UUID]) -> dict[str, int]:
        """Delete projects with their tasks, comments, labels, sprints and members."""
        counts = {
            "tasks": await self.tasks.delete_by_projects(project_ids),
            "labels": await self.labels.delete_by_projects(project_ids),
            "sprints": await self.sprints.delete_by_projects(project_ids),
            "project_members": await self.project_members.delete_for_scopes(project_ids),
            "projects": await self.projects.delete_by_ids(project_ids),
        }
        logger.debug("Cascade deleted projects", **counts)
        return counts

    async def delete_spaces(self, space_ids: list[UUID]) -> dict[str, int]:
        project_ids = await self.projects.ids_by_spaces(space_ids)
        counts = await self.delete_projects(project_ids)
        counts["spaces"] = await self.spaces.delete_by_ids(space_ids)
        return counts

    async def delete_workspaces(self, workspace_ids: list[UUID]) -> dict[str, int]:
        space_ids = await self.spaces.ids_by_workspaces(workspace_ids)
        counts = await self.delete_spaces(space_ids)
        counts["workspace_members"] = await self.workspace_members.delete_for_scopes(workspace_ids)
        counts["workspaces"] = await self.workspaces.delete_by_ids(workspace_ids)
        return counts
