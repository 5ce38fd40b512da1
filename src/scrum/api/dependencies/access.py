"""Resource access guards.

Each guard resolves a path parameter to its entity, walks up to the scope
that owns it (workspace or project) and checks the caller's membership:

- not a member: NotFoundError, so existence is not leaked
- member without one of the required roles: UnauthorizedError

A guard built without roles admits any member.
"""

from typing import Annotated, Any
from uuid import UUID

from fastapi import Depends

from src.scrum.api.dependencies.auth import CurrentUser
from src.scrum.api.dependencies.repositories import (
    CommentRepo,
    LabelRepo,
    ProjectMemberRepo,
    ProjectRepo,
    SpaceRepo,
    SprintRepo,
    TaskRepo,
    WorkspaceMemberRepo,
    WorkspaceRepo,
)
from src.scrum.core.exceptions import NotFoundError, UnauthorizedError
from src.scrum.models import (
    Comment,
    Label,
    Project,
    ProjectRole,
    Space,
    Sprint,
    Task,
    Workspace,
    WorkspaceRole,
)
from src.scrum.repositories import MembershipRepository

WORKSPACE_ADMINS = (WorkspaceRole.OWNER, WorkspaceRole.ADMIN)
WORKSPACE_CONTRIBUTORS = (WorkspaceRole.OWNER, WorkspaceRole.ADMIN, WorkspaceRole.MEMBER)
PROJECT_CONTRIBUTORS = (ProjectRole.LEAD, ProjectRole.MEMBER)
PROJECT_LEADS = (ProjectRole.LEAD,)


async def _check_membership(
    member_repo: MembershipRepository[Any],
    scope_id: UUID,
    user_id: UUID,
    roles: tuple[Any, ...],
    entity: str,
    entity_id: UUID,
) -> None:
    member = await member_repo.get_member(scope_id, user_id)
    if member is None:
        raise NotFoundError.for_entity(entity, entity_id)
    if roles and member.role not in {role.value for role in roles}:
        raise UnauthorizedError(
            f"Requires one of the roles: {', '.join(role.value for role in roles)}"
        )


class WorkspaceGuard:
    def __init__(self, *roles: WorkspaceRole):
        self.roles = roles

    async def __call__(
        self,
        workspace_id: UUID,
        user: CurrentUser,
        workspace_repo: WorkspaceRepo,
        member_repo: WorkspaceMemberRepo,
    ) -> Workspace:
        workspace = await workspace_repo.get_by_id(workspace_id)
        if workspace is None:
            raise NotFoundError.for_entity("Workspace", workspace_id)
        await _check_membership(
            member_repo, workspace.id, user.id, self.roles, "Workspace", workspace_id
        )
        return workspace


class SpaceGuard:
    def __init__(self, *roles: WorkspaceRole):
        self.roles = roles

    async def __call__(
        self,
        space_id: UUID,
        user: CurrentUser,
        space_repo: SpaceRepo,
        member_repo: WorkspaceMemberRepo,
    ) -> Space:
        space = await space_repo.get_by_id(space_id)
        if space is None:
            raise NotFoundError.for_entity("Space", space_id)
        await _check_membership(
            member_repo, space.workspace_id, user.id, self.roles, "Space", space_id
        )
        return space


class ProjectGuard:
    def __init__(self, *roles: ProjectRole):
        self.roles = roles

    async def __call__(
        self,
        project_id: UUID,
        user: CurrentUser,
        project_repo: ProjectRepo,
        member_repo: ProjectMemberRepo,
    ) -> Project:
        project = await project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError.for_entity("Project", project_id)
        await _check_membership(member_repo, project.id, user.id, self.roles, "Project", project_id)
        return project


class SprintGuard:
    def __init__(self, *roles: ProjectRole):
        self.roles = roles

    async def __call__(
        self,
        sprint_id: UUID,
        user: CurrentUser,
        sprint_repo: SprintRepo,
        member_repo: ProjectMemberRepo,
    ) -> Sprint:
        sprint = await sprint_repo.get_by_id(sprint_id)
        if sprint is None:
            raise NotFoundError.for_entity("Sprint", sprint_id)
        await _check_membership(
            member_repo, sprint.project_id, user.id, self.roles, "Sprint", sprint_id
        )
        return sprint


class TaskGuard:
    def __init__(self, *roles: ProjectRole):
        self.roles = roles

    async def __call__(
        self,
        task_id: UUID,
        user: CurrentUser,
        task_repo: TaskRepo,
        member_repo: ProjectMemberRepo,
    ) -> Task:
        task = await task_repo.get_by_id(task_id)
        if task is None:
            raise NotFoundError.for_entity("Task", task_id)
        await _check_membership(member_repo, task.project_id, user.id, self.roles, "Task", task_id)
        return task


class CommentGuard:
    def __init__(self, *roles: ProjectRole):
        self.roles = roles

    async def __call__(
        self,
        comment_id: UUID,
        user: CurrentUser,
        comment_repo: CommentRepo,
        task_repo: TaskRepo,
        member_repo: ProjectMemberRepo,
    ) -> Comment:
        comment = await comment_repo.get_by_id(comment_id)
        task = await task_repo.get_by_id(comment.task_id) if comment is not None else None
        if comment is None or task is None:
            raise NotFoundError.for_entity("Comment", comment_id)
        await _check_membership(
            member_repo, task.project_id, user.id, self.roles, "Comment", comment_id
        )
        return comment


class LabelGuard:
    def __init__(self, *roles: ProjectRole):
        self.roles = roles

    async def __call__(
        self,
        label_id: UUID,
        user: CurrentUser,
        label_repo: LabelRepo,
        member_repo: ProjectMemberRepo,
    ) -> Label:
        label = await label_repo.get_by_id(label_id)
        if label is None:
            raise NotFoundError.for_entity("Label", label_id)
        await _check_membership(member_repo, label.project_id, user.id, self.roles, "Label", label_id)
        return label


ReadableWorkspace = Annotated[Workspace, Depends(WorkspaceGuard())]
ContributingWorkspace = Annotated[Workspace, Depends(WorkspaceGuard(*WORKSPACE_CONTRIBUTORS))]
ManagedWorkspace = Annotated[Workspace, Depends(WorkspaceGuard(*WORKSPACE_ADMINS))]
OwnedWorkspace = Annotated[Workspace, Depends(WorkspaceGuard(WorkspaceRole.OWNER))]

ReadableSpace = Annotated[Space, Depends(SpaceGuard())]
ContributableSpace = Annotated[Space, Depends(SpaceGuard(*WORKSPACE_CONTRIBUTORS))]
ManagedSpace = Annotated[Space, Depends(SpaceGuard(*WORKSPACE_ADMINS))]

ReadableProject = Annotated[Project, Depends(ProjectGuard())]
WritableProject = Annotated[Project, Depends(ProjectGuard(*PROJECT_CONTRIBUTORS))]
LedProject = Annotated[Project, Depends(ProjectGuard(*PROJECT_LEADS))]

ReadableSprint = Annotated[Sprint, Depends(SprintGuard())]
WritableSprint = Annotated[Sprint, Depends(SprintGuard(*PROJECT_CONTRIBUTORS))]

ReadableTask = Annotated[Task, Depends(TaskGuard())]
WritableTask = Annotated[Task, Depends(TaskGuard(*PROJECT_CONTRIBUTORS))]

ReadableComment = Annotated[Comment, Depends(CommentGuard())]

ReadableLabel = Annotated[Label, Depends(LabelGuard())]
WritableLabel = Annotated[Label, Depends(LabelGuard(*PROJECT_CONTRIBUTORS))]
