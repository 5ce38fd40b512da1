"""Workspace endpoints, including workspace members and spaces."""

from uuid import UUID

from fastapi import APIRouter, Response, status

from src.scrum.api.dependencies import (
    ContributingWorkspace,
    CurrentUser,
    ManagedWorkspace,
    OwnedWorkspace,
    Page,
    ReadableWorkspace,
    SpaceServiceDep,
    UserServiceDep,
    WorkspaceMembershipServiceDep,
    WorkspaceServiceDep,
)
from src.scrum.schemas.pagination import PaginatedResponse
from src.scrum.schemas.workspace import (
    MemberRead,
    SpaceCreate,
    SpaceRead,
    WorkspaceCreate,
    WorkspaceMemberAdd,
    WorkspaceMemberRoleUpdate,
    WorkspaceRead,
    WorkspaceUpdate,
)

router = APIRouter(prefix="/workspaces", tags=["workspaces"])


@router.get("", response_model=PaginatedResponse[WorkspaceRead])
async def list_workspaces(
    user: CurrentUser, page: Page, service: WorkspaceServiceDep
) -> PaginatedResponse[WorkspaceRead]:
    """List workspaces the current user is a member of."""
    workspaces, total = await service.list_for_user(user.id, page.page, page.page_size)
    return PaginatedResponse.build(
        [WorkspaceRead.model_validate(w) for w in workspaces], total, page.page, page.page_size
    )


@router.post("", response_model=WorkspaceRead, status_code=status.HTTP_201_CREATED)
async def create_workspace(
    data: WorkspaceCreate, user: CurrentUser, service: WorkspaceServiceDep
) -> WorkspaceRead:
    """Create a workspace owned by the current user."""
    return WorkspaceRead.model_validate(await service.create(user.id, data))


@router.get(
    "/{workspace_id}",
    response_model=WorkspaceRead,
    responses={404: {"description": "Workspace not found"}},
)
async def get_workspace(workspace: ReadableWorkspace) -> WorkspaceRead:
    return WorkspaceRead.model_validate(workspace)


@router.patch(
    "/{workspace_id}",
    response_model=WorkspaceRead,
    responses={403: {"description": "Requires OWNER or ADMIN"}, 404: {"description": "Not found"}},
)
async def update_workspace(
    data: WorkspaceUpdate, workspace: ManagedWorkspace, service: WorkspaceServiceDep
) -> WorkspaceRead:
    return WorkspaceRead.model_validate(await service.update(workspace, data))


@router.delete(
    "/{workspace_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={403: {"description": "Requires OWNER"}, 404: {"description": "Not found"}},
)
async def delete_workspace(workspace: OwnedWorkspace, service: WorkspaceServiceDep) -> Response:
    """Delete a workspace with all of its spaces, projects and their content."""
    await service.delete(workspace.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Members


@router.get("/{workspace_id}/members", response_model=list[MemberRead])
async def list_workspace_members(
    workspace: ReadableWorkspace, service: WorkspaceMembershipServiceDep
) -> list[MemberRead]:
    rows = await service.list_members(workspace.id)
    return [MemberRead.from_row(member, user) for member, user in rows]


@router.post(
    "/{workspace_id}/members",
    response_model=MemberRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"description": "Workspace or user not found"},
        409: {"description": "User is already a member"},
    },
)
async def add_workspace_member(
    data: WorkspaceMemberAdd,
    workspace: ManagedWorkspace,
    service: WorkspaceMembershipServiceDep,
    user_service: UserServiceDep,
) -> MemberRead:
    """Add an existing user to the workspace by email."""
    member = await service.add_member_by_email(workspace, data.email, data.role)
    return MemberRead.from_row(member, await user_service.get_by_id(member.user_id))


@router.patch(
    "/{workspace_id}/members/{user_id}",
    response_model=MemberRead,
    responses={
        404: {"description": "Not a member"},
        409: {"description": "The owner's role cannot change"},
    },
)
async def update_workspace_member(
    user_id: UUID,
    data: WorkspaceMemberRoleUpdate,
    workspace: ManagedWorkspace,
    service: WorkspaceMembershipServiceDep,
    user_service: UserServiceDep,
) -> MemberRead:
    member = await service.update_role(workspace.id, user_id, data.role)
    return MemberRead.from_row(member, await user_service.get_by_id(user_id))


@router.delete(
    "/{workspace_id}/members/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={409: {"description": "The owner cannot be removed"}},
)
async def remove_workspace_member(
    user_id: UUID, workspace: ManagedWorkspace, service: WorkspaceMembershipServiceDep
) -> Response:
    await service.remove_member(workspace.id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Spaces


@router.get("/{workspace_id}/spaces", response_model=PaginatedResponse[SpaceRead])
async def list_spaces(
    workspace: ReadableWorkspace, page: Page, service: SpaceServiceDep
) -> PaginatedResponse[SpaceRead]:
    spaces, total = await service.list_by_workspace(workspace.id, page.page, page.page_size)
    return PaginatedResponse.build(
        [SpaceRead.model_validate(s) for s in spaces], total, page.page, page.page_size
    )


@router.post(
    "/{workspace_id}/spaces",
    response_model=SpaceRead,
    status_code=status.HTTP_201_CREATED,
    responses={403: {"description": "Viewers cannot create spaces"}},
)
async def create_space(
    data: SpaceCreate, workspace: ContributingWorkspace, service: SpaceServiceDep
) -> SpaceRead:
    return SpaceRead.model_validate(await service.create(workspace.id, data))
