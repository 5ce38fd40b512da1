"""Space endpoints and the projects inside a space."""

from fastapi import APIRouter, Response, status

from src.scrum.api.dependencies import (
    ContributableSpace,
    CurrentUser,
    ManagedSpace,
    Page,
    ProjectServiceDep,
    ReadableSpace,
    SpaceServiceDep,
)
from src.scrum.schemas.pagination import PaginatedResponse
from src.scrum.schemas.project import ProjectCreate, ProjectRead
from src.scrum.schemas.workspace import SpaceRead, SpaceUpdate

router = APIRouter(prefix="/spaces", tags=["spaces"])


@router.get("/{space_id}", response_model=SpaceRead, responses={404: {"description": "Not found"}})
async def get_space(space: ReadableSpace) -> SpaceRead:
    return SpaceRead.model_validate(space)


@router.patch("/{space_id}", response_model=SpaceRead)
async def update_space(data: SpaceUpdate, space: ManagedSpace, service: SpaceServiceDep) -> SpaceRead:
    return SpaceRead.model_validate(await service.update(space, data))


@router.delete("/{space_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_space(space: ManagedSpace, service: SpaceServiceDep) -> Response:
    """Delete a space with all of its projects."""
    await service.delete(space.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{space_id}/projects", response_model=PaginatedResponse[ProjectRead])
async def list_projects(
    space: ReadableSpace, page: Page, service: ProjectServiceDep
) -> PaginatedResponse[ProjectRead]:
    projects, total = await service.list_by_space(space.id, page.page, page.page_size)
    return PaginatedResponse.build(
        [ProjectRead.model_validate(p) for p in projects], total, page.page, page.page_size
    )


@router.post(
    "/{space_id}/projects",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        403: {"description": "Viewers cannot create projects"},
        409: {"description": "Project key already used in this space"},
    },
)
async def create_project(
    data: ProjectCreate, space: ContributableSpace, user: CurrentUser, service: ProjectServiceDep
) -> ProjectRead:
    """Create a project. The creator becomes its LEAD."""
    return ProjectRead.model_validate(await service.create(space.id, user.id, data))
