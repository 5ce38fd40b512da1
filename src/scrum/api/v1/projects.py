"""Project endpoints: project settings, members, sprints, tasks and labels."""

from typing import Annotated, Literal
from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from src.scrum.api.dependencies import (
    CurrentUser,
    LabelServiceDep,
    LedProject,
    Page,
    ProjectMembershipServiceDep,
    ProjectServiceDep,
    ReadableProject,
    SprintServiceDep,
    TaskServiceDep,
    UserServiceDep,
    WritableProject,
)
from src.scrum.models import SprintStatus, TaskPriority, TaskStatus, TaskType
from src.scrum.repositories import TaskFilter
from src.scrum.schemas.pagination import PaginatedResponse
from src.scrum.schemas.project import LabelCreate, LabelRead, ProjectRead, ProjectUpdate
from src.scrum.schemas.sprint import SprintCreate, SprintRead
from src.scrum.schemas.task import TaskCreate, TaskRead, TaskReorderRequest
from src.scrum.schemas.workspace import MemberRead, ProjectMemberAdd, ProjectMemberRoleUpdate

router = APIRouter(prefix="/projects", tags=["projects"])

TaskSortField = Literal["order_index", "created_at", "updated_at", "priority", "due_date", "key"]


@router.get("/{project_id}", response_model=ProjectRead, responses={404: {"description": "Not found"}})
async def get_project(project: ReadableProject) -> ProjectRead:
    return ProjectRead.model_validate(project)


@router.patch(
    "/{project_id}",
    response_model=ProjectRead,
    responses={
        403: {"description": "Requires LEAD"},
        409: {"description": "Key already used or frozen by existing tasks"},
    },
)
async def update_project(
    data: ProjectUpdate, project: LedProject, service: ProjectServiceDep
) -> ProjectRead:
    return ProjectRead.model_validate(await service.update(project, data))


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(project: LedProject, service: ProjectServiceDep) -> Response:
    """Delete a project with its sprints, tasks, comments, labels and members."""
    await service.delete(project.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Members


@router.get("/{project_id}/members", response_model=list[MemberRead])
async def list_project_members(
    project: ReadableProject, service: ProjectMembershipServiceDep
) -> list[MemberRead]:
    rows = await service.list_members(project.id)
    return [MemberRead.from_row(member, user) for member, user in rows]


@router.post(
    "/{project_id}/members",
    response_model=MemberRead,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"description": "User not found"}, 409: {"description": "Already a member"}},
)
async def add_project_member(
    data: ProjectMemberAdd,
    project: LedProject,
    service: ProjectMembershipServiceDep,
    user_service: UserServiceDep,
) -> MemberRead:
    member = await service.add_member(project, data.user_id, data.role)
    return MemberRead.from_row(member, await user_service.get_by_id(member.user_id))


@router.patch("/{project_id}/members/{user_id}", response_model=MemberRead)
async def update_project_member(
    user_id: UUID,
    data: ProjectMemberRoleUpdate,
    project: LedProject,
    service: ProjectMembershipServiceDep,
    user_service: UserServiceDep,
) -> MemberRead:
    member = await service.update_role(project.id, user_id, data.role)
    return MemberRead.from_row(member, await user_service.get_by_id(user_id))


@router.delete("/{project_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_project_member(
    user_id: UUID, project: LedProject, service: ProjectMembershipServiceDep
) -> Response:
    await service.remove_member(project.id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Sprints


@router.get("/{project_id}/sprints", response_model=list[SprintRead])
async def list_sprints(
    project: ReadableProject,
    service: SprintServiceDep,
    sprint_status: Annotated[SprintStatus | None, Query(alias="status")] = None,
) -> list[SprintRead]:
    sprints = await service.list_by_project(project.id, sprint_status)
    return [SprintRead.model_validate(s) for s in sprints]


@router.post("/{project_id}/sprints", response_model=SprintRead, status_code=status.HTTP_201_CREATED)
async def create_sprint(
    data: SprintCreate, project: WritableProject, service: SprintServiceDep
) -> SprintRead:
    return SprintRead.model_validate(await service.create(project.id, data))


# Tasks


@router.get("/{project_id}/tasks", response_model=PaginatedResponse[TaskRead])
async def list_tasks(
    project: ReadableProject,
    page: Page,
    service: TaskServiceDep,
    sprint_id: UUID | None = None,
    backlog: Annotated[bool, Query(description="Only tasks without a sprint")] = False,
    task_status: Annotated[list[TaskStatus] | None, Query(alias="status")] = None,
    priority: Annotated[list[TaskPriority] | None, Query()] = None,
    task_type: Annotated[list[TaskType] | None, Query(alias="type")] = None,
    assignee_id: UUID | None = None,
    label_id: Annotated[list[UUID] | None, Query()] = None,
    search: Annotated[str | None, Query(max_length=200)] = None,
    sort_by: TaskSortField = "order_index",
    sort_order: Literal["asc", "desc"] = "asc",
) -> PaginatedResponse[TaskRead]:
    """List and filter tasks of a project.

    Multi-valued filters (status, priority, type, label_id) may be repeated and
    match any of the given values. `search` matches title or key, case-insensitively.
    """
    filters = TaskFilter(
        sprint_id=sprint_id,
        backlog_only=backlog,
        status=[s.value for s in task_status or []],
        priority=[p.value for p in priority or []],
        type=[t.value for t in task_type or []],
        assignee_id=assignee_id,
        label_ids=label_id or [],
        search=search.strip() if search and search.strip() else None,
    )
    tasks, total = await service.list_by_project(
        project.id, filters, page.page, page.page_size, sort_by, sort_order
    )
    return PaginatedResponse.build(tasks, total, page.page, page.page_size)


@router.post(
    "/{project_id}/tasks",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"description": "Sprint, parent, labels or assignee outside the project"}},
)
async def create_task(
    data: TaskCreate, project: WritableProject, user: CurrentUser, service: TaskServiceDep
) -> TaskRead:
    """Create a task. Its key is the project key plus the next sequence number."""
    return await service.create(project.id, user.id, data)


@router.post(
    "/{project_id}/tasks/reorder",
    response_model=list[TaskRead],
    responses={
        404: {"description": "Unknown task id"},
        422: {"description": "Task belongs to another project"},
    },
)
async def reorder_tasks(
    data: TaskReorderRequest, project: WritableProject, service: TaskServiceDep
) -> list[TaskRead]:
    """Give each listed task its position in the list as order index."""
    return await service.reorder(project.id, data.task_ids)


# Labels


@router.get("/{project_id}/labels", response_model=list[LabelRead])
async def list_labels(project: ReadableProject, service: LabelServiceDep) -> list[LabelRead]:
    return [LabelRead.model_validate(label) for label in await service.list_by_project(project.id)]


@router.post("/{project_id}/labels", response_model=LabelRead, status_code=status.HTTP_201_CREATED)
async def create_label(
    data: LabelCreate, project: WritableProject, service: LabelServiceDep
) -> LabelRead:
    return LabelRead.model_validate(await service.create(project.id, data))
