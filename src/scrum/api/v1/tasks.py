"""Task endpoints and task comments."""

from fastapi import APIRouter, Response, status

from src.scrum.api.dependencies import (
    CommentServiceDep,
    CurrentUser,
    Page,
    ReadableTask,
    TaskServiceDep,
    WritableTask,
)
from src.scrum.schemas.comment import CommentCreate, CommentRead
from src.scrum.schemas.pagination import PaginatedResponse
from src.scrum.schemas.task import (
    BulkTaskUpdateRequest,
    BulkTaskUpdateResponse,
    TaskAssigneeUpdate,
    TaskRead,
    TaskStatusUpdate,
    TaskUpdate,
)

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.patch("/bulk", response_model=BulkTaskUpdateResponse)
async def bulk_update_tasks(
    data: BulkTaskUpdateRequest, user: CurrentUser, service: TaskServiceDep
) -> BulkTaskUpdateResponse:
    """Update status, sprint or order of many tasks.

    Items are applied independently; the response reports each one.
    """
    return await service.bulk_update(user.id, data.tasks)


@router.get("/{task_id}", response_model=TaskRead, responses={404: {"description": "Not found"}})
async def get_task(task: ReadableTask, service: TaskServiceDep) -> TaskRead:
    return await service.read(task)


@router.patch(
    "/{task_id}",
    response_model=TaskRead,
    responses={422: {"description": "Reference outside the project"}},
)
async def update_task(
    data: TaskUpdate, task: WritableTask, user: CurrentUser, service: TaskServiceDep
) -> TaskRead:
    """Partially update a task. `label_ids` replaces the whole label set."""
    return await service.update(task, user.id, data)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task: WritableTask, service: TaskServiceDep) -> Response:
    """Delete a task with its comments. Subtasks are kept, without a parent."""
    await service.delete(task)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{task_id}/status", response_model=TaskRead)
async def update_task_status(
    data: TaskStatusUpdate, task: WritableTask, service: TaskServiceDep
) -> TaskRead:
    return await service.update_status(task, data.status)


@router.patch("/{task_id}/assignee", response_model=TaskRead)
async def update_task_assignee(
    data: TaskAssigneeUpdate, task: WritableTask, user: CurrentUser, service: TaskServiceDep
) -> TaskRead:
    return await service.update_assignee(task, user.id, data.assignee_id)


# Comments


@router.get("/{task_id}/comments", response_model=PaginatedResponse[CommentRead])
async def list_comments(
    task: ReadableTask, page: Page, service: CommentServiceDep
) -> PaginatedResponse[CommentRead]:
    comments, total = await service.list_by_task(task.id, page.page, page.page_size)
    return PaginatedResponse.build(
        [CommentRead.model_validate(c) for c in comments], total, page.page, page.page_size
    )


@router.post("/{task_id}/comments", response_model=CommentRead, status_code=status.HTTP_201_CREATED)
async def create_comment(
    data: CommentCreate, task: WritableTask, user: CurrentUser, service: CommentServiceDep
) -> CommentRead:
    return CommentRead.model_validate(await service.create(task, user.id, data))
