"""Sprint endpoints and lifecycle transitions."""

from fastapi import APIRouter, Response, status

from src.scrum.api.dependencies import (
    ReadableSprint,
    SprintServiceDep,
    TaskServiceDep,
    WritableSprint,
)
from src.scrum.schemas.sprint import SprintComplete, SprintCompleteResponse, SprintRead, SprintUpdate
from src.scrum.schemas.task import TaskRead

router = APIRouter(prefix="/sprints", tags=["sprints"])


@router.get("/{sprint_id}", response_model=SprintRead, responses={404: {"description": "Not found"}})
async def get_sprint(sprint: ReadableSprint) -> SprintRead:
    return SprintRead.model_validate(sprint)


@router.patch("/{sprint_id}", response_model=SprintRead)
async def update_sprint(
    data: SprintUpdate, sprint: WritableSprint, service: SprintServiceDep
) -> SprintRead:
    return SprintRead.model_validate(await service.update(sprint, data))


@router.delete("/{sprint_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_sprint(sprint: WritableSprint, service: SprintServiceDep) -> Response:
    """Delete a sprint. Its tasks move to the backlog."""
    await service.delete(sprint.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{sprint_id}/start",
    response_model=SprintRead,
    responses={409: {"description": "Sprint is not in PLANNING"}},
)
async def start_sprint(sprint: WritableSprint, service: SprintServiceDep) -> SprintRead:
    return SprintRead.model_validate(await service.start(sprint.id))


@router.post(
    "/{sprint_id}/complete",
    response_model=SprintCompleteResponse,
    responses={
        409: {"description": "Sprint is not ACTIVE"},
        422: {"description": "Target sprint is not a valid destination"},
    },
)
async def complete_sprint(
    sprint: WritableSprint,
    service: SprintServiceDep,
    data: SprintComplete | None = None,
) -> SprintCompleteResponse:
    """Complete an active sprint.

    Unfinished tasks move to the backlog (default) or to the sprint named in
    `move_incomplete_to`. DONE tasks stay in the completed sprint.
    """
    target = data.move_incomplete_to if data is not None else "backlog"
    completed, moved = await service.complete(sprint.id, target)
    return SprintCompleteResponse(sprint=SprintRead.model_validate(completed), moved_tasks=moved)


@router.get("/{sprint_id}/tasks", response_model=list[TaskRead])
async def list_sprint_tasks(sprint: ReadableSprint, service: TaskServiceDep) -> list[TaskRead]:
    return await service.list_by_sprint(sprint.id)
