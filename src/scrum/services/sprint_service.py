"""Sprint lifecycle: PLANNING -> ACTIVE -> COMPLETED.

Transitions only move forward. Completing a sprint moves its unfinished
tasks to the backlog or to another open sprint of the same project, and the
moves commit in the same transaction as the status change.
"""

from typing import Literal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.scrum.core.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from src.scrum.core.logging import get_logger
from src.scrum.models import Sprint, SprintStatus
from src.scrum.models.base import utc_now
from src.scrum.repositories import SprintRepository, TaskRepository
from src.scrum.schemas.sprint import SprintCreate, SprintUpdate
from src.scrum.services.common import apply_updates
from src.scrum.services.events import NotificationDispatcher, SprintCompleted, SprintStarted

logger = get_logger(__name__)

BACKLOG = "backlog"

# Allowed source state for each transition
_TRANSITIONS = {
    SprintStatus.ACTIVE: SprintStatus.PLANNING,
    SprintStatus.COMPLETED: SprintStatus.ACTIVE,
}


def check_transition(current: str, target: SprintStatus) -> None:
    """Raise InvalidTransitionError unless `current` may move to `target`."""
    source = _TRANSITIONS.get(target)
    if source is None or current != source.value:
        raise InvalidTransitionError(f"Cannot move sprint from {current} to {target.value}")


class SprintService:
    def __init__(
        self,
        sprint_repo: SprintRepository,
        task_repo: TaskRepository,
        session: AsyncSession,
        dispatcher: NotificationDispatcher,
    ):
        self.sprint_repo = sprint_repo
        self.task_repo = task_repo
        self.session = session
        self.dispatcher = dispatcher

    async def create(self, project_id: UUID, data: SprintCreate) -> Sprint:
        try:
            sprint = Sprint(project_id=project_id, **data.model_dump())
            self.sprint_repo.add(sprint)
            await self.session.commit()
            await self.session.refresh(sprint)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Sprint created", sprint_id=str(sprint.id), project_id=str(project_id))
        return sprint

    async def get(self, sprint_id: UUID) -> Sprint:
        sprint = await self.sprint_repo.get_by_id(sprint_id)
        if sprint is None:
            raise NotFoundError.for_entity("Sprint", sprint_id)
        return sprint

    async def list_by_project(
        self, project_id: UUID, status: SprintStatus | None = None
    ) -> list[Sprint]:
        return await self.sprint_repo.list_by_project(project_id, status)

    async def update(self, sprint: Sprint, data: SprintUpdate) -> Sprint:
        """Update name, goal and dates. Dates are checked against the stored ones too."""
        fields = data.model_dump(exclude_unset=True)
        start = fields.get("start_date", sprint.start_date)
        end = fields.get("end_date", sprint.end_date)
        if start is not None and end is not None and end < start:
            raise ValidationError("end_date must not be before start_date")
        if "name" in fields and fields["name"] is None:
            raise ValidationError("Sprint name cannot be null")

        try:
            apply_updates(sprint, data)
            await self.session.commit()
            await self.session.refresh(sprint)
        except Exception:
            await self.session.rollback()
            raise
        return sprint

    async def delete(self, sprint_id: UUID) -> None:
        """Delete a sprint; its tasks go back to the backlog."""
        sprint = await self.get(sprint_id)
        try:
            moved = await self.task_repo.detach_from_sprint(sprint_id)
            await self.sprint_repo.delete(sprint)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Sprint deleted", sprint_id=str(sprint_id), moved_to_backlog=moved)

    async def start(self, sprint_id: UUID) -> Sprint:
        """Move a PLANNING sprint to ACTIVE and stamp its start date.

        Raises:
            NotFoundError: If the sprint does not exist
            InvalidTransitionError: If the sprint is not PLANNING
        """
        try:
            sprint = await self.sprint_repo.get_for_update(sprint_id)
            if sprint is None:
                raise NotFoundError.for_entity("Sprint", sprint_id)
            check_transition(sprint.status, SprintStatus.ACTIVE)

            now = utc_now()
            sprint.status = SprintStatus.ACTIVE.value
            sprint.start_date = now
            sprint.updated_at = now
            await self.session.commit()
            await self.session.refresh(sprint)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Sprint started", sprint_id=str(sprint.id), project_id=str(sprint.project_id))
        await self.dispatcher.dispatch(
            [SprintStarted(sprint_id=sprint.id, sprint_name=sprint.name, project_id=sprint.project_id)]
        )
        return sprint

    async def complete(
        self, sprint_id: UUID, move_incomplete_to: Literal["backlog"] | UUID = BACKLOG
    ) -> tuple[Sprint, int]:
        """Complete an ACTIVE sprint and move its unfinished tasks.

        Args:
            sprint_id: Sprint to complete
            move_incomplete_to: "backlog" or the id of another sprint in the
                same project that is not COMPLETED

        Returns:
            The completed sprint and the number of tasks moved.

        Raises:
            NotFoundError: If the sprint or target sprint does not exist
            InvalidTransitionError: If the sprint is not ACTIVE
            ValidationError: If the target sprint is not a valid destination
        """
        try:
            sprint = await self.sprint_repo.get_for_update(sprint_id)
            if sprint is None:
                raise NotFoundError.for_entity("Sprint", sprint_id)
            check_transition(sprint.status, SprintStatus.COMPLETED)

            target_id = None
            if move_incomplete_to != BACKLOG:
                target = await self._get_target(sprint, move_incomplete_to)  # type: ignore[arg-type]
                target_id = target.id

            moved = await self.task_repo.move_unfinished(sprint.id, target_id)
            now = utc_now()
            sprint.status = SprintStatus.COMPLETED.value
            sprint.end_date = now
            sprint.updated_at = now
            await self.session.commit()
            await self.session.refresh(sprint)
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Sprint completed",
            sprint_id=str(sprint.id),
            moved=moved,
            target=str(target_id) if target_id else BACKLOG,
        )
        await self.dispatcher.dispatch(
            [SprintCompleted(sprint_id=sprint.id, sprint_name=sprint.name, project_id=sprint.project_id)]
        )
        return sprint, moved

    async def _get_target(self, sprint: Sprint, target_id: UUID) -> Sprint:
        if target_id == sprint.id:
            raise ValidationError("A sprint cannot move its tasks to itself")
        target = await self.sprint_repo.get_by_id(target_id)
        if target is None:
            raise NotFoundError.for_entity("Sprint", target_id)
        if target.project_id != sprint.project_id:
            raise ValidationError("Target sprint belongs to another project")
        if target.status == SprintStatus.COMPLETED.value:
            raise ValidationError("Target sprint is already completed")
        return target
