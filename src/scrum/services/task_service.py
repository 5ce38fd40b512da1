"""Task service.

Task keys are allocated from the project's counter inside the same
transaction as the insert, so they are unique per project and never reused.
"""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.scrum.core.exceptions import DomainError, NotFoundError, UnauthorizedError, ValidationError
from src.scrum.core.logging import get_logger
from src.scrum.models import ProjectRole, SprintStatus, Task, TaskLabel, TaskStatus
from src.scrum.models.base import utc_now
from src.scrum.repositories import (
    LabelRepository,
    ProjectMemberRepository,
    ProjectRepository,
    SprintRepository,
    TaskFilter,
    TaskRepository,
)
from src.scrum.schemas.task import (
    BulkTaskUpdateItem,
    BulkTaskUpdateResponse,
    BulkTaskUpdateResult,
    TaskCreate,
    TaskRead,
    TaskUpdate,
)
from src.scrum.services.common import apply_updates, plain
from src.scrum.services.events import NotificationDispatcher, TaskAssigned

logger = get_logger(__name__)


class TaskService:
    def __init__(
        self,
        task_repo: TaskRepository,
        project_repo: ProjectRepository,
        sprint_repo: SprintRepository,
        label_repo: LabelRepository,
        member_repo: ProjectMemberRepository,
        session: AsyncSession,
        dispatcher: NotificationDispatcher,
    ):
        self.task_repo = task_repo
        self.project_repo = project_repo
        self.sprint_repo = sprint_repo
        self.label_repo = label_repo
        self.member_repo = member_repo
        self.session = session
        self.dispatcher = dispatcher

    # Reference checks

    async def _check_sprint(
        self, project_id: UUID, sprint_id: UUID | None, current_id: UUID | None = None
    ) -> None:
        """A task can join a sprint of its own project that is not completed yet."""
        if sprint_id is None or sprint_id == current_id:
            return
        sprint = await self.sprint_repo.get_by_id(sprint_id)
        if sprint is None or sprint.project_id != project_id:
            raise ValidationError("Sprint does not belong to this project")
        if sprint.status == SprintStatus.COMPLETED.value:
            raise ValidationError("Cannot move tasks into a completed sprint")

    async def _check_parent(
        self, project_id: UUID, parent_id: UUID | None, task_id: UUID | None = None
    ) -> None:
        """The parent must be in the same project and must not descend from the task."""
        if parent_id is None:
            return
        if parent_id == task_id:
            raise ValidationError("A task cannot be its own parent")
        parent = await self.task_repo.get_by_id(parent_id)
        if parent is None or parent.project_id != project_id:
            raise ValidationError("Parent task does not belong to this project")
        if task_id is None:
            return

        seen = {parent.id}
        ancestor_id = parent.parent_id
        while ancestor_id is not None and ancestor_id not in seen:
            if ancestor_id == task_id:
                raise ValidationError("A task cannot be nested under one of its subtasks")
            seen.add(ancestor_id)
            ancestor = await self.task_repo.get_by_id(ancestor_id)
            ancestor_id = ancestor.parent_id if ancestor is not None else None

    async def _check_labels(self, project_id: UUID, label_ids: Iterable[UUID]) -> None:
        wanted = set(label_ids)
        if not wanted:
            return
        labels = await self.label_repo.get_many(list(wanted))
        if len(labels) != len(wanted) or any(label.project_id != project_id for label in labels):
            raise ValidationError("Labels must belong to this project")

    async def _check_assignee(self, project_id: UUID, assignee_id: UUID | None) -> None:
        if assignee_id is None:
            return
        if await self.member_repo.get_member(project_id, assignee_id) is None:
            raise ValidationError("Assignee must be a member of the project")

    # Reads

    async def read(self, task: Task) -> TaskRead:
        labels = await self.task_repo.label_ids_for([task.id])
        return TaskRead.model_validate({**task.model_dump(), "label_ids": labels.get(task.id, [])})

    async def read_many(self, tasks: list[Task]) -> list[TaskRead]:
        labels = await self.task_repo.label_ids_for([task.id for task in tasks])
        return [
            TaskRead.model_validate({**task.model_dump(), "label_ids": labels.get(task.id, [])})
            for task in tasks
        ]

    async def get(self, task_id: UUID) -> Task:
        task = await self.task_repo.get_by_id(task_id)
        if task is None:
            raise NotFoundError.for_entity("Task", task_id)
        return task

    async def list_by_project(
        self,
        project_id: UUID,
        filters: TaskFilter,
        page: int,
        page_size: int,
        sort_by: str = "order_index",
        sort_order: str = "asc",
    ) -> tuple[list[TaskRead], int]:
        tasks, total = await self.task_repo.list_filtered(
            project_id, filters, page, page_size, sort_by, sort_order
        )
        return await self.read_many(tasks), total

    async def list_by_sprint(self, sprint_id: UUID) -> list[TaskRead]:
        return await self.read_many(await self.task_repo.list_by_sprint(sprint_id))

    # Mutations

    async def create(self, project_id: UUID, reporter_id: UUID, data: TaskCreate) -> TaskRead:
        """Create a task with the next key of its project.

        Raises:
            NotFoundError: If the project does not exist
            ValidationError: If a referenced sprint, parent or label is outside
                the project, or the assignee is not a project member
        """
        await self._check_sprint(project_id, data.sprint_id)
        await self._check_parent(project_id, data.parent_id)
        await self._check_labels(project_id, data.label_ids)
        await self._check_assignee(project_id, data.assignee_id)

        try:
            key = await self.project_repo.next_task_key(project_id)
            if key is None:
                raise NotFoundError.for_entity("Project", project_id)

            fields = {k: plain(v) for k, v in data.model_dump(exclude={"label_ids"}).items()}
            task = Task(key=key, project_id=project_id, reporter_id=reporter_id, **fields)
            self.task_repo.add(task)
            await self.session.flush()
            self.session.add_all(
                [TaskLabel(task_id=task.id, label_id=label_id) for label_id in dict.fromkeys(data.label_ids)]
            )
            await self.session.commit()
            await self.session.refresh(task)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Task created", task_id=str(task.id), key=task.key, project_id=str(project_id))
        if task.assignee_id is not None:
            await self._notify_assigned(task, reporter_id)
        return await self.read(task)

    async def update(self, task: Task, actor_id: UUID, data: TaskUpdate) -> TaskRead:
        """Apply a partial update; `label_ids`, when present, replaces the label set."""
        fields = data.model_fields_set
        if "sprint_id" in fields:
            await self._check_sprint(task.project_id, data.sprint_id, task.sprint_id)
        if "parent_id" in fields:
            await self._check_parent(task.project_id, data.parent_id, task.id)
        if "assignee_id" in fields:
            await self._check_assignee(task.project_id, data.assignee_id)
        if data.label_ids is not None:
            await self._check_labels(task.project_id, data.label_ids)

        previous_assignee = task.assignee_id
        try:
            apply_updates(task, data, exclude={"label_ids"})
            if data.label_ids is not None:
                await self.task_repo.replace_labels(task.id, data.label_ids)
            await self.session.commit()
            await self.session.refresh(task)
        except Exception:
            await self.session.rollback()
            raise

        if task.assignee_id is not None and task.assignee_id != previous_assignee:
            await self._notify_assigned(task, actor_id)
        return await self.read(task)

    async def update_status(self, task: Task, status: TaskStatus) -> TaskRead:
        try:
            task.status = status.value
            task.updated_at = utc_now()
            await self.session.commit()
            await self.session.refresh(task)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Task status updated", task_id=str(task.id), status=status.value)
        return await self.read(task)

    async def update_assignee(self, task: Task, actor_id: UUID, assignee_id: UUID | None) -> TaskRead:
        """Assign or unassign a task. A new assignee other than the actor is notified."""
        await self._check_assignee(task.project_id, assignee_id)

        previous_assignee = task.assignee_id
        try:
            task.assignee_id = assignee_id
            task.updated_at = utc_now()
            await self.session.commit()
            await self.session.refresh(task)
        except Exception:
            await self.session.rollback()
            raise

        if assignee_id is not None and assignee_id != previous_assignee:
            await self._notify_assigned(task, actor_id)
        return await self.read(task)

    async def reorder(self, project_id: UUID, task_ids: list[UUID]) -> list[TaskRead]:
        """Set each named task's order_index to its position in `task_ids`.

        All or nothing: an unknown id or a task from another project aborts
        the whole reorder.
        """
        try:
            tasks = {task.id: task for task in await self.task_repo.get_many_for_update(task_ids)}
            for task_id in task_ids:
                task = tasks.get(task_id)
                if task is None:
                    raise NotFoundError.for_entity("Task", task_id)
                if task.project_id != project_id:
                    raise ValidationError(f"Task {task_id} belongs to another project")

            now = utc_now()
            for position, task_id in enumerate(task_ids):
                tasks[task_id].order_index = position
                tasks[task_id].updated_at = now
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Tasks reordered", project_id=str(project_id), count=len(task_ids))
        return await self.read_many([tasks[task_id] for task_id in task_ids])

    async def bulk_update(
        self, actor_id: UUID, items: list[BulkTaskUpdateItem]
    ) -> BulkTaskUpdateResponse:
        """Apply status, sprint and order changes per task.

        Each item runs in its own savepoint: a failing item is reported and
        rolled back without affecting the others.
        """
        results: list[BulkTaskUpdateResult] = []
        try:
            for item in items:
                try:
                    async with self.session.begin_nested():
                        await self._apply_bulk_item(actor_id, item)
                    results.append(BulkTaskUpdateResult(id=item.id, success=True))
                except DomainError as e:
                    results.append(BulkTaskUpdateResult(id=item.id, success=False, error=e.detail))
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        succeeded = sum(1 for result in results if result.success)
        logger.info("Bulk task update", succeeded=succeeded, failed=len(results) - succeeded)
        return BulkTaskUpdateResponse(
            results=results, succeeded=succeeded, failed=len(results) - succeeded
        )

    async def _apply_bulk_item(self, actor_id: UUID, item: BulkTaskUpdateItem) -> None:
        task = await self.task_repo.get_by_id(item.id)
        member = None
        if task is not None:
            member = await self.member_repo.get_member(task.project_id, actor_id)
        if task is None or member is None:
            raise NotFoundError.for_entity("Task", item.id)
        if member.role == ProjectRole.VIEWER.value:
            raise UnauthorizedError("Viewers cannot modify tasks")

        fields = item.model_fields_set
        if "sprint_id" in fields:
            await self._check_sprint(task.project_id, item.sprint_id, task.sprint_id)
            task.sprint_id = item.sprint_id
        if "status" in fields and item.status is not None:
            task.status = item.status.value
        if "order_index" in fields and item.order_index is not None:
            task.order_index = item.order_index
        task.updated_at = utc_now()
        await self.session.flush()

    async def delete(self, task: Task) -> None:
        """Delete a task with its comments and label links. Subtasks are kept without a parent."""
        try:
            await self.task_repo.delete_with_dependents(task.id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Task deleted", task_id=str(task.id), key=task.key)

    async def _notify_assigned(self, task: Task, actor_id: UUID) -> None:
        await self.dispatcher.dispatch(
            [
                TaskAssigned(
                    task_id=task.id,
                    task_title=task.title,
                    project_id=task.project_id,
                    assignee_id=task.assignee_id,  # type: ignore[arg-type]
                    actor_id=actor_id,
                )
            ]
        )
