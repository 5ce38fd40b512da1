"""Repositories for Task and its label links."""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import case, delete, or_, update
from sqlmodel import select

from src.scrum.models import Comment, Task, TaskLabel, TaskPriority, TaskStatus
from src.scrum.repositories.base import BaseRepository

_CLOSED_STATUSES = (TaskStatus.DONE.value, TaskStatus.CANCELLED.value)

_PRIORITY_RANK = case(
    {priority.value: rank for rank, priority in enumerate(TaskPriority)},
    value=Task.priority,
    else_=len(TaskPriority),
)

SORTABLE_COLUMNS: dict[str, Any] = {
    "order_index": Task.order_index,
    "created_at": Task.created_at,
    "updated_at": Task.updated_at,
    "priority": _PRIORITY_RANK,
    "due_date": Task.due_date,
    "key": Task.key,
}


@dataclass
class TaskFilter:
    """Criteria for listing tasks within a project. Unset fields do not filter."""

    sprint_id: UUID | None = None
    backlog_only: bool = False
    status: list[str] = field(default_factory=list)
    priority: list[str] = field(default_factory=list)
    type: list[str] = field(default_factory=list)
    assignee_id: UUID | None = None
    label_ids: list[UUID] = field(default_factory=list)
    search: str | None = None


class TaskRepository(BaseRepository[Task]):
    model = Task

    async def list_filtered(
        self,
        project_id: UUID,
        filters: TaskFilter,
        page: int,
        page_size: int,
        sort_by: str = "order_index",
        sort_order: str = "asc",
    ) -> tuple[list[Task], int]:
        query = select(Task).where(Task.project_id == project_id)

        if filters.backlog_only:
            query = query.where(Task.sprint_id.is_(None))  # type: ignore[union-attr]
        elif filters.sprint_id is not None:
            query = query.where(Task.sprint_id == filters.sprint_id)
        if filters.status:
            query = query.where(Task.status.in_(filters.status))  # type: ignore[attr-defined]
        if filters.priority:
            query = query.where(Task.priority.in_(filters.priority))  # type: ignore[attr-defined]
        if filters.type:
            query = query.where(Task.type.in_(filters.type))  # type: ignore[attr-defined]
        if filters.assignee_id is not None:
            query = query.where(Task.assignee_id == filters.assignee_id)
        if filters.label_ids:
            labelled = select(TaskLabel.task_id).where(
                TaskLabel.label_id.in_(filters.label_ids)  # type: ignore[attr-defined]
            )
            query = query.where(Task.id.in_(labelled))  # type: ignore[attr-defined]
        if filters.search:
            escaped = (
                filters.search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            )
            pattern = f"%{escaped}%"
            query = query.where(
                or_(
                    Task.title.ilike(pattern, escape="\\"),  # type: ignore[attr-defined]
                    Task.key.ilike(pattern, escape="\\"),  # type: ignore[attr-defined]
                )
            )

        column = SORTABLE_COLUMNS.get(sort_by, Task.order_index)
        primary = column.desc() if sort_order == "desc" else column.asc()
        return await self.paginate(query, page, page_size, [primary, Task.created_at])

    async def list_by_sprint(self, sprint_id: UUID) -> list[Task]:
        result = await self.session.execute(
            select(Task)
            .where(Task.sprint_id == sprint_id)
            .order_by(Task.order_index, Task.created_at)
        )
        return list(result.scalars().all())

    async def get_many_for_update(self, task_ids: list[UUID]) -> list[Task]:
        if not task_ids:
            return []
        result = await self.session.execute(
            select(Task).where(Task.id.in_(task_ids)).with_for_update()  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def move_unfinished(self, sprint_id: UUID, target_sprint_id: UUID | None) -> int:
        """Move every non-DONE task of a sprint to the target (None = backlog).

        Returns the number of tasks moved.
        """
        stmt = (
            update(Task)
            .where(Task.sprint_id == sprint_id)  # type: ignore[arg-type]
            .where(Task.status != TaskStatus.DONE.value)  # type: ignore[arg-type]
            .values(sprint_id=target_sprint_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def detach_from_sprint(self, sprint_id: UUID) -> int:
        """Send all tasks of a sprint to the backlog."""
        stmt = (
            update(Task)
            .where(Task.sprint_id == sprint_id)  # type: ignore[arg-type]
            .values(sprint_id=None)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def label_ids_for(self, task_ids: list[UUID]) -> dict[UUID, list[UUID]]:
        """Map each task id to the ids of its labels."""
        labels: dict[UUID, list[UUID]] = defaultdict(list)
        if not task_ids:
            return labels
        result = await self.session.execute(
            select(TaskLabel.task_id, TaskLabel.label_id).where(
                TaskLabel.task_id.in_(task_ids)  # type: ignore[attr-defined]
            )
        )
        for task_id, label_id in result.all():
            labels[task_id].append(label_id)
        return labels

    async def replace_labels(self, task_id: UUID, label_ids: list[UUID]) -> None:
        await self.session.execute(delete(TaskLabel).where(TaskLabel.task_id == task_id))  # type: ignore[arg-type]
        self.session.add_all(
            [TaskLabel(task_id=task_id, label_id=label_id) for label_id in dict.fromkeys(label_ids)]
        )

    async def delete_with_dependents(self, task_id: UUID) -> None:
        """Delete a task, its comments and label links; orphan its subtasks."""
        await self.session.execute(
            update(Task)
            .where(Task.parent_id == task_id)  # type: ignore[arg-type]
            .values(parent_id=None)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(delete(Comment).where(Comment.task_id == task_id))  # type: ignore[arg-type]
        await self.session.execute(delete(TaskLabel).where(TaskLabel.task_id == task_id))  # type: ignore[arg-type]
        await self.session.execute(delete(Task).where(Task.id == task_id))  # type: ignore[arg-type]

    async def delete_by_projects(self, project_ids: list[UUID]) -> int:
        """Delete all tasks of the given projects with their comments and label links."""
        if not project_ids:
            return 0
        task_ids = select(Task.id).where(Task.project_id.in_(project_ids))  # type: ignore[attr-defined]
        await self.session.execute(delete(Comment).where(Comment.task_id.in_(task_ids)))  # type: ignore[attr-defined]
        await self.session.execute(delete(TaskLabel).where(TaskLabel.task_id.in_(task_ids)))  # type: ignore[attr-defined]
        await self.session.execute(
            update(Task)
            .where(Task.project_id.in_(project_ids))  # type: ignore[attr-defined]
            .values(parent_id=None)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(
            delete(Task).where(Task.project_id.in_(project_ids))  # type: ignore[attr-defined]
        )
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def list_open_assigned_due_between(self, start: datetime, end: datetime) -> list[Task]:
        """Assigned, not DONE/CANCELLED tasks with due_date in [start, end)."""
        result = await self.session.execute(
            select(Task).where(
                Task.assignee_id.is_not(None),  # type: ignore[union-attr]
                Task.status.not_in(_CLOSED_STATUSES),  # type: ignore[attr-defined]
                Task.due_date >= start,  # type: ignore[operator]
                Task.due_date < end,  # type: ignore[operator]
            )
        )
        return list(result.scalars().all())

    async def list_open_assigned_overdue(self, moment: datetime) -> list[Task]:
        """Assigned, not DONE/CANCELLED tasks whose due_date has passed."""
        result = await self.session.execute(
            select(Task).where(
                Task.assignee_id.is_not(None),  # type: ignore[union-attr]
                Task.status.not_in(_CLOSED_STATUSES),  # type: ignore[attr-defined]
                Task.due_date < moment,  # type: ignore[operator]
            )
        )
        return list(result.scalars().all())
