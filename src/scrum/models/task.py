"""Task, task-label link and comment models."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Index, UniqueConstraint
from sqlmodel import Field, SQLModel

from src.scrum.models.base import utc_now
from src.scrum.models.enums import TaskPriority, TaskStatus, TaskType


class Task(SQLModel, table=True):
    """Unit of work. `key` is assigned once at creation and never changes."""

    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_project_order", "project_id", "order_index"),
        Index("ix_tasks_sprint_order", "sprint_id", "order_index"),
        UniqueConstraint("project_id", "key", name="uq_tasks_project_key"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    key: str = Field(max_length=32, index=True)
    title: str = Field(max_length=255)
    description: str | None = Field(default=None)
    status: str = Field(default=TaskStatus.BACKLOG.value, max_length=20, index=True)
    priority: str = Field(default=TaskPriority.MEDIUM.value, max_length=20)
    type: str = Field(default=TaskType.TASK.value, max_length=20)
    story_points: int | None = Field(default=None)
    due_date: datetime | None = Field(default=None)
    order_index: int = Field(default=0)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    sprint_id: UUID | None = Field(default=None, foreign_key="sprints.id")
    assignee_id: UUID | None = Field(default=None, foreign_key="users.id", index=True)
    reporter_id: UUID = Field(foreign_key="users.id")
    parent_id: UUID | None = Field(default=None, foreign_key="tasks.id", index=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class TaskLabel(SQLModel, table=True):
    __tablename__ = "task_labels"

    task_id: UUID = Field(foreign_key="tasks.id", primary_key=True)
    label_id: UUID = Field(foreign_key="labels.id", primary_key=True, index=True)


class Comment(SQLModel, table=True):
    __tablename__ = "comments"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    task_id: UUID = Field(foreign_key="tasks.id", index=True)
    author_id: UUID = Field(foreign_key="users.id")
    content: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
