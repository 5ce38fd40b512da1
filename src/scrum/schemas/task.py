"""Task schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.scrum.models import TaskPriority, TaskStatus, TaskType
from src.scrum.schemas.common import UTCDateTime, strip_optional, strip_required


class TaskCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=10000)
    status: TaskStatus = TaskStatus.BACKLOG
    priority: TaskPriority = TaskPriority.MEDIUM
    type: TaskType = TaskType.TASK
    story_points: int | None = Field(default=None, ge=0, le=1000)
    due_date: UTCDateTime | None = None
    order_index: int = Field(default=0, ge=0)
    sprint_id: UUID | None = None
    assignee_id: UUID | None = None
    parent_id: UUID | None = None
    label_ids: list[UUID] = Field(default_factory=list, max_length=50)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return strip_required(v, "Task title")  # type: ignore[return-value]

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return strip_optional(v)


class TaskUpdate(BaseModel):
    """Partial update.

    Only fields present in the request body are applied, so nullable
    references (sprint, assignee, parent, due date) can be cleared by
    sending an explicit null.
    """

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=10000)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    type: TaskType | None = None
    story_points: int | None = Field(default=None, ge=0, le=1000)
    due_date: UTCDateTime | None = None
    order_index: int | None = Field(default=None, ge=0)
    sprint_id: UUID | None = None
    assignee_id: UUID | None = None
    parent_id: UUID | None = None
    label_ids: list[UUID] | None = Field(default=None, max_length=50)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        return strip_required(v, "Task title")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return strip_optional(v)

    @field_validator("status", "priority", "type", "title", "order_index")
    @classmethod
    def reject_null(cls, v: object) -> object:
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class TaskStatusUpdate(BaseModel):
    status: TaskStatus


class TaskAssigneeUpdate(BaseModel):
    assignee_id: UUID | None


class TaskReorderRequest(BaseModel):
    """Task ids in their new order; each task gets its position as order_index."""

    task_ids: list[UUID] = Field(min_length=1, max_length=500)

    @field_validator("task_ids")
    @classmethod
    def validate_unique(cls, v: list[UUID]) -> list[UUID]:
        if len(set(v)) != len(v):
            raise ValueError("task_ids must not contain duplicates")
        return v


class BulkTaskUpdateItem(BaseModel):
    """One entry of a bulk update. Only fields present are applied."""

    id: UUID
    status: TaskStatus | None = None
    sprint_id: UUID | None = None
    order_index: int | None = Field(default=None, ge=0)


class BulkTaskUpdateRequest(BaseModel):
    tasks: list[BulkTaskUpdateItem] = Field(min_length=1, max_length=200)


class BulkTaskUpdateResult(BaseModel):
    id: UUID
    success: bool
    error: str | None = None


class BulkTaskUpdateResponse(BaseModel):
    results: list[BulkTaskUpdateResult]
    succeeded: int
    failed: int


class TaskRead(BaseModel):
    id: UUID
    key: str
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    type: TaskType
    story_points: int | None
    due_date: datetime | None
    order_index: int
    project_id: UUID
    sprint_id: UUID | None
    assignee_id: UUID | None
    reporter_id: UUID
    parent_id: UUID | None
    label_ids: list[UUID] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
