"""Sprint model."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.scrum.models.base import utc_now
from src.scrum.models.enums import SprintStatus


class Sprint(SQLModel, table=True):
    """Time-boxed container of tasks: PLANNING -> ACTIVE -> COMPLETED."""

    __tablename__ = "sprints"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    name: str = Field(max_length=100)
    goal: str | None = Field(default=None, max_length=1000)
    status: str = Field(default=SprintStatus.PLANNING.value, max_length=20, index=True)
    start_date: datetime | None = Field(default=None)
    end_date: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
