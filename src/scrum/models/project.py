"""Project, its memberships and labels."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from src.scrum.models.base import utc_now
from src.scrum.models.enums import ProjectRole


class Project(SQLModel, table=True):
    """Project under a space.

    task_sequence is the last number handed out for a task key. It only
    ever increases, so numbers of deleted tasks are never reused.
    """

    __tablename__ = "projects"
    __table_args__ = (UniqueConstraint("space_id", "key", name="uq_projects_space_key"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100)
    key: str = Field(max_length=10)
    description: str | None = Field(default=None, max_length=1000)
    icon: str | None = Field(default=None, max_length=100)
    color: str | None = Field(default=None, max_length=20)
    space_id: UUID = Field(foreign_key="spaces.id", index=True)
    lead_id: UUID | None = Field(default=None, foreign_key="users.id")
    task_sequence: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class ProjectMember(SQLModel, table=True):
    __tablename__ = "project_members"
    __table_args__ = (
        UniqueConstraint("project_id", "user_id", name="uq_project_members_project_user"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    role: str = Field(default=ProjectRole.MEMBER.value, max_length=20)
    joined_at: datetime = Field(default_factory=utc_now)


class Label(SQLModel, table=True):
    __tablename__ = "labels"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    name: str = Field(max_length=50)
    color: str = Field(default="#6B7280", max_length=20)
    created_at: datetime = Field(default_factory=utc_now)
