"""Project and label schemas for API request/response."""

import re
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.scrum.schemas.common import (
    Color,
    Description,
    Icon,
    Name,
    reject_null,
    strip_optional,
    strip_required,
)

PROJECT_KEY_PATTERN = re.compile(r"^[A-Z][A-Z0-9]{1,9}$")


def normalize_project_key(v: str) -> str:
    """Upper-case a project key and check it is 2-10 letters/digits starting with a letter."""
    v = v.strip().upper()
    if not PROJECT_KEY_PATTERN.match(v):
        raise ValueError(
            "Project key must be 2-10 characters, start with a letter "
            "and contain only letters and digits"
        )
    return v


class ProjectCreate(BaseModel):
    name: Name
    key: str = Field(min_length=2, max_length=10, examples=["ABC"])
    description: Description | None = None
    icon: Icon | None = None
    color: Color | None = None
    lead_id: UUID | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v, "Project name")  # type: ignore[return-value]

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        return normalize_project_key(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return strip_optional(v)


class ProjectUpdate(BaseModel):
    """Partial update. The key can only change while the project has no tasks."""

    name: Name | None = None
    key: str | None = Field(default=None, min_length=2, max_length=10)
    description: Description | None = None
    icon: Icon | None = None
    color: Color | None = None
    lead_id: UUID | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str:
        name = reject_null(v, "Project name")
        return strip_required(name, "Project name")  # type: ignore[return-value]

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str | None) -> str:
        return normalize_project_key(reject_null(v, "Project key"))

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return strip_optional(v)


class ProjectRead(BaseModel):
    id: UUID
    name: str
    key: str
    description: str | None
    icon: str | None
    color: str | None
    space_id: UUID
    lead_id: UUID | None
    task_sequence: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class LabelCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    color: Color = "#6B7280"

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v, "Label name")  # type: ignore[return-value]


class LabelUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=50)
    color: Color | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str:
        name = reject_null(v, "Label name")
        return strip_required(name, "Label name")  # type: ignore[return-value]

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str | None) -> str:
        return reject_null(v, "Label color")


class LabelRead(BaseModel):
    id: UUID
    project_id: UUID
    name: str
    color: str
    created_at: datetime

    model_config = {"from_attributes": True}
