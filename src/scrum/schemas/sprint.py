"""Sprint schemas."""

from datetime import datetime
from typing import Literal, Self
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from src.scrum.models import SprintStatus
from src.scrum.schemas.common import Description, Name, UTCDateTime, strip_optional, strip_required


class _SprintDates(BaseModel):
    start_date: UTCDateTime | None = None
    end_date: UTCDateTime | None = None

    @model_validator(mode="after")
    def validate_dates(self) -> Self:
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class SprintCreate(_SprintDates):
    name: Name
    goal: Description | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v, "Sprint name")  # type: ignore[return-value]

    @field_validator("goal")
    @classmethod
    def validate_goal(cls, v: str | None) -> str | None:
        return strip_optional(v)


class SprintUpdate(_SprintDates):
    name: Name | None = None
    goal: Description | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return strip_required(v, "Sprint name")

    @field_validator("goal")
    @classmethod
    def validate_goal(cls, v: str | None) -> str | None:
        return strip_optional(v)


class SprintComplete(BaseModel):
    """Where unfinished tasks go: "backlog" or the id of another sprint."""

    move_incomplete_to: Literal["backlog"] | UUID = Field(
        default="backlog",
        examples=["backlog", "0b6f7f8e-2d7a-4f44-9c3e-6a1f0c7d9e21"],
    )


class SprintRead(BaseModel):
    id: UUID
    project_id: UUID
    name: str
    goal: str | None
    status: SprintStatus
    start_date: datetime | None
    end_date: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SprintCompleteResponse(BaseModel):
    sprint: SprintRead
    moved_tasks: int
