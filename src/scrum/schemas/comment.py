from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.scrum.schemas.common import strip_required


class CommentCreate(BaseModel):
    content: str = Field(min_length=1, max_length=10000)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        return strip_required(v, "Comment")  # type: ignore[return-value]


class CommentUpdate(CommentCreate):
    pass


class CommentRead(BaseModel):
    id: UUID
    task_id: UUID
    author_id: UUID
    content: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
