from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.scrum.models import UserStatus
from src.scrum.schemas.common import reject_null, strip_required


class UserRead(BaseModel):
    id: UUID
    email: EmailStr
    full_name: str
    avatar: str | None
    status: UserStatus
    is_active: bool
    last_seen_at: datetime | None
    created_at: datetime

    model_config = {"from_attributes": True}


class UserSummary(BaseModel):
    """Compact user profile embedded in other resources."""

    id: UUID
    email: EmailStr
    full_name: str
    avatar: str | None
    status: UserStatus

    model_config = {"from_attributes": True}


class UserUpdate(BaseModel):
    full_name: str | None = Field(None, min_length=1, max_length=100)
    avatar: str | None = Field(None, max_length=500)
    status: UserStatus | None = None

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v: str | None) -> str:
        name = reject_null(v, "Full name")
        return strip_required(name, "Full name")  # type: ignore[return-value]

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: UserStatus | None) -> UserStatus:
        if v is None:
            raise ValueError("Status cannot be null")
        return v
