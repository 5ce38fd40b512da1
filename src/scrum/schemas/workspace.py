"""Workspace, space and membership schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, EmailStr, field_validator

from src.scrum.models import ProjectRole, WorkspaceRole
from src.scrum.schemas.common import (
    Color,
    Description,
    Icon,
    Name,
    reject_null,
    strip_optional,
    strip_required,
)
from src.scrum.schemas.user import UserSummary


class _ContainerFields(BaseModel):
    description: Description | None = None
    icon: Icon | None = None
    color: Color | None = None

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return strip_optional(v)


class WorkspaceCreate(_ContainerFields):
    name: Name

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v, "Workspace name")  # type: ignore[return-value]


class WorkspaceUpdate(_ContainerFields):
    name: Name | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str:
        name = reject_null(v, "Workspace name")
        return strip_required(name, "Workspace name")  # type: ignore[return-value]


class WorkspaceRead(BaseModel):
    id: UUID
    name: str
    description: str | None
    icon: str | None
    color: str | None
    owner_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SpaceCreate(_ContainerFields):
    name: Name

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v, "Space name")  # type: ignore[return-value]


class SpaceUpdate(_ContainerFields):
    name: Name | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str:
        name = reject_null(v, "Space name")
        return strip_required(name, "Space name")  # type: ignore[return-value]


class SpaceRead(BaseModel):
    id: UUID
    name: str
    description: str | None
    icon: str | None
    color: str | None
    workspace_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class WorkspaceMemberAdd(BaseModel):
    """Invite an existing user to a workspace by email."""

    email: EmailStr
    role: WorkspaceRole = WorkspaceRole.MEMBER


class WorkspaceMemberRoleUpdate(BaseModel):
    role: WorkspaceRole


class ProjectMemberAdd(BaseModel):
    user_id: UUID
    role: ProjectRole = ProjectRole.MEMBER


class ProjectMemberRoleUpdate(BaseModel):
    role: ProjectRole


class MemberRead(BaseModel):
    """A membership row with the member's profile attached."""

    user_id: UUID
    role: str
    joined_at: datetime
    user: UserSummary

    @classmethod
    def from_row(cls, member: Any, user: Any) -> "MemberRead":
        return cls(
            user_id=member.user_id,
            role=member.role,
            joined_at=member.joined_at,
            user=UserSummary.model_validate(user),
        )
