"""Repositories for workspace and project memberships.

Both scope kinds share the same shape: one row per (scope, user) with a
role. Subclasses only name the model and its scope column.
"""

from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import SQLModel, select

from src.scrum.models import ProjectMember, User, WorkspaceMember
from src.scrum.repositories.base import BaseRepository


MemberType = TypeVar("MemberType", bound=SQLModel)


class MembershipRepository(BaseRepository[MemberType]):
    """Membership rows for one kind of scope."""

    scope_column: str

    @property
    def _scope(self) -> Any:
        return getattr(self.model, self.scope_column)

    async def get_member(self, scope_id: UUID, user_id: UUID) -> MemberType | None:
        result = await self.session.execute(
            select(self.model).where(
                self._scope == scope_id,
                self.model.user_id == user_id,  # type: ignore[attr-defined]
            )
        )
        return result.scalar_one_or_none()

    async def list_with_users(self, scope_id: UUID) -> list[tuple[MemberType, User]]:
        """List members of a scope joined with their user profile, oldest first."""
        result = await self.session.execute(
            select(self.model, User)
            .join(User, User.id == self.model.user_id)  # type: ignore[attr-defined]
            .where(self._scope == scope_id)
            .order_by(self.model.joined_at)  # type: ignore[attr-defined]
        )
        return [(member, user) for member, user in result.all()]

    async def list_user_ids(self, scope_id: UUID) -> list[UUID]:
        result = await self.session.execute(
            select(self.model.user_id).where(self._scope == scope_id)  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def delete_member(self, scope_id: UUID, user_id: UUID) -> int:
        """Delete the membership row if present. Returns rows deleted (0 or 1)."""
        stmt = delete(self.model).where(
            self._scope == scope_id,
            self.model.user_id == user_id,  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def delete_for_scopes(self, scope_ids: list[UUID]) -> int:
        if not scope_ids:
            return 0
        result = await self.session.execute(delete(self.model).where(self._scope.in_(scope_ids)))
        return result.rowcount or 0  # type: ignore[attr-defined]


class WorkspaceMemberRepository(MembershipRepository[WorkspaceMember]):
    model = WorkspaceMember
    scope_column = "workspace_id"


class ProjectMemberRepository(MembershipRepository[ProjectMember]):
    model = ProjectMember
    scope_column = "project_id"
