"""Role-scoped membership management for workspaces and projects.

Both scope kinds follow one set of rules:

- add: fails with AlreadyMemberError if the (scope, user) row exists
- update role: fails with NotFoundError if there is no row; overwrites in place
- remove: idempotent, removing a non-member is a no-op
- list: members joined with their user profile

Workspace and project roles are independent; holding a role in a workspace
grants nothing in its projects.
"""

from enum import Enum
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from src.scrum.core.exceptions import (
    AlreadyMemberError,
    InvalidOperationError,
    NotFoundError,
)
from src.scrum.core.logging import get_logger
from src.scrum.models import (
    ProjectMember,
    User,
    Workspace,
    WorkspaceMember,
    WorkspaceRole,
)
from src.scrum.repositories import (
    MembershipRepository,
    ProjectMemberRepository,
    UserRepository,
    WorkspaceMemberRepository,
)
from src.scrum.services.events import MemberAdded, NotificationDispatcher

logger = get_logger(__name__)


MemberType = TypeVar("MemberType", bound=SQLModel)


class MembershipService(Generic[MemberType]):
    scope: str

    def __init__(
        self,
        member_repo: MembershipRepository[MemberType],
        user_repo: UserRepository,
        session: AsyncSession,
        dispatcher: NotificationDispatcher,
    ):
        self.member_repo = member_repo
        self.user_repo = user_repo
        self.session = session
        self.dispatcher = dispatcher

    def _check_change(self, member: Any, new_role: Enum | None) -> None:
        """Hook for scope-specific restrictions on role changes and removals."""

    async def add_member(self, scope_obj: Any, user_id: UUID, role: Enum) -> MemberType:
        """Add a user to the scope with the given role.

        Raises:
            NotFoundError: If the user does not exist
            AlreadyMemberError: If the user is already a member
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError.for_entity("User", user_id)
        self._check_change(None, role)

        existing = await self.member_repo.get_member(scope_obj.id, user_id)
        if existing is not None:
            raise AlreadyMemberError(f"User {user_id} is already a member of this {self.scope}")

        try:
            member = self.member_repo.model(
                **{self.member_repo.scope_column: scope_obj.id},
                user_id=user_id,
                role=role.value,
            )
            self.member_repo.add(member)
            await self.session.commit()
            await self.session.refresh(member)
        except IntegrityError as e:
            # Unique constraint on (scope, user) catches a concurrent add
            await self.session.rollback()
            raise AlreadyMemberError(
                f"User {user_id} is already a member of this {self.scope}"
            ) from e
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to add member", scope=self.scope, error=str(e))
            raise

        logger.info(
            "Member added",
            scope=self.scope,
            scope_id=str(scope_obj.id),
            user_id=str(user_id),
            role=role.value,
        )
        event = MemberAdded(
            scope=self.scope,
            scope_id=scope_obj.id,
            scope_name=scope_obj.name,
            user_id=user_id,
        )
        await self.dispatcher.dispatch([event])
        return member

    async def update_role(self, scope_id: UUID, user_id: UUID, role: Enum) -> MemberType:
        member = await self.member_repo.get_member(scope_id, user_id)
        if member is None:
            raise NotFoundError(f"User {user_id} is not a member of this {self.scope}")
        self._check_change(member, role)

        try:
            member.role = role.value  # type: ignore[attr-defined]
            await self.session.commit()
            await self.session.refresh(member)
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Member role updated",
            scope=self.scope,
            scope_id=str(scope_id),
            user_id=str(user_id),
            role=role.value,
        )
        return member

    async def remove_member(self, scope_id: UUID, user_id: UUID) -> None:
        """Remove a member. Removing a user who is not a member does nothing."""
        member = await self.member_repo.get_member(scope_id, user_id)
        if member is None:
            return
        self._check_change(member, None)

        try:
            await self.member_repo.delete_member(scope_id, user_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Member removed", scope=self.scope, scope_id=str(scope_id), user_id=str(user_id))

    async def list_members(self, scope_id: UUID) -> list[tuple[MemberType, User]]:
        return await self.member_repo.list_with_users(scope_id)


class WorkspaceMembershipService(MembershipService[WorkspaceMember]):
    """Workspace memberships. The OWNER row is fixed at workspace creation."""

    scope = "workspace"

    def __init__(
        self,
        member_repo: WorkspaceMemberRepository,
        user_repo: UserRepository,
        session: AsyncSession,
        dispatcher: NotificationDispatcher,
    ):
        super().__init__(member_repo, user_repo, session, dispatcher)

    def _check_change(self, member: Any, new_role: Enum | None) -> None:
        if new_role == WorkspaceRole.OWNER:
            raise InvalidOperationError("The OWNER role cannot be granted")
        if member is not None and member.role == WorkspaceRole.OWNER.value:
            raise InvalidOperationError("The workspace owner cannot be removed or demoted")

    async def add_member_by_email(
        self, workspace: Workspace, email: str, role: WorkspaceRole
    ) -> WorkspaceMember:
        """Add an existing user, looked up by email, to the workspace."""
        user = await self.user_repo.get_by_email(email)
        if user is None:
            raise NotFoundError(f"No user with email '{email}'")
        return await self.add_member(workspace, user.id, role)


class ProjectMembershipService(MembershipService[ProjectMember]):
    scope = "project"

    def __init__(
        self,
        member_repo: ProjectMemberRepository,
        user_repo: UserRepository,
        session: AsyncSession,
        dispatcher: NotificationDispatcher,
    ):
        super().__init__(member_repo, user_repo, session, dispatcher)
