"""Test helper functions for common data creation patterns."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.scrum.core.security import create_access_token
from src.scrum.models import ProjectRole, User, WorkspaceRole
from src.scrum.repositories import (
    CascadeRepository,
    CommentRepository,
    LabelRepository,
    NotificationRepository,
    ProjectMemberRepository,
    ProjectRepository,
    SpaceRepository,
    SprintRepository,
    TaskRepository,
    UserRepository,
    WorkspaceMemberRepository,
    WorkspaceRepository,
)
from src.scrum.services import (
    CommentService,
    LabelService,
    NotificationDispatcher,
    NotificationService,
    ProjectMembershipService,
    ProjectService,
    SpaceService,
    SprintService,
    TaskService,
    WorkspaceMembershipService,
    WorkspaceService,
)
from tests.factories import (
    ProjectFactory,
    ProjectMemberFactory,
    SpaceFactory,
    UserFactory,
    WorkspaceFactory,
    WorkspaceMemberFactory,
)


def auth_headers(user: User) -> dict[str, str]:
    """Bearer header with a fresh access token for the user."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


async def create_user(session: AsyncSession, **user_kwargs) -> User:
    user = UserFactory.build(**user_kwargs)
    session.add(user)
    await session.flush()
    return user


async def create_project_scenario(session: AsyncSession, key: str = "SCR") -> dict:
    """Create a workspace, space and project with one user per role, and commit.

    Returns:
        Dict with keys: workspace, space, project, lead, member, viewer, outsider.
        The lead owns the workspace; member and viewer hold the same role in
        both the workspace and the project; the outsider belongs to neither.
    """
    lead = await create_user(session, full_name="Lead User")
    member = await create_user(session, full_name="Member User")
    viewer = await create_user(session, full_name="Viewer User")
    outsider = await create_user(session, full_name="Outsider User")

    workspace = WorkspaceFactory.build(owner_id=lead.id)
    session.add(workspace)
    await session.flush()
    session.add_all(
        [
            WorkspaceMemberFactory.owner(workspace_id=workspace.id, user_id=lead.id),
            WorkspaceMemberFactory.build(
                workspace_id=workspace.id, user_id=member.id, role=WorkspaceRole.MEMBER.value
            ),
            WorkspaceMemberFactory.build(
                workspace_id=workspace.id, user_id=viewer.id, role=WorkspaceRole.VIEWER.value
            ),
        ]
    )

    space = SpaceFactory.build(workspace_id=workspace.id)
    session.add(space)
    await session.flush()

    project = ProjectFactory.build(space_id=space.id, lead_id=lead.id, key=key)
    session.add(project)
    await session.flush()
    session.add_all(
        [
            ProjectMemberFactory.lead(project_id=project.id, user_id=lead.id),
            ProjectMemberFactory.build(
                project_id=project.id, user_id=member.id, role=ProjectRole.MEMBER.value
            ),
            ProjectMemberFactory.viewer(project_id=project.id, user_id=viewer.id),
        ]
    )
    await session.commit()

    return {
        "workspace": workspace,
        "space": space,
        "project": project,
        "lead": lead,
        "member": member,
        "viewer": viewer,
        "outsider": outsider,
    }


# --- Service builders (mirror the API dependency wiring) ---


def build_workspace_service(session: AsyncSession) -> WorkspaceService:
    return WorkspaceService(
        WorkspaceRepository(session),
        WorkspaceMemberRepository(session),
        CascadeRepository(session),
        session,
    )


def build_space_service(session: AsyncSession) -> SpaceService:
    return SpaceService(SpaceRepository(session), CascadeRepository(session), session)


def build_project_service(session: AsyncSession, dispatcher: NotificationDispatcher) -> ProjectService:
    return ProjectService(
        ProjectRepository(session),
        ProjectMemberRepository(session),
        UserRepository(session),
        CascadeRepository(session),
        session,
        dispatcher,
    )


def build_label_service(session: AsyncSession) -> LabelService:
    return LabelService(LabelRepository(session), session)


def build_workspace_membership_service(
    session: AsyncSession, dispatcher: NotificationDispatcher
) -> WorkspaceMembershipService:
    return WorkspaceMembershipService(
        WorkspaceMemberRepository(session), UserRepository(session), session, dispatcher
    )


def build_project_membership_service(
    session: AsyncSession, dispatcher: NotificationDispatcher
) -> ProjectMembershipService:
    return ProjectMembershipService(
        ProjectMemberRepository(session), UserRepository(session), session, dispatcher
    )


def build_sprint_service(session: AsyncSession, dispatcher: NotificationDispatcher) -> SprintService:
    return SprintService(SprintRepository(session), TaskRepository(session), session, dispatcher)


def build_task_service(session: AsyncSession, dispatcher: NotificationDispatcher) -> TaskService:
    return TaskService(
        TaskRepository(session),
        ProjectRepository(session),
        SprintRepository(session),
        LabelRepository(session),
        ProjectMemberRepository(session),
        session,
        dispatcher,
    )


def build_comment_service(
    session: AsyncSession, dispatcher: NotificationDispatcher
) -> CommentService:
    return CommentService(CommentRepository(session), session, dispatcher)


def build_notification_service(session: AsyncSession) -> NotificationService:
    return NotificationService(NotificationRepository(session), session)
