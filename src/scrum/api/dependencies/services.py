"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.scrum.api.dependencies.db import DBSession
from src.scrum.api.dependencies.repositories import (
    CascadeRepo,
    CommentRepo,
    LabelRepo,
    NotificationRepo,
    ProjectMemberRepo,
    ProjectRepo,
    SpaceRepo,
    SprintRepo,
    TaskRepo,
    TokenRepo,
    UserRepo,
    WorkspaceMemberRepo,
    WorkspaceRepo,
)
from src.scrum.core.db import get_session_factory
from src.scrum.services import (
    AuthService,
    CommentService,
    LabelService,
    NotificationDispatcher,
    NotificationService,
    ProjectMembershipService,
    ProjectService,
    SpaceService,
    SprintService,
    TaskService,
    UserService,
    WorkspaceMembershipService,
    WorkspaceService,
)


def get_dispatcher() -> NotificationDispatcher:
    """Dispatcher writing notifications through its own sessions."""
    return NotificationDispatcher(get_session_factory())


Dispatcher = Annotated[NotificationDispatcher, Depends(get_dispatcher)]


def get_user_service(user_repo: UserRepo, session: DBSession) -> UserService:
    return UserService(user_repo, session)


def get_auth_service(user_repo: UserRepo, token_repo: TokenRepo, session: DBSession) -> AuthService:
    return AuthService(user_repo, token_repo, session)


def get_workspace_service(
    workspace_repo: WorkspaceRepo,
    member_repo: WorkspaceMemberRepo,
    cascade_repo: CascadeRepo,
    session: DBSession,
) -> WorkspaceService:
    return WorkspaceService(workspace_repo, member_repo, cascade_repo, session)


def get_workspace_membership_service(
    member_repo: WorkspaceMemberRepo,
    user_repo: UserRepo,
    session: DBSession,
    dispatcher: Dispatcher,
) -> WorkspaceMembershipService:
    return WorkspaceMembershipService(member_repo, user_repo, session, dispatcher)


def get_space_service(
    space_repo: SpaceRepo, cascade_repo: CascadeRepo, session: DBSession
) -> SpaceService:
    return SpaceService(space_repo, cascade_repo, session)


def get_project_service(
    project_repo: ProjectRepo,
    member_repo: ProjectMemberRepo,
    user_repo: UserRepo,
    cascade_repo: CascadeRepo,
    session: DBSession,
    dispatcher: Dispatcher,
) -> ProjectService:
    return ProjectService(project_repo, member_repo, user_repo, cascade_repo, session, dispatcher)


def get_project_membership_service(
    member_repo: ProjectMemberRepo,
    user_repo: UserRepo,
    session: DBSession,
    dispatcher: Dispatcher,
) -> ProjectMembershipService:
    return ProjectMembershipService(member_repo, user_repo, session, dispatcher)


def get_label_service(label_repo: LabelRepo, session: DBSession) -> LabelService:
    return LabelService(label_repo, session)


def get_sprint_service(
    sprint_repo: SprintRepo,
    task_repo: TaskRepo,
    session: DBSession,
    dispatcher: Dispatcher,
) -> SprintService:
    return SprintService(sprint_repo, task_repo, session, dispatcher)


def get_task_service(
    task_repo: TaskRepo,
    project_repo: ProjectRepo,
    sprint_repo: SprintRepo,
    label_repo: LabelRepo,
    member_repo: ProjectMemberRepo,
    session: DBSession,
    dispatcher: Dispatcher,
) -> TaskService:
    return TaskService(
        task_repo, project_repo, sprint_repo, label_repo, member_repo, session, dispatcher
    )


def get_comment_service(
    comment_repo: CommentRepo, session: DBSession, dispatcher: Dispatcher
) -> CommentService:
    return CommentService(comment_repo, session, dispatcher)


def get_notification_service(
    notification_repo: NotificationRepo, session: DBSession
) -> NotificationService:
    return NotificationService(notification_repo, session)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
WorkspaceServiceDep = Annotated[WorkspaceService, Depends(get_workspace_service)]
WorkspaceMembershipServiceDep = Annotated[
    WorkspaceMembershipService, Depends(get_workspace_membership_service)
]
SpaceServiceDep = Annotated[SpaceService, Depends(get_space_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
ProjectMembershipServiceDep = Annotated[
    ProjectMembershipService, Depends(get_project_membership_service)
]
LabelServiceDep = Annotated[LabelService, Depends(get_label_service)]
SprintServiceDep = Annotated[SprintService, Depends(get_sprint_service)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]
