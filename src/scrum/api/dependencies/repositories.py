"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.scrum.api.dependencies.db import DBSession
from src.scrum.repositories import (
    CascadeRepository,
    CommentRepository,
    LabelRepository,
    NotificationRepository,
    ProjectMemberRepository,
    ProjectRepository,
    RefreshTokenRepository,
    SpaceRepository,
    SprintRepository,
    TaskRepository,
    UserRepository,
    WorkspaceMemberRepository,
    WorkspaceRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_token_repository(session: DBSession) -> RefreshTokenRepository:
    return RefreshTokenRepository(session)


def get_workspace_repository(session: DBSession) -> WorkspaceRepository:
    return WorkspaceRepository(session)


def get_workspace_member_repository(session: DBSession) -> WorkspaceMemberRepository:
    return WorkspaceMemberRepository(session)


def get_space_repository(session: DBSession) -> SpaceRepository:
    return SpaceRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_project_member_repository(session: DBSession) -> ProjectMemberRepository:
    return ProjectMemberRepository(session)


def get_label_repository(session: DBSession) -> LabelRepository:
    return LabelRepository(session)


def get_sprint_repository(session: DBSession) -> SprintRepository:
    return SprintRepository(session)


def get_task_repository(session: DBSession) -> TaskRepository:
    return TaskRepository(session)


def get_comment_repository(session: DBSession) -> CommentRepository:
    return CommentRepository(session)


def get_notification_repository(session: DBSession) -> NotificationRepository:
    return NotificationRepository(session)


def get_cascade_repository(session: DBSession) -> CascadeRepository:
    return CascadeRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
TokenRepo = Annotated[RefreshTokenRepository, Depends(get_token_repository)]
WorkspaceRepo = Annotated[WorkspaceRepository, Depends(get_workspace_repository)]
WorkspaceMemberRepo = Annotated[WorkspaceMemberRepository, Depends(get_workspace_member_repository)]
SpaceRepo = Annotated[SpaceRepository, Depends(get_space_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
ProjectMemberRepo = Annotated[ProjectMemberRepository, Depends(get_project_member_repository)]
LabelRepo = Annotated[LabelRepository, Depends(get_label_repository)]
SprintRepo = Annotated[SprintRepository, Depends(get_sprint_repository)]
TaskRepo = Annotated[TaskRepository, Depends(get_task_repository)]
CommentRepo = Annotated[CommentRepository, Depends(get_comment_repository)]
NotificationRepo = Annotated[NotificationRepository, Depends(get_notification_repository)]
CascadeRepo = Annotated[CascadeRepository, Depends(get_cascade_repository)]
