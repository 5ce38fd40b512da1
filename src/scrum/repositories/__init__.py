"""Repository layer - data access abstraction.

Re-exports all repositories for convenient imports.
"""

from src.scrum.repositories.base import BaseRepository
from src.scrum.repositories.cascade import CascadeRepository
from src.scrum.repositories.comment import CommentRepository
from src.scrum.repositories.membership import (
    MembershipRepository,
    ProjectMemberRepository,
    WorkspaceMemberRepository,
)
from src.scrum.repositories.notification import NotificationRepository
from src.scrum.repositories.project import LabelRepository, ProjectRepository
from src.scrum.repositories.sprint import SprintRepository
from src.scrum.repositories.task import TaskFilter, TaskRepository
from src.scrum.repositories.token import RefreshTokenRepository
from src.scrum.repositories.user import UserRepository
from src.scrum.repositories.workspace import SpaceRepository, WorkspaceRepository

__all__ = [
    # Base
    "BaseRepository",
    "CascadeRepository",
    "MembershipRepository",
    # Identity
    "RefreshTokenRepository",
    "UserRepository",
    # Hierarchy
    "ProjectMemberRepository",
    "ProjectRepository",
    "SpaceRepository",
    "WorkspaceMemberRepository",
    "WorkspaceRepository",
    # Work items
    "CommentRepository",
    "LabelRepository",
    "SprintRepository",
    "TaskFilter",
    "TaskRepository",
    # Notifications
    "NotificationRepository",
]
