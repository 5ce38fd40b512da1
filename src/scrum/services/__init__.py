"""Service layer - business logic and transaction boundaries."""

from src.scrum.services.auth_service import AuthService
from src.scrum.services.comment_service import CommentService
from src.scrum.services.events import NotificationDispatcher, build_notifications
from src.scrum.services.maintenance_service import MaintenanceService
from src.scrum.services.membership_service import (
    MembershipService,
    ProjectMembershipService,
    WorkspaceMembershipService,
)
from src.scrum.services.notification_service import NotificationService
from src.scrum.services.project_service import LabelService, ProjectService
from src.scrum.services.sprint_service import SprintService
from src.scrum.services.task_service import TaskService
from src.scrum.services.user_service import UserService
from src.scrum.services.workspace_service import SpaceService, WorkspaceService

__all__ = [
    "AuthService",
    "CommentService",
    "LabelService",
    "MaintenanceService",
    "MembershipService",
    "NotificationDispatcher",
    "NotificationService",
    "ProjectMembershipService",
    "ProjectService",
    "SpaceService",
    "SprintService",
    "TaskService",
    "UserService",
    "WorkspaceMembershipService",
    "WorkspaceService",
    "build_notifications",
]
