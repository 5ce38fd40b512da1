"""Model exports.

Import from here: `from src.scrum.models import Task, Sprint`
"""

from src.scrum.models.enums import (
    NotificationType,
    ProjectRole,
    SprintStatus,
    TaskPriority,
    TaskStatus,
    TaskType,
    UserStatus,
    WorkspaceRole,
)
from src.scrum.models.notification import Notification
from src.scrum.models.project import Label, Project, ProjectMember
from src.scrum.models.sprint import Sprint
from src.scrum.models.task import Comment, Task, TaskLabel
from src.scrum.models.user import RefreshToken, User
from src.scrum.models.workspace import Space, Workspace, WorkspaceMember

__all__ = [
    # Enums
    "NotificationType",
    "ProjectRole",
    "SprintStatus",
    "TaskPriority",
    "TaskStatus",
    "TaskType",
    "UserStatus",
    "WorkspaceRole",
    # Identity
    "RefreshToken",
    "User",
    # Hierarchy
    "Project",
    "ProjectMember",
    "Space",
    "Workspace",
    "WorkspaceMember",
    # Work items
    "Comment",
    "Label",
    "Sprint",
    "Task",
    "TaskLabel",
    # Notifications
    "Notification",
]
