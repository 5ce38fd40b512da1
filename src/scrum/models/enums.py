"""Shared enums for models.

Values are the wire format and are stored verbatim in string columns.
"""

from enum import Enum


class UserStatus(str, Enum):
    """Presence status shown next to a user."""

    ONLINE = "ONLINE"
    AWAY = "AWAY"
    OFFLINE = "OFFLINE"


class WorkspaceRole(str, Enum):
    """User role within a workspace."""

    OWNER = "OWNER"
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"
    VIEWER = "VIEWER"


class ProjectRole(str, Enum):
    """User role within a project. Independent of the workspace role."""

    LEAD = "LEAD"
    MEMBER = "MEMBER"
    VIEWER = "VIEWER"


class SprintStatus(str, Enum):
    PLANNING = "PLANNING"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


class TaskStatus(str, Enum):
    BACKLOG = "BACKLOG"
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    IN_REVIEW = "IN_REVIEW"
    DONE = "DONE"
    CANCELLED = "CANCELLED"


class TaskPriority(str, Enum):
    LOWEST = "LOWEST"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    HIGHEST = "HIGHEST"
    URGENT = "URGENT"


class TaskType(str, Enum):
    EPIC = "EPIC"
    STORY = "STORY"
    TASK = "TASK"
    BUG = "BUG"
    SUBTASK = "SUBTASK"


class NotificationType(str, Enum):
    """Kinds of in-app notifications produced from domain events."""

    TASK_ASSIGNED = "TASK_ASSIGNED"
    TASK_COMMENTED = "TASK_COMMENTED"
    SPRINT_STARTED = "SPRINT_STARTED"
    SPRINT_COMPLETED = "SPRINT_COMPLETED"
    SPRINT_ENDING = "SPRINT_ENDING"
    DUE_DATE_REMINDER = "DUE_DATE_REMINDER"
    PROJECT_INVITATION = "PROJECT_INVITATION"
    WORKSPACE_INVITATION = "WORKSPACE_INVITATION"
