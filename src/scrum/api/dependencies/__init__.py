"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenient imports.
"""

from src.scrum.api.dependencies.access import (
    ContributableSpace,
    ContributingWorkspace,
    LedProject,
    ManagedSpace,
    ManagedWorkspace,
    OwnedWorkspace,
    ReadableComment,
    ReadableLabel,
    ReadableProject,
    ReadableSpace,
    ReadableSprint,
    ReadableTask,
    ReadableWorkspace,
    WritableLabel,
    WritableProject,
    WritableSprint,
    WritableTask,
)
from src.scrum.api.dependencies.auth import CurrentUser, get_current_user
from src.scrum.api.dependencies.db import DBSession, get_db_session
from src.scrum.api.dependencies.pagination import Page, PageParams
from src.scrum.api.dependencies.services import (
    AuthServiceDep,
    CommentServiceDep,
    Dispatcher,
    LabelServiceDep,
    NotificationServiceDep,
    ProjectMembershipServiceDep,
    ProjectServiceDep,
    SpaceServiceDep,
    SprintServiceDep,
    TaskServiceDep,
    UserServiceDep,
    WorkspaceMembershipServiceDep,
    WorkspaceServiceDep,
    get_dispatcher,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "CurrentUser",
    "get_current_user",
    # Access
    "ContributableSpace",
    "ContributingWorkspace",
    "LedProject",
    "ManagedSpace",
    "ManagedWorkspace",
    "OwnedWorkspace",
    "ReadableComment",
    "ReadableLabel",
    "ReadableProject",
    "ReadableSpace",
    "ReadableSprint",
    "ReadableTask",
    "ReadableWorkspace",
    "WritableLabel",
    "WritableProject",
    "WritableSprint",
    "WritableTask",
    # Pagination
    "Page",
    "PageParams",
    # Services
    "AuthServiceDep",
    "CommentServiceDep",
    "Dispatcher",
    "LabelServiceDep",
    "NotificationServiceDep",
    "ProjectMembershipServiceDep",
    "ProjectServiceDep",
    "SpaceServiceDep",
    "SprintServiceDep",
    "TaskServiceDep",
    "UserServiceDep",
    "WorkspaceMembershipServiceDep",
    "WorkspaceServiceDep",
    "get_dispatcher",
]
