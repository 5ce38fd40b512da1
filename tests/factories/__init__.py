"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import UserFactory, ProjectFactory, ...
"""

from tests.factories.base import BaseFactory, generate_uuid, utc_now
from tests.factories.hierarchy import (
    LabelFactory,
    ProjectFactory,
    ProjectMemberFactory,
    SpaceFactory,
    WorkspaceFactory,
    WorkspaceMemberFactory,
)
from tests.factories.user import DEFAULT_TEST_PASSWORD, RefreshTokenFactory, UserFactory
from tests.factories.work import (
    CommentFactory,
    NotificationFactory,
    SprintFactory,
    TaskFactory,
)

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid",
    "utc_now",
    # Identity
    "DEFAULT_TEST_PASSWORD",
    "RefreshTokenFactory",
    "UserFactory",
    # Hierarchy
    "LabelFactory",
    "ProjectFactory",
    "ProjectMemberFactory",
    "SpaceFactory",
    "WorkspaceFactory",
    "WorkspaceMemberFactory",
    # Work items
    "CommentFactory",
    "NotificationFactory",
    "SprintFactory",
    "TaskFactory",
]
