from src.scrum.schemas.auth import (
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from src.scrum.schemas.comment import CommentCreate, CommentRead, CommentUpdate
from src.scrum.schemas.notification import NotificationCount, NotificationRead
from src.scrum.schemas.pagination import PaginatedResponse
from src.scrum.schemas.project import (
    LabelCreate,
    LabelRead,
    LabelUpdate,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
)
from src.scrum.schemas.sprint import (
    SprintComplete,
    SprintCompleteResponse,
    SprintCreate,
    SprintRead,
    SprintUpdate,
)
from src.scrum.schemas.task import (
    BulkTaskUpdateItem,
    BulkTaskUpdateRequest,
    BulkTaskUpdateResponse,
    BulkTaskUpdateResult,
    TaskAssigneeUpdate,
    TaskCreate,
    TaskRead,
    TaskReorderRequest,
    TaskStatusUpdate,
    TaskUpdate,
)
from src.scrum.schemas.user import UserRead, UserSummary, UserUpdate
from src.scrum.schemas.workspace import (
    MemberRead,
    ProjectMemberAdd,
    ProjectMemberRoleUpdate,
    SpaceCreate,
    SpaceRead,
    SpaceUpdate,
    WorkspaceCreate,
    WorkspaceMemberAdd,
    WorkspaceMemberRoleUpdate,
    WorkspaceRead,
    WorkspaceUpdate,
)

__all__ = [
    "BulkTaskUpdateItem",
    "BulkTaskUpdateRequest",
    "BulkTaskUpdateResponse",
    "BulkTaskUpdateResult",
    "CommentCreate",
    "CommentRead",
    "CommentUpdate",
    "LabelCreate",
    "LabelRead",
    "LabelUpdate",
    "LoginRequest",
    "LogoutRequest",
    "MemberRead",
    "NotificationCount",
    "NotificationRead",
    "PaginatedResponse",
    "ProjectCreate",
    "ProjectMemberAdd",
    "ProjectMemberRoleUpdate",
    "ProjectRead",
    "ProjectUpdate",
    "RefreshRequest",
    "RegisterRequest",
    "RegisterResponse",
    "SpaceCreate",
    "SpaceRead",
    "SpaceUpdate",
    "SprintComplete",
    "SprintCompleteResponse",
    "SprintCreate",
    "SprintRead",
    "SprintUpdate",
    "TaskAssigneeUpdate",
    "TaskCreate",
    "TaskRead",
    "TaskReorderRequest",
    "TaskStatusUpdate",
    "TaskUpdate",
    "TokenResponse",
    "UserRead",
    "UserSummary",
    "UserUpdate",
    "WorkspaceCreate",
    "WorkspaceMemberAdd",
    "WorkspaceMemberRoleUpdate",
    "WorkspaceRead",
    "WorkspaceUpdate",
]
