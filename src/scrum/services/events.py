"""Domain events and their translation into notifications.

Services collect events while they mutate state and hand them to the
NotificationDispatcher only after their transaction has committed. The
dispatcher writes notifications in its own session and never raises:
a failed notification is logged and the triggering mutation stands.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.scrum.core.logging import get_logger
from src.scrum.models import Notification, NotificationType
from src.scrum.repositories import NotificationRepository, ProjectMemberRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class TaskAssigned:
    task_id: UUID
    task_title: str
    project_id: UUID
    assignee_id: UUID
    actor_id: UUID


@dataclass(frozen=True)
class TaskCommented:
    task_id: UUID
    task_title: str
    project_id: UUID
    comment_id: UUID
    commenter_id: UUID
    assignee_id: UUID | None
    reporter_id: UUID


@dataclass(frozen=True)
class SprintStarted:
    sprint_id: UUID
    sprint_name: str
    project_id: UUID


@dataclass(frozen=True)
class SprintCompleted:
    sprint_id: UUID
    sprint_name: str
    project_id: UUID


@dataclass(frozen=True)
class SprintEnding:
    sprint_id: UUID
    sprint_name: str
    project_id: UUID
    end_date: datetime


@dataclass(frozen=True)
class MemberAdded:
    """A user was added to a workspace or project."""

    scope: str  # "workspace" or "project"
    scope_id: UUID
    scope_name: str
    user_id: UUID


@dataclass(frozen=True)
class TaskDueSoon:
    task_id: UUID
    task_title: str
    project_id: UUID
    assignee_id: UUID
    days_left: int


@dataclass(frozen=True)
class TaskOverdue:
    task_id: UUID
    task_title: str
    project_id: UUID
    assignee_id: UUID


DomainEvent = (
    TaskAssigned
    | TaskCommented
    | SprintStarted
    | SprintCompleted
    | SprintEnding
    | MemberAdded
    | TaskDueSoon
    | TaskOverdue
)

# Events whose recipients are every member of the event's project
PROJECT_BROADCAST_EVENTS = (SprintStarted, SprintCompleted, SprintEnding)


def _notification(
    user_id: UUID,
    type: NotificationType,
    title: str,
    message: str,
    data: dict[str, Any],
) -> Notification:
    return Notification(
        user_id=user_id,
        type=type.value,
        title=title,
        message=message,
        data={k: str(v) if isinstance(v, UUID) else v for k, v in data.items()},
    )


def _due_message(task_title: str, days_left: int) -> str:
    if days_left <= 0:
        return f"Task is due today: {task_title}"
    if days_left == 1:
        return f"Task is due tomorrow: {task_title}"
    return f"Task is due in {days_left} days: {task_title}"


def build_notifications(
    event: DomainEvent, project_member_ids: Sequence[UUID] = ()
) -> list[Notification]:
    """Translate one event into notification rows.

    Args:
        event: The domain event.
        project_member_ids: Recipients for project-wide events; ignored otherwise.
    """
    match event:
        case TaskAssigned():
            if event.assignee_id == event.actor_id:
                return []
            return [
                _notification(
                    event.assignee_id,
                    NotificationType.TASK_ASSIGNED,
                    "Task Assigned",
                    f"You have been assigned to task: {event.task_title}",
                    {"task_id": event.task_id, "project_id": event.project_id},
                )
            ]
        case TaskCommented():
            recipients: list[UUID] = []
            if event.assignee_id is not None and event.assignee_id != event.commenter_id:
                recipients.append(event.assignee_id)
            if event.reporter_id not in (event.commenter_id, event.assignee_id):
                recipients.append(event.reporter_id)
            return [
                _notification(
                    user_id,
                    NotificationType.TASK_COMMENTED,
                    "New Comment",
                    f"New comment on task: {event.task_title}",
                    {
                        "task_id": event.task_id,
                        "project_id": event.project_id,
                        "comment_id": event.comment_id,
                    },
                )
                for user_id in recipients
            ]
        case SprintStarted():
            return [
                _notification(
                    user_id,
                    NotificationType.SPRINT_STARTED,
                    "Sprint Started",
                    f"Sprint has started: {event.sprint_name}",
                    {"sprint_id": event.sprint_id, "project_id": event.project_id},
                )
                for user_id in project_member_ids
            ]
        case SprintCompleted():
            return [
                _notification(
                    user_id,
                    NotificationType.SPRINT_COMPLETED,
                    "Sprint Completed",
                    f"Sprint has been completed: {event.sprint_name}",
                    {"sprint_id": event.sprint_id, "project_id": event.project_id},
                )
                for user_id in project_member_ids
            ]
        case SprintEnding():
            return [
                _notification(
                    user_id,
                    NotificationType.SPRINT_ENDING,
                    "Sprint Ending Soon",
                    f"Sprint ends within a day: {event.sprint_name}",
                    {
                        "sprint_id": event.sprint_id,
                        "project_id": event.project_id,
                        "end_date": event.end_date.isoformat(),
                    },
                )
                for user_id in project_member_ids
            ]
        case MemberAdded(scope="workspace"):
            return [
                _notification(
                    event.user_id,
                    NotificationType.WORKSPACE_INVITATION,
                    "Workspace Invitation",
                    f"You have been invited to workspace: {event.scope_name}",
                    {"workspace_id": event.scope_id},
                )
            ]
        case MemberAdded():
            return [
                _notification(
                    event.user_id,
                    NotificationType.PROJECT_INVITATION,
                    "Project Invitation",
                    f"You have been invited to project: {event.scope_name}",
                    {"project_id": event.scope_id},
                )
            ]
        case TaskDueSoon():
            return [
                _notification(
                    event.assignee_id,
                    NotificationType.DUE_DATE_REMINDER,
                    "Due Date Reminder",
                    _due_message(event.task_title, event.days_left),
                    {"task_id": event.task_id, "project_id": event.project_id},
                )
            ]
        case TaskOverdue():
            return [
                _notification(
                    event.assignee_id,
                    NotificationType.DUE_DATE_REMINDER,
                    "Overdue Task",
                    f"Task is overdue: {event.task_title}",
                    {"task_id": event.task_id, "project_id": event.project_id, "is_overdue": True},
                )
            ]
    raise TypeError(f"Unsupported event: {type(event).__name__}")


class NotificationDispatcher:
    """Turns committed domain events into Notification rows."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def dispatch(self, events: Sequence[DomainEvent]) -> int:
        """Persist notifications for `events`. Returns how many were created.

        Never raises: failures are logged and reported as 0.
        """
        if not events:
            return 0
        try:
            async with self.session_factory() as session:
                members = ProjectMemberRepository(session)
                notifications: list[Notification] = []
                for event in events:
                    member_ids: list[UUID] = []
                    if isinstance(event, PROJECT_BROADCAST_EVENTS):
                        member_ids = await members.list_user_ids(event.project_id)
                    notifications.extend(build_notifications(event, member_ids))

                if notifications:
                    NotificationRepository(session).add_all(notifications)
                    await session.commit()
        except Exception as e:
            logger.exception(
                "Failed to create notifications",
                events=[type(event).__name__ for event in events],
                error=str(e),
            )
            return 0

        logger.info(
            "Notifications created",
            count=len(notifications),
            events=[type(event).__name__ for event in events],
        )
        return len(notifications)
