"""Periodic maintenance jobs.

Each job is a plain coroutine so it can be tested without a scheduler; the
Temporal activities in src.scrum.temporal.activities call into this service.
Every job is safe to re-run.
"""

from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from src.scrum.core.exceptions import DomainError
from src.scrum.core.logging import get_logger
from src.scrum.models.base import utc_now
from src.scrum.repositories import (
    NotificationRepository,
    RefreshTokenRepository,
    SprintRepository,
    TaskRepository,
    UserRepository,
)
from src.scrum.services.events import (
    NotificationDispatcher,
    SprintEnding,
    TaskDueSoon,
    TaskOverdue,
)
from src.scrum.services.sprint_service import BACKLOG, SprintService

logger = get_logger(__name__)

_DAY_SECONDS = 24 * 60 * 60


class MaintenanceService:
    def __init__(self, session: AsyncSession, dispatcher: NotificationDispatcher):
        self.session = session
        self.dispatcher = dispatcher
        self.task_repo = TaskRepository(session)
        self.sprint_repo = SprintRepository(session)
        self.notification_repo = NotificationRepository(session)
        self.user_repo = UserRepository(session)
        self.token_repo = RefreshTokenRepository(session)

    async def send_due_date_reminders(self, window_hours: int, now: datetime | None = None) -> int:
        """Remind assignees of open tasks due within the next `window_hours`."""
        now = now or utc_now()
        tasks = await self.task_repo.list_open_assigned_due_between(
            now, now + timedelta(hours=window_hours)
        )
        events = [
            TaskDueSoon(
                task_id=task.id,
                task_title=task.title,
                project_id=task.project_id,
                assignee_id=task.assignee_id,  # type: ignore[arg-type]
                days_left=int((task.due_date - now).total_seconds() // _DAY_SECONDS),  # type: ignore[operator]
            )
            for task in tasks
        ]
        created = await self.dispatcher.dispatch(events)
        logger.info("Due date reminders sent", tasks=len(tasks), notifications=created)
        return created

    async def send_overdue_reminders(self, now: datetime | None = None) -> int:
        """Notify assignees of open tasks whose due date has passed."""
        tasks = await self.task_repo.list_open_assigned_overdue(now or utc_now())
        events = [
            TaskOverdue(
                task_id=task.id,
                task_title=task.title,
                project_id=task.project_id,
                assignee_id=task.assignee_id,  # type: ignore[arg-type]
            )
            for task in tasks
        ]
        created = await self.dispatcher.dispatch(events)
        logger.info("Overdue reminders sent", tasks=len(tasks), notifications=created)
        return created

    async def send_sprint_ending_reminders(
        self, window_hours: int, now: datetime | None = None
    ) -> int:
        """Warn project members about ACTIVE sprints ending within `window_hours`."""
        now = now or utc_now()
        sprints = await self.sprint_repo.list_active_ending_between(
            now, now + timedelta(hours=window_hours)
        )
        events = [
            SprintEnding(
                sprint_id=sprint.id,
                sprint_name=sprint.name,
                project_id=sprint.project_id,
                end_date=sprint.end_date,  # type: ignore[arg-type]
            )
            for sprint in sprints
        ]
        created = await self.dispatcher.dispatch(events)
        logger.info("Sprint ending reminders sent", sprints=len(sprints), notifications=created)
        return created

    async def auto_complete_expired_sprints(self, now: datetime | None = None) -> int:
        """Complete ACTIVE sprints past their end date, moving unfinished work to the backlog.

        A sprint that fails to complete is logged and skipped.
        """
        sprints = await self.sprint_repo.list_active_ended_before(now or utc_now())
        sprint_service = SprintService(self.sprint_repo, self.task_repo, self.session, self.dispatcher)

        completed = 0
        for sprint_id in [sprint.id for sprint in sprints]:
            try:
                await sprint_service.complete(sprint_id, BACKLOG)
                completed += 1
            except DomainError as e:
                logger.warning("Sprint auto-complete skipped", sprint_id=str(sprint_id), error=e.detail)

        logger.info("Expired sprints completed", found=len(sprints), completed=completed)
        return completed

    async def cleanup_notifications(self, retention_days: int, now: datetime | None = None) -> int:
        """Delete read notifications older than `retention_days`."""
        cutoff = (now or utc_now()) - timedelta(days=retention_days)
        try:
            deleted = await self.notification_repo.delete_read_before(cutoff)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Old notifications deleted", deleted=deleted, retention_days=retention_days)
        return deleted

    async def mark_idle_users_away(self, idle_minutes: int, now: datetime | None = None) -> int:
        """Move ONLINE users not seen for `idle_minutes` to AWAY."""
        seen_before = (now or utc_now()) - timedelta(minutes=idle_minutes)
        try:
            updated = await self.user_repo.mark_idle_users_away(seen_before)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Idle users marked away", updated=updated)
        return updated

    async def cleanup_refresh_tokens(self, retention_days: int) -> int:
        """Delete refresh tokens expired or revoked more than `retention_days` ago."""
        try:
            deleted = await self.token_repo.cleanup_expired(retention_days)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Expired refresh tokens deleted", deleted=deleted)
        return deleted
