"""Maintenance activities.

Thin wrappers that open a session and delegate to MaintenanceService. All of
them are idempotent or report-only, so Temporal may retry them freely.
"""

from collections.abc import Awaitable, Callable

from temporalio import activity

from src.scrum.core.db import get_session, get_session_factory
from src.scrum.services.events import NotificationDispatcher
from src.scrum.services.maintenance_service import MaintenanceService


async def _run(job: Callable[[MaintenanceService], Awaitable[int]]) -> int:
    async with get_session() as session:
        service = MaintenanceService(session, NotificationDispatcher(get_session_factory()))
        return await job(service)


@activity.defn
async def send_due_date_reminders(window_hours: int) -> int:
    """Notify assignees of open tasks due within `window_hours`.

    Returns:
        Number of notifications created
    """
    activity.logger.info(f"Sending due date reminders (window: {window_hours}h)")
    count = await _run(lambda service: service.send_due_date_reminders(window_hours))
    activity.logger.info(f"Created {count} due date reminders")
    return count


@activity.defn
async def send_overdue_reminders() -> int:
    activity.logger.info("Sending overdue task reminders")
    count = await _run(lambda service: service.send_overdue_reminders())
    activity.logger.info(f"Created {count} overdue reminders")
    return count


@activity.defn
async def send_sprint_ending_reminders(window_hours: int) -> int:
    activity.logger.info(f"Sending sprint ending reminders (window: {window_hours}h)")
    count = await _run(lambda service: service.send_sprint_ending_reminders(window_hours))
    activity.logger.info(f"Created {count} sprint ending reminders")
    return count


@activity.defn
async def auto_complete_expired_sprints() -> int:
    """Complete ACTIVE sprints past their end date.

    Idempotent: a completed sprint is no longer ACTIVE, so a retry skips it.
    """
    activity.logger.info("Completing expired sprints")
    count = await _run(lambda service: service.auto_complete_expired_sprints())
    activity.logger.info(f"Completed {count} expired sprints")
    return count


@activity.defn
async def cleanup_notifications(retention_days: int) -> int:
    activity.logger.info(f"Deleting read notifications older than {retention_days} days")
    count = await _run(lambda service: service.cleanup_notifications(retention_days))
    activity.logger.info(f"Deleted {count} notifications")
    return count


@activity.defn
async def mark_idle_users_away(idle_minutes: int) -> int:
    count = await _run(lambda service: service.mark_idle_users_away(idle_minutes))
    activity.logger.info(f"Marked {count} idle users away")
    return count


@activity.defn
async def cleanup_refresh_tokens(retention_days: int) -> int:
    """Delete refresh tokens expired or revoked more than `retention_days` ago."""
    activity.logger.info(f"Cleaning up refresh tokens older than {retention_days} days")
    count = await _run(lambda service: service.cleanup_refresh_tokens(retention_days))
    activity.logger.info(f"Deleted {count} expired refresh tokens")
    return count
