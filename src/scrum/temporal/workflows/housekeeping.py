"""Housekeeping workflows: expired sprints, old notifications, presence and tokens."""

from temporalio import workflow

with workflow.unsafe.imports_passed_through():
    from src.scrum.temporal.activities import (
        auto_complete_expired_sprints,
        cleanup_notifications,
        cleanup_refresh_tokens,
        mark_idle_users_away,
    )
    from src.scrum.temporal.workflows.common import job_activity_opts


@workflow.defn
class SprintAutoCompleteWorkflow:
    """Complete ACTIVE sprints whose end date has passed; unfinished tasks go to the backlog."""

    @workflow.run
    async def run(self) -> int:
        count = await workflow.execute_activity(
            auto_complete_expired_sprints,
            **job_activity_opts(),  # type: ignore[arg-type]
        )
        workflow.logger.info(f"Auto-completed {count} sprints")
        return count


@workflow.defn
class NotificationCleanupWorkflow:
    @workflow.run
    async def run(self, retention_days: int = 30) -> int:
        return await workflow.execute_activity(
            cleanup_notifications,
            retention_days,
            **job_activity_opts(),  # type: ignore[arg-type]
        )


@workflow.defn
class IdleUserWorkflow:
    @workflow.run
    async def run(self, idle_minutes: int = 30) -> int:
        return await workflow.execute_activity(
            mark_idle_users_away,
            idle_minutes,
            **job_activity_opts(),  # type: ignore[arg-type]
        )


@workflow.defn
class TokenCleanupWorkflow:
    """Delete refresh tokens expired or revoked longer than the retention window.

    Idempotent: the activity only DELETEs, so a second run finds nothing.
    """

    @workflow.run
    async def run(self, retention_days: int = 30) -> int:
        count = await workflow.execute_activity(
            cleanup_refresh_tokens,
            retention_days,
            **job_activity_opts(),  # type: ignore[arg-type]
        )
        workflow.logger.info(f"Deleted {count} refresh tokens")
        return count
