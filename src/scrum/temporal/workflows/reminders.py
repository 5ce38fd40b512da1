"""Reminder workflows: tasks due soon, overdue tasks and sprints about to end.

Each is meant to run on a cron schedule and re-reads the database on every
run. A reminder sent twice (for example after a manual re-run) is a duplicate
notification, never an inconsistency.
"""

from temporalio import workflow

with workflow.unsafe.imports_passed_through():
    from src.scrum.temporal.activities import (
        send_due_date_reminders,
        send_overdue_reminders,
        send_sprint_ending_reminders,
    )
    from src.scrum.temporal.workflows.common import job_activity_opts


@workflow.defn
class DueDateReminderWorkflow:
    @workflow.run
    async def run(self, window_hours: int = 48) -> int:
        """Remind assignees of tasks due within `window_hours`. Returns notifications created."""
        count = await workflow.execute_activity(
            send_due_date_reminders,
            window_hours,
            **job_activity_opts(),  # type: ignore[arg-type]
        )
        workflow.logger.info(f"Due date reminders: {count}")
        return count


@workflow.defn
class OverdueReminderWorkflow:
    @workflow.run
    async def run(self) -> int:
        count = await workflow.execute_activity(
            send_overdue_reminders,
            **job_activity_opts(),  # type: ignore[arg-type]
        )
        workflow.logger.info(f"Overdue reminders: {count}")
        return count


@workflow.defn
class SprintEndingReminderWorkflow:
    @workflow.run
    async def run(self, window_hours: int = 24) -> int:
        count = await workflow.execute_activity(
            send_sprint_ending_reminders,
            window_hours,
            **job_activity_opts(),  # type: ignore[arg-type]
        )
        workflow.logger.info(f"Sprint ending reminders: {count}")
        return count
