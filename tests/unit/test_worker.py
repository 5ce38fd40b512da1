"""Tests for maintenance schedule registration."""

from unittest.mock import AsyncMock

import pytest
from temporalio.exceptions import WorkflowAlreadyStartedError

from src.scrum.core.config import get_settings
from src.scrum.temporal.worker import MAINTENANCE_WORKFLOWS, cron_jobs, register_schedules
from src.scrum.temporal.workflows import DueDateReminderWorkflow, NotificationCleanupWorkflow

pytestmark = pytest.mark.unit


@pytest.fixture
def settings():
    return get_settings().model_copy()


def test_every_job_has_a_registered_workflow(settings):
    registered = {workflow.run for workflow in MAINTENANCE_WORKFLOWS}
    jobs = cron_jobs(settings)

    assert len({job.workflow_id for job in jobs}) == len(jobs)
    assert all(job.run in registered for job in jobs)


def test_job_arguments_come_from_settings(settings):
    settings.due_date_reminder_window_hours = 12
    settings.notification_retention_days = 90

    jobs = {job.workflow_id: job for job in cron_jobs(settings)}

    assert jobs["scrum-due-date-reminders"].run is DueDateReminderWorkflow.run
    assert jobs["scrum-due-date-reminders"].args == (12,)
    assert jobs["scrum-notification-cleanup"].run is NotificationCleanupWorkflow.run
    assert jobs["scrum-notification-cleanup"].args == (90,)


async def test_register_schedules_starts_cron_workflows(settings):
    client = AsyncMock()

    started = await register_schedules(client, settings)

    assert started == [job.workflow_id for job in cron_jobs(settings)]
    kwargs = client.start_workflow.await_args_list[0].kwargs
    assert kwargs["id"] == "scrum-due-date-reminders"
    assert kwargs["cron_schedule"] == settings.due_date_reminder_schedule
    assert kwargs["task_queue"] == settings.temporal_task_queue


async def test_register_schedules_skips_disabled(settings):
    settings.idle_user_schedule = None
    client = AsyncMock()

    started = await register_schedules(client, settings)

    assert "scrum-idle-users" not in started
    assert client.start_workflow.await_count == len(cron_jobs(settings)) - 1


async def test_register_schedules_is_idempotent(settings):
    client = AsyncMock()
    client.start_workflow.side_effect = WorkflowAlreadyStartedError(
        "scrum-due-date-reminders", "DueDateReminderWorkflow"
    )

    assert await register_schedules(client, settings) == []
