"""
Temporal Worker - Separate process from API.

Run with:
    python -m src.scrum.temporal.worker                  # Worker plus cron schedules
    python -m src.scrum.temporal.worker --no-schedules   # Worker only
"""

import argparse
import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import uvicorn
from fastapi import FastAPI
from temporalio.client import Client
from temporalio.exceptions import WorkflowAlreadyStartedError
from temporalio.worker import Worker

from src.scrum.core.config import Settings, get_settings
from src.scrum.core.db import dispose_engine
from src.scrum.core.logging import get_logger, setup_logging
from src.scrum.temporal.activities import MAINTENANCE_ACTIVITIES
from src.scrum.temporal.workflows import (
    DueDateReminderWorkflow,
    IdleUserWorkflow,
    NotificationCleanupWorkflow,
    OverdueReminderWorkflow,
    SprintAutoCompleteWorkflow,
    SprintEndingReminderWorkflow,
    TokenCleanupWorkflow,
)

logger = get_logger(__name__)

WORKER_HEALTH_PORT = 8001

MAINTENANCE_WORKFLOWS = [
    DueDateReminderWorkflow,
    IdleUserWorkflow,
    NotificationCleanupWorkflow,
    OverdueReminderWorkflow,
    SprintAutoCompleteWorkflow,
    SprintEndingReminderWorkflow,
    TokenCleanupWorkflow,
]


@dataclass(frozen=True)
class CronJob:
    workflow_id: str
    run: Any  # Workflow run method
    args: tuple[Any, ...]
    schedule: str | None


def cron_jobs(settings: Settings) -> list[CronJob]:
    """Maintenance workflows with their schedules and arguments from settings."""
    return [
        CronJob(
            "scrum-due-date-reminders",
            DueDateReminderWorkflow.run,
            (settings.due_date_reminder_window_hours,),
            settings.due_date_reminder_schedule,
        ),
        CronJob(
            "scrum-overdue-reminders",
            OverdueReminderWorkflow.run,
            (),
            settings.overdue_reminder_schedule,
        ),
        CronJob(
            "scrum-sprint-ending-reminders",
            SprintEndingReminderWorkflow.run,
            (settings.sprint_ending_window_hours,),
            settings.sprint_ending_reminder_schedule,
        ),
        CronJob(
            "scrum-sprint-auto-complete",
            SprintAutoCompleteWorkflow.run,
            (),
            settings.sprint_auto_complete_schedule,
        ),
        CronJob(
            "scrum-notification-cleanup",
            NotificationCleanupWorkflow.run,
            (settings.notification_retention_days,),
            settings.notification_cleanup_schedule,
        ),
        CronJob(
            "scrum-idle-users",
            IdleUserWorkflow.run,
            (settings.idle_user_minutes,),
            settings.idle_user_schedule,
        ),
        CronJob(
            "scrum-token-cleanup",
            TokenCleanupWorkflow.run,
            (settings.token_retention_days,),
            settings.token_cleanup_schedule,
        ),
    ]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Temporal maintenance worker")
    parser.add_argument(
        "--no-schedules",
        action="store_true",
        help="Do not register cron workflows on startup",
    )
    return parser.parse_args()


async def create_worker(
    client: Client,
    task_queue: str,
    workflows: Sequence[type],
    activities: Sequence[object],  # type: ignore[type-arg]
    *,
    max_concurrent_activities: int = 20,
    max_concurrent_workflow_tasks: int = 20,
) -> Worker:
    """Create a worker with tuned settings.

    Args:
        client: Temporal client
        task_queue: Task queue name
        workflows: List of workflow classes
        activities: List of activity functions
        max_concurrent_activities: Max concurrent activity executions
        max_concurrent_workflow_tasks: Max concurrent workflow task executions
    """
    return Worker(
        client,
        task_queue=task_queue,
        workflows=list(workflows),
        activities=list(activities),  # type: ignore[arg-type]
        max_concurrent_activities=max_concurrent_activities,
        max_concurrent_workflow_tasks=max_concurrent_workflow_tasks,
    )


async def register_schedules(client: Client, settings: Settings) -> list[str]:
    """Start every scheduled maintenance workflow as a Temporal cron workflow.

    Fixed workflow ids make this idempotent across worker restarts. Returns
    the ids of workflows started by this call.
    """
    started = []
    for job in cron_jobs(settings):
        if not job.schedule:
            logger.info("Schedule disabled", workflow_id=job.workflow_id)
            continue
        try:
            await client.start_workflow(
                job.run,
                args=job.args,
                id=job.workflow_id,
                task_queue=settings.temporal_task_queue,
                cron_schedule=job.schedule,
            )
        except WorkflowAlreadyStartedError:
            logger.info("Schedule already registered", workflow_id=job.workflow_id)
            continue
        started.append(job.workflow_id)
        logger.info("Schedule registered", workflow_id=job.workflow_id, cron=job.schedule)
    return started


async def run_health_server(task_queue: str, port: int = WORKER_HEALTH_PORT) -> None:
    """Run a lightweight health server for K8s probes."""
    health_app = FastAPI(title="Temporal Worker Health")

    @health_app.get("/health")
    async def health() -> dict[str, str]:
        return {
            "status": "healthy",
            "service": "temporal-worker",
            "task_queue": task_queue,
        }

    @health_app.get("/ready")
    async def ready() -> dict[str, str]:
        return {"status": "ready"}

    config = uvicorn.Config(
        health_app,
        host="0.0.0.0",
        port=port,
        log_level="warning",
    )
    server = uvicorn.Server(config)
    logger.info("Starting health server", port=port)
    await server.serve()


async def main() -> None:
    args = parse_args()
    settings = get_settings()
    setup_logging(settings.debug)

    client = await Client.connect(
        settings.temporal_host,
        namespace=settings.temporal_namespace,
    )

    worker = await create_worker(
        client,
        settings.temporal_task_queue,
        workflows=MAINTENANCE_WORKFLOWS,
        activities=MAINTENANCE_ACTIVITIES,
    )

    if not args.no_schedules:
        await register_schedules(client, settings)

    logger.info("Starting worker", task_queue=settings.temporal_task_queue)
    try:
        health_task = asyncio.create_task(run_health_server(settings.temporal_task_queue))
        await worker.run()
        await health_task
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
