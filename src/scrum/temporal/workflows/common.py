"""Shared workflow activity options."""

from datetime import timedelta

from temporalio.common import RetryPolicy


def job_activity_opts() -> dict[str, object]:
    """Options for maintenance activities (bulk DB reads and writes)."""
    return {
        "start_to_close_timeout": timedelta(minutes=5),
        "retry_policy": RetryPolicy(
            maximum_attempts=3,
            initial_interval=timedelta(seconds=2),
        ),
    }
