"""Temporal Workflows - Re-exports for worker registration."""

from src.scrum.temporal.workflows.housekeeping import (
    IdleUserWorkflow,
    NotificationCleanupWorkflow,
    SprintAutoCompleteWorkflow,
    TokenCleanupWorkflow,
)
from src.scrum.temporal.workflows.reminders import (
    DueDateReminderWorkflow,
    OverdueReminderWorkflow,
    SprintEndingReminderWorkflow,
)

__all__ = [
    "DueDateReminderWorkflow",
    "IdleUserWorkflow",
    "NotificationCleanupWorkflow",
    "OverdueReminderWorkflow",
    "SprintAutoCompleteWorkflow",
    "SprintEndingReminderWorkflow",
    "TokenCleanupWorkflow",
]
