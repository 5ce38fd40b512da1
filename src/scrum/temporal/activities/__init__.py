"""Temporal activities - fine-grained, idempotent operations."""

from src.scrum.temporal.activities.maintenance import (
    auto_complete_expired_sprints,
    cleanup_notifications,
    cleanup_refresh_tokens,
    mark_idle_users_away,
    send_due_date_reminders,
    send_overdue_reminders,
    send_sprint_ending_reminders,
)

MAINTENANCE_ACTIVITIES = [
    auto_complete_expired_sprints,
    cleanup_notifications,
    cleanup_refresh_tokens,
    mark_idle_users_away,
    send_due_date_reminders,
    send_overdue_reminders,
    send_sprint_ending_reminders,
]

__all__ = [
    "MAINTENANCE_ACTIVITIES",
    "auto_complete_expired_sprints",
    "cleanup_notifications",
    "cleanup_refresh_tokens",
    "mark_idle_users_away",
    "send_due_date_reminders",
    "send_overdue_reminders",
    "send_sprint_ending_reminders",
]
