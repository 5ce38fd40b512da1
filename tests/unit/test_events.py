"""Tests for translating domain events into notifications."""

from datetime import datetime
from uuid import uuid4

import pytest

from src.scrum.models import NotificationType
from src.scrum.services.events import (
    MemberAdded,
    SprintCompleted,
    SprintEnding,
    SprintStarted,
    TaskAssigned,
    TaskCommented,
    TaskDueSoon,
    TaskOverdue,
    build_notifications,
)

pytestmark = pytest.mark.unit


class TestTaskAssigned:
    def test_notifies_assignee(self):
        assignee, actor, task_id = uuid4(), uuid4(), uuid4()
        event = TaskAssigned(
            task_id=task_id, task_title="Fix login", project_id=uuid4(), assignee_id=assignee, actor_id=actor
        )

        [notification] = build_notifications(event)

        assert notification.user_id == assignee
        assert notification.type == NotificationType.TASK_ASSIGNED.value
        assert notification.message == "You have been assigned to task: Fix login"
        assert notification.data["task_id"] == str(task_id)

    def test_self_assignment_is_silent(self):
        user = uuid4()
        event = TaskAssigned(
            task_id=uuid4(), task_title="Mine", project_id=uuid4(), assignee_id=user, actor_id=user
        )
        assert build_notifications(event) == []


class TestTaskCommented:
    def _event(self, commenter, assignee, reporter):
        return TaskCommented(
            task_id=uuid4(),
            task_title="Review docs",
            project_id=uuid4(),
            comment_id=uuid4(),
            commenter_id=commenter,
            assignee_id=assignee,
            reporter_id=reporter,
        )

    def test_notifies_assignee_and_reporter(self):
        commenter, assignee, reporter = uuid4(), uuid4(), uuid4()
        notifications = build_notifications(self._event(commenter, assignee, reporter))
        assert [n.user_id for n in notifications] == [assignee, reporter]
        assert all(n.type == NotificationType.TASK_COMMENTED.value for n in notifications)

    def test_commenter_is_never_notified(self):
        commenter, reporter = uuid4(), uuid4()
        notifications = build_notifications(self._event(commenter, commenter, reporter))
        assert [n.user_id for n in notifications] == [reporter]

    def test_reporter_who_is_assignee_notified_once(self):
        commenter, user = uuid4(), uuid4()
        notifications = build_notifications(self._event(commenter, user, user))
        assert [n.user_id for n in notifications] == [user]

    def test_unassigned_task_own_comment(self):
        reporter = uuid4()
        assert build_notifications(self._event(reporter, None, reporter)) == []


class TestSprintBroadcasts:
    @pytest.mark.parametrize(
        ("event_type", "notification_type"),
        [
            (SprintStarted, NotificationType.SPRINT_STARTED),
            (SprintCompleted, NotificationType.SPRINT_COMPLETED),
        ],
    )
    def test_every_member_notified(self, event_type, notification_type):
        members = [uuid4(), uuid4(), uuid4()]
        event = event_type(sprint_id=uuid4(), sprint_name="Sprint 1", project_id=uuid4())

        notifications = build_notifications(event, members)

        assert [n.user_id for n in notifications] == members
        assert {n.type for n in notifications} == {notification_type.value}

    def test_sprint_ending_carries_end_date(self):
        end = datetime(2026, 1, 2, 12, 0)
        event = SprintEnding(sprint_id=uuid4(), sprint_name="S", project_id=uuid4(), end_date=end)
        [notification] = build_notifications(event, [uuid4()])
        assert notification.data["end_date"] == end.isoformat()

    def test_no_members_no_notifications(self):
        event = SprintStarted(sprint_id=uuid4(), sprint_name="S", project_id=uuid4())
        assert build_notifications(event, []) == []


class TestMemberAdded:
    def test_workspace_invitation(self):
        user, workspace_id = uuid4(), uuid4()
        event = MemberAdded(scope="workspace", scope_id=workspace_id, scope_name="Acme", user_id=user)
        [notification] = build_notifications(event)
        assert notification.type == NotificationType.WORKSPACE_INVITATION.value
        assert notification.data == {"workspace_id": str(workspace_id)}

    def test_project_invitation(self):
        event = MemberAdded(scope="project", scope_id=uuid4(), scope_name="Apollo", user_id=uuid4())
        [notification] = build_notifications(event)
        assert notification.type == NotificationType.PROJECT_INVITATION.value
        assert "Apollo" in notification.message


class TestReminders:
    @pytest.mark.parametrize(
        ("days_left", "message"),
        [
            (0, "Task is due today: Ship it"),
            (1, "Task is due tomorrow: Ship it"),
            (3, "Task is due in 3 days: Ship it"),
        ],
    )
    def test_due_soon_message(self, days_left, message):
        event = TaskDueSoon(
            task_id=uuid4(), task_title="Ship it", project_id=uuid4(), assignee_id=uuid4(), days_left=days_left
        )
        [notification] = build_notifications(event)
        assert notification.type == NotificationType.DUE_DATE_REMINDER.value
        assert notification.message == message

    def test_overdue_is_flagged(self):
        event = TaskOverdue(task_id=uuid4(), task_title="Late", project_id=uuid4(), assignee_id=uuid4())
        [notification] = build_notifications(event)
        assert notification.type == NotificationType.DUE_DATE_REMINDER.value
        assert notification.data["is_overdue"] is True
