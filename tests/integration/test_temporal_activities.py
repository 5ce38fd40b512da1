"""Maintenance activities executed in a Temporal activity environment."""

from datetime import timedelta

import pytest
from sqlmodel import select
from temporalio.testing import ActivityEnvironment

from src.scrum.models import Notification, Sprint, SprintStatus, User, UserStatus
from src.scrum.temporal.activities import maintenance as activities
from tests.factories import NotificationFactory, SprintFactory, TaskFactory, UserFactory, utc_now

pytestmark = [pytest.mark.integration]


@pytest.fixture(autouse=True)
def activity_database(monkeypatch, session_factory):
    """Point the activities at the test database."""
    monkeypatch.setattr(activities, "get_session", lambda: session_factory())
    monkeypatch.setattr(activities, "get_session_factory", lambda: session_factory)


@pytest.fixture
def env() -> ActivityEnvironment:
    return ActivityEnvironment()


class TestMaintenanceActivities:
    async def test_due_date_reminders(self, env, db_session, session_factory, scenario):
        db_session.add(
            TaskFactory.build(
                project_id=scenario["project"].id,
                reporter_id=scenario["lead"].id,
                assignee_id=scenario["member"].id,
                due_date=utc_now() + timedelta(hours=3),
            )
        )
        await db_session.commit()

        assert await env.run(activities.send_due_date_reminders, 24) == 1

        async with session_factory() as session:
            [notification] = (await session.execute(select(Notification))).scalars().all()
        assert notification.user_id == scenario["member"].id

    async def test_overdue_reminders_with_nothing_overdue(self, env, scenario):
        assert await env.run(activities.send_overdue_reminders) == 0

    async def test_sprint_ending_reminders(self, env, db_session, scenario):
        db_session.add(
            SprintFactory.active(project_id=scenario["project"].id, end_date=utc_now() + timedelta(hours=6))
        )
        await db_session.commit()

        assert await env.run(activities.send_sprint_ending_reminders, 24) == 3

    async def test_auto_complete_expired_sprints(self, env, db_session, session_factory, scenario):
        sprint = SprintFactory.active(project_id=scenario["project"].id, end_date=utc_now() - timedelta(hours=1))
        db_session.add(sprint)
        await db_session.commit()

        assert await env.run(activities.auto_complete_expired_sprints) == 1
        async with session_factory() as session:
            assert (await session.get(Sprint, sprint.id)).status == SprintStatus.COMPLETED.value

    async def test_cleanup_notifications(self, env, db_session, scenario):
        db_session.add_all(
            [
                NotificationFactory.read_notification(
                    user_id=scenario["member"].id, created_at=utc_now() - timedelta(days=60)
                ),
                NotificationFactory.build(user_id=scenario["member"].id),
            ]
        )
        await db_session.commit()

        assert await env.run(activities.cleanup_notifications, 30) == 1

    async def test_mark_idle_users_away(self, env, db_session, session_factory):
        user = UserFactory.online(last_seen_at=utc_now() - timedelta(hours=1))
        db_session.add(user)
        await db_session.commit()

        assert await env.run(activities.mark_idle_users_away, 15) == 1
        async with session_factory() as session:
            assert (await session.get(User, user.id)).status == UserStatus.AWAY.value

    async def test_cleanup_refresh_tokens_with_none_expired(self, env):
        assert await env.run(activities.cleanup_refresh_tokens, 7) == 0
