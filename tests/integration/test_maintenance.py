"""Scheduled maintenance jobs, run against a fixed clock."""

from datetime import datetime, timedelta

import pytest
from sqlmodel import select

from src.scrum.models import (
    Notification,
    NotificationType,
    RefreshToken,
    Sprint,
    SprintStatus,
    Task,
    User,
    UserStatus,
)
from src.scrum.services.maintenance_service import MaintenanceService
from tests.factories import (
    NotificationFactory,
    RefreshTokenFactory,
    SprintFactory,
    TaskFactory,
    UserFactory,
    utc_now,
)

pytestmark = [pytest.mark.integration]

NOW = datetime(2026, 6, 1, 9, 0)


@pytest.fixture
def maintenance(session_factory, dispatcher):
    """Run one job in a fresh session."""

    async def _call(action):
        async with session_factory() as session:
            return await action(MaintenanceService(session, dispatcher))

    return _call


@pytest.fixture
def seed(db_session):
    async def _seed(*rows):
        db_session.add_all(rows)
        await db_session.commit()
        return rows

    return _seed


async def _notifications(session_factory) -> list[Notification]:
    async with session_factory() as session:
        result = await session.execute(select(Notification).order_by(Notification.message))
        return list(result.scalars().all())


def _assigned_task(scenario, **kwargs) -> Task:
    return TaskFactory.build(
        project_id=scenario["project"].id,
        reporter_id=scenario["lead"].id,
        assignee_id=scenario["member"].id,
        **kwargs,
    )


class TestTaskReminders:
    async def test_due_soon(self, maintenance, seed, session_factory, scenario):
        await seed(
            _assigned_task(scenario, title="Today", due_date=NOW + timedelta(hours=2)),
            _assigned_task(scenario, title="Tomorrow", due_date=NOW + timedelta(hours=30)),
            _assigned_task(scenario, title="Later", due_date=NOW + timedelta(hours=50)),
            _assigned_task(scenario, title="Finished", due_date=NOW + timedelta(hours=2), status="DONE"),
            _assigned_task(scenario, title="Dropped", due_date=NOW + timedelta(hours=2), status="CANCELLED"),
            _assigned_task(scenario, title="Late", due_date=NOW - timedelta(hours=1)),
            TaskFactory.build(
                project_id=scenario["project"].id,
                reporter_id=scenario["lead"].id,
                due_date=NOW + timedelta(hours=2),
            ),
        )

        created = await maintenance(lambda svc: svc.send_due_date_reminders(48, now=NOW))

        assert created == 2
        assert [n.message for n in await _notifications(session_factory)] == [
            "Task is due today: Today",
            "Task is due tomorrow: Tomorrow",
        ]

    async def test_overdue(self, maintenance, seed, session_factory, scenario):
        [late] = await seed(_assigned_task(scenario, title="Late", due_date=NOW - timedelta(days=2)))
        await seed(_assigned_task(scenario, title="Done late", due_date=NOW - timedelta(days=2), status="DONE"))

        assert await maintenance(lambda svc: svc.send_overdue_reminders(now=NOW)) == 1

        [notification] = await _notifications(session_factory)
        assert notification.user_id == scenario["member"].id
        assert notification.type == NotificationType.DUE_DATE_REMINDER.value
        assert notification.data == {
            "task_id": str(late.id),
            "project_id": str(scenario["project"].id),
            "is_overdue": True,
        }

    async def test_nothing_due(self, maintenance):
        assert await maintenance(lambda svc: svc.send_due_date_reminders(24, now=NOW)) == 0


class TestSprintJobs:
    async def test_sprint_ending_notifies_members(self, maintenance, seed, session_factory, scenario):
        project_id = scenario["project"].id
        await seed(
            SprintFactory.active(project_id=project_id, end_date=NOW + timedelta(hours=12)),
            SprintFactory.active(project_id=project_id, end_date=NOW + timedelta(days=3)),
            SprintFactory.build(project_id=project_id, end_date=NOW + timedelta(hours=12)),
        )

        assert await maintenance(lambda svc: svc.send_sprint_ending_reminders(24, now=NOW)) == 3

        notifications = await _notifications(session_factory)
        assert {n.type for n in notifications} == {NotificationType.SPRINT_ENDING.value}
        assert {n.user_id for n in notifications} == {
            scenario["lead"].id,
            scenario["member"].id,
            scenario["viewer"].id,
        }

    async def test_expired_sprint_is_completed(self, maintenance, seed, session_factory, scenario):
        project_id = scenario["project"].id
        expired, running = await seed(
            SprintFactory.active(project_id=project_id, end_date=NOW - timedelta(hours=1)),
            SprintFactory.active(project_id=project_id, end_date=NOW + timedelta(days=1)),
        )
        [open_task] = await seed(_assigned_task(scenario, sprint_id=expired.id))

        assert await maintenance(lambda svc: svc.auto_complete_expired_sprints(now=NOW)) == 1

        async with session_factory() as session:
            assert (await session.get(Sprint, expired.id)).status == SprintStatus.COMPLETED.value
            assert (await session.get(Sprint, running.id)).status == SprintStatus.ACTIVE.value
            assert (await session.get(Task, open_task.id)).sprint_id is None

        # Re-running finds nothing left to complete
        assert await maintenance(lambda svc: svc.auto_complete_expired_sprints(now=NOW)) == 0


class TestHousekeeping:
    async def test_cleanup_keeps_unread_and_recent(self, maintenance, seed, session_factory, scenario):
        user_id = scenario["member"].id
        old = NOW - timedelta(days=40)
        _, unread_old, read_recent = await seed(
            NotificationFactory.read_notification(user_id=user_id, created_at=old),
            NotificationFactory.build(user_id=user_id, created_at=old),
            NotificationFactory.read_notification(user_id=user_id, created_at=NOW - timedelta(days=1)),
        )

        assert await maintenance(lambda svc: svc.cleanup_notifications(30, now=NOW)) == 1

        assert {n.id for n in await _notifications(session_factory)} == {unread_old.id, read_recent.id}

    async def test_idle_users_marked_away(self, maintenance, seed, session_factory):
        idle, active, offline = await seed(
            UserFactory.online(last_seen_at=NOW - timedelta(minutes=30)),
            UserFactory.online(last_seen_at=NOW - timedelta(minutes=2)),
            UserFactory.build(last_seen_at=NOW - timedelta(hours=5)),
        )

        assert await maintenance(lambda svc: svc.mark_idle_users_away(15, now=NOW)) == 1

        async with session_factory() as session:
            statuses = {
                user.id: user.status
                for user in (await session.execute(select(User))).scalars()
                if user.id in {idle.id, active.id, offline.id}
            }
        assert statuses == {
            idle.id: UserStatus.AWAY.value,
            active.id: UserStatus.ONLINE.value,
            offline.id: UserStatus.OFFLINE.value,
        }

    async def test_refresh_token_cleanup(self, maintenance, seed, session_factory, scenario):
        user_id = scenario["member"].id
        _, _, recent_expiry, valid = await seed(
            RefreshTokenFactory.expired(days_ago=10, user_id=user_id),
            RefreshTokenFactory.revoked_token(
                user_id=user_id, created_at=utc_now() - timedelta(days=30)
            ),
            RefreshTokenFactory.expired(days_ago=1, user_id=user_id),
            RefreshTokenFactory.build(user_id=user_id),
        )

        assert await maintenance(lambda svc: svc.cleanup_refresh_tokens(7)) == 2

        async with session_factory() as session:
            remaining = {token.id for token in (await session.execute(select(RefreshToken))).scalars()}
        assert remaining == {recent_expiry.id, valid.id}
