"""Comments, comment notifications and the notification inbox."""

from datetime import timedelta

import pytest
from sqlmodel import select

from src.scrum.core.exceptions import NotFoundError, UnauthorizedError
from src.scrum.models import Comment, Notification, NotificationType, Task
from src.scrum.schemas import CommentCreate, CommentUpdate
from tests.factories import CommentFactory, NotificationFactory, TaskFactory, utc_now
from tests.helpers import build_comment_service, build_notification_service

pytestmark = [pytest.mark.integration]


@pytest.fixture
async def task(db_session, scenario) -> Task:
    """Task reported by the lead and assigned to the member."""
    task = TaskFactory.build(
        project_id=scenario["project"].id,
        reporter_id=scenario["lead"].id,
        assignee_id=scenario["member"].id,
    )
    db_session.add(task)
    await db_session.commit()
    return task


@pytest.fixture
def comment_service(session_factory, dispatcher):
    async def _call(action):
        async with session_factory() as session:
            return await action(build_comment_service(session, dispatcher))

    return _call


@pytest.fixture
def inbox(session_factory):
    async def _call(action):
        async with session_factory() as session:
            return await action(build_notification_service(session))

    return _call


async def _recipients(session_factory) -> set:
    async with session_factory() as session:
        result = await session.execute(
            select(Notification.user_id).where(
                Notification.type == NotificationType.TASK_COMMENTED.value
            )
        )
        return set(result.scalars().all())


class TestCommentNotifications:
    async def test_viewer_comment_notifies_assignee_and_reporter(
        self, comment_service, session_factory, task, scenario
    ):
        comment = await comment_service(
            lambda svc: svc.create(task, scenario["viewer"].id, CommentCreate(content="  Any news?  "))
        )

        assert comment.content == "Any news?"
        assert await _recipients(session_factory) == {scenario["member"].id, scenario["lead"].id}

    async def test_assignee_comment_notifies_reporter_only(
        self, comment_service, session_factory, task, scenario
    ):
        await comment_service(lambda svc: svc.create(task, scenario["member"].id, CommentCreate(content="On it")))

        assert await _recipients(session_factory) == {scenario["lead"].id}

    async def test_reporter_and_assignee_same_person(
        self, comment_service, session_factory, db_session, scenario
    ):
        own = TaskFactory.build(
            project_id=scenario["project"].id,
            reporter_id=scenario["lead"].id,
            assignee_id=scenario["lead"].id,
        )
        db_session.add(own)
        await db_session.commit()

        await comment_service(lambda svc: svc.create(own, scenario["member"].id, CommentCreate(content="Ping")))

        async with session_factory() as session:
            result = await session.execute(select(Notification))
            assert [n.user_id for n in result.scalars()] == [scenario["lead"].id]


class TestCommentAuthorship:
    async def test_author_can_edit(self, comment_service, db_session, task, scenario):
        comment = CommentFactory.build(task_id=task.id, author_id=scenario["member"].id)
        db_session.add(comment)
        await db_session.commit()

        async def _edit(svc):
            return await svc.update(
                await svc.get(comment.id), scenario["member"].id, CommentUpdate(content="Edited")
            )

        assert (await comment_service(_edit)).content == "Edited"

    async def test_others_cannot_edit_or_delete(self, comment_service, session_factory, db_session, task, scenario):
        comment = CommentFactory.build(task_id=task.id, author_id=scenario["member"].id)
        db_session.add(comment)
        await db_session.commit()

        async def _edit(svc):
            return await svc.update(
                await svc.get(comment.id), scenario["lead"].id, CommentUpdate(content="Hijacked")
            )

        async def _delete(svc):
            await svc.delete(await svc.get(comment.id), scenario["lead"].id)

        with pytest.raises(UnauthorizedError):
            await comment_service(_edit)
        with pytest.raises(UnauthorizedError):
            await comment_service(_delete)

        async with session_factory() as session:
            stored = await session.get(Comment, comment.id)
            assert stored.content == comment.content

    async def test_author_can_delete(self, comment_service, task, scenario):
        comment = await comment_service(
            lambda svc: svc.create(task, scenario["member"].id, CommentCreate(content="Oops"))
        )

        async def _delete(svc):
            await svc.delete(await svc.get(comment.id), scenario["member"].id)

        await comment_service(_delete)

        with pytest.raises(NotFoundError):
            await comment_service(lambda svc: svc.get(comment.id))

    async def test_list_by_task(self, comment_service, db_session, task, scenario):
        db_session.add_all(
            [CommentFactory.build(task_id=task.id, author_id=scenario["lead"].id) for _ in range(3)]
        )
        await db_session.commit()

        comments, total = await comment_service(lambda svc: svc.list_by_task(task.id, 1, 2))

        assert total == 3
        assert len(comments) == 2


class TestNotificationInbox:
    @pytest.fixture
    async def seeded(self, db_session, scenario) -> list[Notification]:
        """Three notifications for the member (one read) and one for the lead."""
        now = utc_now()
        member_id = scenario["member"].id
        notifications = [
            NotificationFactory.build(user_id=member_id, created_at=now - timedelta(minutes=3)),
            NotificationFactory.build(user_id=member_id, created_at=now - timedelta(minutes=2)),
            NotificationFactory.read_notification(user_id=member_id, created_at=now - timedelta(minutes=1)),
            NotificationFactory.build(user_id=scenario["lead"].id),
        ]
        db_session.add_all(notifications)
        await db_session.commit()
        return notifications

    async def test_count(self, inbox, seeded, scenario):
        assert await inbox(lambda svc: svc.count(scenario["member"].id)) == (3, 2)

    async def test_list_unread_only(self, inbox, seeded, scenario):
        items, total = await inbox(lambda svc: svc.list_for_user(scenario["member"].id, True, 1, 20))

        assert total == 2
        assert {n.id for n in items} == {seeded[0].id, seeded[1].id}

    async def test_list_newest_first(self, inbox, seeded, scenario):
        items, _ = await inbox(lambda svc: svc.list_for_user(scenario["member"].id, False, 1, 20))

        assert [n.id for n in items] == [seeded[2].id, seeded[1].id, seeded[0].id]

    async def test_mark_read(self, inbox, seeded, scenario):
        notification = await inbox(lambda svc: svc.mark_read(seeded[0].id, scenario["member"].id))

        assert notification.read is True
        assert await inbox(lambda svc: svc.count(scenario["member"].id)) == (3, 1)

    async def test_foreign_notification_is_not_found(self, inbox, seeded, scenario):
        with pytest.raises(NotFoundError):
            await inbox(lambda svc: svc.mark_read(seeded[3].id, scenario["member"].id))
        with pytest.raises(NotFoundError):
            await inbox(lambda svc: svc.delete(seeded[3].id, scenario["member"].id))

    async def test_mark_all_read(self, inbox, seeded, scenario):
        assert await inbox(lambda svc: svc.mark_all_read(scenario["member"].id)) == 2
        assert await inbox(lambda svc: svc.count(scenario["member"].id)) == (3, 0)
        assert await inbox(lambda svc: svc.count(scenario["lead"].id)) == (1, 1)

    async def test_delete_and_delete_all(self, inbox, seeded, scenario):
        await inbox(lambda svc: svc.delete(seeded[0].id, scenario["member"].id))
        assert await inbox(lambda svc: svc.count(scenario["member"].id)) == (2, 1)

        assert await inbox(lambda svc: svc.delete_all(scenario["member"].id)) == 2
        assert await inbox(lambda svc: svc.count(scenario["member"].id)) == (0, 0)
        assert await inbox(lambda svc: svc.count(scenario["lead"].id)) == (1, 1)
