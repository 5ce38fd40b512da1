"""Sprint lifecycle, completion moves and sprint notifications."""

from datetime import datetime

import pytest
from sqlmodel import select

from src.scrum.core.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from src.scrum.models import Notification, NotificationType, Sprint, SprintStatus, Task
from src.scrum.schemas import SprintCreate, SprintUpdate
from tests.factories import ProjectFactory, SprintFactory, TaskFactory, generate_uuid
from tests.helpers import build_sprint_service

pytestmark = [pytest.mark.integration]


@pytest.fixture
def sprint_service(session_factory, dispatcher):
    """Run one service call in a fresh session."""

    async def _call(action):
        async with session_factory() as session:
            return await action(build_sprint_service(session, dispatcher))

    return _call


@pytest.fixture
def add_tasks(db_session):
    """Seed tasks straight into the database and return them."""

    async def _add(*tasks: Task) -> list[Task]:
        db_session.add_all(tasks)
        await db_session.commit()
        return list(tasks)

    return _add


async def _sprint_ids(session_factory, task_ids) -> dict:
    async with session_factory() as session:
        result = await session.execute(select(Task.id, Task.sprint_id).where(Task.id.in_(task_ids)))
        return dict(result.all())


async def _seed_sprint(db_session, sprint: Sprint) -> Sprint:
    db_session.add(sprint)
    await db_session.commit()
    return sprint


def _task(scenario, **kwargs) -> Task:
    return TaskFactory.build(
        project_id=scenario["project"].id, reporter_id=scenario["lead"].id, **kwargs
    )


class TestSprintCrud:
    async def test_create_starts_in_planning(self, sprint_service, scenario):
        sprint = await sprint_service(
            lambda svc: svc.create(scenario["project"].id, SprintCreate(name="Sprint 1", goal="Ship"))
        )

        assert sprint.status == SprintStatus.PLANNING.value
        assert sprint.project_id == scenario["project"].id

    async def test_list_filters_by_status(self, sprint_service, db_session, scenario):
        project_id = scenario["project"].id
        await _seed_sprint(db_session, SprintFactory.build(project_id=project_id))
        active = await _seed_sprint(db_session, SprintFactory.active(project_id=project_id))

        everything = await sprint_service(lambda svc: svc.list_by_project(project_id))
        only_active = await sprint_service(
            lambda svc: svc.list_by_project(project_id, SprintStatus.ACTIVE)
        )

        assert len(everything) == 2
        assert [sprint.id for sprint in only_active] == [active.id]

    async def test_update_checks_dates_against_stored_values(self, sprint_service, db_session, scenario):
        sprint = await _seed_sprint(
            db_session,
            SprintFactory.build(project_id=scenario["project"].id, start_date=datetime(2026, 3, 10)),
        )

        async def _update(svc):
            return await svc.update(await svc.get(sprint.id), SprintUpdate(end_date=datetime(2026, 3, 1)))

        with pytest.raises(ValidationError, match="end_date"):
            await sprint_service(_update)

    async def test_update_name(self, sprint_service, db_session, scenario):
        sprint = await _seed_sprint(db_session, SprintFactory.build(project_id=scenario["project"].id))

        async def _rename(svc):
            return await svc.update(await svc.get(sprint.id), SprintUpdate(name="  Renamed  "))

        assert (await sprint_service(_rename)).name == "Renamed"

    async def test_delete_returns_tasks_to_backlog(
        self, sprint_service, session_factory, db_session, add_tasks, scenario
    ):
        sprint = await _seed_sprint(db_session, SprintFactory.build(project_id=scenario["project"].id))
        tasks = await add_tasks(_task(scenario, sprint_id=sprint.id), _task(scenario, sprint_id=sprint.id))

        await sprint_service(lambda svc: svc.delete(sprint.id))

        assert set((await _sprint_ids(session_factory, [t.id for t in tasks])).values()) == {None}
        with pytest.raises(NotFoundError):
            await sprint_service(lambda svc: svc.get(sprint.id))


class TestSprintTransitions:
    async def test_start_stamps_start_date(self, sprint_service, db_session, scenario):
        sprint = await _seed_sprint(db_session, SprintFactory.build(project_id=scenario["project"].id))

        started = await sprint_service(lambda svc: svc.start(sprint.id))

        assert started.status == SprintStatus.ACTIVE.value
        assert started.start_date is not None

    async def test_cannot_start_twice(self, sprint_service, db_session, scenario):
        sprint = await _seed_sprint(db_session, SprintFactory.active(project_id=scenario["project"].id))

        with pytest.raises(InvalidTransitionError, match="Cannot move sprint from ACTIVE to ACTIVE"):
            await sprint_service(lambda svc: svc.start(sprint.id))

    async def test_cannot_complete_planning_sprint(self, sprint_service, db_session, scenario):
        sprint = await _seed_sprint(db_session, SprintFactory.build(project_id=scenario["project"].id))

        with pytest.raises(InvalidTransitionError):
            await sprint_service(lambda svc: svc.complete(sprint.id))

    async def test_completed_sprint_cannot_restart(self, sprint_service, db_session, scenario):
        sprint = await _seed_sprint(db_session, SprintFactory.completed(project_id=scenario["project"].id))

        with pytest.raises(InvalidTransitionError):
            await sprint_service(lambda svc: svc.start(sprint.id))

    async def test_unknown_sprint(self, sprint_service):
        with pytest.raises(NotFoundError):
            await sprint_service(lambda svc: svc.start(generate_uuid()))


class TestSprintCompletion:
    async def test_unfinished_tasks_move_to_backlog(
        self, sprint_service, session_factory, db_session, add_tasks, scenario
    ):
        sprint = await _seed_sprint(db_session, SprintFactory.active(project_id=scenario["project"].id))
        done, todo, review = await add_tasks(
            TaskFactory.done(
                project_id=scenario["project"].id, reporter_id=scenario["lead"].id, sprint_id=sprint.id
            ),
            _task(scenario, sprint_id=sprint.id),
            _task(scenario, sprint_id=sprint.id, status="IN_REVIEW"),
        )

        completed, moved = await sprint_service(lambda svc: svc.complete(sprint.id, "backlog"))

        assert moved == 2
        assert completed.status == SprintStatus.COMPLETED.value
        assert completed.end_date is not None
        assert await _sprint_ids(session_factory, [done.id, todo.id, review.id]) == {
            done.id: sprint.id,
            todo.id: None,
            review.id: None,
        }

    async def test_unfinished_tasks_move_to_target_sprint(
        self, sprint_service, session_factory, db_session, add_tasks, scenario
    ):
        project_id = scenario["project"].id
        sprint = await _seed_sprint(db_session, SprintFactory.active(project_id=project_id))
        target = await _seed_sprint(db_session, SprintFactory.build(project_id=project_id))
        [todo] = await add_tasks(_task(scenario, sprint_id=sprint.id))

        _, moved = await sprint_service(lambda svc: svc.complete(sprint.id, target.id))

        assert moved == 1
        assert await _sprint_ids(session_factory, [todo.id]) == {todo.id: target.id}

    @pytest.mark.parametrize("target_kind", ["self", "other_project", "completed"])
    async def test_invalid_target_leaves_everything_unchanged(
        self, target_kind, sprint_service, session_factory, db_session, add_tasks, scenario
    ):
        project_id = scenario["project"].id
        sprint = await _seed_sprint(db_session, SprintFactory.active(project_id=project_id))
        [todo] = await add_tasks(_task(scenario, sprint_id=sprint.id))
        if target_kind == "self":
            target_id = sprint.id
        elif target_kind == "other_project":
            other = ProjectFactory.build(space_id=scenario["space"].id, key="OTH")
            db_session.add(other)
            await db_session.commit()
            target_id = (await _seed_sprint(db_session, SprintFactory.build(project_id=other.id))).id
        else:
            target_id = (await _seed_sprint(db_session, SprintFactory.completed(project_id=project_id))).id

        with pytest.raises(ValidationError):
            await sprint_service(lambda svc: svc.complete(sprint.id, target_id))

        assert (await sprint_service(lambda svc: svc.get(sprint.id))).status == SprintStatus.ACTIVE.value
        assert await _sprint_ids(session_factory, [todo.id]) == {todo.id: sprint.id}

    async def test_missing_target(self, sprint_service, db_session, scenario):
        sprint = await _seed_sprint(db_session, SprintFactory.active(project_id=scenario["project"].id))

        with pytest.raises(NotFoundError):
            await sprint_service(lambda svc: svc.complete(sprint.id, generate_uuid()))


class TestSprintNotifications:
    async def _types_by_user(self, session_factory) -> dict:
        async with session_factory() as session:
            result = await session.execute(select(Notification.user_id, Notification.type))
            by_user: dict = {}
            for user_id, type_ in result.all():
                by_user.setdefault(user_id, []).append(type_)
            return by_user

    async def test_start_and_complete_notify_every_project_member(
        self, sprint_service, session_factory, db_session, scenario
    ):
        sprint = await _seed_sprint(db_session, SprintFactory.build(project_id=scenario["project"].id))

        await sprint_service(lambda svc: svc.start(sprint.id))
        await sprint_service(lambda svc: svc.complete(sprint.id))

        by_user = await self._types_by_user(session_factory)
        expected = [NotificationType.SPRINT_STARTED.value, NotificationType.SPRINT_COMPLETED.value]
        members = [scenario[role].id for role in ("lead", "member", "viewer")]
        assert {user_id: sorted(types) for user_id, types in by_user.items()} == {
            user_id: sorted(expected) for user_id in members
        }

    async def test_failed_transition_sends_nothing(self, sprint_service, session_factory, db_session, scenario):
        sprint = await _seed_sprint(db_session, SprintFactory.completed(project_id=scenario["project"].id))

        with pytest.raises(InvalidTransitionError):
            await sprint_service(lambda svc: svc.complete(sprint.id))

        assert await self._types_by_user(session_factory) == {}
