"""Integration test fixtures for database and HTTP client operations.

Each test gets its own SQLite file database with the schema created from
SQLModel metadata. Tests open one session per unit of work through
`session_factory`, the way the API opens one session per request.
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

import src.scrum.models  # noqa: F401 - register tables on the metadata
from src.scrum.api.dependencies import get_db_session, get_dispatcher
from src.scrum.core.db import get_session_factory
from src.scrum.main import create_app
from src.scrum.services import NotificationDispatcher
from tests.helpers import create_project_scenario


@pytest.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine]:
    """File-backed SQLite engine with real transactions and savepoints."""
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'scrum.db'}",
        poolclass=NullPool,
        connect_args={"timeout": 30},
    )

    @event.listens_for(test_engine.sync_engine, "connect")
    def _configure_connection(dbapi_connection, connection_record):
        # Let SQLAlchemy emit BEGIN itself so SAVEPOINT works
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    @event.listens_for(test_engine.sync_engine, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return get_session_factory(engine)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Session for seeding and inspecting data.

    It does NOT auto-commit: seed helpers commit explicitly. Objects stay
    readable after commit (expire_on_commit=False), but bulk updates made
    by services are only visible through a fresh session.
    """
    async with session_factory() as session:
        yield session


@pytest.fixture
def dispatcher(session_factory: async_sessionmaker[AsyncSession]) -> NotificationDispatcher:
    return NotificationDispatcher(session_factory)


@pytest.fixture
async def scenario(db_session: AsyncSession) -> dict:
    """Workspace, space and project with a lead, a member, a viewer and an outsider."""
    data = await create_project_scenario(db_session)
    await db_session.close()
    return data


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession], dispatcher: NotificationDispatcher
) -> AsyncGenerator[AsyncClient]:
    """HTTP client bound to the test database."""
    app = create_app()

    async def _get_test_session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = _get_test_session
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
