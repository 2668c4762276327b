"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys on
    - The app's get_store / get_db_manager dependencies point at that database
    - Lifespan never runs in tests (httpx ASGITransport skips it)

Design Decisions:
    - SQLite in-memory over StaticPool: one shared connection, so every
      session sees the same database
    - Dependencies overridden, not app.state mutated: routes stay unaware
"""

import os

# Never reach for the docker-compose database from tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import qa_api.models  # noqa: E402,F401
from qa_api.api.dependencies import get_db_manager, get_store  # noqa: E402
from qa_api.db.base import Base  # noqa: E402
from qa_api.infrastructure.database import (  # noqa: E402
    DatabaseSessionManager, install_sqlite_pragmas,
)
from qa_api.main import app  # noqa: E402
from qa_api.services.qa_storage import QAStorage  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )
    install_sqlite_pragmas(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_manager(test_engine):
    return DatabaseSessionManager.from_engine(test_engine)


@pytest.fixture
def store(session_manager):
    return QAStorage(session_manager, operation_timeout=5.0)


@pytest.fixture
async def client(store, session_manager):
    """FastAPI test client with storage dependencies overridden."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_db_manager] = lambda: session_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def seed_question(store):
    """A persisted question to hang answers off."""
    return await store.create_question("What is X?")
