"""Application factory — lifespan wiring of the pool, schema and store.

Tests:
    - Startup creates the session manager and QAStorage on app.state
    - Startup creates the schema when AUTO_CREATE_SCHEMA is on
    - Startup failure propagates (process exits instead of serving)
"""

import pytest
from sqlalchemy.exc import OperationalError

from qa_api.config import Settings
from qa_api.main import create_app
from qa_api.services.qa_storage import QAStorage


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, log_format="text", **overrides)


async def test_lifespan_builds_store_with_configured_timeout(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'qa.db'}"
    app = create_app(_settings(database_url=url, db_operation_timeout_seconds=2.5))

    async with app.router.lifespan_context(app):
        store = app.state.store
        assert isinstance(store, QAStorage)
        assert await app.state.db.health_check() is True
        question = await store.create_question("Does the schema exist?")
        assert question.id == 1
        assert store._timeout == 2.5


async def test_lifespan_fails_when_database_unreachable():
    app = create_app(_settings(
        database_url="sqlite+aiosqlite:////nonexistent-dir/qa.db",
    ))

    with pytest.raises(OperationalError):
        async with app.router.lifespan_context(app):
            pass
