"""Q&A API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map QAError → {"error": string} responses
    - The connection pool lives on app.state for the process lifetime:
      created in lifespan startup, disposed in lifespan shutdown
    - Paths are normalised before routing (duplicate/trailing slashes)

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app() factory: tests build the app without touching the database
      and override get_store instead
    - run() hands SIGINT/SIGTERM and the graceful-shutdown window to uvicorn
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from qa_api.api.error_handlers import register_error_handlers
from qa_api.api.middleware import NormalizePathMiddleware, log_requests
from qa_api.api.routes import health, questions, answers
from qa_api.config import Settings, get_settings
from qa_api.infrastructure.database import DatabaseSessionManager
from qa_api.infrastructure.observability import setup_logging
from qa_api.services.qa_storage import QAStorage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    db = DatabaseSessionManager(
        settings.resolved_database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    try:
        if settings.auto_create_schema:
            await db.create_schema()
    except Exception:
        logger.error("failed to connect database", exc_info=True)
        await db.dispose()
        raise
    app.state.db = db
    app.state.store = QAStorage(
        db, operation_timeout=settings.db_operation_timeout_seconds,
    )
    logger.info("Q&A API started")
    yield
    logger.info("Q&A API shutting down")
    await db.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application with routes, middleware and handlers."""
    app = FastAPI(
        title="Q&A API", version="1.0.0", lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.settings = settings or get_settings()

    app.middleware("http")(log_requests)
    # Added last so it wraps everything, including the access log
    app.add_middleware(NormalizePathMiddleware)

    # Routes — explicit registration
    app.include_router(health.router)
    app.include_router(questions.router)
    app.include_router(answers.router)

    register_error_handlers(app)
    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn using HTTP_HOST / HTTP_PORT."""
    settings = get_settings()
    uvicorn.run(
        "qa_api.main:app",
        host=settings.http_host,
        port=settings.http_port,
        timeout_graceful_shutdown=settings.shutdown_grace_seconds,
        log_config=None,
    )


if __name__ == "__main__":
    run()
