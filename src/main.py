"""taskflow - multi-user task tracking API."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.core.db_client import Database
from src.core.errors import StorageError
from src.core.logging import configure_logfire, instrument_fastapi
from src.core.schema import init_db
from src.interface.tasks_router import register_error_handlers, router as tasks_router
from src.modules.tasks.service import TaskService
from src.modules.tasks.store import SqliteTaskStore
from src.services.auth_service import AuthProvider, get_auth_provider


logger = logging.getLogger(__name__)


def validate_startup_configuration() -> AuthProvider:
    """Validate required credentials, exiting with a clear message when one is missing."""
    logger.info("startup_validation_begin")

    try:
        auth_provider = get_auth_provider()
    except ValueError as e:
        logger.error("startup_validation_failed", extra={"error": str(e)})
        print(f"\n❌ Startup validation failed: {e}\n", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    logger.info("startup_validation_complete", extra={"status": "ok"})
    return auth_provider


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the database and wire services at startup; close the database at shutdown."""
    configure_logfire()

    auth_provider = validate_startup_configuration()

    db = Database(settings.sqlite_db_path)
    try:
        await db.open()
        await init_db(db)
    except StorageError as e:
        logger.error("database_init_failed", extra={"error": str(e)})
        await db.close()
        raise
    logger.info("Database initialized")

    app.state.db = db
    app.state.auth_provider = auth_provider
    app.state.task_service = TaskService(SqliteTaskStore(db))
    try:
        yield
    finally:
        await db.close()


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    application = FastAPI(
        title="taskflow",
        description="Multi-user task tracking API",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(application)

    application.include_router(tasks_router)
    register_error_handlers(application)

    @application.get("/health")
    async def health_check() -> JSONResponse:
        """Health check endpoint."""
        return JSONResponse(content={"status": "healthy"}, status_code=200)

    return application


app = create_app()
