import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional, Sequence

import uvicorn
from fastapi import FastAPI

from app.api.router import api_router
from app.core.config import ConfigError, Settings, load_settings, resolve_config_path
from app.core.database import create_db_engine
from app.core.exceptions import StorageError
from app.core.handlers import register_exception_handlers
from app.core.logging import setup_logging
from app.core.responses import JSONLineResponse
from app.services.student.sqlite import SQLiteStudentStorage
from app.services.student.storage import StudentStorage

logger = logging.getLogger(__name__)

# Grace period for in-flight requests once a shutdown signal arrives
SHUTDOWN_GRACE_SECONDS = 5
IDLE_TIMEOUT_SECONDS = 60


def build_storage(settings: Settings) -> StudentStorage:
    """Open the SQLite store named in the settings and make sure its table exists."""
    engine = create_db_engine(settings.STORAGE_PATH, echo=settings.DB_ECHO_SQL)
    try:
        return SQLiteStudentStorage(engine)
    except StorageError:
        engine.dispose()
        raise


def create_app(settings: Settings, storage: Optional[StudentStorage] = None) -> FastAPI:
    """
    Build the FastAPI application.

    When no storage is given, one is opened from ``settings`` on startup
    and closed again on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.storage is None
        if owned:
            app.state.storage = build_storage(settings)
            logger.info("storage initialised", extra={"path": settings.STORAGE_PATH})
        try:
            yield
        finally:
            if owned:
                app.state.storage.close()
                app.state.storage = None

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.APP_VERSION,
        default_response_class=JSONLineResponse,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.storage = storage

    register_exception_handlers(app)

    # Include API router
    app.include_router(api_router, prefix="/api")
    return app


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Entry point of the ``students-api`` command.

    Startup failures (config, storage) are fatal: the process exits with 1.
    """
    try:
        settings = load_settings(resolve_config_path(argv))
    except ConfigError as e:
        print(e, file=sys.stderr)
        return 1

    log = setup_logging(settings.ENV)
    log.info(
        "starting students-api",
        extra={"env": settings.ENV, "version": settings.APP_VERSION},
    )

    try:
        storage = build_storage(settings)
    except StorageError as e:
        log.error("failed to initialise storage", extra={"error": e.message})
        return 1
    log.info("storage initialised", extra={"path": settings.STORAGE_PATH})

    app = create_app(settings, storage=storage)
    config = uvicorn.Config(
        app=app,
        host=settings.host,
        port=settings.port,
        timeout_keep_alive=IDLE_TIMEOUT_SECONDS,
        timeout_graceful_shutdown=SHUTDOWN_GRACE_SECONDS,
        log_config=None,  # keep the logging set up above
    )
    server = uvicorn.Server(config)

    log.info("server started", extra={"address": settings.HTTP_SERVER_ADDR})
    try:
        # uvicorn handles SIGINT/SIGTERM and drains in-flight requests
        server.run()
    finally:
        storage.close()

    if not server.started:
        log.error("server encountered an error", extra={"address": settings.HTTP_SERVER_ADDR})
        return 1
    log.info("server stopped gracefully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
