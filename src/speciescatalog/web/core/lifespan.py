"""Application lifespan management for startup and shutdown events."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from speciescatalog.system.structlog_configurator import configure_structlog
from speciescatalog.web.core.container import Container

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Context manager for application startup and shutdown events.

    Configures logging, mounts static files, creates the database schema and
    connects the refresh broadcaster before serving; on shutdown it releases
    the database engine and the completion client.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control back to the application for normal operation.
    """
    container: Container = app.container  # type: ignore[attr-defined]

    config = container.config()
    configure_structlog(config)

    path_resolver = container.path_resolver()
    app.mount(
        "/static",
        StaticFiles(directory=path_resolver.get_static_dir()),
        name="static",
    )

    core_database = container.core_database()
    await core_database.initialize()

    refresh_broadcaster = container.refresh_broadcaster()
    refresh_broadcaster.register_listeners()

    logger.info("Species catalog started")
    try:
        yield
    finally:
        logger.info("Shutting down species catalog...")
        refresh_broadcaster.unregister_listeners()

        # Every step runs even when an earlier one fails; the first error is re-raised
        shutdown_errors: list[Exception] = []
        shutdown_steps = (
            ("completion client", container.completion_provider().close),
            ("database", core_database.dispose),
        )
        for name, stop in shutdown_steps:
            try:
                await stop()
            except Exception as e:
                logger.error("Error stopping %s: %s", name, e)
                shutdown_errors.append(e)

        if shutdown_errors:
            raise shutdown_errors[0]
        logger.info("All services stopped successfully")
