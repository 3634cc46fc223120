"""FastAPI application entry point for TaskHub.

Run with:
    uvicorn taskhub.api.main:app
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from taskhub import __version__
from taskhub.api.dependencies.services import get_config, get_entity_store
from taskhub.api.error_handlers import register_error_handlers
from taskhub.api.middleware.logging_middleware import LoggingMiddleware
from taskhub.api.routes import (
    auth_router,
    health_router,
    projects_router,
    tasks_router,
)
from taskhub.bootstrap.logging import configure_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging and prepare the entity store; close it on shutdown."""
    config = get_config()
    configure_logging(config)
    store = get_entity_store()
    await store.initialize()
    logger.info(
        "application_started",
        environment=config.environment,
        persistence="sql" if config.database_url else "memory",
    )
    try:
        yield
    finally:
        await store.close()
        logger.info("application_stopped")


def create_app() -> FastAPI:
    """Build the application with middleware, error handlers and routers."""
    application = FastAPI(
        title="TaskHub API",
        description="Task management with role-scoped visibility",
        version=__version__,
        lifespan=lifespan,
    )
    application.add_middleware(LoggingMiddleware)
    register_error_handlers(application)

    application.include_router(health_router)
    application.include_router(auth_router)
    application.include_router(tasks_router)
    application.include_router(projects_router)
    return application


app = create_app()
