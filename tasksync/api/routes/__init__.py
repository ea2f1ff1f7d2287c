"""API route registration.

This module provides helper functions for registering API routers
with the FastAPI application.
"""

from fastapi import FastAPI

from tasksync.config.settings import Settings
from tasksync.observability.logging import get_logger

logger = get_logger(__name__)


def register_routes(app: FastAPI, settings: Settings) -> None:
    """Register all routes with the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Settings the application was created with
    """
    from tasksync.api.routes.health import metrics_router
    from tasksync.api.routes.health import router as health_router
    from tasksync.api.routes.sync import router as sync_router
    from tasksync.api.routes.todos import router as todos_router

    app.include_router(todos_router, prefix="/api", tags=["Todos"])
    app.include_router(sync_router, tags=["Sync"])

    # Register health routes at root level
    app.include_router(health_router, tags=["Health"])
    if settings.observability.metrics.enabled:
        app.include_router(metrics_router, tags=["Health"])

    logger.info("routes_registered", metrics=settings.observability.metrics.enabled)
