"""Health check and metrics endpoints."""

import time
from datetime import UTC, datetime

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from tasksync import __version__
from tasksync.api.dependencies import BroadcastHubDep, TodoStoreDep
from tasksync.api.models.health import ComponentHealth, HealthResponse
from tasksync.observability.logging import get_logger
from tasksync.todos.errors import StorageError
from tasksync.todos.store import TodoStore

logger = get_logger(__name__)

router = APIRouter()
metrics_router = APIRouter()


async def _check_store_health(store: TodoStore) -> ComponentHealth:
    """Check the todo store by reading it."""
    start = time.time()
    try:
        await store.load_all()
    except StorageError as e:
        return ComponentHealth(
            name="todo_store",
            status="unhealthy",
            latency_ms=(time.time() - start) * 1000,
            message=e.message,
        )
    return ComponentHealth(
        name="todo_store",
        status="healthy",
        latency_ms=(time.time() - start) * 1000,
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(store: TodoStoreDep, hub: BroadcastHubDep) -> HealthResponse:
    """Check service health status.

    Returns the overall status, the todo store's status and the number
    of sessions attached to the push channel.
    """
    logger.debug("health_check_request")

    components = [await _check_store_health(store)]
    overall = "unhealthy" if any(c.status == "unhealthy" for c in components) else "healthy"

    return HealthResponse(
        status=overall,
        version=__version__,
        connected_sessions=hub.session_count,
        components=components,
        timestamp=datetime.now(UTC),
    )


@metrics_router.get("/metrics")
async def get_metrics() -> Response:
    """Get Prometheus metrics in text format for scraping."""
    logger.debug("metrics_request")

    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
