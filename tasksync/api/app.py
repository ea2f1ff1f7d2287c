"""FastAPI application factory.

Creates and configures the FastAPI application with middleware,
exception handlers, and route registration. The todo store, the
broadcast hub and the todo service are created here and owned by the
application instance for its whole lifetime.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tasksync import __version__
from tasksync.api.exceptions import TaskSyncAPIError, from_todo_error
from tasksync.api.middleware.context import RequestContextMiddleware
from tasksync.api.models.errors import ErrorBody, ErrorCode, ErrorDetail, ErrorResponse
from tasksync.api.routes import register_routes
from tasksync.config import get_settings
from tasksync.config.settings import Settings
from tasksync.observability.logging import get_logger
from tasksync.sync.hub import BroadcastHub
from tasksync.todos.errors import StorageError, TodoError
from tasksync.todos.samples import SAMPLE_TODOS
from tasksync.todos.service import TodoService
from tasksync.todos.store import TodoStore
from tasksync.todos.stores import create_todo_store

logger = get_logger(__name__)


def create_app(settings: Settings | None = None, store: TodoStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    This factory function creates a fully configured FastAPI app with:
    - CORS middleware
    - Request context middleware
    - Global exception handlers
    - The todo store, broadcast hub and todo service on `app.state`
    - All API routes registered

    Args:
        settings: Settings to use; loaded from config files when omitted
        store: Todo store to use; built from `settings.storage` when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    store = store or create_todo_store(settings.storage)
    hub = BroadcastHub(queue_size=settings.api.ws_queue_size)
    service = TodoService(store, publisher=hub)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:  # noqa: ARG001
        samples = SAMPLE_TODOS if settings.storage.seed_samples else ()
        await store.initialize(samples)
        logger.info("app_started", storage_backend=settings.storage.backend)
        yield
        await hub.close()
        logger.info("app_stopped")

    app = FastAPI(
        title="TaskSync API",
        description="Shared todo list with real-time synchronization",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.todo_store = store
    app.state.broadcast_hub = hub
    app.state.todo_service = service

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=settings.api.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add request context middleware
    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)
    register_routes(app, settings)

    logger.info(
        "app_created",
        debug=settings.debug,
        storage_backend=settings.storage.backend,
        cors_origins=settings.api.cors_origins,
    )

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Every error response has the shape `{"error": {"code", "message",
    "details"}}`.

    Args:
        app: FastAPI application
    """

    @app.exception_handler(TaskSyncAPIError)
    async def tasksync_api_error_handler(request: Request, exc: TaskSyncAPIError) -> JSONResponse:
        """Handle TaskSyncAPIError and its subclasses."""
        logger.warning(
            "api_error",
            error_code=exc.error_code.value,
            message=exc.message,
            path=request.url.path,
        )
        return _error_response(exc)

    @app.exception_handler(TodoError)
    async def todo_error_handler(request: Request, exc: TodoError) -> JSONResponse:
        """Handle domain errors raised by the todo service."""
        if isinstance(exc, StorageError):
            logger.error("storage_error", error=exc.message, path=request.url.path)
        else:
            logger.warning(
                "todo_error",
                error_type=type(exc).__name__,
                message=exc.message,
                path=request.url.path,
            )
        return _error_response(from_todo_error(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle FastAPI request validation errors."""
        logger.warning(
            "validation_error",
            errors=exc.errors(),
            path=request.url.path,
        )

        details = []
        for error in exc.errors():
            field = ".".join(str(loc) for loc in error["loc"])
            details.append(ErrorDetail(field=field, message=error["msg"]))

        error_body = ErrorBody(
            code=ErrorCode.INVALID_REQUEST,
            message="Request validation failed",
            details=details,
        )

        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error=error_body).model_dump(mode="json"),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unexpected_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )

        error_body = ErrorBody(
            code=ErrorCode.INTERNAL_ERROR,
            message="An unexpected error occurred",
        )

        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=error_body).model_dump(mode="json"),
        )

    logger.debug("exception_handlers_registered")


def _error_response(exc: TaskSyncAPIError) -> JSONResponse:
    error_body = ErrorBody(code=exc.error_code, message=exc.message, details=exc.details)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=error_body).model_dump(mode="json"),
    )


# Create the app instance for uvicorn
app = create_app()
