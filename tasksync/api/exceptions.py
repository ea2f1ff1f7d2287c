"""API exception hierarchy for consistent error handling.

All API exceptions inherit from TaskSyncAPIError, which provides
status_code and error_code attributes used by the global exception
handler to generate consistent error responses. Domain errors raised by
the todo service are translated with `from_todo_error`.
"""

from tasksync.api.models.errors import ErrorCode, ErrorDetail
from tasksync.todos.errors import (
    StorageError,
    TodoError,
    TodoNotFoundError,
    TodoValidationError,
)


class TaskSyncAPIError(Exception):
    """Base exception for all API errors.

    Subclasses set status_code and error_code to define the HTTP response.
    """

    status_code: int = 500
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, details: list[ErrorDetail] | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


class InvalidRequestError(TaskSyncAPIError):
    """Raised when request validation fails."""

    status_code = 400
    error_code = ErrorCode.INVALID_REQUEST


class NotFoundError(TaskSyncAPIError):
    """Raised when a todo id doesn't exist."""

    status_code = 404
    error_code = ErrorCode.TODO_NOT_FOUND


class StorageFailureError(TaskSyncAPIError):
    """Raised when the todo store failed. Never partially applied."""

    status_code = 500
    error_code = ErrorCode.STORAGE_ERROR


def from_todo_error(exc: TodoError) -> TaskSyncAPIError:
    """Translate a domain error into its API error."""
    if isinstance(exc, TodoValidationError):
        details = [ErrorDetail(field=field, message=message) for field, message in exc.details]
        return InvalidRequestError(exc.message, details=details or None)
    if isinstance(exc, TodoNotFoundError):
        return NotFoundError(exc.message)
    if isinstance(exc, StorageError):
        # the store's message names file paths; keep it in the logs only
        return StorageFailureError("Failed to access stored todos")
    return TaskSyncAPIError(exc.message)
