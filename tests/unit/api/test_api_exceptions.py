"""Unit tests for mapping domain errors to API errors."""

from tasksync.api.exceptions import (
    InvalidRequestError,
    NotFoundError,
    StorageFailureError,
    TaskSyncAPIError,
    from_todo_error,
)
from tasksync.api.models.errors import ErrorCode
from tasksync.todos.errors import (
    StorageError,
    TodoError,
    TodoNotFoundError,
    TodoValidationError,
)


class TestFromTodoError:
    """Tests for from_todo_error."""

    def test_validation_error(self) -> None:
        """Validation errors become 400 with field details."""
        error = from_todo_error(
            TodoValidationError("Invalid todo fields", details=[("header", "must not be empty")])
        )

        assert isinstance(error, InvalidRequestError)
        assert error.status_code == 400
        assert error.error_code == ErrorCode.INVALID_REQUEST
        assert error.details is not None
        assert [(d.field, d.message) for d in error.details] == [("header", "must not be empty")]

    def test_not_found(self) -> None:
        """Missing todos become 404."""
        error = from_todo_error(TodoNotFoundError(3))

        assert isinstance(error, NotFoundError)
        assert error.status_code == 404
        assert error.message == "Todo 3 not found"

    def test_storage_error_hides_details(self) -> None:
        """Storage errors become 500 with a generic message."""
        error = from_todo_error(StorageError("Could not write /srv/todos.json"))

        assert isinstance(error, StorageFailureError)
        assert error.status_code == 500
        assert error.error_code == ErrorCode.STORAGE_ERROR
        assert "/srv" not in error.message

    def test_other_errors_are_internal(self) -> None:
        """Anything else maps to INTERNAL_ERROR."""
        error = from_todo_error(TodoError("odd"))

        assert type(error) is TaskSyncAPIError
        assert error.error_code == ErrorCode.INTERNAL_ERROR
