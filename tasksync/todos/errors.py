"""Todo domain exceptions.

The API layer maps each of these to an HTTP status and error code; the
service and stores never translate them into anything else.
"""

from pydantic import ValidationError


class TodoError(Exception):
    """Base exception for todo operations."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TodoValidationError(TodoError):
    """Raised when a todo's fields are missing or invalid."""

    def __init__(
        self,
        message: str,
        details: list[tuple[str | None, str]] | None = None,
    ) -> None:
        super().__init__(message)
        self.details = details or []

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> "TodoValidationError":
        """Build from a pydantic ValidationError, keeping per-field messages."""
        details = [
            (".".join(str(loc) for loc in error["loc"]) or None, error["msg"])
            for error in exc.errors()
        ]
        return cls("Invalid todo fields", details=details)


class TodoNotFoundError(TodoError):
    """Raised when an operation targets an id that does not exist."""

    def __init__(self, todo_id: int) -> None:
        super().__init__(f"Todo {todo_id} not found")
        self.todo_id = todo_id


class StorageError(TodoError):
    """Raised when persisted state cannot be read or written.

    A failed write never leaves partially applied state behind.
    """
