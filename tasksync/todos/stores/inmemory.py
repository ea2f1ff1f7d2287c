"""In-memory implementation of TodoStore."""

from collections.abc import Sequence

from tasksync.todos.models import Todo
from tasksync.todos.store import TodoStore


class InMemoryTodoStore(TodoStore):
    """In-memory implementation of TodoStore for testing and development.

    Holds copies of the records so callers can never mutate stored state
    through a reference they were handed. Nothing survives a restart.
    """

    def __init__(self, todos: Sequence[Todo] = ()) -> None:
        self._todos: list[Todo] | None = (
            [todo.model_copy() for todo in todos] if todos else None
        )

    async def initialize(self, samples: Sequence[Todo] = ()) -> bool:
        """Seed samples unless something was already stored."""
        if self._todos is not None:
            return False
        self._todos = [todo.model_copy() for todo in samples]
        return bool(samples)

    async def load_all(self) -> list[Todo]:
        """Return copies of all stored todos."""
        return [todo.model_copy() for todo in self._todos or []]

    async def replace_all(self, todos: Sequence[Todo]) -> None:
        """Replace the stored record set."""
        self._todos = [todo.model_copy() for todo in todos]
