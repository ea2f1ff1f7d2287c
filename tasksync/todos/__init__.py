"""Todo domain: models, ordering, storage and the mutation service."""

from tasksync.todos.errors import (
    StorageError,
    TodoError,
    TodoNotFoundError,
    TodoValidationError,
)
from tasksync.todos.models import Priority, Status, Todo, TodoPatch
from tasksync.todos.ordering import sort_todos
from tasksync.todos.service import TodoService
from tasksync.todos.store import TodoStore

__all__ = [
    "Priority",
    "Status",
    "StorageError",
    "Todo",
    "TodoError",
    "TodoNotFoundError",
    "TodoPatch",
    "TodoService",
    "TodoStore",
    "TodoValidationError",
    "sort_todos",
]
