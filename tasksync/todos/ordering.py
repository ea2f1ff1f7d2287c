"""Canonical ordering of the authoritative todo list."""

from collections.abc import Iterable
from datetime import date

from tasksync.todos.models import Todo


def sort_key(todo: Todo) -> tuple[int, int, date]:
    """Priority rank descending, then due date ascending.

    Todos without a due date come after dated ones of the same priority.
    """
    undated = todo.due_date is None
    return (-todo.priority.rank, int(undated), todo.due_date or date.max)


def sort_todos(todos: Iterable[Todo]) -> list[Todo]:
    """Return a new list in canonical order. Ties keep their input order."""
    return sorted(todos, key=sort_key)
