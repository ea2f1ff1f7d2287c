"""Presentation seam for the client sync agent.

The presentation layer (whatever renders the list) implements `TodoView`
and is handed to the agent explicitly.
"""

from collections.abc import Sequence
from typing import Literal, Protocol

from tasksync.observability.logging import get_logger
from tasksync.todos.models import Todo

NoticeLevel = Literal["success", "error"]

logger = get_logger(__name__)


class TodoView(Protocol):
    """Receives state and user-facing messages from the agent."""

    def render(self, todos: Sequence[Todo]) -> None:
        """Re-render with the list the agent now holds."""
        ...

    def notify(self, message: str, level: NoticeLevel) -> None:
        """Show a transient message to the user."""
        ...


class LoggingTodoView:
    """Headless view that only logs; used when no UI is attached."""

    def render(self, todos: Sequence[Todo]) -> None:
        logger.info("todos_rendered", count=len(todos), ids=[todo.id for todo in todos])

    def notify(self, message: str, level: NoticeLevel) -> None:
        if level == "error":
            logger.warning("user_notice", level=level, message=message)
        else:
            logger.info("user_notice", level=level, message=message)
