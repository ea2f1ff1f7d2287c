"""Client sync agent: per-session holder of the last authoritative list.

The agent never edits its list speculatively. Mutations are sent to the
server and the agent waits for the pushed snapshot that reflects them, so
every session converges on one server-confirmed order. Any snapshot it
receives, triggered by itself or by someone else, replaces the list
wholesale; the last full snapshot wins.

Failures never escape to the presentation layer. They end as an error
notice, the list keeps its last known-good value, and nothing is retried.
"""

from collections.abc import Awaitable, Mapping
from enum import Enum
from typing import Any, TypeVar

import aiohttp
from pydantic import ValidationError

from tasksync.client import NetworkError, TodoClient, TodoClientError
from tasksync.observability.logging import get_logger
from tasksync.sync.models import TodoSnapshot
from tasksync.sync.view import LoggingTodoView, TodoView
from tasksync.todos.models import Todo

logger = get_logger(__name__)

T = TypeVar("T")


class SyncState(str, Enum):
    """Whether the agent is waiting on any request."""

    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"


class TodoSyncAgent:
    """Keeps one client session in step with the server.

    Args:
        client: REST client for the todo API
        view: Presentation layer to render into and notify
    """

    def __init__(self, client: TodoClient, view: TodoView | None = None) -> None:
        self._client = client
        self._view = view or LoggingTodoView()
        self._current: tuple[Todo, ...] = ()
        self._in_flight = 0
        self._connected = False
        self._has_connected = False

    @property
    def current_list(self) -> tuple[Todo, ...]:
        """Last authoritative list received."""
        return self._current

    @property
    def state(self) -> SyncState:
        if self._in_flight:
            return SyncState.AWAITING_RESPONSE
        return SyncState.IDLE

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def connected(self) -> bool:
        return self._connected

    def get_todo(self, todo_id: int) -> Todo | None:
        """Look a todo up in the current list (e.g. to fill an edit form)."""
        for todo in self._current:
            if todo.id == todo_id:
                return todo
        return None

    async def load(self) -> bool:
        """Pull the authoritative list once and apply it."""
        try:
            todos = await self._send(self._client.list_todos())
        except TodoClientError as e:
            self._report_failure("Failed to load todos", e)
            return False

        self._apply(todos, source="pull")
        return True

    async def create_todo(self, fields: Mapping[str, Any]) -> Todo | None:
        """Ask the server to create a todo; the list changes when the snapshot arrives."""
        try:
            todo = await self._send(self._client.create_todo(fields))
        except TodoClientError as e:
            self._report_failure("Failed to save todo", e)
            return None

        self._view.notify("Task created successfully!", "success")
        return todo

    async def update_todo(self, todo_id: int, fields: Mapping[str, Any]) -> Todo | None:
        """Ask the server to apply a partial update."""
        try:
            todo = await self._send(self._client.update_todo(todo_id, fields))
        except TodoClientError as e:
            self._report_failure("Failed to save todo", e)
            return None

        self._view.notify("Task updated successfully!", "success")
        return todo

    async def delete_todo(self, todo_id: int) -> bool:
        """Ask the server to delete a todo."""
        try:
            await self._send(self._client.delete_todo(todo_id))
        except TodoClientError as e:
            self._report_failure("Failed to delete todo", e)
            return False

        self._view.notify("Task deleted successfully!", "success")
        return True

    def receive(self, message: str | bytes | Mapping[str, Any]) -> bool:
        """Apply a message from the push channel.

        Returns False if the message was not a valid snapshot.
        """
        try:
            if isinstance(message, str | bytes):
                snapshot = TodoSnapshot.model_validate_json(message)
            else:
                snapshot = TodoSnapshot.model_validate(message)
        except ValidationError as e:
            logger.warning("snapshot_rejected", errors=e.error_count())
            return False

        self._apply(snapshot.todos, source="push")
        return True

    async def mark_connected(self) -> None:
        """Record that the push channel is up; resync if this is a reconnect."""
        reconnect = self._has_connected and not self._connected
        self._connected = True
        self._has_connected = True
        logger.info("push_channel_connected", reconnect=reconnect)

        if reconnect:
            await self.load()

    def mark_disconnected(self) -> None:
        """Record that the push channel dropped. Nothing else happens until reconnect."""
        if not self._connected:
            return
        self._connected = False
        logger.warning("push_channel_disconnected", todos=len(self._current))

    async def listen(
        self,
        ws_url: str | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """Run one push-channel connection until the server or network ends it.

        Does not reconnect on its own; call again to reconnect, which
        also pulls the list to close any gap.
        """
        url = ws_url or self._client.ws_url
        owns_session = session is None
        http = session or aiohttp.ClientSession()

        try:
            async with http.ws_connect(url) as ws:
                await self.mark_connected()
                async for msg in ws:
                    if msg.type == aiohttp.WSMsgType.TEXT:
                        self.receive(msg.data)
                    elif msg.type == aiohttp.WSMsgType.ERROR:
                        logger.warning("push_channel_error", error=str(ws.exception()))
                        break
        except aiohttp.ClientError as e:
            self._report_failure("Live updates unavailable", NetworkError(f"Network error: {e}"))
        finally:
            self.mark_disconnected()
            if owns_session:
                await http.close()

    async def _send(self, request: Awaitable[T]) -> T:
        self._in_flight += 1
        try:
            return await request
        finally:
            self._in_flight -= 1

    def _apply(self, todos: list[Todo], *, source: str) -> None:
        self._current = tuple(todos)
        logger.debug("snapshot_applied", source=source, todos=len(todos))
        self._view.render(self._current)

    def _report_failure(self, summary: str, error: TodoClientError) -> None:
        if isinstance(error, NetworkError):
            message = error.message
        else:
            message = f"{summary}: {error.message}"

        logger.warning(
            "request_failed",
            summary=summary,
            status_code=error.status_code,
            code=error.code,
            error=error.message,
        )
        self._view.notify(message, "error")
