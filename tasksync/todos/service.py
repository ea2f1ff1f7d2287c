"""Todo service: validates mutations and publishes the authoritative list.

Every mutation runs as one read-modify-write-persist-publish sequence
under a single lock, so concurrent requests can never lose an update and
snapshots are published in commit order. Reads do not take the lock; the
store guarantees they see either the old or the new state.
"""

import asyncio
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from pydantic import ValidationError

from tasksync.observability.logging import get_logger
from tasksync.observability.metrics import TODO_MUTATIONS
from tasksync.todos.errors import StorageError, TodoNotFoundError, TodoValidationError
from tasksync.todos.models import Todo, TodoPatch
from tasksync.todos.ordering import sort_todos
from tasksync.todos.store import TodoStore

logger = get_logger(__name__)


class SnapshotPublisher(Protocol):
    """Receiver of authoritative snapshots (the broadcast hub)."""

    async def broadcast(self, todos: Sequence[Todo]) -> None: ...

    async def send_snapshot(self, session: Any, todos: Sequence[Todo]) -> None: ...


class TodoService:
    """Applies todo mutations against a store.

    After each successful mutation the ordered list is re-read and handed
    to the publisher, which pushes it to every connected session.
    """

    def __init__(
        self,
        store: TodoStore,
        publisher: SnapshotPublisher | None = None,
    ) -> None:
        self._store = store
        self._publisher = publisher
        self._lock = asyncio.Lock()

    async def list_todos(self) -> list[Todo]:
        """Return the authoritative list in canonical order."""
        return sort_todos(await self._store.load_all())

    async def get_todo(self, todo_id: int) -> Todo:
        """Return one todo.

        Raises:
            TodoNotFoundError: If no todo has this id
        """
        for todo in await self._store.load_all():
            if todo.id == todo_id:
                return todo
        raise TodoNotFoundError(todo_id)

    async def create_todo(self, fields: Mapping[str, Any]) -> Todo:
        """Create a todo from `fields` and assign it the next id.

        Omitted or null fields take their defaults; a todo always starts
        as pending unless a status is given.

        Raises:
            TodoValidationError: If the header is missing/blank or a field is invalid
            StorageError: If the new state could not be persisted
        """
        provided = {key: value for key, value in fields.items() if value is not None}

        async with self._lock:
            todos = await self._store.load_all()
            new_id = max((todo.id for todo in todos), default=0) + 1
            try:
                todo = Todo.model_validate({**provided, "id": new_id})
            except ValidationError as e:
                TODO_MUTATIONS.labels(operation="create", outcome="invalid").inc()
                raise TodoValidationError.from_pydantic(e) from e

            await self._commit([*todos, todo], operation="create")

        logger.info("todo_created", todo_id=todo.id, priority=todo.priority.value)
        return todo

    async def update_todo(self, todo_id: int, fields: Mapping[str, Any]) -> Todo:
        """Shallow-merge `fields` over an existing todo.

        Fields not present in `fields` are left untouched and `id` can
        never change. A null description resets it to empty, matching
        create. Concurrent updates to one todo are last-write-wins.

        Raises:
            TodoNotFoundError: If no todo has this id
            TodoValidationError: If the merged todo is invalid
            StorageError: If the new state could not be persisted
        """
        async with self._lock:
            todos = await self._store.load_all()
            index = _index_of(todos, todo_id)
            if index is None:
                TODO_MUTATIONS.labels(operation="update", outcome="not_found").inc()
                raise TodoNotFoundError(todo_id)

            try:
                changes = TodoPatch.model_validate(dict(fields)).changes()
                if "description" in changes and changes["description"] is None:
                    changes["description"] = ""
                updated = Todo.model_validate({**todos[index].model_dump(), **changes})
            except ValidationError as e:
                TODO_MUTATIONS.labels(operation="update", outcome="invalid").inc()
                raise TodoValidationError.from_pydantic(e) from e

            todos[index] = updated
            await self._commit(todos, operation="update")

        logger.info("todo_updated", todo_id=todo_id, fields=sorted(changes))
        return updated

    async def delete_todo(self, todo_id: int) -> None:
        """Remove a todo entirely.

        Raises:
            TodoNotFoundError: If no todo has this id
            StorageError: If the new state could not be persisted
        """
        async with self._lock:
            todos = await self._store.load_all()
            index = _index_of(todos, todo_id)
            if index is None:
                TODO_MUTATIONS.labels(operation="delete", outcome="not_found").inc()
                raise TodoNotFoundError(todo_id)

            del todos[index]
            await self._commit(todos, operation="delete")

        logger.info("todo_deleted", todo_id=todo_id)

    async def sync_session(self, session: Any) -> None:
        """Push the current list to one session.

        Taken under the mutation lock so the snapshot can never be older
        than a broadcast already queued for the same session.
        """
        if self._publisher is None:
            return
        async with self._lock:
            todos = await self.list_todos()
            await self._publisher.send_snapshot(session, todos)

    async def _commit(self, todos: list[Todo], *, operation: str) -> None:
        """Persist, then publish the re-read authoritative list."""
        try:
            await self._store.replace_all(todos)
        except StorageError:
            TODO_MUTATIONS.labels(operation=operation, outcome="storage_error").inc()
            raise

        TODO_MUTATIONS.labels(operation=operation, outcome="success").inc()

        if self._publisher is None:
            return
        await self._publisher.broadcast(await self.list_todos())


def _index_of(todos: list[Todo], todo_id: int) -> int | None:
    for index, todo in enumerate(todos):
        if todo.id == todo_id:
            return index
    return None
