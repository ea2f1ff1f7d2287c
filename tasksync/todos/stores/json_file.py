"""JSON document implementation of TodoStore.

The whole record set lives in one JSON array. Writes go to a temporary
file in the same directory which is fsync'd and then renamed over the
target, so a crash or failed write never leaves a truncated document.
"""

import asyncio
import json
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from tasksync.observability.logging import get_logger
from tasksync.todos.errors import StorageError
from tasksync.todos.models import Todo
from tasksync.todos.store import TodoStore

logger = get_logger(__name__)


class JsonFileTodoStore(TodoStore):
    """Persist todos to a single JSON file.

    Blocking file IO runs in a worker thread so the event loop keeps
    serving other sessions while a write is in progress.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def initialize(self, samples: Sequence[Todo] = ()) -> bool:
        """Create the document (and its directory) with `samples` if it does not exist yet."""
        if await asyncio.to_thread(self._path.exists):
            logger.debug("todo_store_found", path=str(self._path))
            return False

        try:
            await asyncio.to_thread(self._path.parent.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            logger.error("todo_store_dir_failed", path=str(self._path.parent), error=str(e))
            raise StorageError(f"Could not create {self._path.parent}") from e

        await self.replace_all(samples)
        logger.info("todo_store_seeded", path=str(self._path), count=len(samples))
        return True

    async def load_all(self) -> list[Todo]:
        """Read and validate every record in the document."""
        return await asyncio.to_thread(self._read)

    async def replace_all(self, todos: Sequence[Todo]) -> None:
        """Atomically rewrite the document."""
        documents = [todo.to_document() for todo in todos]
        await asyncio.to_thread(self._write, documents)

    def _read(self) -> list[Todo]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.error("todo_store_read_failed", path=str(self._path), error=str(e))
            raise StorageError(f"Could not read {self._path}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("todo_store_corrupt", path=str(self._path), error=str(e))
            raise StorageError(f"{self._path} is not valid JSON") from e

        if not isinstance(data, list):
            raise StorageError(f"{self._path} does not hold a list of todos")

        try:
            return [Todo.model_validate(item) for item in data]
        except ValidationError as e:
            logger.error(
                "todo_store_invalid_record",
                path=str(self._path),
                errors=e.error_count(),
            )
            raise StorageError(f"{self._path} holds an invalid todo record") from e

    def _write(self, documents: list[dict]) -> None:
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                dir=self._path.parent,
            )
        except OSError as e:
            logger.error("todo_store_write_failed", path=str(self._path), error=str(e))
            raise StorageError(f"Could not write {self._path}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(documents, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._path)
        except (OSError, TypeError, ValueError) as e:
            logger.error("todo_store_write_failed", path=str(self._path), error=str(e))
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise StorageError(f"Could not write {self._path}") from e

        logger.debug("todo_store_written", path=str(self._path), count=len(documents))
