"""Todo store implementations."""

from tasksync.config.models.storage import StorageConfig
from tasksync.todos.store import TodoStore
from tasksync.todos.stores.inmemory import InMemoryTodoStore
from tasksync.todos.stores.json_file import JsonFileTodoStore


def create_todo_store(config: StorageConfig) -> TodoStore:
    """Create the store selected by `config.backend`."""
    if config.backend == "inmemory":
        return InMemoryTodoStore()
    return JsonFileTodoStore(config.path)


__all__ = ["InMemoryTodoStore", "JsonFileTodoStore", "create_todo_store"]
