"""Dependency injection for API routes.

The store, service and broadcast hub are created by the application
factory and owned by the app instance (`app.state`); these dependencies
hand them to routes. Tests can swap any of them through
`app.dependency_overrides`.
"""

from typing import Annotated

from fastapi import Depends
from starlette.requests import HTTPConnection

from tasksync.config.settings import Settings
from tasksync.sync.hub import BroadcastHub
from tasksync.todos.service import TodoService
from tasksync.todos.store import TodoStore


def get_settings(connection: HTTPConnection) -> Settings:
    """Get the settings the application was created with."""
    return connection.app.state.settings


def get_todo_store(connection: HTTPConnection) -> TodoStore:
    """Get the application's TodoStore."""
    return connection.app.state.todo_store


def get_broadcast_hub(connection: HTTPConnection) -> BroadcastHub:
    """Get the application's BroadcastHub (the connected-session registry)."""
    return connection.app.state.broadcast_hub


def get_todo_service(connection: HTTPConnection) -> TodoService:
    """Get the application's TodoService."""
    return connection.app.state.todo_service


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
TodoStoreDep = Annotated[TodoStore, Depends(get_todo_store)]
BroadcastHubDep = Annotated[BroadcastHub, Depends(get_broadcast_hub)]
TodoServiceDep = Annotated[TodoService, Depends(get_todo_service)]
