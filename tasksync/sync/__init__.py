"""Live synchronization: server-side broadcast hub and client-side sync agent."""

from tasksync.sync.agent import SyncState, TodoSyncAgent
from tasksync.sync.hub import BroadcastHub, ClientSession
from tasksync.sync.models import ResyncRequest, TodoSnapshot
from tasksync.sync.view import LoggingTodoView, TodoView

__all__ = [
    "BroadcastHub",
    "ClientSession",
    "LoggingTodoView",
    "ResyncRequest",
    "SyncState",
    "TodoSnapshot",
    "TodoSyncAgent",
    "TodoView",
]
