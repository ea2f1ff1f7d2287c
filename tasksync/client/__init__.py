"""TaskSync API client.

Usage:
    from tasksync.client import TodoClient

    async with TodoClient("http://localhost:3000") as client:
        todos = await client.list_todos()
"""

from tasksync.client.client import NetworkError, TodoClient, TodoClientError

__all__ = ["NetworkError", "TodoClient", "TodoClientError"]
