"""TaskSync API client.

Provides an async client for the REST boundary of the todo server.

Usage:
    from tasksync.client import TodoClient

    async with TodoClient("http://localhost:3000") as client:
        todo = await client.create_todo({"header": "Write report", "priority": "high"})
        todos = await client.list_todos()
"""

from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import ValidationError
from pydantic_core import to_jsonable_python

from tasksync.todos.models import Todo


class TodoClientError(Exception):
    """Raised when the server answers with an error response."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details


class NetworkError(TodoClientError):
    """Raised when the server could not be reached or the transport failed."""


class TodoClient:
    """Async client for the todo API.

    Attributes:
        base_url: Base URL of the TaskSync server
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Base URL of the TaskSync server
            timeout: Request timeout in seconds
            transport: Optional httpx transport (e.g. ASGITransport in tests)
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "TodoClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    @property
    def ws_url(self) -> str:
        """URL of the push channel for this server."""
        if self.base_url.startswith("https://"):
            return "wss://" + self.base_url[len("https://"):] + "/ws"
        if self.base_url.startswith("http://"):
            return "ws://" + self.base_url[len("http://"):] + "/ws"
        return self.base_url + "/ws"

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
    ) -> Any:
        """Make an API request and decode the JSON body."""
        try:
            response = await self._client.request(method=method, url=path, json=json)
        except httpx.TransportError as e:
            raise NetworkError(f"Network error: {e}") from e

        if response.status_code >= 400:
            code = None
            details = None
            try:
                error = response.json().get("error", {})
                message = error.get("message", response.text)
                code = error.get("code")
                details = error.get("details")
            except (ValueError, AttributeError):
                message = response.text or response.reason_phrase

            raise TodoClientError(
                message=message,
                status_code=response.status_code,
                code=code,
                details=details,
            )

        if response.status_code == 204:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise TodoClientError(
                "Server returned a malformed response", status_code=response.status_code
            ) from e

    # Health
    async def health(self) -> dict[str, Any]:
        """Check server health."""
        return await self._request("GET", "/health")

    # Todos
    async def list_todos(self) -> list[Todo]:
        """Fetch the authoritative ordered list."""
        data = await self._request("GET", "/api/todos")
        return [_to_todo(item) for item in data]

    async def get_todo(self, todo_id: int) -> Todo:
        """Fetch one todo."""
        data = await self._request("GET", f"/api/todos/{todo_id}")
        return _to_todo(data)

    async def create_todo(self, fields: Mapping[str, Any]) -> Todo:
        """Create a todo. `fields` may use camelCase or snake_case keys."""
        data = await self._request("POST", "/api/todos", json=to_jsonable_python(dict(fields)))
        return _to_todo(data)

    async def update_todo(self, todo_id: int, fields: Mapping[str, Any]) -> Todo:
        """Apply a partial update to a todo."""
        data = await self._request(
            "PUT",
            f"/api/todos/{todo_id}",
            json=to_jsonable_python(dict(fields)),
        )
        return _to_todo(data)

    async def delete_todo(self, todo_id: int) -> None:
        """Delete a todo."""
        await self._request("DELETE", f"/api/todos/{todo_id}")


def _to_todo(data: Any) -> Todo:
    try:
        return Todo.model_validate(data)
    except ValidationError as e:
        raise TodoClientError("Server returned an invalid todo") from e
