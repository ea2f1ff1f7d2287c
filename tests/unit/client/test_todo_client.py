"""Unit tests for TodoClient against the ASGI app."""

import httpx
import pytest

from tasksync.api.app import create_app
from tasksync.client import NetworkError, TodoClient, TodoClientError
from tasksync.config.settings import Settings
from tasksync.todos.models import Priority, Status
from tasksync.todos.stores.inmemory import InMemoryTodoStore


@pytest.fixture
def store() -> InMemoryTodoStore:
    return InMemoryTodoStore()


@pytest.fixture
async def client(settings: Settings, store: InMemoryTodoStore):
    app = create_app(settings, store=store)
    client = TodoClient("http://testserver", transport=httpx.ASGITransport(app=app))
    yield client
    await client.close()


class TestTodoCrud:
    """Tests for the CRUD calls."""

    async def test_create_and_list(self, client: TodoClient) -> None:
        """Created todos come back ordered by the server."""
        await client.create_todo({"header": "Low", "priority": "low"})
        high = await client.create_todo({"header": "High", "priority": Priority.HIGH})

        todos = await client.list_todos()

        assert high.id == 2
        assert [todo.header for todo in todos] == ["High", "Low"]

    async def test_update_and_get(self, client: TodoClient) -> None:
        """Partial updates are applied by the server."""
        created = await client.create_todo({"header": "Draft", "dueDate": "2024-03-01"})

        await client.update_todo(created.id, {"status": Status.COMPLETED})
        fetched = await client.get_todo(created.id)

        assert fetched.status == Status.COMPLETED
        assert fetched.due_date == created.due_date

    async def test_delete(self, client: TodoClient) -> None:
        """Deleted todos are gone."""
        created = await client.create_todo({"header": "Temp"})

        assert await client.delete_todo(created.id) is None
        assert await client.list_todos() == []

    async def test_health(self, client: TodoClient) -> None:
        """Health is reported as a plain dict."""
        health = await client.health()
        assert health["status"] == "healthy"


class TestErrors:
    """Tests for error translation."""

    async def test_not_found(self, client: TodoClient) -> None:
        """Error bodies become TodoClientError with code and status."""
        with pytest.raises(TodoClientError) as exc_info:
            await client.get_todo(42)

        assert exc_info.value.status_code == 404
        assert exc_info.value.code == "TODO_NOT_FOUND"
        assert exc_info.value.message == "Todo 42 not found"

    async def test_validation_error(self, client: TodoClient) -> None:
        """Rejected bodies carry INVALID_REQUEST and details."""
        with pytest.raises(TodoClientError) as exc_info:
            await client.create_todo({"description": "no header"})

        assert exc_info.value.status_code == 400
        assert exc_info.value.code == "INVALID_REQUEST"
        assert exc_info.value.details

    async def test_network_error(self) -> None:
        """Transport failures become NetworkError."""

        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = TodoClient("http://testserver", transport=httpx.MockTransport(refuse))
        try:
            with pytest.raises(NetworkError, match="Network error"):
                await client.list_todos()
        finally:
            await client.close()

    async def test_malformed_response(self) -> None:
        """Non-JSON success bodies are reported, not leaked as decode errors."""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>"))

        async with TodoClient("http://testserver", transport=transport) as client:
            with pytest.raises(TodoClientError, match="malformed"):
                await client.list_todos()


class TestWsUrl:
    """Tests for push channel URL derivation."""

    @pytest.mark.parametrize(
        ("base_url", "expected"),
        [
            ("http://localhost:3000", "ws://localhost:3000/ws"),
            ("https://todos.example.com/", "wss://todos.example.com/ws"),
        ],
    )
    async def test_ws_url(self, base_url: str, expected: str) -> None:
        """http maps to ws and https to wss."""
        async with TodoClient(base_url) as client:
            assert client.ws_url == expected
