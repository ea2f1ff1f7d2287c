"""Integration tests for the todo REST endpoints."""

from collections.abc import Generator, Sequence
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tasksync.api.app import create_app
from tasksync.api.dependencies import get_todo_service
from tasksync.config.settings import Settings
from tasksync.todos.errors import StorageError
from tasksync.todos.models import Todo
from tasksync.todos.stores.inmemory import InMemoryTodoStore


class FailingStore(InMemoryTodoStore):
    """Store whose writes always fail."""

    async def replace_all(self, todos: Sequence[Todo]) -> None:
        raise StorageError("/var/lib/tasksync/todos.json is read-only")


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings, store=InMemoryTodoStore())


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(app) as client:
        yield client


class TestCreate:
    """Tests for POST /api/todos."""

    def test_create_returns_201(self, client: TestClient) -> None:
        """A created todo comes back with its id and defaults."""
        response = client.post(
            "/api/todos",
            json={"header": "Write report", "dueDate": "2024-02-01", "priority": "high"},
        )

        assert response.status_code == 201
        assert response.json() == {
            "id": 1,
            "header": "Write report",
            "description": "",
            "startDate": None,
            "dueDate": "2024-02-01",
            "priority": "high",
            "status": "pending",
        }

    def test_missing_header_is_400(self, client: TestClient) -> None:
        """A body without a header is rejected with field details."""
        response = client.post("/api/todos", json={"description": "untitled"})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "INVALID_REQUEST"
        assert any("header" in detail["field"] for detail in error["details"])

    def test_blank_header_is_400(self, client: TestClient) -> None:
        """Whitespace-only headers are rejected."""
        response = client.post("/api/todos", json={"header": "   "})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    def test_long_header_is_accepted(self, client: TestClient) -> None:
        """Headers have no length cap."""
        response = client.post("/api/todos", json={"header": "h" * 250})

        assert response.status_code == 201
        assert response.json()["header"] == "h" * 250

    def test_malformed_json_is_400(self, client: TestClient) -> None:
        """Bodies that aren't JSON are rejected."""
        response = client.post(
            "/api/todos",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400


class TestReadUpdateDelete:
    """Tests for GET, PUT and DELETE /api/todos/{id}."""

    def test_list_is_ordered(self, client: TestClient) -> None:
        """The list comes back priority first, then by due date."""
        client.post("/api/todos", json={"header": "a", "priority": "low", "dueDate": "2024-02-01"})
        client.post("/api/todos", json={"header": "b", "priority": "high", "dueDate": "2024-03-01"})
        client.post("/api/todos", json={"header": "c", "priority": "high", "dueDate": "2024-01-01"})

        response = client.get("/api/todos")

        assert response.status_code == 200
        assert [todo["header"] for todo in response.json()] == ["c", "b", "a"]

    def test_get_one(self, client: TestClient) -> None:
        """A todo can be fetched by id."""
        client.post("/api/todos", json={"header": "Only"})

        response = client.get("/api/todos/1")

        assert response.status_code == 200
        assert response.json()["header"] == "Only"

    def test_get_unknown_is_404(self, client: TestClient) -> None:
        """Unknown ids return TODO_NOT_FOUND."""
        response = client.get("/api/todos/7")

        assert response.status_code == 404
        assert response.json()["error"] == {
            "code": "TODO_NOT_FOUND",
            "message": "Todo 7 not found",
            "details": None,
        }

    def test_update_is_partial(self, client: TestClient) -> None:
        """Only the fields sent change."""
        created = client.post(
            "/api/todos",
            json={"header": "Report", "description": "Q3", "dueDate": "2024-02-01"},
        ).json()

        response = client.put("/api/todos/1", json={"status": "in-progress"})

        assert response.status_code == 200
        assert response.json() == {**created, "status": "in-progress"}

    def test_update_null_description(self, client: TestClient) -> None:
        """A null description clears it instead of failing validation."""
        client.post("/api/todos", json={"header": "x", "description": "notes"})

        response = client.put("/api/todos/1", json={"description": None})

        assert response.status_code == 200
        assert response.json()["description"] == ""

    @pytest.mark.parametrize("method", ["get", "put", "delete"])
    def test_non_integer_id_is_400(self, client: TestClient, method: str) -> None:
        """Ids in the path must be integers."""
        kwargs = {"json": {"header": "x"}} if method == "put" else {}

        response = client.request(method.upper(), "/api/todos/abc", **kwargs)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    def test_update_unknown_is_404(self, client: TestClient) -> None:
        """Updating a missing todo returns 404."""
        response = client.put("/api/todos/3", json={"header": "x"})
        assert response.status_code == 404

    def test_update_invalid_status_is_400(self, client: TestClient) -> None:
        """Unknown enum values are rejected."""
        client.post("/api/todos", json={"header": "x"})

        response = client.put("/api/todos/1", json={"status": "done"})

        assert response.status_code == 400

    def test_delete(self, client: TestClient) -> None:
        """Delete returns 204 and a second delete returns 404."""
        client.post("/api/todos", json={"header": "Temp"})

        first = client.delete("/api/todos/1")
        second = client.delete("/api/todos/1")

        assert first.status_code == 204
        assert first.content == b""
        assert second.status_code == 404
        assert client.get("/api/todos").json() == []

    def test_request_id_header(self, client: TestClient) -> None:
        """Responses echo the request id."""
        response = client.get("/api/todos", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"


class TestFailures:
    """Tests for server-side failures."""

    def test_storage_failure_is_500(self, settings: Settings) -> None:
        """Write failures return STORAGE_ERROR without leaking paths."""
        app = create_app(settings, store=FailingStore())

        with TestClient(app) as client:
            response = client.post("/api/todos", json={"header": "Lost"})
            listing = client.get("/api/todos")

        assert response.status_code == 500
        assert response.json()["error"] == {
            "code": "STORAGE_ERROR",
            "message": "Failed to access stored todos",
            "details": None,
        }
        assert listing.json() == []

    def test_unexpected_error_is_500(self, app: FastAPI) -> None:
        """Unknown exceptions return INTERNAL_ERROR."""

        class BrokenService:
            async def list_todos(self) -> list[Todo]:
                raise RuntimeError("boom")

        app.dependency_overrides[get_todo_service] = BrokenService

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/todos")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"


class TestStartup:
    """Tests for application startup."""

    def test_samples_seeded_on_first_start(self, settings: Settings) -> None:
        """A fresh store is seeded with the sample todos."""
        settings = settings.model_copy(
            update={"storage": settings.storage.model_copy(update={"seed_samples": True})}
        )

        with TestClient(create_app(settings, store=InMemoryTodoStore())) as client:
            todos = client.get("/api/todos").json()

        assert [(todo["id"], todo["priority"]) for todo in todos] == [
            (1, "high"),
            (2, "medium"),
            (3, "low"),
        ]

    def test_json_store_survives_restart(self, settings: Settings, tmp_path: Path) -> None:
        """State written by one app instance is read by the next."""
        settings = settings.model_copy(
            update={
                "storage": settings.storage.model_copy(
                    update={"backend": "json", "path": str(tmp_path / "todos.json")}
                )
            }
        )

        with TestClient(create_app(settings)) as client:
            client.post("/api/todos", json={"header": "Persisted"})

        with TestClient(create_app(settings)) as client:
            todos = client.get("/api/todos").json()

        assert [todo["header"] for todo in todos] == ["Persisted"]


class TestHealth:
    """Tests for /health and /metrics."""

    def test_health(self, client: TestClient) -> None:
        """Health reports status, version and connected sessions."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["connected_sessions"] == 0
        assert [c["name"] for c in data["components"]] == ["todo_store"]

    def test_metrics(self, client: TestClient) -> None:
        """Metrics are exposed in Prometheus text format."""
        client.post("/api/todos", json={"header": "Counted"})

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "tasksync_todo_mutations_total" in response.text

    def test_metrics_can_be_disabled(self, settings: Settings) -> None:
        """With metrics disabled there is no /metrics route."""
        metrics = settings.observability.metrics.model_copy(update={"enabled": False})
        observability = settings.observability.model_copy(update={"metrics": metrics})
        settings = settings.model_copy(update={"observability": observability})

        with TestClient(create_app(settings, store=InMemoryTodoStore())) as client:
            assert client.get("/metrics").status_code == 404
