"""Todo CRUD endpoints.

Successful mutations are pushed to every connected session by the
service; these handlers only return the direct result to the caller.
"""

from fastapi import APIRouter, Response

from tasksync.api.dependencies import TodoServiceDep
from tasksync.api.models.todos import TodoCreate, TodoUpdate
from tasksync.observability.logging import get_logger
from tasksync.todos.models import Todo

logger = get_logger(__name__)

router = APIRouter(prefix="/todos")


@router.get("", response_model=list[Todo])
async def list_todos(service: TodoServiceDep) -> list[Todo]:
    """List all todos: priority high to low, then earliest due date first."""
    todos = await service.list_todos()
    logger.debug("list_todos_request", count=len(todos))
    return todos


@router.get("/{todo_id}", response_model=Todo)
async def get_todo(todo_id: int, service: TodoServiceDep) -> Todo:
    """Get a todo by id.

    Raises:
        TodoNotFoundError: If the todo doesn't exist
    """
    return await service.get_todo(todo_id)


@router.post("", response_model=Todo, status_code=201)
async def create_todo(request: TodoCreate, service: TodoServiceDep) -> Todo:
    """Create a todo.

    The server assigns the id; status defaults to pending.
    """
    logger.info("create_todo_request", header_length=len(request.header))
    return await service.create_todo(request.model_dump(exclude_unset=True))


@router.put("/{todo_id}", response_model=Todo)
async def update_todo(todo_id: int, request: TodoUpdate, service: TodoServiceDep) -> Todo:
    """Update a todo. Fields left out of the body keep their values.

    Raises:
        TodoNotFoundError: If the todo doesn't exist
    """
    fields = request.model_dump(exclude_unset=True)
    logger.info("update_todo_request", todo_id=todo_id, fields=sorted(fields))
    return await service.update_todo(todo_id, fields)


@router.delete("/{todo_id}", status_code=204)
async def delete_todo(todo_id: int, service: TodoServiceDep) -> Response:
    """Delete a todo.

    Raises:
        TodoNotFoundError: If the todo doesn't exist
    """
    logger.info("delete_todo_request", todo_id=todo_id)
    await service.delete_todo(todo_id)
    return Response(status_code=204)
