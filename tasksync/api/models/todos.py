"""Request models for todo endpoints."""

from datetime import date

from pydantic import Field

from tasksync.todos.models import Priority, Status, TodoPatch


class TodoCreate(TodoPatch):
    """Request model for creating a todo."""

    header: str = Field(..., min_length=1, description="Short title")
    description: str | None = Field(default=None, description="Free-form details")
    start_date: date | None = Field(default=None, description="When work starts")
    due_date: date | None = Field(default=None, description="When work is due")
    priority: Priority | None = Field(default=None, description="Defaults to medium")
    status: Status | None = Field(default=None, description="Defaults to pending")


class TodoUpdate(TodoPatch):
    """Request model for updating a todo. Only the fields sent are changed."""

    header: str | None = Field(default=None, min_length=1)
