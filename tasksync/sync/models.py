"""Messages exchanged over the push channel."""

from typing import Literal

from pydantic import BaseModel, Field

from tasksync.todos.models import Todo


class TodoSnapshot(BaseModel):
    """Server to client: the full authoritative list.

    Always carries the complete ordered state, so applying any snapshot
    makes every earlier one irrelevant.
    """

    type: Literal["snapshot"] = "snapshot"
    todos: list[Todo] = Field(default_factory=list)

    def to_wire(self) -> str:
        """Serialize with camelCase todo fields."""
        return self.model_dump_json(by_alias=True)


class ResyncRequest(BaseModel):
    """Client to server: ask for the current list again."""

    type: Literal["resync"] = "resync"
