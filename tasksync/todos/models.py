"""Todo domain models."""

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Priority(str, Enum):
    """How urgent a todo is.

    Ordering of the authoritative list uses `rank`, highest first.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.HIGH: 3, Priority.MEDIUM: 2, Priority.LOW: 1}


class Status(str, Enum):
    """Progress of a todo."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class _CamelModel(BaseModel):
    """Accepts both snake_case attribute names and camelCase JSON names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("start_date", "due_date", mode="before", check_fields=False)
    @classmethod
    def blank_date_is_unset(cls, value: Any) -> Any:
        # empty date inputs arrive as ""
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Todo(_CamelModel):
    """A single task record.

    Every stored record carries all fields; optional ones are defaulted
    rather than left absent. Serialize with `to_document()` to get the
    persisted/wire shape (camelCase keys, ISO dates).
    """

    id: int = Field(..., gt=0, description="Server-assigned identifier")
    header: str = Field(..., description="Short title")
    description: str = Field(default="", description="Free-form details")
    start_date: date | None = Field(default=None, description="When work starts")
    due_date: date | None = Field(default=None, description="When work is due")
    priority: Priority = Field(default=Priority.MEDIUM)
    status: Status = Field(default=Status.PENDING)

    @field_validator("header")
    @classmethod
    def header_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    def to_document(self) -> dict:
        """Return the JSON-ready dict used on disk and on the wire."""
        return self.model_dump(mode="json", by_alias=True)


class TodoPatch(_CamelModel):
    """Partial set of editable fields.

    Only fields explicitly provided are applied on update; `id` is never
    editable and is dropped if sent.
    """

    header: str | None = None
    description: str | None = None
    start_date: date | None = None
    due_date: date | None = None
    priority: Priority | None = None
    status: Status | None = None

    def changes(self) -> dict:
        """Fields that were explicitly set, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)
