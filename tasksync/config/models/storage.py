"""Storage backend configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

BackendType = Literal["json", "inmemory"]


class StorageConfig(BaseModel):
    """Configuration for the todo store."""

    backend: BackendType = Field(
        default="json",
        description="Backend type",
    )
    path: str = Field(
        default="todos.json",
        description="Location of the JSON document for the json backend",
    )
    seed_samples: bool = Field(
        default=True,
        description="Write the sample todos when no state has been persisted yet",
    )
