"""API server configuration models."""

from pydantic import BaseModel, Field


class APIConfig(BaseModel):
    """HTTP and push-channel server configuration."""

    host: str = Field(default="127.0.0.1", description="Interface to bind")
    port: int = Field(default=3000, ge=1, le=65535, description="Listen port")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True,
        description="Allow credentials on CORS requests",
    )
    ws_queue_size: int = Field(
        default=8,
        ge=1,
        description="Pending snapshots buffered per connected session",
    )
