"""Configuration section models."""

from tasksync.config.models.api import APIConfig
from tasksync.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
)
from tasksync.config.models.storage import StorageConfig

__all__ = [
    "APIConfig",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "StorageConfig",
]
