"""API middleware."""

from tasksync.api.middleware.context import RequestContextMiddleware

__all__ = ["RequestContextMiddleware"]
