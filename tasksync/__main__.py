"""Run the TaskSync server: `python -m tasksync`."""

import os

import uvicorn

from tasksync.config import get_settings
from tasksync.observability.logging import get_logger, setup_logging


def main() -> None:
    settings = get_settings()
    setup_logging(
        level=settings.observability.logging.level,
        format=settings.observability.logging.format,
    )

    # plain PORT wins over TASKSYNC_API__PORT, matching common hosting setups
    port = int(os.environ.get("PORT", settings.api.port))
    get_logger(__name__).info("server_starting", host=settings.api.host, port=port)

    uvicorn.run(
        "tasksync.api.app:app",
        host=settings.api.host,
        port=port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
