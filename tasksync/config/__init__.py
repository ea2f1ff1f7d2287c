"""Configuration loading for TaskSync.

Configuration is loaded from TOML files with environment variable overrides.

Usage:
    from tasksync.config import get_settings

    settings = get_settings()
    port = settings.api.port
"""

from functools import lru_cache

from tasksync.config.loader import load_config
from tasksync.config.settings import Settings, set_toml_config
from tasksync.observability.logging import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the singleton settings instance.

    Falls back to model defaults (plus TASKSYNC_* environment variables)
    when no config/default.toml can be found.

    The result is cached for the lifetime of the process.
    Call `get_settings.cache_clear()` to reload configuration.
    """
    try:
        set_toml_config(load_config())
    except FileNotFoundError:
        logger.warning("config_file_not_found", msg="Using default configuration")
        set_toml_config({})

    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]
