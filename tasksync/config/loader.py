"""Layered TOML configuration.

`config/default.toml` is the base layer; `config/{TASKSYNC_ENV}.toml`, if
present, is merged over it. Environment variables are applied later by
`Settings` itself.
"""

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

# checkout root when running from source: tasksync/config/loader.py -> ../../
_SOURCE_ROOT = Path(__file__).resolve().parents[2]


def get_config_dir() -> Path:
    """Locate the directory holding the TOML layers.

    `TASKSYNC_CONFIG_DIR` wins and must exist. Otherwise the first
    `config/` found walking up from the working directory is used, then
    the one next to the source checkout.
    """
    override = os.environ.get("TASKSYNC_CONFIG_DIR")
    if override:
        path = Path(override)
        if not path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {override}")
        return path

    cwd = Path.cwd()
    for candidate in (cwd, *cwd.parents, _SOURCE_ROOT):
        if (candidate / "config").is_dir():
            return candidate / "config"

    return cwd / "config"


def get_environment() -> str:
    """Name of the environment layer to apply (`TASKSYNC_ENV`, default development)."""
    return os.environ.get("TASKSYNC_ENV", "development")


def load_toml(file_path: Path) -> dict[str, Any]:
    """Parse one TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    try:
        with file_path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError as e:
        raise FileNotFoundError(f"Configuration file not found: {file_path}") from e


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return `base` with `override` laid over it; tables merge key by key.

    Neither input is modified.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = deep_merge(current, value)
        merged[key] = value
    return merged


def _layers(config_dir: Path, env: str) -> Iterator[Path]:
    yield config_dir / "default.toml"
    env_layer = config_dir / f"{env}.toml"
    if env_layer.is_file():
        yield env_layer


def load_config(config_dir: Path | None = None, env: str | None = None) -> dict[str, Any]:
    """Merge the TOML layers into one dict.

    Args:
        config_dir: Directory to read; located with `get_config_dir` when omitted
        env: Environment layer name; `get_environment()` when omitted

    Raises:
        FileNotFoundError: If `default.toml` is missing
    """
    config_dir = config_dir or get_config_dir()
    env = env or get_environment()

    if not (config_dir / "default.toml").is_file():
        raise FileNotFoundError(
            f"Default configuration file not found: {config_dir / 'default.toml'}. "
            "Create config/default.toml or set TASKSYNC_CONFIG_DIR."
        )

    config: dict[str, Any] = {}
    for layer in _layers(config_dir, env):
        config = deep_merge(config, load_toml(layer))
    return config
