"""Watcher configuration loading for the game log watcher."""

import dataclasses
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from .monitoring.config import WatcherConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "watcher.yaml"

# Environment variable -> (WatcherConfig field, converter)
ENV_OVERRIDES: dict[str, tuple[str, Any]] = {
    "GAMELOG_PATH": ("log_path", str),
    "GAMELOG_POLL_INTERVAL": ("poll_interval_seconds", float),
    "GAMELOG_MAX_REPLAY_LINES": ("max_replay_lines", int),
}


@lru_cache(maxsize=8)
def _load_yaml(config_path: str) -> dict:
    """Load the ``watcher`` mapping from a YAML file.

    Returns:
        The watcher settings, empty if the file has none

    Raises:
        ValueError: If YAML parsing fails or the document has the wrong shape
    """
    try:
        with open(config_path) as f:
            document = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse watcher configuration YAML: {e}") from e

    if not isinstance(document, dict):
        raise ValueError(f"Watcher configuration must be a mapping: {config_path}")

    settings = document.get("watcher") or {}
    if not isinstance(settings, dict):
        raise ValueError(f"'watcher' section must be a mapping: {config_path}")

    logger.debug(f"Loaded watcher configuration from {config_path}")
    return settings


def load_config(config_path: str | Path | None = None) -> WatcherConfig:
    """Build a WatcherConfig from YAML and environment overrides.

    Args:
        config_path: YAML file to read. Defaults to config/watcher.yaml in the
            project root, which may be absent.

    Returns:
        Validated watcher configuration

    Raises:
        FileNotFoundError: If an explicitly given file doesn't exist
        ValueError: If the file is malformed, has unknown keys or bad values
    """
    if config_path is None:
        path = DEFAULT_CONFIG_PATH
        settings = dict(_load_yaml(str(path))) if path.exists() else {}
    else:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Watcher configuration file not found: {path}")
        settings = dict(_load_yaml(str(path)))

    known = {field.name for field in dataclasses.fields(WatcherConfig)}
    unknown = sorted(set(settings) - known)
    if unknown:
        raise ValueError(f"Unknown watcher configuration keys: {', '.join(unknown)}")

    for env_var, (field_name, convert) in ENV_OVERRIDES.items():
        raw = os.getenv(env_var)
        if raw:
            try:
                settings[field_name] = convert(raw)
            except ValueError as e:
                raise ValueError(f"Invalid value for {env_var}: {raw!r}") from e

    return WatcherConfig(**settings)


def get_log_level(default: str = "INFO") -> str:
    """Return the log level from GAMELOG_LOG_LEVEL, or the default."""
    return os.getenv("GAMELOG_LOG_LEVEL", default).upper()
