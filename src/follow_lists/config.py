"""Configuration persistence: locate and load the user config file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from follow_lists.models import (
    CONFIG_APP_NAME,
    DEFAULT_API_BASE_URL,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    UserConfig,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


def get_config_dir() -> Path:
    """Get the platform config directory.

    - Linux: ~/.config/follow-lists/
    - macOS: ~/Library/Application Support/follow-lists/
    - Windows: %APPDATA%/follow-lists/
    """
    return Path(user_config_dir(CONFIG_APP_NAME))


def get_config_path() -> Path:
    return get_config_dir() / CONFIG_FILENAME


def _safe_get(data: dict, key: str, default: Any, expected_type: type) -> Any:
    """Safely get a value from dict with type validation.

    Returns the default if key is missing or value has wrong type.
    """
    value = data.get(key, default)
    if not isinstance(value, expected_type):
        return default
    # bool is an int subclass; don't let true/false stand in for numbers
    if expected_type is int and isinstance(value, bool):
        return default
    return value


def _dict_to_config(data: dict[str, Any]) -> UserConfig:
    """Deserialize a dictionary to UserConfig with type validation."""
    base_url = _safe_get(data, "api_base_url", DEFAULT_API_BASE_URL, str).strip()
    return UserConfig(
        api_base_url=base_url or DEFAULT_API_BASE_URL,
        request_timeout_seconds=_safe_get(
            data, "request_timeout_seconds", DEFAULT_REQUEST_TIMEOUT_SECONDS, int
        ),
        export_dir=_safe_get(data, "export_dir", "", str),
        version=_safe_get(data, "version", 1, int),
    )


def load_config(path: Path | None = None) -> UserConfig:
    """Load configuration from disk.

    Returns default config if the file doesn't exist or is corrupted.
    Logs specific errors to help diagnose config issues.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return UserConfig()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        logger.warning("Config file has invalid JSON, using defaults: %s", e)
        return UserConfig()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read config file, using defaults: %s", e)
        return UserConfig()

    if not isinstance(data, dict):
        logger.warning("Config file root is not an object, using defaults")
        return UserConfig()
    return _dict_to_config(data)


__all__ = [
    "CONFIG_APP_NAME",
    "CONFIG_FILENAME",
    "get_config_dir",
    "get_config_path",
    "load_config",
]
