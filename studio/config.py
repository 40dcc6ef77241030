"""
Configuration management for the studio editor.

Handles persistent configuration including:
- Start page loaded into the rendering surface
- Undo history limit
- Default editor mode
- Logging level and server port

Config is stored in config.json next to the executable/project root.
Environment variables (STUDIO_*) take priority over the file.
"""

import json
import logging
import os
from typing import Any, Optional

from studio.paths import get_config_path

logger = logging.getLogger(__name__)

DEFAULT_START_URL = "/sample/index.html"
DEFAULT_HISTORY_LIMIT = 100
DEFAULT_MODE = "Design"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_PORT = 8082


def load_config() -> dict:
    """Load configuration from config.json."""
    config_path = get_config_path()
    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError):
            return {}
    return {}


def _get_setting(env_name: str, key: str, default: Any) -> Any:
    """
    Resolve a setting.

    Priority:
    1. Environment variable env_name
    2. Stored in config.json under key
    3. default
    """
    env_value = os.environ.get(env_name)
    if env_value:
        return env_value

    config = load_config()
    return config.get(key, default)


def _get_int_setting(env_name: str, key: str, default: int) -> int:
    value = _get_setting(env_name, key, default)
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid integer for {key}: {value!r}, using {default}")
        return default


def get_start_url() -> str:
    """URL of the page loaded into the rendering surface."""
    return str(_get_setting("STUDIO_START_URL", "start_url", DEFAULT_START_URL))


def get_history_limit() -> Optional[int]:
    """Maximum number of undo units kept. None means unlimited."""
    limit = _get_int_setting("STUDIO_HISTORY_LIMIT", "history_limit", DEFAULT_HISTORY_LIMIT)
    if limit <= 0:
        return None
    return limit


def get_default_mode() -> str:
    """Editor mode the app starts in ('Design' or 'Interact')."""
    mode = str(_get_setting("STUDIO_DEFAULT_MODE", "default_mode", DEFAULT_MODE))
    if mode.capitalize() not in ("Design", "Interact"):
        logger.warning(f"Unknown editor mode {mode!r}, using {DEFAULT_MODE}")
        return DEFAULT_MODE
    return mode.capitalize()


def get_log_level() -> int:
    """Logging level as understood by logging.basicConfig."""
    name = str(_get_setting("STUDIO_LOG_LEVEL", "log_level", DEFAULT_LOG_LEVEL)).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        return logging.INFO
    return level


def get_port() -> int:
    """Port the NiceGUI server listens on."""
    return _get_int_setting("STUDIO_PORT", "port", DEFAULT_PORT)
