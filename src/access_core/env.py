from __future__ import annotations

import os

ACCESS_ENV = "ACCESS_ENV"
ACCESS_PATTERN_CACHE_MAX_ENTRIES = "ACCESS_PATTERN_CACHE_MAX_ENTRIES"
ACCESS_LOG_LEVEL = "ACCESS_LOG_LEVEL"
ACCESS_LOG_JSON = "ACCESS_LOG_JSON"
ACCESS_LOG_CAPTURE_ROOT = "ACCESS_LOG_CAPTURE_ROOT"
ACCESS_ERROR_INCLUDE_DETAILS = "ACCESS_ERROR_INCLUDE_DETAILS"

TRUE_VALUES = {"1", "true", "yes", "y", "on"}
FALSE_VALUES = {"0", "false", "no", "n", "off"}


def get_env(name: str, default: str = "") -> str:
    return str(os.getenv(name, default)).strip()


def get_env_bool(name: str, default: bool = False) -> bool:
    raw = get_env(name).lower()
    if raw in TRUE_VALUES:
        return True
    if raw in FALSE_VALUES:
        return False
    return default


def get_env_int(name: str, default: int) -> int:
    raw = get_env(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default
