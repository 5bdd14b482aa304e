from __future__ import annotations

import logging
from dataclasses import dataclass

from access_core.env import (
    ACCESS_ENV,
    ACCESS_ERROR_INCLUDE_DETAILS,
    ACCESS_LOG_CAPTURE_ROOT,
    ACCESS_LOG_JSON,
    ACCESS_LOG_LEVEL,
    ACCESS_PATTERN_CACHE_MAX_ENTRIES,
    get_env,
    get_env_bool,
    get_env_int,
)

DEV_ENV_NAMES = {"dev", "local", "test"}
KNOWN_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class RuntimeSettings:
    env: str
    pattern_cache_max_entries: int
    log_level: str
    log_json: bool
    log_capture_root: bool
    error_include_details: bool

    @property
    def is_dev_env(self) -> bool:
        return self.env in DEV_ENV_NAMES

    @classmethod
    def from_env(cls) -> "RuntimeSettings":
        env = get_env(ACCESS_ENV, "dev").lower() or "dev"
        return cls(
            env=env,
            pattern_cache_max_entries=get_env_int(ACCESS_PATTERN_CACHE_MAX_ENTRIES, 0),
            log_level=get_env(ACCESS_LOG_LEVEL, "INFO").upper() or "INFO",
            log_json=get_env_bool(ACCESS_LOG_JSON, default=False),
            log_capture_root=get_env_bool(ACCESS_LOG_CAPTURE_ROOT, default=False),
            error_include_details=get_env_bool(
                ACCESS_ERROR_INCLUDE_DETAILS,
                default=env in DEV_ENV_NAMES,
            ),
        )

    def resolved_log_level(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)


def validate_runtime_settings(settings: RuntimeSettings) -> list[str]:
    issues: list[str] = []
    if settings.pattern_cache_max_entries < 0:
        issues.append("ACCESS_PATTERN_CACHE_MAX_ENTRIES must be 0 (unbounded) or a positive integer")
    if settings.log_level not in KNOWN_LOG_LEVELS:
        issues.append(f"ACCESS_LOG_LEVEL must be one of {', '.join(KNOWN_LOG_LEVELS)}")
    if not settings.is_dev_env and settings.error_include_details:
        issues.append("ACCESS_ERROR_INCLUDE_DETAILS should be disabled outside dev environments")
    return issues


def get_runtime_settings() -> RuntimeSettings:
    return RuntimeSettings.from_env()
