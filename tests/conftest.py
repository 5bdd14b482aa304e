from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

import access_core.logging as access_logging
from access_core.services.permission_matcher import reset_default_matcher

ACCESS_ENV_KEYS = (
    "ACCESS_ENV",
    "ACCESS_PATTERN_CACHE_MAX_ENTRIES",
    "ACCESS_LOG_LEVEL",
    "ACCESS_LOG_JSON",
    "ACCESS_LOG_CAPTURE_ROOT",
    "ACCESS_ERROR_INCLUDE_DETAILS",
)


def _reset_app_logger() -> None:
    app_logger = logging.getLogger("access_core")
    app_logger.handlers.clear()
    app_logger.setLevel(logging.NOTSET)
    app_logger.propagate = True
    access_logging._applied_settings = None


@pytest.fixture(autouse=True)
def _isolated_runtime(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for key in ACCESS_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    reset_default_matcher()
    yield
    reset_default_matcher()
    _reset_app_logger()
