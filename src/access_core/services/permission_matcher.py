"""Wildcard permission matching with deny-first precedence.

A ``*`` in a pattern matches any run of characters, dots included, so
``warehouse.*`` covers ``warehouse.products.read``. Patterns without ``*`` only
match the identical permission string; there is no implicit prefix matching.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Iterable

from access_core.cache import CacheStats, MemoCache
from access_core.config import get_runtime_settings
from access_core.contracts.errors import PatternContractError, SnapshotContractError
from access_core.contracts.policy import PermissionSnapshot

LOGGER = logging.getLogger(__name__)

WILDCARD = "*"


def compile_pattern(pattern: str) -> re.Pattern[str]:
    escaped = (re.escape(part) for part in pattern.split(WILDCARD))
    return re.compile(".*".join(escaped), flags=re.DOTALL)


def _ensure_pattern(pattern: object) -> str:
    if not isinstance(pattern, str):
        raise PatternContractError(f"permission patterns must be strings, got {type(pattern).__name__}")
    if not pattern:
        raise PatternContractError("empty permission pattern is not allowed")
    return pattern


class PermissionMatcher:
    def __init__(self, *, cache: MemoCache[str, re.Pattern[str]] | None = None, max_entries: int = 0) -> None:
        self._cache: MemoCache[str, re.Pattern[str]] = cache if cache is not None else MemoCache(max_entries=max_entries)

    @property
    def cache(self) -> MemoCache[str, re.Pattern[str]]:
        return self._cache

    def clear_cache(self) -> None:
        self._cache.clear()

    def cache_stats(self) -> CacheStats:
        return self._cache.stats()

    def compiled(self, pattern: str) -> re.Pattern[str]:
        return self._cache.get_or_load(pattern, lambda: compile_pattern(pattern))

    def pattern_matches(self, pattern: str, required: str) -> bool:
        pattern = _ensure_pattern(pattern)
        if pattern == WILDCARD or pattern == required:
            return True
        if WILDCARD not in pattern:
            return False
        return self.compiled(pattern).fullmatch(required) is not None

    def first_match(self, patterns: Iterable[str], required: str) -> str | None:
        # Validate the whole list first so a bad entry is reported regardless of order.
        checked = [_ensure_pattern(pattern) for pattern in patterns]
        for pattern in checked:
            if self.pattern_matches(pattern, required):
                return pattern
        return None

    def matches_any_pattern(self, patterns: Iterable[str], required: str) -> bool:
        return self.first_match(patterns, required) is not None

    def check_permission(self, snapshot: PermissionSnapshot, required: str) -> bool:
        if not isinstance(snapshot, PermissionSnapshot):
            raise SnapshotContractError(
                f"check_permission expects a PermissionSnapshot, got {type(snapshot).__name__}"
            )
        if self.matches_any_pattern(snapshot.deny, required):
            return False
        return self.matches_any_pattern(snapshot.allow, required)


_DEFAULT_MATCHER: PermissionMatcher | None = None
_DEFAULT_LOCK = threading.Lock()


def get_default_matcher() -> PermissionMatcher:
    global _DEFAULT_MATCHER  # pylint: disable=global-statement
    with _DEFAULT_LOCK:
        if _DEFAULT_MATCHER is None:
            settings = get_runtime_settings()
            _DEFAULT_MATCHER = PermissionMatcher(max_entries=max(0, settings.pattern_cache_max_entries))
            LOGGER.debug(
                "Default permission matcher created. cache_max_entries=%s",
                settings.pattern_cache_max_entries,
            )
        return _DEFAULT_MATCHER


def reset_default_matcher() -> None:
    """Drop the default matcher so the next call rebuilds it from current settings."""
    global _DEFAULT_MATCHER  # pylint: disable=global-statement
    with _DEFAULT_LOCK:
        _DEFAULT_MATCHER = None


def matches_any_pattern(patterns: Iterable[str], required: str) -> bool:
    return get_default_matcher().matches_any_pattern(patterns, required)


def check_permission(snapshot: PermissionSnapshot, required: str) -> bool:
    return get_default_matcher().check_permission(snapshot, required)


def clear_pattern_cache() -> None:
    get_default_matcher().clear_cache()
