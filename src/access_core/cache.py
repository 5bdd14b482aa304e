from __future__ import annotations

import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    size: int
    max_entries: int


class MemoCache(Generic[K, V]):
    """Thread-safe memo table, unbounded unless ``max_entries`` is positive (then LRU)."""

    def __init__(self, *, max_entries: int = 0) -> None:
        self._max_entries = max(0, int(max_entries))
        self._lock = threading.Lock()
        self._entries: OrderedDict[K, V] = OrderedDict()
        self._hits = 0
        self._misses = 0

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def get_or_load(self, key: K, loader: Callable[[], V]) -> V:
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self._hits += 1
                if self._max_entries:
                    self._entries.move_to_end(key, last=True)
                return cached
            self._misses += 1

        loaded = loader()
        with self._lock:
            # A concurrent loader may have won; keep the first stored value.
            existing = self._entries.get(key)
            if existing is not None:
                return existing
            self._entries[key] = loaded
            self._evict_lru()
        return loaded

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                size=len(self._entries),
                max_entries=self._max_entries,
            )

    def _evict_lru(self) -> None:
        if not self._max_entries:
            return
        while len(self._entries) > self._max_entries:
            self._entries.popitem(last=False)
