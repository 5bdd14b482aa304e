from __future__ import annotations

import threading

from access_core.cache import MemoCache


def test_get_or_load_calls_loader_once() -> None:
    cache: MemoCache[str, int] = MemoCache()
    calls: list[str] = []

    def loader() -> int:
        calls.append("x")
        return 42

    assert cache.get_or_load("k", loader) == 42
    assert cache.get_or_load("k", loader) == 42
    assert calls == ["x"]

    stats = cache.stats()
    assert (stats.hits, stats.misses, stats.size, stats.max_entries) == (1, 1, 1, 0)


def test_unbounded_cache_keeps_everything() -> None:
    cache: MemoCache[int, int] = MemoCache()
    for index in range(500):
        cache.get_or_load(index, lambda index=index: index)

    assert len(cache) == 500


def test_bounded_cache_evicts_oldest_unused() -> None:
    cache: MemoCache[str, str] = MemoCache(max_entries=2)
    cache.get_or_load("a", lambda: "A")
    cache.get_or_load("b", lambda: "B")
    assert cache.get_or_load("a", lambda: "stale") == "A"
    cache.get_or_load("c", lambda: "C")

    assert "a" in cache
    assert "b" not in cache
    assert "c" in cache
    assert len(cache) == 2


def test_negative_bound_is_treated_as_unbounded() -> None:
    cache: MemoCache[str, str] = MemoCache(max_entries=-3)

    assert cache.max_entries == 0


def test_clear_resets_entries_and_counters() -> None:
    cache: MemoCache[str, str] = MemoCache()
    cache.get_or_load("a", lambda: "A")
    cache.get_or_load("a", lambda: "A")
    cache.clear()

    assert len(cache) == 0
    assert "a" not in cache
    stats = cache.stats()
    assert stats.hits == 0
    assert stats.misses == 0


def test_concurrent_loads_settle_on_one_value() -> None:
    cache: MemoCache[str, object] = MemoCache()
    barrier = threading.Barrier(6)
    seen: list[object] = []
    lock = threading.Lock()

    def worker() -> None:
        barrier.wait()
        value = cache.get_or_load("shared", object)
        with lock:
            seen.append(value)

    threads = [threading.Thread(target=worker) for _ in range(6)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    stored = cache.get_or_load("shared", lambda: "late")
    assert len(cache) == 1
    # Every caller after the first store sees the stored object.
    assert stored in seen
