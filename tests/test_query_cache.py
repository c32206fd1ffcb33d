import pytest

from services.query_cache import QueryCache


def test_loader_runs_once_per_key():
    cache = QueryCache()
    calls = []

    def loader():
        calls.append(1)
        return ["row"]

    assert cache.get_or_load(("payments", "list"), loader) == ["row"]
    assert cache.get_or_load(("payments", "list"), loader) == ["row"]
    assert len(calls) == 1


def test_failed_load_is_not_cached():
    cache = QueryCache()

    def boom():
        raise RuntimeError("store down")

    with pytest.raises(RuntimeError):
        cache.get_or_load(("dashboard", "stats"), boom)
    assert ("dashboard", "stats") not in cache
    assert cache.get_or_load(("dashboard", "stats"), lambda: 42) == 42


def test_invalidate_drops_keys_under_prefix():
    cache = QueryCache()
    for key in [("payments", "list", None), ("payments", "p1"), ("paymentsx",), ("dashboard", "stats")]:
        cache.get_or_load(key, lambda: "v")

    assert cache.invalidate("payments") == 2
    assert ("paymentsx",) in cache
    assert ("dashboard", "stats") in cache
    assert len(cache) == 2


def test_invalidate_with_longer_prefix():
    cache = QueryCache()
    cache.get_or_load(("rooms", "b1"), lambda: 1)
    cache.get_or_load(("rooms", "b2"), lambda: 2)

    assert cache.invalidate("rooms", "b1") == 1
    assert ("rooms", "b2") in cache


def test_load_overtaken_by_invalidation_is_not_stored():
    cache = QueryCache()

    def loader():
        # a write lands while the read is in flight
        cache.invalidate("payments")
        return ["pre-write rows"]

    assert cache.get_or_load(("payments", "list"), loader) == ["pre-write rows"]
    assert ("payments", "list") not in cache
    assert cache.get_or_load(("payments", "list"), lambda: ["fresh"]) == ["fresh"]


def test_oldest_entries_are_evicted_past_the_cap():
    cache = QueryCache(max_entries=2)
    for day in ("2026-10-16", "2026-10-17", "2026-10-18"):
        cache.get_or_load(("dashboard", "stats", day), lambda: {})

    assert len(cache) == 2
    assert ("dashboard", "stats", "2026-10-16") not in cache
    assert ("dashboard", "stats", "2026-10-18") in cache


def test_clear():
    cache = QueryCache()
    cache.get_or_load(("buildings",), lambda: [])
    cache.clear()
    assert len(cache) == 0
