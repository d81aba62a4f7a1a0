import threading

import pytest

from gitlabauth.core.cache import TTLCache


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_get_returns_value_before_expiry():
    clock = FakeClock()
    cache = TTLCache(60, clock=clock)
    cache.set("k", "v")

    clock.now += 59.9
    assert cache.get("k") == "v"


def test_entry_expires_at_ttl():
    clock = FakeClock()
    cache = TTLCache(60, clock=clock)
    cache.set("k", "v")

    clock.now += 60
    assert cache.get("k") is None
    assert len(cache) == 0


def test_expiry_is_measured_from_write_not_read():
    clock = FakeClock()
    cache = TTLCache(10, clock=clock)
    cache.set("k", "v")

    clock.now += 9
    assert cache.get("k") == "v"
    clock.now += 1
    assert cache.get("k") is None


def test_rewrite_resets_expiry():
    clock = FakeClock()
    cache = TTLCache(10, clock=clock)
    cache.set("k", "v1")
    clock.now += 8
    cache.set("k", "v2")
    clock.now += 8
    assert cache.get("k") == "v2"


def test_zero_ttl_never_serves():
    cache = TTLCache(0, clock=FakeClock())
    cache.set("k", "v")
    assert cache.get("k") is None


def test_negative_ttl_rejected():
    with pytest.raises(ValueError):
        TTLCache(-1)


def test_len_ignores_expired_entries_and_clear():
    clock = FakeClock()
    cache = TTLCache(10, clock=clock)
    cache.set("old", 1)
    clock.now += 5
    cache.set("new", 2)
    clock.now += 6

    assert len(cache) == 1
    cache.clear()
    assert len(cache) == 0


def test_write_sweeps_expired_entries():
    clock = FakeClock()
    cache = TTLCache(10, clock=clock)
    for i in range(5):
        cache.set(("user", i), i)
    clock.now += 11
    cache.set("fresh", 1)

    assert cache._data.keys() == {"fresh"}


def test_tuple_keys_and_concurrent_writes():
    cache = TTLCache(60)
    barrier = threading.Barrier(8)

    def worker(n):
        barrier.wait()
        for i in range(200):
            cache.set((n, i), i)
            assert cache.get((n, i)) == i

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(cache) == 8 * 200
