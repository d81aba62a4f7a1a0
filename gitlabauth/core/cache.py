"""Thread-safe in-memory cache with expire-after-write semantics."""
from __future__ import annotations
import threading
import time
from typing import Any, Callable, Dict, Hashable, Optional, Tuple


class TTLCache:
    """Cache whose entries expire a fixed number of seconds after they are written.

    There is no size bound. Expired entries are dropped when read, and a full
    sweep runs on write at most once per TTL period.
    """

    def __init__(self, ttl_seconds: float, clock: Optional[Callable[[], float]] = None) -> None:
        if ttl_seconds < 0:
            raise ValueError(f"ttl_seconds must be >= 0, got {ttl_seconds}")
        self.ttl = ttl_seconds
        self._clock = clock or time.monotonic
        self._data: Dict[Hashable, Tuple[float, Any]] = {}
        self._lock = threading.Lock()
        self._next_sweep = self._clock() + ttl_seconds

    def get(self, key: Hashable) -> Optional[Any]:
        with self._lock:
            item = self._data.get(key)
            if item is None:
                return None
            expires_at, value = item
            if self._clock() >= expires_at:
                del self._data[key]
                return None
            return value

    def set(self, key: Hashable, value: Any) -> None:
        with self._lock:
            now = self._clock()
            if now >= self._next_sweep:
                self._sweep(now)
                self._next_sweep = now + self.ttl
            self._data[key] = (now + self.ttl, value)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        with self._lock:
            self._sweep(self._clock())
            return len(self._data)

    def _sweep(self, now: float) -> None:
        # Caller holds the lock.
        expired = [key for key, (expires_at, _) in self._data.items() if now >= expires_at]
        for key in expired:
            del self._data[key]
