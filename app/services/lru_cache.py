from collections import OrderedDict
from threading import RLock
from typing import Callable, Optional
import math
import time

class LRUCacheImpl:
    """
    Thread-safe LRU cache with optional per-entry TTL.
    `clock` returns the current time in seconds; tests pass a fake one to expire entries.
    """
    def __init__(self, capacity: int = 10_000, clock: Callable[[], float] = time.monotonic):
        self.capacity = max(1, capacity)
        self._clock = clock
        self._data: "OrderedDict[str, tuple[float, str]]" = OrderedDict()
        self._lock = RLock()

    def _live(self, key: str) -> Optional[tuple]:
        item = self._data.get(key)
        if item is None:
            return None
        expires_at, _ = item
        if expires_at and expires_at <= self._clock():
            # Expired: evict and miss
            self._data.pop(key, None)
            return None
        return item

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            item = self._live(key)
            if item is None:
                return None
            # Move to MRU
            self._data.move_to_end(key)
            return item[1]

    def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> None:
        expires_at = self._clock() + ttl_seconds if ttl_seconds else 0.0
        with self._lock:
            if key in self._data:
                self._data.pop(key)
            elif len(self._data) >= self.capacity:
                self._data.popitem(last=False)  # Evict LRU
            self._data[key] = (expires_at, value)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._data.pop(key, None) is not None

    def ttl(self, key: str) -> Optional[int]:
        with self._lock:
            item = self._live(key)
            if item is None:
                return None
            expires_at, _ = item
            if not expires_at:
                return -1
            return max(0, math.ceil(expires_at - self._clock()))

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        return len(self._data)
