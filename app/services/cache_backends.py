import logging
from typing import Callable, Optional
import time

import redis

from .cache import Cache
from .lru_cache import LRUCacheImpl

logger = logging.getLogger(__name__)


class InProcessLRUCache(Cache):
    """In-process LRU cache backend (single worker, or tests)."""
    def __init__(self, capacity: int, clock: Callable[[], float] = time.monotonic):
        self._lru = LRUCacheImpl(capacity=capacity, clock=clock)

    def get(self, key: str) -> Optional[str]:
        return self._lru.get(key)

    def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> None:
        self._lru.set(key, value, ttl_seconds)

    def delete(self, key: str) -> bool:
        return self._lru.delete(key)

    def ttl(self, key: str) -> Optional[int]:
        return self._lru.ttl(key)

    def close(self) -> None:
        self._lru.clear()


class RedisCache(Cache):
    """Shared cache backed by Redis; TTL is enforced server-side with SETEX."""

    def __init__(self, url: str, socket_timeout: float = 2.0, client: Optional[redis.Redis] = None):
        self._url = url
        self._client = client or redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )

    def get(self, key: str) -> Optional[str]:
        return self._client.get(key)

    def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> None:
        if ttl_seconds:
            self._client.setex(key, ttl_seconds, value)
        else:
            self._client.set(key, value)

    def delete(self, key: str) -> bool:
        return bool(self._client.delete(key))

    def ttl(self, key: str) -> Optional[int]:
        remaining = self._client.ttl(key)
        # Redis answers -2 for a missing key
        if remaining == -2:
            return None
        return remaining

    def ping(self) -> bool:
        return bool(self._client.ping())

    def close(self) -> None:
        try:
            self._client.close()
        except redis.RedisError:
            logger.warning("redis_cache: error while closing client", exc_info=True)


class NoCache(Cache):
    """No-op cache used when caching is disabled."""
    def get(self, key: str): return None
    def set(self, key: str, value: str, ttl_seconds: Optional[int] = None): pass
    def delete(self, key: str): return False
    def ttl(self, key: str): return None
