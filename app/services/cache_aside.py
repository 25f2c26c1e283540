# app/services/cache_aside.py

import json
import logging
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from app.services.cache import Cache
from app.services.metrics import CACHE_ERRORS_TOTAL, CACHE_HITS_TOTAL, CACHE_MISSES_TOTAL, namespace_of

logger = logging.getLogger(__name__)

HIT = "HIT"
MISS = "MISS"


class CacheAside:
    """
    Get-or-populate wrapper around a Cache.

    Cache failures never fail the request: every read, write or delete error is
    logged, counted in coop_cache_errors_total and bypassed. There is no
    single-flight lock, so concurrent misses on one key may each run the loader;
    the last write wins.
    """

    def __init__(self, cache: Cache, request_id: Optional[str] = None) -> None:
        self._cache = cache
        self._request_id = request_id

    def read(self, key: str) -> Optional[Any]:
        """Decoded cached value, or None on a miss or an unreadable entry."""
        try:
            raw = self._cache.get(key)
        except Exception as ex:
            CACHE_ERRORS_TOTAL.labels(op="get").inc()
            logger.warning("cache read failed key=%s request_id=%s: %s", key, self._request_id, ex)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as ex:
            CACHE_ERRORS_TOTAL.labels(op="decode").inc()
            logger.warning("cache entry not decodable key=%s request_id=%s: %s", key, self._request_id, ex)
            return None

    def write(self, key: str, value: Any, ttl: int) -> bool:
        try:
            payload = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
            self._cache.set(key, payload, ttl_seconds=ttl)
        except Exception as ex:
            CACHE_ERRORS_TOTAL.labels(op="set").inc()
            logger.warning("cache write failed key=%s request_id=%s: %s", key, self._request_id, ex)
            return False
        logger.debug("cache populated key=%s ttl=%s", key, ttl)
        return True

    def get_or_load(self, key: str, ttl: int, loader: Callable[[], Any]) -> Tuple[Any, bool]:
        """
        Return (data, hit). On a miss `loader` runs and its JSON-native result is
        stored under `key` for `ttl` seconds. Loader exceptions propagate.
        """
        cached = self.read(key)
        if cached is not None:
            CACHE_HITS_TOTAL.labels(namespace=namespace_of(key)).inc()
            logger.info("cache hit key=%s request_id=%s", key, self._request_id)
            return cached, True

        CACHE_MISSES_TOTAL.labels(namespace=namespace_of(key)).inc()
        data = loader()
        self.write(key, data, ttl)
        return data, False

    def delete(self, key: str) -> Optional[bool]:
        """True if deleted, False if absent, None if the cache failed."""
        try:
            return self._cache.delete(key)
        except Exception as ex:
            CACHE_ERRORS_TOTAL.labels(op="delete").inc()
            logger.warning("cache delete failed key=%s request_id=%s: %s", key, self._request_id, ex)
            return None

    def invalidate(self, keys: Iterable[str]) -> Dict[str, Any]:
        """Delete known keys; a key that was already gone still counts as invalidated."""
        result: Dict[str, Any] = {"success": True, "invalidated": [], "failed": []}
        for key in keys:
            deleted = self.delete(key)
            if deleted is None:
                result["failed"].append(key)
                result["success"] = False
                continue
            if not deleted:
                logger.info("cache key not found or already expired: %s", key)
            result["invalidated"].append(key)
        return result

    def status(self, keys: Dict[str, str]) -> Dict[str, Dict[str, Any]]:
        """Existence, remaining TTL and payload size for each named key."""
        report: Dict[str, Dict[str, Any]] = {}
        for name, key in keys.items():
            try:
                remaining = self._cache.ttl(key)
                raw = self._cache.get(key) if remaining is not None else None
            except Exception as ex:
                CACHE_ERRORS_TOTAL.labels(op="status").inc()
                logger.warning("cache status failed key=%s: %s", key, ex)
                report[name] = {"exists": False, "ttl": -1}
                continue
            entry: Dict[str, Any] = {"exists": raw is not None, "ttl": remaining if raw is not None else -2}
            if raw is not None:
                entry["size"] = len(raw)
            report[name] = entry
        return report

    def ping(self) -> bool:
        try:
            return self._cache.ping()
        except Exception as ex:
            CACHE_ERRORS_TOTAL.labels(op="ping").inc()
            logger.warning("cache ping failed: %s", ex)
            return False
