# tests/test_cache.py
from unittest.mock import MagicMock

import redis
from prometheus_client import REGISTRY

from app.services.cache import Cache
from app.services.cache_aside import CacheAside
from app.services.cache_backends import InProcessLRUCache, NoCache, RedisCache
from app.services.cache_factory import build_cache
from app.services.lru_cache import LRUCacheImpl


class BrokenCache(Cache):
    """Every operation fails the way an unreachable Redis would."""

    def get(self, key):
        raise redis.ConnectionError("connection refused")

    def set(self, key, value, ttl_seconds=None):
        raise redis.ConnectionError("connection refused")

    def delete(self, key):
        raise redis.ConnectionError("connection refused")

    def ttl(self, key):
        raise redis.ConnectionError("connection refused")

    def ping(self):
        raise redis.ConnectionError("connection refused")


def _sample(name, labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_lru_entry_expires_after_ttl(clock):
    lru = LRUCacheImpl(capacity=10, clock=clock)
    lru.set("a", "1", ttl_seconds=60)

    clock.advance(59)
    assert lru.get("a") == "1"
    assert lru.ttl("a") == 1

    clock.advance(1)
    assert lru.get("a") is None
    assert lru.ttl("a") is None


def test_lru_evicts_least_recently_used():
    lru = LRUCacheImpl(capacity=2)
    lru.set("a", "1")
    lru.set("b", "2")
    lru.get("a")  # "b" is now the oldest
    lru.set("c", "3")

    assert lru.get("b") is None
    assert lru.get("a") == "1"
    assert lru.get("c") == "3"
    assert lru.ttl("a") == -1


def test_get_or_load_runs_loader_once_until_expiry(clock):
    accessor = CacheAside(InProcessLRUCache(capacity=10, clock=clock))
    calls = []

    def loader():
        calls.append(1)
        return [{"Id": 1}]

    assert accessor.get_or_load("slides:all", 30, loader) == ([{"Id": 1}], False)
    assert accessor.get_or_load("slides:all", 30, loader) == ([{"Id": 1}], True)
    assert len(calls) == 1

    clock.advance(31)
    assert accessor.get_or_load("slides:all", 30, loader) == ([{"Id": 1}], False)
    assert len(calls) == 2


def test_cache_failures_fall_back_to_loader_and_are_counted():
    accessor = CacheAside(BrokenCache(), request_id="req-1")
    before = _sample("coop_cache_errors_total", {"op": "get"})

    data, hit = accessor.get_or_load("news:list", 60, lambda: ["fresh"])

    assert (data, hit) == (["fresh"], False)
    assert _sample("coop_cache_errors_total", {"op": "get"}) == before + 1
    assert accessor.delete("news:list") is None
    assert accessor.ping() is False


def test_undecodable_entry_is_treated_as_miss():
    backend = InProcessLRUCache(capacity=10)
    backend.set("videos:all", "{not json", 60)
    accessor = CacheAside(backend)

    data, hit = accessor.get_or_load("videos:all", 60, lambda: [])
    assert hit is False
    assert data == []


def test_hits_and_misses_are_counted_per_namespace():
    accessor = CacheAside(InProcessLRUCache(capacity=10))
    hits = _sample("coop_cache_hits_total", {"namespace": "candidates"})
    misses = _sample("coop_cache_misses_total", {"namespace": "candidates"})

    accessor.get_or_load("candidates:all:50:0", 60, lambda: {"data": []})
    accessor.get_or_load("candidates:all:50:0", 60, lambda: {"data": []})

    assert _sample("coop_cache_hits_total", {"namespace": "candidates"}) == hits + 1
    assert _sample("coop_cache_misses_total", {"namespace": "candidates"}) == misses + 1


def test_invalidate_reports_failures():
    ok = CacheAside(InProcessLRUCache(capacity=10)).invalidate(["a", "b"])
    assert ok == {"success": True, "invalidated": ["a", "b"], "failed": []}

    failed = CacheAside(BrokenCache()).invalidate(["a"])
    assert failed["success"] is False
    assert failed["failed"] == ["a"]


def test_status_reports_existence_ttl_and_size(clock):
    backend = InProcessLRUCache(capacity=10, clock=clock)
    accessor = CacheAside(backend)
    accessor.write("organizational:all", [1, 2], 3600)

    report = accessor.status({"ORGANIZATIONAL": "organizational:all", "VISION": "vision:mission:values"})
    assert report["ORGANIZATIONAL"] == {"exists": True, "ttl": 3600, "size": len("[1,2]")}
    assert report["VISION"] == {"exists": False, "ttl": -2}


def test_redis_cache_uses_setex_and_maps_missing_ttl():
    client = MagicMock()
    client.ttl.return_value = -2
    client.delete.return_value = 1
    cache = RedisCache("redis://localhost:6379/0", client=client)

    cache.set("srd:all", "[]", ttl_seconds=3600)
    client.setex.assert_called_once_with("srd:all", 3600, "[]")
    assert cache.ttl("srd:all") is None
    assert cache.delete("srd:all") is True


def test_build_cache_selects_backend():
    assert isinstance(build_cache("none"), NoCache)
    assert isinstance(build_cache("memory"), InProcessLRUCache)
    assert isinstance(build_cache("bogus"), InProcessLRUCache)
