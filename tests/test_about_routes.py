# tests/test_about_routes.py
from app.main import app
from app.services.cache import Cache


class UnreachableCache(Cache):
    def get(self, key):
        raise ConnectionError("cache down")

    def set(self, key, value, ttl_seconds=None):
        raise ConnectionError("cache down")

    def delete(self, key):
        raise ConnectionError("cache down")

    def ttl(self, key):
        raise ConnectionError("cache down")


def test_organizational_miss_then_hit_skips_database(client, query_counter):
    first = client.get("/api/Organizational")
    assert first.status_code == 200
    assert first.headers["X-Cache"] == "MISS"
    assert first.headers["X-Data-Type"] == "organizational"
    assert "s-maxage=3600" in first.headers["Cache-Control"]
    body = first.json()
    assert body["success"] is True
    assert [r["ImagePath"] for r in body["data"]] == [
        "/Organizational/File/chair.jpg",
        "/Organizational/File/manager.png",
    ]
    assert query_counter  # the miss went to the database

    # Second call is answered from the cache without touching the database
    query_counter.clear()
    second = client.get("/api/Organizational")
    assert second.headers["X-Cache"] == "HIT"
    assert second.json()["data"] == body["data"]
    assert query_counter == []
    assert app.state.cache.get("organizational:all") is not None


def test_cached_entry_expires_after_ttl(client, lru_cache, clock):
    assert client.get("/api/SocietyCoop").headers["X-Cache"] == "MISS"

    clock.advance(3599)
    assert client.get("/api/SocietyCoop").headers["X-Cache"] == "HIT"

    clock.advance(2)
    assert client.get("/api/SocietyCoop").headers["X-Cache"] == "MISS"


def test_unreachable_cache_still_serves_from_database(client):
    app.state.cache = UnreachableCache()

    res = client.get("/api/Organizational")
    assert res.status_code == 200
    assert res.headers["X-Cache"] == "MISS"
    assert len(res.json()["data"]) == 2


def test_vision_only_returns_active_rows_with_images(client):
    data = client.get("/api/Vision").json()["data"]
    assert [r["Id"] for r in data] == [1]
    assert data[0]["ImagePath"] == "/SocietyCoop/File/vision.jpg"


def test_cache_status_invalidate_and_warmup(client, lru_cache):
    client.get("/api/Organizational")

    status = client.get("/api/cache").json()["data"]
    assert status["keys"]["ORGANIZATIONAL"] == "organizational:all"
    assert status["caches"]["ORGANIZATIONAL"]["exists"] is True
    assert status["caches"]["ORGANIZATIONAL"]["ttl"] == 3600
    assert status["caches"]["VISION"]["exists"] is False

    res = client.post("/api/cache", json={"action": "invalidate"})
    assert res.status_code == 200
    result = res.json()["data"]["result"]
    assert sorted(result["invalidated"]) == sorted(["organizational:all", "society:coop:all", "vision:mission:values"])
    assert lru_cache.get("organizational:all") is None

    res = client.post("/api/cache", json={"action": "warmup"})
    assert res.status_code == 200
    assert len(res.json()["data"]["result"]["warmedUp"]) == 3
    caches = client.post("/api/cache", json={"action": "status"}).json()["data"]["result"]
    assert all(entry["exists"] for entry in caches.values())

    res = client.delete("/api/cache")
    assert res.status_code == 200
    assert lru_cache.get("vision:mission:values") is None


def test_cache_unknown_action_is_rejected(client):
    res = client.post("/api/cache", json={"action": "flush"})
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["code"] == "INVALID_INPUT"
    assert body["details"]["field"] == "action"
    assert body["details"]["validActions"] == ["invalidate", "warmup", "status"]


def test_warmup_reports_keys_the_cache_refused(client):
    app.state.cache = UnreachableCache()
    res = client.post("/api/cache", json={"action": "warmup"})
    assert res.status_code == 500
    body = res.json()
    assert body["code"] == "CACHE_ERROR"
    result = body["details"]["result"]
    assert result["success"] is False
    assert result["warmedUp"] == []
    assert sorted(result["failed"]) == sorted(["organizational:all", "society:coop:all", "vision:mission:values"])
