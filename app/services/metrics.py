# app/services/metrics.py
"""Prometheus counters for the cache-aside layer, exposed on GET /metrics."""

from prometheus_client import Counter

CACHE_HITS_TOTAL = Counter(
    "coop_cache_hits_total", "Cache lookups answered from the cache", ["namespace"]
)
CACHE_MISSES_TOTAL = Counter(
    "coop_cache_misses_total", "Cache lookups that fell through to the database", ["namespace"]
)
CACHE_ERRORS_TOTAL = Counter(
    "coop_cache_errors_total", "Cache operations that failed and were bypassed", ["op"]
)


def namespace_of(key: str) -> str:
    """`news:list` -> `news`; keeps label cardinality bounded for parameterized keys."""
    return key.split(":", 1)[0]
