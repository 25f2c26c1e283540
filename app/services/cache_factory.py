import logging
from .cache import Cache
from .cache_backends import InProcessLRUCache, NoCache, RedisCache
from app.config import CACHE_BACKEND, CACHE_CAPACITY, REDIS_URL, REDIS_SOCKET_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

def build_cache(backend: str = CACHE_BACKEND) -> Cache:
    """
    Construct the cache client selected by configuration:
      - "none"   -> no-op backend (always misses)
      - "memory" -> in-process LRU (fastest for single instance)
      - "redis"  -> shared cache across workers

    The app lifespan owns the returned object and calls close() at shutdown.
    """
    if backend == "redis":
        logger.info("cache: using redis backend at %s", REDIS_URL)
        return RedisCache(REDIS_URL, socket_timeout=REDIS_SOCKET_TIMEOUT_SECONDS)
    if backend == "none":
        logger.info("cache: disabled")
        return NoCache()
    if backend != "memory":
        logger.warning("cache: unknown backend %r, falling back to memory", backend)
    return InProcessLRUCache(capacity=CACHE_CAPACITY)
