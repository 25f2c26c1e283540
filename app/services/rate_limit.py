# app/services/rate_limit.py

from collections import defaultdict, deque
from threading import RLock
from typing import Callable, Deque, Dict
import time

from app.errors import RateLimitError


class RateLimiter:
    """
    Sliding-window limiter keyed by client IP, kept in process memory.
    Each worker counts on its own, so the effective limit scales with the worker count.
    """

    def __init__(self, max_requests: int, window_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)
        self._lock = RLock()
        self._next_sweep = clock() + window_seconds

    def allow(self, key: str) -> bool:
        now = self._clock()
        with self._lock:
            if now >= self._next_sweep:
                self._sweep(now)
            hits = self._hits[key]
            while hits and hits[0] <= now - self.window_seconds:
                hits.popleft()
            if len(hits) >= self.max_requests:
                return False
            hits.append(now)
            return True

    def _sweep(self, now: float) -> None:
        """Forget clients whose newest hit has left the window; runs at most once per window."""
        cutoff = now - self.window_seconds
        for key in [k for k, hits in self._hits.items() if not hits or hits[-1] <= cutoff]:
            del self._hits[key]
        self._next_sweep = now + self.window_seconds

    def tracked_clients(self) -> int:
        with self._lock:
            return len(self._hits)

    def check(self, key: str, message: str) -> None:
        if not self.allow(key):
            raise RateLimitError(message, {"limit": self.max_requests, "window": self.window_seconds})

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


# 5 questions per 5 minutes, 10 answers per 5 minutes, 3 complaints per 10 minutes
question_limiter = RateLimiter(5, 5 * 60)
answer_limiter = RateLimiter(10, 5 * 60)
complaint_limiter = RateLimiter(3, 10 * 60)
