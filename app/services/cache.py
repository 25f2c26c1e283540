from abc import ABC, abstractmethod
from typing import Optional

class Cache(ABC):
    """
    Minimal key-value interface so the cache-aside layer can run on memory, Redis or nothing.
    Values are pre-serialized JSON strings; `None` from get() always means "not cached".
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove `key`; returns True when something was deleted."""

    @abstractmethod
    def ttl(self, key: str) -> Optional[int]:
        """Seconds left before `key` expires, -1 for no expiry, None when absent."""

    def ping(self) -> bool:
        return True

    def close(self) -> None:
        pass
