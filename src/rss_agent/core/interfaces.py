"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from typing import Optional

from rss_agent.core.entities import CacheStats


class FeedFetcher(ABC):
    """Interface for downloading feed documents."""

    @abstractmethod
    async def fetch_text(self, url: str) -> str:
        """Fetch the body of ``url`` as text, following redirects."""
        pass


class FeedCache(ABC):
    """Interface for storing downloaded feed documents."""

    @abstractmethod
    def read(self, key: str, max_age: Optional[float] = None) -> Optional[str]:
        """Return cached text for ``key`` if present and fresh enough."""
        pass

    @abstractmethod
    def write(self, key: str, content: str) -> None:
        """Store text for ``key``; failures must not propagate."""
        pass

    @abstractmethod
    def clear(self) -> int:
        """Remove all cached entries and return how many were removed."""
        pass

    @abstractmethod
    def stats(self) -> CacheStats:
        """Report the number and size of cached entries."""
        pass
