"""File-based cache for downloaded feed documents."""

import hashlib
import logging
import tempfile
import time
from pathlib import Path
from typing import Optional

from rss_agent.core import CacheStats, FeedCache

logger = logging.getLogger(__name__)

CACHE_FILE_PREFIX = "rss_cache_"


class FileCache(FeedCache):
    """Store feed bodies as files named after the MD5 of their URL.

    Entries expire by file modification time. Read and write failures are
    logged and otherwise ignored so that a broken cache never breaks a fetch.
    """

    def __init__(
        self,
        cache_dir: Optional[Path] = None,
        expiration_seconds: int = 180,
    ) -> None:
        self.cache_dir = Path(cache_dir) if cache_dir else Path(tempfile.gettempdir())
        self.expiration_seconds = expiration_seconds

    @staticmethod
    def cache_key(url: str) -> str:
        """Cache key for a URL."""
        return hashlib.md5(url.encode("utf-8")).hexdigest()

    def cache_path(self, url: str) -> Path:
        """Path of the cache file for a URL."""
        return self.cache_dir / f"{CACHE_FILE_PREFIX}{self.cache_key(url)}.xml"

    def read(self, key: str, max_age: Optional[float] = None) -> Optional[str]:
        """Return cached content for ``key`` unless missing or expired.

        Args:
            key: Feed URL
            max_age: Maximum age in seconds, defaults to ``expiration_seconds``
        """
        max_age = self.expiration_seconds if max_age is None else max_age
        path = self.cache_path(key)

        try:
            if not path.exists():
                return None

            age = time.time() - path.stat().st_mtime
            if age >= max_age:
                logger.debug("Cache expired for %s (%.0fs old)", key, age)
                return None

            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read cache for %s: %s", key, e)
            return None

    def write(self, key: str, content: str) -> None:
        """Save content for ``key``."""
        path = self.cache_path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.warning("Could not write cache for %s: %s", key, e)

    def _cache_files(self) -> list[Path]:
        if not self.cache_dir.is_dir():
            return []
        return [p for p in self.cache_dir.glob(f"{CACHE_FILE_PREFIX}*") if p.is_file()]

    def clear(self) -> int:
        """Delete all cache files.

        Returns:
            Number of files removed
        """
        removed = 0
        for path in self._cache_files():
            try:
                path.unlink()
                removed += 1
            except OSError as e:
                logger.warning("Could not remove cache file %s: %s", path, e)
        return removed

    def stats(self) -> CacheStats:
        """Count cache files and their total size."""
        file_count = 0
        total_size = 0
        for path in self._cache_files():
            try:
                total_size += path.stat().st_size
            except OSError:
                continue
            file_count += 1
        return CacheStats(file_count=file_count, total_size_bytes=total_size)
