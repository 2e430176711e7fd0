"""Cache adapters."""

from rss_agent.adapters.cache.file_cache import FileCache

__all__ = ["FileCache"]
