"""HTTP adapters."""

from rss_agent.adapters.http.client import RssHttpClient

__all__ = ["RssHttpClient"]
