"""Feed document parsers."""

from rss_agent.adapters.parsers.rss2_parser import Rss2Parser

__all__ = ["Rss2Parser"]
