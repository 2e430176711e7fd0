"""RSS 2.0 parsing, generation and RFC 2822 date resolution."""

__version__ = "1.0.0"

from rss_agent.adapters.generators import Rss2Generator  # noqa: E402
from rss_agent.adapters.parsers import Rss2Parser  # noqa: E402
from rss_agent.core import (  # noqa: E402
    Feed,
    FeedFetchError,
    FeedFormat,
    FeedItem,
    MediaContent,
    ParseErrorKind,
    RssAgentError,
    RssHttpError,
    RssParseError,
    content_hash,
    format_rfc822,
    resolve_datetime,
    resolve_offset_minutes,
)

__all__ = [
    "__version__",
    "Feed",
    "FeedFormat",
    "FeedItem",
    "MediaContent",
    "RssAgentError",
    "RssParseError",
    "RssHttpError",
    "FeedFetchError",
    "ParseErrorKind",
    "Rss2Parser",
    "Rss2Generator",
    "content_hash",
    "format_rfc822",
    "resolve_datetime",
    "resolve_offset_minutes",
]
