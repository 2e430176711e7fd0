"""Core domain layer."""

from rss_agent.core.dates import format_rfc822, resolve_datetime, resolve_offset_minutes
from rss_agent.core.entities import (
    AnalysisResult,
    CacheStats,
    Feed,
    FeedFormat,
    FeedItem,
    MediaContent,
    TimezoneInfo,
    UrlConfig,
    ValidationResult,
)
from rss_agent.core.exceptions import (
    FeedFetchError,
    ParseErrorKind,
    RssAgentError,
    RssHttpError,
    RssParseError,
)
from rss_agent.core.fingerprint import content_hash
from rss_agent.core.interfaces import FeedCache, FeedFetcher

__all__ = [
    "AnalysisResult",
    "CacheStats",
    "UrlConfig",
    "Feed",
    "FeedFormat",
    "FeedItem",
    "MediaContent",
    "TimezoneInfo",
    "ValidationResult",
    "RssAgentError",
    "RssParseError",
    "RssHttpError",
    "FeedFetchError",
    "ParseErrorKind",
    "FeedFetcher",
    "FeedCache",
    "content_hash",
    "format_rfc822",
    "resolve_datetime",
    "resolve_offset_minutes",
]
