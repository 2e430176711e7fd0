"""Exceptions raised by rss_agent."""

from enum import Enum
from typing import Optional


class RssAgentError(Exception):
    """Base error for all rss_agent failures."""

    def __init__(self, message: str, original: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original = original


class ParseErrorKind(str, Enum):
    """Structural reasons a document cannot be parsed as RSS."""

    MALFORMED_XML = "malformed-xml"
    MISSING_ROOT = "missing-root"
    MISSING_CHANNEL = "missing-channel"


class RssParseError(RssAgentError):
    """Raised when a document is not a structurally valid RSS 2.0 feed."""

    SOURCE_EXCERPT_LENGTH = 200

    def __init__(
        self,
        message: str,
        kind: ParseErrorKind,
        source: Optional[str] = None,
        original: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, original)
        self.kind = kind
        self.source = source

    def __str__(self) -> str:
        parts = [f"RssParseError[{self.kind.value}]: {self.message}"]
        if self.source is not None:
            excerpt = self.source[: self.SOURCE_EXCERPT_LENGTH]
            parts.append(f"Source: {excerpt}")
        return ", ".join(parts)


class RssHttpError(RssAgentError):
    """Raised when a feed cannot be downloaded."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        original: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, original)
        self.status_code = status_code
        self.url = url

    def __str__(self) -> str:
        parts = [f"RssHttpError: {self.message}"]
        if self.url is not None:
            parts.append(f"URL: {self.url}")
        if self.status_code is not None:
            parts.append(f"Status: {self.status_code}")
        return ", ".join(parts)


class FeedFetchError(RssAgentError):
    """Raised when a feed could neither be fetched and parsed nor served from cache."""
