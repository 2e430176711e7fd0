"""Core domain entities."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class FeedFormat(str, Enum):
    """Supported feed formats."""

    RSS2 = "rss2"
    ATOM = "atom"
    JSON_FEED = "json_feed"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        return _FORMAT_DISPLAY_NAMES[self]


_FORMAT_DISPLAY_NAMES = {
    FeedFormat.RSS2: "RSS 2.0",
    FeedFormat.ATOM: "Atom 1.0",
    FeedFormat.JSON_FEED: "JSON Feed 1.1",
    FeedFormat.UNKNOWN: "Unknown",
}


@dataclass(frozen=True)
class MediaContent:
    """Media attached to a feed item (RSS enclosures)."""

    url: str
    type: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    length: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[int] = None

    @property
    def is_image(self) -> bool:
        return self._type_startswith("image/")

    @property
    def is_video(self) -> bool:
        return self._type_startswith("video/")

    @property
    def is_audio(self) -> bool:
        return self._type_startswith("audio/")

    def _type_startswith(self, prefix: str) -> bool:
        if self.type is None:
            return False
        return self.type.startswith(prefix)


@dataclass(frozen=True)
class FeedItem:
    """Single item/article of a feed."""

    title: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None
    guid: Optional[str] = None
    pub_date: Optional[datetime] = None
    author: Optional[str] = None
    categories: tuple[str, ...] = ()
    media: tuple[MediaContent, ...] = ()
    source_feed: Optional[str] = None
    content_hash: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "categories", tuple(self.categories))
        object.__setattr__(self, "media", tuple(self.media))

    def is_same_as(self, other: "FeedItem") -> bool:
        """Check whether two items describe the same article.

        GUIDs are compared first, then content hashes, then links. As a last
        resort the title and publication date must both match.
        """
        if self.guid is not None and self.guid == other.guid:
            return True

        if self.content_hash is not None and self.content_hash == other.content_hash:
            return True

        if self.link is not None and self.link == other.link:
            return True

        if (
            self.title is not None
            and other.title is not None
            and self.pub_date is not None
            and other.pub_date is not None
        ):
            return self.title == other.title and self.pub_date == other.pub_date

        return False

    def copy(self, **changes: Any) -> "FeedItem":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


@dataclass(frozen=True)
class Feed:
    """Parsed feed: channel metadata plus its items in document order."""

    title: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None
    language: Optional[str] = None
    copyright: Optional[str] = None
    pub_date: Optional[datetime] = None
    last_build_date: Optional[datetime] = None
    items: tuple[FeedItem, ...] = ()
    format: FeedFormat = FeedFormat.RSS2
    image_url: Optional[str] = None
    author: Optional[str] = None
    categories: tuple[str, ...] = ()
    metadata: dict[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))
        object.__setattr__(self, "categories", tuple(self.categories))

    def copy(self, **changes: Any) -> "Feed":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def __str__(self) -> str:
        return f"Feed(title: {self.title}, items: {len(self.items)}, format: {self.format.display_name})"


@dataclass(frozen=True)
class CacheStats:
    """Number and total size of cached feed documents."""

    file_count: int = 0
    total_size_bytes: int = 0

    @property
    def total_size_kb(self) -> float:
        return self.total_size_bytes / 1024

    @property
    def total_size_mb(self) -> float:
        return self.total_size_bytes / (1024 * 1024)

    def __str__(self) -> str:
        return f"CacheStats(files: {self.file_count}, size: {self.total_size_kb:.1f} KB)"


@dataclass
class UrlConfig:
    """Feed URL to analyze, with optional descriptive fields."""

    url: str
    name: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("URL cannot be empty")


@dataclass
class AnalysisResult:
    """Result of fetching and parsing one feed in a batch."""

    url_config: UrlConfig
    success: bool
    feed: Optional[Feed] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class TimezoneInfo:
    """Diagnostic description of the zone token of a date string."""

    original: str
    kind: str
    offset_minutes: int
    description: str


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of checking one date string against an independent computation."""

    input: str
    success: bool
    parsed: Optional[datetime] = None
    expected: Optional[datetime] = None
    timezone_info: Optional[TimezoneInfo] = None
    error: Optional[str] = None
