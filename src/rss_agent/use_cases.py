"""Business logic use cases."""

import asyncio
import json
import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from xml.sax.saxutils import escape

from rss_agent.adapters.parsers import Rss2Parser
from rss_agent.config import clamp_concurrency
from rss_agent.core import (
    AnalysisResult,
    CacheStats,
    Feed,
    FeedCache,
    FeedFetcher,
    FeedFetchError,
    FeedFormat,
    FeedItem,
    RssHttpError,
    RssParseError,
    TimezoneInfo,
    UrlConfig,
    ValidationResult,
    content_hash,
    resolve_datetime,
)
from rss_agent.core.dates import MONTHS, format_offset, lookup_offset_minutes, to_utc

logger = logging.getLogger(__name__)

# Expired entries of any age are used when the network fails
STALE_CACHE_MAX_AGE = float("inf")


class FeedService:
    """Fetch and parse feeds, reading through an optional cache."""

    def __init__(
        self,
        fetcher: FeedFetcher,
        cache: Optional[FeedCache] = None,
        parser: Optional[Rss2Parser] = None,
    ) -> None:
        self.fetcher = fetcher
        self.cache = cache
        self.parser = parser or Rss2Parser()

    async def fetch_feed(self, url: str) -> Feed:
        """Fetch and parse the feed at ``url``.

        1. A fresh cache entry is parsed and returned without a request.
        2. Otherwise the feed is downloaded, parsed and written to the cache.
        3. If the download fails, an expired cache entry is used if there is one.

        Raises:
            FeedFetchError: If the feed cannot be downloaded or parsed and no
                cached copy is available
        """
        if self.cache is not None:
            cached = self.cache.read(url)
            if cached is not None:
                try:
                    feed = self.parser.parse(cached)
                    logger.debug("Cache hit for %s", url)
                    return feed
                except RssParseError as e:
                    logger.warning("Ignoring unparseable cache entry for %s: %s", url, e.message)

        try:
            content = await self.fetcher.fetch_text(url)
        except RssHttpError as e:
            stale_feed = self._parse_stale_cache(url)
            if stale_feed is not None:
                logger.warning("Serving stale cache for %s after fetch error: %s", url, e.message)
                return stale_feed
            raise FeedFetchError(f"Failed to fetch RSS feed from {url}: {e.message}", e) from e

        try:
            feed = self.parser.parse(content)
        except RssParseError as e:
            raise FeedFetchError(f"Failed to parse RSS feed from {url}: {e.message}", e) from e

        if self.cache is not None:
            self.cache.write(url, content)

        return feed

    def _parse_stale_cache(self, url: str) -> Optional[Feed]:
        if self.cache is None:
            return None

        stale = self.cache.read(url, max_age=STALE_CACHE_MAX_AGE)
        if stale is None:
            return None

        try:
            return self.parser.parse(stale)
        except RssParseError:
            return None

    def clear_cache(self) -> int:
        """Remove all cached feeds; returns the number removed."""
        if self.cache is None:
            return 0
        return self.cache.clear()

    def cache_stats(self) -> CacheStats:
        """Cache statistics, empty when caching is disabled."""
        if self.cache is None:
            return CacheStats()
        return self.cache.stats()


def parse_url_list(json_content: str) -> list[UrlConfig]:
    """Parse a JSON array of feed URLs.

    Each element is either a URL string or an object with a required ``url``
    and optional ``name``, ``category`` and ``description``. Other keys are
    kept as metadata.

    Raises:
        ValueError: If the input is not a valid list of URLs
    """
    json_content = json_content.strip()
    if not json_content:
        return []

    try:
        parsed = json.loads(json_content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON format: {e}") from e

    if not isinstance(parsed, list):
        raise ValueError("Input must be a JSON array")

    urls: list[UrlConfig] = []
    for i, entry in enumerate(parsed):
        if isinstance(entry, str):
            urls.append(UrlConfig(url=entry))
        elif isinstance(entry, dict):
            url = entry.get("url")
            if not url or not isinstance(url, str):
                raise ValueError(f'Item at index {i} missing required "url" field')
            urls.append(UrlConfig(
                url=url,
                name=entry.get("name"),
                category=entry.get("category"),
                description=entry.get("description"),
                metadata={k: v for k, v in entry.items() if k != "url"},
            ))
        else:
            raise ValueError(f'Item at index {i} must be a string URL or object with "url" field')

    return urls


class BatchAnalyzer:
    """Fetch and parse many feeds with bounded concurrency."""

    def __init__(self, fetcher: FeedFetcher, parser: Optional[Rss2Parser] = None) -> None:
        self.fetcher = fetcher
        self.parser = parser or Rss2Parser()

    async def analyze(self, urls: list[UrlConfig], concurrency: int = 3) -> list[AnalysisResult]:
        """Analyze all URLs, at most ``concurrency`` at a time.

        Results keep the input order. A failing feed produces an unsuccessful
        result and does not affect the others.
        """
        semaphore = asyncio.Semaphore(clamp_concurrency(concurrency))

        async def analyze_one(url_config: UrlConfig) -> AnalysisResult:
            async with semaphore:
                logger.info("Fetching: %s", url_config.url)
                try:
                    content = await self.fetcher.fetch_text(url_config.url)
                    feed = self.parser.parse(content)
                except Exception as e:
                    logger.info("Error processing %s: %s", url_config.url, e)
                    return AnalysisResult(url_config=url_config, success=False, error=str(e))
                return AnalysisResult(url_config=url_config, success=True, feed=feed)

        return list(await asyncio.gather(*(analyze_one(u) for u in urls)))


def _str_list(value: Any) -> list[str]:
    if not value:
        return []
    return [str(v) for v in value]


def parse_feed_config(json_content: str) -> dict[str, Any]:
    """Parse a generator config document.

    Raises:
        ValueError: If the input is empty, not JSON or not a JSON object
    """
    json_content = json_content.strip()
    if not json_content:
        raise ValueError("Input is empty")

    try:
        parsed = json.loads(json_content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON format: {e}") from e

    if not isinstance(parsed, dict):
        raise ValueError("Input must be a JSON object")

    return parsed


def build_feed_from_config(config: dict[str, Any], now: Optional[datetime] = None) -> Feed:
    """Build a feed whose items are the links listed in ``config["urls"]``.

    Raises:
        ValueError: If ``urls`` is missing or contains an invalid entry
    """
    now = now or datetime.now(timezone.utc)

    urls = config.get("urls")
    if not urls or not isinstance(urls, list):
        raise ValueError('Missing required "urls" array')

    items = []
    for i, entry in enumerate(urls):
        if isinstance(entry, str):
            entry = {"url": entry}
        elif not isinstance(entry, dict):
            raise ValueError(f"URL item at index {i} must be a string or object")

        url = entry.get("url")
        if not url:
            raise ValueError(f'URL item at index {i} missing required "url" field')

        title = entry.get("title") or f"Link {i + 1}"
        description = entry.get("description") or "Generated link item"
        items.append(FeedItem(
            title=title,
            description=description,
            link=url,
            guid=url,
            author=entry.get("author"),
            pub_date=resolve_datetime(entry.get("pubDate")) or now,
            categories=_str_list(entry.get("categories")),
            content_hash=content_hash(title, description, url),
        ))

    return Feed(
        title=config.get("title") or "Generated RSS Feed",
        description=config.get("description") or "RSS feed generated from URLs",
        link=config.get("link") or "https://example.com",
        language=config.get("language"),
        author=config.get("author"),
        copyright=config.get("copyright"),
        image_url=config.get("imageUrl"),
        pub_date=resolve_datetime(config.get("pubDate")) or now,
        last_build_date=now,
        categories=_str_list(config.get("categories")),
        items=items,
        format=FeedFormat.RSS2,
    )


class TimezoneValidator:
    """Check that feed dates resolve to the UTC instant their zone implies.

    The date is parsed through a full RSS document, the same way real feeds
    are, and compared with an independent computation from its fields.
    """

    DEFAULT_CASES = [
        "Thu, 28 Aug 2025 00:46:04 +0800",
        "Wed, 27 Aug 2025 12:00:00 -0500",
        "Thu, 28 Aug 2025 10:30:00 +0930",
        "Wed, 27 Aug 2025 15:30:00 GMT",
        "Wed, 27 Aug 2025 20:15:00 UTC",
        "Fri, 29 Aug 2025 14:22:33 EST",
        "Sat, 30 Aug 2025 09:15:00 JST",
    ]

    TOLERANCE = timedelta(seconds=1)

    _NUMERIC_ZONE = re.compile(r"([+-])(\d{2})(\d{2})\s*$")
    _TEXT_ZONE = re.compile(r"\b([A-Za-z]{3,4})\s*$")
    _DATE_FIELDS = re.compile(
        r"(\w+,\s+)?(\d{1,2})\s+(\w{3})\s+(\d{4})\s+(\d{1,2}):(\d{2}):(\d{2})"
    )

    _DOCUMENT_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Test Feed</title>
    <link>https://example.com</link>
    <description>Test feed</description>
    <item>
      <title>Test Article</title>
      <link>https://example.com/article</link>
      <description>Test article</description>
      <pubDate>{pub_date}</pubDate>
    </item>
  </channel>
</rss>"""

    def __init__(self, parser: Optional[Rss2Parser] = None) -> None:
        self.parser = parser or Rss2Parser()

    def validate(self, pub_date: str) -> ValidationResult:
        """Validate a single date string."""
        document = self._DOCUMENT_TEMPLATE.format(pub_date=escape(pub_date))
        try:
            feed = self.parser.parse(document)
        except RssParseError as e:
            return ValidationResult(input=pub_date, success=False, error=f"Parse error: {e.message}")

        parsed = feed.items[0].pub_date
        if parsed is None:
            return ValidationResult(input=pub_date, success=False, error="Parsing failed - no date")

        timezone_info = self.analyze_timezone(pub_date)
        expected = self._expected_utc(pub_date, timezone_info)
        success = expected is not None and abs(parsed - expected) < self.TOLERANCE

        return ValidationResult(
            input=pub_date,
            parsed=parsed,
            expected=expected,
            success=success,
            timezone_info=timezone_info,
            error=None if success else "Timezone conversion mismatch",
        )

    def validate_batch(self, pub_dates: list[str]) -> list[ValidationResult]:
        return [self.validate(d) for d in pub_dates]

    def convert_to_timezone(self, utc_time: datetime, target_timezone: str) -> Optional[datetime]:
        """Express an aware datetime in another zone; None for naive input or unknown zones."""
        if utc_time.tzinfo is None:
            return None

        offset = lookup_offset_minutes(target_timezone)
        if offset is None:
            return None

        return utc_time.astimezone(timezone(timedelta(minutes=offset)))

    def analyze_timezone(self, pub_date: str) -> TimezoneInfo:
        """Describe the zone token at the end of a date string."""
        numeric = self._NUMERIC_ZONE.search(pub_date)
        if numeric:
            sign = numeric.group(1)
            hours = int(numeric.group(2))
            minutes = int(numeric.group(3))
            offset = (1 if sign == "+" else -1) * (hours * 60 + minutes)
            return TimezoneInfo(
                original=numeric.group(0).strip(),
                kind="numeric",
                offset_minutes=offset,
                description=f"UTC{sign}{hours:02d}:{minutes:02d}",
            )

        text = self._TEXT_ZONE.search(pub_date)
        if text:
            token = text.group(1)
            offset = lookup_offset_minutes(token) or 0
            return TimezoneInfo(
                original=token,
                kind="text",
                offset_minutes=offset,
                description=f"{token} (UTC{format_offset(offset)})",
            )

        return TimezoneInfo(
            original="unknown",
            kind="unknown",
            offset_minutes=0,
            description="Unrecognized timezone",
        )

    def _expected_utc(self, pub_date: str, timezone_info: TimezoneInfo) -> Optional[datetime]:
        match = self._DATE_FIELDS.search(pub_date)
        if not match:
            return None

        month = MONTHS.get(match.group(3))
        if month is None:
            return None

        try:
            local = datetime(
                int(match.group(4)),
                month,
                int(match.group(2)),
                int(match.group(5)),
                int(match.group(6)),
                int(match.group(7)),
                tzinfo=timezone.utc,
            )
        except ValueError:
            return None

        return to_utc(local - timedelta(minutes=timezone_info.offset_minutes))
