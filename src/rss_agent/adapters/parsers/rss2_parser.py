"""RSS 2.0 document parser."""

import logging
import re
from typing import Optional
from xml.etree import ElementTree as ET

from rss_agent.core import (
    Feed,
    FeedFormat,
    FeedItem,
    MediaContent,
    ParseErrorKind,
    RssParseError,
    content_hash,
    resolve_datetime,
)

logger = logging.getLogger(__name__)

# Optional sign followed by ASCII digits
LENGTH_PATTERN = re.compile(r"^[+-]?[0-9]+$")


class Rss2Parser:
    """Parse RSS 2.0 XML into a Feed.

    Structural problems (not XML, no ``<rss>`` root, no ``<channel>``) raise
    RssParseError. Problems in individual fields, such as an unparseable date
    or a non-numeric enclosure length, leave that field as None.
    """

    def parse(self, xml_content: str) -> Feed:
        """Parse an RSS 2.0 document."""
        try:
            root = ET.fromstring(xml_content)
        except ET.ParseError as e:
            raise RssParseError(
                f"XML parsing error: {e}",
                ParseErrorKind.MALFORMED_XML,
                source=xml_content,
                original=e,
            ) from e

        if root.tag != "rss":
            raise RssParseError(
                "Invalid RSS: missing <rss> root element",
                ParseErrorKind.MISSING_ROOT,
                source=xml_content,
            )

        channel = root.find("channel")
        if channel is None:
            raise RssParseError(
                "Invalid RSS: missing <channel> element",
                ParseErrorKind.MISSING_CHANNEL,
                source=xml_content,
            )

        return self._parse_channel(channel)

    def _parse_channel(self, channel: ET.Element) -> Feed:
        items = [self._parse_item(item) for item in channel.findall("item")]
        logger.debug("Parsed channel with %d items", len(items))

        return Feed(
            title=self._get_text(channel, "title"),
            description=self._get_text(channel, "description"),
            link=self._get_text(channel, "link"),
            language=self._get_text(channel, "language"),
            copyright=self._get_text(channel, "copyright"),
            author=self._get_text(channel, "managingEditor"),
            image_url=self._get_text(channel.find("image"), "url"),
            pub_date=resolve_datetime(self._get_text(channel, "pubDate")),
            last_build_date=resolve_datetime(self._get_text(channel, "lastBuildDate")),
            categories=self._get_categories(channel),
            items=items,
            format=FeedFormat.RSS2,
        )

    def _parse_item(self, item: ET.Element) -> FeedItem:
        title = self._get_text(item, "title")
        description = self._get_text(item, "description")
        link = self._get_text(item, "link")

        return FeedItem(
            title=title,
            description=description,
            link=link,
            guid=self._get_text(item, "guid"),
            author=self._get_text(item, "author"),
            pub_date=resolve_datetime(self._get_text(item, "pubDate")),
            categories=self._get_categories(item),
            media=[self._parse_enclosure(e) for e in item.findall("enclosure")],
            content_hash=content_hash(title, description, link),
        )

    def _parse_enclosure(self, enclosure: ET.Element) -> MediaContent:
        length_str = enclosure.get("length")
        length: Optional[int] = None
        if length_str is not None:
            if LENGTH_PATTERN.match(length_str.strip()):
                length = int(length_str)
            else:
                logger.debug("Ignoring non-numeric enclosure length %r", length_str)

        return MediaContent(
            url=enclosure.get("url", ""),
            type=enclosure.get("type"),
            length=length,
        )

    @staticmethod
    def _element_text(element: ET.Element) -> str:
        return "".join(element.itertext()).strip()

    def _get_text(self, parent: Optional[ET.Element], name: str) -> Optional[str]:
        """Trimmed text of the first ``name`` child; blank or missing gives None."""
        if parent is None:
            return None

        element = parent.find(name)
        if element is None:
            return None

        return self._element_text(element) or None

    def _get_categories(self, parent: ET.Element) -> list[str]:
        categories = []
        for category in parent.findall("category"):
            text = self._element_text(category)
            if text:
                categories.append(text)
        return categories
