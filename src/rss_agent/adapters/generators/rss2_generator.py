"""RSS 2.0 XML generator."""

from typing import Optional
from xml.sax.saxutils import escape, quoteattr

from rss_agent.core import Feed, FeedItem, format_rfc822

ATOM_NAMESPACE = "http://www.w3.org/2005/Atom"
GENERATOR_NAME = "RSS Agent Generator"

DEFAULT_TITLE = "Untitled Feed"
DEFAULT_DESCRIPTION = "Generated RSS Feed"
DEFAULT_LINK = "https://example.com"
DEFAULT_IMAGE_TITLE = "Feed Image"

INDENT = "  "


def _cdata(text: str) -> str:
    # "]]>" cannot appear inside a CDATA section, so split it across two
    text = text.replace("]]>", "]]]]><![CDATA[>")
    return f"<![CDATA[{text}]]>"


def _or_default(value: Optional[str], default: str) -> str:
    return value if value is not None else default


class Rss2Generator:
    """Serialize a Feed into RSS 2.0 XML."""

    def generate(self, feed: Feed) -> str:
        """Generate an RSS 2.0 document for ``feed``."""
        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<rss version="2.0" xmlns:atom="{ATOM_NAMESPACE}">',
            f"{INDENT}<channel>",
        ]
        depth = 2

        # Required channel elements
        title = _or_default(feed.title, DEFAULT_TITLE)
        description = _or_default(feed.description, DEFAULT_DESCRIPTION)
        link = _or_default(feed.link, DEFAULT_LINK)
        lines.append(self._text_element("title", title, depth))
        lines.append(self._text_element("description", description, depth))
        lines.append(self._text_element("link", link, depth))

        self._append_optional(lines, "language", feed.language, depth)
        self._append_optional(lines, "copyright", feed.copyright, depth)
        self._append_optional(lines, "managingEditor", feed.author, depth)
        if feed.pub_date is not None:
            lines.append(self._text_element("pubDate", format_rfc822(feed.pub_date), depth))
        if feed.last_build_date is not None:
            lines.append(
                self._text_element("lastBuildDate", format_rfc822(feed.last_build_date), depth)
            )

        for category in feed.categories:
            lines.append(self._text_element("category", category, depth))

        if feed.image_url is not None:
            lines.append(f"{INDENT * depth}<image>")
            lines.append(self._text_element("url", feed.image_url, depth + 1))
            image_title = _or_default(feed.title, DEFAULT_IMAGE_TITLE)
            lines.append(self._text_element("title", image_title, depth + 1))
            lines.append(self._text_element("link", link, depth + 1))
            lines.append(f"{INDENT * depth}</image>")

        lines.append(self._text_element("generator", GENERATOR_NAME, depth))

        for item in feed.items:
            lines.extend(self._item_lines(item, depth))

        lines.append(f"{INDENT}</channel>")
        lines.append("</rss>")
        return "\n".join(lines) + "\n"

    def _item_lines(self, item: FeedItem, depth: int) -> list[str]:
        inner = depth + 1
        lines = [f"{INDENT * depth}<item>"]

        self._append_optional(lines, "title", item.title, inner)
        if item.description is not None:
            lines.append(f"{INDENT * inner}<description>{_cdata(item.description)}</description>")
        self._append_optional(lines, "link", item.link, inner)
        self._append_optional(lines, "guid", item.guid, inner)
        self._append_optional(lines, "author", item.author, inner)
        if item.pub_date is not None:
            lines.append(self._text_element("pubDate", format_rfc822(item.pub_date), inner))

        for category in item.categories:
            lines.append(self._text_element("category", category, inner))

        for media in item.media:
            attributes = [f"url={quoteattr(media.url)}"]
            if media.type is not None:
                attributes.append(f"type={quoteattr(media.type)}")
            if media.length is not None:
                attributes.append(f'length="{media.length}"')
            lines.append(f"{INDENT * inner}<enclosure {' '.join(attributes)}/>")

        lines.append(f"{INDENT * depth}</item>")
        return lines

    def _append_optional(
        self, lines: list[str], name: str, value: Optional[str], depth: int
    ) -> None:
        if value is not None:
            lines.append(self._text_element(name, value, depth))

    @staticmethod
    def _text_element(name: str, text: str, depth: int) -> str:
        return f"{INDENT * depth}<{name}>{escape(text)}</{name}>"
