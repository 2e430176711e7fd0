"""JSON-ready and human-readable renderings of feeds."""

from datetime import datetime
from typing import Any, Optional

from rss_agent.core import AnalysisResult, Feed, FeedItem, MediaContent, ValidationResult

DESCRIPTION_PREVIEW_LENGTH = 100


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def media_to_dict(media: MediaContent) -> dict[str, Any]:
    return {
        "url": media.url,
        "type": media.type,
        "length": media.length,
        "is_image": media.is_image,
        "is_video": media.is_video,
        "is_audio": media.is_audio,
    }


def item_to_dict(item: FeedItem) -> dict[str, Any]:
    return {
        "title": item.title,
        "description": item.description,
        "link": item.link,
        "guid": item.guid,
        "author": item.author,
        "pub_date": _iso(item.pub_date),
        "categories": list(item.categories),
        "media": [media_to_dict(m) for m in item.media],
        "content_hash": item.content_hash,
    }


def feed_info_to_dict(feed: Feed) -> dict[str, Any]:
    """Channel-level fields of a feed."""
    return {
        "title": feed.title,
        "description": feed.description,
        "link": feed.link,
        "language": feed.language,
        "copyright": feed.copyright,
        "author": feed.author,
        "image_url": feed.image_url,
        "pub_date": _iso(feed.pub_date),
        "last_build_date": _iso(feed.last_build_date),
        "categories": list(feed.categories),
        "items_count": len(feed.items),
    }


def feed_to_dict(feed: Feed, max_items: Optional[int] = None) -> dict[str, Any]:
    """Convert a feed to a JSON-serializable dict.

    Args:
        feed: Parsed feed
        max_items: Include only the first N items (all when None)
    """
    items = feed.items if max_items is None else feed.items[:max_items]
    return {
        "feed_format": feed.format.display_name,
        "feed_info": feed_info_to_dict(feed),
        "items": [item_to_dict(item) for item in items],
    }


def analysis_result_to_dict(result: AnalysisResult, max_items: int = 5) -> dict[str, Any]:
    config = result.url_config
    if result.success and result.feed is not None:
        return {
            "status": "success",
            "url": config.url,
            "name": config.name,
            "category": config.category,
            "description": config.description,
            "metadata": config.metadata,
            **feed_to_dict(result.feed, max_items=max_items),
        }

    return {
        "status": "error",
        "url": config.url,
        "name": config.name,
        "error": result.error,
    }


def format_feed_pretty(feed: Feed, source: str) -> str:
    """Render a feed as a plain-text report."""
    lines = [
        "RSS Feed Analysis",
        "=" * 50,
        f"Source: {source}",
        f"Format: {feed.format.display_name}",
        "",
        "Feed Information:",
        f"  Title: {feed.title or 'N/A'}",
        f"  Description: {feed.description or 'N/A'}",
        f"  Link: {feed.link or 'N/A'}",
        f"  Language: {feed.language or 'N/A'}",
        f"  Author: {feed.author or 'N/A'}",
    ]

    if feed.pub_date is not None:
        lines.append(f"  Publication Date: {feed.pub_date.isoformat()}")
    if feed.last_build_date is not None:
        lines.append(f"  Last Build Date: {feed.last_build_date.isoformat()}")
    if feed.categories:
        lines.append(f"  Categories: {', '.join(feed.categories)}")

    lines.extend([f"  Total Items: {len(feed.items)}", ""])

    if feed.items:
        lines.append("Articles:")
        for i, item in enumerate(feed.items, 1):
            lines.extend(_format_item_pretty(i, item))

    return "\n".join(lines)


def _format_item_pretty(index: int, item: FeedItem) -> list[str]:
    lines = [f"  {index}. {item.title or 'Untitled'}"]
    if item.link:
        lines.append(f"     Link: {item.link}")
    if item.pub_date is not None:
        lines.append(f"     Date: {item.pub_date.isoformat()}")
    if item.description:
        desc = item.description
        if len(desc) > DESCRIPTION_PREVIEW_LENGTH:
            desc = desc[:DESCRIPTION_PREVIEW_LENGTH] + "..."
        lines.append(f"     Description: {desc}")
    if item.categories:
        lines.append(f"     Categories: {', '.join(item.categories)}")
    if item.media:
        lines.append(f"     Media: {len(item.media)} attachments")
    lines.append("")
    return lines


def format_batch_pretty(results: list[AnalysisResult]) -> str:
    """Render batch analysis results as a plain-text report."""
    successful = sum(1 for r in results if r.success)
    lines = [
        "RSS Batch Analysis Results",
        "=" * 50,
        f"Total feeds: {len(results)}",
        f"Successful: {successful}",
        f"Failed: {len(results) - successful}",
        "",
    ]

    for i, result in enumerate(results, 1):
        config = result.url_config
        lines.append(f"{i}. {config.url}")
        if config.name:
            lines.append(f"   Name: {config.name}")
        if config.category:
            lines.append(f"   Category: {config.category}")

        if result.success and result.feed is not None:
            feed = result.feed
            lines.append(f"   ✅ Success - {feed.format.display_name}")
            lines.append(f"   Title: {feed.title or 'N/A'}")
            lines.append(f"   Items: {len(feed.items)}")
            if feed.language:
                lines.append(f"   Language: {feed.language}")
            if feed.last_build_date is not None:
                lines.append(f"   Last Updated: {feed.last_build_date.isoformat()}")
        else:
            lines.append("   ❌ Failed")
            lines.append(f"   Error: {result.error}")

        lines.append("")

    return "\n".join(lines)


def validation_result_to_dict(result: ValidationResult) -> dict[str, Any]:
    info = result.timezone_info
    return {
        "input": result.input,
        "success": result.success,
        "parsed": _iso(result.parsed),
        "expected": _iso(result.expected),
        "timezone": {
            "original": info.original,
            "type": info.kind,
            "offset_minutes": info.offset_minutes,
            "description": info.description,
        } if info is not None else None,
        "error": result.error,
    }


def validation_summary_to_dict(results: list[ValidationResult]) -> dict[str, Any]:
    passed = sum(1 for r in results if r.success)
    return {
        "total": len(results),
        "passed": passed,
        "failed": len(results) - passed,
        "results": [validation_result_to_dict(r) for r in results],
    }


def format_validation_pretty(result: ValidationResult) -> str:
    """Render one timezone validation as plain text."""
    status = "✅" if result.success else "❌"
    lines = [f"{status} {result.input}"]
    if result.timezone_info is not None:
        lines.append(f"   Timezone: {result.timezone_info.description}")
    if result.parsed is not None:
        lines.append(f"   Parsed (UTC): {result.parsed.isoformat()}")
    if result.expected is not None:
        lines.append(f"   Expected (UTC): {result.expected.isoformat()}")
    if result.error:
        lines.append(f"   Error: {result.error}")
    return "\n".join(lines)
