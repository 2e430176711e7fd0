"""Tests for output formatters."""

import json
from datetime import datetime, timezone

from rss_agent.adapters.output import (
    analysis_result_to_dict,
    feed_to_dict,
    format_batch_pretty,
    format_feed_pretty,
    validation_summary_to_dict,
)
from rss_agent.core import (
    AnalysisResult,
    Feed,
    FeedItem,
    MediaContent,
    TimezoneInfo,
    UrlConfig,
    ValidationResult,
)


def make_feed(item_count: int = 3) -> Feed:
    return Feed(
        title="Tech News",
        link="https://example.com",
        language="en",
        last_build_date=datetime(2025, 8, 21, 14, 30, 45, tzinfo=timezone.utc),
        items=[
            FeedItem(
                title=f"Article {i}",
                description="x" * 150,
                link=f"https://example.com/{i}",
                categories=["tech"],
                media=[MediaContent(url=f"https://example.com/{i}.png", type="image/png")],
            )
            for i in range(1, item_count + 1)
        ],
    )


def test_feed_to_dict_is_json_serializable() -> None:
    """Test the JSON shape of a feed."""
    data = feed_to_dict(make_feed())

    assert data["feed_format"] == "RSS 2.0"
    assert data["feed_info"]["title"] == "Tech News"
    assert data["feed_info"]["items_count"] == 3
    assert data["feed_info"]["last_build_date"] == "2025-08-21T14:30:45+00:00"
    assert data["feed_info"]["pub_date"] is None
    assert data["items"][0]["media"][0]["is_image"] is True
    json.dumps(data)


def test_feed_to_dict_limits_items() -> None:
    data = feed_to_dict(make_feed(10), max_items=5)

    assert len(data["items"]) == 5
    assert data["feed_info"]["items_count"] == 10


def test_analysis_result_to_dict() -> None:
    """Test success and error result shapes."""
    ok = AnalysisResult(
        url_config=UrlConfig(url="https://a.example.com", name="A"),
        success=True,
        feed=make_feed(8),
    )
    failed = AnalysisResult(
        url_config=UrlConfig(url="https://b.example.com"),
        success=False,
        error="HTTP 404: Not Found",
    )

    ok_data = analysis_result_to_dict(ok, max_items=2)
    assert ok_data["status"] == "success"
    assert ok_data["name"] == "A"
    assert len(ok_data["items"]) == 2

    assert analysis_result_to_dict(failed) == {
        "status": "error",
        "url": "https://b.example.com",
        "name": None,
        "error": "HTTP 404: Not Found",
    }


def test_format_feed_pretty() -> None:
    text = format_feed_pretty(make_feed(1), "https://example.com/feed.xml")

    assert "Source: https://example.com/feed.xml" in text
    assert "Format: RSS 2.0" in text
    assert "  1. Article 1" in text
    assert "Description: " + "x" * 100 + "..." in text
    assert "Media: 1 attachments" in text


def test_format_batch_pretty() -> None:
    results = [
        AnalysisResult(url_config=UrlConfig(url="https://a.example.com"), success=True, feed=make_feed()),
        AnalysisResult(url_config=UrlConfig(url="https://b.example.com"), success=False, error="boom"),
    ]

    text = format_batch_pretty(results)

    assert "Total feeds: 2" in text
    assert "Successful: 1" in text
    assert "Failed: 1" in text
    assert "✅ Success - RSS 2.0" in text
    assert "❌ Failed" in text
    assert "Error: boom" in text


def test_validation_summary_to_dict() -> None:
    info = TimezoneInfo(original="+0800", kind="numeric", offset_minutes=480, description="UTC+08:00")
    instant = datetime(2025, 8, 27, 16, 46, 4, tzinfo=timezone.utc)
    results = [
        ValidationResult(
            input="Thu, 28 Aug 2025 00:46:04 +0800",
            success=True,
            parsed=instant,
            expected=instant,
            timezone_info=info,
        ),
        ValidationResult(input="garbage", success=False, error="Parsing failed - no date"),
    ]

    data = validation_summary_to_dict(results)

    assert data["total"] == 2
    assert data["passed"] == 1
    assert data["failed"] == 1
    assert data["results"][0]["parsed"] == "2025-08-27T16:46:04+00:00"
    assert data["results"][0]["timezone"]["offset_minutes"] == 480
    assert data["results"][1]["timezone"] is None
