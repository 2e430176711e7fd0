"""Tests for RFC 2822 date resolution."""

from datetime import datetime, timedelta, timezone

import pytest

from rss_agent.core import format_rfc822, resolve_datetime, resolve_offset_minutes
from rss_agent.core.dates import format_offset, lookup_offset_minutes


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Thu, 28 Aug 2025 00:46:04 +0800", utc(2025, 8, 27, 16, 46, 4)),
        ("Wed, 27 Aug 2025 12:00:00 -0500", utc(2025, 8, 27, 17, 0, 0)),
        ("Wed, 27 Aug 2025 15:30:00 GMT", utc(2025, 8, 27, 15, 30, 0)),
        ("Sat, 30 Aug 2025 09:15:00 JST", utc(2025, 8, 30, 0, 15, 0)),
        ("Thu, 28 Aug 2025 10:30:00 +0930", utc(2025, 8, 28, 1, 0, 0)),
        ("Fri, 29 Aug 2025 14:22:33 EST", utc(2025, 8, 29, 19, 22, 33)),
    ],
)
def test_resolve_rfc822_to_utc(text: str, expected: datetime) -> None:
    """Wall-clock fields minus the zone offset give the UTC instant."""
    resolved = resolve_datetime(text)

    assert resolved == expected
    assert resolved.utcoffset() == timedelta(0)


def test_resolved_value_is_tagged_utc() -> None:
    """Resolved datetimes are aware and in UTC, never naive local time."""
    resolved = resolve_datetime("Thu, 28 Aug 2025 00:46:04 +0800")

    assert resolved.tzinfo is timezone.utc
    assert resolved.isoformat() == "2025-08-27T16:46:04+00:00"


def test_weekday_is_optional() -> None:
    """Dates without the leading weekday still parse."""
    assert resolve_datetime("28 Aug 2025 00:46:04 +0800") == utc(2025, 8, 27, 16, 46, 4)


def test_single_digit_day_and_hour() -> None:
    assert resolve_datetime("Mon, 1 Sep 2025 9:05:00 GMT") == utc(2025, 9, 1, 9, 5, 0)


def test_zone_token_case_insensitive() -> None:
    """Text zone tokens match in any letter case."""
    assert resolve_datetime("Sat, 30 Aug 2025 09:15:00 jst") == utc(2025, 8, 30, 0, 15, 0)
    assert resolve_offset_minutes("pdt") == -420


def test_unknown_zone_treated_as_utc() -> None:
    """An unrecognized zone token resolves as UTC instead of failing."""
    assert resolve_datetime("Wed, 27 Aug 2025 15:30:00 XYZ") == utc(2025, 8, 27, 15, 30, 0)
    assert resolve_offset_minutes("XYZ") == 0
    assert lookup_offset_minutes("XYZ") is None


@pytest.mark.parametrize(
    "token, minutes",
    [
        ("+0800", 480),
        ("-0500", -300),
        ("+0930", 570),
        ("GMT", 0),
        ("UTC", 0),
        ("EDT", -240),
        ("CST", -360),
        ("CEST", 120),
        ("KST", 540),
    ],
)
def test_resolve_offset_minutes(token: str, minutes: int) -> None:
    assert resolve_offset_minutes(token) == minutes


def test_iso8601_fallback() -> None:
    """ISO 8601 strings are accepted when the RFC 822 form does not match."""
    assert resolve_datetime("2025-08-27T16:46:04Z") == utc(2025, 8, 27, 16, 46, 4)
    assert resolve_datetime("2025-08-28T00:46:04+08:00") == utc(2025, 8, 27, 16, 46, 4)


def test_iso8601_naive_is_utc() -> None:
    resolved = resolve_datetime("2025-08-27T16:46:04")

    assert resolved == utc(2025, 8, 27, 16, 46, 4)
    assert resolved.tzinfo is not None


@pytest.mark.parametrize(
    "text",
    [
        None,
        "",
        "   ",
        "not a date",
        "Thu, 28 Foo 2025 00:46:04 +0800",
        "Thu, 31 Feb 2025 00:46:04 GMT",
        "Thu, 28 Aug 2025 25:00:00 GMT",
        "Thu, 28 Aug 2025 00:46:04",
    ],
)
def test_unparseable_input_returns_none(text) -> None:
    """Bad input gives None and never raises."""
    assert resolve_datetime(text) is None


def test_surrounding_whitespace_ignored() -> None:
    assert resolve_datetime("  Wed, 27 Aug 2025 15:30:00 GMT\n") == utc(2025, 8, 27, 15, 30, 0)


def test_format_rfc822() -> None:
    """Formatting always uses the UTC instant and a GMT marker."""
    assert format_rfc822(utc(2025, 8, 21, 14, 30, 45)) == "Thu, 21 Aug 2025 14:30:45 GMT"

    taipei = timezone(timedelta(hours=8))
    local = datetime(2025, 8, 28, 0, 46, 4, tzinfo=taipei)
    assert format_rfc822(local) == "Wed, 27 Aug 2025 16:46:04 GMT"


def test_format_then_resolve_preserves_instant() -> None:
    instant = utc(2025, 1, 5, 3, 4, 5)

    assert resolve_datetime(format_rfc822(instant)) == instant


def test_format_offset() -> None:
    assert format_offset(480) == "+08:00"
    assert format_offset(-300) == "-05:00"
    assert format_offset(570) == "+09:30"
    assert format_offset(0) == ""


@pytest.mark.parametrize(
    "token, minutes",
    [
        ("GMT", 0),
        ("UTC", 0),
        ("EST", -300),
        ("EDT", -240),
        ("CST", -360),
        ("CDT", -300),
        ("MST", -420),
        ("MDT", -360),
        ("PST", -480),
        ("PDT", -420),
        ("BST", 60),
        ("CET", 60),
        ("CEST", 120),
        ("JST", 540),
        ("KST", 540),
    ],
)
def test_every_zone_abbreviation(token: str, minutes: int) -> None:
    """Each named zone resolves to its fixed offset in upper and lower case."""
    expected = utc(2025, 8, 27, 12, 0, 0) - timedelta(minutes=minutes)

    for variant in (token, token.lower()):
        assert lookup_offset_minutes(variant) == minutes
        assert resolve_datetime(f"Wed, 27 Aug 2025 12:00:00 {variant}") == expected


def test_out_of_range_fields_rejected_rather_than_rolled_over() -> None:
    """Impossible calendar values give None instead of normalizing.

    31 Feb does not become 3 Mar and hour 25 does not become the next day.
    """
    assert resolve_datetime("Mon, 31 Feb 2025 00:46:04 GMT") is None
    assert resolve_datetime("Thu, 28 Aug 2025 25:00:00 GMT") is None
    assert resolve_datetime("Thu, 28 Aug 2025 12:60:00 GMT") is None
    assert resolve_datetime("Thu, 28 Aug 2025 12:00:61 GMT") is None


def test_format_pads_year_to_four_digits() -> None:
    """Years before 1000 are zero padded so the output parses again."""
    instant = utc(999, 1, 2, 3, 4, 5)
    text = format_rfc822(instant)

    assert " 0999 " in text
    assert resolve_datetime(text) == instant


def test_weekday_needs_comma_and_space() -> None:
    """The weekday prefix is a comma followed by whitespace."""
    assert resolve_datetime("Thu,28 Aug 2025 00:46:04 +0800") is None
    assert resolve_datetime("Thu,  28 Aug 2025 00:46:04 +0800") == utc(2025, 8, 27, 16, 46, 4)


def test_non_ascii_digits_rejected() -> None:
    assert resolve_datetime("Thu, ٢٨ Aug 2025 00:46:04 GMT") is None
