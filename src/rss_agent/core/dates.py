"""RFC 2822 date parsing and formatting with timezone resolution.

Dates in feeds are read as wall-clock time in the zone named by their last
token and converted to aware UTC datetimes. Resolution is lenient: a string
that cannot be parsed yields ``None`` and an unknown zone token is treated
as UTC.
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

logger = logging.getLogger(__name__)

MONTHS = {
    "Jan": 1,
    "Feb": 2,
    "Mar": 3,
    "Apr": 4,
    "May": 5,
    "Jun": 6,
    "Jul": 7,
    "Aug": 8,
    "Sep": 9,
    "Oct": 10,
    "Nov": 11,
    "Dec": 12,
}

MONTH_NAMES = list(MONTHS)
WEEKDAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

# Minutes relative to UTC
TIMEZONE_OFFSETS = {
    "GMT": 0,
    "UTC": 0,
    "EST": -300,
    "EDT": -240,
    "CST": -360,
    "CDT": -300,
    "MST": -420,
    "MDT": -360,
    "PST": -480,
    "PDT": -420,
    "BST": 60,
    "CET": 60,
    "CEST": 120,
    "JST": 540,
    "KST": 540,
}

RFC822_PATTERN = re.compile(
    r"^(?:\w+,\s+)?(\d{1,2})\s+(\w{3})\s+(\d{4})\s+(\d{1,2}):(\d{2}):(\d{2})\s+(.+)$",
    re.ASCII,
)
NUMERIC_OFFSET_PATTERN = re.compile(r"^([+-])(\d{2})(\d{2})$")


def lookup_offset_minutes(token: str) -> Optional[int]:
    """Return the UTC offset of a zone token in minutes, or None if unknown.

    Accepts numeric offsets (``+0800``, ``-0500``) and the abbreviations in
    ``TIMEZONE_OFFSETS`` in any letter case.
    """
    token = token.strip()
    match = NUMERIC_OFFSET_PATTERN.match(token)
    if match:
        sign = 1 if match.group(1) == "+" else -1
        hours = int(match.group(2))
        minutes = int(match.group(3))
        return sign * (hours * 60 + minutes)

    return TIMEZONE_OFFSETS.get(token.upper())


def resolve_offset_minutes(token: str) -> int:
    """Return the UTC offset of a zone token in minutes; unknown zones are UTC."""
    offset = lookup_offset_minutes(token)
    if offset is None:
        logger.debug("Unknown timezone token %r, treating as UTC", token)
        return 0
    return offset


def _parse_rfc822(text: str) -> Optional[datetime]:
    match = RFC822_PATTERN.match(text)
    if not match:
        return None

    month = MONTHS.get(match.group(2))
    if month is None:
        return None

    try:
        local = datetime(
            int(match.group(3)),
            month,
            int(match.group(1)),
            int(match.group(4)),
            int(match.group(5)),
            int(match.group(6)),
            tzinfo=timezone.utc,
        )
    except ValueError:
        return None

    offset = resolve_offset_minutes(match.group(7))
    return local - timedelta(minutes=offset)


def _parse_iso8601(text: str) -> Optional[datetime]:
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def resolve_datetime(text: Optional[str]) -> Optional[datetime]:
    """Parse an RFC 822/2822 date (or ISO 8601 fallback) into an aware UTC datetime.

    Never raises: unparseable input returns ``None``.

    Examples:
        >>> resolve_datetime("Thu, 28 Aug 2025 00:46:04 +0800")
        datetime.datetime(2025, 8, 27, 16, 46, 4, tzinfo=datetime.timezone.utc)
    """
    if not text:
        return None

    text = text.strip()
    if not text:
        return None

    try:
        return _parse_rfc822(text) or _parse_iso8601(text)
    except (OverflowError, ValueError):
        logger.debug("Date out of range: %r", text)
        return None


def to_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_rfc822(value: datetime) -> str:
    """Format a datetime as ``Thu, 21 Aug 2025 14:30:45 GMT``."""
    utc = to_utc(value)
    return (
        f"{WEEKDAY_NAMES[utc.weekday()]}, {utc.day:02d} {MONTH_NAMES[utc.month - 1]} "
        f"{utc.year:04d} {utc.hour:02d}:{utc.minute:02d}:{utc.second:02d} GMT"
    )


def format_offset(offset_minutes: int) -> str:
    """Format an offset in minutes as ``+08:00``; zero gives an empty string."""
    if offset_minutes == 0:
        return ""

    sign = "+" if offset_minutes > 0 else "-"
    hours, minutes = divmod(abs(offset_minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"
