"""Content fingerprint used to detect duplicate items across fetches."""

import hashlib
from typing import Optional

SEPARATOR = "|"


def content_hash(
    title: Optional[str],
    description: Optional[str],
    link: Optional[str],
) -> str:
    """Return the SHA-256 hex digest of an item's title, description and link.

    Values are trimmed and empty ones are skipped before joining, so the
    same triple always yields the same digest.
    """
    parts = [value.strip() for value in (title, description, link) if value]
    content = SEPARATOR.join(part for part in parts if part)
    return hashlib.sha256(content.encode("utf-8")).hexdigest()
