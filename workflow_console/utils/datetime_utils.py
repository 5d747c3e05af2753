"""Shared datetime utilities."""

from __future__ import annotations

from datetime import datetime


def parse_iso(value: str | None) -> datetime | None:
    """Parse an ISO 8601 datetime string, returning None on invalid input.

    Handles the variations the workflow server emits:
    - With timezone Z suffix: 2026-02-12T10:30:00Z
    - With timezone offset: 2026-02-12T10:30:00+09:00
    - Without timezone: 2026-02-12T10:30:00

    Offsets are normalized to UTC and the result is naive for consistent
    comparison.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if parsed.tzinfo is not None:
            parsed = parsed - parsed.utcoffset()
    except (ValueError, OverflowError):
        # OverflowError: offset pushes the date outside datetime.min/max
        return None
    return parsed.replace(tzinfo=None)


def seconds_between(start: datetime | None, end: datetime | None) -> float | None:
    """Return elapsed seconds from start to end, or None when either is missing."""
    if start is None or end is None:
        return None
    return max(0.0, (end - start).total_seconds())
