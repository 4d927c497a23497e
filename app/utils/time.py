"""Utility functions for time handling.

All stored timestamps are UTC and timezone-aware. Persist UTC timestamps as
ISO-8601 strings with timezone offsets (e.g., "+00:00") via iso_now().

Report timestamps are free-form display strings. Older records carry the
browser's ``toLocaleString()`` output (e.g. "10/19/2026, 9:05:12 AM"), so
parse_report_timestamp() accepts those formats as well.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

# en-US locale formats written by earlier clients
_LOCALE_FORMATS = (
    "%m/%d/%Y, %I:%M:%S %p",
    "%m/%d/%Y, %H:%M:%S",
    "%m/%d/%Y %I:%M:%S %p",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d",
)


def utc_now() -> datetime:
    """Return current UTC time as an aware datetime."""
    return datetime.now(timezone.utc)


def iso_now(*, timespec: str | None = None) -> str:
    """Return current UTC time as an ISO8601 string (timezone-aware)."""
    now = utc_now()
    if timespec:
        return now.isoformat(timespec=timespec)
    return now.isoformat()


def epoch_millis(dt: datetime | None = None) -> int:
    """Milliseconds since the epoch for *dt* (default: now)."""
    return int((dt or utc_now()).timestamp() * 1000)


def coerce_datetime(value: Any) -> datetime | None:
    """
    Coerce value to datetime, returning None on failure.

    Args:
        value: String or datetime to coerce

    Returns:
        Datetime in timezone.utc or None if invalid
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw.replace("Z", "+00:00")
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    else:
        parsed = parsed.replace(tzinfo=timezone.utc)

    return parsed


def parse_report_timestamp(value: Any) -> datetime | None:
    """Parse an ISO or en-US locale timestamp string; None when unparseable."""
    parsed = coerce_datetime(value)
    if parsed is not None or not isinstance(value, str):
        return parsed

    raw = " ".join(value.split())
    for fmt in _LOCALE_FORMATS:
        try:
            return datetime.strptime(raw, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    return None


def format_display_date(value: Any) -> str:
    """Render a timestamp as "Oct 19, 2026"; unparseable input is returned as-is."""
    parsed = parse_report_timestamp(value)
    if parsed is None:
        return "" if value is None else str(value)
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"
