"""Utility functions for working with dates and times."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

__all__ = [
    "get_current_timestamp",
    "parse_timestamp",
    "format_timestamp",
]


def get_current_timestamp() -> datetime:
    """Return the current UTC datetime with micro-second precision.

    Payloads store the ISO-8601 rendering produced by ``format_timestamp``;
    ``parse_timestamp`` turns it back into an aware datetime.
    """
    return datetime.now(tz=timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse *value* into an aware UTC datetime, or ``None`` if impossible.

    Accepts datetimes, ISO-8601 strings (including a trailing ``Z``) and
    epoch milliseconds. Naive values are assumed to be UTC.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Render *value* as ISO-8601 in UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()
