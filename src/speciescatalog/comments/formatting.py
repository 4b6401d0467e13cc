"""Human-friendly timestamps for comments."""

import math
from datetime import UTC, datetime

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY


def _ago(count: int, unit: str) -> str:
    suffix = "" if count == 1 else "s"
    return f"{count} {unit}{suffix} ago"


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def format_relative_time(timestamp: datetime, now: datetime | None = None) -> str:
    """Describe how long ago ``timestamp`` was, relative to ``now``.

    Under a week the result is relative ("just now", "5 minutes ago",
    "1 hour ago", "3 days ago"); from a week on it is an absolute date such as
    "Jan 5, 2024". All thresholds use whole elapsed seconds.
    """
    timestamp = _as_utc(timestamp)
    now = _as_utc(now) if now is not None else datetime.now(UTC)
    elapsed = math.floor((now - timestamp).total_seconds())

    if elapsed < MINUTE:
        return "just now"
    if elapsed < HOUR:
        return _ago(elapsed // MINUTE, "minute")
    if elapsed < DAY:
        return _ago(elapsed // HOUR, "hour")
    if elapsed < WEEK:
        return _ago(elapsed // DAY, "day")
    return f"{timestamp:%b} {timestamp.day}, {timestamp.year}"
