"""Human-readable recency labels for timeline entries."""

from __future__ import annotations

from datetime import datetime, timedelta

from mindtrace.utils.text import parse_timestamp, utc_now

_HOUR = timedelta(hours=1)
_DAY = timedelta(days=1)
_WEEK = timedelta(days=7)


def format_absolute(timestamp: datetime | str) -> str:
    """Absolute UTC date, e.g. ``Oct 9, 2026, 02:05 PM``."""
    dt = parse_timestamp(timestamp)
    return f"{dt:%b} {dt.day}, {dt.year}, {dt:%I:%M %p}"


def format_relative_time(timestamp: datetime | str, now: datetime | str | None = None) -> str:
    """Label a timestamp relative to ``now``.

    Under an hour is "Just now", under a day "<N> hours ago", under a week
    "<N> days ago" (both floored), anything older an absolute date. Future
    timestamps are measured by absolute distance.
    """
    moment = parse_timestamp(timestamp)
    reference = parse_timestamp(now) if now is not None else utc_now()
    diff = abs(reference - moment)

    if diff < _HOUR:
        return "Just now"
    if diff < _DAY:
        return f"{diff // _HOUR} hours ago"
    if diff < _WEEK:
        return f"{diff // _DAY} days ago"
    return format_absolute(moment)
