"""
Text and timestamp helpers shared by the graph and timeline code.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

ELLIPSIS = "..."


def truncate(text: str | None, limit: int) -> str:
    """Cut ``text`` to ``limit`` characters, appending ``...`` when cut."""
    if not text:
        return ""
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


def parse_timestamp(value: Any) -> datetime:
    """Coerce an ISO string or datetime into an aware UTC datetime.

    Naive values are taken to be UTC. A trailing ``Z`` is accepted.

    Raises:
        ValueError: If the value is empty or not a recognisable timestamp
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    else:
        raise ValueError(f"Invalid timestamp: {value!r}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def utc_now() -> datetime:
    return datetime.now(UTC)
