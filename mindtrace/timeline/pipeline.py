"""
Timeline Filter/Sort Pipeline.

Stages run in a fixed order:

1. type set (an empty set shows nothing)
2. free-text query on title or description (skipped when blank)
3. date window relative to ``now``
4. newest-first sort, stable so equal timestamps keep aggregator order

Each stage only removes items and the sort is stable, so running the
pipeline on its own output is a no-op.
"""

from __future__ import annotations

import calendar
from collections import Counter
from datetime import datetime, timedelta
from typing import Iterable

from mindtrace.core.models.activity import (
    ALL_ACTIVITY_TYPES,
    Activity,
    ActivityType,
    DateWindow,
    TimelineFilters,
)
from mindtrace.utils.logging import get_logger
from mindtrace.utils.text import parse_timestamp, utc_now

logger = get_logger("timeline.pipeline")


# ============================================================================
# Date arithmetic
# ============================================================================


def subtract_months(moment: datetime, months: int = 1) -> datetime:
    """Step back whole calendar months, clamping the day to the month's end."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def window_cutoff(window: DateWindow, now: datetime) -> datetime | None:
    """Earliest timestamp a window keeps; None for ``all``."""
    if window is DateWindow.WEEK:
        return now - timedelta(days=7)
    if window is DateWindow.MONTH:
        return subtract_months(now, 1)
    return None


# ============================================================================
# Stages
# ============================================================================


def filter_by_types(activities: Iterable[Activity], types: Iterable[ActivityType]) -> list[Activity]:
    selected = frozenset(types)
    return [a for a in activities if a.type in selected]


def filter_by_query(activities: Iterable[Activity], query: str) -> list[Activity]:
    if not query or not query.strip():
        return list(activities)
    needle = query.lower()
    return [
        a for a in activities
        if needle in a.title.lower() or needle in a.description.lower()
    ]


def filter_by_window(
    activities: Iterable[Activity],
    window: DateWindow,
    now: datetime,
) -> list[Activity]:
    cutoff = window_cutoff(window, now)
    if cutoff is None:
        return list(activities)
    return [a for a in activities if a.timestamp >= cutoff]


def sort_newest_first(activities: Iterable[Activity]) -> list[Activity]:
    # sorted() is stable, so reverse=True keeps equal timestamps in input order
    return sorted(activities, key=lambda a: a.timestamp, reverse=True)


# ============================================================================
# Pipeline
# ============================================================================


class TimelinePipeline:
    """Applies TimelineFilters to an activity list.

    Usage:
        pipeline = TimelinePipeline()
        feed = pipeline.run(activities, TimelineFilters.of(["task"], "auth", "week"))
    """

    def run(
        self,
        activities: Iterable[Activity] | None,
        filters: TimelineFilters | None = None,
        now: datetime | str | None = None,
    ) -> list[Activity]:
        filters = filters or TimelineFilters()
        now = parse_timestamp(now) if now is not None else utc_now()
        items = list(activities or ())
        total = len(items)

        if not filters.types:
            logger.debug("Empty type selection; timeline is empty")
            return []

        items = filter_by_types(items, filters.types)
        items = filter_by_query(items, filters.search_query)
        items = filter_by_window(items, filters.date_window, now)
        items = sort_newest_first(items)

        logger.debug(
            f"Timeline: {len(items)} of {total} activities "
            f"(types={len(filters.types)}, query={filters.search_query!r}, window={filters.date_window.value})"
        )
        return items


def apply_timeline_filters(
    activities: Iterable[Activity] | None,
    filters: TimelineFilters | None = None,
    now: datetime | str | None = None,
) -> list[Activity]:
    """Convenience wrapper around ``TimelinePipeline.run``."""
    return TimelinePipeline().run(activities, filters, now)


# ============================================================================
# Filter-state helpers
# ============================================================================


def toggle_type(filters: TimelineFilters, activity_type: ActivityType | str) -> TimelineFilters:
    """Return new filters with ``activity_type`` added or removed."""
    activity_type = ActivityType(activity_type)
    types = set(filters.types)
    if activity_type in types:
        types.discard(activity_type)
    else:
        types.add(activity_type)
    return filters.model_copy(update={"types": frozenset(types)})


def is_filtered(filters: TimelineFilters) -> bool:
    """True when the feed may hide something: a query or a partial type set."""
    return filters.has_query or len(filters.types) < len(ALL_ACTIVITY_TYPES)


def count_by_type(activities: Iterable[Activity]) -> dict[ActivityType, int]:
    counts = Counter(a.type for a in activities)
    return {t: counts.get(t, 0) for t in ActivityType}
