"""
Project timeline: activity aggregation, filtering and recency labels.
"""

from mindtrace.timeline.aggregator import ActivityAggregator, aggregate_activities
from mindtrace.timeline.formatting import format_absolute, format_relative_time
from mindtrace.timeline.pipeline import (
    TimelinePipeline,
    apply_timeline_filters,
    count_by_type,
    is_filtered,
    toggle_type,
)

__all__ = [
    "ActivityAggregator",
    "aggregate_activities",
    "format_absolute",
    "format_relative_time",
    "TimelinePipeline",
    "apply_timeline_filters",
    "count_by_type",
    "is_filtered",
    "toggle_type",
]
