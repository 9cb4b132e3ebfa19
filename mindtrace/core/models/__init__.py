"""
Core Models - thoughts, project records, activities and filters.
"""

from mindtrace.core.models.thought import Thought, ThinkingSequence, ThoughtType
from mindtrace.core.models.records import Memory, ProgressEntry, ProjectBrief, TaskItem
from mindtrace.core.models.activity import (
    ALL_ACTIVITY_TYPES,
    Activity,
    ActivityColor,
    ActivityType,
    DateWindow,
    TimelineFilters,
)

__all__ = [
    "Thought",
    "ThinkingSequence",
    "ThoughtType",
    "Memory",
    "ProgressEntry",
    "ProjectBrief",
    "TaskItem",
    "ALL_ACTIVITY_TYPES",
    "Activity",
    "ActivityColor",
    "ActivityType",
    "DateWindow",
    "TimelineFilters",
]
