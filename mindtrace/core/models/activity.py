"""
Activity and TimelineFilters models.

An Activity is the single timeline-displayable shape every project record
is normalized into. The ``type`` discriminant says which source it came
from and which keys ``metadata`` carries:

- memory: memory_type, importance
- progress: version, milestone_type, completion_percentage, blockers, next_steps
- task: category, status, priority, estimated_hours
- thinking: is_complete, goal, thought_count
- brief: sections, auto_tasks_created, technical_analysis_included
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mindtrace.utils.text import parse_timestamp


# ============================================================================
# Enums
# ============================================================================


class ActivityType(str, Enum):
    """Source kind of an activity."""
    MEMORY = "memory"
    PROGRESS = "progress"
    TASK = "task"
    THINKING = "thinking"
    BRIEF = "brief"


class ActivityColor(str, Enum):
    """Presentation palette token."""
    PRIMARY = "primary"
    SECONDARY = "secondary"
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class DateWindow(str, Enum):
    """Relative time range applied before display."""
    ALL = "all"
    WEEK = "week"
    MONTH = "month"


ALL_ACTIVITY_TYPES: frozenset[ActivityType] = frozenset(ActivityType)


# ============================================================================
# Activity
# ============================================================================


class Activity(BaseModel):
    """Normalized timeline entry.

    Attributes:
        id: Source-prefixed identifier, e.g. ``memory-42``
        timestamp: Instant used for ordering (aware, UTC)
        type: Source kind
        title: Short heading
        description: Source-derived summary, truncated
        full_content: Untruncated text (memories and briefs only)
        metadata: Per-type key/value details
        category: Source-specific classifier
        status: Task status (tasks only)
        color: Palette token derived from type/status/category
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    timestamp: datetime
    type: ActivityType
    title: str
    description: str = ""
    full_content: Optional[str] = Field(default=None, alias="fullContent")
    metadata: dict[str, Any] = Field(default_factory=dict)
    category: Optional[str] = None
    status: Optional[str] = None
    color: ActivityColor = ActivityColor.PRIMARY

    @field_validator("timestamp", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any) -> datetime:
        return parse_timestamp(value)

    def __repr__(self) -> str:
        return f"<Activity id={self.id} type={self.type.value} at={self.timestamp.isoformat()}>"

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the rendering layer (camelCase ``fullContent``)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ============================================================================
# Filters
# ============================================================================


class TimelineFilters(BaseModel):
    """Filter state held by the UI.

    An empty ``types`` set means "show nothing", not "show everything".
    """

    model_config = ConfigDict(frozen=True)

    types: frozenset[ActivityType] = Field(default_factory=lambda: ALL_ACTIVITY_TYPES)
    search_query: str = ""
    date_window: DateWindow = DateWindow.ALL

    @field_validator("search_query", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def of(
        cls,
        types: Iterable[ActivityType | str] | None = None,
        search_query: str = "",
        date_window: DateWindow | str = DateWindow.ALL,
    ) -> "TimelineFilters":
        """Build filters from loose values; ``types=None`` selects all."""
        selected = ALL_ACTIVITY_TYPES if types is None else frozenset(ActivityType(t) for t in types)
        return cls(types=selected, search_query=search_query, date_window=DateWindow(date_window))

    @property
    def has_query(self) -> bool:
        return bool(self.search_query.strip())
