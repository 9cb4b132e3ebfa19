"""
Project record models consumed by the timeline.

These mirror the rows the data-fetch layer hands over for one project:
memories, progress milestones, tasks and project briefs. Thinking
sequences live in ``thought.py``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mindtrace.utils.text import parse_timestamp

RecordId = Union[int, str]


def _parse_optional_timestamp(value: Any) -> Any:
    if value is None or value == "":
        return None
    return parse_timestamp(value)


class _Record(BaseModel):
    """Shared config: immutable, tolerant of extra columns."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class Memory(_Record):
    """A stored project memory."""

    id: RecordId
    content: str = ""
    memory_type: str = "general"
    importance_score: Optional[float] = None
    tags: list[str] = Field(default_factory=list)
    created_at: datetime

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_timestamps(cls, value: Any) -> Any:
        return _parse_optional_timestamp(value)

    @field_validator("content", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("memory_type", mode="before")
    @classmethod
    def _none_to_general(cls, value: Any) -> Any:
        return "general" if not value else value

    @field_validator("tags", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value


class ProgressEntry(_Record):
    """A versioned progress milestone.

    ``milestone_type`` is one of feature, bugfix, deployment, planning,
    testing, documentation, refactor, optimization or release, but is kept
    as a plain string so unknown kinds from newer backends still load.
    """

    id: RecordId
    version: str = ""
    progress_description: str = ""
    milestone_type: str = "feature"
    completion_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    blockers: list[str] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    created_at: datetime

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_timestamps(cls, value: Any) -> Any:
        return _parse_optional_timestamp(value)

    @field_validator("blockers", "next_steps", "tags", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("version", "progress_description", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else str(value)

    @field_validator("milestone_type", mode="before")
    @classmethod
    def _none_to_feature(cls, value: Any) -> Any:
        return "feature" if value is None else value


class TaskItem(_Record):
    """A project task.

    Either timestamp may be missing from older rows, but not both.
    """

    id: RecordId
    title: str = ""
    description: Optional[str] = None
    category: Optional[str] = None
    status: str = "pending"
    priority: Any = None
    estimated_hours: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _parse_timestamps(cls, value: Any) -> Any:
        return _parse_optional_timestamp(value)

    @field_validator("status", mode="before")
    @classmethod
    def _none_to_pending(cls, value: Any) -> Any:
        return "pending" if value is None else value

    @field_validator("title", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @model_validator(mode="after")
    def _require_timestamp(self) -> "TaskItem":
        if self.created_at is None and self.updated_at is None:
            raise ValueError("task has neither updated_at nor created_at")
        return self

    @property
    def last_changed_at(self) -> datetime:
        """When the task last changed state (falls back to creation)."""
        return self.updated_at or self.created_at


class ProjectBrief(_Record):
    """A generated project brief document."""

    id: RecordId
    content: str = ""
    sections: list[str] = Field(default_factory=list)
    auto_tasks_created: bool = False
    technical_analysis_included: bool = False
    created_at: datetime

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_timestamps(cls, value: Any) -> Any:
        return _parse_optional_timestamp(value)

    @field_validator("sections", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("content", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("auto_tasks_created", "technical_analysis_included", mode="before")
    @classmethod
    def _none_to_false(cls, value: Any) -> Any:
        return False if value is None else value
