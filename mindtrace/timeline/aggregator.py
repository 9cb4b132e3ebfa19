"""
Activity Aggregator.

Normalizes the five project record kinds into Activities. Each source has
its own mapping function; the aggregator coerces raw rows into models,
maps them, and concatenates the results in a fixed source order
(memory, progress, task, thinking, brief), each in input order.

A missing collection (``None``, e.g. because its fetch failed upstream)
is treated as empty. A row that cannot be coerced is skipped with a
warning. Neither ever fails the pass.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from mindtrace.core.models.activity import Activity, ActivityColor, ActivityType
from mindtrace.core.models.records import Memory, ProgressEntry, ProjectBrief, TaskItem
from mindtrace.core.models.thought import ThinkingSequence
from mindtrace.utils.logging import get_logger, log_operation
from mindtrace.utils.text import truncate

logger = get_logger("timeline.aggregator")

DEFAULT_DESCRIPTION_LIMIT = 150

M = TypeVar("M", bound=BaseModel)


# ============================================================================
# Colour rules
# ============================================================================


def progress_color(milestone_type: str) -> ActivityColor:
    if milestone_type == "release":
        return ActivityColor.SUCCESS
    if milestone_type == "bugfix":
        return ActivityColor.ERROR
    return ActivityColor.WARNING


def task_color(status: str) -> ActivityColor:
    if status == "completed":
        return ActivityColor.SUCCESS
    if status == "blocked":
        return ActivityColor.ERROR
    return ActivityColor.INFO


def thinking_color(is_complete: bool) -> ActivityColor:
    return ActivityColor.SUCCESS if is_complete else ActivityColor.PRIMARY


# ============================================================================
# Per-source mapping
# ============================================================================


def memory_to_activity(memory: Memory, limit: int = DEFAULT_DESCRIPTION_LIMIT) -> Activity:
    return Activity(
        id=f"memory-{memory.id}",
        timestamp=memory.created_at,
        type=ActivityType.MEMORY,
        title=f"Memory: {memory.memory_type}",
        description=truncate(memory.content, limit),
        full_content=memory.content,
        metadata={
            "memory_type": memory.memory_type,
            "importance": memory.importance_score,
        },
        category=memory.memory_type,
        color=ActivityColor.PRIMARY,
    )


def progress_to_activity(entry: ProgressEntry, limit: int = DEFAULT_DESCRIPTION_LIMIT) -> Activity:
    return Activity(
        id=f"progress-{entry.id}",
        timestamp=entry.created_at,
        type=ActivityType.PROGRESS,
        title=f"Progress: {entry.version}",
        description=truncate(entry.progress_description, limit),
        metadata={
            "version": entry.version,
            "milestone_type": entry.milestone_type,
            "completion_percentage": entry.completion_percentage,
            "blockers": list(entry.blockers),
            "next_steps": list(entry.next_steps),
        },
        category=entry.milestone_type,
        color=progress_color(entry.milestone_type),
    )


def task_to_activity(task: TaskItem, limit: int = DEFAULT_DESCRIPTION_LIMIT) -> Activity:
    """Tasks are placed by their last state change, not their creation."""
    return Activity(
        id=f"task-{task.id}",
        timestamp=task.last_changed_at,
        type=ActivityType.TASK,
        title=f"Task: {task.title}",
        description=truncate(task.description, limit) or "No description",
        metadata={
            "category": task.category,
            "status": task.status,
            "priority": task.priority,
            "estimated_hours": task.estimated_hours,
        },
        category=task.category,
        status=task.status,
        color=task_color(task.status),
    )


def thinking_to_activity(sequence: ThinkingSequence, limit: int = DEFAULT_DESCRIPTION_LIMIT) -> Activity:
    summary = sequence.description or sequence.goal or "Reasoning sequence"
    return Activity(
        id=f"thinking-{sequence.id}",
        timestamp=sequence.created_at,
        type=ActivityType.THINKING,
        title=f"Thinking: {sequence.sequence_name}",
        description=truncate(summary, limit),
        metadata={
            "is_complete": sequence.is_complete,
            "goal": sequence.goal,
            "thought_count": sequence.thought_count,
        },
        color=thinking_color(sequence.is_complete),
    )


def brief_to_activity(brief: ProjectBrief, limit: int = DEFAULT_DESCRIPTION_LIMIT) -> Activity:
    return Activity(
        id=f"brief-{brief.id}",
        timestamp=brief.created_at,
        type=ActivityType.BRIEF,
        title="Project Brief",
        description=truncate(brief.content, limit),
        full_content=brief.content,
        metadata={
            "sections": list(brief.sections),
            "auto_tasks_created": brief.auto_tasks_created,
            "technical_analysis_included": brief.technical_analysis_included,
        },
        color=ActivityColor.SECONDARY,
    )


# ============================================================================
# Aggregator
# ============================================================================


RawRecords = Iterable[BaseModel | Mapping[str, Any]] | None


def coerce_records(records: RawRecords, model: type[M], source: str) -> list[M]:
    """Validate raw rows into ``model`` instances, skipping bad rows."""
    result: list[M] = []
    for raw in records or ():
        if isinstance(raw, model):
            result.append(raw)
            continue
        try:
            data = raw.model_dump() if isinstance(raw, BaseModel) else raw
            result.append(model.model_validate(data))
        except ValidationError as e:
            row_id = raw.get("id") if isinstance(raw, Mapping) else getattr(raw, "id", None)
            logger.warning(f"Skipping {source} record {row_id!r}: {e.error_count()} validation error(s)")
    return result


class ActivityAggregator:
    """Merges a project's five record collections into one activity list.

    Usage:
        aggregator = ActivityAggregator()
        activities = aggregator.aggregate(memories=rows, tasks=None)
    """

    def __init__(self, description_limit: int = DEFAULT_DESCRIPTION_LIMIT):
        self.description_limit = description_limit

    def aggregate(
        self,
        memories: RawRecords = None,
        progress: RawRecords = None,
        tasks: RawRecords = None,
        thinking: RawRecords = None,
        briefs: RawRecords = None,
    ) -> list[Activity]:
        sources: list[tuple[str, RawRecords, type[BaseModel], Callable[..., Activity]]] = [
            ("memory", memories, Memory, memory_to_activity),
            ("progress", progress, ProgressEntry, progress_to_activity),
            ("task", tasks, TaskItem, task_to_activity),
            ("thinking", thinking, ThinkingSequence, thinking_to_activity),
            ("brief", briefs, ProjectBrief, brief_to_activity),
        ]

        activities: list[Activity] = []
        counts: dict[str, int] = {}
        for source, records, model, mapper in sources:
            if records is None:
                logger.info(f"No {source} collection supplied; treating as empty")
            mapped = [mapper(r, self.description_limit) for r in coerce_records(records, model, source)]
            counts[source] = len(mapped)
            activities.extend(mapped)

        log_operation(logger, "Aggregated activities", counts)
        return activities


def aggregate_activities(
    memories: RawRecords = None,
    progress: RawRecords = None,
    tasks: RawRecords = None,
    thinking: RawRecords = None,
    briefs: RawRecords = None,
    description_limit: int = DEFAULT_DESCRIPTION_LIMIT,
) -> list[Activity]:
    """Convenience wrapper around ``ActivityAggregator.aggregate``."""
    return ActivityAggregator(description_limit).aggregate(
        memories=memories,
        progress=progress,
        tasks=tasks,
        thinking=thinking,
        briefs=briefs,
    )
