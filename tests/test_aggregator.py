"""
Test Suite: Activity Aggregator

Normalization of the five project record kinds into Activities.
"""

from datetime import timedelta

import pytest

from conftest import NOW, ago
from mindtrace.core.models.activity import ActivityColor, ActivityType
from mindtrace.core.models.records import TaskItem
from mindtrace.timeline.aggregator import (
    ActivityAggregator,
    aggregate_activities,
    progress_color,
    task_color,
    task_to_activity,
    thinking_color,
)


@pytest.fixture
def activities(memories, progress, tasks, thinking, briefs):
    return aggregate_activities(
        memories=memories,
        progress=progress,
        tasks=tasks,
        thinking=thinking,
        briefs=briefs,
    )


def test_all_sources_missing_gives_empty_list():
    assert aggregate_activities() == []
    assert aggregate_activities([], [], [], [], []) == []


def test_one_activity_per_record_in_source_order(activities):
    assert [a.id for a in activities] == [
        "memory-1", "memory-2",
        "progress-10", "progress-11",
        "task-20", "task-21",
        "thinking-30",
        "brief-40",
    ]


def test_missing_sources_do_not_fail_the_pass(memories, briefs):
    result = aggregate_activities(memories=memories, progress=None, briefs=briefs)
    assert [a.type for a in result] == [ActivityType.MEMORY, ActivityType.MEMORY, ActivityType.BRIEF]


def test_titles(activities):
    titles = {a.id: a.title for a in activities}
    assert titles["memory-1"] == "Memory: decision"
    assert titles["progress-10"] == "Progress: 1.2.0"
    assert titles["task-20"] == "Task: Implement OAuth"
    assert titles["thinking-30"] == "Thinking: Service boundaries"
    assert titles["brief-40"] == "Project Brief"


def test_long_descriptions_are_truncated(activities):
    by_id = {a.id: a for a in activities}

    memory = by_id["memory-2"]
    assert memory.description == "x" * 150 + "..."
    assert memory.full_content == "x" * 400

    brief = by_id["brief-40"]
    assert len(brief.description) == 153
    assert brief.full_content.startswith("Brief: ")


def test_description_at_limit_is_not_cut():
    result = aggregate_activities(memories=[{"id": 1, "content": "y" * 150, "created_at": ago(days=1)}])
    assert result[0].description == "y" * 150


def test_custom_description_limit(memories):
    result = ActivityAggregator(description_limit=10).aggregate(memories=memories)
    assert result[0].description == "Chose Post..."


def test_full_content_only_for_memories_and_briefs(activities):
    with_full = {a.type for a in activities if a.full_content is not None}
    assert with_full == {ActivityType.MEMORY, ActivityType.BRIEF}


def test_task_uses_last_state_change(activities):
    task = next(a for a in activities if a.id == "task-20")
    assert task.timestamp == NOW - timedelta(minutes=30)
    assert task.status == "completed"
    assert task.category == "feature"


def test_task_falls_back_to_created_at():
    task = TaskItem(id=1, title="Old row", created_at=ago(days=4))
    activity = task_to_activity(task)
    assert activity.timestamp == NOW - timedelta(days=4)


def test_task_without_description(activities):
    task = next(a for a in activities if a.id == "task-21")
    assert task.description == "No description"


def test_thinking_summarizes_the_sequence(activities):
    thinking = [a for a in activities if a.type is ActivityType.THINKING]
    assert len(thinking) == 1
    assert thinking[0].description == "Split the monolith"
    assert thinking[0].metadata == {
        "is_complete": True,
        "goal": "Split the monolith",
        "thought_count": 3,
    }


def test_thinking_description_fallback():
    result = aggregate_activities(thinking=[{"id": 1, "created_at": ago(hours=2)}])
    assert result[0].description == "Reasoning sequence"
    assert result[0].color is ActivityColor.PRIMARY


def test_colors(activities):
    colors = {a.id: a.color for a in activities}
    assert colors["memory-1"] is ActivityColor.PRIMARY
    assert colors["progress-10"] is ActivityColor.SUCCESS
    assert colors["progress-11"] is ActivityColor.ERROR
    assert colors["task-20"] is ActivityColor.SUCCESS
    assert colors["task-21"] is ActivityColor.ERROR
    assert colors["thinking-30"] is ActivityColor.SUCCESS
    assert colors["brief-40"] is ActivityColor.SECONDARY


@pytest.mark.parametrize("milestone,expected", [
    ("release", ActivityColor.SUCCESS),
    ("bugfix", ActivityColor.ERROR),
    ("feature", ActivityColor.WARNING),
    ("deployment", ActivityColor.WARNING),
])
def test_progress_color(milestone, expected):
    assert progress_color(milestone) is expected


@pytest.mark.parametrize("status,expected", [
    ("completed", ActivityColor.SUCCESS),
    ("blocked", ActivityColor.ERROR),
    ("in_progress", ActivityColor.INFO),
    ("pending", ActivityColor.INFO),
])
def test_task_color(status, expected):
    assert task_color(status) is expected


def test_thinking_color():
    assert thinking_color(True) is ActivityColor.SUCCESS
    assert thinking_color(False) is ActivityColor.PRIMARY


def test_metadata_per_type(activities):
    by_id = {a.id: a for a in activities}
    assert by_id["memory-1"].metadata == {"memory_type": "decision", "importance": 0.9}
    assert by_id["progress-10"].metadata["next_steps"] == ["Write migration guide"]
    assert by_id["task-20"].metadata["estimated_hours"] == 8
    assert by_id["brief-40"].metadata["sections"] == ["overview", "architecture"]


def test_malformed_records_are_skipped(memories):
    rows = memories + [{"id": 3, "content": "no timestamp"}, {"id": 4, "created_at": "yesterday"}]
    result = aggregate_activities(memories=rows, tasks=[{"id": 9, "title": "No dates"}])
    assert [a.id for a in result] == ["memory-1", "memory-2"]


def test_to_dict_uses_camel_case_full_content(activities):
    data = activities[0].to_dict()
    assert data["fullContent"] == "Chose PostgreSQL with pgvector for embeddings"
    assert data["type"] == "memory"
    assert "status" not in data

    progress_data = activities[2].to_dict()
    assert "fullContent" not in progress_data


def test_malformed_thought_does_not_drop_its_sequence():
    sequence = {
        "id": 7,
        "sequence_name": "Caching",
        "created_at": ago(hours=3),
        "thoughts": [
            {"id": 1, "thought_number": 1},
            {"id": 2, "thought_number": 2, "confidence": 1.5},
            {"id": 3, "thought_number": 0},
            {"thought_number": 4},
            {"id": 5, "thought_number": 5},
        ],
    }
    result = aggregate_activities(thinking=[sequence])

    assert [a.id for a in result] == ["thinking-7"]
    assert result[0].metadata["thought_count"] == 2
