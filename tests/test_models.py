"""
Test Suite: Record Models

Coercion rules for raw rows delivered by the data-fetch layer.
"""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from mindtrace.core.models import (
    Memory,
    ProgressEntry,
    ProjectBrief,
    TaskItem,
    ThinkingSequence,
    Thought,
    ThoughtType,
    TimelineFilters,
)
from mindtrace.core.models.activity import ALL_ACTIVITY_TYPES, ActivityType, DateWindow
from mindtrace.graph.summary import summarize_sequences
from mindtrace.utils.text import parse_timestamp, truncate


class TestThought:
    def test_minimal_thought(self):
        t = Thought(id=7, thought_number=1)
        assert t.key == "7"
        assert t.content == ""
        assert t.thought_type is ThoughtType.UNKNOWN
        assert t.is_revision is False

    @pytest.mark.parametrize("raw,expected", [
        ("analysis", ThoughtType.ANALYSIS),
        (" Decision ", ThoughtType.DECISION),
        ("brainstorm", ThoughtType.UNKNOWN),
        (None, ThoughtType.UNKNOWN),
        (3, ThoughtType.UNKNOWN),
    ])
    def test_thought_type_coercion(self, raw, expected):
        assert Thought(id=1, thought_number=1, thought_type=raw).thought_type is expected

    @pytest.mark.parametrize("number", [0, -1])
    def test_thought_number_must_be_positive(self, number):
        with pytest.raises(ValidationError):
            Thought(id=1, thought_number=number)

    def test_confidence_range(self):
        with pytest.raises(ValidationError):
            Thought(id=1, thought_number=1, confidence=1.5)

    def test_null_columns(self):
        t = Thought.model_validate(
            {"id": "a", "thought_number": 2, "content": None, "is_revision": None, "extra_col": 1}
        )
        assert t.content == ""
        assert t.is_revision is False


class TestThinkingSequence:
    def test_null_thoughts(self):
        seq = ThinkingSequence(id=1, created_at="2026-10-01T00:00:00Z", thoughts=None)
        assert seq.thought_count == 0
        assert seq.created_at.tzinfo is not None

    def test_malformed_thoughts_are_dropped_not_the_sequence(self):
        seq = ThinkingSequence(
            id=1,
            created_at="2026-10-01T00:00:00Z",
            thoughts=[
                {"id": 1, "thought_number": 1},
                {"id": 2, "thought_number": 2, "confidence": 1.5},
                Thought(id=3, thought_number=3),
            ],
        )
        assert [t.key for t in seq.thoughts] == ["1", "3"]

    def test_created_at_required(self):
        with pytest.raises(ValidationError):
            ThinkingSequence(id=1)

    def test_summary(self):
        sequences = [
            ThinkingSequence(id=1, created_at="2026-10-01T00:00:00Z", is_complete=True,
                             thoughts=[{"id": 1, "thought_number": 1}]),
            ThinkingSequence(id=2, created_at="2026-10-02T00:00:00Z",
                             thoughts=[{"id": 1, "thought_number": 1}, {"id": 2, "thought_number": 2}]),
        ]
        summary = summarize_sequences(sequences)
        assert (summary.total, summary.completed, summary.in_progress, summary.total_thoughts) == (2, 1, 1, 3)
        assert summarize_sequences(None).total == 0


class TestRecords:
    def test_memory_defaults(self):
        memory = Memory(id=1, content=None, memory_type=None, created_at="2026-10-01T00:00:00")
        assert memory.content == ""
        assert memory.memory_type == "general"
        assert memory.created_at == datetime(2026, 10, 1, tzinfo=UTC)

    def test_progress_nulls(self):
        entry = ProgressEntry(id=1, version=None, milestone_type=None, blockers=None,
                              created_at="2026-10-01T00:00:00Z")
        assert entry.version == ""
        assert entry.milestone_type == "feature"
        assert entry.blockers == []

    def test_progress_completion_range(self):
        with pytest.raises(ValidationError):
            ProgressEntry(id=1, completion_percentage=120, created_at="2026-10-01T00:00:00Z")

    def test_task_needs_a_timestamp(self):
        with pytest.raises(ValidationError):
            TaskItem(id=1, title="x")

    def test_task_last_changed_at(self):
        created = "2026-10-01T00:00:00Z"
        assert TaskItem(id=1, created_at=created).last_changed_at == datetime(2026, 10, 1, tzinfo=UTC)
        assert TaskItem(id=1, created_at=created, updated_at="2026-10-05T00:00:00Z").last_changed_at == \
            datetime(2026, 10, 5, tzinfo=UTC)
        assert TaskItem(id=1, updated_at="", created_at=created).updated_at is None

    def test_brief_defaults(self):
        brief = ProjectBrief(id=1, created_at="2026-10-01T00:00:00Z", auto_tasks_created=None)
        assert brief.auto_tasks_created is False
        assert brief.sections == []

    def test_records_are_immutable(self):
        memory = Memory(id=1, created_at="2026-10-01T00:00:00Z")
        with pytest.raises(ValidationError):
            memory.content = "changed"


class TestTimelineFilters:
    def test_defaults_select_everything(self):
        filters = TimelineFilters()
        assert filters.types == ALL_ACTIVITY_TYPES
        assert filters.search_query == ""
        assert filters.date_window is DateWindow.ALL
        assert not filters.has_query

    def test_of_accepts_strings(self):
        filters = TimelineFilters.of(types=["task"], search_query=None, date_window="month")
        assert filters.types == frozenset({ActivityType.TASK})
        assert filters.search_query == ""
        assert filters.date_window is DateWindow.MONTH

    def test_unknown_type_is_rejected(self):
        with pytest.raises(ValueError):
            TimelineFilters.of(types=["email"])


class TestTextHelpers:
    def test_truncate(self):
        assert truncate(None, 5) == ""
        assert truncate("", 5) == ""
        assert truncate("abcde", 5) == "abcde"
        assert truncate("abcdef", 5) == "abcde..."

    @pytest.mark.parametrize("value,expected", [
        ("2026-10-19T12:00:00Z", datetime(2026, 10, 19, 12, tzinfo=UTC)),
        ("2026-10-19T12:00:00", datetime(2026, 10, 19, 12, tzinfo=UTC)),
        ("2026-10-19T14:00:00+02:00", datetime(2026, 10, 19, 12, tzinfo=UTC)),
        (datetime(2026, 10, 19, 7, tzinfo=timezone(timedelta(hours=-5))), datetime(2026, 10, 19, 12, tzinfo=UTC)),
    ])
    def test_parse_timestamp(self, value, expected):
        parsed = parse_timestamp(value)
        assert parsed == expected
        assert parsed.utcoffset() == timedelta(0)

    @pytest.mark.parametrize("value", [None, "", "   ", "not a date", 12345])
    def test_parse_timestamp_rejects(self, value):
        with pytest.raises(ValueError):
            parse_timestamp(value)
