"""Shared fixtures for the Mindtrace test suite."""

from datetime import UTC, datetime, timedelta

import pytest

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


def thought(id, number, **kwargs):
    """Raw thought row as the fetch layer delivers it."""
    return {"id": id, "thought_number": number, "content": f"Thought {number}", **kwargs}


def ago(**kwargs) -> str:
    return (NOW - timedelta(**kwargs)).isoformat()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def memories():
    return [
        {
            "id": 1,
            "content": "Chose PostgreSQL with pgvector for embeddings",
            "memory_type": "decision",
            "importance_score": 0.9,
            "created_at": ago(days=2),
        },
        {
            "id": 2,
            "content": "x" * 400,
            "memory_type": "code",
            "created_at": ago(days=40),
        },
    ]


@pytest.fixture
def progress():
    return [
        {
            "id": 10,
            "version": "1.2.0",
            "progress_description": "Released API v2 with GraphQL support",
            "milestone_type": "release",
            "completion_percentage": 80,
            "blockers": [],
            "next_steps": ["Write migration guide"],
            "created_at": ago(hours=5),
        },
        {
            "id": 11,
            "version": "1.2.1",
            "progress_description": "Fixed payment rounding bug",
            "milestone_type": "bugfix",
            "created_at": ago(days=10),
        },
    ]


@pytest.fixture
def tasks():
    return [
        {
            "id": 20,
            "title": "Implement OAuth",
            "description": "Add OAuth2 login flow",
            "category": "feature",
            "status": "completed",
            "priority": "high",
            "estimated_hours": 8,
            "created_at": ago(days=20),
            "updated_at": ago(minutes=30),
        },
        {
            "id": 21,
            "title": "Stripe sandbox",
            "category": "bug",
            "status": "blocked",
            "created_at": ago(days=3),
            "updated_at": ago(days=3),
        },
    ]


@pytest.fixture
def thinking():
    return [
        {
            "id": 30,
            "sequence_name": "Service boundaries",
            "goal": "Split the monolith",
            "is_complete": True,
            "created_at": ago(days=1),
            "thoughts": [thought(1, 1), thought(2, 2), thought(3, 3, branch_from_thought_id=1)],
        },
    ]


@pytest.fixture
def briefs():
    return [
        {
            "id": 40,
            "content": "Brief: " + "b" * 200,
            "sections": ["overview", "architecture"],
            "auto_tasks_created": True,
            "technical_analysis_included": False,
            "created_at": ago(days=6),
        },
    ]
