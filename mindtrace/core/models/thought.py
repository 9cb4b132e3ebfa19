"""
Thought and ThinkingSequence models.

A ThinkingSequence is the record produced by a sequential-reasoning
session; it owns an ordered list of Thoughts. Thoughts may point back at
earlier thoughts either as a branch (continuing from a thought other than
the immediate predecessor) or as a revision (superseding it).
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from mindtrace.utils.logging import get_logger
from mindtrace.utils.text import parse_timestamp

logger = get_logger("core.thought")

ThoughtId = Union[int, str]


# ============================================================================
# Enums
# ============================================================================


class ThoughtType(str, Enum):
    """Vocabulary of reasoning steps."""
    REASONING = "reasoning"
    ANALYSIS = "analysis"
    HYPOTHESIS = "hypothesis"
    DECISION = "decision"
    ACTION = "action"
    REFLECTION = "reflection"
    CONCLUSION = "conclusion"
    QUESTION = "question"
    OBSERVATION = "observation"
    ASSUMPTION = "assumption"
    UNKNOWN = "unknown"

    @classmethod
    def coerce(cls, value: Any) -> "ThoughtType":
        """Map any raw value onto the vocabulary, falling back to UNKNOWN."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return cls.UNKNOWN
        return cls.UNKNOWN


# ============================================================================
# Models
# ============================================================================


class Thought(BaseModel):
    """One step of a reasoning sequence.

    Attributes:
        id: Identifier, unique within the owning sequence
        thought_number: Canonical 1-based position in the sequence
        content: The text of the thought
        thought_type: Classification of the step
        confidence: Optional confidence in [0, 1]
        is_revision: Whether this thought revises an earlier one
        revises_thought_id: Thought this one supersedes
        branch_from_thought_id: Thought this one branches from
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: ThoughtId
    thought_number: int = Field(gt=0)
    content: str = ""
    thought_type: ThoughtType = ThoughtType.UNKNOWN
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    is_revision: bool = False
    revises_thought_id: Optional[ThoughtId] = None
    branch_from_thought_id: Optional[ThoughtId] = None

    @field_validator("thought_type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> ThoughtType:
        return ThoughtType.coerce(value)

    @field_validator("content", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("is_revision", mode="before")
    @classmethod
    def _none_to_false(cls, value: Any) -> Any:
        return False if value is None else value

    @property
    def key(self) -> str:
        """String form of the id, used for graph node identity."""
        return str(self.id)

    def __repr__(self) -> str:
        return f"<Thought id={self.id} #{self.thought_number} type={self.thought_type.value}>"


def coerce_thoughts(thoughts: Iterable[Thought | Mapping[str, Any]] | None) -> list[Thought]:
    """Validate raw thought rows one by one, skipping the malformed ones."""
    result: list[Thought] = []
    for raw in thoughts or ():
        if isinstance(raw, Thought):
            result.append(raw)
            continue
        try:
            result.append(Thought.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"Skipping malformed thought {raw!r}: {e.error_count()} error(s)")
    return result


class ThinkingSequence(BaseModel):
    """A reasoning session and the thoughts it owns."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: ThoughtId
    sequence_name: str = ""
    description: Optional[str] = None
    goal: Optional[str] = None
    is_complete: bool = False
    created_at: datetime
    updated_at: Optional[datetime] = None
    thoughts: list[Thought] = Field(default_factory=list)

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _parse_timestamps(cls, value: Any) -> Any:
        if value is None:
            return None
        return parse_timestamp(value)

    @field_validator("thoughts", mode="before")
    @classmethod
    def _drop_malformed_thoughts(cls, value: Any) -> Any:
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            return value
        return coerce_thoughts(value)

    @field_validator("is_complete", mode="before")
    @classmethod
    def _none_to_false(cls, value: Any) -> Any:
        return False if value is None else value

    @property
    def thought_count(self) -> int:
        return len(self.thoughts)
