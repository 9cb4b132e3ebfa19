"""Headline counts for a project's reasoning sequences."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from mindtrace.core.models.thought import ThinkingSequence


@dataclass(frozen=True)
class SequenceSummary:
    total: int = 0
    completed: int = 0
    in_progress: int = 0
    total_thoughts: int = 0


def summarize_sequences(sequences: Iterable[ThinkingSequence] | None) -> SequenceSummary:
    sequences = list(sequences or ())
    completed = sum(1 for s in sequences if s.is_complete)
    return SequenceSummary(
        total=len(sequences),
        completed=completed,
        in_progress=len(sequences) - completed,
        total_thoughts=sum(s.thought_count for s in sequences),
    )
