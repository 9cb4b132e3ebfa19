"""
Snapshot loading.

A snapshot is a JSON object holding one project's already-fetched record
collections under the keys ``memories``, ``progress``, ``tasks``,
``thinking`` and ``briefs``. Any key may be missing or null, which the
timeline treats as an empty (failed) source.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from mindtrace.core.errors import SnapshotError
from mindtrace.core.models.thought import ThinkingSequence
from mindtrace.utils.logging import get_logger

logger = get_logger("core.snapshot")

SNAPSHOT_KEYS = ("memories", "progress", "tasks", "thinking", "briefs")


@dataclass(frozen=True)
class ProjectSnapshot:
    """Raw record collections for one project; ``None`` marks a missing source."""

    memories: list[dict[str, Any]] | None = None
    progress: list[dict[str, Any]] | None = None
    tasks: list[dict[str, Any]] | None = None
    thinking: list[dict[str, Any]] | None = None
    briefs: list[dict[str, Any]] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProjectSnapshot":
        collections: dict[str, list[dict[str, Any]] | None] = {}
        for key in SNAPSHOT_KEYS:
            value = data.get(key)
            if value is not None and not isinstance(value, list):
                logger.warning(f"Snapshot key '{key}' is not a list; treating as missing")
                value = None
            collections[key] = value
        return cls(**collections)

    def collections(self) -> dict[str, list[dict[str, Any]] | None]:
        return {key: getattr(self, key) for key in SNAPSHOT_KEYS}

    def find_sequence(self, sequence_id: str) -> ThinkingSequence | None:
        """Return the thinking sequence whose id matches ``sequence_id``."""
        for raw in self.thinking or ():
            if isinstance(raw, dict) and str(raw.get("id")) == str(sequence_id):
                return ThinkingSequence.model_validate(raw)
        return None


def load_snapshot(path: str | Path) -> ProjectSnapshot:
    """Read a snapshot JSON file.

    Raises:
        SnapshotError: If the file is missing, unreadable, or not an object
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise SnapshotError(str(path), "file not found") from None
    except (OSError, json.JSONDecodeError) as e:
        raise SnapshotError(str(path), str(e)) from e

    if not isinstance(data, dict):
        raise SnapshotError(str(path), "top level must be a JSON object")

    return ProjectSnapshot.from_dict(data)
