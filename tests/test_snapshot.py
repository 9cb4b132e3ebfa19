import json

import pytest
from pydantic import ValidationError

from mindtrace.core.errors import MindtraceError, SnapshotError
from mindtrace.core.snapshot import SNAPSHOT_KEYS, ProjectSnapshot, load_snapshot


def _write(tmp_path, payload, name="snapshot.json"):
    path = tmp_path / name
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload))
    return path


def test_load_snapshot(tmp_path, memories, thinking):
    path = _write(tmp_path, {"memories": memories, "thinking": thinking})
    snapshot = load_snapshot(path)

    assert snapshot.memories == memories
    assert snapshot.progress is None
    assert set(snapshot.collections()) == set(SNAPSHOT_KEYS)


def test_non_list_collections_are_treated_as_missing():
    snapshot = ProjectSnapshot.from_dict({"tasks": {"id": 1}, "briefs": "nope", "progress": []})
    assert snapshot.tasks is None
    assert snapshot.briefs is None
    assert snapshot.progress == []


def test_missing_file(tmp_path):
    with pytest.raises(SnapshotError) as exc_info:
        load_snapshot(tmp_path / "nowhere.json")
    assert exc_info.value.reason == "file not found"
    assert isinstance(exc_info.value, MindtraceError)


@pytest.mark.parametrize("payload", ["{broken", "[]", "42"])
def test_bad_content(tmp_path, payload):
    with pytest.raises(SnapshotError):
        load_snapshot(_write(tmp_path, payload))


def test_find_sequence(thinking):
    snapshot = ProjectSnapshot(thinking=thinking)

    seq = snapshot.find_sequence("30")
    assert seq is not None
    assert seq.thought_count == 3
    assert snapshot.find_sequence("31") is None
    assert ProjectSnapshot().find_sequence("30") is None


def test_find_sequence_validates(thinking):
    snapshot = ProjectSnapshot(thinking=[{"id": 1, "thoughts": []}])
    with pytest.raises(ValidationError):
        snapshot.find_sequence(1)
