"""
Unit tests for transcript persistence.
"""

import json

import pytest
from pydantic import ValidationError

from symptom_checker.client.transcript import (
    STORAGE_KEY,
    Message,
    TranscriptStore,
    is_session_id,
    new_message,
    new_session_id,
    session_store,
    welcome_message,
)


def test_round_trip_preserves_order_and_fields(tmp_path) -> None:
    store = TranscriptStore(tmp_path / "transcript.json")
    messages = [
        welcome_message(),
        new_message("user", "I have a cough"),
        new_message("assistant", "### Detailed Analysis of Possible Conditions\n..."),
        new_message("assistant", "**Apologies**", error_flag=True),
    ]
    assert store.save(messages) is True
    assert store.load() == messages


def test_stored_under_fixed_key_and_other_keys_kept(tmp_path) -> None:
    path = tmp_path / "transcript.json"
    path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
    store = TranscriptStore(path)
    msg = new_message("user", "hi")
    store.save([msg])
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["theme"] == "dark"
    assert data[STORAGE_KEY] == [{"id": msg.id, "role": "user", "content": "hi", "error_flag": False}]


def test_missing_file_loads_none(tmp_path) -> None:
    assert TranscriptStore(tmp_path / "absent.json").load() is None


def test_corrupt_json_loads_none(tmp_path) -> None:
    path = tmp_path / "transcript.json"
    path.write_text("{not json", encoding="utf-8")
    assert TranscriptStore(path).load() is None


def test_invalid_records_load_none(tmp_path) -> None:
    path = tmp_path / "transcript.json"
    path.write_text(json.dumps({STORAGE_KEY: [{"id": "1", "role": "robot", "content": "x"}]}), encoding="utf-8")
    assert TranscriptStore(path).load() is None
    path.write_text(json.dumps({STORAGE_KEY: "not a list"}), encoding="utf-8")
    assert TranscriptStore(path).load() is None


def test_save_failure_returns_false(tmp_path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    store = TranscriptStore(blocker / "transcript.json")
    assert store.save([new_message("user", "hi")]) is False


def test_message_ids_unique_and_immutable() -> None:
    a, b = new_message("user", "x"), new_message("user", "x")
    assert a.id != b.id
    assert isinstance(a, Message)
    with pytest.raises(ValidationError):
        a.content = "changed"


def test_session_store_names_file_by_session(tmp_path) -> None:
    sid = new_session_id()
    store = session_store(tmp_path / "transcript.json", sid)
    assert store.path == tmp_path / f"transcript-{sid}.json"
    assert is_session_id(sid)
    assert new_session_id() != sid


@pytest.mark.parametrize("sid", ["", "../../etc/passwd", "ABC", "0" * 31, "0" * 32 + "\n", None, 42])
def test_session_store_rejects_bad_ids(tmp_path, sid) -> None:
    assert not is_session_id(sid)
    with pytest.raises(ValueError):
        session_store(tmp_path / "transcript.json", sid)
