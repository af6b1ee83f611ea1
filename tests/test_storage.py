from __future__ import annotations

import json
from pathlib import Path

import pytest

from text_engine.errors import StorageError
from text_engine.session import (
    JsonFileStore,
    SessionRecord,
    TextSession,
    attach_autosave,
    restore_session,
)


def test_record_round_trips_text_exactly(tmp_path: Path) -> None:
    store = JsonFileStore(tmp_path / "autosave.json")
    text = "Line one\r\nলাইন দুই\t😀 \"quoted\"\n"

    store.save(SessionRecord(text=text))

    loaded = store.load()
    assert loaded == SessionRecord(text=text)
    assert json.loads(store.path.read_text(encoding="utf-8")) == {"text": text}


def test_missing_file_loads_nothing(tmp_path: Path) -> None:
    store = JsonFileStore(tmp_path / "absent.json")

    assert store.load() is None
    assert restore_session(TextSession("keep"), store) is None


def test_malformed_record_raises_storage_error(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StorageError) as excinfo:
        JsonFileStore(path).load()

    assert excinfo.value.path == str(path)
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(StorageError):
        JsonFileStore(path).load()


def test_null_record_and_missing_text_default_to_empty() -> None:
    assert SessionRecord.from_json("null") == SessionRecord()
    assert SessionRecord.from_json("{}") == SessionRecord()


def test_restore_is_not_undoable(tmp_path: Path) -> None:
    store = JsonFileStore(tmp_path / "autosave.json")
    store.save(SessionRecord(text="saved text"))
    session = TextSession()

    result = restore_session(session, store)

    assert result is not None and result.status == "loaded"
    assert session.get_current_text() == "saved text"
    assert not session.can_undo()


def test_autosave_writes_after_each_commit(tmp_path: Path) -> None:
    store = JsonFileStore(tmp_path / "nested" / "autosave.json")
    session = TextSession()
    detach = attach_autosave(session, store)

    session.apply_edit("first")
    assert store.load() == SessionRecord(text="first")

    session.undo()
    assert store.load() == SessionRecord(text="")

    detach()
    session.apply_edit("not saved")
    assert store.load() == SessionRecord(text="")


def test_undecodable_record_raises_storage_error(tmp_path: Path) -> None:
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"text": "\xff"}')

    with pytest.raises(StorageError) as excinfo:
        JsonFileStore(path).load()

    assert excinfo.value.path == str(path)


def test_lone_surrogates_survive_a_save(tmp_path: Path) -> None:
    store = JsonFileStore(tmp_path / "autosave.json")

    store.save(SessionRecord(text="a\ud800b"))

    assert store.load() == SessionRecord(text="a\ud800b")


def test_failed_autosave_keeps_the_edit(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    session = TextSession("before")
    attach_autosave(session, JsonFileStore(blocker / "save.json"))
    seen: list[str] = []
    session.subscribe(lambda state: seen.append(state.text))

    result = session.apply_edit("after")

    assert result.ok and result.changed
    assert isinstance(result.error, OSError)
    assert session.get_current_text() == "after"
    assert seen == ["after"]

    undone = session.undo()
    assert undone.status == "undone"
    assert isinstance(undone.error, OSError)
    assert session.get_current_text() == "before"
    assert seen == ["after", "before"]
