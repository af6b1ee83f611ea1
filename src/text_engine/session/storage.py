"""JSON persistence for the session text (load at startup, autosave on commit)."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from text_engine.buffer.document import TextState
from text_engine.errors import StorageError
from text_engine.runtime import telemetry

from .session import EditResult, TextSession

AUTOSAVE_NAME = "advanced_text_autosave.json"


@dataclass(frozen=True, slots=True)
class SessionRecord:
    text: str = ""

    def to_json(self) -> str:
        return json.dumps({"text": self.text})

    @classmethod
    def from_json(cls, raw: str) -> "SessionRecord":
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Saved record is not valid JSON: {exc.msg}") from exc
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise StorageError("Saved record must be a JSON object")
        text = data.get("text") or ""
        if not isinstance(text, str):
            raise StorageError("Saved record 'text' must be a string")
        return cls(text=text)


class JsonFileStore:
    """Stores a ``SessionRecord`` as one JSON file."""

    def __init__(self, path: Union[str, os.PathLike[str]]) -> None:
        self.path = Path(path)

    def load(self) -> Optional[SessionRecord]:
        if not self.path.exists():
            return None
        try:
            raw = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise StorageError(
                f"Saved record is not valid UTF-8: {exc.reason}", path=str(self.path)
            ) from exc
        try:
            return SessionRecord.from_json(raw)
        except StorageError as exc:
            exc.path = str(self.path)
            raise

    def save(self, record: SessionRecord) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(record.to_json(), encoding="utf-8")
        os.replace(tmp_path, self.path)


def restore_session(session: TextSession, store: JsonFileStore) -> Optional[EditResult]:
    """Load the saved text into ``session`` without recording history."""

    record = store.load()
    if record is None:
        return None
    telemetry.record_event(
        "storage.restore",
        data={"session": session.name, "path": str(store.path), "chars": len(record.text)},
    )
    return session.load_saved(record.text)


def attach_autosave(session: TextSession, store: JsonFileStore) -> Callable[[], None]:
    """Persist the text after every commit; returns the detach hook."""

    def _write(state: TextState) -> None:
        store.save(SessionRecord(text=state.text))

    return session.subscribe(_write)


__all__ = [
    "AUTOSAVE_NAME",
    "JsonFileStore",
    "SessionRecord",
    "attach_autosave",
    "restore_session",
]
