from __future__ import annotations

import json
from pathlib import Path

import pytest

from text_engine.adapters.export import (
    render_csv,
    render_json,
    render_text,
    write_export,
)
from text_engine.session import TextSession


def make_session() -> TextSession:
    return TextSession("Cat cat, dog. Café")


def test_text_export_is_the_current_text() -> None:
    assert render_text(make_session()) == "Cat cat, dog. Café"


def test_json_export_carries_text_and_frequencies() -> None:
    payload = json.loads(render_json(make_session()))

    assert payload == {
        "text": "Cat cat, dog. Café",
        "frequencies": {"cat": 2, "dog": 1, "Café": 1},
    }


def test_csv_export_lists_word_counts() -> None:
    assert render_csv(make_session()).splitlines() == [
        "word,count",
        "cat,2",
        "dog,1",
        "Café,1",
    ]


def test_write_export_uses_default_name_for_directories(tmp_path: Path) -> None:
    target = write_export(tmp_path, "csv", make_session())

    assert target == tmp_path / "frequency.csv"
    assert target.read_text(encoding="utf-8").startswith("word,count")

    explicit = write_export(tmp_path / "out.txt", "txt", make_session())
    assert explicit.read_text(encoding="utf-8") == "Cat cat, dog. Café"


def test_unsupported_format_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        write_export(tmp_path, "pdf", make_session())
