"""Plain-text exporters fed from a session's text and frequency table."""

from __future__ import annotations

import csv
import io
import json
import os
from pathlib import Path
from typing import Callable, Dict, Union

from text_engine.analysis.statistics import WordFrequencyTable
from text_engine.runtime import telemetry
from text_engine.session import TextSession


def render_text(session: TextSession) -> str:
    return session.get_current_text()


def render_json(session: TextSession) -> str:
    payload = {
        "text": session.get_current_text(),
        "frequencies": dict(session.get_word_frequencies()),
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def render_csv(session: TextSession) -> str:
    return frequencies_to_csv(session.get_word_frequencies())


def frequencies_to_csv(table: WordFrequencyTable) -> str:
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(["word", "count"])
    for word, count in table.items():
        writer.writerow([word, count])
    return out.getvalue()


EXPORTERS: Dict[str, Callable[[TextSession], str]] = {
    "txt": render_text,
    "json": render_json,
    "csv": render_csv,
}

DEFAULT_FILENAMES = {
    "txt": "text.txt",
    "json": "text-data.json",
    "csv": "frequency.csv",
}


def write_export(
    path: Union[str, os.PathLike[str]], fmt: str, session: TextSession
) -> Path:
    try:
        render = EXPORTERS[fmt]
    except KeyError as exc:
        raise ValueError(f"Unsupported export format '{fmt}'") from exc

    target = Path(path)
    if target.is_dir():
        target = target / DEFAULT_FILENAMES[fmt]
    with telemetry.span(
        f"export::{fmt}", component="export", metadata={"path": str(target)}
    ):
        target.write_text(render(session), encoding="utf-8")
    return target


__all__ = [
    "DEFAULT_FILENAMES",
    "EXPORTERS",
    "frequencies_to_csv",
    "render_csv",
    "render_json",
    "render_text",
    "write_export",
]
