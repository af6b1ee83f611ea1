"""Executable Textual app that hosts a text session."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Horizontal, Vertical
    from textual.widgets import Button, Footer, Header, Input, Select, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use text_engine.adapters.textual.app"
    ) from exc

from text_engine.analysis.statistics import Statistics
from text_engine.matching.models import HighlightResult
from text_engine.session import (
    TRANSFORMS,
    JsonFileStore,
    SessionConfig,
    TextSession,
    attach_autosave,
    restore_session,
)
from text_engine.session.config import env_int
from text_engine.session.storage import AUTOSAVE_NAME

from .controller import TextualSessionAdapter, TextualUIHooks

TRANSFORM_LABELS = {
    "upper": "UPPER",
    "lower": "lower",
    "title": "Title Case",
    "sentence": "Sentence Case",
    "spaces": "Remove Extra Spaces",
    "lines": "Remove Line Breaks",
    "sort": "Sort Words",
}


def create_session(store: Optional[JsonFileStore] = None) -> TextSession:
    """Build a session from the environment, restoring any autosaved text."""

    session = TextSession(config=SessionConfig.from_env())
    if store is not None:
        restore_session(session, store)
        attach_autosave(session, store)
    return session


@dataclass
class UIState:
    status_text: str = ""
    statistics: Statistics = Statistics()


class TextEngineApp(App[None]):
    """Editor with live statistics, highlight preview, and word list."""

    CSS = """
	#toolbar, #highlight-bar {
		height: auto;
	}

	#editor {
		height: 1fr;
		border: round $accent;
	}

	#side-panel {
		width: 36;
	}

	#stats, #words {
		border: round $surface-lighten-1;
		padding: 0 1;
	}

	#preview {
		height: 12;
		border: round $accent-darken-1;
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        Binding("ctrl+z", "shortcut('ctrl+z')", "Undo", priority=True),
        Binding("ctrl+y", "shortcut('ctrl+y')", "Redo", priority=True),
        Binding("ctrl+r", "shortcut('ctrl+r')", "Replace", priority=True),
        Binding("ctrl+l", "shortcut('ctrl+l')", "Clear all", priority=True),
        Binding("ctrl+s", "shortcut('ctrl+s')", "Save .txt", priority=True),
        Binding("ctrl+f", "shortcut('ctrl+f')", "Find", priority=True),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        store: Optional[JsonFileStore] = None,
        export_dir: Path | str = ".",
        word_limit: int = 1000,
    ) -> None:
        super().__init__()
        self._state = UIState()
        self._store = store
        self._export_dir = Path(export_dir)
        self._word_limit = word_limit
        self.session: TextSession | None = None
        self.adapter: TextualSessionAdapter | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="toolbar"):
            yield Input(placeholder="Search word", id="find")
            yield Button("Search", id="search")
            yield Input(placeholder="Replace with", id="replace")
            yield Button("Replace", id="do-replace")
            yield Select(
                [(label, name) for name, label in TRANSFORM_LABELS.items() if name in TRANSFORMS],
                prompt="-- Select Action --",
                id="transform",
            )
        with Horizontal(id="highlight-bar"):
            yield Input(placeholder="Highlight words (comma separated)", id="highlight-words")
            yield Input(placeholder="Colors (comma separated)", id="highlight-colors")
            yield Button("Export .json", id="export-json")
            yield Button("Export .csv", id="export-csv")
        with Horizontal():
            with Vertical():
                yield TextArea(id="editor")
                yield Static("", id="preview")
            with Vertical(id="side-panel"):
                yield Static("", id="stats")
                yield Static("", id="words")
        yield Static("", id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        self.session = create_session(self._store)
        hooks = TextualUIHooks(
            update_text=self._update_text,
            update_status=self._update_status,
            update_statistics=self._update_statistics,
            update_preview=self._update_preview,
            update_words=self._update_words,
            handle_event=self._handle_event,
        )
        self.adapter = TextualSessionAdapter(
            self.session,
            hooks,
            word_limit=self._word_limit,
            export_dir=self._export_dir,
        )

    def action_shortcut(self, key: str) -> None:
        if self.adapter:
            self.adapter.handle_shortcut(key)

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self.adapter:
            self.adapter.handle_text_change(event.text_area.text)

    def on_input_changed(self, event: Input.Changed) -> None:
        if not self.adapter:
            return
        if event.input.id in {"find", "replace"}:
            find = self.query_one("#find", Input).value
            replace = self.query_one("#replace", Input).value
            self.adapter.set_find_fields(find, replace)
        elif event.input.id in {"highlight-words", "highlight-colors"}:
            words = self.query_one("#highlight-words", Input).value
            colors = self.query_one("#highlight-colors", Input).value
            self.adapter.highlight(words, colors)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if not self.adapter:
            return
        button = event.button.id
        if button == "search":
            self.adapter.search()
        elif button == "do-replace":
            self.adapter.replace()
        elif button == "export-json":
            self.adapter.export("json")
        elif button == "export-csv":
            self.adapter.export("csv")

    def on_select_changed(self, event: Select.Changed) -> None:
        if self.adapter and isinstance(event.value, str):
            self.adapter.apply_transform(event.value)

    def _update_text(self, text: str) -> None:
        editor = self.query_one("#editor", TextArea)
        if editor.text != text:
            editor.load_text(text)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        self.query_one("#status-line", Static).update(status)

    def _update_statistics(self, statistics: Statistics) -> None:
        self._state.statistics = statistics
        lines = [
            f"Characters: {statistics.character_count}",
            f"Words: {statistics.word_count}",
            f"Unique Words: {statistics.unique_word_count}",
            f"Sentences: {statistics.sentence_count}",
            f"Paragraphs: {statistics.paragraph_count}",
            f"Avg Word Length: {statistics.average_word_length}",
            f"Avg Sentence Length: {statistics.average_sentence_length}",
        ]
        self.query_one("#stats", Static).update("\n".join(lines))

    def _update_preview(self, result: HighlightResult) -> None:
        preview = Text()
        for text, color in result.runs():
            preview.append(text, style=f"black on {color}" if color else "")
        self.query_one("#preview", Static).update(preview)

    def _update_words(self, words: list[tuple[str, int]]) -> None:
        cloud = Text()
        for word, count in words:
            cloud.append(f"{word} ({count})  ", style="bold" if count > 1 else "")
        self.query_one("#words", Static).update(cloud)

    def _handle_event(self, name: str, payload: object | None) -> None:
        if name == "focus.find":
            self.query_one("#find", Input).focus()


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the text engine Textual editor.")
    parser.add_argument(
        "--autosave",
        default=os.environ.get("TEXT_ENGINE_AUTOSAVE", AUTOSAVE_NAME),
        help=f"JSON file used to restore and autosave the text (default: {AUTOSAVE_NAME})",
    )
    parser.add_argument(
        "--no-autosave",
        action="store_true",
        help="Start empty and do not persist the text",
    )
    parser.add_argument(
        "--export-dir",
        default=os.environ.get("TEXT_ENGINE_EXPORT_DIR", "."),
        help="Directory that receives exported files (default: .)",
    )
    parser.add_argument(
        "--word-limit",
        type=int,
        default=env_int(os.environ, "TEXT_ENGINE_WORD_LIMIT", 1000),
        help="Maximum number of words listed in the frequency panel",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    store = None if args.no_autosave else JsonFileStore(args.autosave)
    app = TextEngineApp(store=store, export_dir=args.export_dir, word_limit=args.word_limit)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
