"""Host-agnostic controller that wires a TextSession into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional

from text_engine.adapters.export import write_export
from text_engine.analysis.statistics import Statistics
from text_engine.matching.models import HighlightResult
from text_engine.session import EditResult, TextSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the controller to update Textual widgets."""

    update_text: Callable[[str], None]
    update_status: Callable[[str], None] = _noop
    update_statistics: Callable[[Statistics], None] = _noop
    update_preview: Callable[[HighlightResult], None] = _noop
    update_words: Callable[[list[tuple[str, int]]], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualSessionAdapter:
    """Routes widget events and keyboard shortcuts into session calls."""

    def __init__(
        self,
        session: TextSession,
        hooks: TextualUIHooks,
        *,
        word_limit: int = 1000,
        export_dir: Path | str = ".",
    ) -> None:
        self.session = session
        self.hooks = hooks
        self.word_limit = word_limit
        self.export_dir = Path(export_dir)
        self.find_text = ""
        self.replace_text = ""
        self._shortcuts: Dict[str, Callable[[], Optional[EditResult]]] = {
            "ctrl+z": self.session.undo,
            "ctrl+y": self.session.redo,
            "ctrl+r": self.replace,
            "ctrl+l": self.session.reset,
            "ctrl+s": lambda: self.export("txt"),
            "ctrl+f": self._focus_find,
        }
        self.refresh()

    @property
    def shortcuts(self) -> tuple[str, ...]:
        return tuple(self._shortcuts)

    def handle_text_change(self, text: str) -> Optional[EditResult]:
        """Record a typing edit unless the widget merely echoes session text."""

        if text == self.session.text:
            return None
        self._log_state("edit ->", chars=len(text))
        result = self.session.apply_edit(text, label="typing")
        self._after_result(result)
        return result

    def handle_shortcut(self, key: str) -> Optional[EditResult]:
        handler = self._shortcuts.get(key.lower())
        if handler is None:
            return None
        self._log_state("shortcut ->", key=key)
        result = handler()
        if result is not None:
            self._after_result(result)
        return result

    def set_find_fields(self, find: str, replace: str = "") -> None:
        self.find_text = find
        self.replace_text = replace

    def search(self) -> EditResult:
        result = self.session.search(self.find_text)
        self._after_result(result)
        return result

    def replace(self) -> EditResult:
        result = self.session.find_and_replace(self.find_text, self.replace_text)
        self._after_result(result)
        return result

    def highlight(self, words: str, colors: str = "") -> EditResult:
        result = self.session.set_highlights(words, colors)
        self._after_result(result)
        return result

    def apply_transform(self, name: str) -> EditResult:
        result = self.session.apply_transform(name)
        self._after_result(result)
        return result

    def export(self, fmt: str) -> None:
        target = write_export(self.export_dir, fmt, self.session)
        self._log_state("export ->", fmt=fmt, path=str(target))
        self.hooks.handle_event("export", str(target))
        self.hooks.update_status(f"saved {target.name}")
        return None

    def refresh(self) -> None:
        session = self.session
        self.hooks.update_text(session.text)
        self.hooks.update_statistics(session.get_statistics())
        self.hooks.update_preview(session.get_highlighted_segments())
        self.hooks.update_words(session.most_common_words(self.word_limit))

    def _focus_find(self) -> None:
        self.hooks.handle_event("focus.find", None)
        return None

    def _after_result(self, result: EditResult) -> None:
        status = result.message or result.status
        if not result.ok and result.error is not None:
            status = f"{result.status}: {result.error}"
        self.hooks.update_status(status)
        self.refresh()
        self._log_state(
            "result <-",
            ok=result.ok,
            status=result.status,
            revision=result.revision,
        )

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "session": self.session.name,
            "revision": self.session.revision,
            "undo": self.session.history.undo_depth,
            "redo": self.session.history.redo_depth,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))


__all__ = ["TextualSessionAdapter", "TextualUIHooks"]
