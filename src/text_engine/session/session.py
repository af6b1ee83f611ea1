"""Session façade tying text state, history, statistics, and matching together."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from text_engine.analysis.statistics import (
    Statistics,
    StatisticsEngine,
    WordFrequencyTable,
    most_common,
)
from text_engine.buffer.document import TextState
from text_engine.buffer.history import HistoryEntry, HistoryManager
from text_engine.errors import NoOpWarning, PatternError, UnknownTransformError
from text_engine.matching.engine import MatchEngine
from text_engine.matching.models import HighlightResult, HighlightSpec
from text_engine.runtime import telemetry

from .config import SessionConfig
from .transforms import get_transform

CommitListener = Callable[[TextState], None]


@dataclass(slots=True)
class EditResult:
    """Outcome of a session operation; errors are carried, never raised."""

    ok: bool
    changed: bool
    status: str
    text: str
    revision: int
    message: Optional[str] = None
    error: Optional[Exception] = None


class TextSession:
    """Single owner of the document text and its undo/redo history.

    Every edit path (typing, transformations, replace, dictation) goes
    through ``apply_edit`` so history is recorded consistently. Reads of
    statistics and highlights are memoized on the revision counter.
    """

    def __init__(
        self,
        text: str = "",
        *,
        name: str = "default",
        config: Optional[SessionConfig] = None,
        history: Optional[HistoryManager] = None,
        statistics: Optional[StatisticsEngine] = None,
        matcher: Optional[MatchEngine] = None,
        logger_name: str = "text_engine.session",
    ) -> None:
        self.name = name
        self.config = config or SessionConfig()
        self.history = history or HistoryManager(limit=self.config.history_limit)
        self.statistics = statistics or StatisticsEngine(unit=self.config.char_unit)
        self.matcher = matcher or MatchEngine()
        self._state = TextState(text=text)
        self._highlights = HighlightSpec()
        self._highlight_cache: Optional[Tuple[int, HighlightSpec, HighlightResult]] = None
        self._listeners: List[CommitListener] = []
        self._logger_name = logger_name
        self._lock = threading.RLock()

    # ------------------------------------------------------------------ reads

    @property
    def state(self) -> TextState:
        return self._state

    @property
    def text(self) -> str:
        return self._state.text

    @property
    def revision(self) -> int:
        return self._state.revision

    @property
    def highlights(self) -> HighlightSpec:
        return self._highlights

    def get_current_text(self) -> str:
        return self._state.text

    def get_revision(self) -> int:
        return self._state.revision

    def can_undo(self) -> bool:
        with self._lock:
            return self.history.can_undo()

    def can_redo(self) -> bool:
        with self._lock:
            return self.history.can_redo()

    def get_statistics(self) -> Statistics:
        with self._lock:
            return self.statistics.statistics(self._state.text, self._state.revision)

    def get_word_frequencies(self) -> WordFrequencyTable:
        with self._lock:
            return self.statistics.frequencies(self._state.text, self._state.revision)

    def most_common_words(self, limit: Optional[int] = None) -> list[tuple[str, int]]:
        return most_common(self.get_word_frequencies(), limit)

    def get_highlighted_segments(self) -> HighlightResult:
        with self._lock:
            state, spec = self._state, self._highlights
            cached = self._highlight_cache
            if cached and cached[0] == state.revision and cached[1] == spec:
                return cached[2]
            result = self.matcher.highlight(state.text, spec)
            self._highlight_cache = (state.revision, spec, result)
            return result

    def subscribe(self, listener: CommitListener) -> Callable[[], None]:
        """Call ``listener`` after every commit; returns an unsubscribe hook."""

        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # -------------------------------------------------------------- mutations

    def apply_edit(
        self, new_text: str, *, record_history: bool = True, label: str = "edit"
    ) -> EditResult:
        return self._mutate(
            new_text, label=label, status="edited", record_history=record_history
        )

    def undo(self) -> EditResult:
        with self._lock, self._span("undo"):
            entry = self.history.undo(self._snapshot("undo"))
            if entry is None:
                return self._nothing_to("undo")
            failure = self._commit(entry.text)
            return self._result("undone", changed=True, message=entry.label, error=failure)

    def redo(self) -> EditResult:
        with self._lock, self._span("redo"):
            entry = self.history.redo(self._snapshot("redo"))
            if entry is None:
                return self._nothing_to("redo")
            failure = self._commit(entry.text)
            return self._result("redone", changed=True, message=entry.label, error=failure)

    def reset(self, text: str = "") -> EditResult:
        """Start over: clear history, redo, and highlights. Not undoable."""

        with self._lock, self._span("reset"):
            self.history.reset()
            self._highlights = HighlightSpec()
            failure = self._commit(text)
            return self._result("reset", changed=True, error=failure)

    def load_saved(self, text: str) -> EditResult:
        result = self.reset(text)
        result.status = "loaded"
        return result

    def append_dictation(self, chunk: str) -> EditResult:
        if not chunk:
            return self._result("empty_chunk", changed=False)
        with self._lock:
            return self._mutate(self._state.text + chunk, label="dictation", status="dictated")

    def apply_transform(self, name: str) -> EditResult:
        transform = get_transform(name)
        if transform is None:
            error = UnknownTransformError(name)
            telemetry.record_event(
                "session.unknown_transform",
                level="warning",
                data={"session": self.name, "transform": name},
                logger_name=self._logger_name,
            )
            return self._result("unknown_transform", changed=False, ok=False, error=error)
        with self._lock:
            return self._mutate(
                transform(self._state.text), label=f"transform:{name}", status="transformed"
            )

    def find_and_replace(self, term: str, replacement: Optional[str] = None) -> EditResult:
        if not term:
            return self._result("empty_term", changed=False)
        with self._lock:
            try:
                new_text, count = self.matcher.find_replace(
                    self._state.text, term, replacement or ""
                )
            except PatternError as exc:
                return self._pattern_failure(exc)
            result = self._mutate(new_text, label="replace", status="replaced")
            result.message = f"{count} replaced"
            return result

    def search(self, term: str) -> EditResult:
        """Highlight ``term`` with the default color; the text is untouched."""

        if not term:
            return self._result("empty_term", changed=False)
        spec = HighlightSpec.single(term, color=self.config.default_highlight_color)
        result = self.set_highlights(spec)
        if result.ok:
            result.status = "searched"
            result.message = f"{self.matcher.count(self._state.text, term)} found"
        return result

    def set_highlights(
        self, spec: Union[HighlightSpec, str], colors: str = ""
    ) -> EditResult:
        if isinstance(spec, str):
            spec = HighlightSpec.parse(
                spec, colors, default_color=self.config.default_highlight_color
            )
        with self._lock:
            try:
                self.matcher.validate(spec)
            except PatternError as exc:
                return self._pattern_failure(exc)
            self._highlights = spec
            return self._result("highlighted", changed=False)

    def clear_highlights(self) -> EditResult:
        with self._lock:
            self._highlights = HighlightSpec()
            return self._result("highlighted", changed=False)

    # ---------------------------------------------------------------- helpers

    def _mutate(
        self, new_text: str, *, label: str, status: str, record_history: bool = True
    ) -> EditResult:
        with self._lock, self._span(label) as handle:
            handle.add_metadata("record_history", record_history)
            if record_history:
                self.history.record_before_mutation(
                    self._state.text, revision=self._state.revision, label=label
                )
            failure = self._commit(new_text)
            return self._result(status, changed=True, error=failure)

    def _commit(self, text: str) -> Optional[Exception]:
        """Install ``text`` and notify listeners.

        A failing listener does not roll the commit back or stop the other
        listeners; the first failure is handed back for the result.
        """

        self._state = self._state.replace(text)
        state = self._state
        failure: Optional[Exception] = None
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as exc:
                telemetry.record_event(
                    "session.listener_error",
                    level="error",
                    data={"session": self.name, "revision": state.revision, "error": repr(exc)},
                    logger_name=self._logger_name,
                )
                if failure is None:
                    failure = exc
        return failure

    def _snapshot(self, label: str) -> HistoryEntry:
        return HistoryEntry(text=self._state.text, revision=self._state.revision, label=label)

    def _span(self, label: str):
        return telemetry.span(
            f"session::{label}",
            logger_name=self._logger_name,
            component="session",
            metadata={"session": self.name},
        )

    def _nothing_to(self, operation: str) -> EditResult:
        telemetry.record_event(
            f"session.nothing_to_{operation}",
            level="debug",
            data={"session": self.name},
            logger_name=self._logger_name,
        )
        return self._result(
            f"nothing_to_{operation}", changed=False, error=NoOpWarning(operation)
        )

    def _pattern_failure(self, exc: PatternError) -> EditResult:
        telemetry.record_event(
            "session.pattern_error",
            level="warning",
            data={"session": self.name, "pattern": exc.pattern, "reason": exc.reason},
            logger_name=self._logger_name,
        )
        return self._result(
            "pattern_error", changed=False, ok=False, message=str(exc), error=exc
        )

    def _result(
        self,
        status: str,
        *,
        changed: bool,
        ok: bool = True,
        message: Optional[str] = None,
        error: Optional[Exception] = None,
    ) -> EditResult:
        return EditResult(
            ok=ok,
            changed=changed,
            status=status,
            text=self._state.text,
            revision=self._state.revision,
            message=message,
            error=error,
        )


__all__ = ["CommitListener", "EditResult", "TextSession"]
