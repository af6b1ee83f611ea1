"""Bounded undo/redo history over full-text snapshots."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Union

DEFAULT_HISTORY_LIMIT = 100


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    text: str
    revision: int = 0
    label: str = "edit"


class HistoryManager:
    """Two-stack undo/redo model.

    ``History`` holds at most ``limit`` entries and evicts the oldest first.
    ``Redo`` is filled only by ``undo`` and is emptied by every fresh
    ``record_before_mutation``.
    """

    def __init__(self, *, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit <= 0:
            raise ValueError("limit must be positive")
        self.limit = limit
        self._history: Deque[HistoryEntry] = deque(maxlen=limit)
        self._redo: Deque[HistoryEntry] = deque()

    def record_before_mutation(
        self, text: str, *, revision: int = 0, label: str = "edit"
    ) -> HistoryEntry:
        entry = HistoryEntry(text=text, revision=revision, label=label)
        self._history.append(entry)
        self._redo.clear()
        return entry

    def can_undo(self) -> bool:
        return bool(self._history)

    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_depth(self) -> int:
        return len(self._history)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def undo(self, current: Union[str, HistoryEntry]) -> Optional[HistoryEntry]:
        """Return the snapshot to restore, parking ``current`` on Redo."""

        if not self._history:
            return None
        previous = self._history.pop()
        self._redo.appendleft(_as_entry(current))
        return previous

    def redo(self, current: Union[str, HistoryEntry]) -> Optional[HistoryEntry]:
        """Return the snapshot to re-apply, recording ``current`` on History."""

        if not self._redo:
            return None
        following = self._redo.popleft()
        self._history.append(_as_entry(current))
        return following

    def reset(self) -> None:
        self._history.clear()
        self._redo.clear()

    def history_texts(self) -> tuple[str, ...]:
        return tuple(entry.text for entry in self._history)

    def redo_texts(self) -> tuple[str, ...]:
        return tuple(entry.text for entry in self._redo)


def _as_entry(value: Union[str, HistoryEntry]) -> HistoryEntry:
    if isinstance(value, HistoryEntry):
        return value
    return HistoryEntry(text=value)


__all__ = ["DEFAULT_HISTORY_LIMIT", "HistoryEntry", "HistoryManager"]
