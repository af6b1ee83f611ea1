"""Text state and undo/redo data structures."""

from .document import TextState
from .history import DEFAULT_HISTORY_LIMIT, HistoryEntry, HistoryManager

__all__ = [
    "DEFAULT_HISTORY_LIMIT",
    "HistoryEntry",
    "HistoryManager",
    "TextState",
]
