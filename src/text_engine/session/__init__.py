"""Session orchestration and its edit-producing collaborators."""

from .config import SessionConfig
from .dictation import DictationFeed, TranscriptResult
from .session import CommitListener, EditResult, TextSession
from .storage import JsonFileStore, SessionRecord, attach_autosave, restore_session
from .transforms import TRANSFORMS

__all__ = [
    "CommitListener",
    "DictationFeed",
    "EditResult",
    "JsonFileStore",
    "SessionConfig",
    "SessionRecord",
    "TRANSFORMS",
    "TextSession",
    "TranscriptResult",
    "attach_autosave",
    "restore_session",
]
