"""Dictation feed that turns finalized transcripts into session edits.

Speech recognizers deliver a mix of interim and final results and may
restart themselves. The feed only forwards finalized text, one
history-generating edit per finalized chunk, and drops everything once
stopped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from text_engine.runtime import telemetry

from .session import EditResult, TextSession


@dataclass(frozen=True, slots=True)
class TranscriptResult:
    text: str
    is_final: bool = False


class DictationFeed:
    def __init__(
        self,
        session: TextSession,
        *,
        language: str = "en-US",
        separator: Optional[str] = None,
    ) -> None:
        self.session = session
        self.language = language
        self.separator = (
            separator if separator is not None else session.config.dictation_separator
        )
        self._listening = False
        self.chunks_applied = 0

    @property
    def is_listening(self) -> bool:
        return self._listening

    def start(self) -> None:
        if self._listening:
            return
        self._listening = True
        telemetry.record_event(
            "dictation.start",
            data={"session": self.session.name, "language": self.language},
        )

    def stop(self) -> None:
        if not self._listening:
            return
        self._listening = False
        telemetry.record_event(
            "dictation.stop",
            data={"session": self.session.name, "chunks": self.chunks_applied},
        )

    def push_final(self, transcript: str) -> Optional[EditResult]:
        """Append one finalized transcript; ignored while stopped."""

        if not self._listening or not transcript:
            return None
        result = self.session.append_dictation(transcript + self.separator)
        self.chunks_applied += 1
        return result

    def push_results(self, results: Iterable[TranscriptResult]) -> Optional[EditResult]:
        """Join the final results of one recognizer event into a single chunk."""

        final = "".join(
            result.text + self.separator for result in results if result.is_final
        )
        if not self._listening or not final:
            return None
        result = self.session.append_dictation(final)
        self.chunks_applied += 1
        return result


__all__ = ["DictationFeed", "TranscriptResult"]
