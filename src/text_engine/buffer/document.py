"""Revisioned text storage owned by a session."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TextState:
    """Immutable text value tagged with the revision that produced it.

    ``revision`` only ever grows: ``replace`` returns a new state one
    revision ahead, even when the text itself did not change.
    """

    text: str = ""
    revision: int = 0

    def replace(self, text: str) -> "TextState":
        return TextState(text=text, revision=self.revision + 1)

    @property
    def is_empty(self) -> bool:
        return not self.text


__all__ = ["TextState"]
