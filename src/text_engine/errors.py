"""Error and warning types surfaced by the engine."""

from __future__ import annotations


class PatternError(ValueError):
    """Raised when a user-supplied search or highlight term does not compile."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class NoOpWarning(UserWarning):
    """Attached to undo/redo results when the respective stack is empty."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Nothing to {operation}")
        self.operation = operation


class UnknownTransformError(KeyError):
    """A transformation name that is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown transform '{self.name}'"


class StorageError(RuntimeError):
    """Raised when a persisted session record cannot be decoded."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


__all__ = ["PatternError", "NoOpWarning", "UnknownTransformError", "StorageError"]
