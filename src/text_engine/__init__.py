"""UI-agnostic text editing and analysis engine."""

__all__ = [
    "adapters",
    "analysis",
    "buffer",
    "errors",
    "matching",
    "runtime",
    "session",
]

__version__ = "0.1.0"
