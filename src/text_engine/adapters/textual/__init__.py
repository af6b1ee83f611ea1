"""Textual host integration; ``app`` requires the textual package at import."""

from .controller import TextualSessionAdapter, TextualUIHooks

__all__ = ["TextualSessionAdapter", "TextualUIHooks"]
