"""Textual front end driving the buffer's (row, column) cursor."""

from .controller import TextualPageAdapter, TextualUIHooks

__all__ = ["TextualPageAdapter", "TextualUIHooks"]
