"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .state import Cursor
from .sync import BufferValidationError


def ensure_address(line: int) -> int:
    if line < 1:
        raise BufferValidationError("Line address must be positive", line=line)
    return line


def ensure_cursor(cursor: Cursor) -> Cursor:
    row, col = cursor
    if row < 0 or col < 0:
        raise BufferValidationError("Cursor out of range", cursor=cursor)
    return cursor


def ensure_char(char: str) -> str:
    if len(char) != 1:
        raise BufferValidationError(f"Expected a single character, got {char!r}")
    return char
