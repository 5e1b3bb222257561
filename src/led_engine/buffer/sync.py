"""Adapter boundary types for syncing buffers with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .state import Cursor


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    cursor: Cursor
    current_line: int
    attributes: dict[str, str] = field(default_factory=dict)


class BufferValidationError(RuntimeError):
    """Raised when callers hand the buffer an impossible address or input."""

    def __init__(
        self,
        message: str,
        *,
        line: Optional[int] = None,
        cursor: Optional[Cursor] = None,
    ) -> None:
        super().__init__(message)
        self.line = line
        self.cursor = cursor
