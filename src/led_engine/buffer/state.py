"""Current-line and screen cursor state for buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Cursor = Tuple[int, int]  # (row, column), both 0-based


@dataclass(slots=True)
class BufferState:
    """Mutable cursor info owned by a Buffer.

    ``current_line`` is the 1-based address used by line commands and is 0
    only while the buffer is empty. ``cursor`` is the 2D position used by
    interactive front ends.
    """

    current_line: int = 0
    cursor: Cursor = (0, 0)

    def set_cursor(self, row: int, col: int) -> None:
        self.cursor = (row, col)
