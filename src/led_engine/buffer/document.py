"""Line storage for led_engine buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

DEFAULT_CAPACITY = 100


def split_lines(text: str) -> List[str]:
    """Split on line feeds only; a single trailing one ends the last line."""

    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return lines


@dataclass(slots=True)
class LineStore:
    """List-of-lines storage split into allocated slots and a populated extent.

    ``capacity`` slots are allocated up front (all empty lines). ``last_line``
    is the highest 1-based address ever written; everything after it is
    considered past the end of the buffer even though the slot exists.
    Writing past the capacity grows the slot list by doubling.
    """

    _slots: List[str] = field(default_factory=lambda: [""] * DEFAULT_CAPACITY)
    last_line: int = 0
    version: int = 0

    @classmethod
    def allocate(cls, capacity: int = DEFAULT_CAPACITY) -> "LineStore":
        return cls(_slots=[""] * max(1, capacity))

    @classmethod
    def from_lines(
        cls, lines: Iterable[str], *, capacity: int = DEFAULT_CAPACITY
    ) -> "LineStore":
        populated = [line.rstrip("\n") for line in lines]
        size = max(1, capacity, len(populated))
        slots = populated + [""] * (size - len(populated))
        return cls(_slots=slots, last_line=len(populated))

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def is_empty(self) -> bool:
        return self.last_line == 0

    def snapshot(self) -> Sequence[str]:
        """Return the populated lines without exposing internal mutability."""

        return tuple(self._slots[: self.last_line])

    def get_line(self, line: int) -> str:
        """Return the text at 1-based ``line``; unpopulated slots read as ``""``."""

        if line < 1 or line > self.capacity:
            return ""
        return self._slots[line - 1]

    def reserve(self, line: int) -> bool:
        """Make sure a slot exists for ``line``. Returns True when it grew."""

        if line <= self.capacity:
            return False
        size = self.capacity
        while size < line:
            size *= 2
        self._slots.extend([""] * (size - self.capacity))
        return True

    def set_line(self, line: int, text: str) -> None:
        """Write ``text`` at ``line``, extending the populated extent.

        Slots past ``last_line`` are never written, so the gap between the old
        extent and ``line`` already holds empty lines.
        """

        self.reserve(line)
        self._slots[line - 1] = text
        self.last_line = max(self.last_line, line)
        self.version += 1
