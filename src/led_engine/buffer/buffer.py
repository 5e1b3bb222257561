"""High-level buffer façade combining line storage and cursor state."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Iterable, List, Optional

from led_engine.runtime import telemetry

from .document import DEFAULT_CAPACITY, LineStore, split_lines
from .state import BufferState, Cursor
from .sync import BufferMirror, BufferValidationError
from .validation import ensure_address, ensure_char, ensure_cursor


class Buffer:
    def __init__(
        self,
        *,
        name: str = "default",
        store: Optional[LineStore] = None,
        state: Optional[BufferState] = None,
    ) -> None:
        self.name = name
        self.store = store or LineStore.allocate()
        self.state = state or BufferState()

    @classmethod
    def load(
        cls,
        lines: Iterable[str],
        *,
        name: str = "default",
        capacity: int = DEFAULT_CAPACITY,
    ) -> "Buffer":
        """Build a buffer from already-split lines (no trailing newlines)."""

        store = LineStore.from_lines(lines, capacity=capacity)
        state = BufferState(current_line=1 if store.last_line else 0)
        telemetry.record_event(
            "buffer.load",
            level="debug",
            data={"buffer": name, "lines": store.last_line, "capacity": store.capacity},
        )
        return cls(name=name, store=store, state=state)

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        return cls.load(split_lines(text), name=name)

    def save(self) -> List[str]:
        """Return every populated line, in order."""

        return list(self.store.snapshot())

    @property
    def last_line(self) -> int:
        return self.store.last_line

    @property
    def current_line(self) -> int:
        return self.state.current_line

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    def is_empty(self) -> bool:
        return self.store.is_empty

    def get_line(self, line: int) -> str:
        return self.store.get_line(ensure_address(line))

    def set_current_line(self, line: int) -> None:
        if line < 0 or line > self.store.last_line:
            raise BufferValidationError(
                f"Line {line} is outside 0..{self.store.last_line}", line=line
            )
        self.state.current_line = line

    def write_line(self, line: int, text: str, *, label: str = "write_line") -> None:
        """Replace the text at ``line``, growing the store when needed."""

        ensure_address(line)
        with Transaction(self, label, line=line):
            grew_from = self.store.capacity
            if self.store.reserve(line):
                telemetry.record_event(
                    "buffer.grow",
                    level="debug",
                    data={
                        "buffer": self.name,
                        "from": grew_from,
                        "to": self.store.capacity,
                    },
                )
            self.store.set_line(line, text)

    def insert_text(self, line: int, text: str) -> None:
        self.write_line(line, text + self.store.get_line(line), label="insert")

    def append_text(self, line: int, text: str) -> None:
        self.write_line(line, self.store.get_line(line) + text, label="append")

    def change_line(self, line: int, text: str) -> None:
        self.write_line(line, text, label="change")

    # Interactive (row, column) editing

    def add_char(self, char: str) -> None:
        """Write ``char`` at the cursor and advance one column.

        Inside the line the character overwrites; past the end the line is
        padded with spaces up to the cursor column first.
        """

        ensure_char(char)
        row, col = ensure_cursor(self.state.cursor)
        current = self.store.get_line(row + 1)
        if col < len(current):
            updated = current[:col] + char + current[col + 1 :]
        else:
            updated = current + " " * (col - len(current)) + char
        self.write_line(row + 1, updated, label="add_char")
        self.state.set_cursor(row, col + 1)
        self.state.current_line = row + 1

    def add_newline(self) -> None:
        row, _ = ensure_cursor(self.state.cursor)
        row += 1
        if row >= self.store.last_line:
            self.write_line(row + 1, "", label="add_newline")
        self.state.set_cursor(row, 0)
        self.state.current_line = row + 1

    def move_cursor(self, dx: int, dy: int) -> Cursor:
        """Shift the cursor; an axis move that would go negative is dropped."""

        row, col = self.state.cursor
        if dx >= 0 or col >= -dx:
            col += dx
        if dy >= 0 or row >= -dy:
            row += dy
        self.state.set_cursor(row, col)
        return self.state.cursor

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text="\n".join(self.store.snapshot()),
            cursor=self.state.cursor,
            current_line=self.state.current_line,
            attributes=dict(attributes or {}),
        )


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps one buffer mutation in a telemetry span."""

    def __init__(self, buffer: Buffer, label: str, *, line: int) -> None:
        self.buffer = buffer
        self.label = label
        self.line = line
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name, "line": self.line},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
