"""Dataclasses describing parsed commands and their verbs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CommandId(str, Enum):
    """Single-character verbs understood by the engine."""

    FILE = "f"
    VIEW = "v"
    READ = "r"
    LINE = "l"
    SETLINE = "s"
    INSERT = "i"
    APPEND = "a"
    CHANGE = "c"
    WRITE = "w"
    EXIT = "q"

    @property
    def needs_text(self) -> bool:
        """Whether the verb consumes a raw text line before it can run."""

        return self in _TEXT_VERBS

    @classmethod
    def lookup(cls, char: str) -> Optional["CommandId"]:
        try:
            return cls(char)
        except ValueError:
            return None


_TEXT_VERBS = frozenset(
    {CommandId.FILE, CommandId.INSERT, CommandId.APPEND, CommandId.CHANGE}
)


@dataclass(frozen=True, slots=True)
class Command:
    """One parsed token: target address, verb, and repeat count.

    ``text`` is filled in by the session for verbs that need a text line
    (a file name for ``f``; the new content for ``i``/``a``/``c``).
    """

    line: int
    id: CommandId
    count: int = 1
    text: Optional[str] = None

    def __post_init__(self) -> None:
        if self.line < 0:
            raise ValueError("line cannot be negative")
        if self.count < 1:
            raise ValueError("count must be positive")

    def with_text(self, text: str) -> "Command":
        return Command(line=self.line, id=self.id, count=self.count, text=text)


__all__ = ["Command", "CommandId"]
