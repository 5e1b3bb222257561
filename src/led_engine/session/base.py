"""Session states and the event bus shared with front ends."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict


class SessionState(str, Enum):
    """Where the command loop is: awaiting a token, a text line, or done."""

    COMMAND = "command"
    TEXT = "text"
    EXIT = "exit"


class SessionBus:
    """Minimal event bus letting hosts observe the command loop."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)
