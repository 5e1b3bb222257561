"""Command/Text state machine around the engine."""

from .base import SessionBus, SessionState
from .editor import EditorSession

__all__ = ["EditorSession", "SessionBus", "SessionState"]
