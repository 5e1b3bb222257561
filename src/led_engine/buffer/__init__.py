"""Line buffer, cursor state, and front-end snapshot types."""

from .buffer import Buffer, Transaction
from .document import DEFAULT_CAPACITY, LineStore, split_lines
from .state import BufferState, Cursor
from .sync import BufferMirror, BufferValidationError
from .validation import ensure_address, ensure_char, ensure_cursor

__all__ = [
    "Buffer",
    "BufferState",
    "Cursor",
    "DEFAULT_CAPACITY",
    "LineStore",
    "Transaction",
    "BufferMirror",
    "BufferValidationError",
    "ensure_address",
    "ensure_char",
    "ensure_cursor",
    "split_lines",
]
