"""Command grammar and the engine that applies commands to a buffer."""

from .engine import (
    BufferEngine,
    EndOfBuffer,
    EngineResult,
    Exit,
    InvalidLine,
    Mutated,
    Rendered,
    render,
)
from .models import Command, CommandId
from .parser import CommandParser, ParseError, parse

__all__ = [
    "BufferEngine",
    "Command",
    "CommandId",
    "CommandParser",
    "EndOfBuffer",
    "EngineResult",
    "Exit",
    "InvalidLine",
    "Mutated",
    "ParseError",
    "Rendered",
    "parse",
    "render",
]
