"""Executes parsed commands against a Buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from led_engine.buffer import DEFAULT_CAPACITY, Buffer
from led_engine.runtime import telemetry
from led_engine.storage import DiskFileStore, FileStore, ResourceError

from .models import Command, CommandId


@dataclass(frozen=True, slots=True)
class Rendered:
    text: str


@dataclass(frozen=True, slots=True)
class Mutated:
    first: int
    last: int


@dataclass(frozen=True, slots=True)
class EndOfBuffer:
    """An address ran past the last populated line.

    ``rendered`` holds whatever a repeated read printed before stopping.
    """

    address: int
    rendered: str = ""


@dataclass(frozen=True, slots=True)
class InvalidLine:
    address: int


@dataclass(frozen=True, slots=True)
class Exit:
    pass


EngineResult = Union[Rendered, Mutated, EndOfBuffer, InvalidLine, Exit]
Handler = Callable[["BufferEngine", Command], EngineResult]


def render(result: EngineResult) -> str:
    """Text shown to the user for ``result``."""

    if isinstance(result, Rendered):
        return result.text
    if isinstance(result, EndOfBuffer):
        return f"{result.rendered}EOF\n"
    if isinstance(result, InvalidLine):
        return "Invalid line number\n"
    if isinstance(result, Exit):
        return "Exiting program\n"
    return ""


def _numbered(address: int, content: str) -> str:
    return f"{address}: {content}\n"


class BufferEngine:
    """Owns a Buffer and applies commands to it.

    ``path`` is the active backing file; ``None`` means ``w`` renders the
    buffer to the output instead of writing anywhere.
    """

    def __init__(
        self,
        buffer: Optional[Buffer] = None,
        *,
        files: Optional[FileStore] = None,
        path: Optional[str] = None,
        capacity: int = DEFAULT_CAPACITY,
    ) -> None:
        self.buffer = buffer or Buffer.load((), capacity=capacity)
        self.files: FileStore = files or DiskFileStore()
        self.path = path
        self.capacity = capacity

    def execute(self, cmd: Command) -> EngineResult:
        handler = _HANDLERS[cmd.id]
        with telemetry.span(
            f"engine::{cmd.id.name.lower()}",
            component="engine",
            metadata={"line": cmd.line, "count": cmd.count},
        ) as handle:
            result = handler(self, cmd)
            handle.add_metadata("result", type(result).__name__)
        return result

    def open_file(self, path: str, *, strict: bool = False) -> Rendered:
        """Switch the backing file and reload the buffer from it.

        An unreadable file starts a fresh empty buffer for ``path`` unless
        ``strict`` is set, in which case the ResourceError propagates and the
        engine is left untouched.
        """

        try:
            existed = self.files.exists(path)
            lines = self.files.load(path) if existed else []
        except ResourceError as exc:
            if strict:
                raise
            telemetry.record_event(
                "file.open_failed",
                level="warning",
                data={"path": path, "reason": str(exc)},
            )
            existed, lines = False, []
        self.path = path
        self.buffer = Buffer.load(lines, name=path, capacity=self.capacity)
        verb = "Editing" if existed else "Creating"
        return Rendered(f"{verb} file: {path}\n")


def _file(engine: BufferEngine, cmd: Command) -> EngineResult:
    path = (cmd.text or "").strip()
    if not path:
        return Rendered("No file name\n")
    return engine.open_file(path)


def _view(engine: BufferEngine, cmd: Command) -> EngineResult:
    lines = engine.buffer.save()
    return Rendered("".join(_numbered(n, text) for n, text in enumerate(lines, 1)))


def _read(engine: BufferEngine, cmd: Command) -> EngineResult:
    buffer = engine.buffer
    if buffer.is_empty():
        return EndOfBuffer(max(cmd.line, 1))
    if cmd.line < 1:
        return InvalidLine(cmd.line)

    out: List[str] = []
    address = cmd.line
    for _ in range(cmd.count):
        if address > buffer.last_line:
            return EndOfBuffer(address, "".join(out))
        out.append(_numbered(address, buffer.get_line(address)))
        buffer.set_current_line(address)
        address += 1
    return Rendered("".join(out))


def _line(engine: BufferEngine, cmd: Command) -> EngineResult:
    return Rendered(f"Line: {engine.buffer.current_line}\n")


def _setline(engine: BufferEngine, cmd: Command) -> EngineResult:
    if cmd.line < 1:
        return InvalidLine(cmd.line)
    if cmd.line > engine.buffer.last_line:
        return EndOfBuffer(cmd.line)
    engine.buffer.set_current_line(cmd.line)
    return Rendered(f"Set Line: {cmd.line}\n")


def _edit(apply: Callable[[Buffer, int, str], None]) -> Handler:
    def handler(engine: BufferEngine, cmd: Command) -> EngineResult:
        if cmd.text is None:
            raise ValueError(f"command '{cmd.id.value}' requires text")
        buffer = engine.buffer
        first = cmd.line
        if first == 0 and buffer.is_empty():
            first = 1
        if first < 1:
            return InvalidLine(cmd.line)

        last = first + cmd.count - 1
        for address in range(first, last + 1):
            apply(buffer, address, cmd.text)
        buffer.set_current_line(last)
        return Mutated(first, last)

    return handler


def _write(engine: BufferEngine, cmd: Command) -> EngineResult:
    lines = engine.buffer.save()
    if engine.path is None:
        return Rendered("Writing file\n" + "".join(f"{line}\n" for line in lines))
    try:
        engine.files.save(engine.path, lines)
    except ResourceError as exc:
        telemetry.record_event(
            "file.write_failed",
            level="error",
            data={"path": engine.path, "reason": str(exc)},
        )
        return Rendered(f"Cannot write file: {engine.path}\n")
    return Rendered(f"Writing file: {engine.path}\n")


def _exit(engine: BufferEngine, cmd: Command) -> EngineResult:
    return Exit()


_HANDLERS: Dict[CommandId, Handler] = {
    CommandId.FILE: _file,
    CommandId.VIEW: _view,
    CommandId.READ: _read,
    CommandId.LINE: _line,
    CommandId.SETLINE: _setline,
    CommandId.INSERT: _edit(Buffer.insert_text),
    CommandId.APPEND: _edit(Buffer.append_text),
    CommandId.CHANGE: _edit(Buffer.change_line),
    CommandId.WRITE: _write,
    CommandId.EXIT: _exit,
}


__all__ = [
    "BufferEngine",
    "EndOfBuffer",
    "EngineResult",
    "Exit",
    "InvalidLine",
    "Mutated",
    "Rendered",
    "render",
]
