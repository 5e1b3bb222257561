from __future__ import annotations

from typing import Optional, Sequence

import pytest

from led_engine.buffer import Buffer
from led_engine.commands import (
    BufferEngine,
    Command,
    CommandId,
    EndOfBuffer,
    Exit,
    InvalidLine,
    Mutated,
    Rendered,
    parse,
    render,
)
from led_engine.storage import MemoryFileStore, ResourceError


def make_engine(
    lines: Sequence[str] = (),
    *,
    files: Optional[MemoryFileStore] = None,
    path: Optional[str] = None,
) -> BufferEngine:
    return BufferEngine(
        Buffer.load(lines), files=files or MemoryFileStore(), path=path
    )


def run(engine: BufferEngine, token: str, text: Optional[str] = None):
    cmd = parse(token, engine.buffer.current_line)
    if text is not None:
        cmd = cmd.with_text(text)
    return engine.execute(cmd)


def test_view_numbers_every_line() -> None:
    engine = make_engine(["alpha", "beta"])

    result = run(engine, "v")

    assert result == Rendered("1: alpha\n2: beta\n")


def test_view_on_empty_buffer_renders_nothing() -> None:
    assert run(make_engine(), "v") == Rendered("")


def test_read_repeats_until_end_of_buffer() -> None:
    engine = make_engine(["one", "two"])

    result = run(engine, "1r3")

    assert isinstance(result, EndOfBuffer)
    assert result.address == 3
    assert result.rendered == "1: one\n2: two\n"
    assert render(result) == "1: one\n2: two\nEOF\n"
    assert engine.buffer.current_line == 2


def test_read_moves_current_line_to_last_line_read() -> None:
    engine = make_engine(["a", "b", "c", "d"])

    result = run(engine, "2r2")

    assert result == Rendered("2: b\n3: c\n")
    assert engine.buffer.current_line == 3


def test_read_past_end_renders_eof_only() -> None:
    engine = make_engine(["a"])

    result = run(engine, "4r")

    assert result == EndOfBuffer(4)
    assert render(result) == "EOF\n"
    assert engine.buffer.current_line == 1


def test_read_on_empty_buffer_is_end_of_buffer() -> None:
    assert isinstance(run(make_engine(), "r"), EndOfBuffer)


def test_line_reports_current_line() -> None:
    engine = make_engine(["a", "b", "c"])
    engine.buffer.set_current_line(3)

    assert run(engine, "l") == Rendered("Line: 3\n")


@pytest.mark.parametrize("lines", [(), ("a",), ("a", "b", "c")])
def test_setline_zero_is_always_invalid(lines: Sequence[str]) -> None:
    engine = make_engine(lines)

    result = engine.execute(Command(line=0, id=CommandId.SETLINE))

    assert result == InvalidLine(0)
    assert render(result) == "Invalid line number\n"


def test_setline_past_end_is_end_of_buffer() -> None:
    engine = make_engine(["a", "b"])

    assert run(engine, "3s") == EndOfBuffer(3)
    assert engine.buffer.current_line == 1


def test_setline_moves_current_line() -> None:
    engine = make_engine(["a", "b"])

    assert run(engine, "2s") == Rendered("Set Line: 2\n")
    assert engine.buffer.current_line == 2


def test_insert_prepends_text() -> None:
    engine = make_engine(["world"])

    result = run(engine, "1i", "hello ")

    assert result == Mutated(1, 1)
    assert engine.buffer.get_line(1) == "hello world"


def test_append_with_count_touches_consecutive_lines() -> None:
    engine = make_engine(["a", "b", "c"])

    result = run(engine, "1a2", "!")

    assert result == Mutated(1, 2)
    assert engine.buffer.save() == ["a!", "b!", "c"]
    assert engine.buffer.current_line == 2


def test_change_past_end_grows_buffer() -> None:
    engine = make_engine(["a"])

    result = run(engine, "4c", "four")

    assert result == Mutated(4, 4)
    assert engine.buffer.save() == ["a", "", "", "four"]
    assert engine.buffer.last_line == 4
    assert engine.buffer.current_line == 4


def test_edit_on_empty_buffer_targets_first_line() -> None:
    engine = make_engine()

    result = run(engine, "c", "first")

    assert result == Mutated(1, 1)
    assert engine.buffer.save() == ["first"]
    assert engine.buffer.current_line == 1


def test_edit_without_text_is_a_programming_error() -> None:
    engine = make_engine(["a"])

    with pytest.raises(ValueError):
        engine.execute(Command(line=1, id=CommandId.CHANGE))


def test_write_saves_to_backing_file() -> None:
    files = MemoryFileStore()
    engine = make_engine(["a", "b"], files=files, path="notes.txt")

    result = run(engine, "w")

    assert result == Rendered("Writing file: notes.txt\n")
    assert files.files["notes.txt"] == ["a", "b"]


def test_write_without_file_renders_buffer() -> None:
    engine = make_engine(["a", "b"])

    assert run(engine, "w") == Rendered("Writing file\na\nb\n")


def test_write_failure_is_reported_not_raised() -> None:
    files = MemoryFileStore(unreadable={"locked.txt"})
    engine = make_engine(["a"], files=files, path="locked.txt")

    assert run(engine, "w") == Rendered("Cannot write file: locked.txt\n")


def test_file_switch_loads_existing_file() -> None:
    files = MemoryFileStore(files={"todo.txt": ["milk", "eggs"]})
    engine = make_engine(["old"], files=files)

    result = run(engine, "f", "todo.txt")

    assert result == Rendered("Editing file: todo.txt\n")
    assert engine.path == "todo.txt"
    assert engine.buffer.save() == ["milk", "eggs"]
    assert engine.buffer.current_line == 1


def test_file_switch_to_missing_file_creates_empty_buffer() -> None:
    engine = make_engine(["old"])

    result = run(engine, "f", "new.txt")

    assert result == Rendered("Creating file: new.txt\n")
    assert engine.buffer.is_empty()
    assert engine.buffer.current_line == 0


def test_file_switch_falls_back_when_unreadable() -> None:
    files = MemoryFileStore(unreadable={"secret.txt"})
    engine = make_engine(["old"], files=files)

    result = run(engine, "f", "secret.txt")

    assert result == Rendered("Creating file: secret.txt\n")
    assert engine.buffer.is_empty()


def test_strict_open_propagates_resource_error() -> None:
    files = MemoryFileStore(unreadable={"secret.txt"})
    engine = make_engine(["old"], files=files)

    with pytest.raises(ResourceError):
        engine.open_file("secret.txt", strict=True)
    assert engine.buffer.save() == ["old"]
    assert engine.path is None


def test_file_without_name_is_reported() -> None:
    assert run(make_engine(), "f", "  ") == Rendered("No file name\n")


def test_exit() -> None:
    result = run(make_engine(), "q")

    assert result == Exit()
    assert render(result) == "Exiting program\n"
