from __future__ import annotations

import pytest

from led_engine.buffer import Buffer, BufferValidationError, LineStore


def test_load_sets_current_line_and_extent() -> None:
    buffer = Buffer.load(["alpha", "beta"])

    assert buffer.last_line == 2
    assert buffer.current_line == 1
    assert buffer.save() == ["alpha", "beta"]


def test_empty_buffer_has_current_line_zero() -> None:
    buffer = Buffer.load([])

    assert buffer.is_empty()
    assert buffer.current_line == 0
    assert buffer.save() == []


def test_from_text_splits_lines() -> None:
    buffer = Buffer.from_text("one\ntwo\n")

    assert buffer.save() == ["one", "two"]


def test_from_text_splits_on_line_feeds_only() -> None:
    buffer = Buffer.from_text("page\x0cbreak\nsep\u2028arated\r\n")

    assert buffer.save() == ["page\x0cbreak", "sep\u2028arated\r"]
    assert buffer.last_line == 2


def test_write_past_extent_fills_gaps_with_empty_lines() -> None:
    buffer = Buffer.load(["first"])

    buffer.change_line(5, "fifth")

    assert buffer.last_line == 5
    assert buffer.save() == ["first", "", "", "", "fifth"]


def test_write_past_capacity_grows_store() -> None:
    buffer = Buffer.load([], capacity=4)

    buffer.change_line(9, "x")

    assert buffer.store.capacity >= 9
    assert buffer.last_line == 9
    assert buffer.get_line(9) == "x"
    assert buffer.get_line(3) == ""


def test_line_store_reserve_doubles_capacity() -> None:
    store = LineStore.allocate(3)

    assert store.reserve(2) is False
    assert store.reserve(7) is True
    assert store.capacity == 12


def test_insert_append_change() -> None:
    buffer = Buffer.load(["middle"])

    buffer.insert_text(1, ">> ")
    buffer.append_text(1, " <<")
    assert buffer.get_line(1) == ">> middle <<"

    buffer.change_line(1, "replaced")
    assert buffer.get_line(1) == "replaced"


def test_set_current_line_rejects_out_of_range() -> None:
    buffer = Buffer.load(["a", "b"])

    buffer.set_current_line(2)
    assert buffer.current_line == 2

    with pytest.raises(BufferValidationError):
        buffer.set_current_line(3)


def test_non_positive_address_is_rejected() -> None:
    buffer = Buffer.load(["a"])

    with pytest.raises(BufferValidationError):
        buffer.change_line(0, "nope")


def test_add_char_pads_to_cursor_column() -> None:
    buffer = Buffer.load([""])
    buffer.state.set_cursor(0, 10)

    buffer.add_char("x")

    line = buffer.get_line(1)
    assert len(line) == 11
    assert line == " " * 10 + "x"
    assert buffer.cursor == (0, 11)


def test_add_char_overwrites_inside_line() -> None:
    buffer = Buffer.load(["abc"])
    buffer.state.set_cursor(0, 1)

    buffer.add_char("Z")

    assert buffer.get_line(1) == "aZc"
    assert buffer.cursor == (0, 2)


def test_add_char_requires_single_character() -> None:
    buffer = Buffer.load([""])

    with pytest.raises(BufferValidationError):
        buffer.add_char("xy")


def test_add_newline_creates_line_at_end() -> None:
    buffer = Buffer.load(["only"])
    buffer.state.set_cursor(0, 4)

    buffer.add_newline()

    assert buffer.cursor == (1, 0)
    assert buffer.save() == ["only", ""]
    assert buffer.current_line == 2


def test_add_newline_inside_buffer_keeps_lines() -> None:
    buffer = Buffer.load(["a", "b"])

    buffer.add_newline()

    assert buffer.cursor == (1, 0)
    assert buffer.save() == ["a", "b"]


def test_move_cursor_ignores_negative_overflow() -> None:
    buffer = Buffer.load(["abc"])

    assert buffer.move_cursor(-1, 0) == (0, 0)
    assert buffer.move_cursor(2, 1) == (1, 2)
    assert buffer.move_cursor(-1, -2) == (1, 1)


def test_mirror_reports_text_and_cursor() -> None:
    buffer = Buffer.load(["a", "b"])

    mirror = buffer.mirror(attributes={"path": "x.txt"})

    assert mirror.text == "a\nb"
    assert mirror.cursor == (0, 0)
    assert mirror.current_line == 1
    assert mirror.attributes == {"path": "x.txt"}
