from typing import List

import pytest

from mdvim.buffer import (
    Buffer,
    BufferDocument,
    BufferValidationError,
    MoveMode,
    MoveOperation,
    RegisterBank,
)


def make_buffer(text: str, position: int = 0) -> Buffer:
    buffer = Buffer.from_text(text)
    buffer.set_position(position)
    return buffer


def positions(buffer: Buffer, op: MoveOperation, times: int) -> List[int]:
    seen = []
    for _ in range(times):
        buffer.move(op)
        seen.append(buffer.position)
    return seen


def test_document_line_index() -> None:
    document = BufferDocument.from_text("ab\r\ncd\n")

    assert document.text == "ab\ncd\n"
    assert document.line_count == 3
    assert document.line_start(1) == 3
    assert document.line_end(0) == 2
    assert document.get_line(2) == ""
    assert document.find_line(2) == 0
    assert document.find_line(3) == 1


def test_document_replace_bumps_version() -> None:
    document = BufferDocument.from_text("hello")
    updated = document.replace(0, 1, "J")

    assert updated.text == "Jello"
    assert updated.version == document.version + 1
    assert document.text == "hello"


def test_character_motions_clamp_at_document_edges() -> None:
    buffer = make_buffer("hello")

    assert buffer.move(MoveOperation.RIGHT, count=10) is True
    assert buffer.position == 5
    assert buffer.move(MoveOperation.RIGHT) is False
    assert buffer.move(MoveOperation.LEFT, count=2) is True
    assert buffer.position == 3


def test_vertical_motion_clamps_column_to_line_length() -> None:
    buffer = make_buffer("long line\nab\nlonger", position=7)

    buffer.move(MoveOperation.DOWN)
    assert buffer.position == 12

    buffer.move(MoveOperation.DOWN)
    assert (buffer.line_number(), buffer.column()) == (2, 2)

    assert buffer.move(MoveOperation.DOWN) is False


def test_next_and_previous_word() -> None:
    buffer = make_buffer("foo bar, baz")

    assert positions(buffer, MoveOperation.NEXT_WORD, 3) == [4, 7, 9]

    buffer.set_position(12)
    assert positions(buffer, MoveOperation.PREVIOUS_WORD, 3) == [9, 7, 4]


def test_next_word_stops_at_line_break() -> None:
    buffer = make_buffer("ab\n  cd")

    assert positions(buffer, MoveOperation.NEXT_WORD, 2) == [2, 5]


def test_word_edges_do_not_move_off_blanks() -> None:
    buffer = make_buffer("foo bar")

    assert buffer.move(MoveOperation.END_OF_WORD) is True
    assert buffer.position == 3
    assert buffer.move(MoveOperation.END_OF_WORD) is False
    assert buffer.move(MoveOperation.START_OF_WORD) is True
    assert buffer.position == 0
    assert buffer.move(MoveOperation.START_OF_WORD) is False


def test_line_motions() -> None:
    buffer = make_buffer("one\ntwo\nthree", position=5)

    buffer.move(MoveOperation.END_OF_LINE)
    assert buffer.position == 7
    buffer.move(MoveOperation.START_OF_LINE)
    assert buffer.position == 4
    buffer.move(MoveOperation.END)
    assert buffer.position == 13
    buffer.move(MoveOperation.START)
    assert buffer.position == 0


def test_extend_keeps_anchor() -> None:
    buffer = make_buffer("hello world", position=2)

    buffer.move(MoveOperation.NEXT_WORD, MoveMode.EXTEND)

    assert buffer.has_selection()
    assert buffer.selection_bounds() == (2, 6)
    assert buffer.selected_text() == "llo "
    assert buffer.mirror().selection == (2, 6)

    buffer.move(MoveOperation.LEFT)
    assert not buffer.has_selection()


def test_select_line_includes_terminator() -> None:
    buffer = make_buffer("one\ntwo\nthree", position=5)

    buffer.select_line()

    assert buffer.selected_text() == "two\n"


def test_select_last_line_takes_previous_terminator() -> None:
    buffer = make_buffer("one\ntwo\nthree", position=10)

    buffer.select_line()
    buffer.remove_selected_text()

    assert buffer.text == "one\ntwo"
    assert buffer.position == 7


def test_select_only_line() -> None:
    buffer = make_buffer("solo", position=2)
    buffer.select_line()
    assert buffer.selection_bounds() == (0, 4)


def test_insert_text_replaces_selection() -> None:
    buffer = make_buffer("hello world")
    buffer.set_position(6)
    buffer.set_position(11, MoveMode.EXTEND)

    buffer.insert_text("there")

    assert buffer.text == "hello there"
    assert buffer.position == 11
    assert not buffer.has_selection()


def test_insert_at_before_cursor_shifts_cursor() -> None:
    buffer = make_buffer("abc", position=2)

    buffer.insert_at(0, "  ")

    assert buffer.text == "  abc"
    assert buffer.position == 4


def test_insert_at_rejects_out_of_range_offset() -> None:
    buffer = make_buffer("abc")

    with pytest.raises(BufferValidationError) as excinfo:
        buffer.insert_at(10, "x")

    assert excinfo.value.offset == 10
    assert buffer.text == "abc"


def test_set_position_clamps() -> None:
    buffer = make_buffer("abc")
    buffer.set_position(99)
    assert buffer.position == 3
    buffer.set_position(-4)
    assert buffer.position == 0


def test_delete_chars_at_edges() -> None:
    buffer = make_buffer("ab", position=2)
    assert buffer.delete_char() is False
    assert buffer.delete_previous_char() is True
    assert buffer.text == "a"

    buffer.set_position(0)
    assert buffer.delete_previous_char() is False


def test_edit_group_is_one_undo_step() -> None:
    buffer = make_buffer("mid", position=0)

    with buffer.edit_group("pair"):
        buffer.insert_text("<")
        buffer.set_position(4)
        buffer.insert_text(">")

    assert buffer.text == "<mid>"
    assert buffer.undo_timeline.labels() == ["pair"]

    assert buffer.undo() is True
    assert buffer.text == "mid"
    assert buffer.position == 0
    assert buffer.undo() is False

    assert buffer.redo() is True
    assert buffer.text == "<mid>"
    assert buffer.position == 5


def test_edit_group_closes_on_exception() -> None:
    buffer = make_buffer("abc", position=3)

    with pytest.raises(RuntimeError):
        with buffer.edit_group("partial"):
            buffer.insert_text("d")
            raise RuntimeError("boom")

    assert buffer.undo_timeline.labels() == ["partial"]
    buffer.insert_text("e")
    assert buffer.undo_timeline.labels() == ["partial", "insert_text"]

    buffer.undo()
    buffer.undo()
    assert buffer.text == "abc"


def test_edit_group_without_changes_records_nothing() -> None:
    buffer = make_buffer("abc")

    with buffer.edit_group("noop"):
        buffer.move(MoveOperation.RIGHT)

    assert len(buffer.undo_timeline) == 0


def test_new_edit_drops_redo_tail() -> None:
    buffer = make_buffer("")
    buffer.insert_text("a")
    buffer.insert_text("b")
    buffer.undo()

    buffer.insert_text("c")

    assert buffer.text == "ac"
    assert buffer.undo_timeline.can_redo() is False
    assert buffer.redo() is False


def test_register_bank_clipboard_mirrors_unnamed() -> None:
    registers = RegisterBank()
    pushed: List[str] = []
    registers.on_clipboard_set = pushed.append

    registers.set_text("copied")

    assert registers.get_text() == "copied"
    assert registers.get('"').text == "copied"
    assert pushed == ["copied"]


def test_vertical_goal_column_resets_after_horizontal_move() -> None:
    buffer = make_buffer("abcdef\n\nghijkl\nmnopqr", position=4)

    buffer.move(MoveOperation.DOWN, count=2)
    assert buffer.column() == 4

    buffer.move(MoveOperation.LEFT)
    buffer.move(MoveOperation.DOWN)
    assert buffer.column() == 3


def test_vertical_goal_column_resets_after_edit() -> None:
    buffer = make_buffer("abcdef\n\nghijkl", position=4)
    buffer.move(MoveOperation.DOWN)

    buffer.insert_text("z")
    buffer.move(MoveOperation.DOWN)

    assert buffer.column() == 1
