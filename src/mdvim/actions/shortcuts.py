"""Direct editing shortcuts evaluated while the interpreter is resting.

Every action takes ``(context, match)`` like any keymap action and returns
an :class:`~mdvim.modes.Outcome`; text-mutating actions run inside a single
edit group so one undo step reverts the whole shortcut.
"""

from __future__ import annotations

from mdvim.buffer import MoveMode, MoveOperation, TextCursor
from mdvim.modes.base_mode import InterpreterMode, ModeContext, Outcome
from mdvim.modes.state import require_state

BOLD_MARKER = "**"
ITALIC_MARKER = "*"


def _selected_rows(buffer: TextCursor) -> range:
    start, end = buffer.selection_bounds()
    return range(buffer.line_number(start), buffer.line_number(end) + 1)


def indent(context: ModeContext, match) -> Outcome:
    del match
    buffer = context.buffer
    text = context.config.indent_text
    with buffer.edit_group("shortcut::indent"):
        if buffer.has_selection():
            for row in _selected_rows(buffer):
                start = buffer.line_start(row)
                if start is not None:
                    buffer.insert_at(start, text)
        else:
            buffer.insert_text(text)
    return Outcome.HANDLED


def outdent(context: ModeContext, match) -> Outcome:
    """Strip one indent level from every line the cursor or selection touches.

    A leading tab goes in one step. Leading spaces go one at a time, or up to
    ``tab_width`` at once when tabs are expanded to spaces.
    """

    del match
    buffer = context.buffer
    config = context.config
    with buffer.edit_group("shortcut::outdent"):
        for row in _selected_rows(buffer):
            line = buffer.line_text(row)
            start = buffer.line_start(row)
            if not line or start is None:
                continue
            if line[0] == "\t":
                width = 1
            elif line[0] == " " and config.expand_tab:
                head = line[: config.tab_width]
                width = len(head) - len(head.lstrip(" "))
            elif line[0] == " ":
                width = 1
            else:
                continue
            buffer.delete_range(start, start + width)
    return Outcome.HANDLED


def _wrap(context: ModeContext, marker: str, label: str) -> Outcome:
    buffer = context.buffer
    size = len(marker)
    with buffer.edit_group(label):
        if buffer.has_selection():
            start, end = buffer.selection_bounds()
            forward = buffer.position == end
            buffer.clear_selection()
            buffer.set_position(start)
            buffer.insert_text(marker)
            # the opening marker shifted the old end right by its length
            buffer.set_position(end + size)
            buffer.insert_text(marker)
            first, second = (start + size, end + size)
            if not forward:
                first, second = second, first
            buffer.set_position(first)
            buffer.set_position(second, MoveMode.EXTEND)
        else:
            column = buffer.column()
            if buffer.line_text()[column : column + size] == marker:
                buffer.move(MoveOperation.RIGHT, count=size)
            else:
                buffer.insert_text(marker * 2)
                buffer.move(MoveOperation.LEFT, count=size)
    return Outcome.HANDLED


def wrap_bold(context: ModeContext, match) -> Outcome:
    del match
    return _wrap(context, BOLD_MARKER, "shortcut::bold")


def wrap_italic(context: ModeContext, match) -> Outcome:
    del match
    return _wrap(context, ITALIC_MARKER, "shortcut::italic")


def enter_composing(context: ModeContext, match) -> Outcome:
    del match
    require_state(context).enter(InterpreterMode.COMPOSING)
    return Outcome.HANDLED


def delete_previous_char(context: ModeContext, match) -> Outcome:
    del match
    with context.buffer.edit_group("shortcut::backspace"):
        context.buffer.delete_previous_char()
    return Outcome.HANDLED


def _delete_backward(buffer: TextCursor, op: MoveOperation, label: str) -> None:
    buffer.clear_selection()
    with buffer.edit_group(label):
        if buffer.move(op, MoveMode.EXTEND):
            buffer.remove_selected_text()


def delete_to_line_start(context: ModeContext, match) -> Outcome:
    """Delete back to the line start; at a line start, join with the word before."""

    del match
    buffer = context.buffer
    if buffer.column() == 0:
        _delete_backward(buffer, MoveOperation.PREVIOUS_WORD, "shortcut::kill_line")
    else:
        _delete_backward(buffer, MoveOperation.START_OF_LINE, "shortcut::kill_line")
    return Outcome.HANDLED


def delete_previous_word(context: ModeContext, match) -> Outcome:
    del match
    _delete_backward(context.buffer, MoveOperation.PREVIOUS_WORD, "shortcut::kill_word")
    return Outcome.HANDLED


def _cancel(context: ModeContext) -> bool:
    state = require_state(context)
    if state.is_modal:
        state.reset()
        return True
    if context.buffer.has_selection():
        context.buffer.clear_selection()
        return True
    return False


def cancel_escape(context: ModeContext, match) -> Outcome:
    """Leave modal editing, else drop the selection; otherwise let the host have Esc."""

    del match
    return Outcome.HANDLED if _cancel(context) else Outcome.UNHANDLED


def cancel_bracket(context: ModeContext, match) -> Outcome:
    del match
    _cancel(context)
    return Outcome.HANDLED


__all__ = [
    "BOLD_MARKER",
    "ITALIC_MARKER",
    "cancel_bracket",
    "cancel_escape",
    "delete_previous_char",
    "delete_previous_word",
    "delete_to_line_start",
    "enter_composing",
    "indent",
    "outdent",
    "wrap_bold",
    "wrap_italic",
]
