"""Modal command interpreter: counts, prefixes, motions, and edits.

Only reached while the view is composing a command or extending a visual
selection. Each keystroke is classified by a handler from the key table;
handlers check their preconditions before touching the pending buffer and
return an :class:`Outcome`. ``handle_key`` then applies one shared tail:
``HANDLED_AND_CONTINUE`` re-arms the decay timer, anything unrecognized
drops the view back to resting.
"""

from __future__ import annotations

from functools import partial
from typing import Callable, Dict

from mdvim.buffer import MoveMode, MoveOperation, TextCursor
from mdvim.runtime import telemetry

from .base_mode import InterpreterMode, KeyInput, ModeContext, Outcome
from .state import InterpreterState

Handler = Callable[[KeyInput], Outcome]

CONTINUE = Outcome.HANDLED_AND_CONTINUE
UNHANDLED = Outcome.UNHANDLED


class ModalInterpreter:
    def __init__(self, context: ModeContext, state: InterpreterState) -> None:
        self.context = context
        self.state = state
        self._handlers: Dict[str, Handler] = {
            "CONTROL": self._ignore,
            "SHIFT": self._ignore,
            "h": partial(self._step, MoveOperation.LEFT),
            "j": partial(self._step, MoveOperation.DOWN),
            "k": partial(self._step, MoveOperation.UP),
            "l": partial(self._step, MoveOperation.RIGHT),
            "x": self._delete_chars,
            "w": self._next_word,
            "e": self._end_of_word,
            "b": self._start_of_word,
            "0": self._zero,
            "$": self._end_of_line,
            "^": self._first_non_space,
            "g": self._goto,
            "v": self._visual,
            "y": self._yank,
            "d": self._delete,
        }
        for digit in "123456789":
            self._handlers[digit] = self._digit

    @property
    def buffer(self) -> TextCursor:
        return self.context.buffer

    @property
    def move_mode(self) -> MoveMode:
        return MoveMode.EXTEND if self.state.is_visual else MoveMode.MOVE

    def classify(self, key: KeyInput) -> Outcome:
        handler = self._handlers.get(key.key)
        if handler is None:
            return UNHANDLED
        return handler(key)

    def handle_key(self, key: KeyInput) -> Outcome:
        with telemetry.span(
            "interpreter::classify",
            component="interpreter",
            metadata={"key": key.token, "mode": self.state.mode},
        ) as handle:
            outcome = self.classify(key)
            handle.add_metadata("outcome", outcome)

        if outcome is CONTINUE:
            self.state.timer.restart()
        else:
            self._leave()
            outcome = Outcome.HANDLED
        key.accept()
        return outcome

    def handle_timeout(self) -> None:
        """Decay: composing collapses to resting, visual selection persists."""

        if self.state.is_visual:
            self.state.timer.start()
            return
        telemetry.record_event(
            "interpreter.timeout", data={"pending": "".join(self.state.pending)}
        )
        self.state.set_mode(InterpreterMode.RESTING)
        self.state.pending.clear()

    def _leave(self) -> None:
        self.state.timer.stop()
        if self.state.is_visual:
            self.buffer.clear_selection()
        self.state.set_mode(InterpreterMode.RESTING)
        self.state.pending.clear()

    def _take_repeat(self) -> int:
        repeat = self.state.pending.repeat()
        self.state.pending.clear()
        return repeat

    # -- key handlers --------------------------------------------------------

    def _ignore(self, key: KeyInput) -> Outcome:
        # bare Ctrl/Shift presses arrive ahead of the chord they belong to
        del key
        return CONTINUE

    def _step(self, op: MoveOperation, key: KeyInput) -> Outcome:
        if not key.unmodified:
            return UNHANDLED
        self.buffer.move(op, self.move_mode, self._take_repeat())
        return CONTINUE

    def _digit(self, key: KeyInput) -> Outcome:
        if not key.unmodified:
            return UNHANDLED
        # a count cannot follow a letter prefix: the digit is dropped and the
        # prefix keeps waiting, rather than abandoning the command as an
        # unrecognized key would
        if self.state.pending.digit_allowed():
            self.state.pending.push_digit(key.key)
        return CONTINUE

    def _delete_chars(self, key: KeyInput) -> Outcome:
        if not key.unmodified:
            return UNHANDLED
        repeat = self._take_repeat()
        with self.buffer.edit_group("interpreter::x"):
            if self.buffer.has_selection():
                self.context.clipboard.set_text(self.buffer.selected_text())
                self.buffer.remove_selected_text()
            else:
                for _ in range(repeat):
                    if not self.buffer.delete_char():
                        break
        return CONTINUE

    def _next_word(self, key: KeyInput) -> Outcome:
        if not key.unmodified:
            return UNHANDLED
        self.buffer.move(MoveOperation.NEXT_WORD, self.move_mode, self._take_repeat())
        return CONTINUE

    def _end_of_word(self, key: KeyInput) -> Outcome:
        if not key.unmodified:
            return UNHANDLED
        repeat = self._take_repeat()
        mode = self.move_mode
        if self.buffer.move(MoveOperation.END_OF_WORD, mode):
            repeat -= 1
        if repeat:
            self.buffer.move(MoveOperation.NEXT_WORD, mode, repeat)
            self.buffer.move(MoveOperation.END_OF_WORD, mode)
        return CONTINUE

    def _start_of_word(self, key: KeyInput) -> Outcome:
        if not key.unmodified:
            return UNHANDLED
        repeat = self._take_repeat()
        mode = self.move_mode
        if self.buffer.move(MoveOperation.START_OF_WORD, mode):
            repeat -= 1
        if repeat:
            self.buffer.move(MoveOperation.PREVIOUS_WORD, mode, repeat)
        return CONTINUE

    def _zero(self, key: KeyInput) -> Outcome:
        if not key.unmodified:
            return UNHANDLED
        if self.state.pending.count == 0:
            self.buffer.move(MoveOperation.START_OF_LINE, self.move_mode)
        else:
            self.state.pending.push_digit("0")
        return CONTINUE

    def _end_of_line(self, key: KeyInput) -> Outcome:
        if not key.shift_only or self.state.pending:
            return UNHANDLED
        self.buffer.move(MoveOperation.END_OF_LINE, self.move_mode)
        return CONTINUE

    def _first_non_space(self, key: KeyInput) -> Outcome:
        if not key.shift_only or self.state.pending:
            return UNHANDLED
        mode = self.move_mode
        line = self.buffer.line_text()
        self.buffer.move(MoveOperation.START_OF_LINE, mode)
        if line.strip():
            column = self.buffer.column()
            while column < len(line) and line[column].isspace():
                if not self.buffer.move(MoveOperation.NEXT_WORD, mode):
                    break
                column = self.buffer.column()
        return CONTINUE

    def _goto(self, key: KeyInput) -> Outcome:
        pending = self.state.pending
        if key.shift_only:
            return self._goto_line(pending.count)
        if not key.unmodified:
            return UNHANDLED
        if not pending:
            pending.push_prefix("g")
            return CONTINUE
        if pending.is_exactly("g"):
            pending.clear()
            self.buffer.move(MoveOperation.START, self.move_mode)
            return CONTINUE
        return UNHANDLED

    def _goto_line(self, line_number: int) -> Outcome:
        self.state.pending.clear()
        start = self.buffer.line_start(line_number - 1) if line_number else None
        if start is None:
            self.buffer.move(MoveOperation.END, self.move_mode)
        else:
            self.buffer.set_position(start, self.move_mode)
        return CONTINUE

    def _visual(self, key: KeyInput) -> Outcome:
        if not key.unmodified or self.state.pending or self.state.is_visual:
            return UNHANDLED
        self.state.set_mode(InterpreterMode.VISUAL)
        return CONTINUE

    def _yank(self, key: KeyInput) -> Outcome:
        if not key.unmodified or self.state.pending:
            return UNHANDLED
        if self.buffer.has_selection():
            self.context.clipboard.set_text(self.buffer.selected_text())
        return CONTINUE

    def _delete(self, key: KeyInput) -> Outcome:
        if not key.unmodified:
            return UNHANDLED
        pending = self.state.pending
        if not pending:
            if self.buffer.has_selection():
                self.buffer.remove_selected_text()
            else:
                pending.push_prefix("d")
            return CONTINUE
        if pending.is_exactly("d"):
            pending.clear()
            with self.buffer.edit_group("interpreter::dd"):
                self.buffer.select_line()
                self.buffer.remove_selected_text()
            return CONTINUE
        return UNHANDLED


__all__ = ["ModalInterpreter"]
