"""Reference text buffer: document, cursor, registers, and undo in one façade."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Optional

from mdvim.runtime import telemetry

from .document import BufferDocument
from .motions import MoveOperation, step
from .registers import RegisterBank
from .state import CursorState, MoveMode
from .sync import BufferMirror
from .undo import UndoEntry, UndoTimeline
from .validation import clamp_offset, ensure_offset, ensure_range

_VERTICAL = (MoveOperation.UP, MoveOperation.DOWN)


class Buffer:
    """Offset-based buffer implementing the ``TextCursor`` capability."""

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        cursor: Optional[CursorState] = None,
        registers: Optional[RegisterBank] = None,
        undo: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.cursor = cursor or CursorState()
        self.registers = registers or RegisterBank()
        self.undo_timeline = undo or UndoTimeline()
        self._group: Optional[Transaction] = None

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        return cls(name=name, document=BufferDocument.from_text(text))

    @property
    def text(self) -> str:
        return self.document.text

    @property
    def position(self) -> int:
        return self.cursor.position

    @property
    def anchor(self) -> int:
        return self.cursor.anchor

    @property
    def line_count(self) -> int:
        return self.document.line_count

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.text,
            position=self.cursor.position,
            anchor=self.cursor.anchor,
            line=self.line_number(),
            column=self.column(),
            attributes=dict(attributes or {}),
        )

    # -- motions -----------------------------------------------------------

    def move(
        self, op: MoveOperation, mode: MoveMode = MoveMode.MOVE, count: int = 1
    ) -> bool:
        start = self.cursor.position
        goal: Optional[int] = None
        if op in _VERTICAL:
            if self.cursor.preferred_column is None:
                self.cursor.preferred_column = self.column()
            goal = self.cursor.preferred_column
        target = start
        for _ in range(max(1, count)):
            following = step(self.document, target, op, goal)
            if following == target:
                break
            target = following
        self.cursor.set_position(target, mode)
        if goal is None:
            self.cursor.preferred_column = None
        return target != start

    def set_position(self, offset: int, mode: MoveMode = MoveMode.MOVE) -> None:
        self.cursor.set_position(clamp_offset(self.document, offset), mode)
        self.cursor.preferred_column = None

    def line_number(self, offset: Optional[int] = None) -> int:
        target = self.cursor.position if offset is None else offset
        return self.document.find_line(clamp_offset(self.document, target))

    def line_start(self, row: int) -> Optional[int]:
        if row < 0 or row >= self.document.line_count:
            return None
        return self.document.line_start(row)

    def line_text(self, row: Optional[int] = None) -> str:
        return self.document.get_line(self.line_number() if row is None else row)

    def column(self) -> int:
        return self.cursor.position - self.document.line_start(self.line_number())

    # -- selection ---------------------------------------------------------

    def has_selection(self) -> bool:
        return self.cursor.has_selection

    def selection_bounds(self) -> tuple[int, int]:
        return self.cursor.selection_start, self.cursor.selection_end

    def selected_text(self) -> str:
        start, end = self.selection_bounds()
        return self.text[start:end]

    def clear_selection(self) -> None:
        self.cursor.clear_selection()

    def select_line(self) -> None:
        """Select the current line with its terminator.

        The last line has no terminator of its own, so the one ending the
        previous line is taken instead.
        """

        row = self.line_number()
        start = self.document.line_start(row)
        end = self.document.line_end(row)
        if row + 1 < self.document.line_count:
            end += 1
        elif row > 0:
            start -= 1
        self.cursor.anchor = start
        self.cursor.position = end
        self.cursor.preferred_column = None

    # -- edits -------------------------------------------------------------

    def edit_group(self, label: str) -> ContextManager["Transaction"]:
        return Transaction(self, label)

    def insert_text(self, text: str) -> None:
        with self.edit_group("insert_text"):
            start, end = self.selection_bounds()
            self._replace(start, end, text)
            self.cursor.set_position(start + len(text))

    def insert_at(self, offset: int, text: str) -> None:
        offset = ensure_offset(self.document, offset)
        with self.edit_group("insert_at"):
            self._replace(offset, offset, text)

    def delete_range(self, start: int, end: int) -> str:
        start, end = ensure_range(self.document, start, end)
        removed = self.text[start:end]
        if removed:
            with self.edit_group("delete_range"):
                self._replace(start, end, "")
        return removed

    def delete_char(self) -> bool:
        if self.cursor.has_selection:
            return bool(self.remove_selected_text())
        position = self.cursor.position
        if position >= len(self.document):
            return False
        with self.edit_group("delete_char"):
            self._replace(position, position + 1, "")
        return True

    def delete_previous_char(self) -> bool:
        if self.cursor.has_selection:
            return bool(self.remove_selected_text())
        position = self.cursor.position
        if position == 0:
            return False
        with self.edit_group("delete_previous_char"):
            self._replace(position - 1, position, "")
        return True

    def remove_selected_text(self) -> str:
        if not self.cursor.has_selection:
            return ""
        start, end = self.selection_bounds()
        removed = self.text[start:end]
        with self.edit_group("remove_selection"):
            self._replace(start, end, "")
            self.cursor.set_position(start)
        return removed

    def undo(self) -> bool:
        entry = self.undo_timeline.undo()
        if entry is None:
            return False
        self.document = self.document.with_text(entry.before_text)
        self.cursor = entry.cursor_before.copy()
        return True

    def redo(self) -> bool:
        entry = self.undo_timeline.redo()
        if entry is None:
            return False
        self.document = self.document.with_text(entry.after_text)
        self.cursor = entry.cursor_after.copy()
        return True

    def _replace(self, start: int, end: int, text: str) -> None:
        self.document = self.document.replace(start, end, text)
        self.cursor.position = _shift(self.cursor.position, start, end, len(text))
        self.cursor.anchor = _shift(self.cursor.anchor, start, end, len(text))
        self.cursor.preferred_column = None


class Transaction(AbstractContextManager["Transaction"]):
    """Atomic edit group; nested groups fold into the outermost one.

    The undo entry is recorded on exit even when the body raised, so a
    partially applied command still undoes as a single step.
    """

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._outer = False
        self._span_cm: Optional[ContextManager[object]] = None
        self._before_text = ""
        self._before_cursor: Optional[CursorState] = None

    def __enter__(self) -> "Transaction":
        if self.buffer._group is not None:
            return self
        self._outer = True
        self.buffer._group = self
        self._before_text = self.buffer.text
        self._before_cursor = self.buffer.cursor.copy()
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if not self._outer:
            return False
        self.buffer._group = None
        try:
            changed = self.buffer.text != self._before_text
            if changed and self._before_cursor is not None:
                self.buffer.undo_timeline.push(
                    UndoEntry(
                        label=self.label,
                        before_text=self._before_text,
                        after_text=self.buffer.text,
                        cursor_before=self._before_cursor,
                        cursor_after=self.buffer.cursor.copy(),
                    )
                )
        finally:
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
        return False


def _shift(offset: int, start: int, end: int, inserted: int) -> int:
    if offset < start:
        return offset
    if offset > end:
        return offset - (end - start) + inserted
    if start == end:
        return offset + inserted
    return start + inserted if offset == end else start
