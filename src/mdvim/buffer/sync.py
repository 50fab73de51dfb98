"""Capability boundary between the interpreter and a host text buffer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ContextManager, Optional, Protocol

from .motions import MoveOperation
from .state import MoveMode


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot of text, cursor, and selection."""

    text: str
    position: int
    anchor: int
    line: int
    column: int
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def selection(self) -> Optional[tuple[int, int]]:
        if self.position == self.anchor:
            return None
        return (min(self.position, self.anchor), max(self.position, self.anchor))


class TextCursor(Protocol):
    """Motion/edit surface the interpreter and shortcuts drive.

    ``mdvim.buffer.Buffer`` implements it; a host widget can provide its own
    implementation instead.
    """

    @property
    def text(self) -> str: ...

    @property
    def position(self) -> int: ...

    @property
    def line_count(self) -> int: ...

    def move(
        self, op: MoveOperation, mode: MoveMode = MoveMode.MOVE, count: int = 1
    ) -> bool: ...

    def set_position(self, offset: int, mode: MoveMode = MoveMode.MOVE) -> None: ...

    def line_number(self, offset: Optional[int] = None) -> int: ...

    def line_start(self, row: int) -> Optional[int]: ...

    def line_text(self, row: Optional[int] = None) -> str: ...

    def column(self) -> int: ...

    def has_selection(self) -> bool: ...

    def selected_text(self) -> str: ...

    def selection_bounds(self) -> tuple[int, int]: ...

    def clear_selection(self) -> None: ...

    def select_line(self) -> None: ...

    def insert_text(self, text: str) -> None: ...

    def insert_at(self, offset: int, text: str) -> None: ...

    def delete_range(self, start: int, end: int) -> str: ...

    def delete_char(self) -> bool: ...

    def delete_previous_char(self) -> bool: ...

    def remove_selected_text(self) -> str: ...

    def edit_group(self, label: str) -> ContextManager[object]: ...

    def mirror(self) -> BufferMirror: ...


class BufferValidationError(RuntimeError):
    """Raised when an explicit edit offset falls outside the document."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset
