"""Cursor and selection state for buffers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MoveMode(Enum):
    """Whether a motion collapses the selection or keeps its anchor."""

    MOVE = "move"
    EXTEND = "extend"


@dataclass(slots=True)
class CursorState:
    """Anchor + active position, both character offsets into the text.

    ``preferred_column`` is the column vertical motions aim for; it survives
    consecutive up/down steps and is dropped by any other move or edit.
    """

    position: int = 0
    anchor: int = 0
    preferred_column: Optional[int] = None

    @property
    def has_selection(self) -> bool:
        return self.position != self.anchor

    @property
    def selection_start(self) -> int:
        return min(self.position, self.anchor)

    @property
    def selection_end(self) -> int:
        return max(self.position, self.anchor)

    def set_position(self, offset: int, mode: MoveMode = MoveMode.MOVE) -> None:
        self.position = offset
        if mode is MoveMode.MOVE:
            self.anchor = offset

    def clear_selection(self) -> None:
        self.anchor = self.position

    def copy(self) -> "CursorState":
        return CursorState(position=self.position, anchor=self.anchor)
