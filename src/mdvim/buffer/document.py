"""Text storage for mdvim buffers."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import List, Sequence


def _line_starts(text: str) -> List[int]:
    starts = [0]
    index = text.find("\n")
    while index != -1:
        starts.append(index + 1)
        index = text.find("\n", index + 1)
    return starts


@dataclass(slots=True)
class BufferDocument:
    """Immutable flat text with a cached line index.

    Every edit returns a new document with a bumped ``version``; lines are
    separated by ``\\n`` and a trailing terminator yields an empty last line.
    """

    text: str = ""
    version: int = 0
    _starts: List[int] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if not self._starts:
            self._starts = _line_starts(self.text)

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        return cls(text=text.replace("\r\n", "\n"))

    def __len__(self) -> int:
        return len(self.text)

    @property
    def line_count(self) -> int:
        return len(self._starts)

    def lines(self) -> Sequence[str]:
        return tuple(self.text.split("\n"))

    def line_start(self, row: int) -> int:
        return self._starts[row]

    def line_end(self, row: int) -> int:
        """Offset of the row's terminator, or the document end for the last row."""

        if row + 1 < len(self._starts):
            return self._starts[row + 1] - 1
        return len(self.text)

    def get_line(self, row: int) -> str:
        return self.text[self.line_start(row) : self.line_end(row)]

    def find_line(self, offset: int) -> int:
        """Row containing ``offset``; a terminator belongs to the row it ends."""

        return bisect_right(self._starts, offset) - 1

    def replace(self, start: int, end: int, text: str) -> "BufferDocument":
        """Return a document with ``[start:end]`` replaced by ``text``."""

        updated = self.text[:start] + text + self.text[end:]
        return BufferDocument(text=updated, version=self.version + 1)

    def with_text(self, text: str) -> "BufferDocument":
        return BufferDocument(text=text, version=self.version + 1)
