"""Motion operations and word-boundary scanning over flat text."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from .document import BufferDocument

BLANKS = frozenset(" \t")


class MoveOperation(Enum):
    START = "start"
    END = "end"
    START_OF_LINE = "start_of_line"
    END_OF_LINE = "end_of_line"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    NEXT_WORD = "next_word"
    PREVIOUS_WORD = "previous_word"
    START_OF_WORD = "start_of_word"
    END_OF_WORD = "end_of_word"


class CharClass(Enum):
    WORD = "word"
    PUNCT = "punct"
    BLANK = "blank"
    NEWLINE = "newline"


def char_class(char: str) -> CharClass:
    if char == "\n":
        return CharClass.NEWLINE
    if char in BLANKS or char.isspace():
        return CharClass.BLANK
    if char.isalnum() or char == "_":
        return CharClass.WORD
    return CharClass.PUNCT


def _is_wordish(char: str) -> bool:
    return char_class(char) in (CharClass.WORD, CharClass.PUNCT)


def _skip_blanks(text: str, pos: int) -> int:
    while pos < len(text) and char_class(text[pos]) is CharClass.BLANK:
        pos += 1
    return pos


def next_word_start(text: str, pos: int) -> int:
    if pos >= len(text):
        return len(text)
    cls = char_class(text[pos])
    if cls is CharClass.NEWLINE:
        return _skip_blanks(text, pos + 1)
    if cls is not CharClass.BLANK:
        while pos < len(text) and char_class(text[pos]) is cls:
            pos += 1
    return _skip_blanks(text, pos)


def previous_word_start(text: str, pos: int) -> int:
    if pos <= 0:
        return 0
    pos -= 1
    while pos > 0 and char_class(text[pos]) is CharClass.BLANK:
        pos -= 1
    cls = char_class(text[pos])
    if cls is CharClass.NEWLINE:
        return pos
    if cls is CharClass.BLANK:
        return 0
    while pos > 0 and char_class(text[pos - 1]) is cls:
        pos -= 1
    return pos


def end_of_word(text: str, pos: int) -> int:
    if pos >= len(text) or not _is_wordish(text[pos]):
        return pos
    cls = char_class(text[pos])
    while pos < len(text) and char_class(text[pos]) is cls:
        pos += 1
    return pos


def start_of_word(text: str, pos: int) -> int:
    if pos <= 0 or not _is_wordish(text[pos - 1]):
        return pos
    cls = char_class(text[pos - 1])
    while pos > 0 and char_class(text[pos - 1]) is cls:
        pos -= 1
    return pos


def _vertical(
    document: BufferDocument, pos: int, delta: int, column: Optional[int] = None
) -> int:
    row = document.find_line(pos)
    target = row + delta
    if target < 0 or target >= document.line_count:
        return pos
    if column is None:
        column = pos - document.line_start(row)
    return document.line_start(target) + min(column, len(document.get_line(target)))


def step(
    document: BufferDocument,
    pos: int,
    op: MoveOperation,
    column: Optional[int] = None,
) -> int:
    """Apply ``op`` once from ``pos`` and return the clamped target offset.

    ``column`` is the goal column for ``UP``/``DOWN``; other operations
    ignore it.
    """

    text = document.text
    if op is MoveOperation.START:
        return 0
    if op is MoveOperation.END:
        return len(text)
    if op is MoveOperation.START_OF_LINE:
        return document.line_start(document.find_line(pos))
    if op is MoveOperation.END_OF_LINE:
        return document.line_end(document.find_line(pos))
    if op is MoveOperation.LEFT:
        return max(0, pos - 1)
    if op is MoveOperation.RIGHT:
        return min(len(text), pos + 1)
    if op is MoveOperation.UP:
        return _vertical(document, pos, -1, column)
    if op is MoveOperation.DOWN:
        return _vertical(document, pos, 1, column)
    if op is MoveOperation.NEXT_WORD:
        return next_word_start(text, pos)
    if op is MoveOperation.PREVIOUS_WORD:
        return previous_word_start(text, pos)
    if op is MoveOperation.START_OF_WORD:
        return start_of_word(text, pos)
    if op is MoveOperation.END_OF_WORD:
        return end_of_word(text, pos)
    raise ValueError(f"Unknown move operation {op!r}")


__all__ = [
    "MoveOperation",
    "CharClass",
    "char_class",
    "next_word_start",
    "previous_word_start",
    "end_of_word",
    "start_of_word",
    "step",
]
