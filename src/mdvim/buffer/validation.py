"""Offset guards shared by buffer services."""

from __future__ import annotations

from .document import BufferDocument
from .sync import BufferValidationError


def clamp_offset(document: BufferDocument, offset: int) -> int:
    return max(0, min(offset, len(document)))


def ensure_offset(document: BufferDocument, offset: int) -> int:
    if offset < 0 or offset > len(document):
        raise BufferValidationError("Offset out of range", offset=offset)
    return offset


def ensure_range(document: BufferDocument, start: int, end: int) -> tuple[int, int]:
    start = ensure_offset(document, start)
    end = ensure_offset(document, end)
    if start > end:
        start, end = end, start
    return start, end
