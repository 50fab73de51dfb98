"""Text buffer capability: document, cursor, motions, undo, and clipboard."""

from .buffer import Buffer, Transaction
from .document import BufferDocument
from .motions import CharClass, MoveOperation
from .registers import Clipboard, RegisterBank, RegisterValue
from .state import CursorState, MoveMode
from .sync import BufferMirror, BufferValidationError, TextCursor
from .undo import UndoEntry, UndoTimeline

__all__ = [
    "Buffer",
    "BufferDocument",
    "BufferMirror",
    "BufferValidationError",
    "CharClass",
    "Clipboard",
    "CursorState",
    "MoveMode",
    "MoveOperation",
    "RegisterBank",
    "RegisterValue",
    "TextCursor",
    "Transaction",
    "UndoEntry",
    "UndoTimeline",
]
