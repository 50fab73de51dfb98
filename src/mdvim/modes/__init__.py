"""Key events, interpreter state, and the modal command interpreter.

The keystroke dispatcher lives in :mod:`mdvim.modes.dispatcher`; it pulls in
the keymap registry and is imported explicitly by hosts.
"""

from .base_mode import (
    InterpreterMode,
    KeyInput,
    ModeBus,
    ModeContext,
    Outcome,
    normalize_modifiers,
    stroke_token,
)
from .interpreter import ModalInterpreter
from .pending import PendingKeySequence, key_seq_to_count, suffix_num_allowed
from .state import MODE_CHANGED, STATE_KEY, InterpreterState, require_state

__all__ = [
    "InterpreterMode",
    "InterpreterState",
    "KeyInput",
    "MODE_CHANGED",
    "ModalInterpreter",
    "ModeBus",
    "ModeContext",
    "Outcome",
    "PendingKeySequence",
    "STATE_KEY",
    "key_seq_to_count",
    "normalize_modifiers",
    "require_state",
    "stroke_token",
    "suffix_num_allowed",
]
