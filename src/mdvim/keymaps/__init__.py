"""Declarative registry for direct (resting-mode) shortcuts."""

from .models import ActionRef, Binding, KeyStroke, ResolutionMatch
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .defaults import DEFAULT_BINDINGS, RESTING, load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "DEFAULT_BINDINGS",
    "KeyStroke",
    "KeymapConflictError",
    "KeymapRegistry",
    "RESTING",
    "RegistryStats",
    "ResolutionMatch",
    "load_default_keymaps",
]
