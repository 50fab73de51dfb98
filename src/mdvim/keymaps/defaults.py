"""Built-in direct shortcuts for the resting keymap."""

from __future__ import annotations

from typing import Iterable, Sequence

from mdvim.actions import shortcuts
from mdvim.modes.base_mode import InterpreterMode

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry

RESTING = InterpreterMode.RESTING.value

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef("shortcut.indent", shortcuts.indent, "Indent line(s)"),
    ActionRef("shortcut.outdent", shortcuts.outdent, "Outdent line(s)"),
    ActionRef("shortcut.bold", shortcuts.wrap_bold, "Wrap in **bold** markers"),
    ActionRef("shortcut.italic", shortcuts.wrap_italic, "Wrap in *italic* markers"),
    ActionRef(
        "shortcut.enter_composing",
        shortcuts.enter_composing,
        "Start a modal command",
    ),
    ActionRef(
        "shortcut.backspace",
        shortcuts.delete_previous_char,
        "Delete the previous character",
    ),
    ActionRef(
        "shortcut.kill_line",
        shortcuts.delete_to_line_start,
        "Delete to the start of the line",
    ),
    ActionRef(
        "shortcut.kill_word",
        shortcuts.delete_previous_word,
        "Delete to the start of the previous word",
    ),
    ActionRef("shortcut.cancel", shortcuts.cancel_escape, "Cancel (Escape)"),
    ActionRef("shortcut.cancel_bracket", shortcuts.cancel_bracket, "Cancel (Ctrl+[)"),
)

# (binding id, stroke token, action id)
_DEFAULT_STROKES: tuple[tuple[str, str, str], ...] = (
    ("resting.tab", "TAB", "shortcut.indent"),
    ("resting.backtab", "shift+BACKTAB", "shortcut.outdent"),
    ("resting.ctrl_b", "ctrl+b", "shortcut.bold"),
    ("resting.ctrl_i", "ctrl+i", "shortcut.italic"),
    ("resting.ctrl_d", "ctrl+d", "shortcut.enter_composing"),
    ("resting.ctrl_h", "ctrl+h", "shortcut.backspace"),
    ("resting.ctrl_u", "ctrl+u", "shortcut.kill_line"),
    ("resting.ctrl_w", "ctrl+w", "shortcut.kill_word"),
    ("resting.escape", "ESC", "shortcut.cancel"),
    ("resting.ctrl_bracket", "ctrl+[", "shortcut.cancel_bracket"),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = tuple(
    Binding(
        id=binding_id,
        mode=RESTING,
        stroke=KeyStroke.parse(token),
        action_id=action_id,
        source="defaults",
    )
    for binding_id, token, action_id in _DEFAULT_STROKES
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register the built-in actions and resting bindings.

    ``extra_bindings`` are registered last with ``replace=True`` so a host can
    remap a default stroke; ``exclude_bindings`` skips defaults by id.
    """

    excluded = set(exclude_bindings or ())
    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)
    for binding in DEFAULT_BINDINGS:
        if binding.id not in excluded:
            registry.register_binding(binding, replace=replace)
    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=True)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "RESTING"]
