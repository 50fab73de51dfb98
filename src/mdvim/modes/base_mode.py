"""Key events, interpreter modes, and the services shared by handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Tuple

from mdvim.buffer import Clipboard, TextCursor
from mdvim.runtime import EditorConfig

ESCAPE = "ESC"
CANCEL_BRACKET = "ctrl+["


def normalize_modifiers(modifiers: Iterable[str]) -> Tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m and m.strip())
    return tuple(sorted(dict.fromkeys(values)))


def stroke_token(key: str, modifiers: Tuple[str, ...]) -> str:
    if modifiers:
        return f"{'+'.join(modifiers)}+{key}"
    return key


@dataclass(slots=True)
class KeyInput:
    """Normalized keystroke; ``accepted`` mirrors "event handled" on the host."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None
    accepted: bool = False

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        self.modifiers = normalize_modifiers(self.modifiers)

    @property
    def token(self) -> str:
        return stroke_token(self.key, self.modifiers)

    @property
    def unmodified(self) -> bool:
        return not self.modifiers

    @property
    def shift_only(self) -> bool:
        return self.modifiers == ("shift",)

    @property
    def is_cancel(self) -> bool:
        return self.key == ESCAPE or self.token == CANCEL_BRACKET

    def accept(self) -> None:
        self.accepted = True


class InterpreterMode(Enum):
    RESTING = "resting"
    COMPOSING = "composing"
    VISUAL = "visual"

    @property
    def is_modal(self) -> bool:
        return self is not InterpreterMode.RESTING


class Outcome(Enum):
    """Classification result for a keystroke.

    ``HANDLED_AND_CONTINUE`` keeps the current modal state alive and re-arms
    the decay timer; ``HANDLED`` consumes the key without re-arming;
    ``UNHANDLED`` leaves the key to the caller's fallback.
    """

    HANDLED = "handled"
    HANDLED_AND_CONTINUE = "continue"
    UNHANDLED = "unhandled"

    @property
    def consumed(self) -> bool:
        return self is not Outcome.UNHANDLED


class ModeBus:
    """Minimal event bus for mode-change and edit notifications."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[[object], None]) -> None:
        callbacks = self._subscribers.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """Services every handler can reach; one context per editor view."""

    buffer: TextCursor
    clipboard: Clipboard
    bus: ModeBus = field(default_factory=ModeBus)
    config: EditorConfig = field(default_factory=EditorConfig)
    extras: Dict[str, object] = field(default_factory=dict)
