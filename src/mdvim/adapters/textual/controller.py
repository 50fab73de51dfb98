"""Textual adapter that wires the keystroke dispatcher into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

from mdvim.buffer import BufferMirror
from mdvim.modes import MODE_CHANGED, InterpreterMode, KeyInput
from mdvim.modes.dispatcher import KeystrokeDispatcher


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


NormalizedKey = Tuple[str, Optional[str], Tuple[str, ...]]

_NAMED_KEYS = {
    "escape": "ESC",
    "tab": "TAB",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "delete": "DELETE",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
    "home": "HOME",
    "end": "END",
}
_CHARACTER_KEYS = {
    "left_square_bracket": "[",
    "right_square_bracket": "]",
    "space": " ",
}
_SHIFTED_SYMBOLS = frozenset("~!@#$%^&*()_+{}|:\"<>?")


def normalize_textual_key(
    key: str, character: Optional[str] = None
) -> Optional[NormalizedKey]:
    """Map a Textual key name to ``(key, text, modifiers)``.

    Printable keys become lowercase characters, with ``shift`` recorded for
    capitals and shifted symbols such as ``$`` and ``^``. Named keys use
    the uppercase identifiers the keymaps bind (``ESC``, ``TAB``, ...), and
    ``shift+tab`` arrives as ``shift+BACKTAB``. Returns ``None`` for keys
    the app keeps for itself.
    """

    if key in {"ctrl+c", "ctrl+q"}:
        return None
    parts = key.split("+")
    name = parts[-1]
    modifiers = [part for part in parts[:-1] if part]
    if name == "backtab":
        return ("BACKTAB", None, tuple(dict.fromkeys(modifiers + ["shift"])))
    if name in _NAMED_KEYS:
        if name == "tab" and "shift" in modifiers:
            return ("BACKTAB", None, tuple(modifiers))
        return (_NAMED_KEYS[name], None, tuple(modifiers))
    name = _CHARACTER_KEYS.get(name, name)
    printable = bool(character) and len(character) == 1 and character.isprintable()
    text = character if printable else None
    if printable and not modifiers:
        name = character
    if len(name) != 1:
        return (name.upper(), None, tuple(modifiers))
    if name.isupper():
        name = name.lower()
        modifiers.append("shift")
    elif name in _SHIFTED_SYMBOLS:
        modifiers.append("shift")
    return (name, text, tuple(dict.fromkeys(modifiers)))


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    update_mode: Callable[[InterpreterMode], None] = _noop
    log: Callable[[str], None] = _noop


class TextualModalAdapter:
    """Bridges a :class:`KeystrokeDispatcher` to a Textual-friendly surface.

    Keys the dispatcher leaves unconsumed are reported back to the caller,
    which should then let the widget apply its default behaviour.
    """

    def __init__(self, dispatcher: KeystrokeDispatcher, hooks: TextualUIHooks) -> None:
        self.dispatcher = dispatcher
        self.hooks = hooks
        self.dispatcher.context.bus.subscribe(MODE_CHANGED, self._on_mode_changed)
        self._refresh_buffer()
        self.hooks.update_mode(self.dispatcher.mode)

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> bool:
        """Translate a normalized Textual key into a KeyInput and dispatch it."""

        event = KeyInput(key=key, text=text, modifiers=tuple(modifiers))
        self._log_state("key ->", token=event.token, text=text)
        consumed = self.dispatcher.dispatch(event)
        if consumed:
            self._refresh_buffer()
        self._log_state("result <-", consumed=consumed)
        return consumed

    def process_timeouts(self) -> bool:
        """Poll the decay timer and refresh the UI if it fired."""

        fired = self.dispatcher.process_timeouts()
        if fired:
            self._log_state("timeout ->")
            self._refresh_buffer()
        return fired

    def _on_mode_changed(self, payload: object | None) -> None:
        if not isinstance(payload, InterpreterMode):
            return
        self.hooks.update_mode(payload)
        self.hooks.update_status(f"mode:{payload.value}")
        self._refresh_buffer()

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.dispatcher.context.buffer.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.dispatcher.context.buffer
        return {
            "mode": self.dispatcher.mode.value,
            "pending": "".join(self.dispatcher.state.pending),
            "cursor": buffer.position,
            "timer": self.dispatcher.state.timer.is_active,
        }


__all__ = ["TextualModalAdapter", "TextualUIHooks", "normalize_textual_key"]
