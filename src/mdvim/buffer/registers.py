"""Clipboard capability and in-memory register storage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional, Protocol

CLIPBOARD = "+"
UNNAMED = '"'


class Clipboard(Protocol):
    def get_text(self) -> str: ...

    def set_text(self, text: str) -> None: ...


@dataclass(slots=True)
class RegisterValue:
    text: str
    type: str = "character"  # character or line


class RegisterBank:
    """Named registers; the ``+`` register doubles as the clipboard.

    Writing the clipboard also fills the unnamed register so the last cut or
    copy is always available locally. Hosts wire ``on_clipboard_set`` to push
    text to the system clipboard.
    """

    def __init__(self) -> None:
        self._registers: Dict[str, RegisterValue] = {UNNAMED: RegisterValue(text="")}
        self.on_clipboard_set: Optional[Callable[[str], None]] = None

    def get(self, name: str) -> RegisterValue:
        return self._registers.get(name, RegisterValue(text=""))

    def set(self, name: str, value: RegisterValue) -> None:
        self._registers[name] = value
        if name != UNNAMED:
            self._registers[UNNAMED] = value

    def serialize(self) -> Mapping[str, RegisterValue]:
        return dict(self._registers)

    def get_text(self) -> str:
        return self.get(CLIPBOARD).text

    def set_text(self, text: str) -> None:
        self.set(CLIPBOARD, RegisterValue(text=text))
        if self.on_clipboard_set is not None:
            self.on_clipboard_set(text)
