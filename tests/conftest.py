from __future__ import annotations

from typing import List, Optional, Tuple

import pytest

from mdvim.buffer import Buffer, MoveMode
from mdvim.modes import MODE_CHANGED, InterpreterMode, KeyInput, ModeContext
from mdvim.modes.dispatcher import KeystrokeDispatcher
from mdvim.runtime import EditorConfig


class FakeClock:
    """Monotonic clock the tests advance by hand."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms / 1000.0


class Harness:
    def __init__(
        self,
        text: str = "",
        position: int = 0,
        *,
        config: Optional[EditorConfig] = None,
    ) -> None:
        self.clock = FakeClock()
        self.buffer = Buffer.from_text(text)
        self.buffer.set_position(position)
        self.context = ModeContext(
            buffer=self.buffer,
            clipboard=self.buffer.registers,
            config=config or EditorConfig(decay_ms=1000),
        )
        self.dispatcher = KeystrokeDispatcher(self.context, clock=self.clock)
        self.mode_changes: List[InterpreterMode] = []
        self.context.bus.subscribe(MODE_CHANGED, self.mode_changes.append)

    @property
    def mode(self) -> InterpreterMode:
        return self.dispatcher.mode

    @property
    def pending(self) -> Tuple[str, ...]:
        return self.dispatcher.state.pending.tokens

    def select(self, start: int, end: int) -> None:
        self.buffer.set_position(start)
        self.buffer.set_position(end, MoveMode.EXTEND)

    def press(self, *tokens: str) -> List[bool]:
        return [self.dispatcher.dispatch(make_key(token)) for token in tokens]


def make_key(token: str) -> KeyInput:
    """``"ctrl+d"`` -> KeyInput("d", ("ctrl",)); a lone ``"+"`` is the plus key."""

    if token == "+":
        return KeyInput("+")
    *modifiers, key = token.split("+")
    return KeyInput(key, tuple(modifiers))


@pytest.fixture
def make_harness():
    return Harness
