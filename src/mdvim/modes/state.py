"""Per-view interpreter state: mode, pending keys, and the decay timer."""

from __future__ import annotations

import time
from typing import Callable, Optional

from mdvim.runtime import DecayTimer, telemetry
from mdvim.runtime.timer import Clock

from .base_mode import InterpreterMode, ModeBus, ModeContext
from .pending import PendingKeySequence

MODE_CHANGED = "mode.changed"
STATE_KEY = "interpreter_state"


class InterpreterState:
    """Owns everything that must reset together when modal editing ends.

    ``set_mode`` is the only way the mode changes; it emits
    ``mode.changed`` on the bus exactly once per real transition.
    """

    def __init__(
        self,
        bus: ModeBus,
        *,
        decay_ms: int,
        clock: Clock = time.monotonic,
    ) -> None:
        self.bus = bus
        self.pending = PendingKeySequence()
        self.timer = DecayTimer(decay_ms, self._on_timeout, clock=clock)
        self.timeout_handler: Optional[Callable[[], None]] = None
        self._mode = InterpreterMode.RESTING

    @property
    def mode(self) -> InterpreterMode:
        return self._mode

    @property
    def is_modal(self) -> bool:
        return self._mode.is_modal

    @property
    def is_visual(self) -> bool:
        return self._mode is InterpreterMode.VISUAL

    def set_mode(self, mode: InterpreterMode) -> bool:
        previous = self._mode
        if previous is mode:
            return False
        self._mode = mode
        telemetry.record_event(
            "mode.change", data={"from": previous, "to": mode}
        )
        self.bus.emit(MODE_CHANGED, mode)
        return True

    def enter(self, mode: InterpreterMode) -> None:
        """Switch to a modal state and (re)arm the decay timer."""

        self.set_mode(mode)
        self.timer.restart()

    def reset(self) -> None:
        self.timer.stop()
        self.set_mode(InterpreterMode.RESTING)
        self.pending.clear()

    def _on_timeout(self) -> None:
        if self.timeout_handler is not None:
            self.timeout_handler()


def require_state(context: ModeContext) -> InterpreterState:
    state = context.extras.get(STATE_KEY)
    if not isinstance(state, InterpreterState):
        raise RuntimeError(f"ModeContext.extras missing '{STATE_KEY}'")
    return state


__all__ = ["InterpreterState", "MODE_CHANGED", "STATE_KEY", "require_state"]
