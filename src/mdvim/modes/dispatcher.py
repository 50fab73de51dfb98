"""Keystroke dispatcher: route each event to the interpreter or a shortcut."""

from __future__ import annotations

import time
from typing import Optional

from mdvim.keymaps import RESTING, KeymapRegistry, load_default_keymaps
from mdvim.runtime import telemetry
from mdvim.runtime.timer import Clock

from .base_mode import InterpreterMode, KeyInput, ModeContext, Outcome
from .interpreter import ModalInterpreter
from .state import STATE_KEY, InterpreterState


class KeystrokeDispatcher:
    """Top-level entry point bound 1:1 to an editor view.

    While the view is composing or in visual selection, every key except
    the cancel chords goes to the :class:`ModalInterpreter`. Otherwise the
    key is looked up in the ``resting`` keymap of direct shortcuts.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: Optional[KeymapRegistry] = None,
        load_defaults: bool = True,
        clock: Clock = time.monotonic,
    ) -> None:
        self.context = context
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="mdvim.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.state = InterpreterState(
            context.bus, decay_ms=context.config.decay_ms, clock=clock
        )
        self.interpreter = ModalInterpreter(context, self.state)
        self.state.timeout_handler = self.interpreter.handle_timeout
        self.context.extras[STATE_KEY] = self.state
        self.context.extras["keymap_registry"] = self.keymap_registry
        self.context.extras["dispatcher"] = self
        self._dispatching = False

    @property
    def mode(self) -> InterpreterMode:
        return self.state.mode

    def dispatch(self, key: KeyInput) -> bool:
        """Handle one keystroke; returns whether it was consumed."""

        if self._dispatching:
            raise RuntimeError("KeystrokeDispatcher.dispatch is not re-entrant")
        self._dispatching = True
        try:
            with telemetry.span(
                name="dispatch",
                component=True,
                metadata={"key": key.token, "mode": self.state.mode},
            ) as handle:
                outcome = self._route(key)
                handle.add_metadata("outcome", outcome)
        finally:
            self._dispatching = False

        if outcome.consumed:
            key.accept()
        return outcome.consumed

    def _route(self, key: KeyInput) -> Outcome:
        if self.state.is_modal and not key.is_cancel:
            return self.interpreter.handle_key(key)

        match = self.keymap_registry.resolve(RESTING, key.token)
        if match is None:
            return Outcome.UNHANDLED
        outcome = match.action(self.context, match)
        if not isinstance(outcome, Outcome):
            outcome = Outcome.HANDLED
        if outcome.consumed:
            telemetry.record_event(
                f"shortcut.{match.binding.id}",
                level="debug",
                data={"action": match.action.id},
            )
        return outcome

    def process_timeouts(self) -> bool:
        """Poll the decay timer; hosts call this from their event loop."""

        if self._dispatching:
            return False
        return self.state.timer.poll()

    def force_timeout(self) -> bool:
        """Expire the decay timer now, as if the full duration had passed."""

        if self._dispatching:
            return False
        return self.state.timer.fire()


__all__ = ["KeystrokeDispatcher"]
