"""Single-shot decay countdown polled by the host event loop."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

Clock = Callable[[], float]


@dataclass
class PendingDeadline:
    deadline: float
    generation: int


class DecayTimer:
    """Fire ``callback`` once ``duration_ms`` after the last (re)arm.

    The timer never runs on its own thread: the host calls :meth:`poll`
    from its event loop (Textual's ``set_interval`` in the demo) so the
    callback is serialized with keystroke handling. Every ``start`` bumps a
    generation counter, so a deadline captured before a restart can never
    fire late.
    """

    def __init__(
        self,
        duration_ms: int,
        callback: Callable[[], None],
        *,
        clock: Clock = time.monotonic,
    ) -> None:
        if duration_ms <= 0:
            raise ValueError("duration_ms must be positive")
        self.duration_ms = duration_ms
        self._callback = callback
        self._clock = clock
        self._pending: Optional[PendingDeadline] = None
        self._generation = 0

    @property
    def is_active(self) -> bool:
        return self._pending is not None

    def remaining_ms(self) -> Optional[int]:
        if self._pending is None:
            return None
        left = self._pending.deadline - self._clock()
        return max(0, int(round(left * 1000)))

    def start(self) -> None:
        self._generation += 1
        self._pending = PendingDeadline(
            deadline=self._clock() + self.duration_ms / 1000.0,
            generation=self._generation,
        )

    def stop(self) -> None:
        self._pending = None

    def restart(self) -> None:
        self.stop()
        self.start()

    def poll(self) -> bool:
        """Fire the callback if the deadline passed; return whether it fired."""

        pending = self._pending
        if pending is None or pending.deadline > self._clock():
            return False
        return self._fire(pending.generation)

    def fire(self) -> bool:
        """Expire immediately, as if the duration had elapsed."""

        if self._pending is None:
            return False
        return self._fire(self._pending.generation)

    def _fire(self, generation: int) -> bool:
        if self._pending is None or self._pending.generation != generation:
            return False
        # single-shot: the callback may re-arm
        self._pending = None
        self._callback()
        return True


__all__ = ["DecayTimer", "PendingDeadline", "Clock"]
