"""Wall-clock driven delay and sound timers."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from .constants import TIMER_RATE_HZ
from .state import MachineState

Clock = Callable[[], float]


@dataclass
class TimerDriver:
    """Decrements the delay and sound timers at ``rate`` Hz of real time.

    Polled from the scheduler on every tick instead of running on its own
    thread. The number of decrements depends only on elapsed clock time.
    """

    rate: int = TIMER_RATE_HZ
    clock: Clock = time.monotonic
    _origin: Optional[float] = field(default=None, init=False, repr=False)
    _applied: int = field(default=0, init=False, repr=False)

    def start(self, now: Optional[float] = None) -> None:
        """Set the reference point intervals are counted from."""

        self._origin = self.clock() if now is None else now
        self._applied = 0

    def reset(self) -> None:
        """Forget the reference point; the next advance restarts counting."""

        self._origin = None
        self._applied = 0

    @property
    def started(self) -> bool:
        return self._origin is not None

    @property
    def intervals_applied(self) -> int:
        return self._applied

    def due(self, now: Optional[float] = None) -> int:
        """Return how many intervals have elapsed but not been applied yet."""

        if self._origin is None:
            return 0
        current = self.clock() if now is None else now
        elapsed = max(0.0, current - self._origin)
        return max(0, math.floor(elapsed * self.rate) - self._applied)

    def advance(self, state: MachineState, now: Optional[float] = None) -> int:
        """Apply every pending interval to ``state`` and return the count."""

        if self._origin is None:
            self.start(now)
            return 0

        pending = self.due(now)
        if pending:
            state.delay_timer = max(0, state.delay_timer - pending)
            state.sound_timer = max(0, state.sound_timer - pending)
            self._applied += pending
        return pending


__all__ = ["TimerDriver"]
