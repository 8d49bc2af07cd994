"""
Hi-Lo - Draw Debounce

Refuses a second draw request until a cooldown has passed. The cooldown is
longer than the guess-result delay, so at most one draw and one deferred
continuation are ever in flight.
"""

from __future__ import annotations

import time
from typing import Callable


class DrawGuard:
    """Timestamp guard for the draw pile."""

    def __init__(self, cooldown: float, clock: Callable[[], float] = time.monotonic) -> None:
        if cooldown <= 0:
            raise ValueError(f"Cooldown must be positive, got {cooldown}.")
        self.cooldown = cooldown
        self._clock = clock
        self._locked_until: float | None = None

    def try_acquire(self) -> bool:
        """Start a cooldown window. False if one is already running."""
        now = self._clock()
        if self._locked_until is not None and now < self._locked_until:
            return False
        self._locked_until = now + self.cooldown
        return True

    def remaining(self) -> float:
        """Seconds left in the current window, 0 when free."""
        if self._locked_until is None:
            return 0.0
        return max(0.0, self._locked_until - self._clock())

    def reset(self) -> None:
        self._locked_until = None
