"""
Clocks and Schedulers
=====================

The game loop never reads wall-clock time or registers frame callbacks
directly. Hosts supply a Scheduler (one callback per display frame) and a
Clock (monotonic seconds); tests substitute FakeClock and drive ticks by hand.
"""

from __future__ import annotations

import time
from typing import Callable, Optional, Protocol


TickCallback = Callable[[], None]


class Clock(Protocol):
    """Monotonic time source in seconds."""

    def now(self) -> float:
        ...


class Scheduler(Protocol):
    """Frame-synchronized callback scheduling."""

    def request_next_tick(self, callback: TickCallback) -> None:
        ...


class MonotonicClock:
    """Real clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()


class FakeClock:
    """Manually advanced clock for deterministic tests."""

    def __init__(self, start: float = 0.0):
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> float:
        """Move time forward and return the new reading."""
        if seconds < 0:
            raise ValueError(f"Clock cannot go backwards (got {seconds})")
        self._now += seconds
        return self._now

    def advance_ms(self, milliseconds: float) -> float:
        return self.advance(milliseconds / 1000.0)


class FrameScheduler:
    """
    Holds at most one pending tick callback.

    The host calls run_pending() once per display frame (the pygame main
    loop does this after clock.tick()); tests call it directly or use
    run_frames().
    """

    def __init__(self):
        self._pending: Optional[TickCallback] = None
        self._frames: int = 0

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    @property
    def frames(self) -> int:
        """Number of callbacks executed so far."""
        return self._frames

    def request_next_tick(self, callback: TickCallback) -> None:
        self._pending = callback

    def cancel(self) -> None:
        """Drop the pending callback, if any."""
        self._pending = None

    def run_pending(self) -> bool:
        """
        Run the pending callback, if any.

        The callback may re-arm the scheduler for the next frame.

        Returns:
            True if a callback ran.
        """
        callback = self._pending
        if callback is None:
            return False
        self._pending = None
        self._frames += 1
        callback()
        return True

    def run_frames(self, count: int) -> int:
        """Run up to count frames; stops early when nothing is pending."""
        ran = 0
        for _ in range(count):
            if not self.run_pending():
                break
            ran += 1
        return ran
