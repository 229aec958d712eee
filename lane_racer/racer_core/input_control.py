"""
Lane Input
==========

Debounced lane-change requests. Holding a key down produces repeated
events; only one change per debounce window is accepted, independent of
tick boundaries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from lane_racer.racer_core.timing import Clock, MonotonicClock

if TYPE_CHECKING:
    from lane_racer.racer_core.game import CoreGame


LEFT = -1
RIGHT = 1


class LaneInput:
    """
    Rate-limited move-left / move-right handler.

    A request is accepted only if at least debounce seconds elapsed since the
    last accepted request. The first request is always accepted. Accepted
    requests at a road edge still consume the window (the lane stays clamped).
    """

    def __init__(
        self,
        game: "CoreGame",
        clock: Optional[Clock] = None,
        debounce_ms: Optional[float] = None
    ):
        """
        Initialize input handler.

        Args:
            game: Game whose player is moved.
            clock: Time source. Real monotonic clock if None.
            debounce_ms: Override the configured debounce window.
        """
        self._game = game
        self._clock = clock if clock is not None else MonotonicClock()
        if debounce_ms is None:
            debounce_ms = game.config.input.move_debounce_ms
        self._debounce = debounce_ms / 1000.0
        self._last_move_time: Optional[float] = None

    @property
    def debounce_seconds(self) -> float:
        return self._debounce

    def request_move(self, direction: int) -> bool:
        """
        Request a lane change.

        Args:
            direction: LEFT (-1) or RIGHT (+1).

        Returns:
            True if the request was accepted (outside the debounce window).
        """
        if direction not in (LEFT, RIGHT):
            raise ValueError(f"direction must be -1 or 1, got {direction}")

        now = self._clock.now()
        if self._last_move_time is not None and now - self._last_move_time < self._debounce:
            return False

        self._game.move_player(direction)
        self._last_move_time = now
        return True

    def move_left(self) -> bool:
        return self.request_move(LEFT)

    def move_right(self) -> bool:
        return self.request_move(RIGHT)

    def reset(self) -> None:
        """Forget the last accepted request."""
        self._last_move_time = None
