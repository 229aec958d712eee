"""
Scoring System
==============

Accumulates score over time and ramps scroll speed at score thresholds.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from lane_racer.racer_core.config_loader import GameConfig, get_config


@dataclass
class ScoreEvent:
    """Record of one tick's scoring."""
    points: int
    speed_up: bool
    speed: float

    def __repr__(self) -> str:
        if self.speed_up:
            return f"ScoreEvent(+{self.points}, speed_up->{self.speed:.1f})"
        return f"ScoreEvent(+{self.points})"


class ScoreTracker:
    """
    Tracks score and scroll speed.

    Each tick awards floor(speed / score_divisor) points. Speed rises by
    speed_increment on the exact tick where score % score_step == 0; an
    increment that jumps over a multiple skips that speed-up.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize score tracker.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._base_speed = config.difficulty.base_speed
        self._divisor = config.difficulty.score_divisor
        self._step = config.difficulty.score_step
        self._increment = config.difficulty.speed_increment

        self._score: int = 0
        self._speed: float = self._base_speed
        self._speed_ups: int = 0

    @property
    def score(self) -> int:
        """Current total score."""
        return self._score

    @property
    def speed(self) -> float:
        """Current scroll speed."""
        return self._speed

    @property
    def speed_ups(self) -> int:
        """Number of speed increases this session."""
        return self._speed_ups

    @property
    def base_speed(self) -> float:
        return self._base_speed

    def points_per_tick(self) -> int:
        """Points the next tick will award at the current speed."""
        return math.floor(self._speed / self._divisor)

    def apply_tick(self) -> ScoreEvent:
        """
        Award one tick of score and apply the speed ramp.

        Returns:
            ScoreEvent describing the points awarded.
        """
        points = self.points_per_tick()
        self._score += points

        speed_up = self._score % self._step == 0
        if speed_up:
            self._speed += self._increment
            self._speed_ups += 1

        return ScoreEvent(points=points, speed_up=speed_up, speed=self._speed)

    def reset(self) -> None:
        """Reset score to zero and speed to base."""
        self._score = 0
        self._speed = self._base_speed
        self._speed_ups = 0
