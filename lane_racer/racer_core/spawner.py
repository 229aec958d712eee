"""
Spawner - Periodic Obstacle Injection
=====================================

Counts ticks and creates obstacles at random lanes above the visible area.
The randomized vertical offset produces non-uniform gaps between vehicles.
"""

from __future__ import annotations

import random
from typing import Optional

from lane_racer.racer_core.config_loader import GameConfig, get_config
from lane_racer.racer_core.entities import LaneLayout, Obstacle


class ObstacleSpawner:
    """
    Tick-driven obstacle spawner.

    The timer increments once per tick; when it reaches the configured
    interval it resets to 0 and one obstacle is due.

    Uses its own random.Random so a seed reproduces the same traffic.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize spawner.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._rng = random.Random(seed)
        self._interval = config.obstacles.spawn_interval
        self._jitter = config.obstacles.spawn_jitter
        self._timer: int = 0

    @property
    def timer(self) -> int:
        """Ticks since the last spawn."""
        return self._timer

    @property
    def interval(self) -> int:
        return self._interval

    def tick(self) -> bool:
        """
        Advance the timer by one tick.

        Returns:
            True if an obstacle should be spawned this tick.
        """
        self._timer += 1
        if self._timer >= self._interval:
            self._timer = 0
            return True
        return False

    def random_lane(self, lane_count: int) -> int:
        """Uniform lane in [0, lane_count - 1]."""
        return self._rng.randrange(lane_count)

    def spawn(
        self,
        layout: LaneLayout,
        lane: Optional[int] = None,
        y: Optional[float] = None
    ) -> Obstacle:
        """
        Create an obstacle above the top edge.

        Args:
            layout: Current lane layout.
            lane: Lane to use. Random if None.
            y: Vertical centre. Defaults to -height - uniform(0, jitter).

        Returns:
            The new obstacle (not yet added to any pool).
        """
        w = self._config.obstacles.width
        h = self._config.obstacles.height

        if lane is None:
            lane = self.random_lane(layout.lane_count)
        if y is None:
            y = -h - self._rng.random() * self._jitter

        return Obstacle(lane=lane, x=layout.lane_center(lane), y=y, w=w, h=h)

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset the timer, optionally reseeding.

        Args:
            seed: New random seed. Keeps current stream if None.
        """
        if seed is not None:
            self._rng = random.Random(seed)
        self._timer = 0
