"""
Entities
========

Player and obstacle vehicles, plus the lane layout that maps lane indices
to screen coordinates. Lane index is authoritative; pixel x is always derived.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


class LaneLayout:
    """
    Maps lane indices to horizontal screen positions.

    Recomputed on resize; entities keep their lane and re-derive x from here.
    """

    def __init__(self, width: float, height: float, lane_count: int):
        """
        Initialize layout.

        Args:
            width: Surface width in pixels.
            height: Surface height in pixels.
            lane_count: Number of lanes.
        """
        if lane_count < 1:
            raise ValueError(f"lane_count must be at least 1, got {lane_count}")
        self._lane_count = lane_count
        self.resize(width, height)

    @property
    def lane_count(self) -> int:
        return self._lane_count

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def lane_width(self) -> float:
        return self._width / self._lane_count

    def resize(self, width: float, height: float) -> None:
        """
        Update surface dimensions.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface size must be positive, got {width}x{height}")
        self._width = float(width)
        self._height = float(height)

    def clamp_lane(self, lane: int) -> int:
        """Clamp a lane index to [0, lane_count - 1]."""
        return max(0, min(self._lane_count - 1, lane))

    def lane_center(self, lane: int) -> float:
        """
        X coordinate of a lane's centre line.

        Raises:
            ValueError: If the lane index is out of range.
        """
        if not 0 <= lane < self._lane_count:
            raise ValueError(f"Invalid lane: {lane} (lanes: {self._lane_count})")
        return lane * self.lane_width + self.lane_width / 2

    def separators(self) -> Tuple[float, ...]:
        """X coordinates of the boundaries between adjacent lanes."""
        return tuple(i * self.lane_width for i in range(1, self._lane_count))


@dataclass
class Vehicle:
    """A centred, axis-aligned box sitting in a lane."""
    lane: int
    x: float
    y: float
    w: float
    h: float

    @property
    def left(self) -> float:
        return self.x - self.w / 2

    @property
    def top(self) -> float:
        return self.y - self.h / 2

    def snap_to_lane(self, layout: LaneLayout) -> None:
        """Re-derive x from the lane centre."""
        self.x = layout.lane_center(self.lane)


@dataclass
class Player(Vehicle):
    """The player-controlled vehicle."""

    def shift(self, direction: int, layout: LaneLayout) -> bool:
        """
        Move one lane left (-1) or right (+1), clamped to the road.

        Returns:
            True if the lane actually changed.
        """
        new_lane = layout.clamp_lane(self.lane + direction)
        changed = new_lane != self.lane
        self.lane = new_lane
        return changed


@dataclass
class Obstacle(Vehicle):
    """A vehicle scrolling down toward the player."""

    def advance(self, dy: float, layout: LaneLayout) -> None:
        """Scroll down by dy and recentre in the lane."""
        self.y += dy
        self.snap_to_lane(layout)

    def is_off_screen(self, bottom: float) -> bool:
        """True once the obstacle is past the given bottom bound."""
        return self.y > bottom
