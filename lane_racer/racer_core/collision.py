"""
Collision Detection
===================

Axis-aligned bounding-box overlap between the player and obstacles.
"""

from __future__ import annotations

from typing import Iterable, Optional

from lane_racer.racer_core.entities import Obstacle, Vehicle


def boxes_overlap(a: Vehicle, b: Vehicle) -> bool:
    """
    True if two centred boxes overlap.

    Touching edges do not count as overlap.
    """
    ax, ay = a.left, a.top
    bx, by = b.left, b.top
    return (
        ax < bx + b.w
        and ax + a.w > bx
        and ay < by + b.h
        and ay + a.h > by
    )


def find_collision(
    player: Vehicle,
    obstacles: Iterable[Obstacle]
) -> Optional[Obstacle]:
    """
    Return the first obstacle overlapping the player, or None.

    Stops at the first hit.
    """
    for obstacle in obstacles:
        if boxes_overlap(player, obstacle):
            return obstacle
    return None
