"""
State Snapshot
==============

Packs game state into fixed-size numpy arrays for Gymnasium observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence
import numpy as np

from lane_racer.racer_core.config_loader import GameConfig, get_config
from lane_racer.racer_core.entities import LaneLayout, Player, Obstacle


@dataclass
class GameSnapshot:
    """
    Game state snapshot.

    Obstacle arrays are fixed-size with masking; obstacles are sorted nearest
    first (largest y), so truncation drops the farthest ones.
    """
    # Core state
    player_lane: int
    player_x: float
    player_y: float
    score: int
    speed: float
    high_score: int
    ticks: int
    running: bool
    obstacles_count: int

    # Board info (for normalization)
    board_width: float
    board_height: float
    lane_count: int

    # Derived features
    lane_clearance: np.ndarray        # (lane_count,) float32, gap to nearest obstacle ahead

    # Obstacle arrays (fixed size, padded)
    obj_lane: np.ndarray              # (MAX_OBS,) int16, -1 if empty
    obj_x: np.ndarray                 # (MAX_OBS,) float32
    obj_y: np.ndarray                 # (MAX_OBS,) float32
    obj_mask: np.ndarray              # (MAX_OBS,) bool

    # Optional image
    board_rgb: Optional[np.ndarray] = None

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        obs = {
            "player_lane": np.array(self.player_lane, dtype=np.int32),
            "player_x": np.array(self.player_x, dtype=np.float32),
            "player_y": np.array(self.player_y, dtype=np.float32),
            "score": np.array(self.score, dtype=np.int64),
            "speed": np.array(self.speed, dtype=np.float32),
            "obstacles_count": np.array(self.obstacles_count, dtype=np.int32),

            "board_width": np.array(self.board_width, dtype=np.float32),
            "board_height": np.array(self.board_height, dtype=np.float32),

            "lane_clearance": self.lane_clearance,

            "obj_lane": self.obj_lane,
            "obj_x": self.obj_x,
            "obj_y": self.obj_y,
            "obj_mask": self.obj_mask,
        }

        if self.board_rgb is not None:
            obs["board_rgb"] = self.board_rgb

        return obs


class SnapshotBuilder:
    """Builds game state snapshots with fixed-size arrays."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._max_obs = config.observation.max_obstacles

    @property
    def max_obstacles(self) -> int:
        return self._max_obs

    def _lane_clearance(
        self,
        layout: LaneLayout,
        player: Player,
        obstacles: Sequence[Obstacle]
    ) -> np.ndarray:
        """
        Vertical free space in front of the player, per lane.

        Distance between the player's top edge and the bottom edge of the
        nearest obstacle still ahead of it; board height when the lane is clear.
        Obstacles already alongside or behind the player count as 0.
        """
        clearance = np.full(layout.lane_count, layout.height, dtype=np.float32)
        player_top = player.top
        for obstacle in obstacles:
            if not 0 <= obstacle.lane < layout.lane_count:
                continue
            if obstacle.top >= player_top + player.h:
                continue  # already passed
            gap = max(0.0, player_top - (obstacle.top + obstacle.h))
            clearance[obstacle.lane] = min(clearance[obstacle.lane], gap)
        return clearance

    def build(
        self,
        layout: LaneLayout,
        player: Player,
        obstacles: Sequence[Obstacle],
        score: int,
        speed: float,
        high_score: int,
        ticks: int,
        running: bool,
        board_rgb: Optional[np.ndarray] = None
    ) -> GameSnapshot:
        """
        Build a snapshot from live game objects.

        Args:
            layout: Current lane layout.
            player: The player vehicle.
            obstacles: Obstacle pool.
            score: Current score.
            speed: Current scroll speed.
            high_score: Best score so far.
            ticks: Updates performed this session.
            running: Whether the session is running.
            board_rgb: Optional rendered frame.
        """
        obj_lane = np.full(self._max_obs, -1, dtype=np.int16)
        obj_x = np.zeros(self._max_obs, dtype=np.float32)
        obj_y = np.zeros(self._max_obs, dtype=np.float32)
        obj_mask = np.zeros(self._max_obs, dtype=bool)

        nearest_first = sorted(obstacles, key=lambda o: o.y, reverse=True)
        for i, obstacle in enumerate(nearest_first[:self._max_obs]):
            obj_lane[i] = obstacle.lane
            obj_x[i] = obstacle.x
            obj_y[i] = obstacle.y
            obj_mask[i] = True

        return GameSnapshot(
            player_lane=player.lane,
            player_x=player.x,
            player_y=player.y,
            score=score,
            speed=speed,
            high_score=high_score,
            ticks=ticks,
            running=running,
            obstacles_count=len(obstacles),
            board_width=layout.width,
            board_height=layout.height,
            lane_count=layout.lane_count,
            lane_clearance=self._lane_clearance(layout, player, obstacles),
            obj_lane=obj_lane,
            obj_x=obj_x,
            obj_y=obj_y,
            obj_mask=obj_mask,
            board_rgb=board_rgb
        )
