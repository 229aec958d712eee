"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the lane racer.
One step = one simulation tick. Reward is always 0.0 - agents compute
their own from info.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from lane_racer.racer_core.config_loader import GameConfig, load_config
from lane_racer.racer_core.game import CoreGame
from lane_racer.racer_core.input_control import LEFT, RIGHT
from lane_racer.racer_core.state_snapshot import GameSnapshot


# Discrete actions
STAY = 0
MOVE_LEFT = 1
MOVE_RIGHT = 2

_ACTION_TO_DIRECTION = {MOVE_LEFT: LEFT, MOVE_RIGHT: RIGHT}


class RacerEnv(gym.Env):
    """
    Lane racer as a Gymnasium environment.

    Action Space:
        Discrete(3): 0 = stay, 1 = move left, 2 = move right.
        Moves are applied before the tick and are not debounced.

    Observation Space:
        Dict containing structured game state and optional RGB image.

    Reward:
        Always 0.0. Use info["delta_score"] or info["score"].

    Termination:
        terminated on collision, truncated after caps.max_ticks ticks.
    """

    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        render_style: str = "solid",
        image_obs: Optional[bool] = None,
        image_width: Optional[int] = None,
        image_height: Optional[int] = None,
        debug: bool = False,
    ):
        """
        Initialize environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "human" for window, "rgb_array" for numpy, None for headless.
            render_style: "solid" for numpy rectangles, "full" for pygame drawing.
            image_obs: If True, include board_rgb in observations. Config default if None.
            image_width: Override observation image width.
            image_height: Override observation image height.
            debug: If True, print per-step diagnostics.
        """
        super().__init__()

        self._config = load_config(config_path)

        self.render_mode = render_mode
        self._render_style = render_style
        if image_obs is None:
            image_obs = self._config.observation.image_enabled
        self._image_obs = image_obs
        self._debug = debug

        self._img_width = image_width or self._config.observation.image_width
        self._img_height = image_height or self._config.observation.image_height

        self._game = CoreGame(config=self._config)
        self._renderer = None

        self.action_space = spaces.Discrete(3)
        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] RacerEnv initialized")
            print(f"[DEBUG]   Board: {self._config.board.width}x{self._config.board.height}")
            print(f"[DEBUG]   Lanes: {self._config.lane_count}")
            print(f"[DEBUG]   Max obstacles: {self._config.observation.max_obstacles}")

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        max_obs = self._config.observation.max_obstacles
        lanes = self._config.lane_count
        board = self._config.board

        obs_dict = {
            "player_lane": spaces.Box(low=0, high=lanes - 1, shape=(), dtype=np.int32),
            "player_x": spaces.Box(low=-np.inf, high=np.inf, shape=(), dtype=np.float32),
            "player_y": spaces.Box(low=-np.inf, high=np.inf, shape=(), dtype=np.float32),
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "speed": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "obstacles_count": spaces.Box(low=0, high=np.iinfo(np.int32).max, shape=(), dtype=np.int32),

            "board_width": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "board_height": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),

            "lane_clearance": spaces.Box(low=0, high=np.inf, shape=(lanes,), dtype=np.float32),

            "obj_lane": spaces.Box(low=-1, high=lanes - 1, shape=(max_obs,), dtype=np.int16),
            "obj_x": spaces.Box(low=-np.inf, high=np.inf, shape=(max_obs,), dtype=np.float32),
            "obj_y": spaces.Box(low=-np.inf, high=np.inf, shape=(max_obs,), dtype=np.float32),
            "obj_mask": spaces.MultiBinary(max_obs),
        }

        if self._image_obs:
            obs_dict["board_rgb"] = spaces.Box(
                low=0,
                high=255,
                shape=(self._img_height, self._img_width, 3),
                dtype=np.uint8
            )

        return spaces.Dict(obs_dict)

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        snapshot = self._game.reset(seed=seed)

        obs = self._snapshot_to_obs(snapshot)
        info = self._game.get_info()
        info["delta_score"] = 0

        return obs, info

    def step(
        self,
        action: Union[int, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one tick.

        Args:
            action: 0 stay, 1 left, 2 right.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
            Reward is always 0.0.
        """
        if isinstance(action, np.ndarray):
            action = int(action.item())
        action = int(action)
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action: {action}")

        direction = _ACTION_TO_DIRECTION.get(action)
        if direction is not None:
            self._game.move_player(direction)

        result = self._game.update()

        terminated = self._game.is_over
        truncated = not terminated and self._game.ticks >= self._config.caps.max_ticks

        obs = self._snapshot_to_obs(self._game.snapshot())
        reward = 0.0

        info = self._game.get_info()
        info["delta_score"] = result.delta_score
        info["speed_up"] = result.speed_up
        info["spawned"] = result.spawned is not None

        if self._debug:
            print(f"[DEBUG] Step: action={action}, lane={info['player_lane']}, "
                  f"delta_score={result.delta_score}, obstacles={info['obstacle_count']}")
            if terminated:
                print(f"[DEBUG] TERMINATED: {info.get('terminated_reason', 'unknown')}")

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    def _snapshot_to_obs(self, snapshot: GameSnapshot) -> Dict[str, np.ndarray]:
        """Convert snapshot to observation dict."""
        obs = snapshot.to_obs_dict()

        if self._image_obs:
            obs["board_rgb"] = self._render_to_array()

        return obs

    def _render_to_array(self) -> np.ndarray:
        """Render board to RGB array."""
        if self._renderer is None:
            self._init_renderer()

        return self._renderer.render(
            self._game.get_render_data(),
            self._img_width,
            self._img_height
        )

    def _init_renderer(self) -> None:
        """Initialize renderer based on style."""
        if self._render_style == "full" or self.render_mode == "human":
            from lane_racer.racer_core.render_full_pygame import PygameRenderer
            self._renderer = PygameRenderer(self._config)
        else:
            from lane_racer.racer_core.render_solid import SolidRenderer
            self._renderer = SolidRenderer(self._config)

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current game state.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode == "rgb_array":
            return self._render_to_array()

        if self.render_mode == "human":
            if self._renderer is None:
                self._init_renderer()
            import pygame
            self._renderer.render_to_screen(self._game.get_render_data())
            pygame.event.pump()
            pygame.display.flip()
            return None

        return None

    def close(self) -> None:
        """Clean up resources."""
        if self._renderer is not None:
            self._renderer.close()
            self._renderer = None

    @property
    def game(self) -> CoreGame:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
