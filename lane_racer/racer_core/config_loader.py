"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Optional

import yaml


@dataclass(frozen=True)
class BoardConfig:
    """Road surface geometry."""
    width: int    # Surface width in pixels
    height: int   # Surface height in pixels


@dataclass(frozen=True)
class LaneConfig:
    """Lane layout."""
    count: int


@dataclass(frozen=True)
class PlayerConfig:
    """Player vehicle size and placement."""
    width: float
    height: float
    bottom_offset: float  # Distance from the bottom edge to the player centre
    start_lane: int


@dataclass(frozen=True)
class ObstacleConfig:
    """Obstacle vehicles and spawning."""
    width: float
    height: float
    spawn_interval: int   # Ticks between spawns
    spawn_jitter: float   # Max extra offset above the top edge
    despawn_margin: float
    speed_bonus: float


@dataclass(frozen=True)
class DifficultyConfig:
    """Score accrual and speed ramp."""
    base_speed: float
    score_divisor: float
    score_step: int
    speed_increment: float


@dataclass(frozen=True)
class InputConfig:
    """Input debounce settings."""
    move_debounce_ms: float

    @property
    def move_debounce_seconds(self) -> float:
        return self.move_debounce_ms / 1000.0


@dataclass(frozen=True)
class DisplayConfig:
    """Window and drawing parameters."""
    fps: int
    road_margin: int
    stripe_dash: int
    stripe_gap: int
    corner_radius: int
    background_color: Tuple[int, int, int]
    road_color: Tuple[int, int, int]
    stripe_color: Tuple[int, int, int]
    player_color: Tuple[int, int, int]
    obstacle_color: Tuple[int, int, int]
    text_color: Tuple[int, int, int]


@dataclass(frozen=True)
class PersistenceConfig:
    """Where the high score is kept."""
    high_score_file: str

    @property
    def high_score_path(self) -> Path:
        return Path(os.path.expanduser(self.high_score_file))


@dataclass(frozen=True)
class CapsConfig:
    """Episode limits for agent play."""
    max_ticks: int


@dataclass(frozen=True)
class ObservationConfig:
    """Observation space parameters."""
    max_obstacles: int
    image_enabled: bool
    image_width: int
    image_height: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    board: BoardConfig
    lanes: LaneConfig
    player: PlayerConfig
    obstacles: ObstacleConfig
    difficulty: DifficultyConfig
    input: InputConfig
    display: DisplayConfig
    persistence: PersistenceConfig
    caps: CapsConfig
    observation: ObservationConfig

    @property
    def lane_count(self) -> int:
        """Number of lanes."""
        return self.lanes.count

    @property
    def start_lane(self) -> int:
        """Lane the player starts and restarts in (centre lane unless overridden)."""
        return self.player.start_lane


def _parse_color(color_data: List) -> Tuple[int, int, int]:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    return (int(color_data[0]), int(color_data[1]), int(color_data[2]))


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if config.board.width <= 0 or config.board.height <= 0:
        raise ValueError(
            f"Board size must be positive, got {config.board.width}x{config.board.height}"
        )

    if config.lanes.count < 1:
        raise ValueError(f"Lane count must be at least 1, got {config.lanes.count}")

    if not 0 <= config.player.start_lane < config.lanes.count:
        raise ValueError(
            f"player.start_lane ({config.player.start_lane}) must be in "
            f"[0, {config.lanes.count - 1}]"
        )

    for name, w, h in (
        ("player", config.player.width, config.player.height),
        ("obstacles", config.obstacles.width, config.obstacles.height),
    ):
        if w <= 0 or h <= 0:
            raise ValueError(f"{name} size must be positive, got {w}x{h}")

    if config.obstacles.spawn_interval < 1:
        raise ValueError(
            f"obstacles.spawn_interval must be >= 1, got {config.obstacles.spawn_interval}"
        )

    if config.obstacles.spawn_jitter < 0:
        raise ValueError(
            f"obstacles.spawn_jitter must be >= 0, got {config.obstacles.spawn_jitter}"
        )

    if config.difficulty.score_divisor <= 0:
        raise ValueError(
            f"difficulty.score_divisor must be positive, got {config.difficulty.score_divisor}"
        )

    if config.difficulty.score_step < 1:
        raise ValueError(
            f"difficulty.score_step must be >= 1, got {config.difficulty.score_step}"
        )

    if config.difficulty.speed_increment < 0:
        raise ValueError("difficulty.speed_increment must not be negative (speed never drops)")

    if config.observation.max_obstacles < 1:
        raise ValueError(
            f"observation.max_obstacles must be >= 1, got {config.observation.max_obstacles}"
        )

    if config.observation.image_width < 1 or config.observation.image_height < 1:
        raise ValueError(
            f"Observation image size must be positive, got "
            f"{config.observation.image_width}x{config.observation.image_height}"
        )


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    board_data = raw["board"]
    board = BoardConfig(
        width=int(board_data["width"]),
        height=int(board_data["height"])
    )

    lanes = LaneConfig(count=int(raw["lanes"]["count"]))

    # Start lane defaults to the centre lane
    player_data = raw["player"]
    start_lane = player_data.get("start_lane")
    player = PlayerConfig(
        width=float(player_data["width"]),
        height=float(player_data["height"]),
        bottom_offset=float(player_data.get("bottom_offset", 120)),
        start_lane=lanes.count // 2 if start_lane is None else int(start_lane)
    )

    obstacle_data = raw["obstacles"]
    obstacles = ObstacleConfig(
        width=float(obstacle_data["width"]),
        height=float(obstacle_data["height"]),
        spawn_interval=int(obstacle_data["spawn_interval"]),
        spawn_jitter=float(obstacle_data.get("spawn_jitter", 200)),
        despawn_margin=float(obstacle_data.get("despawn_margin", 100)),
        speed_bonus=float(obstacle_data.get("speed_bonus", 1.0))
    )

    difficulty_data = raw["difficulty"]
    difficulty = DifficultyConfig(
        base_speed=float(difficulty_data["base_speed"]),
        score_divisor=float(difficulty_data["score_divisor"]),
        score_step=int(difficulty_data["score_step"]),
        speed_increment=float(difficulty_data["speed_increment"])
    )

    input_data = raw.get("input", {})
    input_config = InputConfig(
        move_debounce_ms=float(input_data.get("move_debounce_ms", 150))
    )

    display_data = raw.get("display", {})
    display = DisplayConfig(
        fps=int(display_data.get("fps", 60)),
        road_margin=int(display_data.get("road_margin", 40)),
        stripe_dash=int(display_data.get("stripe_dash", 20)),
        stripe_gap=int(display_data.get("stripe_gap", 20)),
        corner_radius=int(display_data.get("corner_radius", 6)),
        background_color=_parse_color(display_data.get("background_color", [34, 34, 34])),
        road_color=_parse_color(display_data.get("road_color", [51, 51, 51])),
        stripe_color=_parse_color(display_data.get("stripe_color", [85, 85, 85])),
        player_color=_parse_color(display_data.get("player_color", [0, 204, 255])),
        obstacle_color=_parse_color(display_data.get("obstacle_color", [204, 51, 51])),
        text_color=_parse_color(display_data.get("text_color", [235, 235, 235]))
    )

    persistence_data = raw.get("persistence", {})
    persistence = PersistenceConfig(
        high_score_file=str(
            persistence_data.get("high_score_file", "~/.lane_racer/high_score.json")
        )
    )

    caps_data = raw.get("caps", {})
    caps = CapsConfig(max_ticks=int(caps_data.get("max_ticks", 36000)))

    obs_data = raw.get("observation", {})
    observation = ObservationConfig(
        max_obstacles=int(obs_data.get("max_obstacles", 16)),
        image_enabled=bool(obs_data.get("image_enabled", False)),
        image_width=int(obs_data.get("image_width", 180)),
        image_height=int(obs_data.get("image_height", 280))
    )

    config = GameConfig(
        board=board,
        lanes=lanes,
        player=player,
        obstacles=obstacles,
        difficulty=difficulty,
        input=input_config,
        display=display,
        persistence=persistence,
        caps=caps,
        observation=observation
    )

    _validate_config(config)
    return config


# Module-level cache for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
