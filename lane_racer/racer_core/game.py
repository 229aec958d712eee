"""
Core Game
=========

Main game orchestrator combining scoring, spawning, obstacle movement,
collision detection and the running/ended lifecycle.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Optional, List, Dict, Any, Callable, Tuple

from lane_racer.racer_core.config_loader import GameConfig, get_config
from lane_racer.racer_core.entities import LaneLayout, Player, Obstacle
from lane_racer.racer_core.spawner import ObstacleSpawner
from lane_racer.racer_core.scoring import ScoreTracker
from lane_racer.racer_core.collision import find_collision
from lane_racer.racer_core.lifecycle import Lifecycle, GameOverResult
from lane_racer.racer_core.persistence import HighScoreStore
from lane_racer.racer_core.timing import Scheduler
from lane_racer.racer_core.state_snapshot import SnapshotBuilder, GameSnapshot


RenderCallback = Callable[[Dict[str, Any]], None]


@dataclass(frozen=True)
class SimulationState:
    """Read-only view of the per-session simulation state."""
    running: bool
    score: int
    speed: float
    spawn_timer: int
    stripe_offset: float
    player_lane: int
    obstacle_count: int


@dataclass
class TickResult:
    """Result of a single simulation tick."""
    delta_score: int
    speed_up: bool
    spawned: Optional[Obstacle]
    removed: int
    crashed: bool
    game_over: Optional[GameOverResult]


class CoreGame:
    """
    Main game simulation class.

    Orchestrates:
    - Score and speed ramp
    - Obstacle spawner (RNG)
    - Obstacle pool movement and pruning
    - Collision detection
    - Lifecycle (running/ended, high score)

    One tick = one update (if running) + one render callback.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        store: Optional[HighScoreStore] = None,
        scheduler: Optional[Scheduler] = None,
        render_callback: Optional[RenderCallback] = None
    ):
        """
        Initialize game.

        The game starts ENDED; call reset() or restart() to begin.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducible traffic.
            store: High score collaborator. In-memory if None.
            scheduler: Frame scheduler driving the loop (needed for start_loop).
            render_callback: Called with get_render_data() after every tick.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._scheduler = scheduler
        self._render_callback = render_callback

        # Subsystems
        self._layout = LaneLayout(config.board.width, config.board.height, config.lane_count)
        self._scorer = ScoreTracker(config)
        self._spawner = ObstacleSpawner(config, seed)
        self._lifecycle = Lifecycle(store)
        self._snapshot_builder = SnapshotBuilder(config)

        self._player = Player(
            lane=config.start_lane,
            x=self._layout.lane_center(config.start_lane),
            y=self._player_y(),
            w=config.player.width,
            h=config.player.height
        )
        self._obstacles: List[Obstacle] = []

        # Game state
        self._stripe_offset: float = 0.0
        self._ticks: int = 0
        self._termination_reason: str = ""
        self._last_game_over: Optional[GameOverResult] = None
        self._looping: bool = False
        self._frame_requested: bool = False

        self._lifecycle.load_high_score()

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def layout(self) -> LaneLayout:
        """Current lane layout."""
        return self._layout

    @property
    def player(self) -> Player:
        return self._player

    @property
    def obstacles(self) -> Tuple[Obstacle, ...]:
        """Obstacles currently in the pool, in spawn order."""
        return tuple(self._obstacles)

    @property
    def score(self) -> int:
        """Current score."""
        return self._scorer.score

    @property
    def speed(self) -> float:
        """Current scroll speed."""
        return self._scorer.speed

    @property
    def high_score(self) -> int:
        return self._lifecycle.high_score

    @property
    def running(self) -> bool:
        return self._lifecycle.running

    @property
    def is_over(self) -> bool:
        """True if the current session has ended."""
        return not self._lifecycle.running

    @property
    def ticks(self) -> int:
        """Updates performed this session."""
        return self._ticks

    @property
    def stripe_offset(self) -> float:
        return self._stripe_offset

    @property
    def spawn_timer(self) -> int:
        return self._spawner.timer

    @property
    def termination_reason(self) -> str:
        """Reason for game end, or empty string."""
        return self._termination_reason

    @property
    def last_game_over(self) -> Optional[GameOverResult]:
        return self._last_game_over

    @property
    def looping(self) -> bool:
        """True while the tick loop is armed on the scheduler."""
        return self._looping

    @property
    def state(self) -> SimulationState:
        """Current simulation state."""
        return SimulationState(
            running=self.running,
            score=self.score,
            speed=self.speed,
            spawn_timer=self.spawn_timer,
            stripe_offset=self._stripe_offset,
            player_lane=self._player.lane,
            obstacle_count=len(self._obstacles)
        )

    def _player_y(self) -> float:
        return self._layout.height - self._config.player.bottom_offset

    def reset(self, seed: Optional[int] = None) -> GameSnapshot:
        """
        Reset session state and start running.

        Args:
            seed: New random seed. Uses previous if None.

        Returns:
            Initial game snapshot.
        """
        if seed is not None:
            self._seed = seed

        self._scorer.reset()
        self._spawner.reset(self._seed)
        self._obstacles.clear()

        self._stripe_offset = 0.0
        self._ticks = 0
        self._termination_reason = ""
        self._last_game_over = None

        self._player.lane = self._config.start_lane
        self._player.y = self._player_y()
        self._player.snap_to_lane(self._layout)

        self._lifecycle.start()
        return self._build_snapshot()

    def restart(self, seed: Optional[int] = None) -> GameSnapshot:
        """Reset and make sure the tick loop is running."""
        snapshot = self.reset(seed)
        if self._scheduler is not None:
            self.start_loop()
        return snapshot

    def update(self) -> TickResult:
        """
        Advance the simulation by one tick.

        Does nothing once the session has ended.
        """
        if not self.running:
            return TickResult(
                delta_score=0,
                speed_up=False,
                spawned=None,
                removed=0,
                crashed=False,
                game_over=None
            )

        event = self._scorer.apply_tick()

        self._player.snap_to_lane(self._layout)

        spawned = None
        if self._spawner.tick():
            spawned = self._spawner.spawn(self._layout)
            self._obstacles.append(spawned)

        removed = self._advance_obstacles()

        game_over = None
        hit = find_collision(self._player, self._obstacles)
        if hit is not None:
            game_over = self.end_game("collision")

        self._stripe_offset += self.speed
        self._ticks += 1

        return TickResult(
            delta_score=event.points,
            speed_up=event.speed_up,
            spawned=spawned,
            removed=removed,
            crashed=hit is not None,
            game_over=game_over
        )

    def _advance_obstacles(self) -> int:
        """Scroll every obstacle and prune those past the bottom margin."""
        dy = self.speed + self._config.obstacles.speed_bonus
        bottom = self._layout.height + self._config.obstacles.despawn_margin
        removed = 0
        # Reverse so deletion does not skip elements
        for i in range(len(self._obstacles) - 1, -1, -1):
            obstacle = self._obstacles[i]
            obstacle.advance(dy, self._layout)
            if obstacle.is_off_screen(bottom):
                del self._obstacles[i]
                removed += 1
        return removed

    def tick(self) -> Optional[TickResult]:
        """
        One frame: update if running, then always render.

        Returns:
            TickResult, or None if the game was not running.
        """
        result = self.update() if self.running else None
        if self._render_callback is not None:
            self._render_callback(self.get_render_data())
        return result

    def start_loop(self) -> None:
        """Arm the tick loop on the scheduler (no-op if already looping)."""
        if self._looping:
            return
        if self._scheduler is None:
            raise RuntimeError("CoreGame has no scheduler; call tick() directly")
        self._looping = True
        # A frame left pending by stop_loop() resumes the existing chain
        if not self._frame_requested:
            self._request_frame()

    def stop_loop(self) -> None:
        """Stop re-arming the tick loop after the current frame."""
        self._looping = False

    def _request_frame(self) -> None:
        self._frame_requested = True
        self._scheduler.request_next_tick(self._on_frame)

    def _on_frame(self) -> None:
        self._frame_requested = False
        if not self._looping:
            return
        self.tick()
        if self._looping:
            self._request_frame()

    def end_game(self, reason: str = "collision") -> Optional[GameOverResult]:
        """
        End the current session.

        Returns:
            GameOverResult, or None if the game was already over.
        """
        if not self.running:
            return None
        result = self._lifecycle.end(self.score, reason)
        self._termination_reason = reason
        self._last_game_over = result
        return result

    def move_player(self, direction: int) -> bool:
        """
        Shift the player one lane, clamped. No debounce.

        Returns:
            True if the lane changed.
        """
        return self._player.shift(direction, self._layout)

    def spawn_obstacle(
        self,
        lane: Optional[int] = None,
        y: Optional[float] = None
    ) -> Obstacle:
        """
        Add an obstacle to the pool immediately.

        Args:
            lane: Lane index. Random if None.
            y: Vertical centre. Randomized above the top edge if None.

        Raises:
            ValueError: If the lane is out of range.
        """
        obstacle = self._spawner.spawn(self._layout, lane=lane, y=y)
        self._obstacles.append(obstacle)
        return obstacle

    def resize(self, width: float, height: float) -> None:
        """
        Apply new surface dimensions.

        Lanes are kept; positions are re-derived from the new layout.

        Raises:
            ValueError: If either dimension is not positive.
        """
        self._layout.resize(width, height)
        self._player.y = self._player_y()
        self._player.snap_to_lane(self._layout)
        for obstacle in self._obstacles:
            obstacle.snap_to_lane(self._layout)

    def _build_snapshot(self) -> GameSnapshot:
        """Build current game state snapshot."""
        return self._snapshot_builder.build(
            layout=self._layout,
            player=self._player,
            obstacles=self._obstacles,
            score=self.score,
            speed=self.speed,
            high_score=self.high_score,
            ticks=self._ticks,
            running=self.running
        )

    def snapshot(self) -> GameSnapshot:
        return self._build_snapshot()

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        return {
            "score": self.score,
            "speed": self.speed,
            "high_score": self.high_score,
            "ticks": self._ticks,
            "obstacle_count": len(self._obstacles),
            "player_lane": self._player.lane,
            "terminated_reason": self._termination_reason,
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with entity boxes, lane geometry and HUD values.
        """
        return {
            "board_width": self._layout.width,
            "board_height": self._layout.height,
            "lane_count": self._layout.lane_count,
            "lane_width": self._layout.lane_width,
            "lane_separators": list(self._layout.separators()),
            "stripe_offset": self._stripe_offset,
            "player": asdict(self._player),
            "obstacles": [asdict(o) for o in self._obstacles],
            "score": self.score,
            "speed": self.speed,
            "high_score": self.high_score,
            "running": self.running,
            "termination_reason": self._termination_reason,
        }
