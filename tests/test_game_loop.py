"""
Tests for the CoreGame tick loop, obstacle pool and lifecycle transitions.
"""

from collections import deque

import pytest

from lane_racer.racer_core.game import CoreGame
from lane_racer.racer_core.persistence import MemoryHighScoreStore
from lane_racer.racer_core.timing import FrameScheduler


class QueueScheduler:
    """Scheduler that queues every request and runs one batch per frame."""

    def __init__(self):
        self._queue = deque()

    def request_next_tick(self, callback):
        self._queue.append(callback)

    def run_frames(self, count):
        for _ in range(count):
            batch = list(self._queue)
            self._queue.clear()
            for callback in batch:
                callback()

    @property
    def pending(self):
        return len(self._queue)


@pytest.fixture
def store():
    return MemoryHighScoreStore()


@pytest.fixture
def game(quiet_config, store):
    game = CoreGame(config=quiet_config, seed=42, store=store)
    game.reset()
    return game


class TestInitialState:
    """Test construction and reset."""

    def test_starts_ended(self, quiet_config):
        game = CoreGame(config=quiet_config)
        assert not game.running
        assert game.update().delta_score == 0
        assert game.score == 0

    def test_reset_state(self, game):
        state = game.state
        assert state.running
        assert state.score == 0
        assert state.speed == 3.0
        assert state.spawn_timer == 0
        assert state.stripe_offset == 0.0
        assert state.player_lane == 1
        assert state.obstacle_count == 0

    def test_player_placement(self, game, quiet_config):
        assert game.player.y == quiet_config.board.height - quiet_config.player.bottom_offset
        assert game.player.x == game.layout.lane_center(1)


class TestTick:
    """Test per-tick updates."""

    def test_score_increments_by_two(self, game):
        for expected in (2, 4, 6, 8):
            result = game.update()
            assert result.delta_score == 2
            assert game.score == expected

    def test_stripe_offset_advances_by_speed(self, game):
        for _ in range(5):
            game.update()
        assert game.stripe_offset == pytest.approx(15.0)

    def test_spawns_on_interval(self, config):
        game = CoreGame(config=config, seed=42)
        game.reset()

        for _ in range(89):
            assert game.update().spawned is None
        result = game.update()

        assert result.spawned is not None
        assert game.obstacles == (result.spawned,)
        assert game.spawn_timer == 0

    def test_obstacles_move_speed_plus_one(self, game):
        obstacle = game.spawn_obstacle(lane=0, y=-70)
        game.update()
        assert obstacle.y == pytest.approx(-66.0)
        assert obstacle.x == game.layout.lane_center(0)

    def test_obstacle_removed_past_bottom_margin(self, game, quiet_config):
        """Removed on the first tick its y exceeds height + margin."""
        game.spawn_obstacle(lane=0, y=-70)
        bottom = quiet_config.board.height + quiet_config.obstacles.despawn_margin

        # -70 + 4k > bottom
        ticks_needed = int((bottom + 70) // 4) + 1
        for _ in range(ticks_needed - 1):
            game.update()
        assert len(game.obstacles) == 1
        assert game.obstacles[0].y <= bottom

        result = game.update()
        assert result.removed == 1
        assert game.obstacles == ()
        assert game.running

    def test_removal_keeps_other_obstacles(self, game):
        """Pruning while iterating does not skip neighbours."""
        game.spawn_obstacle(lane=0, y=799)
        game.spawn_obstacle(lane=2, y=798)
        keep = game.spawn_obstacle(lane=0, y=-200)

        result = game.update()

        assert result.removed == 2
        assert game.obstacles == (keep,)

    def test_player_lane_refreshed_on_update(self, game):
        game.move_player(-1)
        assert game.player.lane == 0
        game.update()
        assert game.player.x == game.layout.lane_center(0)


class TestCollision:
    """Test collision and lifecycle transitions."""

    def _place_just_above_player(self, game):
        # One tick of movement (4px) brings it into overlap
        return game.spawn_obstacle(lane=1, y=game.player.y - 72)

    def test_collision_fires_once(self, game, store):
        self._place_just_above_player(game)

        crashes = 0
        for _ in range(10):
            result = game.update()
            crashes += int(result.crashed)

        assert crashes == 1
        assert not game.running
        assert game.termination_reason == "collision"
        assert store.writes == 1

    def test_restart_after_collision(self, game):
        self._place_just_above_player(game)
        game.update()
        assert game.is_over

        game.restart()

        assert game.running
        assert game.score == 0
        assert game.obstacles == ()
        assert game.termination_reason == ""

    def test_other_lane_no_collision(self, game):
        game.spawn_obstacle(lane=0, y=game.player.y - 72)
        for _ in range(40):
            assert not game.update().crashed
        assert game.running

    def test_high_score_only_on_improvement(self, quiet_config):
        store = MemoryHighScoreStore(initial=1000)
        game = CoreGame(config=quiet_config, store=store)
        assert game.high_score == 1000

        game.reset()
        game.update()
        result = game.end_game()

        assert not result.new_record
        assert game.high_score == 1000
        assert store.writes == 0

    def test_end_game_twice_is_noop(self, game):
        game.update()
        assert game.end_game() is not None
        assert game.end_game() is None

    def test_restart_is_idempotent(self, game):
        for _ in range(50):
            game.update()
        game.spawn_obstacle(lane=2)

        game.restart()
        once = game.state
        game.restart()
        twice = game.state

        assert once == twice
        assert twice.score == 0
        assert twice.obstacle_count == 0

    def test_restart_returns_to_start_lane(self, make_config):
        game = CoreGame(config=make_config(player={"start_lane": 0}))
        game.reset()
        game.move_player(1)
        game.move_player(1)
        assert game.player.lane == 2

        game.restart()

        assert game.player.lane == 0
        assert game.state.player_lane == game.config.start_lane


class TestLoop:
    """Test scheduler-driven ticking and render hand-off."""

    def test_loop_rearms_each_frame(self, quiet_config):
        scheduler = FrameScheduler()
        game = CoreGame(config=quiet_config, scheduler=scheduler)
        game.restart()

        assert game.looping
        assert scheduler.run_frames(25) == 25
        assert game.ticks == 25
        assert scheduler.has_pending

    def test_restart_does_not_double_loop(self, quiet_config):
        scheduler = FrameScheduler()
        game = CoreGame(config=quiet_config, scheduler=scheduler)
        game.restart()
        game.restart()

        scheduler.run_frames(3)
        assert game.ticks == 3

    def test_stop_loop(self, quiet_config):
        scheduler = FrameScheduler()
        game = CoreGame(config=quiet_config, scheduler=scheduler)
        game.restart()
        scheduler.run_frames(2)

        game.stop_loop()
        assert scheduler.run_frames(5) == 1  # pending frame runs as a no-op
        assert game.ticks == 2
        assert not scheduler.has_pending

    def test_stop_then_start_keeps_one_tick_per_frame(self, quiet_config):
        scheduler = QueueScheduler()
        game = CoreGame(config=quiet_config, scheduler=scheduler)
        game.restart()
        scheduler.run_frames(1)

        game.stop_loop()
        game.start_loop()
        scheduler.run_frames(10)

        assert game.ticks == 11
        assert scheduler.pending == 1

    def test_restart_after_stop_keeps_one_chain(self, quiet_config):
        scheduler = QueueScheduler()
        game = CoreGame(config=quiet_config, scheduler=scheduler)
        game.restart()
        game.stop_loop()
        scheduler.run_frames(1)

        game.restart()
        game.restart()
        scheduler.run_frames(4)

        assert game.ticks == 4
        assert scheduler.pending == 1

    def test_start_loop_without_scheduler(self, game):
        with pytest.raises(RuntimeError):
            game.start_loop()

    def test_render_called_even_when_ended(self, quiet_config):
        frames = []
        scheduler = FrameScheduler()
        game = CoreGame(config=quiet_config, scheduler=scheduler, render_callback=frames.append)
        game.restart()
        scheduler.run_frames(3)
        game.end_game()
        scheduler.run_frames(3)

        assert len(frames) == 6
        assert frames[-1]["running"] is False
        assert frames[-1]["score"] == frames[-2]["score"] == 6


class TestResize:
    """Test layout responsiveness."""

    def test_resize_keeps_lanes(self, game):
        game.move_player(1)
        obstacle = game.spawn_obstacle(lane=0, y=100)

        game.resize(900, 1000)

        assert game.player.lane == 2
        assert game.player.x == pytest.approx(750.0)
        assert game.player.y == pytest.approx(1000 - 120)
        assert obstacle.lane == 0
        assert obstacle.x == pytest.approx(150.0)

    def test_render_data_tracks_layout(self, game):
        game.resize(600, 700)
        data = game.get_render_data()
        assert data["board_width"] == 600
        assert data["lane_separators"] == [200.0, 400.0]

    def test_rejects_empty_surface(self, game):
        with pytest.raises(ValueError):
            game.resize(0, 0)
        with pytest.raises(ValueError):
            game.resize(450, -1)

        assert game.layout.width == 450
        game.update()
        assert game.get_render_data()["lane_width"] == pytest.approx(150.0)
