"""
Tests for the obstacle spawner.
"""

import pytest
from collections import Counter

from lane_racer.racer_core.entities import LaneLayout
from lane_racer.racer_core.spawner import ObstacleSpawner


@pytest.fixture
def layout(config):
    return LaneLayout(config.board.width, config.board.height, config.lane_count)


class TestSpawnTimer:
    """Test the 90-tick countdown."""

    def test_due_every_interval(self, config):
        spawner = ObstacleSpawner(config, seed=42)

        due = [spawner.tick() for _ in range(270)]

        assert [i + 1 for i, d in enumerate(due) if d] == [90, 180, 270]
        assert spawner.timer == 0

    def test_timer_counts_up(self, config):
        spawner = ObstacleSpawner(config, seed=42)
        for _ in range(10):
            spawner.tick()
        assert spawner.timer == 10

        spawner.reset()
        assert spawner.timer == 0


class TestSpawnedObstacles:
    """Test obstacle placement."""

    def test_deterministic_with_seed(self, config, layout):
        s1 = ObstacleSpawner(config, seed=42)
        s2 = ObstacleSpawner(config, seed=42)

        seq1 = [(o.lane, o.y) for o in (s1.spawn(layout) for _ in range(30))]
        seq2 = [(o.lane, o.y) for o in (s2.spawn(layout) for _ in range(30))]

        assert seq1 == seq2

    def test_reset_with_seed_restores_sequence(self, config, layout):
        spawner = ObstacleSpawner(config, seed=3)
        initial = [spawner.spawn(layout).lane for _ in range(20)]

        spawner.reset(seed=3)
        assert [spawner.spawn(layout).lane for _ in range(20)] == initial

    def test_lane_and_position_ranges(self, config, layout):
        spawner = ObstacleSpawner(config, seed=1)
        h = config.obstacles.height

        for _ in range(300):
            obstacle = spawner.spawn(layout)
            assert 0 <= obstacle.lane < config.lane_count
            assert obstacle.x == layout.lane_center(obstacle.lane)
            assert -h - config.obstacles.spawn_jitter <= obstacle.y <= -h
            assert obstacle.w == config.obstacles.width
            assert obstacle.h == h

    def test_all_lanes_used(self, config, layout):
        spawner = ObstacleSpawner(config, seed=5)
        counts = Counter(spawner.spawn(layout).lane for _ in range(600))
        for lane in range(config.lane_count):
            assert counts[lane] > 100

    def test_explicit_lane_and_y(self, config, layout):
        spawner = ObstacleSpawner(config, seed=5)
        obstacle = spawner.spawn(layout, lane=2, y=-70)
        assert obstacle.lane == 2
        assert obstacle.y == -70

    def test_invalid_lane_rejected(self, config, layout):
        spawner = ObstacleSpawner(config, seed=5)
        with pytest.raises(ValueError):
            spawner.spawn(layout, lane=config.lane_count)
