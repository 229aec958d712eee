"""
Tests for score accrual and the speed ramp.
"""

import pytest

from lane_racer.racer_core.scoring import ScoreTracker
from lane_racer.racer_core.game import CoreGame


@pytest.fixture
def scorer(config):
    return ScoreTracker(config)


class TestScoreTracker:
    """Test per-tick scoring."""

    def test_initial_state(self, scorer):
        assert scorer.score == 0
        assert scorer.speed == 3.0

    def test_two_points_per_tick_at_base_speed(self, scorer):
        """floor(3 / 1.5) = 2 points per tick."""
        scores = []
        for _ in range(5):
            event = scorer.apply_tick()
            assert event.points == 2
            scores.append(scorer.score)
        assert scores == [2, 4, 6, 8, 10]

    def test_speed_up_on_exact_multiple(self, scorer):
        """Score hits 1000 on tick 500 and speed rises by 0.2."""
        for _ in range(499):
            scorer.apply_tick()
        assert scorer.speed == 3.0

        event = scorer.apply_tick()
        assert scorer.score == 1000
        assert event.speed_up
        assert scorer.speed == pytest.approx(3.2)
        assert scorer.speed_ups == 1

    def test_overshoot_skips_speed_up(self, make_config):
        """An increment that jumps over a multiple does not trigger."""
        config = make_config(difficulty={"score_step": 3})
        scorer = ScoreTracker(config)

        scorer.apply_tick()  # 2
        event = scorer.apply_tick()  # 4, crossed 3 without landing on it
        assert scorer.score == 4
        assert not event.speed_up
        assert scorer.speed == 3.0

        event = scorer.apply_tick()  # 6
        assert event.speed_up
        assert scorer.speed == pytest.approx(3.2)

    def test_increment_grows_with_speed(self, make_config):
        config = make_config(difficulty={"base_speed": 4.6})
        scorer = ScoreTracker(config)
        assert scorer.points_per_tick() == 3

    def test_reset(self, scorer):
        for _ in range(600):
            scorer.apply_tick()
        scorer.reset()
        assert scorer.score == 0
        assert scorer.speed == 3.0
        assert scorer.speed_ups == 0


class TestScoreInGame:
    """Test score and speed monotonicity through the game loop."""

    def test_score_and_speed_non_decreasing(self, config):
        game = CoreGame(config=config, seed=7)
        game.reset()

        last_score, last_speed = game.score, game.speed
        for _ in range(3000):
            game.update()
            assert game.score >= last_score
            assert game.speed >= last_speed
            last_score, last_speed = game.score, game.speed

    def test_score_frozen_after_end(self, quiet_config):
        game = CoreGame(config=quiet_config)
        game.reset()
        for _ in range(10):
            game.update()
        game.end_game("test")

        frozen = game.score
        for _ in range(10):
            game.tick()
        assert game.score == frozen
        assert game.speed == 3.0
