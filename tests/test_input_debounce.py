"""
Tests for debounced lane input.
"""

import pytest

from lane_racer.racer_core.game import CoreGame
from lane_racer.racer_core.input_control import LaneInput
from lane_racer.racer_core.timing import FakeClock


@pytest.fixture
def clock():
    return FakeClock(start=10.0)


@pytest.fixture
def game(quiet_config):
    game = CoreGame(config=quiet_config)
    game.reset()
    return game


@pytest.fixture
def lane_input(game, clock):
    return LaneInput(game, clock)


class TestDebounce:
    """Test the 150ms acceptance window."""

    def test_debounce_from_config(self, lane_input):
        assert lane_input.debounce_seconds == pytest.approx(0.15)

    def test_first_request_accepted(self, lane_input, game):
        assert lane_input.move_left()
        assert game.player.lane == 0

    def test_two_moves_50ms_apart_change_one_lane(self, lane_input, game, clock):
        game.move_player(-1)
        assert game.player.lane == 0

        assert lane_input.move_right()
        clock.advance_ms(50)
        assert not lane_input.move_right()

        assert game.player.lane == 1

    def test_accepted_after_window(self, lane_input, game, clock):
        lane_input.move_left()
        clock.advance_ms(149)
        assert not lane_input.move_right()
        clock.advance_ms(2)
        assert lane_input.move_right()
        assert game.player.lane == 1

    def test_rejected_request_does_not_extend_window(self, lane_input, clock):
        lane_input.move_left()
        clock.advance_ms(100)
        assert not lane_input.move_right()
        clock.advance_ms(60)
        assert lane_input.move_right()

    def test_custom_debounce(self, game, clock):
        lane_input = LaneInput(game, clock, debounce_ms=10)
        lane_input.move_left()
        clock.advance_ms(11)
        assert lane_input.move_right()

    def test_reset_forgets_last_move(self, lane_input, clock):
        lane_input.move_left()
        lane_input.reset()
        assert lane_input.move_right()

    def test_invalid_direction(self, lane_input):
        with pytest.raises(ValueError):
            lane_input.request_move(2)


class TestClamping:
    """Test lanes stay on the road."""

    def test_clamped_at_both_edges(self, lane_input, game, clock, quiet_config):
        last_lane = quiet_config.lane_count - 1

        for _ in range(5):
            lane_input.move_right()
            clock.advance_ms(200)
            assert 0 <= game.player.lane <= last_lane
        assert game.player.lane == last_lane

        for _ in range(5):
            lane_input.move_left()
            clock.advance_ms(200)
            assert 0 <= game.player.lane <= last_lane
        assert game.player.lane == 0

    def test_move_player_reports_change(self, game):
        assert game.move_player(-1)
        assert not game.move_player(-1)
        assert game.player.lane == 0


class TestFakeClock:
    """Test the manual clock."""

    def test_advance(self):
        clock = FakeClock()
        assert clock.now() == 0.0
        clock.advance(0.5)
        clock.advance_ms(250)
        assert clock.now() == pytest.approx(0.75)

    def test_cannot_go_backwards(self):
        with pytest.raises(ValueError):
            FakeClock().advance(-1)
