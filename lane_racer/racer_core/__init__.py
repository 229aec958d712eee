"""
Racer Core - The simulation at the heart of the game.

This module provides the headless game loop, the Gymnasium environment
wrapper, and the supporting systems (spawning, scoring, collision, lifecycle).

Main exports:
- CoreGame: Tick-based game simulation
- RacerEnv: Gymnasium environment for agent play
- LaneInput: Debounced lane-change input
- FrameScheduler, FakeClock, MonotonicClock: Loop driving and time sources
- JsonHighScoreStore, MemoryHighScoreStore: High score persistence
- GameConfig: Configuration loaded from game_config.yaml
"""

from lane_racer.racer_core.config_loader import GameConfig, load_config
from lane_racer.racer_core.entities import LaneLayout, Player, Obstacle
from lane_racer.racer_core.game import CoreGame, SimulationState, TickResult
from lane_racer.racer_core.env_gym import RacerEnv
from lane_racer.racer_core.input_control import LaneInput
from lane_racer.racer_core.timing import FrameScheduler, FakeClock, MonotonicClock
from lane_racer.racer_core.persistence import (
    HighScoreStore,
    JsonHighScoreStore,
    MemoryHighScoreStore,
)

__all__ = [
    "GameConfig",
    "load_config",
    "LaneLayout",
    "Player",
    "Obstacle",
    "CoreGame",
    "SimulationState",
    "TickResult",
    "RacerEnv",
    "LaneInput",
    "FrameScheduler",
    "FakeClock",
    "MonotonicClock",
    "HighScoreStore",
    "JsonHighScoreStore",
    "MemoryHighScoreStore",
]
