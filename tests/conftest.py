"""
Shared fixtures.
"""

import os
from pathlib import Path

import pytest
import yaml

# Headless pygame for renderer tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from lane_racer.racer_core.config_loader import load_config


DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "lane_racer" / "game_config.yaml"


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def make_config_file(tmp_path):
    """
    Write the default YAML with section overrides and return its path.

    Usage: make_config_file(obstacles={"spawn_interval": 10})
    """
    def _make(**sections):
        with open(DEFAULT_CONFIG_PATH, "r") as f:
            raw = yaml.safe_load(f)
        for section, values in sections.items():
            raw.setdefault(section, {}).update(values)
        path = tmp_path / "game_config.yaml"
        with open(path, "w") as f:
            yaml.safe_dump(raw, f)
        return str(path)
    return _make


@pytest.fixture
def make_config(make_config_file):
    """
    Build a GameConfig from the default YAML with section overrides.

    Usage: make_config(obstacles={"spawn_interval": 10})
    """
    def _make(**sections):
        return load_config(make_config_file(**sections))
    return _make


@pytest.fixture
def quiet_config(make_config):
    """Config where nothing spawns on its own."""
    return make_config(obstacles={"spawn_interval": 1000000})
