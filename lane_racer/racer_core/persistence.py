"""
High Score Persistence
======================

Stores a single non-negative integer between sessions.

Usage:
    from lane_racer.racer_core.persistence import JsonHighScoreStore

    store = JsonHighScoreStore("~/.lane_racer/high_score.json")
    best = store.get_high_score()
    store.set_high_score(best + 10)
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Protocol, Union


class HighScoreStore(Protocol):
    """Anything that can load and save the high score."""

    def get_high_score(self) -> int:
        ...

    def set_high_score(self, value: int) -> None:
        ...


class MemoryHighScoreStore:
    """Keeps the high score in memory only (tests, headless runs)."""

    def __init__(self, initial: int = 0):
        self._value = max(0, int(initial))
        self.writes: int = 0

    def get_high_score(self) -> int:
        return self._value

    def set_high_score(self, value: int) -> None:
        self._value = max(0, int(value))
        self.writes += 1


class JsonHighScoreStore:
    """
    High score kept in a small JSON file.

    Format: {"high_score": 1234}

    Reading a missing file yields 0. Malformed content raises ValueError;
    I/O problems raise OSError. Callers decide whether to tolerate them.
    """

    KEY = "high_score"

    def __init__(self, path: Union[str, Path]):
        self._path = Path(os.path.expanduser(str(path)))

    @property
    def path(self) -> Path:
        return self._path

    def get_high_score(self) -> int:
        """
        Load the stored high score.

        Returns:
            Stored value, or 0 if nothing has been saved yet.

        Raises:
            ValueError: If the file content is not a valid score.
        """
        if not self._path.exists():
            return 0

        with open(self._path, "r") as f:
            data = json.load(f)

        if not isinstance(data, dict) or self.KEY not in data:
            raise ValueError(f"No '{self.KEY}' entry in {self._path}")

        value = int(data[self.KEY])
        if value < 0:
            raise ValueError(f"High score must be non-negative, got {value}")
        return value

    def set_high_score(self, value: int) -> None:
        """Write the high score, creating parent directories as needed."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w") as f:
            json.dump({self.KEY: int(value)}, f)
