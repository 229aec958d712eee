"""
Game Lifecycle
==============

Running/ended state machine and high-score hand-off.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from lane_racer.racer_core.persistence import HighScoreStore, MemoryHighScoreStore


RUNNING = "running"
ENDED = "ended"


@dataclass
class GameOverResult:
    """Outcome of ending a session."""
    final_score: int
    high_score: int
    new_record: bool
    reason: str


class Lifecycle:
    """
    Tracks RUNNING/ENDED and the high score.

    Store failures never propagate: the high score keeps living in memory
    and a warning is printed.
    """

    def __init__(self, store: Optional[HighScoreStore] = None):
        """
        Initialize lifecycle.

        Args:
            store: High score collaborator. In-memory if None.
        """
        self._store = store if store is not None else MemoryHighScoreStore()
        self._state: str = ENDED
        self._high_score: int = 0
        self._sessions: int = 0

    @property
    def state(self) -> str:
        return self._state

    @property
    def running(self) -> bool:
        return self._state == RUNNING

    @property
    def high_score(self) -> int:
        return self._high_score

    @property
    def sessions(self) -> int:
        """Number of sessions started."""
        return self._sessions

    def load_high_score(self) -> int:
        """Read the stored high score; 0 if the store is unavailable."""
        try:
            value = int(self._store.get_high_score())
        except Exception as e:
            print(f"Warning: could not load high score ({e}); starting from 0")
            value = 0
        self._high_score = max(self._high_score, value, 0)
        return self._high_score

    def start(self) -> None:
        """ENDED -> RUNNING (also fine when already running)."""
        self._state = RUNNING
        self._sessions += 1

    def end(self, score: int, reason: str = "collision") -> GameOverResult:
        """
        RUNNING -> ENDED, recording a new high score if beaten.

        Args:
            score: Final score of the session.
            reason: Why the session ended.
        """
        self._state = ENDED
        new_record = score > self._high_score
        if new_record:
            self._high_score = score
            self._persist(score)
        return GameOverResult(
            final_score=score,
            high_score=self._high_score,
            new_record=new_record,
            reason=reason
        )

    def _persist(self, value: int) -> None:
        try:
            self._store.set_high_score(value)
        except Exception as e:
            print(f"Warning: could not save high score ({e})")
