"""
Baseline Dodger Agent - Changes lanes when traffic gets close.

This is a simple heuristic agent that uses the lane_clearance observation
(free road ahead of the player, per lane) to decide whether to move.

This serves as:
1. A working example of how to read observations and return actions
2. A baseline benchmark to compare against
3. A verification that the environment API works correctly

Strategy:
- If the current lane has at least `danger_distance` pixels of free road, stay
- Otherwise move toward the adjacent lane with the most clearance,
  if that lane is better than the current one
"""

import numpy as np
from typing import Any, Dict, Optional


STAY = 0
MOVE_LEFT = 1
MOVE_RIGHT = 2


class DodgerAgent:
    """
    Baseline agent that dodges into the clearest adjacent lane.
    """

    def __init__(self, danger_distance: float = 120.0, debug: bool = False):
        """
        Initialize the agent.

        Args:
            danger_distance: Clearance (pixels) below which the agent reacts.
            debug: If True, print decisions to stdout.
        """
        self.danger_distance = danger_distance
        self.debug = debug

    def reset(self, seed: Optional[int] = None) -> None:
        """Reset agent state for a new episode (stateless)."""
        pass

    def act(self, observation: Dict[str, Any]) -> int:
        """
        Choose an action from the lane clearances.

        Args:
            observation: Dict of numpy arrays from the environment.

        Returns:
            0 (stay), 1 (left) or 2 (right).
        """
        clearance = np.asarray(observation["lane_clearance"], dtype=np.float32)
        lane = int(observation["player_lane"])

        if clearance[lane] >= self.danger_distance:
            return STAY

        best_action = STAY
        best_clearance = float(clearance[lane])
        for action, neighbour in ((MOVE_LEFT, lane - 1), (MOVE_RIGHT, lane + 1)):
            if 0 <= neighbour < len(clearance) and clearance[neighbour] > best_clearance:
                best_action = action
                best_clearance = float(clearance[neighbour])

        if self.debug:
            print(f"[Dodger Agent] lane={lane}, clearance={clearance.tolist()}, "
                  f"action={best_action}")

        return best_action


# Convenience function to create agent (used by tools)
def create_agent(**kwargs) -> DodgerAgent:
    """Factory function to create an agent instance."""
    return DodgerAgent(**kwargs)
