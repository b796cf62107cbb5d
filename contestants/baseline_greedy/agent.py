"""
Baseline Greedy Agent - Places tiles where they merge right away.

This is a simple heuristic agent that scores every empty cell by how many
orthogonal neighbours hold the same tier as the pending tile, and places the
tile on the best one.

This serves as:
1. A working example of how to read observations and return actions
2. A baseline benchmark to compare against
3. A verification that the environment API works correctly

Strategy:
- Read the grid and pending_tile from the observation
- Count same-tier neighbours for each empty cell
- Pick the cell with the most matches (random tie-break)
- With no match anywhere, prefer cells with the fewest empty neighbours
  so open space stays together
"""

import numpy as np
from typing import Any, Dict, Optional


class ChromaAgent:
    """Greedy agent that maximises immediate merges."""

    def __init__(self, debug: bool = False):
        """
        Initialize the agent.

        Args:
            debug: If True, print decisions to stdout.
        """
        self.debug = debug
        self._rng = np.random.default_rng()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self._rng = np.random.default_rng(seed)

    def act(self, observation: Dict[str, Any], action_mask: Optional[np.ndarray] = None) -> int:
        """
        Choose a cell for the pending tile.

        Args:
            observation: Dict of numpy arrays from the environment.
            action_mask: Optional flat mask of empty cells.

        Returns:
            Flattened cell index.
        """
        grid = np.asarray(observation["grid"])
        tile = int(observation["pending_tile"])
        rows, cols = grid.shape

        padded = np.pad(grid.astype(np.int16), 1, constant_values=-1)
        neighbours = np.stack([
            padded[:-2, 1:-1],   # up
            padded[2:, 1:-1],    # down
            padded[1:-1, :-2],   # left
            padded[1:-1, 2:],    # right
        ])
        matches = (neighbours == tile).sum(axis=0)
        empties = (neighbours == 0).sum(axis=0)

        # Matches dominate; fewer empty neighbours breaks ties
        scores = matches.astype(np.float64) * 10.0 - empties

        mask = (grid == 0) if action_mask is None else np.asarray(action_mask).reshape(rows, cols)
        scores = np.where(mask, scores, -np.inf)

        best = np.flatnonzero(scores.reshape(-1) == scores.max())
        action = int(self._rng.choice(best))

        if self.debug:
            r, c = divmod(action, cols)
            print(f"[Greedy Agent] Tile={tile}, Cell=({r}, {c}), "
                  f"Matches={int(matches[r, c])}")

        return action


# Convenience function to create agent (used by benchmarks)
def create_agent(**kwargs) -> ChromaAgent:
    """Factory function to create an agent instance."""
    return ChromaAgent(**kwargs)
