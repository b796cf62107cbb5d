"""
Game Rules
==========

Terminal-state detection. A run ends exactly when the grid is full; there is
no look-ahead for merges a final placement might still trigger.
"""

from __future__ import annotations

from dataclasses import dataclass

from chroma_merge.core.grid import Grid


@dataclass
class TerminationResult:
    """Result of termination check."""
    terminated: bool
    reason: str

    @staticmethod
    def none() -> "TerminationResult":
        return TerminationResult(False, "")

    @staticmethod
    def game_over(reason: str) -> "TerminationResult":
        return TerminationResult(True, reason)


class GameOverDetector:
    """Reports terminal state when no empty cell remains."""

    def evaluate(self, grid: Grid) -> bool:
        return grid.is_full()

    def check_termination(self, grid: Grid) -> TerminationResult:
        if self.evaluate(grid):
            return TerminationResult.game_over("grid_full")
        return TerminationResult.none()
