"""
Scoring System
==============

Applies merge scores and forwards best-score / highest-tier updates to the
statistics store.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from chroma_merge.core.config_loader import GameConfig, get_config
from chroma_merge.core.statistics import StatisticsStore


@dataclass(frozen=True)
class ScoreEvent:
    """Record of a scoring event."""
    points: int
    merged_tier: int
    count: int

    def __repr__(self) -> str:
        return f"ScoreEvent(merge_{self.count}_to_{self.merged_tier}={self.points})"


class ScoreTracker:
    """
    Tracks the current run's score.

    Each merge is worth ``count * points_per_tile``; the capped top tier still
    scores when it merges into itself.
    """

    def __init__(
        self,
        statistics: Optional[StatisticsStore] = None,
        config: Optional[GameConfig] = None
    ):
        """
        Initialize score tracker.

        Args:
            statistics: Store updated with best score and highest tier. Optional
                so the tracker can be used standalone.
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._statistics = statistics
        self._points_per_tile = config.scoring.points_per_tile
        self._score: int = 0
        self._merges: int = 0
        self._highest_tier: int = 0

    @property
    def score(self) -> int:
        """Current total score."""
        return self._score

    @property
    def merges(self) -> int:
        """Total number of merges performed this run."""
        return self._merges

    @property
    def highest_tier(self) -> int:
        """Highest tier produced by a merge this run (0 if none)."""
        return self._highest_tier

    def get_merge_score(self, count: int) -> int:
        """Points for clearing ``count`` cells in one merge."""
        return count * self._points_per_tile

    def record(self, count: int, merged_tier: int) -> ScoreEvent:
        """
        Apply score for a merge and return the event.

        Args:
            count: Cells cleared by the merge (origin included).
            merged_tier: Tier written at the origin.

        Returns:
            ScoreEvent describing the points awarded.
        """
        points = self.get_merge_score(count)
        self._score += points
        self._merges += 1
        self._highest_tier = max(self._highest_tier, merged_tier)

        if self._statistics is not None:
            self._statistics.update_best_score(self._score)
            self._statistics.update_highest_tier(merged_tier)

        return ScoreEvent(points=points, merged_tier=merged_tier, count=count)

    def reset(self) -> None:
        """Reset score to zero."""
        self._score = 0
        self._merges = 0
        self._highest_tier = 0
