"""
Merge System
============

Resolves the chain of merges triggered by filling one cell.

Only the origin cell is re-checked after each merge: a placement produces a
single cascading lineage rooted at the placement site, never a board-wide
flood. Cells cleared elsewhere are not revisited.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from chroma_merge.core.config_loader import GameConfig, get_config
from chroma_merge.core.grid import Cell, Grid
from chroma_merge.core.scoring import ScoreEvent, ScoreTracker
from chroma_merge.core.tier_catalog import EMPTY, TierCatalog, get_catalog


@dataclass(frozen=True)
class MergeResult:
    """Result of a single merge iteration."""
    origin: Cell
    cleared: Tuple[Cell, ...]    # Every matched cell, origin first
    from_tier: int
    new_tier: int
    score_event: ScoreEvent

    @property
    def count(self) -> int:
        return len(self.cleared)


class MatchResolver:
    """
    Finds same-valued orthogonal neighbours of an origin, clears them and
    writes the next tier at the origin.

    ``step`` performs one iteration so a front-end can animate between
    iterations; ``resolve`` runs the chain to completion.
    """

    def __init__(
        self,
        grid: Grid,
        scorer: ScoreTracker,
        config: Optional[GameConfig] = None
    ):
        """
        Initialize match resolver.

        Args:
            grid: The board to mutate.
            scorer: Score tracker credited for each merge.
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._grid = grid
        self._scorer = scorer
        self._catalog: TierCatalog = get_catalog(config)

    def find_matches(self, origin: Cell) -> List[Cell]:
        """
        The origin plus every neighbour holding the same value.

        Returns just ``[origin]`` when the origin is empty or has no match.
        """
        row, col = origin
        value = self._grid.get(row, col)
        matches = [origin]
        if value == EMPTY:
            return matches
        for neighbor in self._grid.neighbors4(row, col):
            if self._grid.get(*neighbor) == value:
                matches.append(neighbor)
        return matches

    def has_match(self, origin: Cell) -> bool:
        """True if ``step(origin)`` would merge."""
        return len(self.find_matches(origin)) > 1

    def step(self, origin: Cell) -> Optional[MergeResult]:
        """
        Resolve one merge iteration at the origin.

        Returns:
            MergeResult, or None if the origin has no same-valued neighbour.
        """
        matches = self.find_matches(origin)
        if len(matches) == 1:
            return None

        row, col = origin
        from_tier = self._grid.get(row, col)
        new_tier = self._catalog.merged_tier(from_tier)

        self._grid.clear_cells(matches)
        self._grid.set(row, col, new_tier)

        score_event = self._scorer.record(len(matches), new_tier)

        return MergeResult(
            origin=origin,
            cleared=tuple(matches),
            from_tier=from_tier,
            new_tier=new_tier,
            score_event=score_event
        )

    def resolve(self, origin: Cell) -> List[MergeResult]:
        """
        Run the chain at the origin until no merge remains.

        The origin's tier never decreases and is capped, so the loop ends after
        at most one escalation per tier plus one top-tier merge.
        """
        results: List[MergeResult] = []
        while True:
            result = self.step(origin)
            if result is None:
                return results
            results.append(result)
