"""
State Snapshot
==============

Immutable view of the game handed to front-ends after every operation, plus
packing into fixed-shape numpy arrays for Gymnasium observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional
import numpy as np

from chroma_merge.core.config_loader import GameConfig, get_config
from chroma_merge.core.grid import Grid


@dataclass(frozen=True)
class GameSnapshot:
    """
    Game state at one instant.

    ``grid`` is a private read-only copy; later engine mutations never show
    through a snapshot already handed out.
    """
    grid: np.ndarray              # (rows, cols) int8, read-only
    score: int
    pending_tile: int
    game_over: bool
    best_score: int
    highest_tier_reached: int
    games_played: int
    chain_pending: bool
    run_id: int

    @property
    def empty_cells(self) -> int:
        return int((self.grid == 0).sum())

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        return {
            "grid": self.grid.copy(),
            "pending_tile": np.array(self.pending_tile, dtype=np.int64),
            "score": np.array(self.score, dtype=np.int64),
            "empty_cells": np.array(self.empty_cells, dtype=np.int32),
        }


class SnapshotBuilder:
    """Builds game state snapshots."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()
        self._config = config

    def build(
        self,
        grid: Grid,
        score: int,
        pending_tile: int,
        game_over: bool,
        best_score: int,
        highest_tier_reached: int,
        games_played: int,
        chain_pending: bool,
        run_id: int
    ) -> GameSnapshot:
        """Build a snapshot from current game state."""
        cells = grid.to_array()
        cells.setflags(write=False)
        return GameSnapshot(
            grid=cells,
            score=score,
            pending_tile=pending_tile,
            game_over=game_over,
            best_score=best_score,
            highest_tier_reached=highest_tier_reached,
            games_played=games_played,
            chain_pending=chain_pending,
            run_id=run_id
        )
