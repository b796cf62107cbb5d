"""
Core Game
=========

Main game orchestrator combining grid, tile generation, merging, scoring and
termination rules.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from chroma_merge.core.config_loader import GameConfig, get_config
from chroma_merge.core.errors import InvalidMoveError, InvalidStateError, OutOfBoundsError
from chroma_merge.core.events import (
    EVENT_GAME_OVER,
    EVENT_MERGED,
    EVENT_RUN_RESET,
    EVENT_TILE_PLACED,
    EventBus,
)
from chroma_merge.core.grid import Cell, Grid
from chroma_merge.core.merge_system import MatchResolver, MergeResult
from chroma_merge.core.rng import TileGenerator
from chroma_merge.core.rules import GameOverDetector
from chroma_merge.core.scoring import ScoreTracker
from chroma_merge.core.state_snapshot import GameSnapshot, SnapshotBuilder
from chroma_merge.core.statistics import InMemoryStatistics, StatisticsStore
from chroma_merge.core.tier_catalog import EMPTY


class GamePhase(Enum):
    ACTIVE = "active"
    GAME_OVER = "game_over"


@dataclass
class PlacementResult:
    """Result of a placement (or of its first stage in stepped mode)."""
    snapshot: GameSnapshot
    row: int
    col: int
    tier: int
    merges: List[MergeResult] = field(default_factory=list)
    delta_score: int = 0
    game_over: bool = False
    chain_pending: bool = False


class GameEngine:
    """
    Main game simulation class.

    Orchestrates:
    - Grid
    - Tile generation (RNG)
    - Match/merge resolution
    - Scoring and statistics
    - Termination rules
    - State snapshots

    ``place_tile`` runs a whole placement, chain reaction included.
    Front-ends that animate chain reactions use ``begin_placement`` followed
    by ``advance_chain`` calls, one merge per call. The engine holds no timers.
    """

    def __init__(
        self,
        statistics: Optional[StatisticsStore] = None,
        events: Optional[EventBus] = None,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        generator: Optional[TileGenerator] = None,
        debug: bool = False
    ):
        """
        Initialize game.

        Args:
            statistics: Cross-run statistics store. In-memory store if None.
            events: Event bus for audio/telemetry. A private bus if None.
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility.
            generator: Tile generator override (anything with
                ``generate(games_played)`` and ``reset(seed)``).
            debug: If True, prints state transitions.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._debug = debug

        # Collaborators
        self._statistics = statistics if statistics is not None else InMemoryStatistics()
        self._events = events if events is not None else EventBus()

        # Subsystems
        self._grid = Grid(config)
        self._generator = generator if generator is not None else TileGenerator(config, seed)
        self._scorer = ScoreTracker(self._statistics, config)
        self._resolver = MatchResolver(self._grid, self._scorer, config)
        self._detector = GameOverDetector()
        self._snapshot_builder = SnapshotBuilder(config)

        # Run state
        self._run_id: int = 0
        self._phase = GamePhase.ACTIVE
        self._placements: int = 0
        self._chain_origin: Optional[Cell] = None
        self._pending_tile: int = self._generator.generate(self._statistics.games_played)

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def grid(self) -> Grid:
        """The live grid (for tools and tests; front-ends should use snapshots)."""
        return self._grid

    @property
    def statistics(self) -> StatisticsStore:
        return self._statistics

    @property
    def events(self) -> EventBus:
        return self._events

    @property
    def score(self) -> int:
        """Current score."""
        return self._scorer.score

    @property
    def pending_tile(self) -> int:
        """Tier that the next successful placement will write."""
        return self._pending_tile

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def is_over(self) -> bool:
        """True if the run has ended."""
        return self._phase is GamePhase.GAME_OVER

    @property
    def run_id(self) -> int:
        """Incremented on every reset; stale chain steps carry an old value."""
        return self._run_id

    @property
    def chain_pending(self) -> bool:
        """True while a stepped chain reaction still has merges to apply."""
        return self._chain_origin is not None

    @property
    def placements(self) -> int:
        """Tiles placed this run."""
        return self._placements

    def reset(self, seed: Optional[int] = None) -> GameSnapshot:
        """
        Start a new run.

        Discards any pending chain step, clears the grid and score, generates
        the first pending tile with the current ``games_played`` and only then
        counts the replaced run. The rest of the new run draws with the
        updated count.

        Args:
            seed: New random seed. Continues the current stream if None.

        Returns:
            Initial snapshot of the new run.
        """
        if seed is not None:
            self._seed = seed

        # Drop stale chain state before anything else
        self._chain_origin = None
        self._run_id += 1

        self._grid.clear()
        self._scorer.reset()
        self._generator.reset(seed)

        self._phase = GamePhase.ACTIVE
        self._placements = 0
        self._pending_tile = self._generator.generate(self._statistics.games_played)
        self._statistics.increment_games_played()

        if self._debug:
            print(f"[DEBUG] Run {self._run_id} started: games_played={self._statistics.games_played}, "
                  f"pending_tile={self._pending_tile}")

        self._events.emit(EVENT_RUN_RESET, sender=self, run_id=self._run_id)
        return self._build_snapshot()

    def place_tile(self, row: int, col: int) -> PlacementResult:
        """
        Place the pending tile and resolve the full chain reaction.

        Args:
            row: Target row.
            col: Target column.

        Returns:
            PlacementResult with every merge performed.

        Raises:
            InvalidStateError: The run is over or a stepped chain is pending.
            OutOfBoundsError: Coordinates are outside the grid.
            InvalidMoveError: The cell is occupied.
        """
        first = self.begin_placement(row, col)
        merges = first.merges + self.finish_chain()
        return PlacementResult(
            snapshot=self._build_snapshot(),
            row=row,
            col=col,
            tier=first.tier,
            merges=merges,
            delta_score=sum(m.score_event.points for m in merges),
            game_over=self.is_over,
            chain_pending=False
        )

    def begin_placement(self, row: int, col: int) -> PlacementResult:
        """
        Place the pending tile without resolving merges.

        The next pending tile is generated immediately. If the placement can
        merge, ``chain_pending`` is True and ``advance_chain`` must be driven
        to completion before the next placement. Otherwise the game-over check
        runs right away.
        """
        self._validate_placement(row, col)

        tier = self._pending_tile
        self._grid.set(row, col, tier)
        self._placements += 1
        self._events.emit(EVENT_TILE_PLACED, sender=self, row=row, col=col, tier=tier)

        self._pending_tile = self._generator.generate(self._statistics.games_played)

        if self._debug:
            print(f"[DEBUG] Placed tier {tier} at ({row}, {col}), next={self._pending_tile}")

        if self._resolver.has_match((row, col)):
            self._chain_origin = (row, col)
        else:
            self._complete_chain()

        return PlacementResult(
            snapshot=self._build_snapshot(),
            row=row,
            col=col,
            tier=tier,
            game_over=self.is_over,
            chain_pending=self.chain_pending
        )

    def advance_chain(self, run_id: Optional[int] = None) -> bool:
        """
        Apply one merge of the pending chain reaction.

        Args:
            run_id: Run the step was scheduled for. A value from an earlier
                run makes this a no-op.

        Returns:
            True if another merge is pending after this one.
        """
        if run_id is not None and run_id != self._run_id:
            return False
        if self._chain_origin is None:
            return False

        self._apply_step(self._chain_origin)

        if self._resolver.has_match(self._chain_origin):
            return True

        self._complete_chain()
        return False

    def finish_chain(self) -> List[MergeResult]:
        """Apply every remaining merge of the pending chain."""
        merges: List[MergeResult] = []
        while self._chain_origin is not None:
            result = self._apply_step(self._chain_origin)
            if result is not None:
                merges.append(result)
            if result is None or not self._resolver.has_match(self._chain_origin):
                self._complete_chain()
        return merges

    def snapshot(self) -> GameSnapshot:
        """Current game state snapshot."""
        return self._build_snapshot()

    def _validate_placement(self, row: int, col: int) -> None:
        if self._phase is GamePhase.GAME_OVER:
            raise InvalidStateError("Game is over; call reset() to start a new run")
        if self._chain_origin is not None:
            raise InvalidStateError("A chain reaction is still pending; advance it first")
        if not self._grid.in_bounds(row, col):
            raise OutOfBoundsError(row, col, self._grid.rows, self._grid.cols)
        value = self._grid.get(row, col)
        if value != EMPTY:
            raise InvalidMoveError(row, col, value)

    def _apply_step(self, origin: Cell) -> Optional[MergeResult]:
        result = self._resolver.step(origin)
        if result is None:
            return None

        if self._debug:
            print(f"[DEBUG] Merge at {origin}: {result.count} x tier {result.from_tier} "
                  f"-> {result.new_tier}, +{result.score_event.points}")

        self._events.emit(
            EVENT_MERGED,
            sender=self,
            row=origin[0],
            col=origin[1],
            tier=result.new_tier,
            count=result.count
        )
        return result

    def _complete_chain(self) -> None:
        """End of a placement: chain settled, check for game over."""
        self._chain_origin = None
        termination = self._detector.check_termination(self._grid)
        if termination.terminated:
            self._phase = GamePhase.GAME_OVER
            if self._debug:
                print(f"[DEBUG] GAME OVER ({termination.reason}): score={self._scorer.score}")
            self._events.emit(EVENT_GAME_OVER, sender=self, score=self._scorer.score)

    def _build_snapshot(self) -> GameSnapshot:
        """Build current game state snapshot."""
        return self._snapshot_builder.build(
            grid=self._grid,
            score=self._scorer.score,
            pending_tile=self._pending_tile,
            game_over=self.is_over,
            best_score=self._statistics.best_score,
            highest_tier_reached=self._statistics.highest_tier_reached,
            games_played=self._statistics.games_played,
            chain_pending=self.chain_pending,
            run_id=self._run_id
        )

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        return {
            "score": self._scorer.score,
            "merges": self._scorer.merges,
            "placements": self._placements,
            "empty_cells": self._grid.empty_count,
            "pending_tile": self._pending_tile,
            "best_score": self._statistics.best_score,
            "games_played": self._statistics.games_played,
            "run_id": self._run_id,
            "game_over": self.is_over,
        }
