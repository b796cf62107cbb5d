"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the Chroma Merge game.
Reward is always 0.0 - agents compute their own from info.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from chroma_merge.core.config_loader import GameConfig, load_config
from chroma_merge.core.errors import InvalidMoveError
from chroma_merge.core.game import GameEngine
from chroma_merge.core.statistics import InMemoryStatistics, StatisticsStore


class ChromaMergeEnv(gym.Env):
    """
    Chroma Merge tile-placement game as a Gymnasium environment.

    Action Space:
        Discrete(rows * cols). Flattened row-major cell index.

    Observation Space:
        Dict with the grid, pending tile, score and empty cell count.

    Reward:
        Always 0.0. Agents compute their own reward from the info dict.

    Info:
        Contains score, delta_score, merges, invalid_move, etc.

    Placing on an occupied cell does not raise: the state is unchanged and
    ``info["invalid_move"]`` is True. Use ``action_masks()`` to avoid it.
    """

    metadata = {
        "render_modes": ["ansi"],
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        statistics: Optional[StatisticsStore] = None,
        debug: bool = False,
    ):
        """
        Initialize Chroma Merge environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "ansi" for a text board, None for headless.
            statistics: Store supplying games_played to the difficulty curve.
            debug: If True, enables verbose debug output for agent development.
        """
        super().__init__()

        self._config = load_config(config_path)
        self.render_mode = render_mode
        self._debug = debug
        self._statistics = statistics if statistics is not None else InMemoryStatistics()

        self._game = GameEngine(statistics=self._statistics, config=self._config)
        self._started = False

        grid = self._config.grid
        self.action_space = spaces.Discrete(grid.cell_count)
        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] ChromaMergeEnv initialized")
            print(f"[DEBUG]   Grid: {grid.rows}x{grid.cols}, max tier {grid.max_tier}")

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        grid = self._config.grid
        return spaces.Dict({
            "grid": spaces.Box(low=0, high=grid.max_tier, shape=(grid.rows, grid.cols), dtype=np.int8),
            "pending_tile": spaces.Discrete(grid.max_tier + 1),
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "empty_cells": spaces.Box(low=0, high=grid.cell_count, shape=(), dtype=np.int32),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        The first reset reuses the run created at construction (reseeded when a
        seed is given) and counts nothing. Later resets draw the opening tile
        with the current games_played and then count the previous run.
        """
        super().reset(seed=seed)

        if not self._started:
            if seed is not None:
                # Reseed without counting a phantom game
                self._game = GameEngine(statistics=self._statistics, config=self._config, seed=seed)
            snapshot = self._game.snapshot()
            self._started = True
        else:
            snapshot = self._game.reset(seed=seed)

        info = self._game.get_info()
        info["delta_score"] = 0
        info["invalid_move"] = False
        return snapshot.to_obs_dict(), info

    def step(
        self,
        action: Union[int, np.integer, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one step.

        Args:
            action: Flattened cell index.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
            Reward is always 0.0.
        """
        if isinstance(action, np.ndarray):
            action = action.item()
        action = int(action)
        row, col = divmod(action, self._config.grid.cols)

        invalid_move = False
        delta_score = 0
        merges = 0
        try:
            result = self._game.place_tile(row, col)
            snapshot = result.snapshot
            delta_score = result.delta_score
            merges = len(result.merges)
        except InvalidMoveError:
            invalid_move = True
            snapshot = self._game.snapshot()

        info = self._game.get_info()
        info["delta_score"] = delta_score
        info["merges_this_step"] = merges
        info["invalid_move"] = invalid_move

        if self._debug:
            print(f"[DEBUG] Step: cell=({row}, {col}), delta_score={delta_score}, "
                  f"empty={snapshot.empty_cells}, invalid={invalid_move}")
            if snapshot.game_over:
                print(f"[DEBUG] TERMINATED: grid_full")

        return snapshot.to_obs_dict(), 0.0, snapshot.game_over, False, info

    def action_masks(self) -> np.ndarray:
        """Boolean mask of legal actions (empty cells)."""
        return self._game.grid.empty_mask()

    def render(self) -> Optional[str]:
        """Render the current game state as text when render_mode is "ansi"."""
        if self.render_mode == "ansi":
            return (
                f"{self._game.grid}\n"
                f"score={self._game.score} next={self._game.pending_tile}"
            )
        return None

    def close(self) -> None:
        """Nothing to release."""

    @property
    def game(self) -> GameEngine:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def statistics(self) -> StatisticsStore:
        """Store supplying games_played to the difficulty curve."""
        return self._statistics

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
