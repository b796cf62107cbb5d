"""
Grid
====

Owns the cell matrix. Cells hold 0 (empty) or a tier ID 1..max_tier.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple
import numpy as np

from chroma_merge.core.config_loader import GameConfig, get_config
from chroma_merge.core.errors import OutOfBoundsError
from chroma_merge.core.tier_catalog import EMPTY


Cell = Tuple[int, int]

# Fixed neighbour order: up, down, left, right
NEIGHBOR_OFFSETS: Tuple[Cell, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class Grid:
    """
    Fixed-size board backed by an int8 numpy array.

    ``set`` performs range checks only; occupancy rules are enforced by the
    caller (the engine).
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._rows = config.grid.rows
        self._cols = config.grid.cols
        self._max_tier = config.grid.max_tier
        self._cells = np.zeros((self._rows, self._cols), dtype=np.int8)

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[int]],
        config: Optional[GameConfig] = None
    ) -> "Grid":
        """Build a grid from nested row values (used by tests and replays)."""
        grid = cls(config)
        values = np.asarray(rows, dtype=np.int64)
        if values.shape != grid.shape:
            raise ValueError(f"Expected shape {grid.shape}, got {values.shape}")
        if values.min() < EMPTY or values.max() > grid._max_tier:
            raise ValueError(f"Cell values must be in [0, {grid._max_tier}]")
        grid._cells[:, :] = values
        return grid

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> Tuple[int, int]:
        return (self._rows, self._cols)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self._rows and 0 <= col < self._cols

    def _check_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise OutOfBoundsError(row, col, self._rows, self._cols)

    def get(self, row: int, col: int) -> int:
        """Value at a cell (0 = empty)."""
        self._check_bounds(row, col)
        return int(self._cells[row, col])

    def is_empty(self, row: int, col: int) -> bool:
        """True iff the cell holds no tile."""
        return self.get(row, col) == EMPTY

    def set(self, row: int, col: int, value: int) -> None:
        """Write a value unconditionally."""
        self._check_bounds(row, col)
        if not EMPTY <= value <= self._max_tier:
            raise ValueError(f"Cell value must be in [0, {self._max_tier}], got {value}")
        self._cells[row, col] = value

    def neighbors4(self, row: int, col: int) -> List[Cell]:
        """
        In-bounds orthogonal neighbours of a cell.

        Order is always up, down, left, right so iteration is deterministic.
        """
        self._check_bounds(row, col)
        result = []
        for dr, dc in NEIGHBOR_OFFSETS:
            r, c = row + dr, col + dc
            if self.in_bounds(r, c):
                result.append((r, c))
        return result

    def is_full(self) -> bool:
        """True iff no cell is empty."""
        return not bool((self._cells == EMPTY).any())

    @property
    def empty_count(self) -> int:
        return int((self._cells == EMPTY).sum())

    def empty_cells(self) -> List[Cell]:
        """Empty cells in row-major order."""
        rows, cols = np.nonzero(self._cells == EMPTY)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def empty_mask(self) -> np.ndarray:
        """Boolean mask of empty cells, flattened row-major."""
        return (self._cells == EMPTY).reshape(-1)

    def clear(self) -> None:
        """Reset every cell to empty."""
        self._cells.fill(EMPTY)

    def clear_cells(self, cells: Iterable[Cell]) -> None:
        for row, col in cells:
            self.set(row, col, EMPTY)

    def to_array(self) -> np.ndarray:
        """Copy of the cell matrix."""
        return self._cells.copy()

    def highest_tier(self) -> int:
        """Largest tier currently on the board (0 if empty)."""
        return int(self._cells.max())

    def __str__(self) -> str:
        return "\n".join(
            " ".join("." if v == EMPTY else str(int(v)) for v in row)
            for row in self._cells
        )
