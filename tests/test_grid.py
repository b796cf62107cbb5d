"""
Tests for the grid.
"""

import pytest
import numpy as np

from chroma_merge.core.errors import OutOfBoundsError
from chroma_merge.core.grid import Grid


@pytest.fixture
def grid(config):
    return Grid(config)


class TestGridBasics:
    """Reads, writes and bounds."""

    def test_new_grid_is_empty(self, grid):
        assert grid.shape == (8, 8)
        assert grid.empty_count == 64
        assert all(grid.is_empty(r, c) for r in range(8) for c in range(8))

    def test_set_and_get(self, grid):
        grid.set(2, 5, 4)
        assert grid.get(2, 5) == 4
        assert not grid.is_empty(2, 5)

    def test_set_overwrites_unconditionally(self, grid):
        grid.set(0, 0, 3)
        grid.set(0, 0, 6)
        assert grid.get(0, 0) == 6

    @pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (8, 0), (0, 8), (8, 8)])
    def test_out_of_bounds_rejected(self, grid, row, col):
        with pytest.raises(OutOfBoundsError):
            grid.is_empty(row, col)
        with pytest.raises(OutOfBoundsError):
            grid.set(row, col, 1)
        with pytest.raises(IndexError):
            grid.get(row, col)

    @pytest.mark.parametrize("value", [-1, 8])
    def test_value_range_enforced(self, grid, value):
        with pytest.raises(ValueError):
            grid.set(0, 0, value)

    def test_to_array_is_a_copy(self, grid):
        arr = grid.to_array()
        arr[0, 0] = 5
        assert grid.get(0, 0) == 0


class TestNeighbors:
    """Orthogonal neighbour order and clipping."""

    def test_interior_order_is_up_down_left_right(self, grid):
        assert grid.neighbors4(3, 3) == [(2, 3), (4, 3), (3, 2), (3, 4)]

    def test_corner_has_two_neighbors(self, grid):
        assert grid.neighbors4(0, 0) == [(1, 0), (0, 1)]
        assert grid.neighbors4(7, 7) == [(6, 7), (7, 6)]

    def test_edge_has_three_neighbors(self, grid):
        assert grid.neighbors4(0, 4) == [(1, 4), (0, 3), (0, 5)]


class TestOccupancy:
    """Fullness and empty-cell queries."""

    def test_is_full(self, grid):
        assert not grid.is_full()
        for r in range(8):
            for c in range(8):
                grid.set(r, c, 1 + (r + c) % 6)
        assert grid.is_full()
        grid.set(4, 4, 0)
        assert not grid.is_full()
        assert grid.empty_cells() == [(4, 4)]

    def test_empty_mask_is_row_major(self, grid):
        grid.set(0, 1, 2)
        mask = grid.empty_mask()
        assert mask.shape == (64,)
        assert not mask[1]
        assert mask.sum() == 63

    def test_clear(self, grid):
        grid.set(1, 1, 3)
        grid.clear()
        assert grid.empty_count == 64

    def test_from_rows(self, config):
        rows = np.zeros((8, 8), dtype=int)
        rows[7, 7] = 7
        grid = Grid.from_rows(rows, config)
        assert grid.get(7, 7) == 7
        assert grid.highest_tier() == 7

    def test_from_rows_rejects_bad_shape(self, config):
        with pytest.raises(ValueError):
            Grid.from_rows([[0] * 8] * 7, config)
