"""
Errors
======

Caller-recoverable conditions raised by the engine. None of them leave the
game in a partially-updated state.
"""

from __future__ import annotations


class ChromaMergeError(Exception):
    """Base class for engine errors."""


class OutOfBoundsError(ChromaMergeError, IndexError):
    """Coordinates fall outside the grid."""

    def __init__(self, row: int, col: int, rows: int, cols: int):
        super().__init__(
            f"Cell ({row}, {col}) is outside the {rows}x{cols} grid"
        )
        self.row = row
        self.col = col


class InvalidMoveError(ChromaMergeError, ValueError):
    """Placement targeted an occupied cell."""

    def __init__(self, row: int, col: int, value: int):
        super().__init__(
            f"Cell ({row}, {col}) is already occupied by tier {value}"
        )
        self.row = row
        self.col = col
        self.value = value


class InvalidStateError(ChromaMergeError, RuntimeError):
    """Operation is not allowed in the current game state (e.g. after game over)."""
