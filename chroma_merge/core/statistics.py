"""
Run Statistics
==============

Cross-run statistics the engine reads and updates. Storage is owned by the
caller; the engine only talks to the ``StatisticsStore`` interface.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Protocol


class StatisticsStore(Protocol):
    """Interface for the statistics collaborator."""

    @property
    def games_played(self) -> int: ...

    @property
    def best_score(self) -> int: ...

    @property
    def highest_tier_reached(self) -> int: ...

    def increment_games_played(self) -> None: ...

    def update_best_score(self, score: int) -> None: ...

    def update_highest_tier(self, tier: int) -> None: ...


@dataclass
class RunStatistics:
    """Plain record of the cross-run statistics."""
    best_score: int = 0
    games_played: int = 0
    highest_tier_reached: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class InMemoryStatistics:
    """
    In-memory ``StatisticsStore``.

    Update-if-greater semantics for best score and highest tier; games played
    only ever increments (except for ``reset_all``).
    """

    def __init__(self, best_score: int = 0, games_played: int = 0, highest_tier_reached: int = 0):
        self._stats = RunStatistics(
            best_score=best_score,
            games_played=games_played,
            highest_tier_reached=highest_tier_reached
        )

    @property
    def games_played(self) -> int:
        return self._stats.games_played

    @property
    def best_score(self) -> int:
        return self._stats.best_score

    @property
    def highest_tier_reached(self) -> int:
        return self._stats.highest_tier_reached

    def increment_games_played(self) -> None:
        self._stats.games_played += 1

    def update_best_score(self, score: int) -> None:
        self._stats.best_score = max(self._stats.best_score, score)

    def update_highest_tier(self, tier: int) -> None:
        self._stats.highest_tier_reached = max(self._stats.highest_tier_reached, tier)

    def reset_all(self) -> None:
        """Wipe all statistics."""
        self._stats = RunStatistics()

    def snapshot(self) -> RunStatistics:
        """Copy of the current values."""
        return RunStatistics(**self._stats.to_dict())

    def __repr__(self) -> str:
        return (
            f"InMemoryStatistics(best_score={self.best_score}, "
            f"games_played={self.games_played}, "
            f"highest_tier_reached={self.highest_tier_reached})"
        )
