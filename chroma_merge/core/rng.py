"""
RNG - Adaptive Tile Generator
=============================

Picks the tier of the next pending tile. The probability curve shifts toward
higher tiers as more games are played, up to a capped difficulty.
"""

from __future__ import annotations

import random
from typing import Optional, Tuple

from chroma_merge.core.config_loader import GameConfig, TierBand, get_config


def compute_difficulty(games_played: int, config: Optional[GameConfig] = None) -> float:
    """difficulty = min(games_played / divisor, cap)."""
    if config is None:
        config = get_config()
    return min(games_played / config.rng.difficulty_divisor, config.rng.difficulty_cap)


def tier_band(
    games_played: int,
    r: float,
    config: Optional[GameConfig] = None
) -> TierBand:
    """
    Select the generation band for a uniform draw ``r`` in [0, 1).

    Pure function: the same (games_played, r) always picks the same band.
    Bands are checked in table order; the last band is the fallback.
    """
    if config is None:
        config = get_config()

    difficulty = compute_difficulty(games_played, config)
    for band in config.rng.bands:
        if band.threshold is None:
            return band
        if r < band.threshold - difficulty * band.difficulty_scale:
            return band
    # Unreachable with a validated config (last band is the fallback)
    return config.rng.bands[-1]


class TileGenerator:
    """
    Seeded generator for pending tiles.

    Each tile consumes one draw for the band and, when the band spans more
    than one tier, one draw for the tier inside it.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize tile generator.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._rng = random.Random(seed)
        self._generated: int = 0

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    @property
    def generated(self) -> int:
        """Number of tiles generated since the last reseed."""
        return self._generated

    def generate(self, games_played: int) -> int:
        """
        Draw the next tile tier.

        Args:
            games_played: Completed runs so far; drives the difficulty curve.

        Returns:
            Tier ID in [1, max spawn tier]. The top tier is never generated.
        """
        r = self._rng.random()
        band = tier_band(games_played, r, self._config)
        self._generated += 1
        if band.min_tier == band.max_tier:
            return band.min_tier
        return self._rng.randint(band.min_tier, band.max_tier)

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reseed the generator.

        Args:
            seed: New random seed. Keeps the stream going if None.
        """
        if seed is not None:
            self._seed = seed
            self._rng = random.Random(seed)
        self._generated = 0

    def get_state(self) -> Tuple[Optional[int], int]:
        """
        Get replay-relevant state.

        Returns:
            Tuple of (seed, tiles generated since reseed).
        """
        return (self._seed, self._generated)
