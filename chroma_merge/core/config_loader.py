"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Optional

import yaml


@dataclass(frozen=True)
class GridConfig:
    """Board geometry and tier ceiling."""
    rows: int
    cols: int
    max_tier: int               # Highest tier a merge can produce (capped)

    @property
    def cell_count(self) -> int:
        return self.rows * self.cols


@dataclass(frozen=True)
class TierConfig:
    """Configuration for a single color tier."""
    id: int
    name: str
    color: Tuple[int, int, int]


@dataclass(frozen=True)
class TierBand:
    """
    One row of the tile generation threshold table.

    The band is selected when ``r < threshold - difficulty * difficulty_scale``.
    A threshold of ``None`` marks the fallback band.
    """
    threshold: Optional[float]
    difficulty_scale: float
    min_tier: int
    max_tier: int


@dataclass(frozen=True)
class RngConfig:
    """Tile generation parameters."""
    difficulty_divisor: float    # games_played / divisor = raw difficulty
    difficulty_cap: float        # Upper bound on difficulty
    bands: Tuple[TierBand, ...]

    @property
    def max_spawn_tier(self) -> int:
        return max(band.max_tier for band in self.bands)


@dataclass(frozen=True)
class ScoringConfig:
    """Scoring parameters."""
    points_per_tile: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    grid: GridConfig
    tiers: Tuple[TierConfig, ...]
    rng: RngConfig
    scoring: ScoringConfig

    @property
    def num_tiers(self) -> int:
        """Number of non-empty tiers in the ladder."""
        return len(self.tiers)

    def get_tier(self, tier_id: int) -> TierConfig:
        """Get tier config by ID (1-based)."""
        if 1 <= tier_id <= len(self.tiers):
            return self.tiers[tier_id - 1]
        raise ValueError(f"Invalid tier ID: {tier_id}")


def _parse_color(color_data: List) -> Tuple[int, int, int]:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    return (int(color_data[0]), int(color_data[1]), int(color_data[2]))


def _parse_tier(tier_data: dict) -> TierConfig:
    """Parse a single tier configuration from YAML."""
    return TierConfig(
        id=int(tier_data["id"]),
        name=str(tier_data["name"]),
        color=_parse_color(tier_data["color"])
    )


def _parse_band(band_data: dict) -> TierBand:
    """Parse one generation band from YAML."""
    threshold = band_data.get("threshold")
    return TierBand(
        threshold=None if threshold is None else float(threshold),
        difficulty_scale=float(band_data.get("difficulty_scale", 0.0)),
        min_tier=int(band_data["min_tier"]),
        max_tier=int(band_data["max_tier"])
    )


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if config.grid.rows <= 0 or config.grid.cols <= 0:
        raise ValueError(
            f"Grid dimensions must be positive, got {config.grid.rows}x{config.grid.cols}"
        )

    # Validate tier IDs are sequential from 1
    for i, tier in enumerate(config.tiers, start=1):
        if tier.id != i:
            raise ValueError(f"Tier ID mismatch: expected {i}, got {tier.id}")

    if config.grid.max_tier != len(config.tiers):
        raise ValueError(
            f"grid.max_tier ({config.grid.max_tier}) must match "
            f"number of tiers ({len(config.tiers)})"
        )

    bands = config.rng.bands
    if not bands:
        raise ValueError("rng.bands must not be empty")

    # Only the last band may be the fallback
    for band in bands[:-1]:
        if band.threshold is None:
            raise ValueError("Only the last rng band may omit its threshold")
    if bands[-1].threshold is not None:
        raise ValueError("The last rng band must omit its threshold (fallback band)")

    for band in bands:
        if not 1 <= band.min_tier <= band.max_tier:
            raise ValueError(
                f"Invalid band tier range [{band.min_tier}, {band.max_tier}]"
            )

    # Generated tiles must leave room for at least one merge
    if config.rng.max_spawn_tier >= config.grid.max_tier:
        raise ValueError(
            f"Generated tiers (up to {config.rng.max_spawn_tier}) must stay below "
            f"max_tier ({config.grid.max_tier})"
        )

    if config.rng.difficulty_divisor <= 0:
        raise ValueError("rng.difficulty_divisor must be positive")

    if config.scoring.points_per_tile < 0:
        raise ValueError("scoring.points_per_tile must be non-negative")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    grid_data = raw["grid"]
    grid = GridConfig(
        rows=int(grid_data.get("rows", 8)),
        cols=int(grid_data.get("cols", 8)),
        max_tier=int(grid_data["max_tier"])
    )

    tiers = tuple(_parse_tier(t) for t in raw["tiers"])

    rng_data = raw["rng"]
    rng = RngConfig(
        difficulty_divisor=float(rng_data["difficulty_divisor"]),
        difficulty_cap=float(rng_data["difficulty_cap"]),
        bands=tuple(_parse_band(b) for b in rng_data["bands"])
    )

    scoring_data = raw.get("scoring", {})
    scoring = ScoringConfig(
        points_per_tile=int(scoring_data.get("points_per_tile", 10))
    )

    config = GameConfig(
        grid=grid,
        tiers=tiers,
        rng=rng,
        scoring=scoring
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
