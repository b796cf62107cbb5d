"""
Tier Catalog
============

Provides convenient access to color tier definitions loaded from config.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from chroma_merge.core.config_loader import GameConfig, TierConfig, get_config


EMPTY = 0


@dataclass
class TierType:
    """
    Runtime representation of a color tier.

    Wraps TierConfig with a few convenience properties.
    """
    config: TierConfig
    max_tier: int

    @property
    def id(self) -> int:
        return self.config.id

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def color(self) -> Tuple[int, int, int]:
        return self.config.color

    @property
    def is_max(self) -> bool:
        """True for the capped top tier (merging keeps it at this tier)."""
        return self.config.id == self.max_tier

    def __repr__(self) -> str:
        return f"TierType({self.id}: {self.name})"


class TierCatalog:
    """
    Collection of all tiers in the color ladder.

    Tier IDs are 1-based; 0 is reserved for an empty cell.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._max_tier = config.grid.max_tier
        self._types: Tuple[TierType, ...] = tuple(
            TierType(tier_config, self._max_tier) for tier_config in config.tiers
        )

    def __len__(self) -> int:
        """Total number of tiers."""
        return len(self._types)

    def __getitem__(self, tier_id: int) -> TierType:
        """Get tier by ID."""
        if 1 <= tier_id <= len(self._types):
            return self._types[tier_id - 1]
        raise IndexError(f"Tier ID {tier_id} out of range [1, {len(self._types)}]")

    def __iter__(self):
        """Iterate over all tiers, lowest first."""
        return iter(self._types)

    @property
    def max_tier(self) -> int:
        """ID of the capped top tier."""
        return self._max_tier

    @property
    def top(self) -> TierType:
        """The capped top tier (Diamond in the default ladder)."""
        return self._types[-1]

    def merged_tier(self, tier_id: int) -> int:
        """
        Tier produced by merging tiles of the given tier.

        The ladder is capped: merging top-tier tiles yields the top tier again.
        """
        return min(tier_id + 1, self._max_tier)

    def is_max(self, tier_id: int) -> bool:
        """Check if a tier ID is the capped top tier."""
        return tier_id == self._max_tier

    def name_of(self, tier_id: int) -> str:
        """Display name for a tier, or "-" for an empty cell / no tier yet."""
        if tier_id == EMPTY:
            return "-"
        return self[tier_id].name

    def get_by_name(self, name: str) -> Optional[TierType]:
        """Get tier by name (case-insensitive)."""
        name_lower = name.lower()
        for tier_type in self._types:
            if tier_type.name.lower() == name_lower:
                return tier_type
        return None


# Module-level singleton
_cached_catalog: Optional[TierCatalog] = None


def get_catalog(config: Optional[GameConfig] = None) -> TierCatalog:
    """
    Get the tier catalog singleton.

    Args:
        config: Optional config to use. If None, uses cached or default config.

    Returns:
        TierCatalog instance.
    """
    global _cached_catalog
    if _cached_catalog is None or config is not None:
        _cached_catalog = TierCatalog(config)
    return _cached_catalog
