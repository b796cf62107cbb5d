"""
Tests for adaptive tile generation.
"""

import pytest
import numpy as np
from collections import Counter

from chroma_merge.core.rng import TileGenerator, compute_difficulty, tier_band


class TestDifficultyCurve:
    """Pure band selection."""

    @pytest.mark.parametrize("games_played,expected", [
        (0, 0.0),
        (5, 0.25),
        (10, 0.5),
        (12, 0.6),
        (20, 0.6),
        (500, 0.6),
    ])
    def test_difficulty(self, config, games_played, expected):
        assert compute_difficulty(games_played, config) == pytest.approx(expected)

    def test_high_draw_gives_top_spawn_tier(self, config):
        band = tier_band(0, 0.95, config)
        assert (band.min_tier, band.max_tier) == (6, 6)

    @pytest.mark.parametrize("r,expected", [
        (0.0, (1, 3)),
        (0.59, (1, 3)),
        (0.6, (4, 5)),
        (0.89, (4, 5)),
        (0.9, (6, 6)),
    ])
    def test_bands_for_new_player(self, config, r, expected):
        band = tier_band(0, r, config)
        assert (band.min_tier, band.max_tier) == expected

    def test_capped_difficulty_removes_low_band(self, config):
        # difficulty 0.6: low band needs r < 0.0, mid band r < ~0.6
        assert tier_band(20, 0.0, config).min_tier == 4
        assert tier_band(20, 0.59, config).min_tier == 4
        assert tier_band(20, 0.61, config).min_tier == 6

    def test_monotonic_in_games_played(self, config):
        for r in np.linspace(0.0, 0.999, 200):
            previous = 0
            for games_played in range(0, 26):
                band = tier_band(games_played, float(r), config)
                assert band.min_tier >= previous
                previous = band.min_tier


class TestTileGenerator:
    """Seeded generator behaviour."""

    def test_deterministic_with_seed(self, config):
        g1 = TileGenerator(config, seed=42)
        g2 = TileGenerator(config, seed=42)
        assert [g1.generate(3) for _ in range(100)] == [g2.generate(3) for _ in range(100)]

    def test_different_seeds_differ(self, config):
        g1 = TileGenerator(config, seed=42)
        g2 = TileGenerator(config, seed=123)
        assert [g1.generate(0) for _ in range(50)] != [g2.generate(0) for _ in range(50)]

    @pytest.mark.parametrize("games_played", [0, 7, 20, 100])
    def test_tiers_in_spawn_range(self, config, games_played):
        gen = TileGenerator(config, seed=7)
        for _ in range(500):
            tier = gen.generate(games_played)
            assert 1 <= tier <= 6

    def test_top_tier_never_generated(self, config):
        gen = TileGenerator(config, seed=0)
        assert 7 not in {gen.generate(20) for _ in range(2000)}

    def test_distribution_shifts_with_experience(self, config):
        new = TileGenerator(config, seed=1)
        veteran = TileGenerator(config, seed=1)
        new_counts = Counter(new.generate(0) for _ in range(3000))
        vet_counts = Counter(veteran.generate(20) for _ in range(3000))

        low_new = sum(new_counts[t] for t in (1, 2, 3))
        low_vet = sum(vet_counts[t] for t in (1, 2, 3))
        assert low_vet == 0
        assert low_new > 1500
        assert vet_counts[6] > new_counts[6]

    def test_reset_restores_sequence(self, config):
        gen = TileGenerator(config, seed=42)
        initial = [gen.generate(0) for _ in range(10)]
        gen.reset(seed=42)
        assert [gen.generate(0) for _ in range(10)] == initial
        assert gen.get_state() == (42, 10)
