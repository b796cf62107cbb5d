"""
Tests for configuration loading and the tier catalog.
"""

import copy
import os

import pytest
import yaml

from chroma_merge.core.config_loader import get_config, load_config
from chroma_merge.core.tier_catalog import TierCatalog


DEFAULT_PATH = os.path.join(
    os.path.dirname(os.path.dirname(__file__)), "chroma_merge", "game_config.yaml"
)


@pytest.fixture
def raw_config():
    with open(DEFAULT_PATH, "r") as f:
        return yaml.safe_load(f)


def write_config(tmp_path, raw):
    path = tmp_path / "game_config.yaml"
    path.write_text(yaml.safe_dump(raw))
    return str(path)


class TestConfigLoading:
    """Defaults and validation."""

    def test_defaults(self, config):
        assert (config.grid.rows, config.grid.cols) == (8, 8)
        assert config.grid.max_tier == 7
        assert config.num_tiers == 7
        assert config.rng.max_spawn_tier == 6
        assert config.scoring.points_per_tile == 10
        assert config.get_tier(7).name == "Diamond"

    def test_cached_config(self):
        assert get_config() is get_config()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_max_tier_must_match_tiers(self, tmp_path, raw_config):
        raw = copy.deepcopy(raw_config)
        raw["grid"]["max_tier"] = 6
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, raw))

    def test_spawn_must_stay_below_top_tier(self, tmp_path, raw_config):
        raw = copy.deepcopy(raw_config)
        raw["rng"]["bands"][-1] = {"min_tier": 7, "max_tier": 7}
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, raw))

    def test_fallback_band_required(self, tmp_path, raw_config):
        raw = copy.deepcopy(raw_config)
        raw["rng"]["bands"][-1]["threshold"] = 1.0
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, raw))

    def test_custom_grid_size(self, tmp_path, raw_config):
        raw = copy.deepcopy(raw_config)
        raw["grid"]["rows"] = 5
        raw["grid"]["cols"] = 6
        config = load_config(write_config(tmp_path, raw))
        assert config.grid.cell_count == 30


class TestTierCatalog:
    """Tier lookups and merge capping."""

    def test_merged_tier_capped(self, config):
        catalog = TierCatalog(config)
        assert catalog.merged_tier(1) == 2
        assert catalog.merged_tier(6) == 7
        assert catalog.merged_tier(7) == 7

    def test_lookup(self, config):
        catalog = TierCatalog(config)
        assert catalog[1].name == "Red"
        assert catalog.top.is_max
        assert catalog.name_of(0) == "-"
        assert catalog.get_by_name("Blue").id == 5
        with pytest.raises(IndexError):
            catalog[0]
