"""
Shared fixtures.
"""

from typing import Iterable, List, Optional

import pytest

from chroma_merge.core.config_loader import load_config
from chroma_merge.core.events import EventBus
from chroma_merge.core.game import GameEngine
from chroma_merge.core.statistics import InMemoryStatistics


class ScriptedGenerator:
    """Tile generator that hands out a fixed sequence (cycling)."""

    def __init__(self, tiles: Iterable[int]):
        self._tiles: List[int] = list(tiles)
        self._index = 0

    def generate(self, games_played: int) -> int:
        tile = self._tiles[self._index % len(self._tiles)]
        self._index += 1
        return tile

    def reset(self, seed: Optional[int] = None) -> None:
        pass


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def statistics():
    return InMemoryStatistics()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def make_engine(config, statistics, bus):
    """Factory for an engine whose pending tiles follow a script."""
    def _make(tiles=(1,)):
        return GameEngine(
            statistics=statistics,
            events=bus,
            config=config,
            generator=ScriptedGenerator(tiles)
        )
    return _make
