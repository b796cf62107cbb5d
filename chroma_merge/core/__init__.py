"""
Chroma Merge Core - The game-state engine.

This module provides the deterministic engine, its Gymnasium wrapper and all
supporting systems (grid, merging, scoring, RNG, events).

Main exports:
- GameEngine: Game orchestrator (place_tile, stepped chains, reset)
- ChromaMergeEnv: Gymnasium environment for agents
- GameConfig: Configuration loaded from game_config.yaml
- EventBus / AudioCues: Notifications for front-ends
- InMemoryStatistics: Cross-run statistics store
"""

from chroma_merge.core.config_loader import GameConfig, load_config
from chroma_merge.core.tier_catalog import TierType, TierCatalog
from chroma_merge.core.errors import (
    ChromaMergeError,
    OutOfBoundsError,
    InvalidMoveError,
    InvalidStateError,
)
from chroma_merge.core.grid import Grid
from chroma_merge.core.events import EventBus
from chroma_merge.core.audio import AudioCues, Sound
from chroma_merge.core.statistics import InMemoryStatistics, RunStatistics, StatisticsStore
from chroma_merge.core.game import GameEngine, GamePhase, PlacementResult
from chroma_merge.core.env_gym import ChromaMergeEnv
from chroma_merge.core.replay_recorder import (
    ReplayRecorder,
    record_episode,
    replay_episode,
    load_replay,
    generate_replay_filename,
)

__all__ = [
    "GameConfig",
    "load_config",
    "TierType",
    "TierCatalog",
    "ChromaMergeError",
    "OutOfBoundsError",
    "InvalidMoveError",
    "InvalidStateError",
    "Grid",
    "EventBus",
    "AudioCues",
    "Sound",
    "InMemoryStatistics",
    "RunStatistics",
    "StatisticsStore",
    "GameEngine",
    "GamePhase",
    "PlacementResult",
    "ChromaMergeEnv",
    "ReplayRecorder",
    "record_episode",
    "replay_episode",
    "load_replay",
    "generate_replay_filename",
]
