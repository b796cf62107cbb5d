"""
Audio Cues
==========

Maps engine events to sound cues. Playback itself belongs to the front-end:
``AudioCues`` only decides which cue to play and hands it to a player
callback when sound is enabled.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

from chroma_merge.core.config_loader import GameConfig, get_config
from chroma_merge.core.events import EVENT_GAME_OVER, EVENT_MERGED, EVENT_TILE_PLACED, EventBus


class Sound(Enum):
    POP = "pop"
    MERGE = "merge"
    SUCCESS = "success"
    GAME_OVER = "game_over"


class AudioCues:
    """
    Event-bus listener that turns engine events into sounds.

    - tile placed: POP
    - merge into the top tier: SUCCESS, any other merge: MERGE
    - game over: GAME_OVER
    """

    def __init__(
        self,
        player: Callable[[Sound], None],
        config: Optional[GameConfig] = None,
        enabled: bool = True
    ):
        if config is None:
            config = get_config()

        self._player = player
        self._max_tier = config.grid.max_tier
        self.enabled = enabled

    def attach(self, bus: EventBus) -> "AudioCues":
        bus.subscribe(EVENT_TILE_PLACED, self._on_tile_placed)
        bus.subscribe(EVENT_MERGED, self._on_merged)
        bus.subscribe(EVENT_GAME_OVER, self._on_game_over)
        return self

    def detach(self, bus: EventBus) -> None:
        bus.unsubscribe(EVENT_TILE_PLACED, self._on_tile_placed)
        bus.unsubscribe(EVENT_MERGED, self._on_merged)
        bus.unsubscribe(EVENT_GAME_OVER, self._on_game_over)

    def sound_for_merge(self, tier: int) -> Sound:
        return Sound.SUCCESS if tier == self._max_tier else Sound.MERGE

    def _play(self, sound: Sound) -> None:
        if self.enabled:
            self._player(sound)

    def _on_tile_placed(self, sender, **kwargs) -> None:
        self._play(Sound.POP)

    def _on_merged(self, sender, **kwargs) -> None:
        self._play(self.sound_for_merge(kwargs["tier"]))

    def _on_game_over(self, sender, **kwargs) -> None:
        self._play(Sound.GAME_OVER)

