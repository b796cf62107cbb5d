"""
Event Bus
=========

Fire-and-forget notifications for collaborators (audio, telemetry, UI).

Receivers are called synchronously with ``receiver(sender, **payload)``;
their relative order is not guaranteed. A failing receiver never affects the
engine or the remaining receivers; its exception is reported as a
RuntimeWarning.
"""

from __future__ import annotations

import warnings
from typing import Callable, Dict

from blinker import Signal


EVENT_TILE_PLACED = "tile_placed"      # payload: row, col, tier
EVENT_MERGED = "merged"                # payload: row, col, tier, count
EVENT_GAME_OVER = "game_over"          # payload: score
EVENT_RUN_RESET = "run_reset"          # payload: run_id

ALL_EVENTS = (EVENT_TILE_PLACED, EVENT_MERGED, EVENT_GAME_OVER, EVENT_RUN_RESET)


class EventBus:
    """Simple event bus leveraging blinker Signal objects."""

    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn: Callable) -> None:
        sig = self._signals.setdefault(name, Signal(name))
        # Strong reference so throwaway handlers (lambdas, bound methods of unreferenced objects) stay connected
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn: Callable) -> None:
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, sender=None, **payload) -> None:
        sig = self._signals.get(name)
        if not sig:
            return
        for receiver in list(sig.receivers_for(sender)):
            try:
                receiver(sender, **payload)
            except Exception as exc:
                warnings.warn(
                    f"Receiver {receiver!r} for event '{name}' failed: {exc!r}",
                    RuntimeWarning,
                    stacklevel=2
                )
