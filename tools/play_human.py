"""
Human Play Mode
================

Play Chroma Merge in the terminal. Chain reactions are animated one merge at
a time through the engine's step function; the delay between steps lives
here, never in the engine.

Controls (type at the prompt):
    - "row col": Place the pending tile, e.g. "3 4"
    - r: Restart game
    - q: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--delay SECONDS] [--no-color]
"""

from __future__ import annotations

import argparse
import sys
import time
from typing import Optional

from chroma_merge.core.audio import AudioCues, Sound
from chroma_merge.core.config_loader import GameConfig, load_config
from chroma_merge.core.errors import ChromaMergeError
from chroma_merge.core.events import EventBus
from chroma_merge.core.game import GameEngine
from chroma_merge.core.state_snapshot import GameSnapshot
from chroma_merge.core.statistics import InMemoryStatistics
from chroma_merge.core.tier_catalog import TierCatalog


class TerminalRenderer:
    """Draws snapshots as a colored text grid."""

    def __init__(self, config: GameConfig, use_color: bool = True):
        self._config = config
        self._catalog = TierCatalog(config)
        self._use_color = use_color

    def _cell(self, value: int) -> str:
        if value == 0:
            return " +"
        if not self._use_color:
            return f" {value}"
        r, g, b = self._catalog[value].color
        return f"\033[48;2;{r};{g};{b}m\033[30m{value:>2}\033[0m"

    def render(self, snapshot: GameSnapshot) -> str:
        cols = self._config.grid.cols
        lines = ["    " + " ".join(f"{c:>2}" for c in range(cols))]
        for r, row in enumerate(snapshot.grid):
            lines.append(f"{r:>2}  " + " ".join(self._cell(int(v)) for v in row))
        lines.append("")
        lines.append(
            f"SCORE {snapshot.score}   BEST {snapshot.best_score}   "
            f"NEXT {self._cell(snapshot.pending_tile)} "
            f"({self._catalog.name_of(snapshot.pending_tile)})"
        )
        return "\n".join(lines)


class HumanPlayer:
    """Interactive game loop."""

    def __init__(
        self,
        config: GameConfig,
        seed: Optional[int] = None,
        step_delay: float = 0.1,
        use_color: bool = True,
        sound: bool = True
    ):
        self._config = config
        self._seed = seed
        self._step_delay = step_delay
        self._catalog = TierCatalog(config)
        self._statistics = InMemoryStatistics()
        self._events = EventBus()
        self._audio = AudioCues(self._beep, config, enabled=sound).attach(self._events)
        self._game = GameEngine(
            statistics=self._statistics,
            events=self._events,
            config=config,
            seed=seed
        )
        self._renderer = TerminalRenderer(config, use_color)
        self._running = True

    def _beep(self, sound: Sound) -> None:
        if sound in (Sound.SUCCESS, Sound.GAME_OVER):
            sys.stdout.write("\a")
            sys.stdout.flush()

    def run(self) -> int:
        """Run the game loop. Returns final score."""
        print("=== Chroma Merge ===")
        print("Enter 'row col' to place, r to restart, q to quit")
        print()

        while self._running:
            print(self._renderer.render(self._game.snapshot()))
            if self._game.is_over:
                print(f"\nGAME OVER - Score: {self._game.score}")
                if self._game.score > 0 and self._game.score == self._statistics.best_score:
                    print("New High Score!")
            try:
                line = input("> ").strip().lower()
            except EOFError:
                break
            self._handle_command(line)

        return self._game.score

    def _handle_command(self, line: str) -> None:
        if line in ("q", "quit", "exit"):
            self._running = False
            return
        if line in ("r", "restart"):
            self._restart()
            return

        parts = line.replace(",", " ").split()
        if len(parts) != 2 or not all(p.lstrip("-").isdigit() for p in parts):
            print("Expected 'row col'")
            return

        row, col = int(parts[0]), int(parts[1])
        try:
            self._place(row, col)
        except ChromaMergeError as e:
            print(f"Rejected: {e}")

    def _place(self, row: int, col: int) -> None:
        score_before = self._game.score
        result = self._game.begin_placement(row, col)
        run_id = result.snapshot.run_id

        while self._game.chain_pending:
            print(self._renderer.render(self._game.snapshot()))
            time.sleep(self._step_delay)
            self._game.advance_chain(run_id)

        delta = self._game.score - score_before
        if delta > 0:
            print(f"  +{delta} (Total: {self._game.score})")

    def _restart(self) -> None:
        """Restart the game."""
        self._game.reset(seed=self._seed)
        print("\n=== Game Restarted ===\n")
        print(f"Games played: {self._statistics.games_played}, "
              f"highest color: {self._catalog.name_of(self._statistics.highest_tier_reached)}")


def main():
    parser = argparse.ArgumentParser(description="Play Chroma Merge in the terminal")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--delay", type=float, default=0.1, help="Seconds between chain steps (default: 0.1)")
    parser.add_argument("--no-color", action="store_true", help="Plain digits instead of colored cells")
    parser.add_argument("--mute", action="store_true", help="Disable terminal bell cues")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")

    args = parser.parse_args()

    config = load_config(args.config)
    player = HumanPlayer(
        config=config,
        seed=args.seed,
        step_delay=args.delay,
        use_color=not args.no_color,
        sound=not args.mute
    )
    score = player.run()
    print(f"\nFinal Score: {score}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
