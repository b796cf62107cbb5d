"""
Smoke tests for the command-line tools.
"""

import pytest

from chroma_merge.core.game import GameEngine
from tools.benchmark_speed import benchmark_games
from tools.play_human import HumanPlayer, TerminalRenderer


class TestBenchmark:
    """Headless benchmark runs."""

    def test_random_games(self):
        results = benchmark_games(num_games=2, agent="random", seed=3)
        assert results["num_games"] == 2
        assert results["total_steps"] >= 2 * 64
        assert results["max_score"] >= results["mean_score"] >= 0


class TestTerminalFrontEnd:
    """Rendering and command handling without a terminal."""

    def test_render_plain(self, config):
        engine = GameEngine(config=config, seed=0)
        engine.place_tile(2, 3)
        text = TerminalRenderer(config, use_color=False).render(engine.snapshot())
        lines = text.splitlines()
        assert len(lines) == 1 + 8 + 2
        assert "SCORE 0" in text
        assert "NEXT" in text

    def test_commands(self, config, capsys):
        player = HumanPlayer(config, seed=1, step_delay=0.0, sound=False)
        player._handle_command("0 0")
        player._handle_command("0 0")
        player._handle_command("9 9")
        player._handle_command("hello")
        out = capsys.readouterr().out
        assert out.count("Rejected") == 2
        assert "Expected 'row col'" in out

        player._handle_command("r")
        assert "Games played: 1" in capsys.readouterr().out

        player._handle_command("q")
        assert player.run() == 0
