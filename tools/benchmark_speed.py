"""
Performance Benchmark
=====================

Measures engine placement throughput and baseline scores.

Usage:
    python -m tools.benchmark_speed [--games N] [--agent random|greedy] [--seed S]
"""

from __future__ import annotations

import argparse
import sys
import time
import numpy as np

from chroma_merge.core.env_gym import ChromaMergeEnv
from chroma_merge.core.statistics import InMemoryStatistics
from contestants.baseline_greedy.agent import ChromaAgent


def benchmark_games(
    num_games: int = 100,
    agent: str = "random",
    seed: int = 42,
    games_played: int = 0
) -> dict:
    """
    Play full games and time them.

    Args:
        num_games: Number of complete games to play.
        agent: "random" or "greedy".
        seed: Random seed for the first game.
        games_played: Starting games_played (drives the difficulty curve).

    Returns:
        Dict with timing and score results.
    """
    env = ChromaMergeEnv(statistics=InMemoryStatistics(games_played=games_played))
    rng = np.random.default_rng(seed)
    greedy = ChromaAgent()
    greedy.reset(seed)

    scores = []
    total_steps = 0
    obs, _ = env.reset(seed=seed)
    start = time.perf_counter()

    for _ in range(num_games):
        done = False
        while not done:
            mask = env.action_masks()
            if agent == "greedy":
                action = greedy.act(obs, mask)
            else:
                action = int(rng.choice(np.flatnonzero(mask)))
            obs, _, done, _, info = env.step(action)
            total_steps += 1
        scores.append(info["score"])
        obs, _ = env.reset()

    elapsed = time.perf_counter() - start
    env.close()

    return {
        "agent": agent,
        "num_games": num_games,
        "total_steps": total_steps,
        "elapsed_seconds": elapsed,
        "steps_per_second": total_steps / elapsed if elapsed > 0 else float("inf"),
        "mean_score": float(np.mean(scores)),
        "max_score": int(np.max(scores)),
    }


def main():
    parser = argparse.ArgumentParser(description="Benchmark Chroma Merge engine")
    parser.add_argument("--games", type=int, default=100, help="Games to play (default: 100)")
    parser.add_argument("--agent", choices=["random", "greedy"], default="random")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--games-played", type=int, default=0,
                        help="Starting games_played for the difficulty curve")

    args = parser.parse_args()

    result = benchmark_games(args.games, args.agent, args.seed, args.games_played)

    print("=" * 50)
    print("BENCHMARK")
    print("=" * 50)
    print(f"Agent:           {result['agent']}")
    print(f"Games:           {result['num_games']}")
    print(f"Placements:      {result['total_steps']}")
    print(f"Elapsed:         {result['elapsed_seconds']:.2f}s")
    print(f"Placements/sec:  {result['steps_per_second']:.0f}")
    print(f"Mean score:      {result['mean_score']:.1f}")
    print(f"Max score:       {result['max_score']}")
    print("=" * 50)
    return 0


if __name__ == "__main__":
    sys.exit(main())
