"""
Replay Recorder
===============

A simple wrapper to record Gymnasium environment episodes for replay.

Usage:
    from chroma_merge.core import ChromaMergeEnv, ReplayRecorder

    env = ChromaMergeEnv()
    recorder = ReplayRecorder(env)

    obs, info = recorder.reset(seed=42)

    done = False
    while not done:
        action = your_agent(obs)
        obs, reward, terminated, truncated, info = recorder.step(action)
        done = terminated or truncated

    recorder.save("my_replay.json")

Runs are fully determined by the seed, the games_played counts that drive
the difficulty curve and the action sequence. A reset draws the first pending
tile before the finished run is counted, so the opening tile and the rest of
the run can see different counts and both are recorded, so ``replay_episode`` can
re-simulate a saved file and check the final score.
"""

from __future__ import annotations

import json
import hashlib
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np

from chroma_merge.core.config_loader import GameConfig, load_config
from chroma_merge.core.env_gym import ChromaMergeEnv
from chroma_merge.core.state_snapshot import GameSnapshot
from chroma_merge.core.statistics import InMemoryStatistics


def generate_replay_filename(
    agent_name: str = "replay",
    seed: Optional[int] = None,
    directory: Optional[Union[str, Path]] = None
) -> Path:
    """
    Generate a timestamped replay filename.

    Format: {agent_name}_{YYYYMMDD_HHMMSS}_s{seed}.json
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    if seed is not None:
        filename = f"{agent_name}_{timestamp}_s{seed}.json"
    else:
        filename = f"{agent_name}_{timestamp}.json"

    if directory:
        return Path(directory) / filename
    return Path(filename)


def compute_config_hash(config: Optional[GameConfig] = None) -> str:
    """Compute a hash of the gameplay-relevant config for replay validation."""
    if config is None:
        config = load_config()
    hash_data = {
        "grid": {
            "rows": config.grid.rows,
            "cols": config.grid.cols,
            "max_tier": config.grid.max_tier,
        },
        "rng": {
            "difficulty_divisor": config.rng.difficulty_divisor,
            "difficulty_cap": config.rng.difficulty_cap,
            "bands": [
                [b.threshold, b.difficulty_scale, b.min_tier, b.max_tier]
                for b in config.rng.bands
            ],
        },
        "scoring": {
            "points_per_tile": config.scoring.points_per_tile,
        },
    }
    return hashlib.md5(json.dumps(hash_data, sort_keys=True).encode()).hexdigest()[:8]


class ReplayRecorder:
    """
    Wrapper that records environment interactions for replay.

    Records the seed, the games_played value the opening tile was drawn with,
    the value the rest of the run was drawn with, and every action with the
    score after it.
    """

    def __init__(
        self,
        env: ChromaMergeEnv,
        agent_name: str = "unknown",
        auto_save_path: Optional[str] = None
    ):
        """
        Initialize the replay recorder.

        Args:
            env: The environment to wrap.
            agent_name: Name of the agent (stored in replay metadata).
            auto_save_path: If provided, automatically save replay on episode end.
        """
        self.env = env
        self.agent_name = agent_name
        self.auto_save_path = auto_save_path

        self._recording = False
        self._seed: Optional[int] = None
        self._start_games_played: int = 0
        self._games_played: int = 0
        self._actions: List[int] = []
        self._scores: List[int] = []
        self._invalid: List[bool] = []
        self._game_over = False
        self._config_hash = compute_config_hash(env.config)

    @property
    def recording(self) -> bool:
        """Whether currently recording."""
        return self._recording

    @property
    def observation_space(self):
        return self.env.observation_space

    @property
    def action_space(self):
        return self.env.action_space

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict] = None
    ) -> Tuple[Any, Dict]:
        """
        Reset the environment and start recording.

        A seed is required for the recording to be replayable.
        """
        self._actions = []
        self._scores = []
        self._invalid = []
        self._game_over = False
        self._seed = seed
        self._recording = True

        self._start_games_played = self.env.statistics.games_played
        obs, info = self.env.reset(seed=seed, options=options)
        self._games_played = int(info["games_played"])
        return obs, info

    def step(self, action: Union[int, np.ndarray]) -> Tuple[Any, float, bool, bool, Dict]:
        """Take a step and record it."""
        if isinstance(action, np.ndarray):
            action_val = int(action.item())
        else:
            action_val = int(action)

        obs, reward, terminated, truncated, info = self.env.step(action)

        if self._recording:
            self._actions.append(action_val)
            self._scores.append(int(info.get("score", 0)))
            self._invalid.append(bool(info.get("invalid_move", False)))
            if terminated:
                self._game_over = True

        if (terminated or truncated) and self.auto_save_path:
            self.save(self.auto_save_path)

        return obs, reward, terminated, truncated, info

    def get_replay_data(self) -> Dict[str, Any]:
        """Get the current replay data as a dictionary."""
        return {
            "seed": self._seed,
            "start_games_played": self._start_games_played,
            "games_played": self._games_played,
            "agent": self.agent_name,
            "config_hash": self._config_hash,
            "actions": self._actions.copy(),
            "scores": self._scores.copy(),
            "invalid_moves": sum(self._invalid),
            "final_score": self._scores[-1] if self._scores else 0,
            "total_steps": len(self._actions),
            "game_over": self._game_over,
        }

    def save(
        self,
        path: Optional[Union[str, Path]] = None,
        overwrite: bool = True,
        directory: Optional[Union[str, Path]] = None
    ) -> Path:
        """
        Save the replay to a JSON file.

        Args:
            path: Path to save the replay. If None, auto-generates a timestamped name.
            overwrite: If True, overwrite existing file.
            directory: Directory for auto-generated filename (only used if path is None).

        Returns:
            Path where the replay was saved.
        """
        if path is None:
            path = generate_replay_filename(
                agent_name=self.agent_name,
                seed=self._seed,
                directory=directory
            )
        else:
            path = Path(path)

        if path.exists() and not overwrite:
            raise FileExistsError(f"Replay file already exists: {path}")

        path.parent.mkdir(parents=True, exist_ok=True)

        replay_data = self.get_replay_data()
        with open(path, "w") as f:
            json.dump(replay_data, f, indent=2)

        return path

    def close(self) -> None:
        self.env.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def load_replay(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a replay file written by ``ReplayRecorder.save``."""
    with open(path, "r") as f:
        data = json.load(f)
    for key in ("seed", "start_games_played", "games_played", "actions", "config_hash"):
        if key not in data:
            raise ValueError(f"Replay is missing '{key}'")
    return data


def replay_episode(
    replay_data: Dict[str, Any],
    config_path: Optional[str] = None
) -> GameSnapshot:
    """
    Re-simulate a recorded episode.

    Args:
        replay_data: Dictionary from ``get_replay_data`` or ``load_replay``.
        config_path: Config to replay against. Must hash like the recording.

    Returns:
        Snapshot after the last recorded action.

    Raises:
        ValueError: If the config hash or the seed makes the replay unusable.
    """
    if replay_data.get("seed") is None:
        raise ValueError("Replay was recorded without a seed and cannot be reproduced")

    start = int(replay_data["start_games_played"])
    statistics = InMemoryStatistics(games_played=start)
    env = ChromaMergeEnv(config_path=config_path, statistics=statistics)

    config_hash = compute_config_hash(env.config)
    if config_hash != replay_data["config_hash"]:
        raise ValueError(
            f"Config hash mismatch: replay {replay_data['config_hash']}, current {config_hash}"
        )

    # Opening tile is drawn with the start count; a counted reset bumps it afterwards
    env.reset(seed=int(replay_data["seed"]))
    for _ in range(int(replay_data["games_played"]) - start):
        statistics.increment_games_played()
    for action in replay_data["actions"]:
        env.step(int(action))
    return env.game.snapshot()


def record_episode(
    env: ChromaMergeEnv,
    agent_fn,
    seed: int,
    save_path: Optional[str] = None,
    agent_name: str = "unknown"
) -> Dict[str, Any]:
    """
    Convenience function to record a single episode.

    Args:
        env: The environment.
        agent_fn: Function taking (observation, action_mask) and returning an action.
        seed: Random seed for the episode.
        save_path: If provided, save replay to this path.
        agent_name: Name of the agent.

    Returns:
        Replay data dictionary.
    """
    recorder = ReplayRecorder(env, agent_name=agent_name)

    obs, info = recorder.reset(seed=seed)

    done = False
    while not done:
        action = agent_fn(obs, env.action_masks())
        obs, reward, terminated, truncated, info = recorder.step(action)
        done = terminated or truncated

    replay_data = recorder.get_replay_data()

    if save_path:
        recorder.save(save_path)

    return replay_data
