"""
Tests for the Gymnasium environment, replays and the baseline agent.
"""

import json

import pytest
import numpy as np

from chroma_merge.core.env_gym import ChromaMergeEnv
from chroma_merge.core.replay_recorder import (
    ReplayRecorder,
    compute_config_hash,
    load_replay,
    record_episode,
    replay_episode,
)
from chroma_merge.core.statistics import InMemoryStatistics
from contestants.baseline_greedy import ChromaAgent


def random_agent(seed):
    rng = np.random.default_rng(seed)

    def act(obs, mask):
        return int(rng.choice(np.flatnonzero(mask)))
    return act


@pytest.fixture
def env():
    e = ChromaMergeEnv()
    yield e
    e.close()


class TestEnvAPI:
    """reset/step contract."""

    def test_spaces(self, env):
        assert env.action_space.n == 64
        assert set(env.observation_space.spaces) == {"grid", "pending_tile", "score", "empty_cells"}

    def test_reset(self, env):
        obs, info = env.reset(seed=42)
        assert env.observation_space.contains(obs)
        assert obs["grid"].shape == (8, 8)
        assert int(obs["score"]) == 0
        assert int(obs["empty_cells"]) == 64
        assert 1 <= int(obs["pending_tile"]) <= 6
        assert info["games_played"] == 0
        assert info["delta_score"] == 0
        assert info["invalid_move"] is False

    def test_step(self, env):
        obs, _ = env.reset(seed=42)
        tile = int(obs["pending_tile"])

        obs, reward, terminated, truncated, info = env.step(9)

        assert env.observation_space.contains(obs)
        assert reward == 0.0
        assert not terminated
        assert not truncated
        assert obs["grid"][1, 1] == tile
        assert int(obs["empty_cells"]) == 63
        assert info["invalid_move"] is False
        assert info["merges_this_step"] == 0

    def test_numpy_action_accepted(self, env):
        env.reset(seed=1)
        obs, *_ = env.step(np.array(0))
        assert obs["grid"][0, 0] != 0

    def test_occupied_cell_reports_invalid_move(self, env):
        env.reset(seed=3)
        obs, *_ = env.step(0)

        obs2, reward, terminated, _, info = env.step(0)

        assert info["invalid_move"] is True
        assert info["delta_score"] == 0
        assert np.array_equal(obs["grid"], obs2["grid"])
        assert int(obs2["pending_tile"]) == int(obs["pending_tile"])
        assert not terminated

    def test_action_mask(self, env):
        env.reset(seed=5)
        assert env.action_masks().all()
        env.step(10)
        mask = env.action_masks()
        assert not mask[10]
        assert mask.sum() == 63

    def test_later_resets_count_games(self, env):
        env.reset(seed=1)
        _, info = env.reset(seed=1)
        assert info["games_played"] == 1
        _, info = env.reset()
        assert info["games_played"] == 2

    def test_deterministic(self):
        results = []
        for _ in range(2):
            e = ChromaMergeEnv()
            e.reset(seed=123)
            act = random_agent(0)
            grids = []
            for _ in range(40):
                obs, _, terminated, _, _ = e.step(act(None, e.action_masks()))
                grids.append(obs["grid"].copy())
                if terminated:
                    break
            results.append(grids)
        assert len(results[0]) == len(results[1])
        for a, b in zip(*results):
            assert np.array_equal(a, b)

    def test_runs_to_termination(self, env):
        obs, _ = env.reset(seed=9)
        act = random_agent(9)
        terminated = False
        for _ in range(10000):
            obs, _, terminated, _, info = env.step(act(obs, env.action_masks()))
            if terminated:
                break
        assert terminated
        assert int(obs["empty_cells"]) == 0
        assert info["game_over"] is True
        assert not env.action_masks().any()

    def test_render_ansi(self):
        e = ChromaMergeEnv(render_mode="ansi")
        e.reset(seed=0)
        text = e.render()
        assert "score=0" in text
        assert ChromaMergeEnv().render() is None


class TestReplay:
    """Recording and re-simulation."""

    def test_round_trip(self, tmp_path, env):
        path = tmp_path / "run.json"
        data = record_episode(env, random_agent(4), seed=4, save_path=str(path), agent_name="random")

        loaded = load_replay(path)
        assert loaded["actions"] == data["actions"]
        assert loaded["agent"] == "random"
        assert loaded["game_over"] is True

        snapshot = replay_episode(loaded)
        assert snapshot.score == loaded["final_score"]
        assert snapshot.game_over

    def test_second_run_replays_with_its_games_played(self, env):
        recorder = ReplayRecorder(env, agent_name="random")
        recorder.reset(seed=1)
        recorder.step(0)

        recorder.reset(seed=2)
        act = random_agent(2)
        for _ in range(25):
            _, _, terminated, _, _ = recorder.step(act(None, env.action_masks()))
            if terminated:
                break

        data = recorder.get_replay_data()
        assert data["start_games_played"] == 0
        assert data["games_played"] == 1

        snapshot = replay_episode(data)
        assert np.array_equal(snapshot.grid, env.game.snapshot().grid)
        assert snapshot.score == env.game.score
        assert snapshot.pending_tile == env.game.pending_tile

    def test_config_hash_mismatch_rejected(self, env):
        data = record_episode(env, random_agent(0), seed=0)
        data["config_hash"] = "deadbeef"
        with pytest.raises(ValueError):
            replay_episode(data)

    def test_unseeded_replay_rejected(self):
        data = {"seed": None, "games_played": 0, "actions": [], "config_hash": compute_config_hash()}
        with pytest.raises(ValueError):
            replay_episode(data)

    def test_load_rejects_incomplete_file(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text(json.dumps({"seed": 1}))
        with pytest.raises(ValueError):
            load_replay(path)


class TestGreedyAgent:
    """Baseline agent smoke test."""

    def test_only_legal_moves(self):
        env = ChromaMergeEnv(statistics=InMemoryStatistics())
        agent = ChromaAgent()
        agent.reset(seed=0)
        obs, _ = env.reset(seed=0)
        for _ in range(200):
            obs, _, terminated, _, info = env.step(agent.act(obs, env.action_masks()))
            assert info["invalid_move"] is False
            if terminated:
                break

    def test_prefers_merge(self):
        agent = ChromaAgent()
        grid = np.zeros((8, 8), dtype=np.int8)
        grid[4, 4] = 3
        obs = {"grid": grid, "pending_tile": np.array(3)}
        action = agent.act(obs)
        assert divmod(action, 8) in [(3, 4), (5, 4), (4, 3), (4, 5)]
