"""Unit tests for /src/block_blast/env"""

import gymnasium as gym
import numpy as np
import pytest

import block_blast.env  # noqa: F401
from block_blast.env import BlockBlastEnv
from block_blast.env.wrappers import FlattenDiscreteActionWrapper, ResampleInvalidActionWrapper
from block_blast.game import Block, CellState, get_shape


@pytest.fixture
def env() -> BlockBlastEnv:
    env = BlockBlastEnv()
    env.reset(seed=0)
    return env


def test_registered_env_reset() -> None:
    env = gym.make("BlockBlast-10x10-v0")
    obs, info = env.reset(seed=3)
    assert env.observation_space.contains(obs)
    assert obs["pieces_remaining"] == 3
    assert info["action_mask"].shape == (3, 10, 10)
    assert info["action_mask"].sum() == len(info["valid_actions"])
    env.close()


def test_reset_is_seeded() -> None:
    first, _ = BlockBlastEnv().reset(seed=11)
    second, _ = BlockBlastEnv().reset(seed=11)
    assert np.array_equal(first["pieces"], second["pieces"])
    assert np.array_equal(first["tiers"], second["tiers"])


def test_valid_step(env: BlockBlastEnv) -> None:
    _, info = env.reset(seed=1)
    action = info["valid_actions"][0]
    obs, reward, terminated, truncated, info = env.step(action)
    assert env.observation_space.contains(obs)
    assert "invalid" not in info["reward_components"]
    assert not terminated and not truncated
    assert info["turns"] == 1
    assert reward == pytest.approx(sum(info["reward_components"].values()))


def test_invalid_step_is_penalized(env: BlockBlastEnv) -> None:
    env.game.state.pool = [Block(get_shape("h3"))] * 3
    obs, reward, terminated, _, info = env.step((0, 0, 9))
    assert reward == pytest.approx(-0.1)
    assert info["reward_components"] == {"invalid": -0.1}
    assert info["turns"] == 0
    assert obs["pieces_remaining"] == 3


def test_line_clear_reward(env: BlockBlastEnv) -> None:
    env.game.grid.cells[0, 1:] = CellState.GOLD
    env.game.state.pool = [Block(get_shape("single"))] * 3
    _, reward, _, _, info = env.step((0, 0, 0))
    assert info["lines_cleared"] == 1
    assert info["reward_components"]["credits"] == pytest.approx(4.5)
    assert reward == pytest.approx(1.0 + 4.5)
    assert env.wallet.credits == 45


def test_terminal_step(env: BlockBlastEnv) -> None:
    rows, cols = np.indices((10, 10))
    cells = np.where((rows + 2 * cols) % 5 == 0, CellState.EMPTY, CellState.NORMAL).astype(np.int8)
    env.game.grid.cells[:, :] = cells
    env.game.state.pool = [Block(get_shape("single")), Block(get_shape("square"))]
    _, _, terminated, _, info = env.step((0, 0, 0))
    assert terminated
    assert info["lines_cleared"] == 0
    assert "terminal" in info["reward_components"]
    assert not info["action_mask"].any()


def test_flatten_wrapper_round_trip() -> None:
    wrapped = FlattenDiscreteActionWrapper(BlockBlastEnv())
    wrapped.reset(seed=2)
    assert wrapped.action_space.n == 300
    assert wrapped._unflatten(123) == (1, 2, 3)
    assert list(wrapped.action(299)) == [2, 9, 9]
    mask = wrapped.get_action_mask()
    assert mask.shape == (300,)
    assert mask.sum() == len(wrapped.unwrapped.game.get_valid_actions())


def test_resample_wrapper_replaces_invalid_action() -> None:
    env = ResampleInvalidActionWrapper(FlattenDiscreteActionWrapper(BlockBlastEnv()))
    env.reset(seed=4)
    env.unwrapped.game.state.pool = [Block(get_shape("h3"))] * 3
    _, _, _, _, info = env.step(9)  # (0, 0, 9) does not fit
    assert "invalid" not in info["reward_components"]
    assert info["turns"] == 1
