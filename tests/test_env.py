import gymnasium as gym
import numpy as np

import falling_blocks.env  # noqa: F401
from falling_blocks.env.falling_blocks_env import EnvAction, FallingBlocksEnv


def test_reset_returns_board_observation():
    env = FallingBlocksEnv()
    obs, info = env.reset(seed=0)
    assert obs.shape == (20, 10)
    assert obs.dtype == np.int8
    assert env.observation_space.contains(obs)
    assert (obs < 0).sum() == 4
    assert info["score"] == 0


def test_reset_with_same_seed_is_reproducible():
    env = FallingBlocksEnv()
    first, _ = env.reset(seed=5)
    first_next = env.state.next_block
    second, _ = env.reset(seed=5)
    assert np.array_equal(first, second)
    assert env.state.next_block == first_next


def test_step_contract_and_gravity():
    env = FallingBlocksEnv(frame_ms=800)
    env.reset(seed=1)
    row = env.state.active.row
    obs, reward, terminated, truncated, info = env.step(int(EnvAction.NONE))
    assert env.state.active.row == row + 1
    assert reward == 0.0
    assert not terminated
    assert not truncated
    assert info["steps"] == 1


def test_boosted_idle_play_reaches_game_over():
    env = FallingBlocksEnv()
    env.reset(seed=2)
    env.step(int(EnvAction.BOOST_ON))
    terminated = False
    for _ in range(5000):
        _, _, terminated, truncated, _ = env.step(int(EnvAction.NONE))
        if terminated:
            break
    assert terminated
    assert env.state.game_over


def test_truncates_after_max_steps():
    env = FallingBlocksEnv(max_episode_steps=3)
    env.reset(seed=3)
    results = [env.step(int(EnvAction.NONE)) for _ in range(3)]
    assert [r[3] for r in results] == [False, False, True]


def test_registered_id_builds_env():
    env = gym.make("FallingBlocks-10x20-v0")
    obs, _ = env.reset(seed=4)
    assert obs.shape == (20, 10)
    env.close()


def test_rgb_render():
    env = FallingBlocksEnv(render_mode="rgb_array")
    env.reset(seed=0)
    img = env.render()
    assert img.shape == (240, 120, 3)
