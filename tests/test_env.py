from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium.utils.env_checker import check_env

import lumines_rl.env  # noqa: F401
from lumines_rl.env.lumines_env import LuminesEnv, keys_from_action
from lumines_rl.env.wrappers import KEY_COMBOS, KeyComboWrapper
from lumines_rl.game import GameConfig, Key


def test_env_passes_checker():
    check_env(LuminesEnv(), skip_render_check=True)


def test_registered_env_steps():
    env = gym.make("Lumines-16x10-v0")
    obs, info = env.reset(seed=0)
    assert obs["grid"].shape == (10, 16)
    assert obs["piece"][0] == 7

    right = np.array([0, 1, 0, 0, 0], dtype=np.int8)
    obs, reward, terminated, truncated, info = env.step(right)
    assert obs["piece"][0] == 8
    assert reward == 0.0
    assert not terminated and not truncated
    env.close()


def test_keys_from_action_order():
    assert keys_from_action([1, 0, 1, 0, 1]) == frozenset({Key.LEFT, Key.DOWN, Key.ROTATE_CW})
    assert keys_from_action(np.zeros(5, dtype=np.int8)) == frozenset()


def test_reward_counts_cleared_cells():
    env = LuminesEnv(GameConfig(bpm=540.0))
    env.reset(seed=1)
    color = env.game.config.palette.color1
    env.game.grid.place(0, [color, color])
    env.game.grid.place(1, [color, color])
    env.game.grid.update_matches()

    idle = np.zeros(5, dtype=np.int8)
    total = 0.0
    for _ in range(20):
        _, reward, _, _, info = env.step(idle)
        total += reward
    assert total == 4.0
    assert info["cells_cleared_total"] == 4


def test_truncates_at_max_episode_steps():
    env = LuminesEnv(GameConfig(max_episode_steps=3))
    env.reset(seed=0)
    idle = np.zeros(5, dtype=np.int8)
    truncated = [env.step(idle)[3] for _ in range(3)]
    assert truncated == [False, False, True]


def test_rgb_render():
    env = LuminesEnv(render_mode="rgb_array")
    env.reset(seed=0)
    img = env.render()
    assert img.shape == (120, 192, 3)
    assert img.dtype == np.uint8


def test_key_combo_wrapper():
    env = KeyComboWrapper(LuminesEnv())
    assert env.action_space.n == len(KEY_COMBOS)
    assert list(env.action(2)) == [0, 1, 0, 0, 0]
    env.reset(seed=0)
    obs, *_ = env.step(1)
    assert obs["piece"][0] == 6
