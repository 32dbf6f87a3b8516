from __future__ import annotations

from typing import FrozenSet, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from lumines_rl.game import Key

# Held-key combinations reachable with one discrete action.
KEY_COMBOS: Tuple[FrozenSet[str], ...] = (
    frozenset(),
    frozenset({Key.LEFT}),
    frozenset({Key.RIGHT}),
    frozenset({Key.DOWN}),
    frozenset({Key.ROTATE_CCW}),
    frozenset({Key.ROTATE_CW}),
    frozenset({Key.LEFT, Key.ROTATE_CW}),
    frozenset({Key.RIGHT, Key.ROTATE_CW}),
    frozenset({Key.LEFT, Key.ROTATE_CCW}),
    frozenset({Key.RIGHT, Key.ROTATE_CCW}),
)


class KeyComboWrapper(gym.ActionWrapper):
    """Flattens the MultiBinary held-keys action to Discrete(len(KEY_COMBOS))."""

    def __init__(self, env: gym.Env):
        super().__init__(env)
        assert isinstance(env.action_space, spaces.MultiBinary)
        self.action_space = spaces.Discrete(len(KEY_COMBOS))

    def action(self, action: int):  # type: ignore[override]
        combo = KEY_COMBOS[int(action)]
        return np.array([1 if key in combo else 0 for key in Key.ALL], dtype=np.int8)
