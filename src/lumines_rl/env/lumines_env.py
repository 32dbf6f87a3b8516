from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from lumines_rl.game import DroppedPiece, GameConfig, HandlingRules, Key, LuminesGame, Piece


def keys_from_action(action) -> frozenset:
    """Map a MultiBinary action (one flag per ``Key.ALL`` entry) to held keys."""
    flags = np.asarray(action).reshape(-1)
    return frozenset(key for key, flag in zip(Key.ALL, flags) if flag)


class LuminesEnv(gym.Env):
    """One environment step is one simulation tick.

    The action is the set of held keys; the reward is the number of cells
    the timeline cleared during the tick.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 60}

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[HandlingRules] = None,
                 render_mode: Optional[str] = None) -> None:
        super().__init__()
        self.game = LuminesGame(config, rules)
        self.render_mode = render_mode

        rows = self.game.config.rows
        cols = self.game.config.cols

        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=2, shape=(rows, cols), dtype=np.int8),
                "matched": spaces.Box(low=-1.0, high=np.inf, shape=(rows, cols), dtype=np.float32),
                # column, orientation, configuration, dropping flag
                "piece": spaces.Box(
                    low=np.array([0, 0, 0, 0], dtype=np.int16),
                    high=np.array([cols - 2, 3, 15, 1], dtype=np.int16),
                    dtype=np.int16,
                ),
                "timeline": spaces.Box(low=0.0, high=float(cols), shape=(1,), dtype=np.float32),
            }
        )
        self.action_space = spaces.MultiBinary(len(Key.ALL))

        self._steps = 0

    def _piece_obs(self) -> np.ndarray:
        piece = self.game.piece
        if isinstance(piece, Piece):
            return np.array([piece.column, piece.orientation, piece.config, 0], dtype=np.int16)
        if isinstance(piece, DroppedPiece):
            config = piece.left_mask | (piece.right_mask << 2)
            return np.array([piece.column, 0, config, 1], dtype=np.int16)
        return np.zeros((4,), dtype=np.int16)

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "grid": self.game.encoded_grid(),
            "matched": self.game.match_array(),
            "piece": self._piece_obs(),
            "timeline": np.array([self.game.previous_timeline_position], dtype=np.float32),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "tick": self.game.tick_count,
            "cells_cleared_total": self.game.cells_cleared_total,
            "handling": type(self.game.handling).__name__,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        result = self.game.tick(keys_from_action(action))
        self._steps += 1
        truncated = self._steps >= self.game.config.max_episode_steps

        info = self._get_info()
        info["committed"] = result.committed
        info["cleared"] = result.cleared
        return self._get_obs(), float(result.cleared), False, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        colors = self.game.grid_array()
        progress = self.game.match_array()
        cell = 12
        h, w = colors.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                value = int(colors[y, x])
                if value < 0:
                    color = (30, 30, 36)
                elif progress[y, x] >= 0:
                    color = (240, 240, 240)
                else:
                    color = ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        line_x = min(int(self.game.previous_timeline_position * cell), w * cell - 1)
        img[:, line_x, :] = 255
        return img

    def close(self) -> None:
        pass
