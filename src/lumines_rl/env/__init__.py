"""Gymnasium environments for Lumines RL."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register default 16x10 Lumines environment (one step per simulation tick)
register(
    id="Lumines-16x10-v0",
    entry_point="lumines_rl.env.lumines_env:LuminesEnv",
)

__all__ = ["Lumines-16x10-v0"]
