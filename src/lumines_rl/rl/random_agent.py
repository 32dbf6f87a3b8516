from __future__ import annotations

import argparse
from typing import Optional

import gymnasium as gym

# Ensure envs are registered
import lumines_rl.env  # noqa: F401
from lumines_rl.env.wrappers import KeyComboWrapper


def run_random(steps: int = 2000, seed: Optional[int] = None) -> float:
    env = KeyComboWrapper(gym.make("Lumines-16x10-v0"))
    env.action_space.seed(seed)
    obs, info = env.reset(seed=seed)
    total_cleared = 0.0
    pieces = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_cleared += float(reward)
        pieces += int(info.get("committed", False))
        if terminated or truncated:
            obs, info = env.reset()
    env.close()
    print(f"Random agent: {steps} ticks, {pieces} pieces dropped, {total_cleared:.0f} cells cleared")
    return total_cleared


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=None)
    return p


def main() -> None:
    args = build_parser().parse_args()
    run_random(args.steps, args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
