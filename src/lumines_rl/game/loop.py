from __future__ import annotations

import time
from typing import Callable, Optional


def _now_ms() -> float:
    return time.perf_counter() * 1000.0


class FixedLoop:
    """Fixed-timestep scheduler.

    The owner calls :meth:`pump` once per rendered frame. The callback runs
    whenever the next tick time has passed, with extra calls to catch up
    after a late frame. It never runs early.
    """

    def __init__(self, callback: Callable[[], None], interval: float,
                 clock: Optional[Callable[[], float]] = None) -> None:
        self.callback = callback
        self.interval = float(interval)
        self.time_scale = 1.0
        self.clock = clock or _now_ms
        self.running = True
        self.start_time = 0.0
        self.next_tick = 0.0
        self.reset_start_time()

    def reset_start_time(self) -> None:
        now = self.clock()
        self.start_time = now
        self.next_tick = now

    @property
    def elapsed(self) -> float:
        return self.clock() - self.start_time

    def start(self) -> None:
        self.running = True
        self.reset_start_time()

    def stop(self) -> None:
        self.running = False

    def pump(self) -> int:
        """Run every tick that is due. Returns how many ticks ran."""
        if not self.running:
            return 0

        scaled = self.interval / self.time_scale
        now = self.clock()
        if now <= self.next_tick:
            return 0

        ran = 0
        diff = now - self.next_tick
        if diff > scaled:
            missed = int(diff // scaled)
            remainder = diff % scaled
            for _ in range(missed):
                self.callback()
            ran += missed
            self.next_tick = now + scaled - remainder
        else:
            self.next_tick += scaled

        self.callback()
        return ran + 1
