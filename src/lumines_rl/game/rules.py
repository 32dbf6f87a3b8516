from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HandlingRules:
    """Horizontal movement timing, counted in simulation ticks.

    das_ticks: ticks a direction must be held before auto-repeat starts.
    arr_ticks: ticks between auto-repeated moves once DAS has expired.
    """

    das_ticks: int = 10
    arr_ticks: int = 1

    def __post_init__(self) -> None:
        if self.das_ticks < 1:
            raise ValueError(f"das_ticks must be >= 1, got {self.das_ticks}")
        if self.arr_ticks < 1:
            raise ValueError(f"arr_ticks must be >= 1, got {self.arr_ticks}")
