from __future__ import annotations

import pytest

from lumines_rl.game import GameConfig, LuminesGame


@pytest.fixture
def game() -> LuminesGame:
    return LuminesGame(GameConfig(random_seed=1))


@pytest.fixture
def fast_timeline_game() -> LuminesGame:
    # 540 bpm at 60 ticks/s moves the cursor 0.3 columns per tick
    return LuminesGame(GameConfig(bpm=540.0, random_seed=0))
