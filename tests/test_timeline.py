from __future__ import annotations

import pytest

from lumines_rl.game.timeline import swept_segments, timeline_position


def test_two_columns_per_beat():
    assert timeline_position(0, 120, 16) == 0.0
    # 120 bpm: two beats per second
    assert timeline_position(1000, 120, 16) == pytest.approx(4.0)
    assert timeline_position(500, 60, 16) == pytest.approx(1.0)


def test_position_wraps():
    assert timeline_position(8000, 60, 16) == pytest.approx(0.0)
    assert timeline_position(8500, 60, 16) == pytest.approx(1.0)


def test_segments():
    assert swept_segments(3.0, 4.5, 16) == [(3.0, 4.5)]
    assert swept_segments(15.5, 0.25, 16) == [(15.5, 16.25), (0.0, 0.25)]
