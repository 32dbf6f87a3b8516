from __future__ import annotations

from typing import List, Tuple

# two columns per beat
COLUMNS_PER_BEAT = 2


def timeline_position(time_ms: float, bpm: float, cols: int) -> float:
    """Cursor position in ``[0, cols)`` after ``time_ms`` milliseconds."""
    return (time_ms / 1000.0) * (bpm / 60.0) * COLUMNS_PER_BEAT % cols


def swept_segments(previous: float, current: float, cols: int) -> List[Tuple[float, float]]:
    """Segments covered moving from ``previous`` to ``current``.

    On a wrap the first segment runs on past the right edge to
    ``current + cols`` (columns beyond the grid hold nothing), then the
    cursor restarts at 0.
    """
    if current >= previous:
        return [(previous, current)]
    return [(previous, current + cols), (0.0, current)]
