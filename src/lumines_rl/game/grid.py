from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional

import numpy as np

logger = logging.getLogger(__name__)

EMPTY = -1
UNMATCHED = -1.0


@dataclass(frozen=True)
class Cluster:
    start: int
    end: int


class GameGrid:
    """Column-major stack of placed cells plus per-cell match progress.

    ``columns[c][0]`` is the bottom cell of column ``c``. ``matched`` mirrors
    the shape of ``columns``: ``None`` for cells outside any match, otherwise
    the sweep progress accrued so far (>= 1 means ready for removal).
    """

    def __init__(self, cols: int, rows: int) -> None:
        self.cols = int(cols)
        self.rows = int(rows)
        self.columns: List[List[int]] = [[] for _ in range(self.cols)]
        self.matched: List[List[Optional[float]]] = [[] for _ in range(self.cols)]

    def reset(self) -> None:
        self.columns = [[] for _ in range(self.cols)]
        self.matched = [[] for _ in range(self.cols)]

    def column_height(self, column: int) -> int:
        return len(self.columns[column])

    def place(self, column: int, colors: Iterable[int]) -> None:
        """Append colours to a column, bottom first. Call :meth:`trim` afterwards."""
        self.columns[column].extend(colors)

    def trim(self) -> None:
        """Discard cells above ``rows`` in every column."""
        for c in range(self.cols):
            del self.columns[c][self.rows :]
            del self.matched[c][self.rows :]

    # ---------- Matching ----------
    def update_matches(self) -> None:
        """Flag every same-colour 2x2 block, keeping progress already accrued."""
        for c in range(self.cols):
            missing = len(self.columns[c]) - len(self.matched[c])
            if missing > 0:
                self.matched[c].extend([None] * missing)

        for c in range(self.cols - 1):
            left = self.columns[c]
            right = self.columns[c + 1]
            max_row = min(len(left), len(right)) - 1
            for r in range(max_row):
                color = left[r]
                if color == left[r + 1] == right[r] == right[r + 1]:
                    for col, row in ((c, r), (c, r + 1), (c + 1, r), (c + 1, r + 1)):
                        if self.matched[col][row] is None:
                            self.matched[col][row] = 0.0

    def reset_matches(self) -> None:
        self.matched = [[] for _ in range(self.cols)]
        self.update_matches()

    def has_match(self, column: int) -> bool:
        return any(v is not None for v in self.matched[column])

    # ---------- Timeline ----------
    def sweep(self, previous: float, current: float) -> None:
        """Accrue progress on matched cells in columns the cursor passed."""
        start = int(math.floor(previous))
        end = int(math.floor(current))
        for col in range(max(start, 0), min(end, self.cols - 1) + 1):
            progress = current - max(col, previous)
            column = self.matched[col]
            for row, value in enumerate(column):
                if value is not None:
                    column[row] = value + progress

    def clusters(self) -> List[Cluster]:
        """Maximal runs of adjacent columns containing matched cells."""
        found: List[Cluster] = []
        for c in range(self.cols):
            if not self.has_match(c):
                continue
            if found and found[-1].end + 1 == c:
                found[-1] = Cluster(found[-1].start, c)
            else:
                found.append(Cluster(c, c))
        return found

    def clear_swept(self, current: float) -> int:
        """Remove fully swept cells of every cluster the cursor has exited.

        Returns the number of cells removed. When anything is removed the
        match state is rebuilt against the settled grid.
        """
        removed = 0
        for cluster in self.clusters():
            if current < cluster.end + 1:
                continue
            for col in range(cluster.start, cluster.end + 1):
                rows = [r for r, v in enumerate(self.matched[col]) if v is not None and v >= 1]
                for r in reversed(rows):
                    del self.columns[col][r]
                    del self.matched[col][r]
                removed += len(rows)
                if rows:
                    logger.debug("column %d: removed rows %s", col, rows)
        if removed:
            self.reset_matches()
        return removed

    # ---------- Snapshots ----------
    def to_array(self) -> np.ndarray:
        """Row-major copy of the colours, row 0 at the top, ``EMPTY`` where vacant."""
        state = np.full((self.rows, self.cols), EMPTY, dtype=np.int64)
        for c, column in enumerate(self.columns):
            for r, color in enumerate(column[: self.rows]):
                state[self.rows - 1 - r, c] = color
        return state

    def match_array(self) -> np.ndarray:
        progress = np.full((self.rows, self.cols), UNMATCHED, dtype=np.float32)
        for c, column in enumerate(self.matched):
            for r, value in enumerate(column[: self.rows]):
                if value is not None:
                    progress[self.rows - 1 - r, c] = value
        return progress

    def copy(self) -> "GameGrid":
        new_grid = GameGrid(self.cols, self.rows)
        new_grid.columns = [list(column) for column in self.columns]
        new_grid.matched = [list(column) for column in self.matched]
        return new_grid
