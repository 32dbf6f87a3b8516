from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass, field
from typing import AbstractSet, Any, Deque, Dict, FrozenSet, List, Optional, Union

import numpy as np

from .grid import GameGrid
from .handling import (
    Action,
    HandlingState,
    Idle,
    Move,
    Rotate,
    StartDrop,
    apply_drop_completion,
    apply_handling,
)
from .pieces import DroppedPiece, Palette, Piece, random_piece
from .rules import HandlingRules
from .timeline import swept_segments, timeline_position

logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    cols: int = 16
    rows: int = 10
    bpm: float = 138.0
    tick_ms: float = 1000.0 / 60.0
    fall_speed: float = 0.75
    queue_depth: int = 16
    spawn_column: int = 7
    spawn_row: float = -2.0
    palette: Palette = field(default_factory=Palette)
    random_seed: Optional[int] = None
    max_episode_steps: int = 10000

    def __post_init__(self) -> None:
        if self.cols < 2 or self.rows < 2:
            raise ValueError(f"grid must be at least 2x2, got {self.cols}x{self.rows}")
        if self.bpm <= 0 or self.tick_ms <= 0 or self.fall_speed <= 0:
            raise ValueError("bpm, tick_ms and fall_speed must be positive")
        if self.queue_depth < 1:
            raise ValueError(f"queue_depth must be >= 1, got {self.queue_depth}")
        if not 0 <= self.spawn_column <= self.cols - 2:
            raise ValueError(f"spawn_column {self.spawn_column} outside 0..{self.cols - 2}")


@dataclass
class TickResult:
    actions: List[Action]
    committed: bool = False
    cleared: int = 0


class LuminesGame:
    """Simulation state for one game, advanced by :meth:`tick`."""

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[HandlingRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or HandlingRules()
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.cols, self.config.rows)
        self.queue: Deque[Piece] = deque()
        self.piece: Union[Piece, DroppedPiece, None] = None
        self.handling: HandlingState = Idle()
        self.previous_keys: FrozenSet[str] = frozenset()
        self.time_ms = 0.0
        self.previous_timeline_position = 0.0
        self.tick_count = 0
        self.cells_cleared_total = 0
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.grid.reset()
        self.queue = deque(self._random_piece() for _ in range(self.config.queue_depth))
        self.piece = self.queue.popleft()
        self.queue.append(self._random_piece())
        self.handling = Idle()
        self.previous_keys = frozenset()
        self.time_ms = 0.0
        self.previous_timeline_position = 0.0
        self.tick_count = 0
        self.cells_cleared_total = 0

    def _random_piece(self) -> Piece:
        return random_piece(self.rng, self.config.spawn_column, self.config.spawn_row, self.config.palette)

    @property
    def timeline_position(self) -> float:
        return timeline_position(self.time_ms, self.config.bpm, self.config.cols)

    # ---------- Actions ----------
    def move(self, direction: int) -> None:
        if not isinstance(self.piece, Piece):
            return
        if direction < 0 and self.piece.column <= 0:
            return
        if direction > 0 and self.piece.column >= self.config.cols - 2:
            return
        self.piece.move(direction)

    def rotate(self, direction: int) -> None:
        if isinstance(self.piece, Piece):
            self.piece.rotate(direction)

    def start_drop(self) -> None:
        if isinstance(self.piece, Piece):
            self.piece = DroppedPiece.from_piece(self.piece)

    def apply_action(self, action: Action) -> None:
        if isinstance(action, Rotate):
            self.rotate(action.direction)
        elif isinstance(action, Move):
            self.move(action.direction)
        elif isinstance(action, StartDrop):
            self.start_drop()

    def finish_drop(self) -> None:
        """Commit the dropped piece to the grid and bring in the next piece."""
        if not isinstance(self.piece, DroppedPiece):
            return
        dropped = self.piece
        left, right = dropped.column_colors()
        self.grid.place(dropped.column, left)
        self.grid.place(dropped.column + 1, right)
        self.grid.trim()
        self.grid.update_matches()

        self.piece = self.queue.popleft()
        self.queue.append(self._random_piece())
        self.handling = apply_drop_completion(self.handling, self.rules)
        logger.debug("committed piece at column %d, next config %d", dropped.column, self.piece.config)

    # ---------- Simulation ----------
    def _fall(self) -> bool:
        if not isinstance(self.piece, DroppedPiece):
            return False
        column = self.piece.column
        landed = self.piece.advance(
            self.config.fall_speed,
            self.grid.column_height(column),
            self.grid.column_height(column + 1),
            self.config.rows,
        )
        if landed:
            self.finish_drop()
        return landed

    def _advance_timeline(self) -> int:
        self.time_ms += self.config.tick_ms
        current = self.timeline_position
        cleared = 0
        for start, end in swept_segments(self.previous_timeline_position, current, self.config.cols):
            self.grid.sweep(start, end)
            cleared += self.grid.clear_swept(end)
        self.previous_timeline_position = current
        if cleared:
            logger.debug("timeline %.2f cleared %d cells", current, cleared)
        return cleared

    def tick(self, keys_held: AbstractSet[str] = frozenset()) -> TickResult:
        held = frozenset(keys_held)
        just_pressed = held - self.previous_keys
        result = apply_handling(self.handling, held, just_pressed, self.rules)
        self.handling = result.state
        for action in result.actions:
            self.apply_action(action)
        self.previous_keys = held

        committed = self._fall()
        cleared = self._advance_timeline()
        self.cells_cleared_total += cleared
        self.tick_count += 1
        return TickResult(actions=result.actions, committed=committed, cleared=cleared)

    # ---------- Snapshots ----------
    def grid_array(self) -> np.ndarray:
        return self.grid.to_array()

    def match_array(self) -> np.ndarray:
        return self.grid.match_array()

    def encoded_grid(self) -> np.ndarray:
        """Grid as palette indices: 0 empty, 1 first colour, 2 second colour."""
        colors = self.grid.to_array()
        palette = self.config.palette
        encoded = np.zeros(colors.shape, dtype=np.int8)
        encoded[colors == palette.color1] = 1
        encoded[colors == palette.color2] = 2
        return encoded

    def piece_state(self) -> Dict[str, Any]:
        piece = self.piece
        if isinstance(piece, Piece):
            return {
                "kind": "piece",
                "column": piece.column,
                "row": piece.row,
                "rotation": piece.rotation,
                "config": piece.config,
                "cells": piece.cells(),
            }
        if isinstance(piece, DroppedPiece):
            left, right = piece.column_colors()
            return {
                "kind": "dropped",
                "column": piece.column,
                "rows": (piece.left_row, piece.right_row),
                "colors": (left, right),
                "landed": (piece.left_landed, piece.right_landed),
            }
        return {"kind": "none"}

    def get_state(self) -> Dict[str, Any]:
        return {
            "grid": [list(column) for column in self.grid.columns],
            "matched": [list(column) for column in self.grid.matched],
            "piece": self.piece_state(),
            "timeline": self.previous_timeline_position,
            "queue": [p.config for p in self.queue],
            "handling": self.handling,
            "tick": self.tick_count,
            "cells_cleared_total": self.cells_cleared_total,
        }
