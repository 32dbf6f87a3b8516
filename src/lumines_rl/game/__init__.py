"""Game module for Lumines RL.

Exports the simulation core:
- LuminesGame / GameConfig: simulation state and the fixed-rate tick
- GameGrid: column stacks, match detection, timeline sweep and removal
- Piece / DroppedPiece / Palette: the falling 2x2 piece before and after a drop
- HandlingRules and the handling state machine (DAS/ARR)
- FixedLoop: fixed-timestep scheduler
"""

from .bitboard import rotate_config, split_columns
from .core import GameConfig, LuminesGame, TickResult
from .grid import Cluster, GameGrid
from .handling import (
    AutoRepeat,
    Dropping,
    DroppingDasBuffer,
    HandlingResult,
    Idle,
    Key,
    Move,
    Rotate,
    StartDrop,
    Started,
    apply_drop_completion,
    apply_handling,
)
from .loop import FixedLoop
from .pieces import DroppedPiece, Palette, Piece, random_piece
from .rules import HandlingRules
from .timeline import timeline_position

__all__ = [
    "rotate_config",
    "split_columns",
    "GameConfig",
    "LuminesGame",
    "TickResult",
    "Cluster",
    "GameGrid",
    "AutoRepeat",
    "Dropping",
    "DroppingDasBuffer",
    "HandlingResult",
    "Idle",
    "Key",
    "Move",
    "Rotate",
    "StartDrop",
    "Started",
    "apply_drop_completion",
    "apply_handling",
    "FixedLoop",
    "DroppedPiece",
    "Palette",
    "Piece",
    "random_piece",
    "HandlingRules",
    "timeline_position",
]
