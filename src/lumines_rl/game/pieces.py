from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Tuple

from .bitboard import CONFIGURATIONS, cell_bits, rotate_config, split_columns


@dataclass(frozen=True)
class Palette:
    color1: int = 0x35A99A
    color2: int = 0xFF5AAE

    def color(self, bit: int) -> int:
        return self.color2 if bit else self.color1


@dataclass
class Piece:
    """Falling 2x2 piece before it is dropped.

    ``column`` is the left column of the footprint. ``rotation`` is unbounded;
    the effective orientation is ``rotation % 4``.
    """

    column: int
    row: float
    palette: Palette
    config: int
    rotation: int = 0

    def move(self, direction: int) -> None:
        self.column += direction

    def rotate(self, direction: int) -> None:
        self.rotation += direction

    @property
    def orientation(self) -> int:
        return self.rotation % 4

    def rotated_config(self) -> int:
        return rotate_config(self.config, self.rotation)

    def cells(self) -> List[List[int]]:
        """Colours of the rotated piece as ``[row][col]``, top row first."""
        return [[self.palette.color(bit) for bit in row] for row in cell_bits(self.rotated_config())]


@dataclass
class DroppedPiece:
    """A dropped piece split into two independently falling columns."""

    column: int
    palette: Palette
    left_mask: int
    right_mask: int
    left_row: float
    right_row: float
    left_landed: bool = False
    right_landed: bool = False

    @classmethod
    def from_piece(cls, piece: Piece) -> "DroppedPiece":
        left, right = split_columns(piece.rotated_config())
        return cls(
            column=piece.column,
            palette=piece.palette,
            left_mask=left,
            right_mask=right,
            left_row=piece.row,
            right_row=piece.row,
        )

    def _colors(self, mask: int) -> List[int]:
        # bottom first, then top
        return [self.palette.color(mask & 2), self.palette.color(mask & 1)]

    def column_colors(self) -> Tuple[List[int], List[int]]:
        return self._colors(self.left_mask), self._colors(self.right_mask)

    def advance(self, fall_speed: float, left_height: int, right_height: int, rows: int) -> bool:
        """Fall one tick. Returns True once both columns have landed."""
        self.left_row += fall_speed
        self.right_row += fall_speed

        left_floor = rows - left_height - 2
        right_floor = rows - right_height - 2
        self.left_landed = self.left_row >= left_floor
        if self.left_landed:
            self.left_row = left_floor
        self.right_landed = self.right_row >= right_floor
        if self.right_landed:
            self.right_row = right_floor
        return self.left_landed and self.right_landed


def random_piece(rng: random.Random, column: int, row: float, palette: Palette) -> Piece:
    return Piece(column=column, row=row, palette=palette, config=rng.randrange(CONFIGURATIONS))
