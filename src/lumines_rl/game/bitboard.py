"""4-bit colour masks for 2x2 pieces.

Bit ``i`` addresses the cell at ``(x = i % 2, y = i // 2)`` with ``y = 0`` the
top row, so the bits are top-left, top-right, bottom-left, bottom-right. A
clear bit selects the first palette colour and a set bit the second.

Column masks produced by :func:`split_columns` use bit 0 for the top cell and
bit 1 for the bottom cell.
"""

from __future__ import annotations

from typing import List, Tuple

TOP_LEFT = 0b0001
TOP_RIGHT = 0b0010
BOTTOM_LEFT = 0b0100
BOTTOM_RIGHT = 0b1000

CONFIGURATIONS = 16


def _rotate_cw_once(mask: int) -> int:
    # TL -> TR -> BR -> BL -> TL
    out = 0
    if mask & TOP_LEFT:
        out |= TOP_RIGHT
    if mask & TOP_RIGHT:
        out |= BOTTOM_RIGHT
    if mask & BOTTOM_RIGHT:
        out |= BOTTOM_LEFT
    if mask & BOTTOM_LEFT:
        out |= TOP_LEFT
    return out


def _build_table() -> List[Tuple[int, int, int, int]]:
    table = []
    for mask in range(CONFIGURATIONS):
        turns = [mask]
        for _ in range(3):
            turns.append(_rotate_cw_once(turns[-1]))
        table.append(tuple(turns))
    return table


_ROTATIONS = _build_table()


def _lookup(mask: int, turns: int) -> int:
    assert 0 <= turns < 4, f"rotation step out of range: {turns}"
    return _ROTATIONS[mask & 0xF][turns]


def normalize_turns(turns: int) -> int:
    return turns % 4


def rotate_config(mask: int, turns: int) -> int:
    """Rotate ``mask`` by ``turns`` quarter turns (positive is clockwise)."""
    return _lookup(mask, normalize_turns(turns))


def split_columns(mask: int) -> Tuple[int, int]:
    """Split a mask into ``(left, right)`` column masks (bit 0 top, bit 1 bottom)."""
    left = (1 if mask & TOP_LEFT else 0) | (2 if mask & BOTTOM_LEFT else 0)
    right = (1 if mask & TOP_RIGHT else 0) | (2 if mask & BOTTOM_RIGHT else 0)
    return left, right


def cell_bits(mask: int) -> List[List[int]]:
    """Return the mask as a 2x2 ``[row][col]`` list of 0/1, top row first."""
    return [
        [1 if mask & TOP_LEFT else 0, 1 if mask & TOP_RIGHT else 0],
        [1 if mask & BOTTOM_LEFT else 0, 1 if mask & BOTTOM_RIGHT else 0],
    ]
