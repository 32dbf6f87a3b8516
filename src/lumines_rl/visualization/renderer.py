from __future__ import annotations

from typing import Any, Dict, List, Tuple

import pygame

from lumines_rl.game import LuminesGame
from lumines_rl.game.bitboard import cell_bits

BACKGROUND = (10, 10, 14)
BOARD = (30, 30, 36)
GRID_LINE = (70, 70, 80)
TIMELINE = (255, 255, 255)
MATCH_OUTLINE = (250, 250, 250)


def _rgb(value: int) -> Tuple[int, int, int]:
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF


def _blend(color: Tuple[int, int, int], amount: float) -> Tuple[int, int, int]:
    amount = max(0.0, min(1.0, amount))
    return tuple(int(c + (255 - c) * amount) for c in color)  # type: ignore[return-value]


class Renderer:
    """Draws a :class:`LuminesGame` snapshot. Reads state only."""

    def __init__(self, cell_size: int = 40, margin: int = 20, preview: int = 3) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.preview = preview

    def window_size(self, game: LuminesGame) -> Tuple[int, int]:
        cols, rows = game.config.cols, game.config.rows
        width = self.margin * 3 + 2 * self.cell_size + cols * self.cell_size
        # two spare rows above the board for the spawning piece
        height = self.margin * 2 + (rows + 2) * self.cell_size
        return width, height

    def _board_origin(self) -> Tuple[int, int]:
        return self.margin * 2 + 2 * self.cell_size, self.margin + 2 * self.cell_size

    def _cell(self, screen: pygame.Surface, x: float, y: float, color: Tuple[int, int, int]) -> None:
        rect = pygame.Rect(int(x) + 2, int(y) + 2, self.cell_size - 4, self.cell_size - 4)
        pygame.draw.rect(screen, color, rect)

    def _draw_board(self, screen: pygame.Surface, state: Dict[str, Any], rows: int, cols: int) -> None:
        bx, by = self._board_origin()
        size = self.cell_size
        pygame.draw.rect(screen, BOARD, pygame.Rect(bx, by, cols * size, rows * size))
        for c in range(cols + 1):
            pygame.draw.line(screen, GRID_LINE, (bx + c * size, by), (bx + c * size, by + rows * size))
        for r in range(rows + 1):
            pygame.draw.line(screen, GRID_LINE, (bx, by + r * size), (bx + cols * size, by + r * size))

        grid: List[List[int]] = state["grid"]
        matched = state["matched"]
        for c, column in enumerate(grid):
            for r, color in enumerate(column):
                x = bx + c * size
                y = by + (rows - 1 - r) * size
                progress = matched[c][r] if r < len(matched[c]) else None
                if progress is None:
                    self._cell(screen, x, y, _rgb(color))
                else:
                    self._cell(screen, x, y, _blend(_rgb(color), 0.3 + 0.5 * progress))
                    pygame.draw.rect(screen, MATCH_OUTLINE, pygame.Rect(x, y, size, size), 2)

    def _draw_piece(self, screen: pygame.Surface, piece: Dict[str, Any]) -> None:
        bx, by = self._board_origin()
        size = self.cell_size
        if piece["kind"] == "piece":
            for dy, row in enumerate(piece["cells"]):
                for dx, color in enumerate(row):
                    x = bx + (piece["column"] + dx) * size
                    y = by + (piece["row"] + dy) * size
                    self._cell(screen, x, y, _rgb(color))
        elif piece["kind"] == "dropped":
            for offset, (row, colors) in enumerate(zip(piece["rows"], piece["colors"])):
                x = bx + (piece["column"] + offset) * size
                bottom, top = colors
                self._cell(screen, x, by + row * size, _rgb(top))
                self._cell(screen, x, by + (row + 1) * size, _rgb(bottom))

    def _draw_queue(self, screen: pygame.Surface, game: LuminesGame) -> None:
        size = self.cell_size
        x0 = self.margin
        y0 = self.margin + 2 * size
        for idx, piece in enumerate(list(game.queue)[: self.preview]):
            for dy, row in enumerate(cell_bits(piece.config)):
                for dx, bit in enumerate(row):
                    y = y0 + idx * (2 * size + 10) + dy * size
                    self._cell(screen, x0 + dx * size, y, _rgb(piece.palette.color(bit)))

    def draw(self, screen: pygame.Surface, game: LuminesGame) -> None:
        state = game.get_state()
        rows, cols = game.config.rows, game.config.cols
        screen.fill(BACKGROUND)
        self._draw_board(screen, state, rows, cols)
        self._draw_piece(screen, state["piece"])
        self._draw_queue(screen, game)

        bx, by = self._board_origin()
        x = bx + state["timeline"] * self.cell_size
        pygame.draw.line(screen, TIMELINE, (x, by), (x, by + rows * self.cell_size), 4)
        pygame.display.flip()
