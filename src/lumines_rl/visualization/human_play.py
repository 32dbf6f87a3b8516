from __future__ import annotations

import logging
from typing import Dict, Set

import pygame

from lumines_rl.game import FixedLoop, Key, LuminesGame
from .renderer import Renderer


KEY_TO_INPUT: Dict[int, str] = {
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_a: Key.ROTATE_CCW,
    pygame.K_d: Key.ROTATE_CW,
}


def run() -> None:
    logging.basicConfig(level=logging.INFO)
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = LuminesGame()
        renderer = Renderer(cell_size=40)

        screen = pygame.display.set_mode(renderer.window_size(game))
        pygame.display.set_caption("Lumines - Human Play")

        held: Set[str] = set()
        loop = FixedLoop(lambda: game.tick(held), game.config.tick_ms)
        loop.start()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        game.reset()
                        held.clear()
                        loop.reset_start_time()
                    elif event.key in KEY_TO_INPUT:
                        held.add(KEY_TO_INPUT[event.key])
                elif event.type == pygame.KEYUP:
                    held.discard(KEY_TO_INPUT.get(event.key, ""))
                elif event.type == pygame.WINDOWFOCUSLOST:
                    held.clear()

            loop.pump()
            renderer.draw(screen, game)
            clock.tick(60)
        loop.stop()
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
