from __future__ import annotations

import argparse
import logging
from typing import Dict

import pygame

from falling_blocks.game import Command, GameConfig, Tick, init, snapshot, update
from falling_blocks.game.rng import seed_from_clock
from .renderer import Renderer


KEY_DOWN_TO_COMMAND: Dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_UP: Command.ROTATE,
    pygame.K_DOWN: Command.BOOST_ON,
    pygame.K_SPACE: Command.TOGGLE_PLAY,
    pygame.K_r: Command.RESET,
}

KEY_UP_TO_COMMAND: Dict[int, Command] = {
    pygame.K_DOWN: Command.BOOST_OFF,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None, help="Engine seed (default: clock based)")
    p.add_argument("--cell_size", type=int, default=28)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--verbose", action="store_true", help="Log engine events")
    return p


def run(seed: int | None = None, cell_size: int = 28, fps: int = 60) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        config = GameConfig()
        if seed is None:
            seed = seed_from_clock()
        state = init(seed, config)
        renderer = Renderer(cell_size=cell_size)

        screen = pygame.display.set_mode(renderer.window_size(config.width, config.height))
        pygame.display.set_caption("Falling Blocks")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in KEY_DOWN_TO_COMMAND:
                        state = update(state, KEY_DOWN_TO_COMMAND[event.key], config)
                elif event.type == pygame.KEYUP and event.key in KEY_UP_TO_COMMAND:
                    state = update(state, KEY_UP_TO_COMMAND[event.key], config)

            state = update(state, Tick(float(pygame.time.get_ticks())), config)
            renderer.draw(screen, snapshot(state))
            clock.tick(fps)
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(message)s")
    run(seed=args.seed, cell_size=args.cell_size, fps=args.fps)


if __name__ == "__main__":  # pragma: no cover
    main()
