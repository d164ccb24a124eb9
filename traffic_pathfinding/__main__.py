"""Interactive pygame entry point.

Run with::

    python -m traffic_pathfinding
    python -m traffic_pathfinding --algorithm bfs --steps-per-frame 40
"""

from __future__ import annotations

import argparse
import logging
import random
import sys

import pygame

from .constants import (
    CELL_SIZE, GRID_COLS, GRID_ROWS, WINDOW_WIDTH, WINDOW_HEIGHT, MAP_WIDTH, FPS,
)
from .controller import SimulationController
from .enums import Algorithm
from .map_builder import verify_grid
from .renderer import build_background, render

logger = logging.getLogger(__name__)

ALGORITHM_KEYS = {
    pygame.K_1: Algorithm.ASTAR,
    pygame.K_2: Algorithm.BFS,
    pygame.K_3: Algorithm.DFS,
    pygame.K_4: Algorithm.DIJKSTRA,
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Live traffic pathfinding visualiser")
    parser.add_argument("--algorithm", choices=[a.value for a in Algorithm], default="astar")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed (default: random)")
    parser.add_argument("--fps", type=int, default=FPS)
    parser.add_argument("--steps-per-frame", type=int, default=None,
                        help="Cells a search expands per frame (default: finish within one frame)")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Launch the interactive traffic pathfinding visualiser."""
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(message)s",
    )

    pygame.init()
    screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
    pygame.display.set_caption("Live Traffic Pathfinding")
    clock = pygame.time.Clock()

    font_sm = pygame.font.SysFont("Arial", 11)
    font_md = pygame.font.SysFont("Arial", 14, bold=True)

    controller = SimulationController(
        algorithm=args.algorithm,
        search_steps_per_frame=args.steps_per_frame,
        rng=random.Random(args.seed),
    )
    verify_grid(controller.grid)
    background = build_background(controller.grid)

    logger.info("Grid:      %dx%d  (%dpx cells)", GRID_COLS, GRID_ROWS, CELL_SIZE)
    logger.info("Window:    %dx%d px", WINDOW_WIDTH, WINDOW_HEIGHT)
    logger.info("Cars:      %d", controller.car_count)
    logger.info("Controls: Click=start/end, Space=run/pause, F/Enter=find path, 1-4=algorithm, R=reset")
    logger.info("Press Q or close window to quit.")

    running = True
    while running:
        dt = clock.tick(args.fps)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_q, pygame.K_ESCAPE):
                    running = False

                elif event.key == pygame.K_SPACE:
                    controller.toggle()
                    logger.info("RUNNING" if controller.is_running else "PAUSED")

                elif event.key in (pygame.K_f, pygame.K_RETURN):
                    if controller.find_path_now():
                        logger.info("Finding path with %s", controller.algorithm.value)
                    elif not controller.has_endpoints:
                        logger.info("Select a start and an end point first")
                    else:
                        logger.info("Search already in progress")

                elif event.key in ALGORITHM_KEYS:
                    controller.set_algorithm(ALGORITHM_KEYS[event.key])
                    logger.info("Algorithm: %s", controller.algorithm.value)

                elif event.key == pygame.K_r:
                    controller.reset()
                    background = build_background(controller.grid)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                mx, my = event.pos
                if mx >= MAP_WIDTH:
                    continue
                clicked = (mx // CELL_SIZE, my // CELL_SIZE)
                if controller.select_point(clicked):
                    logger.info("Start: %s  End: %s", controller.start_point, controller.end_point)
                else:
                    logger.info("Cannot select %s: wall or car", clicked)

        controller.update(dt)

        render(screen, background, font_sm, font_md, controller)
        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
