"""All pygame rendering functions for the traffic simulation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

import pygame

from .constants import (
    CELL_SIZE, MAP_WIDTH, MAP_HEIGHT, PANEL_WIDTH,
    WALL_COLOR, ROAD_COLOR, GRID_LINE, PATH_COLOR, VISITED_COLOR,
    START_COLOR, END_COLOR, HEADING_COLOR,
    PANEL_BG, PANEL_TEXT, PANEL_HEADER, PANEL_SEPARATOR,
    PANEL_GREEN, PANEL_RED,
)
from .enums import Algorithm

if TYPE_CHECKING:
    from .controller import SimulationController
    from .models import Car, Grid, Point

ALGORITHM_NAMES = {
    Algorithm.ASTAR:    "A* Algorithm",
    Algorithm.BFS:      "BFS",
    Algorithm.DFS:      "DFS",
    Algorithm.DIJKSTRA: "Dijkstra's Algorithm",
}

ALGORITHM_HINTS = {
    Algorithm.ASTAR:    "A* uses heuristics for efficiency",
    Algorithm.BFS:      "BFS explores all options equally",
    Algorithm.DFS:      "DFS explores deeply before backtracking",
    Algorithm.DIJKSTRA: "Dijkstra: shortest path, uniform weights",
}


def build_background(grid: Grid) -> pygame.Surface:
    """Pre-render walls, roads and grid lines; the layout never changes mid-run."""
    surface = pygame.Surface((MAP_WIDTH, MAP_HEIGHT))
    for y, row in enumerate(grid.cells):
        for x, cell in enumerate(row):
            rect = pygame.Rect(x * CELL_SIZE, y * CELL_SIZE, CELL_SIZE, CELL_SIZE)
            pygame.draw.rect(surface, ROAD_COLOR if cell.is_road else WALL_COLOR, rect)
            pygame.draw.rect(surface, GRID_LINE, rect, 1)
    return surface


def draw_cells(surface: pygame.Surface, cells: Iterable[Point], color: tuple[int, int, int]) -> None:
    """Fill each cell, inset by one pixel."""
    for x, y in cells:
        rect = pygame.Rect(x * CELL_SIZE + 1, y * CELL_SIZE + 1, CELL_SIZE - 2, CELL_SIZE - 2)
        pygame.draw.rect(surface, color, rect)


def draw_car(surface: pygame.Surface, car: Car) -> None:
    """Draw a car as a dot with a short white heading line."""
    cx = int(car.x * CELL_SIZE + CELL_SIZE / 2)
    cy = int(car.y * CELL_SIZE + CELL_SIZE / 2)
    pygame.draw.circle(surface, car.color, (cx, cy), max(2, int(CELL_SIZE / 3.5)))
    dx, dy = car.direction.delta
    tip = (cx + int(dx * CELL_SIZE / 5), cy + int(dy * CELL_SIZE / 5))
    pygame.draw.line(surface, HEADING_COLOR, (cx, cy), tip, 1)


def draw_marker(surface: pygame.Surface, point: Point, color: tuple[int, int, int]) -> None:
    cx = point.x * CELL_SIZE + CELL_SIZE // 2
    cy = point.y * CELL_SIZE + CELL_SIZE // 2
    pygame.draw.circle(surface, color, (cx, cy), int(CELL_SIZE / 2.5))


def draw_metrics_panel(
    surface: pygame.Surface,
    font_sm: pygame.font.Font,
    font_md: pygame.font.Font,
    controller: SimulationController,
) -> None:
    """Draw the stats panel on the right side of the window."""
    px = MAP_WIDTH
    pygame.draw.rect(surface, PANEL_BG, pygame.Rect(px, 0, PANEL_WIDTH, MAP_HEIGHT))

    y = 10
    line_h = 16
    section_gap = 8

    def header(text: str) -> None:
        nonlocal y
        pygame.draw.line(surface, PANEL_SEPARATOR, (px + 10, y), (px + PANEL_WIDTH - 10, y))
        y += 4
        surface.blit(font_md.render(text, True, PANEL_HEADER), (px + 10, y))
        y += line_h + 4

    def row(label_text: str, value: str, color: tuple = PANEL_TEXT) -> None:
        nonlocal y
        surface.blit(font_sm.render(f"  {label_text}: {value}", True, color), (px + 8, y))
        y += line_h

    def row_raw(text: str, color: tuple = PANEL_TEXT) -> None:
        nonlocal y
        surface.blit(font_sm.render(f"  {text}", True, color), (px + 8, y))
        y += line_h

    stats = controller.stats

    header("SIMULATION")
    if controller.is_running:
        row("Status", "Running", PANEL_GREEN)
    else:
        row("Status", "PAUSED", PANEL_RED)
    row("Algorithm", ALGORITHM_NAMES[controller.algorithm])
    row("Live cars", str(controller.car_count))
    row("Searching", "yes" if controller.is_searching else "no")
    y += section_gap

    header("PATH")
    row("Start", str(tuple(controller.start_point)) if controller.start_point else "--")
    row("End", str(tuple(controller.end_point)) if controller.end_point else "--")
    if stats.recalculations and not stats.path_length:
        row_raw("No path", PANEL_RED)
    y += section_gap

    header("STATISTICS")
    row("Nodes explored", str(stats.nodes_explored))
    row("Path length", str(stats.path_length))
    row("Execution time", f"{stats.execution_time * 1000:.1f} ms")
    row("Recalculations", str(stats.recalculations))
    y += section_gap

    header("NOTES")
    row_raw(ALGORITHM_HINTS[controller.algorithm])
    row_raw("Click roads: start, end, restart")

    ctrl_txt = font_sm.render(
        "Space:Run F:Find 1-4:Algo R:Reset Q:Quit", True, PANEL_SEPARATOR
    )
    surface.blit(ctrl_txt, (px + 10, MAP_HEIGHT - 20))


def render(
    screen: pygame.Surface,
    background: pygame.Surface,
    font_sm: pygame.font.Font,
    font_md: pygame.font.Font,
    controller: SimulationController,
) -> None:
    """Full frame render: grid → visited → path → cars → markers → panel."""
    screen.blit(background, (0, 0))
    draw_cells(screen, controller.visited, VISITED_COLOR)
    draw_cells(screen, controller.current_path, PATH_COLOR)
    for car in controller.cars:
        draw_car(screen, car)
    if controller.start_point:
        draw_marker(screen, controller.start_point, START_COLOR)
    if controller.end_point:
        draw_marker(screen, controller.end_point, END_COLOR)
    draw_metrics_panel(screen, font_sm, font_md, controller)
