"""Grid builder for the city road layout."""

from __future__ import annotations

import logging
from collections import deque

from .constants import (
    GRID_ROWS, GRID_COLS, MAIN_ROAD_WIDTH,
    MAIN_ROW_START, MAIN_ROW_STEP, MAIN_COL_START, MAIN_COL_STEP,
    LINK_ROW_START, LINK_ROW_STEP, LINK_COL_START, LINK_COL_STEP,
)
from .errors import ConfigurationError
from .models import Grid, Point
from .pathfinding import build_snapshot

logger = logging.getLogger(__name__)


def build_grid(rows: int = GRID_ROWS, cols: int = GRID_COLS) -> Grid:
    """Create the city grid: walls everywhere, then roads carved in bands.

    The layout depends only on ``rows`` and ``cols``.
    """
    if rows <= 0 or cols <= 0:
        raise ConfigurationError(f"Grid dimensions must be positive, got {rows}x{cols}")
    grid = Grid(rows, cols)

    def hline(y: int) -> None:
        if y < rows:
            for x in range(cols):
                grid.cell(x, y).carve()

    def vline(x: int) -> None:
        if x < cols:
            for y in range(rows):
                grid.cell(x, y).carve()

    # 1. Main roads, two cells wide
    for y in range(MAIN_ROW_START, rows, MAIN_ROW_STEP):
        for offset in range(MAIN_ROAD_WIDTH):
            hline(y + offset)
    for x in range(MAIN_COL_START, cols, MAIN_COL_STEP):
        for offset in range(MAIN_ROAD_WIDTH):
            vline(x + offset)

    # 2. Single-cell connectors
    for y in range(LINK_ROW_START, rows, LINK_ROW_STEP):
        hline(y)
    for x in range(LINK_COL_START, cols, LINK_COL_STEP):
        vline(x)

    return grid


def road_cells(grid: Grid) -> list[Point]:
    """Return all road cells in row-major order."""
    return list(grid.iter_roads())


def reachable_roads(grid: Grid, origin: Point) -> set[Point]:
    """Flood-fill the static road network from *origin*, ignoring cars."""
    snapshot = build_snapshot(grid)
    start = snapshot.key(*origin)
    seen = {start}
    queue = deque([start])
    while queue:
        for nxt in snapshot.neighbors(queue.popleft()):
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return {snapshot.point(key) for key in seen}


def verify_grid(grid: Grid) -> bool:
    """Log grid stats and check that every road cell is connected."""
    roads = road_cells(grid)
    logger.info("--- Grid verification ---")
    logger.info("Grid:       %dx%d", grid.cols, grid.rows)
    logger.info("Road cells: %d (%.1f%%)", len(roads), 100.0 * len(roads) / (grid.rows * grid.cols))
    if not roads:
        logger.info("  NO ROAD CELLS!")
        return False
    reached = reachable_roads(grid, roads[0])
    connected = len(reached) == len(roads)
    if connected:
        logger.info("  All road cells reachable from %s", tuple(roads[0]))
    else:
        logger.info("  Only %d/%d road cells reachable from %s", len(reached), len(roads), tuple(roads[0]))
    logger.info("--- End verification ---")
    return connected
