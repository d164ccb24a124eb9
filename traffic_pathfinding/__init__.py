"""
Live traffic pathfinding simulation package.

Public API re-exports.
"""

from .enums import Algorithm, Direction, SimState
from .errors import ConfigurationError
from .constants import *  # noqa: F401,F403
from .models import Point, GridCell, Grid, Car, PathRequest, PathResult, Stats
from .map_builder import build_grid, road_cells, reachable_roads, verify_grid
from .spawner import spawn_cars, occupied_cells, random_free_road_cell
from .pathfinding import (
    Snapshot, build_snapshot, iter_search, run_search, find_path, compare_algorithms,
    FifoFrontier, LifoFrontier, PriorityFrontier, discovery_search, best_first_search,
)
from .traffic import tick_agents, advance_car, collides
from .controller import SimulationController
from .headless import run_headless, pick_endpoints

__all__ = [
    "Algorithm", "Direction", "SimState", "ConfigurationError",
    "Point", "GridCell", "Grid", "Car", "PathRequest", "PathResult", "Stats",
    "build_grid", "road_cells", "reachable_roads", "verify_grid",
    "spawn_cars", "occupied_cells", "random_free_road_cell",
    "Snapshot", "build_snapshot", "iter_search", "run_search", "find_path", "compare_algorithms",
    "FifoFrontier", "LifoFrontier", "PriorityFrontier", "discovery_search", "best_first_search",
    "tick_agents", "advance_car", "collides",
    "SimulationController",
    "run_headless", "pick_endpoints",
]
