"""Headless (no-GUI) simulation runner."""

from __future__ import annotations

import logging
import random
import time as _time

from .constants import FRAME_MS, RECOMPUTE_INTERVAL
from .controller import SimulationController
from .enums import Algorithm
from .map_builder import verify_grid
from .models import Point
from .spawner import random_free_road_cell

logger = logging.getLogger(__name__)


def pick_endpoints(
    controller: SimulationController,
    rng: random.Random,
    attempts: int = 20,
) -> tuple[Point, Point]:
    """Choose two distinct free road cells and set them as start and end."""
    for _ in range(attempts):
        start = random_free_road_cell(controller.grid, controller.cars, rng)
        end = random_free_road_cell(controller.grid, controller.cars, rng)
        if start is None or end is None:
            break
        if start != end:
            controller.set_start_point(start)
            controller.set_end_point(end)
            return start, end
    raise ValueError("Could not find two free road cells for start and end")


def run_headless(
    algorithm: Algorithm | str = Algorithm.ASTAR,
    frames: int = 600,
    frame_ms: float = FRAME_MS,
    seed: int | None = None,
    recompute_interval: float = RECOMPUTE_INTERVAL,
    search_steps_per_frame: int | None = None,
) -> dict:
    """Run the simulation without rendering for a fixed number of frames.

    Returns a dict of search metrics collected at every completed search.
    """
    wall_start = _time.monotonic()
    rng = random.Random(seed)
    controller = SimulationController(
        algorithm=algorithm,
        recompute_interval=recompute_interval,
        search_steps_per_frame=search_steps_per_frame,
        rng=rng,
    )
    verify_grid(controller.grid)
    start, end = pick_endpoints(controller, rng)
    controller.start()

    explored: list[int] = []
    lengths: list[int] = []
    times: list[float] = []
    no_route = 0
    seen = 0

    for _ in range(frames):
        controller.update(frame_ms)
        stats = controller.stats
        if stats.recalculations != seen:
            seen = stats.recalculations
            explored.append(stats.nodes_explored)
            times.append(stats.execution_time)
            if stats.path_length:
                lengths.append(stats.path_length)
            else:
                no_route += 1

    searches = len(explored)
    stuck = sum(1 for car in controller.cars if car.stuck_time > 0)
    return {
        "algorithm": controller.algorithm.value,
        "seed": seed,
        "num_cars": controller.car_count,
        "start": tuple(start),
        "end": tuple(end),
        "frames": frames,
        "recalculations": searches,
        "no_route": no_route,
        "avg_nodes_explored": sum(explored) / searches if searches else 0.0,
        "avg_path_length": sum(lengths) / len(lengths) if lengths else 0.0,
        "avg_execution_time": sum(times) / searches if searches else 0.0,
        "cars_held": stuck,
        "wall_clock_seconds": _time.monotonic() - wall_start,
    }
