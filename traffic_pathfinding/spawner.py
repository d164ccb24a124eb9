"""Car placement on a freshly generated grid."""

from __future__ import annotations

import logging
import random
from typing import Iterable

from .constants import CAR_COLORS, CAR_COUNT_RANGE, SPAWN_ATTEMPTS, MIN_SPEED, SPEED_SPREAD
from .enums import Direction
from .errors import ConfigurationError
from .map_builder import road_cells
from .models import Car, Grid, Point

logger = logging.getLogger(__name__)


def spawn_cars(
    grid: Grid,
    count_range: tuple[int, int] = CAR_COUNT_RANGE,
    rng: random.Random | None = None,
) -> list[Car]:
    """Place a random number of cars in *count_range* on distinct road cells.

    A slot whose draws all land on occupied cells is skipped, so the result
    may hold fewer cars than the drawn target.
    """
    low, high = count_range
    if low < 0 or high < low:
        raise ConfigurationError(f"Invalid car count range: {count_range!r}")
    rng = rng or random.Random()

    roads = road_cells(grid)
    if not roads:
        return []

    target = rng.randint(low, high)
    occupied: set[Point] = set()
    cars: list[Car] = []

    for slot in range(target):
        for _ in range(SPAWN_ATTEMPTS):
            pos = roads[rng.randrange(len(roads))]
            if pos not in occupied:
                break
        else:
            continue

        occupied.add(pos)
        cars.append(Car(
            car_id=slot,
            x=float(pos.x),
            y=float(pos.y),
            direction=Direction(rng.randrange(4)),
            speed=MIN_SPEED + rng.random() * SPEED_SPREAD,
            color=CAR_COLORS[slot % len(CAR_COLORS)],
        ))

    if len(cars) < target:
        logger.debug("Spawn shortfall: placed %d of %d cars", len(cars), target)
    logger.info("Spawned %d cars on %d road cells", len(cars), len(roads))
    return cars


def occupied_cells(cars: Iterable[Car]) -> set[Point]:
    """Cells holding at least one car."""
    return {car.cell for car in cars}


def random_free_road_cell(
    grid: Grid,
    cars: Iterable[Car],
    rng: random.Random | None = None,
) -> Point | None:
    """Pick a road cell with no car on it, or ``None`` if none is free."""
    rng = rng or random.Random()
    taken = occupied_cells(cars)
    free = [p for p in grid.iter_roads() if p not in taken]
    if not free:
        return None
    return free[rng.randrange(len(free))]
