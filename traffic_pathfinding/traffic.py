"""Per-tick car movement with collision holding and stuck escalation."""

from __future__ import annotations

import logging
import math
import random
from typing import Sequence

from .constants import COLLISION_DISTANCE, STUCK_LIMIT, TURN_PROBABILITY
from .enums import Direction
from .models import Car, Grid

logger = logging.getLogger(__name__)


def _random_direction(rng: random.Random) -> Direction:
    return Direction(rng.randrange(4))


def collides(car: Car, x: float, y: float, others: Sequence[Car]) -> bool:
    """``True`` if another car is closer than ``COLLISION_DISTANCE`` on both axes."""
    for other in others:
        if (
            other.car_id != car.car_id
            and abs(other.x - x) < COLLISION_DISTANCE
            and abs(other.y - y) < COLLISION_DISTANCE
        ):
            return True
    return False


def advance_car(
    car: Car,
    previous: Sequence[Car],
    grid: Grid,
    rng: random.Random,
) -> Car:
    """Return *car*'s state after one tick. *previous* is the pre-tick car set."""
    nxt = car.copy()
    dx, dy = car.direction.delta
    new_x = car.x + dx * car.speed
    new_y = car.y + dy * car.speed
    cell_x, cell_y = math.floor(new_x), math.floor(new_y)

    # --- wall or edge: turn, stay put ---
    if not grid.in_bounds(cell_x, cell_y) or grid.is_wall(cell_x, cell_y):
        nxt.direction = _random_direction(rng)
        nxt.stuck_time = 0
        return nxt

    # --- another car in the way: hold, escalate if stuck too long ---
    if collides(car, new_x, new_y, previous):
        if car.stuck_time > STUCK_LIMIT:
            nxt.direction = Direction((car.direction + 1 + rng.randrange(2)) % 4)
            nxt.stuck_time = 0
            logger.debug("Car %d stuck, turning %s -> %s", car.car_id, car.direction.name, nxt.direction.name)
        else:
            nxt.stuck_time = car.stuck_time + 1
        return nxt

    # --- clear to advance ---
    if rng.random() < TURN_PROBABILITY:
        nxt.direction = _random_direction(rng)
    nxt.x = new_x
    nxt.y = new_y
    nxt.stuck_time = 0
    return nxt


def tick_agents(
    grid: Grid,
    cars: Sequence[Car],
    rng: random.Random | None = None,
) -> list[Car]:
    """Advance every car one tick and return the new car set.

    All collision checks read the pre-tick positions, so the update is
    simultaneous and independent of car order. *cars* is not modified.
    """
    rng = rng or random.Random()
    return [advance_car(car, cars, grid, rng) for car in cars]
