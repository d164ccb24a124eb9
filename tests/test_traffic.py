"""
Tests for car movement: wall turns, collision holding, stuck escalation
and the simultaneous update.
"""

import math
import random

from traffic_pathfinding import (
    Car, Direction, build_grid, spawn_cars, tick_agents, advance_car,
    COLLISION_DISTANCE,
)
from helpers import grid_from_rows, FixedRandom


# -- Helpers ----------------------------------------------------------

def _car(car_id, x, y, direction=Direction.EAST, speed=0.5, stuck=0):
    car = Car(car_id, x, y, direction, speed)
    car.stuck_time = stuck
    return car


def _by_id(cars):
    return {c.car_id: c for c in cars}


# -- Tests ------------------------------------------------------------

def test_free_car_moves_along_heading():
    grid = grid_from_rows([".........."])
    car = _car(0, 1.0, 0.0, stuck=4)
    moved = advance_car(car, [car], grid, FixedRandom())
    assert moved.x == 1.5
    assert moved.y == 0.0
    assert moved.direction == Direction.EAST
    assert moved.stuck_time == 0


def test_wall_ahead_turns_in_place():
    grid = grid_from_rows([".....#...."])
    car = _car(0, 4.6, 0.0, stuck=7)
    turned = advance_car(car, [car], grid, FixedRandom(pick=2))
    assert (turned.x, turned.y) == (4.6, 0.0)
    assert turned.direction == Direction.WEST
    assert turned.stuck_time == 0


def test_grid_edge_turns_in_place():
    grid = grid_from_rows([".........."])
    car = _car(0, 0.3, 0.0, direction=Direction.WEST)
    turned = advance_car(car, [car], grid, FixedRandom(pick=0))
    assert turned.x == 0.3
    assert turned.direction == Direction.EAST


def test_collision_holds_car():
    grid = grid_from_rows([".........."])
    follower = _car(0, 1.0, 0.0)
    leader = _car(1, 2.0, 0.0, direction=Direction.WEST, speed=0.1)
    held = advance_car(follower, [follower, leader], grid, FixedRandom())
    assert held.x == 1.0
    assert held.stuck_time == 1


def test_stuck_car_waits_until_limit():
    grid = grid_from_rows([".........."])
    car = _car(0, 1.0, 0.0, stuck=20)
    blocker = _car(1, 1.6, 0.0)
    held = advance_car(car, [car, blocker], grid, FixedRandom(pick=1))
    assert held.direction == Direction.EAST
    assert held.stuck_time == 21


def test_stuck_escalation_turns_one_or_two_steps():
    grid = grid_from_rows([".........."])
    blocker = _car(1, 1.6, 0.0)
    for pick, expected in ((0, Direction.SOUTH), (1, Direction.WEST)):
        car = _car(0, 1.0, 0.0, stuck=21)
        turned = advance_car(car, [car, blocker], grid, FixedRandom(pick=pick))
        assert turned.direction == expected
        assert turned.stuck_time == 0
        assert turned.x == 1.0


def test_random_turn_while_moving():
    grid = grid_from_rows([".........."])
    car = _car(0, 1.0, 0.0)
    moved = advance_car(car, [car], grid, FixedRandom(value=0.0, pick=3))
    assert moved.x == 1.5
    assert moved.direction == Direction.NORTH


def test_update_is_simultaneous():
    grid = grid_from_rows([".........."])
    rear = _car(0, 1.0, 0.0, speed=0.5)
    front = _car(1, 1.7, 0.0, speed=0.7)
    forward = _by_id(tick_agents(grid, [rear, front], FixedRandom()))
    backward = _by_id(tick_agents(grid, [front, rear], FixedRandom()))
    # The rear car reacts to where the front car was, not where it went
    assert forward[0].x == backward[0].x == 1.0
    assert forward[0].stuck_time == 1
    assert forward[1].x == backward[1].x
    assert math.isclose(forward[1].x, 2.4)


def test_tick_does_not_mutate_input():
    grid = grid_from_rows([".........."])
    cars = [_car(0, 1.0, 0.0), _car(1, 5.0, 0.0)]
    new = tick_agents(grid, cars, FixedRandom())
    assert cars[0].x == 1.0
    assert cars[1].x == 5.0
    assert new[0] is not cars[0]
    assert [c.car_id for c in new] == [0, 1]


def test_cars_never_enter_walls():
    rng = random.Random(99)
    grid = build_grid()
    cars = spawn_cars(grid, rng=rng)
    for _ in range(300):
        cars = tick_agents(grid, cars, rng)
        for car in cars:
            x, y = car.cell
            assert grid.in_bounds(x, y)
            assert not grid.is_wall(x, y)


def test_moving_cars_keep_clear_of_previous_positions():
    rng = random.Random(5)
    grid = build_grid()
    cars = spawn_cars(grid, rng=rng)
    for _ in range(100):
        new = tick_agents(grid, cars, rng)
        for before, after in zip(cars, new):
            if (after.x, after.y) == (before.x, before.y):
                continue
            for other in cars:
                if other.car_id == after.car_id:
                    continue
                assert not (
                    abs(other.x - after.x) < COLLISION_DISTANCE
                    and abs(other.y - after.y) < COLLISION_DISTANCE
                )
        cars = new
