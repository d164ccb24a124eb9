"""Builders shared by the traffic pathfinding tests. No pygame needed."""

import random

from traffic_pathfinding import Grid


def grid_from_rows(rows):
    """Build a grid from strings: ``.`` is road, anything else is wall."""
    grid = Grid(len(rows), len(rows[0]))
    for y, line in enumerate(rows):
        for x, ch in enumerate(line):
            if ch == ".":
                grid.cell(x, y).carve()
    return grid


class FixedRandom(random.Random):
    """RNG whose draws are pinned, for exact movement tests."""

    def __init__(self, value=0.5, pick=0):
        super().__init__(0)
        self.value = value
        self.pick = pick

    def random(self):
        return self.value

    def randrange(self, n, *args, **kwargs):
        return self.pick % n


class FakeClock:
    """Monotonic clock that advances by *step* on every call."""

    def __init__(self, step=0.5):
        self.now = 0.0
        self.step = step

    def __call__(self):
        self.now += self.step
        return self.now
