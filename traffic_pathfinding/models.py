"""Data models: Point, GridCell, Grid, Car, PathRequest, PathResult, Stats."""

from __future__ import annotations

import copy
import math
from typing import Iterator, NamedTuple

from .enums import Algorithm, Direction


class Point(NamedTuple):
    """Integer cell coordinates."""

    x: int
    y: int


class GridCell:
    """One cell of the city grid. Every cell starts as a wall."""

    def __init__(self) -> None:
        self.is_wall: bool = True
        self.is_road: bool = False

    def carve(self) -> None:
        """Turn this cell into road. Carving twice is harmless."""
        self.is_wall = False
        self.is_road = True


class Grid:
    """Fixed-size ``rows x cols`` array of cells, indexed ``cells[y][x]``."""

    def __init__(self, rows: int, cols: int) -> None:
        self.rows: int = rows
        self.cols: int = cols
        self.cells: list[list[GridCell]] = [
            [GridCell() for _ in range(cols)] for _ in range(rows)
        ]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def cell(self, x: int, y: int) -> GridCell:
        return self.cells[y][x]

    def is_wall(self, x: int, y: int) -> bool:
        """Off-grid coordinates count as wall."""
        if not self.in_bounds(x, y):
            return True
        return self.cells[y][x].is_wall

    def iter_roads(self) -> Iterator[Point]:
        """Yield every road cell in row-major order."""
        for y, row in enumerate(self.cells):
            for x, cell in enumerate(row):
                if cell.is_road:
                    yield Point(x, y)

    def signature(self) -> tuple[tuple[bool, ...], ...]:
        """Hashable wall layout, used to compare two generated grids."""
        return tuple(tuple(c.is_wall for c in row) for row in self.cells)


class Car:
    """A car moving along the roads with sub-cell precision."""

    def __init__(
        self,
        car_id: int,
        x: float,
        y: float,
        direction: Direction,
        speed: float,
        color: tuple[int, int, int] = (255, 255, 255),
    ) -> None:
        self.car_id: int = car_id
        self.x: float = x
        self.y: float = y
        self.direction: Direction = direction
        self.speed: float = speed
        self.stuck_time: int = 0
        self.color: tuple[int, int, int] = color

    @property
    def cell(self) -> Point:
        """The cell containing this car's floored coordinates."""
        return Point(math.floor(self.x), math.floor(self.y))

    def copy(self) -> Car:
        return copy.copy(self)

    def __repr__(self) -> str:
        return (
            f"Car({self.car_id}, x={self.x:.2f}, y={self.y:.2f}, "
            f"{self.direction.name}, speed={self.speed:.2f}, stuck={self.stuck_time})"
        )


class PathRequest(NamedTuple):
    start: Point
    end: Point
    algorithm: Algorithm


class PathResult(NamedTuple):
    """Outcome of one search. An empty ``path`` means no route was found."""

    path: list[Point]
    explored_count: int

    @property
    def found(self) -> bool:
        return bool(self.path)


class Stats:
    """Accumulated search statistics shown next to the map."""

    def __init__(self) -> None:
        self.nodes_explored: int = 0
        self.path_length: int = 0
        self.execution_time: float = 0.0
        self.recalculations: int = 0

    def record(self, result: PathResult, execution_time: float) -> None:
        """Replace the latest-search fields and count one more recalculation."""
        self.nodes_explored = result.explored_count
        self.path_length = len(result.path)
        self.execution_time = execution_time
        self.recalculations += 1

    def as_dict(self) -> dict:
        return {
            "nodes_explored": self.nodes_explored,
            "path_length": self.path_length,
            "execution_time": self.execution_time,
            "recalculations": self.recalculations,
        }

    def copy(self) -> Stats:
        return copy.copy(self)
