"""Simulation controller: owns the grid, cars, points, path and statistics."""

from __future__ import annotations

import logging
import random
import time
from typing import Callable

from .constants import GRID_ROWS, GRID_COLS, CAR_COUNT_RANGE, RECOMPUTE_INTERVAL
from .enums import Algorithm, SimState
from .errors import ConfigurationError
from .map_builder import build_grid
from .models import Car, Grid, PathRequest, PathResult, Point, Stats
from .pathfinding import SearchGenerator, Snapshot, build_snapshot, iter_search
from .spawner import occupied_cells, spawn_cars
from .traffic import tick_agents

logger = logging.getLogger(__name__)


class _InFlightSearch:
    """A suspended search tagged with the generation that started it."""

    def __init__(
        self,
        request: PathRequest,
        generation: int,
        steps: SearchGenerator,
        started: float,
    ) -> None:
        self.request: PathRequest = request
        self.generation: int = generation
        self.steps: SearchGenerator = steps
        self.started: float = started


class SimulationController:
    """Frame-driven owner of one simulation run.

    Call :meth:`update` once per frame with the elapsed time in ms. While
    running, every frame moves the cars and every ``recompute_interval`` ms a
    new search is started if both points are set and none is in flight. An
    in-flight search advances ``search_steps_per_frame`` cells per frame
    (``None`` runs it to completion at once).
    """

    def __init__(
        self,
        rows: int = GRID_ROWS,
        cols: int = GRID_COLS,
        count_range: tuple[int, int] = CAR_COUNT_RANGE,
        algorithm: Algorithm | str = Algorithm.ASTAR,
        recompute_interval: float = RECOMPUTE_INTERVAL,
        search_steps_per_frame: int | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        if recompute_interval <= 0:
            raise ConfigurationError(f"recompute_interval must be positive, got {recompute_interval}")
        if search_steps_per_frame is not None and search_steps_per_frame <= 0:
            raise ConfigurationError(
                f"search_steps_per_frame must be positive or None, got {search_steps_per_frame}"
            )
        self.rows: int = rows
        self.cols: int = cols
        self.count_range: tuple[int, int] = count_range
        self.recompute_interval: float = recompute_interval
        self.search_steps_per_frame: int | None = search_steps_per_frame
        self.rng: random.Random = rng or random.Random()
        self.clock: Callable[[], float] = clock

        self.state: SimState = SimState.IDLE
        self.algorithm: Algorithm = Algorithm.parse(algorithm)
        self.start_point: Point | None = None
        self.end_point: Point | None = None
        self.current_path: list[Point] = []
        self.visited: set[Point] = set()
        self.stats: Stats = Stats()

        self._generation: int = 0
        self._search: _InFlightSearch | None = None
        self._since_recompute: float = 0.0

        self.grid: Grid = build_grid(rows, cols)
        self.cars: list[Car] = spawn_cars(self.grid, count_range, self.rng)

    # -- Properties ------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self.state is SimState.RUNNING

    @property
    def is_searching(self) -> bool:
        return self._search is not None

    @property
    def has_endpoints(self) -> bool:
        return self.start_point is not None and self.end_point is not None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def car_count(self) -> int:
        return len(self.cars)

    # -- Run state -------------------------------------------------------

    def start(self) -> None:
        if self.state is SimState.IDLE:
            self.state = SimState.RUNNING
            self._since_recompute = 0.0
            logger.debug("Simulation running")

    def pause(self) -> None:
        if self.state is SimState.RUNNING:
            self.state = SimState.IDLE
            logger.debug("Simulation paused")

    def toggle(self) -> None:
        if self.is_running:
            self.pause()
        else:
            self.start()

    def set_algorithm(self, algorithm: Algorithm | str) -> None:
        """Switch algorithms; a search already in flight is abandoned."""
        kind = Algorithm.parse(algorithm)
        if kind is self.algorithm:
            return
        self.algorithm = kind
        self._invalidate()

    def reset(self) -> tuple[Grid, list[Car]]:
        """Stop, clear points/path/stats and build a fresh grid and car set."""
        self.state = SimState.IDLE
        self._invalidate()
        self.start_point = None
        self.end_point = None
        self.current_path = []
        self.visited = set()
        self.stats = Stats()
        self._since_recompute = 0.0
        self.grid = build_grid(self.rows, self.cols)
        self.cars = spawn_cars(self.grid, self.count_range, self.rng)
        logger.info("Reset: %d cars", len(self.cars))
        return self.grid, self.cars

    def get_stats(self) -> Stats:
        return self.stats.copy()

    def summary(self) -> dict:
        """Stats plus the live values shown alongside them."""
        info = self.stats.as_dict()
        info["car_count"] = self.car_count
        info["algorithm"] = self.algorithm.value
        info["running"] = self.is_running
        info["searching"] = self.is_searching
        return info

    # -- Point selection -------------------------------------------------

    def is_selectable(self, point: tuple[int, int]) -> bool:
        """A point is selectable if it is an in-bounds road cell with no car."""
        x, y = point
        if not self.grid.in_bounds(x, y) or self.grid.is_wall(x, y):
            return False
        return Point(x, y) not in occupied_cells(self.cars)

    def set_start_point(self, point: tuple[int, int]) -> bool:
        """Set the start point. Invalid points are ignored."""
        if not self.is_selectable(point):
            return False
        self.start_point = Point(*point)
        self._points_changed()
        return True

    def set_end_point(self, point: tuple[int, int]) -> bool:
        """Set the end point. Invalid points are ignored."""
        if not self.is_selectable(point):
            return False
        self.end_point = Point(*point)
        self._points_changed()
        return True

    def select_point(self, point: tuple[int, int]) -> bool:
        """Three-click cycle: start, end, then a new start that clears the end."""
        if not self.is_selectable(point):
            return False
        if self.start_point is None:
            self.start_point = Point(*point)
        elif self.end_point is None:
            self.end_point = Point(*point)
        else:
            self.start_point = Point(*point)
            self.end_point = None
        self._points_changed()
        return True

    def _points_changed(self) -> None:
        self.current_path = []
        self.visited = set()
        self._invalidate()

    # -- Searching -------------------------------------------------------

    def snapshot(self) -> Snapshot:
        return build_snapshot(self.grid, self.cars)

    def find_path_now(self) -> bool:
        """Start a search immediately. Returns ``False`` if one cannot start."""
        if not self.has_endpoints or self.is_searching:
            return False
        self._begin_search()
        self._pump()
        return True

    def _begin_search(self) -> None:
        request = PathRequest(self.start_point, self.end_point, self.algorithm)
        steps = iter_search(self.snapshot(), request.start, request.end, request.algorithm)
        self._search = _InFlightSearch(request, self._generation, steps, self.clock())
        self.visited = set()
        logger.debug(
            "Search #%d started: %s %s -> %s",
            self._generation, request.algorithm.value,
            tuple(request.start), tuple(request.end),
        )

    def _pump(self) -> None:
        search = self._search
        if search is None:
            return
        budget = self.search_steps_per_frame
        steps = 0
        try:
            while budget is None or steps < budget:
                self.visited.add(next(search.steps))
                steps += 1
        except StopIteration as done:
            self._finish(search, done.value)

    def _finish(self, search: _InFlightSearch, result: PathResult) -> None:
        if self._search is search:
            self._search = None
        if search.generation != self._generation:
            logger.debug("Discarding stale search #%d", search.generation)
            return
        elapsed = self.clock() - search.started
        self.current_path = result.path
        self.stats.record(result, elapsed)
        logger.debug(
            "Search #%d done: path=%d explored=%d in %.4fs",
            search.generation, len(result.path), result.explored_count, elapsed,
        )

    def _invalidate(self) -> None:
        """Bump the generation and abandon any search in flight."""
        self._generation += 1
        if self._search is not None:
            self._search.steps.close()
            self._search = None

    # -- Frame tick ------------------------------------------------------

    def update(self, dt: float) -> None:
        """Advance one frame of *dt* milliseconds."""
        if self.is_running:
            self.cars = tick_agents(self.grid, self.cars, self.rng)
            self._since_recompute += dt
            if self._since_recompute >= self.recompute_interval:
                self._since_recompute %= self.recompute_interval
                if self.has_endpoints and self.is_searching:
                    logger.debug("Search in flight, skipping periodic recalculation")
                elif self.has_endpoints:
                    self._begin_search()
        self._pump()
