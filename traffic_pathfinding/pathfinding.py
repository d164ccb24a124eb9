"""Grid search over a frozen obstacle snapshot: BFS, DFS, Dijkstra and A*.

Every search is a generator. It yields the cell it has just expanded (a
suspension point the caller may use to interleave other work or to stop the
search) and returns a :class:`PathResult` when it finishes::

    search = iter_search(snapshot, start, end, Algorithm.ASTAR)
    result = run_search(search)

Cells are addressed internally by a packed key ``y * cols + x``.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from collections import deque
from typing import Callable, Generator, Iterable

from .enums import Algorithm, Direction
from .models import Car, Grid, PathResult, Point

logger = logging.getLogger(__name__)

SearchGenerator = Generator[Point, None, PathResult]


class Snapshot:
    """The static grid with car occupancy overlaid, frozen at search start."""

    def __init__(
        self,
        rows: int,
        cols: int,
        blocked: bytes,
        occupied: frozenset[Point],
    ) -> None:
        self.rows: int = rows
        self.cols: int = cols
        self.occupied: frozenset[Point] = occupied
        self._blocked: bytes = blocked

    def key(self, x: int, y: int) -> int:
        return y * self.cols + x

    def point(self, key: int) -> Point:
        return Point(key % self.cols, key // self.cols)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def has_car(self, x: int, y: int) -> bool:
        return Point(x, y) in self.occupied

    def is_traversable(self, x: int, y: int) -> bool:
        """``True`` for an in-bounds road cell with no car on it."""
        if not self.in_bounds(x, y):
            return False
        return not self._blocked[self.key(x, y)]

    def neighbors(self, key: int) -> list[int]:
        """Traversable 4-neighbours of *key* in E, S, W, N order."""
        x, y = key % self.cols, key // self.cols
        result: list[int] = []
        for direction in Direction:
            dx, dy = direction.delta
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.cols and 0 <= ny < self.rows:
                nkey = ny * self.cols + nx
                if not self._blocked[nkey]:
                    result.append(nkey)
        return result


def build_snapshot(grid: Grid, cars: Iterable[Car] = ()) -> Snapshot:
    """Overlay the cells holding *cars* onto *grid* as obstacles."""
    blocked = bytearray(grid.rows * grid.cols)
    for y, row in enumerate(grid.cells):
        base = y * grid.cols
        for x, cell in enumerate(row):
            if cell.is_wall:
                blocked[base + x] = 1
    occupied = frozenset(car.cell for car in cars)
    for x, y in occupied:
        if grid.in_bounds(x, y):
            blocked[y * grid.cols + x] = 1
    return Snapshot(grid.rows, grid.cols, bytes(blocked), occupied)


# ============================================================
# FRONTIERS
# ============================================================

class FifoFrontier:
    """Queue: oldest discovery first."""

    def __init__(self) -> None:
        self._items: deque[int] = deque()

    def push(self, key: int, priority: float = 0) -> None:
        self._items.append(key)

    def pop(self) -> int:
        return self._items.popleft()

    def __len__(self) -> int:
        return len(self._items)


class LifoFrontier:
    """Stack: newest discovery first."""

    def __init__(self) -> None:
        self._items: list[int] = []

    def push(self, key: int, priority: float = 0) -> None:
        self._items.append(key)

    def pop(self) -> int:
        return self._items.pop()

    def __len__(self) -> int:
        return len(self._items)


class PriorityFrontier:
    """Binary min-heap; equal priorities pop in insertion order.

    With ``stable_order`` a key pushed again keeps the rank of its first
    insertion, so lowering its priority acts as an in-place update. Among
    equal priorities an updated key therefore pops where it was first
    inserted, not behind keys pushed since. The superseded heap entry is
    left behind and skipped by the caller.
    """

    def __init__(self, stable_order: bool = False) -> None:
        self._heap: list[tuple[float, int, int]] = []
        self._counter = itertools.count()
        self._rank: dict[int, int] = {}
        self._stable_order = stable_order

    def push(self, key: int, priority: float = 0) -> None:
        if self._stable_order:
            order = self._rank.get(key)
            if order is None:
                order = self._rank[key] = next(self._counter)
        else:
            order = next(self._counter)
        heapq.heappush(self._heap, (priority, order, key))

    def pop(self) -> int:
        return heapq.heappop(self._heap)[2]

    def __len__(self) -> int:
        return len(self._heap)


# ============================================================
# SEARCH LOOPS
# ============================================================

def _reconstruct(snapshot: Snapshot, parent: dict[int, int], end_key: int) -> list[Point]:
    """Walk parent links back from *end_key* and return the path start-first."""
    path = [snapshot.point(end_key)]
    current = end_key
    while current in parent:
        current = parent[current]
        path.append(snapshot.point(current))
    path.reverse()
    return path


def discovery_search(
    snapshot: Snapshot,
    start: Point,
    end: Point,
    frontier: FifoFrontier | LifoFrontier,
) -> SearchGenerator:
    """Unweighted traversal; a cell is marked visited when it is enqueued.

    The frontier discipline decides the algorithm: FIFO gives BFS, LIFO gives DFS.
    """
    start_key = snapshot.key(*start)
    end_key = snapshot.key(*end)
    visited = bytearray(snapshot.rows * snapshot.cols)
    visited[start_key] = 1
    parent: dict[int, int] = {}
    explored = 0

    frontier.push(start_key)
    while frontier:
        current = frontier.pop()
        explored += 1
        yield snapshot.point(current)

        if current == end_key:
            return PathResult(_reconstruct(snapshot, parent, end_key), explored)

        for nxt in snapshot.neighbors(current):
            if not visited[nxt]:
                visited[nxt] = 1
                parent[nxt] = current
                frontier.push(nxt)

    return PathResult([], explored)


def best_first_search(
    snapshot: Snapshot,
    start: Point,
    end: Point,
    frontier: PriorityFrontier,
    heuristic: Callable[[int], int],
) -> SearchGenerator:
    """Unit-cost best-first search ordered by ``g + heuristic``.

    Nodes are finalised when popped; already finalised nodes are skipped.
    A zero heuristic gives Dijkstra, Manhattan distance gives A*.
    """
    size = snapshot.rows * snapshot.cols
    unreached = size  # longer than any path on this grid
    start_key = snapshot.key(*start)
    end_key = snapshot.key(*end)
    g_score = [unreached] * size
    g_score[start_key] = 0
    finalized = bytearray(size)
    parent: dict[int, int] = {}
    explored = 0

    frontier.push(start_key, heuristic(start_key))
    while frontier:
        current = frontier.pop()
        if finalized[current]:
            continue
        finalized[current] = 1
        explored += 1
        yield snapshot.point(current)

        if current == end_key:
            return PathResult(_reconstruct(snapshot, parent, end_key), explored)

        tentative_g = g_score[current] + 1
        for nxt in snapshot.neighbors(current):
            if finalized[nxt]:
                continue
            if tentative_g < g_score[nxt]:
                g_score[nxt] = tentative_g
                parent[nxt] = current
                frontier.push(nxt, tentative_g + heuristic(nxt))

    return PathResult([], explored)


def manhattan(snapshot: Snapshot, goal: Point) -> Callable[[int], int]:
    """Manhattan distance to *goal*, admissible on a 4-connected unit grid."""
    gx, gy = goal
    cols = snapshot.cols

    def h(key: int) -> int:
        return abs(key % cols - gx) + abs(key // cols - gy)

    return h


def _no_heuristic(key: int) -> int:
    return 0


def bfs(snapshot: Snapshot, start: Point, end: Point) -> SearchGenerator:
    return discovery_search(snapshot, start, end, FifoFrontier())


def dfs(snapshot: Snapshot, start: Point, end: Point) -> SearchGenerator:
    return discovery_search(snapshot, start, end, LifoFrontier())


def dijkstra(snapshot: Snapshot, start: Point, end: Point) -> SearchGenerator:
    return best_first_search(snapshot, start, end, PriorityFrontier(), _no_heuristic)


def astar(snapshot: Snapshot, start: Point, end: Point) -> SearchGenerator:
    return best_first_search(
        snapshot, start, end,
        PriorityFrontier(stable_order=True),
        manhattan(snapshot, end),
    )


SEARCHES: dict[Algorithm, Callable[[Snapshot, Point, Point], SearchGenerator]] = {
    Algorithm.BFS:      bfs,
    Algorithm.DFS:      dfs,
    Algorithm.DIJKSTRA: dijkstra,
    Algorithm.ASTAR:    astar,
}


# ============================================================
# PUBLIC ENTRY POINTS
# ============================================================

def iter_search(
    snapshot: Snapshot,
    start: tuple[int, int],
    end: tuple[int, int],
    algorithm: Algorithm | str = Algorithm.ASTAR,
) -> SearchGenerator:
    """Return a suspended search from *start* to *end*.

    Raises ``ConfigurationError`` for an unknown algorithm and ``ValueError``
    for points outside the grid.
    """
    kind = Algorithm.parse(algorithm)
    start, end = Point(*start), Point(*end)
    for label, p in (("start", start), ("end", end)):
        if not snapshot.in_bounds(p.x, p.y):
            raise ValueError(f"{label} point {tuple(p)} is outside the {snapshot.cols}x{snapshot.rows} grid")
    return SEARCHES[kind](snapshot, start, end)


def run_search(search: SearchGenerator) -> PathResult:
    """Drive *search* to completion without pausing."""
    while True:
        try:
            next(search)
        except StopIteration as done:
            return done.value


def find_path(
    snapshot: Snapshot,
    start: tuple[int, int],
    end: tuple[int, int],
    algorithm: Algorithm | str = Algorithm.ASTAR,
) -> PathResult:
    """Run one search synchronously. An empty path means no route."""
    return run_search(iter_search(snapshot, start, end, algorithm))


def compare_algorithms(
    snapshot: Snapshot,
    start: tuple[int, int],
    end: tuple[int, int],
    algorithms: Iterable[Algorithm | str] = tuple(Algorithm),
) -> dict[Algorithm, PathResult]:
    """Run several algorithms on the same snapshot."""
    results: dict[Algorithm, PathResult] = {}
    for algorithm in algorithms:
        kind = Algorithm.parse(algorithm)
        results[kind] = find_path(snapshot, start, end, kind)
        logger.debug(
            "%s: path=%d explored=%d",
            kind.value, len(results[kind].path), results[kind].explored_count,
        )
    return results
