from enum import Enum, IntEnum

from .errors import ConfigurationError


class Direction(IntEnum):
    EAST  = 0
    SOUTH = 1
    WEST  = 2
    NORTH = 3

    @property
    def delta(self) -> tuple[int, int]:
        """Unit vector ``(dx, dy)``; y grows downwards."""
        return _DELTAS[self]


_DELTAS = {
    Direction.EAST:  (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST:  (-1, 0),
    Direction.NORTH: (0, -1),
}


class Algorithm(Enum):
    BFS      = "bfs"
    DFS      = "dfs"
    ASTAR    = "astar"
    DIJKSTRA = "dijkstra"

    @classmethod
    def parse(cls, value: "Algorithm | str") -> "Algorithm":
        """Accept an ``Algorithm`` or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ConfigurationError(f"Unknown algorithm: {value!r}") from None


class SimState(Enum):
    IDLE    = "idle"
    RUNNING = "running"
