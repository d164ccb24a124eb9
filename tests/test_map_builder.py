"""
Tests for the city grid builder.
"""

import pytest

from traffic_pathfinding import (
    ConfigurationError, build_grid, road_cells, reachable_roads, verify_grid,
    build_snapshot, find_path, Algorithm,
)
from helpers import grid_from_rows


def test_grid_dimensions():
    grid = build_grid()
    assert grid.rows == 60
    assert grid.cols == 120
    assert len(grid.cells) == 60
    assert all(len(row) == 120 for row in grid.cells)


def test_grid_is_deterministic():
    assert build_grid().signature() == build_grid().signature()


def test_every_cell_is_road_xor_wall():
    grid = build_grid()
    for row in grid.cells:
        for cell in row:
            assert cell.is_road != cell.is_wall


def test_main_roads_are_two_cells_wide():
    grid = build_grid()
    for x in range(grid.cols):
        assert grid.cell(x, 8).is_road
        assert grid.cell(x, 9).is_road
        assert grid.cell(x, 56).is_road
    for y in range(grid.rows):
        assert grid.cell(8, y).is_road
        assert grid.cell(9, y).is_road
        assert grid.cell(104, y).is_road


def test_connectors_are_single_cells():
    grid = build_grid()
    assert all(grid.cell(x, 4).is_road for x in range(grid.cols))
    assert all(grid.cell(36, y).is_road for y in range(grid.rows))
    assert grid.is_wall(0, 5)
    assert grid.is_wall(0, 3)
    assert grid.is_wall(37, 0)


def test_known_walls():
    grid = build_grid()
    assert grid.is_wall(0, 0)
    assert grid.is_wall(10, 7)
    assert grid.is_wall(119, 59)


def test_road_cell_count():
    # 13 full rows and 18 full columns, minus their crossings
    grid = build_grid()
    assert len(road_cells(grid)) == 13 * 120 + 18 * 60 - 13 * 18


def test_small_grid_clips_bands():
    grid = build_grid(10, 10)
    assert grid.cell(0, 9).is_road
    assert grid.cell(9, 0).is_road
    assert grid.is_wall(0, 0)


def test_invalid_dimensions():
    with pytest.raises(ConfigurationError):
        build_grid(0, 10)


def test_road_network_connected():
    grid = build_grid()
    roads = road_cells(grid)
    assert reachable_roads(grid, roads[0]) == set(roads)
    assert verify_grid(grid)


def test_bfs_visits_every_road_cell():
    grid = build_grid()
    snapshot = build_snapshot(grid)
    # A wall target is never reached, so BFS exhausts the whole network
    result = find_path(snapshot, (10, 8), (0, 0), Algorithm.BFS)
    assert result.path == []
    assert result.explored_count == len(road_cells(grid))


def test_off_grid_cells_are_walls():
    grid = build_grid(10, 10)
    assert grid.cell(9, 0).is_road
    # (-1, 1) must not wrap onto the road at (9, 0)
    assert grid.is_wall(-1, 1)
    assert grid.is_wall(10, 0)
    assert grid.is_wall(0, -1)


def test_reachable_roads_stays_in_pocket():
    grid = grid_from_rows(["..#..", "..#..", "#####"])
    assert reachable_roads(grid, (0, 0)) == {(0, 0), (1, 0), (0, 1), (1, 1)}
    assert reachable_roads(grid, (4, 1)) == {(3, 0), (4, 0), (3, 1), (4, 1)}
