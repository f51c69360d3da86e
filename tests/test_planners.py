#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from collections import deque

import numpy as np
import pytest

from envs.generator import generate_environment, has_path
from planners import PLANNERS, LeePlanner, get_planner
from planners.backtrace import is_four_adjacent
from planners.errors import OutOfRangeError, SearchCancelled
from planners.grid_view import GridView
from planners.lee import find_path
from planners.wavefront import expand


def _bfs_hops(grid, start, goal, blank=0):
    """Independent hop-count reference (deque BFS)."""
    H, W = grid.shape
    dist = {start: 0}
    dq = deque([start])
    while dq:
        r, c = dq.popleft()
        if (r, c) == goal:
            return dist[(r, c)]
        for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            nr, nc = r + dr, c + dc
            if 0 <= nr < H and 0 <= nc < W and grid[nr, nc] == blank and (nr, nc) not in dist:
                dist[(nr, nc)] = dist[(r, c)] + 1
                dq.append((nr, nc))
    return None


def _wall_with_gap():
    grid = np.zeros((5, 5), dtype=int)
    grid[0:4, 2] = 1
    return grid


def test_wall_with_gap_routes_through_bottom_row():
    path = find_path(_wall_with_gap(), (0, 0), (4, 4), 0)
    assert path is not None
    assert len(path) == 9
    assert (4, 2) in path
    assert path[0] == (4, 4) and path[-1] == (0, 0)


def test_consecutive_waypoints_are_four_adjacent():
    path = find_path(_wall_with_gap(), (0, 0), (4, 4), 0)
    for a, b in zip(path[:-1], path[1:]):
        assert is_four_adjacent(a, b)


def test_path_length_matches_recorded_distance():
    grid = _wall_with_gap()
    state = expand(GridView(grid, 0), (0, 0), (4, 4))
    _, _, dist = state.record[state.hit_index]
    path = find_path(grid, (0, 0), (4, 4), 0)
    assert len(path) == dist + 1


def test_open_grid_length_is_manhattan_plus_one():
    grid = np.zeros((6, 7), dtype=int)
    for r in range(6):
        for c in range(7):
            path = find_path(grid, (0, 0), (r, c), 0)
            assert len(path) == r + c + 1


def test_tie_break_is_deterministic():
    # east is probed before south, and the backtrace scans downward from the hit
    path = find_path(np.zeros((2, 2), dtype=int), (0, 0), (1, 1), 0)
    assert path == [(1, 1), (1, 0), (0, 0)]


def test_non_blank_endpoint_is_no_path():
    grid = np.zeros((4, 4), dtype=int)
    grid[0, 0] = 1
    assert find_path(grid, (0, 0), (3, 3), 0) is None
    grid[0, 0] = 0
    grid[3, 3] = 7
    assert find_path(grid, (0, 0), (3, 3), 0) is None


def test_out_of_range_is_a_fault_not_no_path():
    grid = np.zeros((5, 5), dtype=int)
    grid[0, 0] = 1  # even a blocked origin does not hide the range error
    with pytest.raises(OutOfRangeError):
        find_path(grid, (0, 0), (5, 0), 0)
    with pytest.raises(OutOfRangeError):
        find_path(grid, (-1, 0), (4, 4), 0)
    with pytest.raises(IndexError):
        find_path(grid, (0, 0), (0, 5), 0)


def test_out_of_range_on_empty_grid():
    with pytest.raises(OutOfRangeError) as ei:
        find_path([], (0, 0), (0, 0), 0)
    assert ei.value.name == "origin"


def test_enclosed_destination_is_no_path():
    grid = np.zeros((5, 5), dtype=int)
    for r, c in ((1, 2), (3, 2), (2, 1), (2, 3)):
        grid[r, c] = 1
    assert find_path(grid, (0, 0), (2, 2), 0) is None


def test_origin_equals_destination_is_single_cell():
    grid = np.zeros((3, 3), dtype=int)
    assert find_path(grid, (1, 1), (1, 1), 0) == [(1, 1)]
    grid[1, 1] = 1
    assert find_path(grid, (1, 1), (1, 1), 0) is None


def test_destination_adjacent_to_origin():
    assert find_path(np.zeros((3, 3), dtype=int), (1, 1), (1, 2), 0) == [(1, 2), (1, 1)]


def test_first_discovered_cell_is_a_backtrace_target():
    # record: (0,0,0), (0,1,1), (0,2,2); the step cell is record index 1
    assert find_path([[0, 0, 0]], (0, 0), (0, 2), 0) == [(0, 2), (0, 1), (0, 0)]


def test_nested_lists_and_custom_markers():
    grid = [list(".#."),
            list(".#."),
            list("...")]
    path = find_path(grid, (0, 0), (0, 2), ".")
    assert path == [(0, 2), (1, 2), (2, 2), (2, 1), (2, 0), (1, 0), (0, 0)]


def test_agrees_with_oracle_on_random_grids():
    for seed in range(25):
        rng = np.random.default_rng(seed)
        env = generate_environment(H=12, W=14, density=0.35, rng=rng)
        path = find_path(env.grid, env.start, env.goal, env.blank)
        reachable = has_path(env.grid, env.start, env.goal, env.blank)
        assert (path is not None) == reachable
        if path is not None:
            assert len(path) - 1 == _bfs_hops(env.grid, env.start, env.goal)
            for a, b in zip(path[:-1], path[1:]):
                assert is_four_adjacent(a, b)
            assert all(env.grid[r, c] == env.blank for r, c in path)


def test_grid_is_not_mutated():
    grid = _wall_with_gap()
    before = grid.copy()
    find_path(grid, (0, 0), (4, 4), 0)
    assert np.array_equal(grid, before)


def test_cancel_hook_stops_between_rounds():
    calls = []

    def cancel():
        calls.append(1)
        return len(calls) > 3

    with pytest.raises(SearchCancelled) as ei:
        find_path(np.zeros((10, 10), dtype=int), (0, 0), (9, 9), 0, cancel=cancel)
    assert ei.value.round_index == 3


def test_cancel_hook_that_never_fires_changes_nothing():
    grid = _wall_with_gap()
    assert find_path(grid, (0, 0), (4, 4), 0, cancel=lambda: False) == find_path(grid, (0, 0), (4, 4), 0)


# ------------------------------ planner API ------------------------------ #

def test_lee_planner_returns_travel_order():
    grid = np.zeros((4, 4), dtype=bool)
    grid[1, 0:3] = True
    res = LeePlanner().plan(grid, (0, 0), (3, 0))
    assert res['success']
    assert res['path'][0] == (0, 0) and res['path'][-1] == (3, 0)
    assert res['hops'] == len(res['path']) - 1 == 9
    assert res['visited'] >= len(res['path'])


def test_lee_planner_failure_and_out_of_range():
    grid = np.zeros((3, 3), dtype=bool)
    grid[:, 1] = True
    planner = LeePlanner()
    assert planner.plan(grid, (0, 0), (0, 2))['success'] is False
    out = planner.plan(grid, (0, 0), (3, 3))
    assert out['success'] is False and out['path'] is None


def test_planner_registry():
    assert PLANNERS["lee"] is LeePlanner
    p = get_planner(" LEE ", blank=0)
    assert isinstance(p, LeePlanner) and p.blank == 0
    with pytest.raises(ValueError):
        get_planner("a_star")
