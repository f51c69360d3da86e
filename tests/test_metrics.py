import numpy as np

from eval.metrics import manhattan, path_metrics, validate_path
from planners.lee import find_path


def test_manhattan():
    assert manhattan((0, 0), (3, 4)) == 7
    assert manhattan((5, 1), (2, 1)) == 3


def test_path_metrics_counts_turns_and_runs():
    assert path_metrics([]) == {'hops': 0, 'turns': 0, 'longest_run': 0}
    assert path_metrics([(0, 0), (0, 1), (0, 2)]) == {'hops': 2, 'turns': 0, 'longest_run': 2}
    assert path_metrics([(0, 0), (0, 1), (1, 1), (2, 1), (3, 1)]) == {'hops': 4, 'turns': 1, 'longest_run': 3}


def test_validate_path_accepts_router_output():
    grid = np.zeros((5, 5), dtype=int)
    grid[0:4, 2] = 1
    path = find_path(grid, (0, 0), (4, 4), 0)
    assert validate_path(grid, path, 0) == []
    assert validate_path(grid, list(reversed(path)), 0) == []


def test_validate_path_reports_each_problem():
    grid = np.array([[0, 1],
                     [0, 0]])
    problems = validate_path(grid, [(0, 0), (1, 1), (0, 1), (0, 2)], 0)
    assert any("not 4-adjacent" in p for p in problems)
    assert any("not blank" in p for p in problems)
    assert any("out of bounds" in p for p in problems)
    assert any("visited twice" in p for p in validate_path(grid, [(0, 0), (1, 0), (0, 0)], 0))
