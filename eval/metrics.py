#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
metrics.py
----------
Path checks and summary numbers for 4-connected grid paths.

Assumptions
-----------
- Path: list of (r, c); either order (destination-first or travel order)
- Grid: anything GridView accepts; ``blank`` marks traversable cells

What's inside
-------------
- manhattan() lower bound on hop count
- path_metrics(): hops, turns, straight runs
- validate_path(): reasons a path is not a legal 4-connected walk
"""

from __future__ import annotations
from typing import Any, Dict, List, Sequence, Tuple

from planners.backtrace import is_four_adjacent
from planners.grid_view import as_grid_view

Cell = Tuple[int, int]


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def path_metrics(path: Sequence[Cell]) -> Dict[str, int]:
    """Hops, number of direction changes and longest straight run."""
    if not path:
        return {'hops': 0, 'turns': 0, 'longest_run': 0}
    hops = len(path) - 1
    turns = 0
    longest = run = 0
    prev_step = None
    for (r0, c0), (r1, c1) in zip(path[:-1], path[1:]):
        step = (r1 - r0, c1 - c0)
        if prev_step is not None and step != prev_step:
            turns += 1
            run = 0
        run += 1
        longest = max(longest, run)
        prev_step = step
    return {'hops': hops, 'turns': turns, 'longest_run': longest}


def validate_path(grid: Any, path: Sequence[Cell], blank: Any) -> List[str]:
    """
    Empty list if ``path`` is a legal walk over blank cells, else one message
    per problem found (out of bounds, blocked cell, non-adjacent step, revisit).
    """
    view = as_grid_view(grid, blank)
    problems: List[str] = []
    seen = set()
    for i, (r, c) in enumerate(path):
        if not view.contains(r, c):
            problems.append(f"step {i}: {(r, c)} out of bounds")
            continue
        if not view.is_blank(r, c):
            problems.append(f"step {i}: {(r, c)} is not blank")
        if (r, c) in seen:
            problems.append(f"step {i}: {(r, c)} visited twice")
        seen.add((r, c))
    for i, (a, b) in enumerate(zip(path[:-1], path[1:])):
        if not is_four_adjacent(a, b):
            problems.append(f"step {i}->{i + 1}: {a} and {b} are not 4-adjacent")
    return problems
