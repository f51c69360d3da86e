#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Lee wavefront router (4-connected, unit cost).

find_path(grid, origin, destination, blank) -> list[(r,c)] destination-first, or None
    raises OutOfRangeError if an endpoint is outside the grid.

LeePlanner(blank).plan(grid, start, goal)
    -> {'success': bool, 'path': list[(r,c)] in travel order or None,
        'hops': int or None, 'visited': int}
"""

from __future__ import annotations
import logging
import operator
from typing import Any, Callable, Dict, List, Optional, Tuple

from .backtrace import reconstruct
from .errors import OutOfRangeError
from .grid_view import as_grid_view
from .wavefront import Cell, expand

log = logging.getLogger(__name__)


def _as_cell(cell: Any) -> Cell:
    r, c = cell
    return operator.index(r), operator.index(c)


def find_path(grid: Any,
              origin: Tuple[int, int],
              destination: Tuple[int, int],
              blank: Any,
              *,
              cancel: Optional[Callable[[], bool]] = None) -> Optional[List[Cell]]:
    """
    Minimum-hop 4-connected path between two blank cells.

    Parameters
    ----------
    grid : np.ndarray | sequence of sequences | GridView | matrix-like
        Cell values; a cell is traversable iff ``value == blank``.
    origin, destination : (row, col)
    blank : value marking traversable cells.
    cancel : optional callable polled once per expansion round.

    Returns
    -------
    list of (row, col) from destination back to origin, or None when either
    endpoint is not blank or the destination is unreachable.
    """
    view = as_grid_view(grid, blank)
    origin = _as_cell(origin)
    destination = _as_cell(destination)

    if not view.contains(*origin):
        raise OutOfRangeError("origin", origin, view.shape)
    if not view.contains(*destination):
        raise OutOfRangeError("destination", destination, view.shape)

    state = expand(view, origin, destination, cancel=cancel)
    if state is None:
        log.debug("endpoint not blank: origin=%s destination=%s", origin, destination)
        return None
    if not state.found:
        log.debug("no path %s -> %s after %d rounds, %d cells visited",
                  origin, destination, state.round, len(state.record))
        return None

    path = reconstruct(state.record, state.hit_index, origin, destination)
    log.debug("path %s -> %s: %d hops, %d cells visited",
              origin, destination, len(path) - 1, len(state.record))
    return path


class LeePlanner:
    """
    Planner-API adapter around find_path.

    Default ``blank=False`` matches boolean occupancy grids
    (True = obstacle, False = free).
    """

    def __init__(self, blank: Any = False, cancel: Optional[Callable[[], bool]] = None):
        self.blank = blank
        self.cancel = cancel

    def plan(self, grid: Any, start: Tuple[int, int], goal: Tuple[int, int]) -> Dict:
        view = as_grid_view(grid, self.blank)
        start = _as_cell(start)
        goal = _as_cell(goal)
        if not (view.contains(*start) and view.contains(*goal)):
            return {'success': False, 'path': None, 'hops': None, 'visited': 0}

        state = expand(view, start, goal, cancel=self.cancel)
        if state is None or not state.found:
            visited = len(state.record) if state is not None else 0
            return {'success': False, 'path': None, 'hops': None, 'visited': visited}

        path = reconstruct(state.record, state.hit_index, start, goal)
        path.reverse()
        return {'success': True, 'path': path, 'hops': len(path) - 1,
                'visited': len(state.record)}
