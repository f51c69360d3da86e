# -*- coding: utf-8 -*-
"""
Lee wavefront routing on 4-connected grids.

find_path(grid, origin, destination, blank) -> list[(r,c)] destination-first or None
planner.plan(grid, start, goal) -> {'success': bool, 'path': list[(r,c)] or None, ...}
"""

from __future__ import annotations
from typing import Any, Dict, Type

from .errors import LeeError, OutOfRangeError, ReconstructionError, SearchCancelled
from .grid_view import GridView, MatrixLike, as_grid_view
from .wavefront import ExpansionState, VisitRecord, WaveFrontExpander, expand, expand_round
from .backtrace import PathReconstructor, is_four_adjacent, reconstruct
from .lee import LeePlanner, find_path

__version__ = "0.1.0"

# Mapping used by factories/CLIs
PLANNERS: Dict[str, Type] = {
    "lee": LeePlanner,
}


def get_planner(name: str, **kwargs) -> Any:
    """Instantiate a planner by name; kwargs go to its constructor."""
    name = name.strip().lower()
    if name not in PLANNERS:
        raise ValueError(f"Unknown planner '{name}'. Available: {sorted(PLANNERS)}")
    return PLANNERS[name](**kwargs)


__all__ = [
    "find_path",
    "LeePlanner",
    "GridView",
    "MatrixLike",
    "as_grid_view",
    "VisitRecord",
    "ExpansionState",
    "WaveFrontExpander",
    "PathReconstructor",
    "expand",
    "expand_round",
    "reconstruct",
    "is_four_adjacent",
    "LeeError",
    "OutOfRangeError",
    "ReconstructionError",
    "SearchCancelled",
    "PLANNERS",
    "get_planner",
]
