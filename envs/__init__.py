# -*- coding: utf-8 -*-
"""
Grid environments for the Lee router.
Exposes:
- GridEnvironment, generate_environment (generator.py)
- has_path / reachable_mask / blank_components reachability oracle (generator.py)
- parse_grid / load_grid / save_grid / format_grid (grid_io.py)

Rendering lives in envs.render and is imported on demand (matplotlib).
"""

from __future__ import annotations

from .generator import (
    GridEnvironment,
    generate_environment,
    has_path,
    reachable_mask,
    blank_components,
)
from .grid_io import parse_grid, load_grid, save_grid, format_grid, parse_cell

__all__ = [
    "GridEnvironment",
    "generate_environment",
    "has_path",
    "reachable_mask",
    "blank_components",
    "parse_grid",
    "load_grid",
    "save_grid",
    "format_grid",
    "parse_cell",
]
