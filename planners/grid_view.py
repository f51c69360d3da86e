#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
grid_view.py
------------
Read-only view over a caller-owned 2D grid.

Accepted grids:
- 2-D numpy arrays (any dtype; values compared with ``==``)
- rectangular sequences of sequences (``grid[r][c]``)
- matrix-like objects exposing ``rows()``, ``cols()`` and ``m[r][c]``

The view never copies or mutates the grid. Bounds are not checked per
access; callers use ``contains`` once and then index freely.
"""

from __future__ import annotations
from typing import Any, Generic, Protocol, Sequence, Tuple, TypeVar, runtime_checkable

import numpy as np

T = TypeVar("T")


@runtime_checkable
class MatrixLike(Protocol):
    """Collaborator contract for foreign matrix containers."""

    def rows(self) -> int: ...

    def cols(self) -> int: ...

    def __getitem__(self, row: int) -> Sequence[Any]: ...


def _shape_of(grid: Any) -> Tuple[int, int]:
    if isinstance(grid, np.ndarray):
        if grid.ndim != 2:
            raise ValueError(f"grid must be 2-D, got array with ndim={grid.ndim}")
        return int(grid.shape[0]), int(grid.shape[1])
    if isinstance(grid, MatrixLike):
        return int(grid.rows()), int(grid.cols())

    H = len(grid)
    if H == 0:
        return 0, 0
    W = len(grid[0])
    for r in range(1, H):
        if len(grid[r]) != W:
            raise ValueError(f"ragged grid: row {r} has {len(grid[r])} cells, expected {W}")
    return H, W


class GridView(Generic[T]):
    """Borrowed (height, width, value_at) access plus the blank marker."""

    __slots__ = ("_grid", "_H", "_W", "_is_array", "blank")

    def __init__(self, grid: Any, blank: T):
        self._grid = grid
        self._H, self._W = _shape_of(grid)
        self._is_array = isinstance(grid, np.ndarray)
        self.blank = blank

    def height(self) -> int:
        return self._H

    def width(self) -> int:
        return self._W

    @property
    def shape(self) -> Tuple[int, int]:
        return self._H, self._W

    def contains(self, row: int, col: int) -> bool:
        return (0 <= row < self._H) and (0 <= col < self._W)

    def value_at(self, row: int, col: int) -> T:
        if self._is_array:
            return self._grid[row, col]
        return self._grid[row][col]

    def is_blank(self, row: int, col: int) -> bool:
        return bool(self.value_at(row, col) == self.blank)

    def __repr__(self) -> str:
        return f"GridView({self._H}x{self._W}, blank={self.blank!r})"


def as_grid_view(grid: Any, blank: T) -> GridView[T]:
    """Wrap ``grid``; an existing view is re-wrapped only if ``blank`` differs."""
    if isinstance(grid, GridView):
        if grid.blank == blank:
            return grid
        grid = grid._grid
    return GridView(grid, blank)
