# -*- coding: utf-8 -*-
"""
Grid loading and ASCII rendering.

Text format (one row per line, blank lines and '#!' comments ignored):
    character maps:  '.' free, any char in ``obstacle_chars`` blocked
    digit maps:      one digit per cell ("0110")
    number maps:     whitespace/comma separated integers
Binary formats: ``.npy`` (the array) and ``.npz`` (key 'grid').
"""

from __future__ import annotations
import os
from typing import Any, Iterable, List, Optional, Sequence, Tuple

import numpy as np

OBSTACLE_CHARS = "#X@"
FREE_CHARS = ". _"


def _is_numeric_row(line: str) -> bool:
    tokens = line.replace(",", " ").split()
    return bool(tokens) and all(t.lstrip("-").isdigit() for t in tokens)


def parse_grid(text: str,
               blank: Any = 0,
               obstacle: Any = 1,
               obstacle_chars: str = OBSTACLE_CHARS) -> np.ndarray:
    """
    Parse a text grid into an (H, W) array.

    Number maps keep their integer values (``blank``/``obstacle`` unused).
    Character maps become ``blank`` for free chars and ``obstacle`` for
    ``obstacle_chars``; any other character is an error.
    """
    lines = [ln.rstrip("\n\r") for ln in text.splitlines()]
    lines = [ln for ln in lines if ln.strip() and not ln.lstrip().startswith("#!")]
    if not lines:
        raise ValueError("empty grid")

    if all(ln.strip().isdigit() for ln in lines):
        # compact digit map, one cell per character: "0110"
        rows = [[int(ch) for ch in ln.strip()] for ln in lines]
    elif all(_is_numeric_row(ln) for ln in lines):
        rows = [[int(t) for t in ln.replace(",", " ").split()] for ln in lines]
    else:
        rows = None

    if rows is not None:
        W = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != W:
                raise ValueError(f"line {i + 1}: {len(row)} values, expected {W}")
        return np.array(rows, dtype=np.int32)

    W = len(lines[0])
    grid = np.full((len(lines), W), blank, dtype=np.asarray([blank, obstacle]).dtype)
    for i, ln in enumerate(lines):
        if len(ln) != W:
            raise ValueError(f"line {i + 1}: {len(ln)} cells, expected {W}")
        for j, ch in enumerate(ln):
            if ch in obstacle_chars:
                grid[i, j] = obstacle
            elif ch not in FREE_CHARS:
                raise ValueError(f"line {i + 1}, column {j + 1}: unknown cell {ch!r}")
    return grid


def load_grid(path: str, blank: Any = 0, obstacle: Any = 1) -> np.ndarray:
    ext = os.path.splitext(path)[1].lower()
    if ext == ".npy":
        grid = np.load(path)
    elif ext == ".npz":
        with np.load(path) as data:
            if "grid" not in data:
                raise ValueError(f"{path}: no 'grid' array (found {sorted(data.files)})")
            grid = data["grid"]
    else:
        with open(path, "r", encoding="utf-8") as f:
            return parse_grid(f.read(), blank=blank, obstacle=obstacle)
    if grid.ndim != 2:
        raise ValueError(f"{path}: grid must be 2-D, got shape {grid.shape}")
    return grid


def save_grid(path: str, grid: np.ndarray,
              start: Optional[Tuple[int, int]] = None,
              goal: Optional[Tuple[int, int]] = None) -> None:
    """Save as .npz with optional start/goal, like the environment snapshots."""
    extra = {}
    if start is not None:
        extra["start"] = np.asarray(start)
    if goal is not None:
        extra["goal"] = np.asarray(goal)
    np.savez_compressed(path, grid=grid, **extra)


def format_grid(grid: Any,
                blank: Any,
                path: Optional[Iterable[Tuple[int, int]]] = None,
                start: Optional[Tuple[int, int]] = None,
                goal: Optional[Tuple[int, int]] = None) -> str:
    """
    ASCII picture: '.' blank, '#' obstacle, '*' path, 'S'/'G' endpoints.
    """
    arr = np.asarray(grid)
    H, W = arr.shape
    canvas: List[List[str]] = [["." if arr[r, c] == blank else "#" for c in range(W)]
                               for r in range(H)]
    for r, c in (path or ()):
        canvas[r][c] = "*"
    if start is not None:
        canvas[start[0]][start[1]] = "S"
    if goal is not None:
        canvas[goal[0]][goal[1]] = "G"
    return "\n".join("".join(row) for row in canvas)


def parse_cell(s: str) -> Tuple[int, int]:
    """'r,c' -> (r, c)."""
    parts: Sequence[str] = s.replace(" ", "").split(",")
    if len(parts) != 2:
        raise ValueError(f"Bad cell '{s}', expected like 3,4")
    return int(parts[0]), int(parts[1])
