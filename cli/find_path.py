#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
find_path.py
------------
Route one pair of cells with the Lee wavefront and print the result.

Grid source (one of):
- --grid FILE        text / .npy / .npz grid (see envs.grid_io)
- --size HxW         random grid from envs.generator (with --density, --seed)

Example:
    python -m cli.find_path --size 20x30 --density 0.25 --seed 3 \
        --start 0,0 --goal 19,29 --plot results/route.png

Exit status: 0 path found, 1 no path, 2 endpoint out of range.
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional, Tuple

import numpy as np

from envs.generator import generate_environment
from envs.grid_io import format_grid, load_grid, parse_cell
from planners.errors import LeeError, OutOfRangeError
from planners.grid_view import as_grid_view
from planners.lee import find_path
from planners.wavefront import expand

log = logging.getLogger(__name__)

EXIT_FOUND = 0
EXIT_NO_PATH = 1
EXIT_OUT_OF_RANGE = 2


def _parse_size(s: str) -> Tuple[int, int]:
    token = s.strip().lower()
    if "x" not in token:
        raise ValueError(f"Bad size '{s}', expected like 30x30")
    h, w = token.split("x")
    return int(h), int(w)


def _parse_density(s: str) -> float:
    s = s.strip()
    if s.endswith("%"):
        return float(s[:-1]) / 100.0
    return float(s)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Lee wavefront shortest path on a 4-connected grid.")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--grid", type=str, help="Grid file (.txt, .npy, .npz)")
    src.add_argument("--size", type=str, help="Generate a random grid HxW (e.g., 20x20)")
    ap.add_argument("--density", type=str, default="0.25", help="Obstacle density for --size (0–1 or %%)")
    ap.add_argument("--seed", type=int, default=0, help="RNG seed for --size")
    ap.add_argument("--start", type=str, default=None, help="Origin r,c (default 0,0 or the file's start)")
    ap.add_argument("--goal", type=str, default=None, help="Destination r,c (default bottom-right or the file's goal)")
    ap.add_argument("--blank", type=int, default=0, help="Value marking traversable cells")
    ap.add_argument("--travel-order", action="store_true",
                    help="Print the path origin-first instead of destination-first")
    ap.add_argument("--plot", type=str, default=None, help="Save a PNG of grid, wavefront and path")
    ap.add_argument("--log-level", type=str, default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return ap


def _load_endpoints(path: str) -> Tuple[Optional[Tuple[int, int]], Optional[Tuple[int, int]]]:
    if not path.lower().endswith(".npz"):
        return None, None
    with np.load(path) as data:
        start = tuple(int(v) for v in data["start"]) if "start" in data else None
        goal = tuple(int(v) for v in data["goal"]) if "goal" in data else None
    return start, goal


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        start = parse_cell(args.start) if args.start else None
        goal = parse_cell(args.goal) if args.goal else None
    except ValueError as e:
        ap.error(str(e))

    if args.grid:
        try:
            grid = load_grid(args.grid, blank=args.blank, obstacle=args.blank + 1)
        except (OSError, ValueError) as e:
            ap.error(f"cannot load grid: {e}")
        file_start, file_goal = _load_endpoints(args.grid)
        start = start or file_start or (0, 0)
        goal = goal or file_goal or (grid.shape[0] - 1, grid.shape[1] - 1)
    else:
        try:
            H, W = _parse_size(args.size)
            density = _parse_density(args.density)
        except ValueError as e:
            ap.error(str(e))
        start = start or (0, 0)
        goal = goal or (H - 1, W - 1)
        try:
            env = generate_environment(H, W, density=density, start=start, goal=goal,
                                       blank=args.blank, obstacle=args.blank + 1,
                                       rng=np.random.default_rng(args.seed))
        except ValueError as e:
            ap.error(str(e))
        grid = env.grid
        log.info("generated %dx%d grid, density=%.2f seed=%d", H, W, density, args.seed)

    try:
        path = find_path(grid, start, goal, args.blank)
    except OutOfRangeError as e:
        log.error("%s", e)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_OUT_OF_RANGE
    except LeeError:
        log.exception("routing failed")
        raise

    shown = list(reversed(path)) if (path and args.travel_order) else path
    print(format_grid(grid, args.blank, path=path, start=start, goal=goal))
    if path is None:
        print(f"no path {start} -> {goal}")
    else:
        print(f"hops: {len(path) - 1}")
        print("path: " + " ".join(f"{r},{c}" for r, c in shown))

    if args.plot:
        from envs.render import save_render  # lazy: matplotlib
        state = expand(as_grid_view(grid, args.blank), start, goal)
        distances = state.distance_map() if state is not None else None
        title = f"lee: {'success' if path else 'fail'}"
        out = save_render(args.plot, grid, args.blank, path=path, start=start, goal=goal,
                          distances=distances, title=title)
        print(f"Saved: {out}")

    return EXIT_FOUND if path is not None else EXIT_NO_PATH


if __name__ == "__main__":
    sys.exit(main())
