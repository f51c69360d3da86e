#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
generator.py
------------
Random blank/obstacle grids for exercising the Lee router, plus a
4-connected reachability oracle that does not share code with the router.

Key design goals:
- Marker-valued grids: cells hold ``blank`` or ``obstacle`` (ints by
  default), the same representation the router consumes.
- Controllable outcome: ``ensure_status`` can force a reachable or an
  unreachable goal.
- Efficient geometry: pure NumPy + SciPy ndimage kernels.
- Reproducibility: explicit np.random.Generator.

Dependencies:
    numpy
    scipy.ndimage   (connected-component labeling & binary dilation)

Usage (quick smoke test):
    python3 -m envs.generator
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import numpy as np

try:
    from scipy.ndimage import label as cc_label
    from scipy.ndimage import binary_dilation
except Exception as e:
    raise ImportError(
        "scipy.ndimage is required. Install with: pip install scipy"
    ) from e


# ------------------------------- Data classes ------------------------------- #

@dataclass
class GridEnvironment:
    """Grid of blank/obstacle markers with a start and a goal."""
    grid: np.ndarray            # (H, W) array of markers
    start: Tuple[int, int]
    goal: Tuple[int, int]
    blank: Any
    obstacle: Any
    settings: Dict              # generator settings used (for provenance)
    rng: np.random.Generator

    @property
    def shape(self) -> Tuple[int, int]:
        return self.grid.shape

    @property
    def H(self) -> int:
        return self.grid.shape[0]

    @property
    def W(self) -> int:
        return self.grid.shape[1]

    @property
    def occupancy(self) -> np.ndarray:
        """Bool mask, True where the cell is not blank."""
        return self.grid != self.blank


# ------------------------------ Oracle helpers ------------------------------ #

# von Neumann structuring element for ndimage
CROSS = np.array([[0, 1, 0],
                  [1, 1, 1],
                  [0, 1, 0]], dtype=np.uint8)


def blank_components(grid: np.ndarray, blank: Any = 0) -> Tuple[np.ndarray, int]:
    """4-connected labels of blank cells (0 = not blank)."""
    labels, num = cc_label((grid == blank).astype(np.uint8), structure=CROSS)
    return labels.astype(np.int32), int(num)


def has_path(grid: np.ndarray, start: Tuple[int, int], goal: Tuple[int, int], blank: Any = 0) -> bool:
    """True if start and goal are blank and in the same 4-connected component."""
    labels, _ = blank_components(grid, blank)
    a = labels[start]
    return bool(a != 0 and a == labels[goal])


def reachable_mask(grid: np.ndarray, start: Tuple[int, int], blank: Any = 0) -> np.ndarray:
    """Bool mask of blank cells 4-connected to start (empty if start is blocked)."""
    labels, _ = blank_components(grid, blank)
    a = labels[start]
    if a == 0:
        return np.zeros(grid.shape, dtype=bool)
    return labels == a


def _dilate_bool(img: np.ndarray, iters: int = 1) -> np.ndarray:
    if iters <= 0:
        return img
    structure = np.ones((3, 3), dtype=bool)
    return binary_dilation(img, structure=structure, iterations=int(iters))


# -------------------------- Shape / stamping helpers ------------------------ #

def _stamp_mask(occ: np.ndarray,
                top_left: Tuple[int, int],
                mask: np.ndarray,
                moat: int,
                keep_free: Tuple[Tuple[int, int], ...] = ()) -> bool:
    """
    Stamp ``mask`` (True=occupied) onto ``occ`` at ``top_left`` if it stays
    inside, overlaps nothing, covers no ``keep_free`` cell and (with moat > 0)
    keeps a free ring of ``moat`` cells to existing obstacles.
    """
    H, W = occ.shape
    mr, mc = mask.shape
    r0, c0 = top_left
    r1, c1 = r0 + mr, c0 + mc
    if r0 < 0 or c0 < 0 or r1 > H or c1 > W:
        return False

    for kr, kc in keep_free:
        if r0 <= kr < r1 and c0 <= kc < c1 and mask[kr - r0, kc - c0]:
            return False

    target = occ[r0:r1, c0:c1]
    if (target & mask).any():
        return False

    if moat > 0:
        candidate = np.zeros_like(occ)
        candidate[r0:r1, c0:c1] = mask
        if (_dilate_bool(candidate, moat) & occ).any():
            return False

    target |= mask
    return True


def _random_rectangle_mask(rng: np.random.Generator,
                           min_h: int, max_h: int,
                           min_w: int, max_w: int) -> np.ndarray:
    h = max(1, int(rng.integers(min_h, max_h + 1)))
    w = max(1, int(rng.integers(min_w, max_w + 1)))
    return np.ones((h, w), dtype=bool)


def _random_blob_mask(rng: np.random.Generator, min_cells: int, max_cells: int) -> np.ndarray:
    """4-connected polyomino grown cell by cell; returns its tight bbox mask."""
    n = max(1, int(rng.integers(min_cells, max_cells + 1)))
    side = int(np.ceil(np.sqrt(n))) * 2 + 3
    canvas = np.zeros((side, side), dtype=bool)
    r = c = side // 2
    canvas[r, c] = True
    coords = [(r, c)]
    deltas = [(0, 1), (1, 0), (0, -1), (-1, 0)]

    while len(coords) < n:
        base_r, base_c = coords[int(rng.integers(0, len(coords)))]
        dr, dc = deltas[int(rng.integers(0, 4))]
        nr, nc = base_r + dr, base_c + dc
        if 0 <= nr < side and 0 <= nc < side and not canvas[nr, nc]:
            canvas[nr, nc] = True
            coords.append((nr, nc))

    ys, xs = np.where(canvas)
    return canvas[ys.min():ys.max() + 1, xs.min():xs.max() + 1]


def _carve_corridor(occ: np.ndarray, start: Tuple[int, int], goal: Tuple[int, int],
                    rng: np.random.Generator) -> None:
    """Clear an L-shaped corridor start -> goal (row first or column first)."""
    (sr, sc), (gr, gc) = start, goal
    if rng.random() < 0.5:
        occ[sr, min(sc, gc):max(sc, gc) + 1] = False
        occ[min(sr, gr):max(sr, gr) + 1, gc] = False
    else:
        occ[min(sr, gr):max(sr, gr) + 1, sc] = False
        occ[gr, min(sc, gc):max(sc, gc) + 1] = False


def _enclose(occ: np.ndarray, cell: Tuple[int, int]) -> None:
    """Occupy the 4 neighbours of ``cell``, leaving the cell itself free."""
    H, W = occ.shape
    r, c = cell
    for dr, dc in ((0, 1), (1, 0), (0, -1), (-1, 0)):
        nr, nc = r + dr, c + dc
        if 0 <= nr < H and 0 <= nc < W:
            occ[nr, nc] = True
    occ[r, c] = False


# ------------------------------- Core generator ----------------------------- #

def generate_environment(
    H: int = 32,
    W: int = 32,
    *,
    density: Optional[float] = 0.25,
    n_objects: Optional[int] = None,
    start: Tuple[int, int] = (0, 0),
    goal: Optional[Tuple[int, int]] = None,
    blank: Any = 0,
    obstacle: Any = 1,
    dtype: Any = np.int8,
    moat: int = 0,
    shape_probs: Dict[str, float] = None,
    rect_size: Tuple[Tuple[int, int], Tuple[int, int]] = ((1, 4), (1, 4)),  # (min_h,max_h),(min_w,max_w)
    blob_cells: Tuple[int, int] = (3, 10),   # min,max cells in blob
    ensure_status: str = "any",              # "any" | "success" | "failure"
    rng: Optional[np.random.Generator] = None,
    max_place_tries: int = 5000,
) -> GridEnvironment:
    """
    Create a marker grid with random rectangular and blob obstacles.

    ensure_status:
        "any"     : no guarantee about path existence.
        "success" : an L-shaped corridor is cleared if the goal is cut off.
        "failure" : the start's reachable region is walled in.

    Start and goal are always blank.
    """
    if ensure_status not in ("any", "success", "failure"):
        raise ValueError(f"ensure_status must be any|success|failure, got {ensure_status!r}")
    if H <= 0 or W <= 0:
        raise ValueError(f"grid must be non-empty, got {H}x{W}")
    if goal is None:
        goal = (H - 1, W - 1)
    start = (int(start[0]), int(start[1]))
    goal = (int(goal[0]), int(goal[1]))
    for name, (r, c) in (("start", start), ("goal", goal)):
        if not (0 <= r < H and 0 <= c < W):
            raise ValueError(f"{name} {(r, c)} outside {H}x{W}")
    if ensure_status == "failure" and abs(start[0] - goal[0]) + abs(start[1] - goal[1]) <= 1:
        raise ValueError("cannot force failure when start and goal coincide or touch")

    if shape_probs is None:
        shape_probs = {"rect": 0.5, "blob": 0.5}
    tot = float(sum(shape_probs.values()))
    shape_keys = list(shape_probs.keys())
    shape_p = np.array([shape_probs[k] / tot for k in shape_keys], dtype=float)

    rng = rng or np.random.default_rng()

    occ = np.zeros((H, W), dtype=bool)
    settings = dict(
        H=H, W=W, density=density, n_objects=n_objects, start=start, goal=goal,
        blank=blank, obstacle=obstacle, moat=moat, shape_probs=shape_probs,
        rect_size=rect_size, blob_cells=blob_cells, ensure_status=ensure_status,
        max_place_tries=max_place_tries, seed=int(rng.integers(0, 2**31 - 1)),
    )

    target_cells = None
    if density is not None:
        density = float(np.clip(density, 0.0, 0.9))
        target_cells = int(round(density * H * W))
    placed_objects = 0
    tries = 0
    keep_free = (start, goal)

    # -------------------- 1) Random object placement -------------------- #
    while tries < max_place_tries:
        tries += 1
        if target_cells is not None and int(occ.sum()) >= target_cells:
            break
        if n_objects is not None and placed_objects >= int(n_objects):
            break

        shape = shape_keys[rng.choice(len(shape_keys), p=shape_p)]
        if shape == "rect":
            (min_h, max_h), (min_w, max_w) = rect_size
            mask = _random_rectangle_mask(rng, min_h, max_h, min_w, max_w)
        else:
            mask = _random_blob_mask(rng, blob_cells[0], blob_cells[1])

        mr, mc = mask.shape
        if mr > H or mc > W:
            continue
        r0 = int(rng.integers(0, H - mr + 1))
        c0 = int(rng.integers(0, W - mc + 1))
        if _stamp_mask(occ, (r0, c0), mask, moat=moat, keep_free=keep_free):
            placed_objects += 1

    # -------------------- 2) Enforce outcome if requested ---------------- #
    reachable = has_path(occ, start, goal, blank=False)
    if ensure_status == "success" and not reachable:
        _carve_corridor(occ, start, goal, rng)
    elif ensure_status == "failure" and reachable:
        # wall in one endpoint; the other keeps its surroundings
        _enclose(occ, goal if rng.random() < 0.5 else start)

    occ[start] = False
    occ[goal] = False

    grid = np.full((H, W), blank, dtype=dtype)
    grid[occ] = obstacle

    return GridEnvironment(
        grid=grid,
        start=start,
        goal=goal,
        blank=blank,
        obstacle=obstacle,
        settings=settings,
        rng=rng,
    )


# ---------------------------------- Demo ------------------------------------ #

if __name__ == "__main__":
    rng = np.random.default_rng(123)
    env = generate_environment(H=24, W=32, density=0.25, ensure_status="any", rng=rng)
    print("Environment:", env.shape, "Start:", env.start, "Goal:", env.goal)
    print("#Obstacle cells:", int(env.occupancy.sum()))
    print("Path exists?", has_path(env.grid, env.start, env.goal, env.blank))
