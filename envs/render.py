import os
from typing import Any, Optional, Sequence, Tuple

import numpy as np
import matplotlib.pyplot as plt


def render_grid(grid: Any,
                blank: Any,
                path: Optional[Sequence[Tuple[int, int]]] = None,
                start: Optional[Tuple[int, int]] = None,
                goal: Optional[Tuple[int, int]] = None,
                distances: Optional[np.ndarray] = None,
                ax=None,
                title: Optional[str] = None):
    """
    Render a marker grid.

    Layers:
      - background (white), obstacles (dark gray)
      - optional wavefront distance labels as a faded colormap
      - path polyline (lime), start (green star), goal (red star)
    """
    arr = np.asarray(grid)
    H, W = arr.shape
    if ax is None:
        _, ax = plt.subplots(figsize=(max(3, W / 5), max(3, H / 5)), dpi=120)

    rgb = np.ones((H, W, 3), dtype=float)
    if distances is not None and (distances >= 0).any():
        reached = distances >= 0
        norm = distances / max(1, int(distances.max()))
        shaded = plt.get_cmap("viridis")(norm)[..., :3]
        rgb[reached] = 0.5 + 0.5 * shaded[reached]
    rgb[arr != blank] = 0.2

    ax.imshow(rgb, interpolation="nearest", origin="upper")
    ax.set_xticks([]); ax.set_yticks([])

    if path:
        rr, cc = zip(*path)
        ax.plot(cc, rr, color="lime", lw=2, alpha=0.8)
    if start is not None:
        ax.plot(start[1], start[0], marker="*", markersize=10, markeredgecolor="k", markerfacecolor="lime", lw=0)
    if goal is not None:
        ax.plot(goal[1], goal[0], marker="*", markersize=10, markeredgecolor="k", markerfacecolor="red", lw=0)

    if title:
        ax.set_title(title, fontsize=10)
    return ax


def save_render(out_path: str, grid: Any, blank: Any, **kwargs) -> str:
    """Render to ``out_path`` and close the figure."""
    arr = np.asarray(grid)
    H, W = arr.shape
    fig, ax = plt.subplots(figsize=(max(3, W / 5), max(3, H / 5)), dpi=120)
    render_grid(arr, blank, ax=ax, **kwargs)
    fig.tight_layout()
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    fig.savefig(out_path, bbox_inches="tight")
    plt.close(fig)
    return out_path
