# -*- coding: utf-8 -*-
"""
Backtrace over a distance-labelled visit record.

Walks from the destination entry toward index 0, each step taking the first
entry (scanning downward) one distance lower and 4-adjacent to the current
cell. Output is destination-first; callers wanting travel order reverse it.
"""

from __future__ import annotations
from typing import List, Tuple

from .errors import ReconstructionError
from .wavefront import Cell, VisitRecord


def is_four_adjacent(a: Cell, b: Cell) -> bool:
    dr = a[0] - b[0]
    dc = a[1] - b[1]
    return (abs(dr) == 1 and dc == 0) or (abs(dc) == 1 and dr == 0)


def reconstruct(record: VisitRecord, hit_index: int, origin: Cell, destination: Cell) -> List[Cell]:
    """
    Rebuild the path destination -> origin from ``record``.

    ``len(result) == record[hit_index].distance + 1``. Raises
    ReconstructionError if some step has no adjacent predecessor.
    """
    r, c, dist = record[hit_index]
    if (r, c) != tuple(destination):
        raise ValueError(f"record[{hit_index}] is {(r, c)}, not destination {destination}")

    path: List[Cell] = [(r, c)]
    current: Cell = (r, c)
    expected = dist - 1
    i = hit_index - 1

    while expected > 0:
        # signed index: entry 0 is a legitimate candidate
        while i >= 0:
            er, ec, ed = record[i]
            if ed == expected and is_four_adjacent((er, ec), current):
                break
            i -= 1
        else:
            raise ReconstructionError(current, expected)
        current = (er, ec)
        path.append(current)
        expected -= 1
        i -= 1

    if dist > 0:
        path.append((int(origin[0]), int(origin[1])))
    return path


class PathReconstructor:
    """Object wrapper matching WaveFrontExpander."""

    def run(self, record: VisitRecord, hit_index: int,
            origin: Cell, destination: Cell) -> List[Tuple[int, int]]:
        return reconstruct(record, hit_index, origin, destination)
