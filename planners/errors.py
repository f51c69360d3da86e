# -*- coding: utf-8 -*-
"""
Exceptions raised by the Lee wavefront router.

"No path" is a normal answer (``None``) and never an exception; these cover
caller mistakes and broken internal invariants only.
"""

from __future__ import annotations
from typing import Tuple


class LeeError(Exception):
    """Base class for all router faults."""


class OutOfRangeError(LeeError, IndexError):
    """An endpoint lies outside the grid."""

    def __init__(self, name: str, cell: Tuple[int, int], shape: Tuple[int, int]):
        self.name = name
        self.cell = cell
        self.shape = shape
        super().__init__(f"{name} {cell} is outside grid of shape {shape[0]}x{shape[1]}")


class ReconstructionError(LeeError, RuntimeError):
    """Backtrace found no adjacent cell one step closer to the origin."""

    def __init__(self, cell: Tuple[int, int], expected: int):
        self.cell = cell
        self.expected = expected
        super().__init__(
            f"no neighbour of {cell} with distance {expected} in the visit record"
        )


class SearchCancelled(LeeError):
    """The cancellation hook asked the expansion to stop."""

    def __init__(self, round_index: int):
        self.round_index = round_index
        super().__init__(f"search cancelled before round {round_index}")
