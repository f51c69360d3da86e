#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
wavefront.py
------------
Lee wavefront expansion (breadth-first distance labelling) on a GridView.

- 4-connected only; neighbours are probed east, south, west, north.
  That order decides which of several equal-length paths the backtrace
  returns, so it is a fixed tuple and never derived from container order.
- The visit record is an append-only list of (row, col, distance) with an
  O(1) coordinate index for duplicate rejection.
- Expansion is driven round by round through an explicit ExpansionState.

Returns an ExpansionState whose ``hit_index`` is set on success.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
from typing import Callable, Dict, Iterator, List, Optional, Tuple

import numpy as np

from .errors import SearchCancelled
from .grid_view import GridView

log = logging.getLogger(__name__)

Cell = Tuple[int, int]
Entry = Tuple[int, int, int]  # (row, col, distance)

# east, south, west, north as (d_row, d_col)
NEIGHBOUR_ORDER: Tuple[Cell, ...] = ((0, +1), (+1, 0), (0, -1), (-1, 0))


class VisitRecord:
    """Ordered (row, col, distance) entries, unique per coordinate."""

    __slots__ = ("_entries", "_index")

    def __init__(self) -> None:
        self._entries: List[Entry] = []
        self._index: Dict[Cell, int] = {}

    def append(self, row: int, col: int, distance: int) -> Optional[int]:
        """Append an entry; returns its index, or None if (row, col) is known."""
        key = (row, col)
        if key in self._index:
            return None
        if self._entries and distance < self._entries[-1][2]:
            raise ValueError(
                f"distance {distance} after {self._entries[-1][2]} breaks monotone order"
            )
        idx = len(self._entries)
        self._entries.append((row, col, distance))
        self._index[key] = idx
        return idx

    def index_of(self, cell: Cell) -> Optional[int]:
        return self._index.get(cell)

    def __contains__(self, cell: object) -> bool:
        return cell in self._index

    def __getitem__(self, i: int) -> Entry:
        return self._entries[i]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def entries(self) -> List[Entry]:
        """Copy of the entries, in insertion order."""
        return list(self._entries)


@dataclass
class ExpansionState:
    """Everything one expansion carries between rounds."""
    view: GridView
    origin: Cell
    destination: Cell
    record: VisitRecord = field(default_factory=VisitRecord)
    round: int = 0
    frontier_start: int = 0     # first record index with distance == round
    frontier_end: int = 0       # one past the last such index
    hit_index: Optional[int] = None
    stalled: bool = False

    @property
    def done(self) -> bool:
        return self.hit_index is not None or self.stalled

    @property
    def found(self) -> bool:
        return self.hit_index is not None

    def distance_map(self) -> np.ndarray:
        """(H, W) int32 array of distance labels; -1 where never reached."""
        dist = np.full(self.view.shape, -1, dtype=np.int32)
        for r, c, d in self.record:
            dist[r, c] = d
        return dist


def start_expansion(view: GridView, origin: Cell, destination: Cell) -> ExpansionState:
    """Seed the visit record with the origin at distance 0."""
    state = ExpansionState(view=view, origin=origin, destination=destination)
    state.record.append(origin[0], origin[1], 0)
    state.frontier_end = len(state.record)
    # The seed itself is the destination: zero-hop hit, nothing to expand.
    if origin == destination:
        state.hit_index = 0
    return state


def expand_round(state: ExpansionState) -> ExpansionState:
    """
    Run one round: every entry of distance ``state.round`` probes its
    neighbours. Stops as soon as the destination is appended. A round that
    appends nothing marks the state as stalled.
    """
    if state.done:
        return state

    view = state.view
    record = state.record
    d = state.round
    H, W = view.shape
    gr, gc = state.destination
    appended = 0

    for i in range(state.frontier_start, state.frontier_end):
        r, c, _ = record[i]
        for dr, dc in NEIGHBOUR_ORDER:
            nr, nc = r + dr, c + dc
            if not (0 <= nr < H and 0 <= nc < W):
                continue
            if not view.is_blank(nr, nc):
                continue
            idx = record.append(nr, nc, d + 1)
            if idx is None:
                continue
            appended += 1
            if nr == gr and nc == gc:
                state.hit_index = idx
                log.debug("round %d: hit %s at record index %d", d, state.destination, idx)
                return state

    log.debug("round %d: frontier=%d appended=%d",
              d, state.frontier_end - state.frontier_start, appended)

    if appended == 0:
        state.stalled = True
        return state

    state.frontier_start = state.frontier_end
    state.frontier_end = len(record)
    state.round = d + 1
    return state


def expand(view: GridView,
           origin: Cell,
           destination: Cell,
           cancel: Optional[Callable[[], bool]] = None) -> Optional[ExpansionState]:
    """
    Label cells with their hop distance from ``origin`` until ``destination``
    is reached or the frontier stalls.

    Returns None when either endpoint is not blank (nothing is expanded).
    Otherwise returns the final state; check ``state.found``.
    ``cancel`` is polled once per round and raises SearchCancelled when true.
    """
    if not view.is_blank(*origin) or not view.is_blank(*destination):
        return None

    state = start_expansion(view, origin, destination)
    while not state.done:
        if cancel is not None and cancel():
            raise SearchCancelled(state.round)
        expand_round(state)
    return state


class WaveFrontExpander:
    """Object wrapper around ``expand`` holding the cancellation hook."""

    def __init__(self, cancel: Optional[Callable[[], bool]] = None):
        self.cancel = cancel

    def run(self, view: GridView, origin: Cell, destination: Cell) -> Optional[ExpansionState]:
        return expand(view, origin, destination, cancel=self.cancel)
