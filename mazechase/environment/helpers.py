"""Utilities for maze grids: reachability, spawn search and ASCII views."""

from __future__ import annotations

from collections import deque
from typing import Collection, Dict, List, Optional, Set

from .grid import NEIGHBOR_OFFSETS, Coord, Grid
from .maze import START_CELL
from .schemas import GridState
from ..randomness import RandomSource


def reachable_cells(grid: Grid, start: Coord = START_CELL) -> Set[Coord]:
    """Return every open cell 4-connected to ``start`` (flood fill).

    Returns an empty set when ``start`` itself is a wall. Used to check the
    connectivity guarantee of generated mazes.
    """

    if grid.is_wall(*start):
        return set()

    visited = {start}
    queue: deque[Coord] = deque([start])
    while queue:
        x, y = queue.popleft()
        for dx, dy in NEIGHBOR_OFFSETS:
            nb = (x + dx, y + dy)
            if nb in visited or grid.is_wall(*nb):
                continue
            visited.add(nb)
            queue.append(nb)
    return visited


def find_empty_cell(
    grid: Grid,
    rng: RandomSource,
    *,
    avoid: Collection[Coord] = (),
    attempts: int = 1000,
) -> Coord:
    """Pick a random open interior cell, skipping any cell in ``avoid``.

    Samples interior coordinates up to ``attempts`` times. If sampling keeps
    missing, the first qualifying open cell in row-major order is used, and
    failing that the start cell, which the generator always leaves open.
    """

    if grid.cols < 3 or grid.rows < 3:
        return START_CELL

    for _ in range(attempts):
        x = rng.randrange(grid.cols - 2) + 1
        y = rng.randrange(grid.rows - 2) + 1
        if not grid.is_wall(x, y) and (x, y) not in avoid:
            return (x, y)

    for cell in grid.open_cells():
        if cell not in avoid:
            return cell
    return START_CELL


_DEFAULT_SYMBOLS: Dict[str, str] = {
    "wall": "██",
    "wheat": "· ",
    "key": "k ",
    "open": "  ",
}


def render_ascii(
    grid: GridState,
    *,
    markers: Optional[Dict[Coord, str]] = None,
    symbols: Optional[Dict[str, str]] = None,
) -> str:
    """Render a grid snapshot as text, one line per row.

    ``markers`` overlays entity symbols (player, pursuers) by cell; each
    marker is padded to two characters so columns stay aligned.
    """

    mapping = {**_DEFAULT_SYMBOLS}
    if symbols:
        mapping.update(symbols)
    overlays = markers or {}

    lines: List[str] = []
    for y, row in enumerate(grid.cells):
        chars: List[str] = []
        for x, cell in enumerate(row):
            if (x, y) in overlays:
                chars.append(overlays[(x, y)][:2].ljust(2))
            elif cell.is_wall:
                chars.append(mapping["wall"])
            elif cell.has_wheat:
                chars.append(mapping["wheat"])
            elif cell.has_key:
                chars.append(mapping["key"])
            else:
                chars.append(mapping["open"])
        lines.append("".join(chars))
    return "\n".join(lines)
