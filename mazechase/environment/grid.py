"""Maze grid data and query surface.

The grid is a dense ``rows x cols`` array of ``Cell`` objects addressed by
``(x, y)`` where ``x`` is the column and ``y`` the row. Only the maze
generator creates cells and only the session consumes collectibles; every
other component reads through ``is_wall`` / ``cell_at``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .schemas import CellState, GridState

Coord = Tuple[int, int]

# Axis-aligned neighbour offsets in the canonical order up, down, left, right.
NEIGHBOR_OFFSETS: Tuple[Coord, ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))


@dataclass
class Cell:
    """A single maze cell. Wall cells never carry collectibles."""

    is_wall: bool = True
    has_wheat: bool = False
    has_key: bool = False


@dataclass
class Grid:
    """Fixed-size maze. Out-of-bounds coordinates behave as walls."""

    rows: int
    cols: int
    cells: List[List[Cell]] = field(default_factory=list)
    # Filled in by the generator; informational after placement.
    wheat_total: int = 0
    key_positions: List[Coord] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[Cell() for _ in range(self.cols)] for _ in range(self.rows)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def is_wall(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return True
        return self.cells[y][x].is_wall

    def is_walkable(self, x: int, y: int) -> bool:
        return not self.is_wall(x, y)

    def cell_at(self, x: int, y: int) -> Optional[Cell]:
        if not self.in_bounds(x, y):
            return None
        return self.cells[y][x]

    def open_cells(self) -> List[Coord]:
        """All non-wall cells in row-major order."""
        return [
            (x, y)
            for y in range(self.rows)
            for x in range(self.cols)
            if not self.cells[y][x].is_wall
        ]

    def count_wheat(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell.has_wheat)

    def to_state(self) -> GridState:
        return GridState(
            rows=self.rows,
            cols=self.cols,
            cells=[
                [
                    CellState(is_wall=c.is_wall, has_wheat=c.has_wheat, has_key=c.has_key)
                    for c in row
                ]
                for row in self.cells
            ],
            key_positions=list(self.key_positions),
        )

    @classmethod
    def from_ascii(cls, lines: List[str]) -> "Grid":
        """Build a grid from text rows: ``#`` wall, ``.`` wheat, ``k`` key, space open.

        Handy for hand-built layouts in tests and examples. Every row must have
        the same width.
        """
        if not lines:
            raise ValueError("At least one row is required")
        width = len(lines[0])
        if any(len(line) != width for line in lines):
            raise ValueError("All rows must have the same width")

        grid = cls(rows=len(lines), cols=width)
        for y, line in enumerate(lines):
            for x, char in enumerate(line):
                cell = grid.cells[y][x]
                cell.is_wall = char == "#"
                cell.has_wheat = char == "."
                cell.has_key = char == "k"
                if cell.has_key:
                    grid.key_positions.append((x, y))
        grid.wheat_total = grid.count_wheat()
        return grid
