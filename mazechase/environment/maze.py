"""Procedural maze generation.

Mazes are built in three passes:

1. Randomized depth-first carving from (1, 1) produces a perfect maze (one
   path between any two open cells).
2. Braiding knocks out a fraction of the walls that separate two open cells,
   adding loops so pursuit and evasion have more than one route. Braiding
   only adds edges, so every open cell stays reachable from (1, 1).
3. A small safe strip is opened at the centre, the border is re-asserted as
   wall, and wheat/keys are seeded over the open interior.
"""

from __future__ import annotations

import random
from typing import List, Optional, Tuple

from .grid import Coord, Grid
from ..randomness import RandomSource

START_CELL: Coord = (1, 1)

# Carving steps two cells at a time: up, right, down, left.
_CARVE_STEPS: Tuple[Coord, ...] = ((0, -2), (2, 0), (0, 2), (-2, 0))


class MazeConfigurationError(ValueError):
    """Raised when the requested grid cannot hold an interior start cell."""

    def __init__(self, *, rows: int, cols: int) -> None:
        self.rows = rows
        self.cols = cols
        message = (
            f"Cannot generate a {rows}x{cols} maze: the start cell {START_CELL} "
            "must be an interior, non-border cell.\n\n"
            "Remediation tips:\n"
            "  - Use at least 3 rows and 3 columns\n"
            "  - Odd dimensions (e.g. 19x25) give the cleanest corridors"
        )
        super().__init__(message)


class MazeGenerator:
    """Builds braided mazes with collectibles.

    Args:
        rng: Random source; defaults to an unseeded ``random.Random``.
        braid_chance: Probability of opening each eligible separating wall.
        wheat_chance: Probability that an open cell receives wheat.
        key_chance: Probability that a cell without wheat receives a key.
        max_keys: Upper bound on keys per maze.
    """

    def __init__(
        self,
        rng: Optional[RandomSource] = None,
        *,
        braid_chance: float = 0.2,
        wheat_chance: float = 0.5,
        key_chance: float = 0.01,
        max_keys: int = 5,
    ):
        self.rng = rng if rng is not None else random.Random()
        self.braid_chance = braid_chance
        self.wheat_chance = wheat_chance
        self.key_chance = key_chance
        self.max_keys = max_keys

    @staticmethod
    def validate_dimensions(rows: int, cols: int) -> None:
        if rows < 3 or cols < 3:
            raise MazeConfigurationError(rows=rows, cols=cols)

    def generate(self, rows: int, cols: int) -> Grid:
        """Return a freshly generated grid of ``rows x cols`` cells."""
        self.validate_dimensions(rows, cols)

        grid = Grid(rows=rows, cols=cols)
        self._carve(grid)
        self._braid(grid)
        self._open_center(grid)
        self._wall_border(grid)
        self._seed_collectibles(grid)
        return grid

    def _carve(self, grid: Grid) -> None:
        sx, sy = START_CELL
        grid.cells[sy][sx].is_wall = False
        stack: List[Coord] = [START_CELL]

        while stack:
            cx, cy = stack[-1]
            candidates: List[Coord] = []
            for dx, dy in _CARVE_STEPS:
                nx, ny = cx + dx, cy + dy
                # Carving never touches the border ring.
                if 0 < nx < grid.cols - 1 and 0 < ny < grid.rows - 1 and grid.cells[ny][nx].is_wall:
                    candidates.append((nx, ny))

            if not candidates:
                stack.pop()
                continue

            nx, ny = self.rng.choice(candidates)
            grid.cells[cy + (ny - cy) // 2][cx + (nx - cx) // 2].is_wall = False
            grid.cells[ny][nx].is_wall = False
            stack.append((nx, ny))

    def _braid(self, grid: Grid) -> None:
        cells = grid.cells
        for y in range(2, grid.rows - 2):
            for x in range(2, grid.cols - 2):
                if not cells[y][x].is_wall:
                    continue
                vertical = not cells[y - 1][x].is_wall and not cells[y + 1][x].is_wall
                horizontal = not cells[y][x - 1].is_wall and not cells[y][x + 1].is_wall
                if (vertical or horizontal) and self.rng.random() < self.braid_chance:
                    cells[y][x].is_wall = False

    def _open_center(self, grid: Grid) -> None:
        cx, cy = grid.cols // 2, grid.rows // 2
        for x in (cx - 1, cx, cx + 1):
            cell = grid.cell_at(x, cy)
            if cell is not None and cell.is_wall:
                cell.is_wall = False

    def _wall_border(self, grid: Grid) -> None:
        for y in range(grid.rows):
            for x in range(grid.cols):
                if x == 0 or x == grid.cols - 1 or y == 0 or y == grid.rows - 1:
                    grid.cells[y][x].is_wall = True

    def _seed_collectibles(self, grid: Grid) -> None:
        grid.wheat_total = 0
        grid.key_positions = []
        for y in range(1, grid.rows - 1):
            for x in range(1, grid.cols - 1):
                cell = grid.cells[y][x]
                if cell.is_wall:
                    continue
                if self.rng.random() < self.wheat_chance:
                    cell.has_wheat = True
                    grid.wheat_total += 1
                elif self.rng.random() < self.key_chance and len(grid.key_positions) < self.max_keys:
                    cell.has_key = True
                    grid.key_positions.append((x, y))


def generate_maze(rows: int, cols: int, rng: Optional[RandomSource] = None) -> Grid:
    """Convenience wrapper using the default tuning."""
    return MazeGenerator(rng).generate(rows, cols)
