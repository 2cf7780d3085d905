"""Maze environment: grid data, generation and helpers."""

from .grid import Cell, Coord, Grid, NEIGHBOR_OFFSETS
from .schemas import CellState, GridState
from .maze import (
    START_CELL,
    MazeConfigurationError,
    MazeGenerator,
    generate_maze,
)
from .helpers import (
    find_empty_cell,
    reachable_cells,
    render_ascii,
)

__all__ = [
    "Cell",
    "Coord",
    "Grid",
    "NEIGHBOR_OFFSETS",
    "CellState",
    "GridState",
    "START_CELL",
    "MazeConfigurationError",
    "MazeGenerator",
    "generate_maze",
    "find_empty_cell",
    "reachable_cells",
    "render_ascii",
]
