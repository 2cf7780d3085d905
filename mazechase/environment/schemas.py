"""Pydantic schemas for the maze grid.

These models mirror the lightweight dataclasses in ``grid.py`` but give
renderers a serializable copy they can hold onto without touching the live
grid owned by the session.
"""

from __future__ import annotations

from typing import List, Tuple

from pydantic import BaseModel, Field


class CellState(BaseModel):
    """Read-only copy of one maze cell."""

    is_wall: bool = True
    has_wheat: bool = False
    has_key: bool = False


class GridState(BaseModel):
    """Dense representation of the maze, indexed ``cells[y][x]``."""

    rows: int
    cols: int
    cells: List[List[CellState]] = Field(
        default_factory=list,
        description="Row-major cells: cells[y][x]",
    )
    key_positions: List[Tuple[int, int]] = Field(
        default_factory=list,
        description="(x, y) cells that received a key at generation time",
    )

    def cell(self, x: int, y: int) -> CellState:
        return self.cells[y][x]
