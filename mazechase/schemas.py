"""
Pydantic schemas for Mazechase snapshots and results.

The session owns the live grid and entities. Renderers, input layers and
score stores only ever see the models below, which are fresh copies built
per request, so nothing outside the core can mutate game state.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

from mazechase.environment import GridState


class PositionState(BaseModel):
    """Continuous position in cell units plus the cell it rounds to."""

    x: float
    y: float
    cell_x: int
    cell_y: int


class PursuerState(BaseModel):
    """Everything a renderer needs to draw one pursuer."""

    kind: str = Field(..., description="rabbit, crow, boar or fox")
    position: PositionState
    # Facing uses Direction names (UP, DOWN, LEFT, RIGHT, NONE)
    direction: str = Field("NONE", description="Current travel direction")
    speed: float = Field(..., description="Cells per tick")
    phase: float = Field(0.0, description="Cosmetic animation phase (radians)")
    arrived: bool = Field(True, description="True while sitting on a cell centre")


class SessionSnapshot(BaseModel):
    """Read-only view of a session after a tick."""

    tick: int = 0
    phase: str = Field(..., description="NOT_STARTED, RUNNING, WON or LOST")
    running: bool = False
    ended: bool = False
    won: bool = False
    score: int = 0
    best_score: int = 0
    lives: int = 0
    wheat_remaining: int = 0
    speed_multiplier: float = 1.0
    player: Optional[PositionState] = None
    player_facing: str = "RIGHT"
    pursuers: List[PursuerState] = Field(default_factory=list)
    grid: Optional[GridState] = Field(
        None, description="Full maze copy; None before the first restart()",
    )


class SessionResult(BaseModel):
    """Emitted once when a session reaches WON or LOST."""

    score: int
    won: bool
    ticks: int = Field(0, description="Ticks played in the session")
    best_score: int = Field(0, description="Best score after this result")
    new_best: bool = False
    ended_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
