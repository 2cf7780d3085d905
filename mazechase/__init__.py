"""
Mazechase - simulation core for a maze-chase arcade game.

Procedural braided mazes, BFS pursuers, continuous player movement over a
discrete grid, and tick-by-tick session progression.

No rendering, audio or input capture. Hosts feed intents into
``SessionState.step`` (directly or through ``GameLoop``) and draw from the
read-only ``SessionSnapshot`` it returns.
"""

__version__ = "0.1.0"

# Environment
from .environment import (
    Cell,
    Grid,
    CellState,
    GridState,
    MazeGenerator,
    MazeConfigurationError,
    generate_maze,
    reachable_cells,
    find_empty_cell,
    render_ascii,
)

# Movement and pursuit
from .motion import Direction, Position, MotionResolver, select_intent
from .pursuit import PursuitPlanner, PathNotFoundError, next_step

# Session and driver
from .session import SessionState, SessionPhase, Pursuer, PursuerKind, MotionState
from .driver import GameLoop
from .persistence import ScoreStore, InMemoryScoreStore, JsonScoreStore

# Schemas and configuration
from .schemas import PositionState, PursuerState, SessionSnapshot, SessionResult
from .config import Config, GameSettings
from .randomness import RandomSource, ScriptedRandom

__all__ = [
    # Environment
    "Cell",
    "Grid",
    "CellState",
    "GridState",
    "MazeGenerator",
    "MazeConfigurationError",
    "generate_maze",
    "reachable_cells",
    "find_empty_cell",
    "render_ascii",
    # Movement and pursuit
    "Direction",
    "Position",
    "MotionResolver",
    "select_intent",
    "PursuitPlanner",
    "PathNotFoundError",
    "next_step",
    # Session and driver
    "SessionState",
    "SessionPhase",
    "Pursuer",
    "PursuerKind",
    "MotionState",
    "GameLoop",
    "ScoreStore",
    "InMemoryScoreStore",
    "JsonScoreStore",
    # Schemas and configuration
    "PositionState",
    "PursuerState",
    "SessionSnapshot",
    "SessionResult",
    "Config",
    "GameSettings",
    "RandomSource",
    "ScriptedRandom",
]
