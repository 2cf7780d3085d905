"""
Mazechase Configuration

Loads configuration from environment variables with sensible defaults.
Gameplay constants live in ``GameSettings`` so they are validated once and
shared by every component of a session.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env file if it exists
load_dotenv()


class GameSettings(BaseModel):
    """Fixed gameplay constants for one session.

    The defaults reproduce the arcade tuning. Tests build their own instances
    to switch off randomness (e.g. ``random_turn_chance=0``).
    """

    # Maze
    rows: int = Field(19, ge=3, description="Grid height in cells")
    cols: int = Field(25, ge=3, description="Grid width in cells")
    braid_chance: float = Field(0.2, ge=0.0, le=1.0)
    wheat_chance: float = Field(0.5, ge=0.0, le=1.0)
    key_chance: float = Field(0.01, ge=0.0, le=1.0)
    max_keys: int = Field(5, ge=0)

    # Player motion
    player_speed: float = Field(0.15, gt=0.0, description="Cells per tick")
    hitbox_margin: float = Field(0.4, ge=0.0, lt=0.5)
    center_threshold: float = Field(0.3, ge=0.0, le=0.5)
    center_easing: float = Field(0.2, ge=0.0, le=1.0)

    # Pursuers
    pursuer_speed: float = Field(0.06, gt=0.0, lt=1.0, description="Cells per tick")
    snap_factor: float = Field(
        0.6, gt=0.5, le=1.0,
        description="Arrival threshold as a fraction of pursuer speed",
    )
    random_turn_chance: float = Field(0.1, ge=0.0, le=1.0)
    search_max_iterations: int = Field(1000, gt=0)
    phase_step: float = Field(0.1, ge=0.0)

    # Session rules
    hit_distance: float = Field(0.6, gt=0.0)
    starting_lives: int = Field(3, gt=0)
    wheat_points: int = Field(10, ge=0)
    key_points: int = Field(50, ge=0)
    key_speed_factor: float = Field(1.05, gt=0.0)


class Config:
    """Application configuration loaded from environment variables."""

    # Maze dimensions
    ROWS: int = int(os.getenv("MAZECHASE_ROWS", "19"))
    COLS: int = int(os.getenv("MAZECHASE_COLS", "25"))

    # Driver cadence (ticks per second)
    TICK_RATE: int = int(os.getenv("MAZECHASE_TICK_RATE", "60"))

    # Best-score storage used by JsonScoreStore
    SCORE_PATH: Path = Path(os.getenv("MAZECHASE_SCORE_PATH", "highscore.json"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are unusable."""
        if cls.ROWS < 3 or cls.COLS < 3:
            raise ValueError(
                f"Maze must be at least 3x3 to hold a start cell (got {cls.ROWS}x{cls.COLS}). "
                "Set MAZECHASE_ROWS and MAZECHASE_COLS to 3 or more."
            )

        if cls.TICK_RATE <= 0:
            raise ValueError("MAZECHASE_TICK_RATE must be a positive number of ticks per second")

    @classmethod
    def game_settings(cls) -> GameSettings:
        """Build gameplay settings using the configured grid size."""
        cls.validate()
        return GameSettings(rows=cls.ROWS, cols=cls.COLS)

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Mazechase Configuration:",
            f"  Grid: {cls.ROWS} rows x {cls.COLS} cols",
            f"  Tick Rate: {cls.TICK_RATE}/s",
            f"  Score File: {cls.SCORE_PATH}",
            f"  Log Level: {cls.LOG_LEVEL}",
        ]
        return "\n".join(lines)
