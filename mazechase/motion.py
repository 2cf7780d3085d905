"""
Continuous player movement over the discrete maze.

Entities move in fractions of a cell per tick. A move is checked against the
grid at its leading edge using a hitbox narrower than a corridor, so the
player can slide through openings without pixel-perfect alignment. After a
successful move the perpendicular coordinate eases toward the lane centre,
which makes turns into side corridors forgiving.

Collectibles are not handled here; the session inspects the rounded cell
after movement.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple

from .environment.grid import Coord, Grid


class Direction(Enum):
    """Cardinal travel directions as ``(dx, dy)`` unit vectors (y grows downward)."""

    NONE = (0, 0)
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return Direction((-self.dx, -self.dy))

    def step(self, cell: Coord) -> Coord:
        return (cell[0] + self.dx, cell[1] + self.dy)


# Fixed order used for intent priority, target substitution and BFS expansion.
CARDINALS: Tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward +infinity."""
    return math.floor(value + 0.5)


@dataclass
class Position:
    """Continuous entity position in cell units."""

    x: float
    y: float

    @property
    def cell(self) -> Coord:
        return (round_half_up(self.x), round_half_up(self.y))

    def distance_to(self, other: "Position") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def copy(self) -> "Position":
        return Position(self.x, self.y)

    @classmethod
    def at(cls, cell: Coord) -> "Position":
        return cls(float(cell[0]), float(cell[1]))


def select_intent(intents: Iterable[Direction]) -> Direction:
    """Collapse the set of held directions into one.

    Only one axis moves per tick; with several keys held the priority is
    up, down, left, right.
    """

    held = set(intents)
    for direction in CARDINALS:
        if direction in held:
            return direction
    return Direction.NONE


class MotionResolver:
    """Resolves one tick of player movement against grid walls.

    Args:
        speed: Distance travelled per tick, in cells.
        margin: Half-width of the collision box perpendicular to travel.
        center_threshold: Perpendicular offset under which lane centering kicks in.
        center_easing: Fraction of the remaining offset removed per committed move.
    """

    def __init__(
        self,
        *,
        speed: float = 0.15,
        margin: float = 0.4,
        center_threshold: float = 0.3,
        center_easing: float = 0.2,
    ):
        self.speed = speed
        self.margin = margin
        self.center_threshold = center_threshold
        self.center_easing = center_easing

    def resolve(self, position: Position, grid: Grid, intent: Direction) -> Position:
        """Return the position after applying ``intent`` for one tick.

        The input position is not modified. A blocked move returns an
        unchanged copy; there is no partial slide along the wall.
        """

        moved = position.copy()
        if intent is Direction.NONE:
            return moved
        if intent.dx:
            self._move_horizontal(moved, grid, intent.dx)
        else:
            self._move_vertical(moved, grid, intent.dy)
        return moved

    def _move_horizontal(self, pos: Position, grid: Grid, dx: int) -> bool:
        next_x = pos.x + dx * self.speed
        edge_x = math.ceil(next_x - self.margin) if dx > 0 else math.floor(next_x + self.margin)
        low_y = math.floor(pos.y + self.margin)
        high_y = math.ceil(pos.y - self.margin)

        if grid.is_wall(edge_x, low_y) or grid.is_wall(edge_x, high_y):
            return False

        pos.x = next_x
        pos.y = self._ease_to_center(pos.y)
        return True

    def _move_vertical(self, pos: Position, grid: Grid, dy: int) -> bool:
        next_y = pos.y + dy * self.speed
        edge_y = math.ceil(next_y - self.margin) if dy > 0 else math.floor(next_y + self.margin)
        low_x = math.floor(pos.x + self.margin)
        high_x = math.ceil(pos.x - self.margin)

        if grid.is_wall(low_x, edge_y) or grid.is_wall(high_x, edge_y):
            return False

        pos.y = next_y
        pos.x = self._ease_to_center(pos.x)
        return True

    def _ease_to_center(self, value: float) -> float:
        ideal = round_half_up(value)
        if abs(value - ideal) < self.center_threshold:
            return value + (ideal - value) * self.center_easing
        return value
