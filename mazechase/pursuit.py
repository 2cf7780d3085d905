"""
Pursuer pathfinding.

Pursuers replan each time they arrive at a cell centre. The plan is a single
step: the first move of a shortest 4-connected path from the pursuer's cell
to the target cell, found by breadth-first search.

Rules layered over plain BFS:
- The move that reverses the current travel direction is left out of the
  initial frontier, so pursuers do not flicker back and forth. It is only
  taken when nothing else is open (dead end). When the search runs dry
  without the reverse, the pursuer pauses for one tick and replans with
  no reversal restriction.
- A target that rounds into a wall (the chased entity is mid-move across a
  corner) is replaced by its first open neighbour.
- ``PursuitPlanner`` occasionally swaps the planned step for a random open
  direction so pursuit is not perfectly predictable.
"""

from __future__ import annotations

import random
from collections import deque
from typing import List, Optional, Tuple

from .environment.grid import Coord, Grid
from .logging_utils import LOG_TAG_ERROR, log_error
from .motion import CARDINALS, Direction
from .randomness import RandomSource

DEFAULT_MAX_ITERATIONS = 1000


class PathNotFoundError(Exception):
    """Raised in strict mode when BFS cannot reach the target.

    Generated mazes are fully connected, so this signals a broken grid rather
    than a gameplay situation.
    """

    def __init__(self, *, start: Coord, target: Coord, iterations: int) -> None:
        self.start = start
        self.target = target
        self.iterations = iterations
        super().__init__(
            f"No path from {start} to {target} after {iterations} iterations; "
            "the grid violates the connectivity guarantee"
        )


def resolve_target(grid: Grid, target: Coord) -> Coord:
    """Return ``target``, or its first open neighbour if it sits in a wall."""

    if not grid.is_wall(*target):
        return target
    for direction in CARDINALS:
        candidate = direction.step(target)
        if not grid.is_wall(*candidate):
            return candidate
    return target


def legal_directions(grid: Grid, cell: Coord) -> List[Direction]:
    """Directions leading to an open cell, in the order up, down, left, right."""
    return [d for d in CARDINALS if not grid.is_wall(*d.step(cell))]


def next_step(
    grid: Grid,
    start: Coord,
    target: Coord,
    current_direction: Direction = Direction.NONE,
    *,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    strict: bool = False,
) -> Direction:
    """Return the first step of a shortest path from ``start`` to ``target``.

    Args:
        grid: Maze to search.
        start: Pursuer cell.
        target: Cell being chased (substituted if it is a wall).
        current_direction: Current travel direction; its reverse is suppressed.
        max_iterations: Cap on dequeued nodes.
        strict: Raise ``PathNotFoundError`` instead of falling back.

    Returns:
        ``Direction.NONE`` when already on the target, fully enclosed, or when
        only the suppressed reverse leads on (the caller replans next tick),
        otherwise one of the cardinal directions.
    """

    target = resolve_target(grid, target)
    if start == target:
        return Direction.NONE

    reverse = current_direction.opposite
    reverse_open = reverse is not Direction.NONE and not grid.is_wall(*reverse.step(start))
    moves = [
        d for d in legal_directions(grid, start)
        if current_direction is Direction.NONE or d is not reverse
    ]

    if not moves:
        # Dead end: turning back is the only way out.
        return reverse if reverse_open else Direction.NONE

    found, head, iterations = _search(grid, start, target, moves, max_iterations)
    if found is not None:
        return found
    if head is not None:
        # Iteration cap hit; keep heading toward the unexplored frontier.
        return head

    if reverse_open:
        # Only the suppressed reverse is left; pause so the next replan
        # runs without the reversal rule.
        return Direction.NONE

    if strict:
        raise PathNotFoundError(start=start, target=target, iterations=iterations)

    log_error(
        f"  {LOG_TAG_ERROR} [Pursuit] No path from {start} to {target} "
        f"after {iterations} iterations; falling back to {moves[0].name}"
    )
    return moves[0]


def _search(
    grid: Grid,
    start: Coord,
    target: Coord,
    first_moves: List[Direction],
    max_iterations: int,
) -> Tuple[Optional[Direction], Optional[Direction], int]:
    """BFS seeded with ``first_moves`` from ``start``.

    Returns ``(move, head, iterations)``: ``move`` is the first move of the
    shortest path (None if not found); ``head`` is the first move of the
    queue head when the iteration cap stopped the search early.
    """

    visited = {start}
    # Each queue entry carries the first move that led to it.
    queue: deque[Tuple[Coord, Direction]] = deque()
    for direction in first_moves:
        nb = direction.step(start)
        visited.add(nb)
        queue.append((nb, direction))

    iterations = 0
    while queue and iterations < max_iterations:
        cell, first_move = queue.popleft()
        iterations += 1
        if cell == target:
            return first_move, None, iterations

        x, y = cell
        for direction in CARDINALS:
            nb = (x + direction.dx, y + direction.dy)
            if nb in visited or grid.is_wall(*nb):
                continue
            visited.add(nb)
            queue.append((nb, first_move))

    head = queue[0][1] if queue else None
    return None, head, iterations


class PursuitPlanner:
    """Chooses the next direction for a pursuer that just arrived at a cell.

    Args:
        rng: Random source for the occasional random turn.
        random_turn_chance: Probability of ignoring the planned step.
        max_iterations: BFS iteration cap.
        strict: Propagate ``PathNotFoundError`` instead of falling back.
    """

    def __init__(
        self,
        rng: Optional[RandomSource] = None,
        *,
        random_turn_chance: float = 0.1,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        strict: bool = False,
    ):
        self.rng = rng if rng is not None else random.Random()
        self.random_turn_chance = random_turn_chance
        self.max_iterations = max_iterations
        self.strict = strict

    def next_step(
        self,
        grid: Grid,
        start: Coord,
        target: Coord,
        current_direction: Direction = Direction.NONE,
    ) -> Direction:
        """Deterministic BFS step with this planner's limits."""
        return next_step(
            grid,
            start,
            target,
            current_direction,
            max_iterations=self.max_iterations,
            strict=self.strict,
        )

    def choose(
        self,
        grid: Grid,
        start: Coord,
        target: Coord,
        current_direction: Direction = Direction.NONE,
    ) -> Direction:
        """Planned step, occasionally replaced by a random open direction."""

        planned = self.next_step(grid, start, target, current_direction)
        if self.rng.random() < self.random_turn_chance:
            options = legal_directions(grid, start)
            if options:
                return self.rng.choice(options)
        return planned
