"""
Game session state and per-tick progression.

A ``SessionState`` owns everything that changes during a run: the maze, the
player, the four pursuers, score, lives and remaining wheat. The host drives
it by calling ``step`` once per frame; each step runs to completion in a
fixed order:

1. Resolve player movement from the held directions.
2. Collect wheat or a key under the player's rounded cell.
3. Replan pursuers that sit on a cell centre, then advance all pursuers.
4. Check pursuer/player collisions (at most one life lost per tick).
5. On WON/LOST, update the best score and notify end listeners.

Nothing here blocks or sleeps; cadence belongs to the driver.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, List, Optional, Union

from .config import GameSettings
from .environment import Coord, Grid, MazeGenerator, find_empty_cell
from .logging_utils import (
    LOG_TAG_DETERMINISTIC,
    LOG_TAG_ERROR,
    LOG_TAG_INFO,
    LOG_TAG_SUCCESS,
    log_deterministic,
    log_error,
    log_info,
    log_success,
    verbose_enabled,
)
from .motion import Direction, MotionResolver, Position, select_intent
from .pursuit import PursuitPlanner
from .randomness import RandomSource
from .schemas import PositionState, PursuerState, SessionResult, SessionSnapshot


class PursuerKind(str, Enum):
    RABBIT = "rabbit"
    CROW = "crow"
    BOAR = "boar"
    FOX = "fox"


class MotionState(Enum):
    """Whether a pursuer sits on a cell centre (may replan) or is between cells."""

    ARRIVED = "arrived"
    TRAVELING = "traveling"


class SessionPhase(Enum):
    NOT_STARTED = "NOT_STARTED"
    RUNNING = "RUNNING"
    WON = "WON"
    LOST = "LOST"


def _position_state(position: Position) -> PositionState:
    cx, cy = position.cell
    return PositionState(x=position.x, y=position.y, cell_x=cx, cell_y=cy)


@dataclass
class Pursuer:
    """One chasing agent.

    Pursuers move from centre to centre. While ``TRAVELING`` they keep their
    direction; once the distance left to the next centre drops below
    ``speed * snap_factor`` they snap onto it and become ``ARRIVED``, which is
    the only state in which a new direction is chosen.
    """

    kind: PursuerKind
    position: Position
    speed: float
    direction: Direction = Direction.NONE
    phase: float = 0.0
    state: MotionState = MotionState.ARRIVED
    # Last centre the pursuer arrived at.
    cell: Coord = field(init=False)

    def __post_init__(self) -> None:
        self.cell = self.position.cell

    @property
    def arrived(self) -> bool:
        return self.state is MotionState.ARRIVED

    def depart(self, direction: Direction) -> None:
        self.direction = direction
        if direction is not Direction.NONE:
            self.state = MotionState.TRAVELING

    def advance(self, snap_factor: float) -> bool:
        """Move one tick along the current direction. Returns True on arrival."""
        if self.state is not MotionState.TRAVELING:
            return False

        self.position.x += self.direction.dx * self.speed
        self.position.y += self.direction.dy * self.speed

        dest = self.direction.step(self.cell)
        remaining = abs(dest[0] - self.position.x) + abs(dest[1] - self.position.y)
        if remaining < self.speed * snap_factor:
            self.position = Position.at(dest)
            self.cell = dest
            self.state = MotionState.ARRIVED
            return True
        return False

    def to_state(self) -> PursuerState:
        return PursuerState(
            kind=self.kind.value,
            position=_position_state(self.position),
            direction=self.direction.name,
            speed=self.speed,
            phase=self.phase,
            arrived=self.arrived,
        )


EndListener = Callable[[SessionResult], None]
Intents = Union[Direction, Iterable[Direction]]


class SessionState:
    """One game session: NOT_STARTED -> RUNNING -> WON | LOST.

    Args:
        settings: Gameplay constants (grid size, speeds, scoring).
        rng: Random source shared by generation, spawning and pursuit. Pass a
            seeded ``random.Random`` or ``ScriptedRandom`` for repeatable runs.
        generator / planner / resolver: Override the components built from
            ``settings``.
        best_score: Best score known to the host, for display only.
        end_listeners: Callables receiving the ``SessionResult`` on WON/LOST.

    Raises:
        MazeConfigurationError: If the configured grid cannot hold a start cell.
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        *,
        rng: Optional[RandomSource] = None,
        generator: Optional[MazeGenerator] = None,
        planner: Optional[PursuitPlanner] = None,
        resolver: Optional[MotionResolver] = None,
        best_score: int = 0,
        end_listeners: Optional[List[EndListener]] = None,
    ):
        self.settings = settings or GameSettings()
        s = self.settings
        # Inconsistent dimensions are rejected before any session can start.
        MazeGenerator.validate_dimensions(s.rows, s.cols)

        self.rng = rng if rng is not None else random.Random()
        self.generator = generator or MazeGenerator(
            self.rng,
            braid_chance=s.braid_chance,
            wheat_chance=s.wheat_chance,
            key_chance=s.key_chance,
            max_keys=s.max_keys,
        )
        self.planner = planner or PursuitPlanner(
            self.rng,
            random_turn_chance=s.random_turn_chance,
            max_iterations=s.search_max_iterations,
        )
        self.resolver = resolver or MotionResolver(
            speed=s.player_speed,
            margin=s.hitbox_margin,
            center_threshold=s.center_threshold,
            center_easing=s.center_easing,
        )

        self.phase = SessionPhase.NOT_STARTED
        self.grid: Optional[Grid] = None
        self.player: Optional[Position] = None
        self.player_facing = Direction.RIGHT
        self.pursuers: List[Pursuer] = []
        self.score = 0
        self.lives = 0
        self.wheat_remaining = 0
        self.speed_multiplier = 1.0
        self.best_score = best_score
        self.tick = 0
        self.elapsed = 0.0
        self.last_result: Optional[SessionResult] = None
        self.end_listeners: List[EndListener] = list(end_listeners or [])

    @property
    def running(self) -> bool:
        return self.phase is SessionPhase.RUNNING

    @property
    def ended(self) -> bool:
        return self.phase in (SessionPhase.WON, SessionPhase.LOST)

    @property
    def won(self) -> bool:
        return self.phase is SessionPhase.WON

    def add_end_listener(self, listener: EndListener) -> None:
        self.end_listeners.append(listener)

    def restart(self, grid: Optional[Grid] = None) -> SessionSnapshot:
        """Reset to RUNNING with a new maze, player, pursuers and counters.

        ``grid`` replaces the generated maze (custom layouts, tests).
        """

        s = self.settings
        self.grid = grid if grid is not None else self.generator.generate(s.rows, s.cols)
        self.score = 0
        self.lives = s.starting_lives
        self.wheat_remaining = self.grid.count_wheat()
        self.speed_multiplier = 1.0
        self.tick = 0
        self.elapsed = 0.0
        self.last_result = None
        self.player = Position.at(find_empty_cell(self.grid, self.rng))
        self.player_facing = Direction.RIGHT
        self.pursuers = self._spawn_pursuers()
        self.phase = SessionPhase.RUNNING
        return self.snapshot()

    def step(self, delta_time: float, intents: Intents = ()) -> SessionSnapshot:
        """Advance the session by one tick.

        ``delta_time`` is recorded in ``elapsed``; movement is a fixed
        distance per tick. Calls outside RUNNING return the snapshot unchanged.
        """

        if self.phase is not SessionPhase.RUNNING:
            return self.snapshot()
        if isinstance(intents, Direction):
            intents = (intents,)

        self.tick += 1
        self.elapsed += delta_time

        self._move_player(intents)
        self._collect()
        if self.phase is SessionPhase.RUNNING:
            self._move_pursuers()
            self._check_collisions()
        return self.snapshot()

    def _move_player(self, intents: Iterable[Direction]) -> None:
        intent = select_intent(intents)
        if intent is Direction.NONE:
            return
        self.player_facing = intent
        self.player = self.resolver.resolve(self.player, self.grid, intent)

    def _collect(self) -> None:
        cell = self.grid.cell_at(*self.player.cell)
        if cell is None:
            return

        if cell.has_wheat:
            cell.has_wheat = False
            self.score += self.settings.wheat_points
            self.wheat_remaining -= 1
            if self.wheat_remaining <= 0:
                self._finish(won=True)
                return

        if cell.has_key:
            cell.has_key = False
            self.score += self.settings.key_points
            factor = self.settings.key_speed_factor
            self.speed_multiplier *= factor
            for pursuer in self.pursuers:
                pursuer.speed *= factor
            if verbose_enabled():
                log_deterministic(
                    f"  {LOG_TAG_DETERMINISTIC} [Session] Key collected at {self.player.cell}; "
                    f"pursuer speed x{self.speed_multiplier:.4f}"
                )

    def _move_pursuers(self) -> None:
        target = self.player.cell
        snap_factor = self.settings.snap_factor
        for pursuer in self.pursuers:
            if pursuer.arrived:
                direction = self.planner.choose(self.grid, pursuer.cell, target, pursuer.direction)
                pursuer.depart(direction)
            pursuer.advance(snap_factor)
            pursuer.phase += self.settings.phase_step

    def _check_collisions(self) -> None:
        for pursuer in self.pursuers:
            if pursuer.position.distance_to(self.player) < self.settings.hit_distance:
                self._lose_life(pursuer)
                return

    def _lose_life(self, pursuer: Pursuer) -> None:
        self.lives -= 1
        if verbose_enabled():
            log_deterministic(
                f"  {LOG_TAG_DETERMINISTIC} [Session] Caught by {pursuer.kind.value} "
                f"at {self.player.cell}; {self.lives} lives left"
            )
        if self.lives <= 0:
            self._finish(won=False)
            return

        # Fresh placement for everyone so the player does not respawn into a hit.
        self.player = Position.at(find_empty_cell(self.grid, self.rng))
        self.pursuers = self._spawn_pursuers()

    def _spawn_pursuers(self) -> List[Pursuer]:
        avoid = {self.player.cell} if self.player is not None else set()
        speed = self.settings.pursuer_speed * self.speed_multiplier
        return [
            Pursuer(
                kind=kind,
                position=Position.at(find_empty_cell(self.grid, self.rng, avoid=avoid)),
                speed=speed,
                phase=self.rng.random() * 2 * math.pi,
            )
            for kind in PursuerKind
        ]

    def _finish(self, *, won: bool) -> None:
        self.phase = SessionPhase.WON if won else SessionPhase.LOST
        new_best = self.score > self.best_score
        if new_best:
            self.best_score = self.score

        result = SessionResult(
            score=self.score,
            won=won,
            ticks=self.tick,
            best_score=self.best_score,
            new_best=new_best,
        )
        self.last_result = result

        if verbose_enabled():
            if won:
                log_success(f"  {LOG_TAG_SUCCESS} [Session] Field harvested with {self.score} points")
            else:
                log_info(f"  {LOG_TAG_INFO} [Session] Out of lives with {self.score} points")

        for listener in self.end_listeners:
            try:
                listener(result)
            except Exception as exc:
                log_error(f"  {LOG_TAG_ERROR} [Session] End listener failed: {exc}")

    def snapshot(self, *, include_grid: bool = True) -> SessionSnapshot:
        """Fresh read-only copy for renderers; ``include_grid=False`` skips the maze."""
        return SessionSnapshot(
            tick=self.tick,
            phase=self.phase.value,
            running=self.running,
            ended=self.ended,
            won=self.won,
            score=self.score,
            best_score=self.best_score,
            lives=self.lives,
            wheat_remaining=self.wheat_remaining,
            speed_multiplier=self.speed_multiplier,
            player=_position_state(self.player) if self.player is not None else None,
            player_facing=self.player_facing.name,
            pursuers=[p.to_state() for p in self.pursuers],
            grid=self.grid.to_state() if include_grid and self.grid is not None else None,
        )
