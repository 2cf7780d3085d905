"""
Game loop driver.

The core is tick-driven and never sleeps; this module is the external tick
source. It owns the cadence, samples input once per tick, feeds
``SessionState.step`` and forwards the resulting snapshot to listeners
(renderers, analytics). When a session ends it hands the result to the
injected ``ScoreStore`` and feeds the stored best score back into the
session for display.

All mutation goes through ``step`` on a single task, so movement, pickup,
pursuit and collision always happen in that order within a tick.
"""

import asyncio
import time
from typing import Callable, Iterable, List, Optional

from .config import Config
from .logging_utils import (
    LOG_TAG_DETERMINISTIC,
    LOG_TAG_ERROR,
    LOG_TAG_SUCCESS,
    Color,
    colored,
    log_error,
)
from .motion import Direction
from .persistence import InMemoryScoreStore, ScoreStore
from .schemas import SessionResult, SessionSnapshot
from .session import SessionState

InputSource = Callable[[], Iterable[Direction]]
TickListener = Callable[[int, SessionSnapshot], None]


def _no_input() -> Iterable[Direction]:
    return ()


class GameLoop:
    """Drives one ``SessionState`` at a fixed cadence.

    Args:
        session: Session to drive.
        score_store: Best-score backend; defaults to ``InMemoryScoreStore``.
        input_source: Called once per tick, returns the held directions.
        tick_listeners: Called with ``(tick, snapshot)`` after every step.
            Listener failures are logged and do not stop the loop.
        tick_seconds: Wall-clock pause between ticks; 0 runs as fast as
            possible. Defaults to ``1 / Config.TICK_RATE``.
    """

    def __init__(
        self,
        session: SessionState,
        *,
        score_store: Optional[ScoreStore] = None,
        input_source: Optional[InputSource] = None,
        tick_listeners: Optional[List[TickListener]] = None,
        tick_seconds: Optional[float] = None,
    ):
        self.session = session
        self.score_store = score_store or InMemoryScoreStore()
        self.input_source = input_source or _no_input
        self.tick_listeners: List[TickListener] = list(tick_listeners or [])
        self.tick_seconds = tick_seconds if tick_seconds is not None else 1.0 / Config.TICK_RATE
        self.results: List[SessionResult] = []
        self._pending: List[SessionResult] = []
        self._store_ready = False
        self._last_tick_time: Optional[float] = None
        session.add_end_listener(self._pending.append)

    async def start(self) -> SessionSnapshot:
        """Begin a new session: load the best score, then ``restart()``."""
        if not self._store_ready:
            await self.score_store.initialize()
            self._store_ready = True

        stored_best = await self.score_store.load_best_score()
        self.session.best_score = max(self.session.best_score, stored_best)
        snapshot = self.session.restart()
        self._last_tick_time = None
        print(
            colored(
                f"  {LOG_TAG_DETERMINISTIC} [Driver] Session started: "
                f"{snapshot.wheat_remaining} wheat, {snapshot.lives} lives, best {snapshot.best_score}",
                Color.BLUE,
            )
        )
        return snapshot

    async def restart(self) -> SessionSnapshot:
        return await self.start()

    async def tick(self, delta_time: Optional[float] = None) -> SessionSnapshot:
        """Run exactly one session step and notify listeners."""
        if delta_time is None:
            now = time.monotonic()
            delta_time = self.tick_seconds if self._last_tick_time is None else now - self._last_tick_time
            self._last_tick_time = now

        intents = list(self.input_source())
        snapshot = self.session.step(delta_time, intents)
        await self._flush_results()

        for listener in self.tick_listeners:
            try:
                listener(snapshot.tick, snapshot)
            except Exception as exc:
                log_error(f"  {LOG_TAG_ERROR} [Driver] Tick listener failed: {exc}")
        return snapshot

    async def run(self, num_ticks: Optional[int] = None) -> Optional[SessionResult]:
        """Tick until the session ends or ``num_ticks`` ticks have run.

        Starts a session first if none is running. Returns the session result,
        or None if the tick budget ran out first. The score store is always
        closed on exit.
        """

        try:
            if not self.session.running:
                await self.start()

            ticks = 0
            while self.session.running and (num_ticks is None or ticks < num_ticks):
                await self.tick()
                ticks += 1
                if self.session.running and self.tick_seconds > 0:
                    await asyncio.sleep(self.tick_seconds)

            result = self.session.last_result if self.session.ended else None
            if result is not None:
                outcome = "won" if result.won else "lost"
                print(
                    colored(
                        f"  {LOG_TAG_SUCCESS} [Driver] Session {outcome} with {result.score} points "
                        f"(best {result.best_score})",
                        Color.GREEN,
                    )
                )
            return result
        finally:
            await self.score_store.close()
            self._store_ready = False

    async def _flush_results(self) -> None:
        while self._pending:
            result = self._pending.pop(0)
            best = await self.score_store.save_result(result)
            self.session.best_score = max(self.session.best_score, best)
            self.results.append(result)
