"""
Headless Mazechase

Runs a session with a simple autopilot that walks toward the nearest wheat,
printing the maze every few ticks. The best score is kept in a JSON file
(MAZECHASE_SCORE_PATH, default highscore.json).

Run: uv run python examples/headless/run.py [seed]
"""

import asyncio
import random
import sys
from typing import List

from mazechase import (
    Config,
    Direction,
    GameLoop,
    JsonScoreStore,
    SessionSnapshot,
    SessionState,
    next_step,
    render_ascii,
)

RENDER_EVERY = 120

PURSUER_MARKERS = {
    "rabbit": "R",
    "crow": "C",
    "boar": "B",
    "fox": "F",
}


def make_autopilot(session: SessionState):
    """Return an input source that steers toward the closest wheat cell."""

    def held() -> List[Direction]:
        px, py = session.player.cell
        wheat = [
            (x, y)
            for y, row in enumerate(session.grid.cells)
            for x, cell in enumerate(row)
            if cell.has_wheat
        ]
        if not wheat:
            return []
        target = min(wheat, key=lambda c: abs(c[0] - px) + abs(c[1] - py))
        step = next_step(session.grid, (px, py), target)
        return [step] if step is not Direction.NONE else []

    return held


def render(tick: int, snapshot: SessionSnapshot) -> None:
    if tick % RENDER_EVERY and not snapshot.ended:
        return

    markers = {
        (p.position.cell_x, p.position.cell_y): PURSUER_MARKERS[p.kind]
        for p in snapshot.pursuers
    }
    if snapshot.player is not None:
        markers[(snapshot.player.cell_x, snapshot.player.cell_y)] = "@"

    print(f"\nTick {tick} | score {snapshot.score} | lives {snapshot.lives} | wheat left {snapshot.wheat_remaining}")
    print(render_ascii(snapshot.grid, markers=markers))


async def main():
    seed = int(sys.argv[1]) if len(sys.argv) > 1 else None

    print(Config.display())
    session = SessionState(Config.game_settings(), rng=random.Random(seed))
    loop = GameLoop(
        session,
        score_store=JsonScoreStore(),
        input_source=make_autopilot(session),
        tick_listeners=[render],
        tick_seconds=0,
    )

    result = await loop.run(num_ticks=20_000)
    if result is None:
        print("\nTick budget exhausted before the session ended.")
    elif result.new_best:
        print(f"\nNew best score: {result.score}")


if __name__ == "__main__":
    asyncio.run(main())
