"""
ScoreStore interface for pluggable best-score storage.

The core never reads or writes storage itself: a session only emits a
``SessionResult`` when it ends and accepts a best score for display. The
driver (``GameLoop``) connects the two through a ``ScoreStore``.

Two included implementations:
1. InMemoryScoreStore - dict/list storage, lost on exit (tests, prototyping)
2. JsonScoreStore - single human-readable JSON file (local play)

Usage pattern:
    store = JsonScoreStore("highscore.json")
    await store.initialize()
    best = await store.load_best_score()
    ...
    await store.save_result(result)
    await store.close()
"""

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from .config import Config
from .schemas import SessionResult


class ScoreStore(ABC):
    """Abstract base class for best-score persistence.

    All methods are async so file or network backends do not block the
    driver loop; for the in-memory store they return immediately.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the backend (create directories, open connections)."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release backend resources."""
        pass

    @abstractmethod
    async def load_best_score(self) -> int:
        """Return the best recorded score, or 0 when nothing is stored."""
        pass

    @abstractmethod
    async def save_result(self, result: SessionResult) -> int:
        """Record a finished session and return the (possibly new) best score."""
        pass

    @abstractmethod
    async def get_results(self, limit: Optional[int] = None) -> List[SessionResult]:
        """Return recorded results, most recent first."""
        pass


class InMemoryScoreStore(ScoreStore):
    """Score storage held in process memory."""

    def __init__(self, best_score: int = 0):
        self.best_score = best_score
        self.results: List[SessionResult] = []

    async def initialize(self) -> None:
        return None

    async def close(self) -> None:
        return None

    async def load_best_score(self) -> int:
        return self.best_score

    async def save_result(self, result: SessionResult) -> int:
        self.results.append(result)
        if result.score > self.best_score:
            self.best_score = result.score
        return self.best_score

    async def get_results(self, limit: Optional[int] = None) -> List[SessionResult]:
        ordered = list(reversed(self.results))
        return ordered if limit is None else ordered[:limit]


class JsonScoreStore(ScoreStore):
    """File-based score storage.

    File layout:
    ```json
    {
      "best_score": 420,
      "results": [{"score": 420, "won": true, ...}, ...]
    }
    ```

    File I/O runs in a thread (``asyncio.to_thread``). A missing file reads as
    an empty history; a corrupt file raises ``json.JSONDecodeError``.
    """

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path is not None else Config.SCORE_PATH

    async def initialize(self) -> None:
        await asyncio.to_thread(self.path.parent.mkdir, parents=True, exist_ok=True)

    async def close(self) -> None:
        # Nothing to clean up for JSON storage
        return None

    async def load_best_score(self) -> int:
        payload = await asyncio.to_thread(self._read)
        return int(payload.get("best_score", 0))

    async def save_result(self, result: SessionResult) -> int:
        entry = result.model_dump(mode="json")

        def _update() -> int:
            payload = self._read()
            payload.setdefault("results", []).append(entry)
            best = max(int(payload.get("best_score", 0)), result.score)
            payload["best_score"] = best
            self.path.write_text(json.dumps(payload, indent=2), "utf-8")
            return best

        return await asyncio.to_thread(_update)

    async def get_results(self, limit: Optional[int] = None) -> List[SessionResult]:
        payload = await asyncio.to_thread(self._read)
        results = [SessionResult.model_validate(item) for item in payload.get("results", [])]
        results.reverse()
        return results if limit is None else results[:limit]

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        return json.loads(self.path.read_text("utf-8"))
