"""Injectable random sources.

Every random decision in the core (carving, braiding, collectible seeding,
spawn placement, random pursuer turns) goes through a ``RandomSource``.
``random.Random`` already satisfies the protocol; ``ScriptedRandom`` replays
a fixed sequence so tests can assert exact mazes and placements.
"""

from __future__ import annotations

from typing import Iterable, List, Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """The subset of ``random.Random`` the simulation relies on."""

    def random(self) -> float:
        ...

    def choice(self, seq: Sequence[T]) -> T:
        ...

    def randrange(self, stop: int) -> int:
        ...


class ScriptedRandom:
    """Replays a fixed list of floats in ``[0, 1)``.

    ``choice`` and ``randrange`` consume one value each and scale it, so a
    script describes every decision with a single number. Once the script is
    exhausted the ``default`` value is returned forever.
    """

    def __init__(self, values: Iterable[float], *, default: float = 0.0):
        self._values: List[float] = list(values)
        self._index = 0
        self.default = default

    @property
    def consumed(self) -> int:
        return self._index

    def random(self) -> float:
        if self._index < len(self._values):
            value = self._values[self._index]
            self._index += 1
            return value
        return self.default

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[min(int(self.random() * len(seq)), len(seq) - 1)]

    def randrange(self, stop: int) -> int:
        if stop <= 0:
            raise ValueError("empty range for randrange()")
        return min(int(self.random() * stop), stop - 1)
