"""Sources for the sequence of upcoming tetrominoes."""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional
import random

from .tetromino import TetrominoType


class PieceGenerator:
    """Queue of upcoming piece types refilled on demand.

    Subclasses implement :meth:`_refill`, which appends at least one type to
    ``self._queue``.
    """

    def __init__(self, *, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random(seed)
        self._queue: Deque[TetrominoType] = deque()

    def _refill(self) -> None:
        raise NotImplementedError

    def _ensure(self, count: int) -> None:
        while len(self._queue) < count:
            self._refill()

    def next(self) -> TetrominoType:
        """Remove and return the next piece type."""

        self._ensure(1)
        return self._queue.popleft()

    def peek(self, count: int = 1) -> List[TetrominoType]:
        """Return the next ``count`` types without consuming them."""

        if count <= 0:
            return []
        self._ensure(count)
        return [self._queue[i] for i in range(count)]


class BagGenerator(PieceGenerator):
    """7-bag randomizer.

    Each refill appends a shuffled permutation of all seven types, so any type
    reappears after at most 12 other pieces.
    """

    def _refill(self) -> None:
        bag = list(TetrominoType)
        self._rng.shuffle(bag)
        self._queue.extend(bag)


class UniformGenerator(PieceGenerator):
    """Independent uniform draws.

    Not fairness-bounded: droughts of any length are possible.
    """

    def _refill(self) -> None:
        self._queue.append(self._rng.choice(list(TetrominoType)))


GENERATORS = {
    "bag": BagGenerator,
    "uniform": UniformGenerator,
}


def make_generator(kind: str = "bag", seed: Optional[int] = None) -> PieceGenerator:
    """Return a generator for the randomizer named ``kind``."""

    try:
        cls = GENERATORS[kind]
    except KeyError:
        raise ValueError(f"Unknown randomizer: {kind!r}") from None
    return cls(seed=seed)


__all__ = ["PieceGenerator", "BagGenerator", "UniformGenerator", "make_generator"]
