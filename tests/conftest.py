from __future__ import annotations

import itertools
import os
from typing import Iterable

import pytest

# pygame must never open a real window or audio device during tests.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from quadris.config import GameConfig
from quadris.game_state import GameState
from quadris.generator import PieceGenerator
from quadris.tetromino import TetrominoType


class SequenceGenerator(PieceGenerator):
    """Deterministic generator cycling through a fixed list of types."""

    def __init__(self, shapes: Iterable[TetrominoType]) -> None:
        super().__init__(seed=0)
        self._cycle = itertools.cycle(list(shapes))

    def _refill(self) -> None:
        self._queue.append(next(self._cycle))


@pytest.fixture
def make_state():
    def factory(*shapes: TetrominoType, **config) -> GameState:
        sequence = shapes or (TetrominoType.O,)
        return GameState(GameConfig(**config), generator=SequenceGenerator(sequence))

    return factory
