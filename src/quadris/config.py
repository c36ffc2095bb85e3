"""Tunable rules for a game session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .board import HEIGHT, WIDTH
from .generator import GENERATORS
from .utils import BASE_GRAVITY_MS, GRAVITY_DECAY, MIN_GRAVITY_MS


@dataclass(frozen=True)
class GameConfig:
    """Settings fixed for the lifetime of a :class:`~quadris.GameState`.

    Raises:
        ValueError: If any value is out of range.
    """

    width: int = WIDTH
    height: int = HEIGHT
    lines_per_level: int = 10
    start_level: int = 0
    base_gravity_ms: float = BASE_GRAVITY_MS
    min_gravity_ms: float = MIN_GRAVITY_MS
    gravity_decay: float = GRAVITY_DECAY
    soft_drop_ms: float = 50.0
    randomizer: str = "bag"
    seed: Optional[int] = None
    preview_count: int = 3
    bonus_squares: bool = True
    danger_height: int = 12

    def __post_init__(self) -> None:
        # Every piece fits a 4x4 box.
        if self.width < 4 or self.height < 4:
            raise ValueError("Board must be at least 4x4")
        if self.lines_per_level <= 0:
            raise ValueError("lines_per_level must be positive")
        if self.start_level < 0:
            raise ValueError("start_level cannot be negative")
        if self.min_gravity_ms <= 0 or self.base_gravity_ms < self.min_gravity_ms:
            raise ValueError("Gravity interval must be positive and above its floor")
        if not 0 < self.gravity_decay <= 1:
            raise ValueError("gravity_decay must be in (0, 1]")
        if self.soft_drop_ms <= 0:
            raise ValueError("soft_drop_ms must be positive")
        if self.randomizer not in GENERATORS:
            raise ValueError(f"Unknown randomizer: {self.randomizer!r}")
        if self.preview_count < 0:
            raise ValueError("preview_count cannot be negative")
