"""High level game state container."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple
import logging

from .board import Board, PIECE_VALUES
from .bonus import apply_bonus_squares, bonus_points
from .commands import Command
from .config import GameConfig
from .controller import PieceController
from .generator import PieceGenerator, make_generator
from .tetromino import Tetromino, TetrominoType
from .utils import gravity_interval_ms


LOGGER = logging.getLogger(__name__)

# Points for clearing 1-4 rows at once, multiplied by ``level + 1``.
SCORE_TABLE: Dict[int, int] = {1: 100, 2: 300, 3: 500, 4: 800}


class Phase(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


def line_score(cleared: int, level: int) -> int:
    """Return the points for clearing ``cleared`` rows at ``level``."""

    if cleared <= 0:
        return 0
    return SCORE_TABLE[min(cleared, max(SCORE_TABLE))] * (level + 1)


@dataclass
class GameState:
    """Mutable state for a game session.

    The frame loop owns one instance and drives it through :meth:`handle` and
    :meth:`advance`.  Every game action is ignored unless the phase is
    :attr:`Phase.RUNNING`.
    """

    config: GameConfig = field(default_factory=GameConfig)
    generator: Optional[PieceGenerator] = None
    board: Board = field(init=False)
    controller: PieceController = field(default_factory=PieceController, init=False)
    phase: Phase = field(default=Phase.NOT_STARTED, init=False)
    score: int = field(default=0, init=False)
    lines: int = field(default=0, init=False)
    level: int = field(default=0, init=False)
    pieces: int = field(default=0, init=False)
    high_score: int = field(default=0, init=False)
    last_cleared: int = field(default=0, init=False)
    soft_dropping: bool = field(default=False, init=False)
    drop_accum: float = field(default=0.0, init=False)
    statistics: Counter = field(default_factory=Counter, init=False)

    def __post_init__(self) -> None:
        if self.generator is None:
            self.generator = make_generator(self.config.randomizer, self.config.seed)
        self.board = Board(self.config.width, self.config.height)
        self.level = self.config.start_level

    # ------------------------------------------------------------------
    # Read-only queries for renderers
    # ------------------------------------------------------------------
    @property
    def active(self) -> Optional[Tetromino]:
        return self.controller.active

    @property
    def held(self) -> Optional[TetrominoType]:
        return self.controller.held

    @property
    def running(self) -> bool:
        return self.phase is Phase.RUNNING

    @property
    def in_danger(self) -> bool:
        """``True`` while the stack reaches ``config.danger_height`` rows."""

        return self.board.stack_height() >= self.config.danger_height

    def active_blocks(self) -> List[Tuple[int, int]]:
        return self.active.blocks() if self.active else []

    def ghost_blocks(self) -> List[Tuple[int, int]]:
        return self.controller.ghost_blocks(self.board)

    def preview(self, count: Optional[int] = None) -> List[TetrominoType]:
        """Return the upcoming piece types without consuming them."""

        if count is None:
            count = self.config.preview_count
        return self.generator.peek(count)

    def drop_interval_ms(self) -> float:
        cfg = self.config
        interval = gravity_interval_ms(
            self.level, base=cfg.base_gravity_ms, floor=cfg.min_gravity_ms, decay=cfg.gravity_decay
        )
        if self.soft_dropping:
            return min(interval, cfg.soft_drop_ms)
        return interval

    # ------------------------------------------------------------------
    # Phase transitions
    # ------------------------------------------------------------------
    def reset_game(self) -> None:
        """Reset the board and counters and return to ``NOT_STARTED``.

        ``high_score`` survives resets.
        """

        self.board = Board(self.config.width, self.config.height)
        self.controller.reset()
        self.score = 0
        self.lines = 0
        self.level = self.config.start_level
        self.pieces = 0
        self.last_cleared = 0
        self.soft_dropping = False
        self.drop_accum = 0.0
        self.statistics.clear()
        self.phase = Phase.NOT_STARTED

    def start(self) -> bool:
        """Begin a game from ``NOT_STARTED``."""

        if self.phase is not Phase.NOT_STARTED:
            return False
        self.reset_game()
        self.phase = Phase.RUNNING
        LOGGER.info("Game started")
        self._spawn_next()
        return True

    def restart(self) -> bool:
        self.phase = Phase.NOT_STARTED
        return self.start()

    def pause(self) -> bool:
        if self.phase is not Phase.RUNNING:
            return False
        self.phase = Phase.PAUSED
        LOGGER.info("Paused")
        return True

    def resume(self) -> bool:
        if self.phase is not Phase.PAUSED:
            return False
        self.phase = Phase.RUNNING
        LOGGER.info("Resumed")
        return True

    def toggle_pause(self) -> bool:
        if self.phase is Phase.PAUSED:
            return self.resume()
        return self.pause()

    def game_over(self) -> None:
        """Enter the terminal phase and record the high score."""

        self.phase = Phase.GAME_OVER
        self.soft_dropping = False
        if self.score > self.high_score:
            self.high_score = self.score
        LOGGER.info(
            "Game over. Score: %d, lines: %d, level: %d", self.score, self.lines, self.level
        )

    # ------------------------------------------------------------------
    # Piece actions
    # ------------------------------------------------------------------
    def move(self, dx: int) -> bool:
        if not self.running:
            return False
        return self.controller.try_move(self.board, dx, 0)

    def rotate(self, direction: int = 1) -> bool:
        if not self.running:
            return False
        return self.controller.try_rotate(self.board, direction)

    def set_soft_drop(self, active: bool) -> None:
        if self.running:
            self.soft_dropping = active

    def soft_drop_tick(self) -> bool:
        """Move the piece one row down, locking it if it cannot fall.

        Returns ``True`` if the piece moved.
        """

        if not self.running or self.active is None:
            return False
        if self.controller.try_move(self.board, 0, 1):
            return True
        self._lock()
        return False

    def gravity_tick(self) -> bool:
        return self.soft_drop_tick()

    def hard_drop(self) -> int:
        """Drop the piece to the floor and lock it; return rows travelled."""

        if not self.running or self.active is None:
            return 0
        distance = self.controller.hard_drop(self.board)
        self._lock()
        return distance

    def hold(self) -> bool:
        if not self.running:
            return False
        drew = self.controller.held is None
        swapped = self.controller.hold(self.board, self._draw)
        if swapped and self.active is None:
            self.game_over()
        elif swapped:
            if drew:
                self.statistics[self.active.shape] += 1
            self.drop_accum = 0.0
        return swapped

    def advance(self, dt_ms: float) -> bool:
        """Accumulate frame time and apply at most one gravity tick.

        Returns ``True`` if a gravity tick happened.
        """

        if not self.running:
            return False
        self.drop_accum += dt_ms
        if self.drop_accum < self.drop_interval_ms():
            return False
        self.drop_accum = 0.0
        self.gravity_tick()
        return True

    def handle(self, command: Command) -> bool:
        """Apply a discrete input command.

        Returns whether the command changed anything.  Commands this class does
        not know about, including audio commands, are ignored.
        """

        if command is Command.START_NEW_GAME:
            return self.restart()
        if command is Command.PAUSE_TOGGLE:
            return self.toggle_pause()
        if command is Command.MOVE_LEFT:
            return self.move(-1)
        if command is Command.MOVE_RIGHT:
            return self.move(1)
        if command is Command.ROTATE_CW:
            return self.rotate(1)
        if command is Command.ROTATE_CCW:
            return self.rotate(-1)
        if command is Command.HARD_DROP:
            if not self.running or self.active is None:
                return False
            self.hard_drop()
            return True
        if command is Command.HOLD:
            return self.hold()
        if command is Command.SOFT_DROP_START:
            if not self.running:
                return False
            self.set_soft_drop(True)
            return self.soft_drop_tick()
        if command is Command.SOFT_DROP_STOP:
            self.set_soft_drop(False)
            return False
        return False

    # ------------------------------------------------------------------
    # Lock / clear / spawn cycle
    # ------------------------------------------------------------------
    def _draw(self) -> TetrominoType:
        return self.generator.next()

    def _spawn_next(self) -> bool:
        shape = self._draw()
        if not self.controller.try_spawn(self.board, shape):
            self.game_over()
            return False
        self.statistics[shape] += 1
        self.drop_accum = 0.0
        return True

    def _mark_bonus_squares(self) -> None:
        if not self.config.bonus_squares:
            return
        for square in apply_bonus_squares(self.board):
            LOGGER.debug(
                "%s square at (%d, %d)", "Gold" if square.gold else "Silver", square.row, square.col
            )

    def _lock(self) -> None:
        piece = self.active
        if piece is None:
            return
        self.pieces += 1
        self.board.place(piece.blocks(), PIECE_VALUES[piece.shape], piece_id=self.pieces)
        self.controller.active = None
        LOGGER.debug("Locked %s at %s", piece.shape.value, piece.position)

        self._mark_bonus_squares()

        rows = self.board.detect_full_rows()
        self.last_cleared = len(rows)
        if rows:
            bonus = bonus_points(self.board, rows)
            self.board.clear_rows(rows)
            gained = line_score(len(rows), self.level) + bonus
            self.score += gained
            self.lines += len(rows)
            level = self.config.start_level + self.lines // self.config.lines_per_level
            if level != self.level:
                LOGGER.info("Level %d", level)
            self.level = level
            LOGGER.debug("Cleared %d row(s) for %d. Score: %d", len(rows), gained, self.score)
            # Rows dropping down can complete a square.
            self._mark_bonus_squares()

        self._spawn_next()
