"""Movement rules for the falling piece."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, List, Optional, Tuple

from .board import Board
from .tetromino import Tetromino, TetrominoType, spawn_position
from .utils import can_move


# Anchor corrections tried in order when a rotation collides, as ``(dx, dy)``.
# ``dy = -1`` lifts the piece one row and ``dy = 1`` pushes it down one, which an
# ``I`` on its spawn row needs to stand upright.  The two-column shifts let an
# ``I`` piece turn flat against a wall.
KICK_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (0, 0),
    (-1, 0),
    (1, 0),
    (0, -1),
    (0, 1),
    (-2, 0),
    (2, 0),
)


class PieceController:
    """Track the active piece and the hold slot.

    Every operation receives the board purely as a collision oracle and either
    applies a fully validated change or leaves the piece untouched.
    """

    def __init__(self) -> None:
        self.active: Optional[Tetromino] = None
        self.held: Optional[TetrominoType] = None
        self.hold_used = False

    def reset(self) -> None:
        self.active = None
        self.held = None
        self.hold_used = False

    def _spawned(self, board: Board, shape: TetrominoType) -> Tetromino:
        return Tetromino(shape, position=spawn_position(shape, board.width))

    def try_spawn(self, board: Board, shape: TetrominoType) -> bool:
        """Make a fresh ``shape`` the active piece.

        Returns ``False`` when the spawn cells are blocked, which means the
        stack has reached the top.  The active piece is cleared in that case and
        the board is never touched.
        """

        piece = self._spawned(board, shape)
        if not can_move(board, piece, 0, 0):
            self.active = None
            return False
        self.active = piece
        self.hold_used = False
        return True

    def try_move(self, board: Board, dx: int, dy: int) -> bool:
        if self.active is None or not can_move(board, self.active, dx, dy):
            return False
        self.active.move(dx, dy)
        return True

    def try_rotate(self, board: Board, direction: int = 1) -> bool:
        """Rotate the active piece, applying the first kick that fits."""

        if self.active is None:
            return False
        step = 1 if direction > 0 else -1
        rotated = replace(self.active)
        rotated.rotate(step)
        for dx, dy in KICK_OFFSETS:
            if can_move(board, rotated, dx, dy):
                rotated.move(dx, dy)
                self.active = rotated
                return True
        return False

    def hard_drop(self, board: Board) -> int:
        """Move the active piece straight down and return the rows travelled."""

        distance = 0
        while self.try_move(board, 0, 1):
            distance += 1
        return distance

    def ghost_blocks(self, board: Board) -> List[Tuple[int, int]]:
        """Return where the active piece would come to rest."""

        if self.active is None:
            return []
        ghost = replace(self.active)
        while can_move(board, ghost, 0, 1):
            ghost.move(0, 1)
        return ghost.blocks()

    def hold(self, board: Board, draw: Callable[[], TetrominoType]) -> bool:
        """Swap the active piece with the hold slot.

        Allowed once per spawned piece.  With an empty slot the active type is
        stored and ``draw`` supplies the replacement, which may fail to spawn
        and leave ``active`` as ``None``.  Otherwise the held type re-enters at
        its spawn position; if that is blocked nothing changes.
        """

        if self.active is None or self.hold_used:
            return False

        current = self.active.shape
        if self.held is None:
            self.held = current
            self.try_spawn(board, draw())
        else:
            candidate = self._spawned(board, self.held)
            if not can_move(board, candidate, 0, 0):
                return False
            self.active = candidate
            self.held = current

        self.hold_used = True
        return True


__all__ = ["PieceController", "KICK_OFFSETS"]
