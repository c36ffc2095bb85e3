"""Utility helpers for the game engine."""

from __future__ import annotations

from typing import Optional, List

from .board import Board, PIECE_VALUES
from .tetromino import Tetromino


BASE_GRAVITY_MS = 500.0
MIN_GRAVITY_MS = 20.0
GRAVITY_DECAY = 0.85


def gravity_interval_ms(
    level: int,
    *,
    base: float = BASE_GRAVITY_MS,
    floor: float = MIN_GRAVITY_MS,
    decay: float = GRAVITY_DECAY,
) -> float:
    """Return the fall interval in milliseconds for ``level``.

    The interval shrinks exponentially as the level rises, speeding up the
    falling pieces, and never drops below ``floor``.
    """

    return max(floor, base * (decay ** max(0, level)))


def can_move(board: Board, tetromino: Tetromino, dx: int, dy: int) -> bool:
    """Return ``True`` if ``tetromino`` can move by ``dx`` and ``dy`` on ``board``.

    Every block of the translated piece is checked with
    :meth:`Board.is_occupied`, which treats off-board cells as occupied.  The
    same check validates spawns and rotations when called with ``(0, 0)`` on a
    candidate piece.
    """

    for row, col in tetromino.blocks():
        if board.is_occupied(row + dy, col + dx):
            return False
    return True


def render_grid(board: Board, active: Optional[Tetromino] = None) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without mutating the underlying board state (i.e. without locking the
    piece). Cells occupied by the active piece receive the mapped integer
    value for the piece's shape.
    """

    grid = board.grid.tolist()
    if active is not None:
        for r, c in active.blocks():
            if board.in_bounds(r, c):
                grid[r][c] = PIECE_VALUES[active.shape]
    return grid
