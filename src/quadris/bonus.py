"""Gold and silver bonus squares.

A 4x4 region counts as a bonus square when it is covered by exactly four
complete locked pieces: every piece id inside the region must have all four of
its cells inside it.  If the four pieces share a type the square is gold,
otherwise silver.  Converted cells are retagged and lose their piece id, and a
row that is cleared while containing bonus cells pays extra points.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

import numpy as np

from .board import BONUS_GOLD, BONUS_SILVER, EMPTY, Board


SQUARE_SIZE = 4
GOLD_POINTS = 500
SILVER_POINTS = 200


@dataclass(frozen=True)
class BonusSquare:
    row: int
    col: int
    gold: bool


def _square_at(board: Board, row: int, col: int) -> BonusSquare | None:
    tags = board.grid[row : row + SQUARE_SIZE, col : col + SQUARE_SIZE]
    if np.any(tags == EMPTY) or np.any(tags >= BONUS_GOLD):
        return None
    ids = board.piece_ids[row : row + SQUARE_SIZE, col : col + SQUARE_SIZE]
    if np.any(ids == 0):
        return None

    types = set()
    for pid in np.unique(ids):
        inside = int(np.count_nonzero(ids == pid))
        if inside != 4 or int(np.count_nonzero(board.piece_ids == pid)) != 4:
            return None
        types.add(int(tags[ids == pid][0]))
    return BonusSquare(row=row, col=col, gold=len(types) == 1)


def find_bonus_squares(board: Board) -> List[BonusSquare]:
    """Return the bonus squares present on ``board``, scanning top-left first.

    Overlapping candidates are resolved greedily: once a square is accepted its
    cells no longer qualify for another one.
    """

    found: List[BonusSquare] = []
    taken = np.zeros(board.grid.shape, dtype=bool)
    for row in range(board.height - SQUARE_SIZE + 1):
        for col in range(board.width - SQUARE_SIZE + 1):
            if np.any(taken[row : row + SQUARE_SIZE, col : col + SQUARE_SIZE]):
                continue
            square = _square_at(board, row, col)
            if square is not None:
                found.append(square)
                taken[row : row + SQUARE_SIZE, col : col + SQUARE_SIZE] = True
    return found


def apply_bonus_squares(board: Board) -> List[BonusSquare]:
    """Convert every bonus square on ``board`` and return them."""

    squares = find_bonus_squares(board)
    for sq in squares:
        area = (slice(sq.row, sq.row + SQUARE_SIZE), slice(sq.col, sq.col + SQUARE_SIZE))
        board.grid[area] = BONUS_GOLD if sq.gold else BONUS_SILVER
        board.piece_ids[area] = 0
    return squares


def bonus_points(board: Board, rows: Iterable[int]) -> int:
    """Return the bonus paid for clearing ``rows``.

    Each row pays once: gold takes precedence over silver.
    """

    points = 0
    for row in rows:
        cells = board.grid[row]
        if np.any(cells == BONUS_GOLD):
            points += GOLD_POINTS
        elif np.any(cells == BONUS_SILVER):
            points += SILVER_POINTS
    return points


__all__ = [
    "BonusSquare",
    "GOLD_POINTS",
    "SILVER_POINTS",
    "apply_bonus_squares",
    "bonus_points",
    "find_bonus_squares",
]
