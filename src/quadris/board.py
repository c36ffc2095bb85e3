"""Board representation for the playfield."""

from __future__ import annotations

from typing import Iterable, List, Tuple

import numpy as np
from numpy.typing import NDArray

from .tetromino import TetrominoType


# Dimensions of the standard board.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.uint8]
IdGrid = NDArray[np.uint32]

EMPTY = 0

# Mapping from ``TetrominoType`` to the integer stored in the grid.  ``0``
# represents an empty cell.
PIECE_VALUES = {t: i + 1 for i, t in enumerate(TetrominoType)}

# Tags for cells that belong to a converted 4x4 bonus square.
BONUS_GOLD = len(PIECE_VALUES) + 1
BONUS_SILVER = len(PIECE_VALUES) + 2


def create_empty_grid(height: int = HEIGHT, width: int = WIDTH) -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((height, width), dtype=np.uint8)


class Board:
    """Playfield holding the locked cells.

    ``grid`` stores the cell tags.  ``piece_ids`` is a parallel array recording
    which locked piece each cell came from; it is only consulted by bonus
    square detection and holds ``0`` wherever the origin is unknown.
    """

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Board dimensions must be positive")
        self.width = width
        self.height = height
        self.grid: Grid = create_empty_grid(height, width)
        self.piece_ids: IdGrid = np.zeros((height, width), dtype=np.uint32)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self.in_bounds(row, col):
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Safely set the value at ``(row, col)``.

        The origin of a cell written this way is unknown, so its piece id is
        cleared.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self.in_bounds(row, col):
            self.grid[row, col] = np.uint8(value)
            self.piece_ids[row, col] = 0
        else:
            raise IndexError("Cell out of bounds")

    def is_occupied(self, row: int, col: int) -> bool:
        """Return ``True`` if ``(row, col)`` is unavailable to a piece.

        Any coordinates outside the board count as occupied, so off-board
        positions are rejected by the same check as overlapping blocks.
        """

        if self.in_bounds(row, col):
            return bool(self.grid[row, col] != EMPTY)
        return True

    def place(self, cells: Iterable[Tuple[int, int]], tag: int, piece_id: int = 0) -> None:
        """Mark every in-bounds cell of ``cells`` with ``tag``.

        The caller must have checked that none of the cells collide; the board
        does not validate the placement beyond a debug assertion.  Cells above
        or beside the board are dropped.
        """

        for row, col in cells:
            if not self.in_bounds(row, col):
                continue
            assert self.grid[row, col] == EMPTY, f"cell {(row, col)} already occupied"
            self.grid[row, col] = np.uint8(tag)
            self.piece_ids[row, col] = piece_id

    def detect_full_rows(self) -> List[int]:
        """Return the indices of completely filled rows, top to bottom."""

        full_rows = np.all(self.grid != EMPTY, axis=1)
        return [int(r) for r in np.flatnonzero(full_rows)]

    def clear_rows(self, rows: Iterable[int]) -> int:
        """Remove ``rows`` and drop everything above them.

        All rows are removed together against the current layout, then empty
        rows are stacked on top so the height is unchanged.  Returns how many
        rows were removed.
        """

        keep = np.ones(self.height, dtype=bool)
        for row in rows:
            if 0 <= row < self.height:
                keep[row] = False
        cleared = int(np.count_nonzero(~keep))
        if cleared:
            new_rows = np.zeros((cleared, self.width), dtype=self.grid.dtype)
            self.grid = np.vstack((new_rows, self.grid[keep]))
            new_ids = np.zeros((cleared, self.width), dtype=self.piece_ids.dtype)
            self.piece_ids = np.vstack((new_ids, self.piece_ids[keep]))
        return cleared

    def clear_full_rows(self) -> int:
        """Clear completed rows and return how many were removed."""

        return self.clear_rows(self.detect_full_rows())

    def stack_height(self) -> int:
        """Return the height of the locked stack measured from the floor."""

        occupied = np.flatnonzero(np.any(self.grid != EMPTY, axis=1))
        if occupied.size == 0:
            return 0
        return self.height - int(occupied[0])

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.grid))
