"""Tetromino definitions and basic behaviour.

Every piece is described by its spawn orientation inside a square bounding box.
The remaining three orientations are derived by rotating that box clockwise, so
a piece turns in place instead of drifting towards the top-left corner.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

RotationState = List[Tuple[int, int]]

ROTATION_COUNT = 4


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


def _rotate(state: RotationState, size: int) -> RotationState:
    """Return ``state`` rotated 90 degrees clockwise inside a ``size`` box."""

    return sorted((c, size - 1 - r) for r, c in state)


def _generate_rotations(state: RotationState, size: int) -> List[RotationState]:
    """Generate the four rotation states for a piece starting from ``state``."""

    rotations = [sorted(state)]
    for _ in range(ROTATION_COUNT - 1):
        state = _rotate(state, size)
        rotations.append(state)
    return rotations


# Spawn orientation and bounding box size for each tetromino.
_BASE_SHAPES: Dict[TetrominoType, Tuple[RotationState, int]] = {
    TetrominoType.I: ([(1, 0), (1, 1), (1, 2), (1, 3)], 4),
    TetrominoType.O: ([(0, 0), (0, 1), (1, 0), (1, 1)], 2),
    TetrominoType.T: ([(0, 1), (1, 0), (1, 1), (1, 2)], 3),
    TetrominoType.S: ([(0, 1), (0, 2), (1, 0), (1, 1)], 3),
    TetrominoType.Z: ([(0, 0), (0, 1), (1, 1), (1, 2)], 3),
    TetrominoType.J: ([(0, 0), (1, 0), (1, 1), (1, 2)], 3),
    TetrominoType.L: ([(0, 2), (1, 0), (1, 1), (1, 2)], 3),
}

BOX_SIZES: Dict[TetrominoType, int] = {t: size for t, (_, size) in _BASE_SHAPES.items()}

TETROMINO_SHAPES: Dict[TetrominoType, List[RotationState]] = {
    t_type: _generate_rotations(shape, size)
    for t_type, (shape, size) in _BASE_SHAPES.items()
}


def shape_blocks(shape: TetrominoType, rotation: int) -> RotationState:
    """Return the block offsets for ``shape`` at ``rotation``.

    Parameters
    ----------
    shape:
        The :class:`TetrominoType` to query.
    rotation:
        Index of the desired rotation state.  Values are wrapped so any integer
        is accepted.
    """

    states = TETROMINO_SHAPES[shape]
    return states[rotation % len(states)]


def spawn_position(shape: TetrominoType, width: int) -> Tuple[int, int]:
    """Return the ``(row, col)`` anchor a fresh ``shape`` spawns at.

    The bounding box is centred horizontally and shifted so the topmost block
    of the spawn orientation sits on row ``0``.
    """

    top = min(r for r, _ in shape_blocks(shape, 0))
    return (-top, (width - BOX_SIZES[shape]) // 2)


@dataclass
class Tetromino:
    """Active falling piece in the game."""

    shape: TetrominoType
    rotation: int = 0
    position: Tuple[int, int] = (0, 0)  # (row, col)

    def rotate(self, direction: int = 1) -> None:
        """Rotate the piece.

        Parameters
        ----------
        direction:
            Positive values rotate clockwise whilst negative values rotate
            counter-clockwise.  The rotation wraps around the number of
            available states.
        """

        self.rotation = (self.rotation + direction) % ROTATION_COUNT

    def move(self, dx: int, dy: int) -> None:
        """Move the piece by the given offsets.

        ``dx`` moves horizontally (columns) and ``dy`` moves vertically
        (rows).  The piece's position is stored as ``(row, col)``.
        """

        row, col = self.position
        self.position = (row + dy, col + dx)

    def blocks(self) -> List[Tuple[int, int]]:
        """Return the global block coordinates for this piece."""

        row, col = self.position
        state = shape_blocks(self.shape, self.rotation)
        return [(row + dr, col + dc) for dr, dc in state]
