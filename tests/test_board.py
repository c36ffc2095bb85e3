from __future__ import annotations

import numpy as np
import pytest

from quadris.board import Board, PIECE_VALUES
from quadris.tetromino import TetrominoType


def test_out_of_bounds_is_occupied() -> None:
    board = Board()
    for row, col in [(-1, 0), (0, -1), (board.height, 0), (0, board.width), (-5, 99)]:
        assert board.is_occupied(row, col)
    assert not board.is_occupied(0, 0)


def test_get_and_set_cell_raise_off_board() -> None:
    board = Board()
    with pytest.raises(IndexError):
        board.get_cell(board.height, 0)
    with pytest.raises(IndexError):
        board.set_cell(0, -1, 1)


def test_place_marks_cells_and_skips_cells_above_board() -> None:
    board = Board()
    tag = PIECE_VALUES[TetrominoType.T]
    board.place([(-1, 4), (0, 4), (0, 5)], tag, piece_id=3)
    assert board.get_cell(0, 4) == tag
    assert board.get_cell(0, 5) == tag
    assert board.occupied_count() == 2
    assert board.piece_ids[0, 4] == 3


def test_place_asserts_on_overlap() -> None:
    board = Board()
    board.set_cell(5, 5, 1)
    with pytest.raises(AssertionError):
        board.place([(5, 5)], 2)


def test_detect_full_rows_top_to_bottom() -> None:
    board = Board()
    for row in (17, 12, 19):
        board.grid[row] = 1
    board.grid[15, :-1] = 1
    assert board.detect_full_rows() == [12, 17, 19]


def test_clear_rows_keeps_order_and_height() -> None:
    board = Board()
    for row in range(board.height):
        board.grid[row, 0] = row + 1
    markers = [int(v) for v in board.grid[:, 0]]

    assert board.clear_rows([2, 5]) == 2

    assert board.grid.shape == (board.height, board.width)
    remaining = [m for i, m in enumerate(markers) if i not in (2, 5)]
    assert [int(v) for v in board.grid[2:, 0]] == remaining
    assert not board.grid[:2].any()


def test_clear_non_adjacent_full_rows_in_one_pass() -> None:
    board = Board()
    board.grid[19] = 1
    board.grid[17] = 1
    board.set_cell(18, 0, 2)
    board.set_cell(16, 3, 3)

    assert board.clear_full_rows() == 2

    assert board.get_cell(19, 0) == 2
    assert board.get_cell(18, 3) == 3
    assert board.occupied_count() == 2


def test_clear_rows_moves_piece_ids() -> None:
    board = Board()
    board.place([(10, 1)], 1, piece_id=9)
    board.grid[19] = 1
    board.clear_rows([19])
    assert board.piece_ids[11, 1] == 9
    assert board.piece_ids[10, 1] == 0


def test_stack_height() -> None:
    board = Board()
    assert board.stack_height() == 0
    board.set_cell(15, 2, 1)
    assert board.stack_height() == 5


def test_custom_dimensions() -> None:
    board = Board(width=6, height=8)
    assert board.grid.shape == (8, 6)
    assert board.is_occupied(0, 6)
    assert np.count_nonzero(board.grid) == 0
    with pytest.raises(ValueError):
        Board(width=0)
