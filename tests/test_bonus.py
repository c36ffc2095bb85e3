from __future__ import annotations

import numpy as np

from quadris.board import BONUS_GOLD, BONUS_SILVER, Board, PIECE_VALUES
from quadris.bonus import (
    GOLD_POINTS,
    SILVER_POINTS,
    apply_bonus_squares,
    bonus_points,
    find_bonus_squares,
)
from quadris.game_state import SCORE_TABLE
from quadris.tetromino import Tetromino, TetrominoType


def _place(board: Board, piece: Tetromino, piece_id: int) -> None:
    board.place(piece.blocks(), PIECE_VALUES[piece.shape], piece_id=piece_id)


def _four_os(board: Board) -> None:
    for pid, pos in enumerate([(18, 0), (18, 2), (16, 0), (16, 2)], start=1):
        _place(board, Tetromino(TetrominoType.O, position=pos), pid)


def test_four_matching_pieces_make_gold_square() -> None:
    board = Board()
    _four_os(board)

    squares = apply_bonus_squares(board)

    assert len(squares) == 1
    assert squares[0].gold
    assert (squares[0].row, squares[0].col) == (16, 0)
    assert (board.grid[16:20, 0:4] == BONUS_GOLD).all()
    assert not board.piece_ids[16:20, 0:4].any()


def test_mixed_pieces_make_silver_square() -> None:
    board = Board()
    _place(board, Tetromino(TetrominoType.O, position=(18, 0)), 1)
    _place(board, Tetromino(TetrominoType.O, position=(18, 2)), 2)
    _place(board, Tetromino(TetrominoType.I, position=(16, 0)), 3)
    _place(board, Tetromino(TetrominoType.I, position=(15, 0)), 4)

    squares = apply_bonus_squares(board)

    assert [sq.gold for sq in squares] == [False]
    assert (board.grid[16:20, 0:4] == BONUS_SILVER).all()


def test_piece_sticking_out_of_region_is_not_a_square() -> None:
    board = Board()
    _place(board, Tetromino(TetrominoType.O, position=(18, 0)), 1)
    _place(board, Tetromino(TetrominoType.O, position=(18, 2)), 2)
    _place(board, Tetromino(TetrominoType.O, position=(16, 0)), 3)
    # Covers the rest of the region but each piece has a block outside it.
    board.place([(17, 2), (17, 3), (16, 3), (16, 4)], PIECE_VALUES[TetrominoType.S], piece_id=4)
    board.place([(16, 2), (15, 2), (14, 2), (13, 2)], PIECE_VALUES[TetrominoType.I], piece_id=5)

    assert find_bonus_squares(board) == []


def test_cells_of_unknown_origin_never_form_squares() -> None:
    board = Board()
    board.grid[16:20, 0:4] = 1
    assert find_bonus_squares(board) == []


def test_bonus_points_per_row() -> None:
    board = Board()
    board.grid[19, 0] = BONUS_GOLD
    board.grid[19, 1] = BONUS_SILVER
    board.grid[18, 0] = BONUS_SILVER
    assert bonus_points(board, [17, 18, 19]) == GOLD_POINTS + SILVER_POINTS


def test_clearing_gold_rows_pays_bonus(make_state) -> None:
    state = make_state(
        TetrominoType.O, TetrominoType.O, TetrominoType.O, TetrominoType.O, TetrominoType.I
    )
    state.start()
    for col in (0, 2, 0, 2):
        state.controller.active = Tetromino(TetrominoType.O, position=(0, col))
        state.hard_drop()
    assert (state.board.grid[16:20, 0:4] == BONUS_GOLD).all()

    for row in range(16, 20):
        for col in range(4, state.board.width - 1):
            state.board.set_cell(row, col, 1)
    state.controller.active = Tetromino(TetrominoType.I, rotation=1, position=(0, 7))
    state.hard_drop()

    assert state.last_cleared == 4
    assert state.score == SCORE_TABLE[4] + 4 * GOLD_POINTS
    assert np.count_nonzero(state.board.grid) == 0


def test_bonus_squares_can_be_disabled(make_state) -> None:
    state = make_state(TetrominoType.O, bonus_squares=False)
    state.start()
    for col in (0, 2, 0, 2):
        state.controller.active = Tetromino(TetrominoType.O, position=(0, col))
        state.hard_drop()
    assert (state.board.grid[16:20, 0:4] == PIECE_VALUES[TetrominoType.O]).all()


def test_square_completed_by_a_clear_turns_gold_at_once(make_state) -> None:
    state = make_state(TetrominoType.I)
    state.start()
    board = state.board
    # Two pairs of Os split by a filler row; nothing forms a square yet.
    for pid, pos in enumerate([(14, 0), (14, 2), (17, 0), (17, 2)], start=101):
        _place(board, Tetromino(TetrominoType.O, position=pos), pid)
    for col in range(6):
        board.set_cell(16, col, 1)
    for row in range(17, 20):
        for col in range(6, board.width):
            board.set_cell(row, col, 1)
    assert not find_bonus_squares(board)

    state.controller.active = Tetromino(TetrominoType.I, position=(15, 6))
    state.hard_drop()

    assert state.last_cleared == 1
    assert state.score == SCORE_TABLE[1]
    assert (state.board.grid[15:19, 0:4] == BONUS_GOLD).all()
