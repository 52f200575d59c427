from __future__ import annotations

import numpy as np
import pytest

from tetris_engine.game.board import Board


@pytest.fixture
def board():
    return Board(10, 20)


@pytest.mark.parametrize("cell", [(-1, 0), (10, 0), (0, -1), (0, 20), (-5, 25)])
def test_out_of_bounds_always_conflicts(board, cell):
    assert board.has_conflict([cell])
    board.grid.fill(0)
    assert board.has_conflict([(5, 5), cell])


def test_in_bounds_empty_cells_do_not_conflict(board):
    assert not board.has_conflict([(0, 0), (9, 0), (0, 19), (9, 19)])


def test_occupied_cell_conflicts(board):
    board.grid[12, 3] = 5
    assert board.has_conflict([(2, 12), (3, 12)])
    assert not board.has_conflict([(2, 12), (4, 12)])


def test_lock_writes_piece_id(board):
    board.lock([(0, 19), (1, 19), (1, 18), (2, 18)], 4)
    assert board.grid[19, 0] == 4
    assert board.grid[18, 2] == 4
    assert int((board.grid != 0).sum()) == 4


def test_lock_into_occupied_cell_fails(board):
    board.grid[0, 0] = 1
    with pytest.raises(AssertionError):
        board.lock([(0, 0)], 2)


def test_clear_with_no_full_rows_is_a_no_op(board):
    board.grid[19, :9] = 1
    board.grid[5, 4] = 3
    before = board.get_grid()
    assert board.clear_completed_lines() == 0
    np.testing.assert_array_equal(board.grid, before)


def test_clear_single_line_shifts_rows_above(board):
    board.grid[10, :] = 1
    board.grid[9, 0] = 2
    board.grid[3, 5] = 3
    board.grid[15, 2] = 4

    assert board.clear_completed_lines() == 1

    expected = np.zeros((20, 10), dtype=np.int8)
    expected[10, 0] = 2
    expected[4, 5] = 3
    expected[15, 2] = 4
    np.testing.assert_array_equal(board.grid, expected)
    assert not board.grid[0].any()


def test_clear_two_separate_lines(board):
    board.grid[5, :] = 1
    board.grid[10, :] = 2
    board.grid[3, 1] = 3   # above both cleared rows
    board.grid[7, 4] = 4   # between them
    board.grid[12, 6] = 5  # below both

    assert board.clear_completed_lines() == 2

    expected = np.zeros((20, 10), dtype=np.int8)
    expected[5, 1] = 3
    expected[8, 4] = 4
    expected[12, 6] = 5
    np.testing.assert_array_equal(board.grid, expected)


def test_shifted_full_row_is_not_counted_twice(board):
    board.grid[18, :] = 1
    board.grid[19, :] = 2
    board.grid[17, 0] = 3

    assert board.clear_completed_lines() == 2
    assert board.grid[19, 0] == 3
    assert int((board.grid != 0).sum()) == 1


def test_get_grid_is_a_copy(board):
    grid = board.get_grid()
    grid[0, 0] = 7
    assert board.grid[0, 0] == 0


def test_reset(board):
    board.grid[:, :] = 1
    board.reset()
    assert not board.grid.any()
    assert board.grid.shape == (20, 10)
