from __future__ import annotations

import pytest

from tetris_engine.game.pieces import (
    PIECE_DEFS,
    PIECE_TYPES,
    Direction,
    PieceType,
    RotationState,
    Tetromino,
    get_offsets,
)


@pytest.mark.parametrize("piece_type", PIECE_TYPES)
@pytest.mark.parametrize("rotation", list(RotationState))
def test_every_rotation_covers_four_distinct_cells(piece_type, rotation):
    piece = Tetromino.spawn(piece_type)
    cells = piece.absolute_positions(rotation)
    assert len(cells) == 4
    assert len(set(cells)) == 4


@pytest.mark.parametrize("piece_type", PIECE_TYPES)
def test_rotation_cycle_is_closed(piece_type):
    piece = Tetromino.spawn(piece_type)
    seen = []
    for _ in range(4):
        piece.rotate()
        seen.append(piece.rotation)
    assert seen == [
        RotationState.RIGHT,
        RotationState.DOWN,
        RotationState.LEFT,
        RotationState.UP,
    ]


def test_next_rotation_state_does_not_mutate():
    piece = Tetromino.spawn(PieceType.L)
    assert piece.next_rotation_state() is RotationState.RIGHT
    assert piece.rotation is RotationState.UP


def test_o_piece_is_identical_in_every_state():
    tables = {get_offsets(PieceType.O, rotation) for rotation in RotationState}
    assert len(tables) == 1


def test_spawn_uses_type_anchor_and_up():
    piece = Tetromino.spawn(PieceType.T)
    assert (piece.col, piece.row) == (4, 1)
    assert piece.rotation is RotationState.UP
    assert piece.absolute_positions() == [(3, 1), (4, 1), (5, 1), (4, 0)]


def test_spawn_anchors():
    anchors = {piece_type: PIECE_DEFS[piece_type]["spawn"] for piece_type in PIECE_TYPES}
    assert anchors == {
        PieceType.I: (4, 1),
        PieceType.O: (5, 0),
        PieceType.S: (4, 0),
        PieceType.Z: (4, 0),
        PieceType.J: (5, 1),
        PieceType.L: (4, 1),
        PieceType.T: (4, 1),
    }


def test_i_piece_flips_between_column_and_row():
    piece = Tetromino.spawn(PieceType.I)
    assert piece.absolute_positions() == [(4, 0), (4, 1), (4, 2), (4, 3)]
    assert piece.absolute_positions(RotationState.RIGHT) == [(3, 1), (4, 1), (5, 1), (6, 1)]
    assert sorted(piece.absolute_positions(RotationState.DOWN)) == [(4, -1), (4, 0), (4, 1), (4, 2)]


def test_s_and_z_have_two_distinct_states():
    for piece_type in (PieceType.S, PieceType.Z):
        assert get_offsets(piece_type, RotationState.UP) == get_offsets(piece_type, RotationState.DOWN)
        assert get_offsets(piece_type, RotationState.RIGHT) == get_offsets(piece_type, RotationState.LEFT)
        assert get_offsets(piece_type, RotationState.UP) != get_offsets(piece_type, RotationState.RIGHT)


def test_translate():
    piece = Tetromino.spawn(PieceType.J)
    piece.translate(Direction.DOWN)
    assert (piece.col, piece.row) == (5, 2)
    piece.translate(Direction.LEFT)
    assert (piece.col, piece.row) == (4, 2)
    piece.translate(Direction.RIGHT)
    piece.translate(Direction.RIGHT)
    assert (piece.col, piece.row) == (6, 2)


def test_translate_has_no_bounds_check():
    piece = Tetromino(PieceType.O, col=0, row=0)
    piece.translate(Direction.LEFT)
    assert piece.col == -1


def test_translated_positions_match_translate():
    piece = Tetromino.spawn(PieceType.Z)
    expected = piece.translated_positions(Direction.DOWN)
    piece.translate(Direction.DOWN)
    assert piece.absolute_positions() == expected


def test_colors_and_ids():
    piece = Tetromino.spawn(PieceType.S)
    assert piece.piece_id == 3
    assert piece.color == PIECE_DEFS[PieceType.S]["color"]
    assert len({PIECE_DEFS[t]["color"] for t in PIECE_TYPES}) == 7
