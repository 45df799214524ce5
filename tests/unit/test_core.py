from dataclasses import dataclass, replace

import numpy as np
import pytest

from block_blast_rl.game import (
    CheckGameOver,
    GameStatus,
    PlaceShape,
    Restart,
    SetHighScore,
    StartGame,
    create_initial_state,
    game_reducer,
)

DOMINO = ((0, 0), (0, 1))


@pytest.fixture()
def playing(generator):
    return replace(create_initial_state(generator=generator), status=GameStatus.PLAYING)


def frozen(board):
    board = np.asarray(board, dtype=np.int8)
    board.setflags(write=False)
    return board


def test_initial_state(generator):
    state = create_initial_state(high_score=77, generator=generator)
    assert state.status == GameStatus.IDLE
    assert not state.board.any()
    assert state.board.shape == (8, 8)
    assert len(state.shapes) == 3
    assert state.score == 0
    assert state.lines_cleared == 0
    assert state.high_score == 77
    assert state.pending_game_over_check is False
    assert not state.board.flags.writeable


def test_start_game_moves_to_playing(generator):
    state = create_initial_state(high_score=5, generator=generator)
    new_state = game_reducer(state, StartGame(), generator)
    assert new_state.status == GameStatus.PLAYING
    assert new_state.high_score == 5
    assert len(new_state.shapes) == 3
    assert state.status == GameStatus.IDLE


def test_place_last_shape_defers_game_over_check(playing, generator, make_shape):
    shape = make_shape(shape_id=1, color=4)
    state = replace(playing, shapes=(shape,))
    new_state = game_reducer(state, PlaceShape(shape, 0, 0), generator)

    assert new_state.board[0, 0] == 4
    assert new_state.score == 10
    assert len(new_state.shapes) == 3
    assert all(s.id != shape.id for s in new_state.shapes)
    assert new_state.pending_game_over_check is True
    assert new_state.status == GameStatus.PLAYING
    # Previous snapshot untouched
    assert state.board[0, 0] == 0
    assert state.score == 0


def test_deferred_branch_stays_playing_even_if_stuck(generator, make_shape, checkerboard):
    # After this move no catalog shape larger than one cell fits, yet the
    # reducer must not end the game before the new shapes are checked.
    blocker = make_shape(shape_id=1)
    state = replace(
        create_initial_state(generator=generator),
        status=GameStatus.PLAYING,
        board=frozen(checkerboard),
        shapes=(blocker,),
    )
    new_state = game_reducer(state, PlaceShape(blocker, 0, 1), generator)
    assert new_state.status == GameStatus.PLAYING
    assert new_state.pending_game_over_check is True


def test_place_with_remaining_shapes_checks_immediately(playing, generator, make_shape):
    shapes = tuple(make_shape(shape_id=i) for i in (1, 2, 3))
    state = replace(playing, shapes=shapes)
    new_state = game_reducer(state, PlaceShape(shapes[0], 0, 0), generator)
    assert [s.id for s in new_state.shapes] == [2, 3]
    assert new_state.pending_game_over_check is False
    assert new_state.status == GameStatus.PLAYING


def test_place_ends_game_when_remaining_shapes_cannot_fit(generator, make_shape, checkerboard):
    single = make_shape(shape_id=1)
    domino = make_shape(DOMINO, shape_id=2)
    state = replace(
        create_initial_state(generator=generator),
        status=GameStatus.PLAYING,
        board=frozen(checkerboard),
        shapes=(single, domino),
    )
    new_state = game_reducer(state, PlaceShape(single, 0, 1), generator)
    assert new_state.status == GameStatus.GAMEOVER
    assert new_state.pending_game_over_check is False
    assert new_state.shapes == (domino,)


def test_illegal_placement_returns_same_state(playing, generator, make_shape):
    board = np.zeros((8, 8), dtype=np.int8)
    board[2, 2] = 1
    shape = make_shape(shape_id=1)
    state = replace(playing, board=frozen(board), shapes=(shape,))
    assert game_reducer(state, PlaceShape(shape, 2, 2), generator) is state
    assert game_reducer(state, PlaceShape(shape, 8, 0), generator) is state


def test_place_clears_lines_and_scores(playing, generator, make_shape):
    board = np.zeros((8, 8), dtype=np.int8)
    board[0, :7] = 2
    shapes = (make_shape(shape_id=1), make_shape(shape_id=2))
    state = replace(playing, board=frozen(board), shapes=shapes, score=40, lines_cleared=3)
    new_state = game_reducer(state, PlaceShape(shapes[0], 0, 7), generator)
    assert not new_state.board[0].any()
    assert new_state.lines_cleared == 4
    assert new_state.score == 40 + 10 + 100


def test_combo_placement(playing, generator, make_shape):
    board = np.zeros((8, 8), dtype=np.int8)
    board[0, 1:] = 1
    board[1:, 0] = 1
    shapes = (make_shape(shape_id=1), make_shape(shape_id=2))
    state = replace(playing, board=frozen(board), shapes=shapes)
    new_state = game_reducer(state, PlaceShape(shapes[0], 0, 0), generator)
    assert new_state.lines_cleared == 2
    assert new_state.score == 10 + 300
    assert not new_state.board.any()


def test_high_score_follows_score(playing, generator, make_shape):
    shapes = (make_shape(shape_id=1), make_shape(shape_id=2))
    state = replace(playing, shapes=shapes, score=45, high_score=50)
    new_state = game_reducer(state, PlaceShape(shapes[0], 0, 0), generator)
    assert new_state.score == 55
    assert new_state.high_score == 55

    lower = replace(playing, shapes=shapes, score=0, high_score=50)
    assert game_reducer(lower, PlaceShape(shapes[0], 0, 0), generator).high_score == 50


def test_shape_outside_tray_is_still_placed(playing, generator, make_shape):
    tray = tuple(make_shape(shape_id=i) for i in (1, 2))
    stranger = make_shape(shape_id=99, color=6)
    state = replace(playing, shapes=tray)
    new_state = game_reducer(state, PlaceShape(stranger, 4, 4), generator)
    assert new_state.board[4, 4] == 6
    assert new_state.shapes == tray


def test_check_game_over_on_full_board(playing, generator, make_shape):
    state = replace(
        playing,
        board=frozen(np.ones((8, 8))),
        shapes=(make_shape(shape_id=1),),
        pending_game_over_check=True,
    )
    new_state = game_reducer(state, CheckGameOver(), generator)
    assert new_state.status == GameStatus.GAMEOVER
    assert new_state.pending_game_over_check is False


def test_check_game_over_with_moves_left(playing, generator, make_shape):
    board = np.zeros((8, 8), dtype=np.int8)
    board[0, :] = 1
    state = replace(playing, board=frozen(board), shapes=(make_shape(shape_id=1),), pending_game_over_check=True)
    new_state = game_reducer(state, CheckGameOver(), generator)
    assert new_state.status == GameStatus.PLAYING
    assert new_state.pending_game_over_check is False


@pytest.mark.parametrize("status", list(GameStatus))
def test_restart_from_any_status(playing, generator, status):
    state = replace(
        playing,
        status=status,
        score=500,
        lines_cleared=12,
        high_score=900,
        pending_game_over_check=True,
    )
    new_state = game_reducer(state, Restart(), generator)
    assert new_state.score == 0
    assert new_state.lines_cleared == 0
    assert new_state.pending_game_over_check is False
    assert new_state.status == GameStatus.PLAYING
    assert new_state.high_score == 900
    assert not new_state.board.any()


def test_set_high_score_overwrites(playing, generator):
    state = replace(playing, high_score=900)
    assert game_reducer(state, SetHighScore(10), generator).high_score == 10


def test_unknown_action_returns_same_state(playing, generator):
    @dataclass(frozen=True)
    class Rotate:
        quarter_turns: int

    assert game_reducer(playing, Rotate(1), generator) is playing
    assert game_reducer(playing, "PAUSE", generator) is playing


def test_new_shapes_come_from_given_generator(playing, generator, make_shape):
    shape = make_shape(shape_id=1)
    state = replace(playing, shapes=(shape,))
    before = generator.create_random_shape().id
    new_state = game_reducer(state, PlaceShape(shape, 0, 0), generator)
    assert [s.id for s in new_state.shapes] == [before + 1, before + 2, before + 3]


def test_end_to_end_single_cell(generator, make_shape):
    state = create_initial_state(generator=generator)
    state = game_reducer(state, StartGame(), generator)
    assert state.status == GameStatus.PLAYING

    shape = make_shape(shape_id=-1)
    state = replace(state, shapes=(shape,))
    state = game_reducer(state, PlaceShape(shape, 0, 0), generator)
    assert state.board[0, 0] != 0
    assert state.score == 10
    assert state.pending_game_over_check is True
    assert len(state.shapes) == 3

    state = game_reducer(state, CheckGameOver(), generator)
    assert state.status == GameStatus.PLAYING
    assert state.pending_game_over_check is False
