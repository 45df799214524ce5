from __future__ import annotations

from dataclasses import replace
from typing import Optional

from . import pieces
from .grid import can_place, check_and_clear_lines, check_game_over, create_empty_board, place_shape_on_board
from .pieces import ShapeGenerator
from .rules import DEFAULT_RULES, ScoringRules
from .types import (
    SHAPES_PER_SET,
    Board,
    CheckGameOver,
    GameState,
    GameStatus,
    PlaceShape,
    Restart,
    SetHighScore,
    StartGame,
)


def _frozen(board: Board) -> Board:
    board.setflags(write=False)
    return board


def create_initial_state(high_score: int = 0, generator: Optional[ShapeGenerator] = None) -> GameState:
    generator = generator or pieces.default_generator
    return GameState(
        board=_frozen(create_empty_board()),
        shapes=tuple(generator.create_shapes(SHAPES_PER_SET)),
        score=0,
        lines_cleared=0,
        status=GameStatus.IDLE,
        high_score=high_score,
        pending_game_over_check=False,
    )


def _place_shape(state: GameState, action: PlaceShape, generator: ShapeGenerator, rules: ScoringRules) -> GameState:
    shape, row, col = action.shape, action.row, action.col
    if not can_place(state.board, shape, row, col):
        return state

    placed = place_shape_on_board(state.board, shape, row, col)
    cleared = check_and_clear_lines(placed)
    result = rules.calculate_score(len(shape.cells), cleared.lines_cleared)

    new_board = _frozen(cleared.board)
    new_score = state.score + result.points
    new_high_score = max(state.high_score, new_score)
    remaining = tuple(s for s in state.shapes if s.id != shape.id)

    if len(remaining) == 0:
        # Fresh set: leave the game-over check to a later CheckGameOver so the
        # player sees the new shapes first
        return replace(
            state,
            board=new_board,
            shapes=tuple(generator.create_shapes(SHAPES_PER_SET)),
            score=new_score,
            lines_cleared=state.lines_cleared + cleared.lines_cleared,
            status=GameStatus.PLAYING,
            high_score=new_high_score,
            pending_game_over_check=True,
        )

    is_over = check_game_over(new_board, remaining)
    return replace(
        state,
        board=new_board,
        shapes=remaining,
        score=new_score,
        lines_cleared=state.lines_cleared + cleared.lines_cleared,
        status=GameStatus.GAMEOVER if is_over else GameStatus.PLAYING,
        high_score=new_high_score,
        pending_game_over_check=False,
    )


def game_reducer(
    state: GameState,
    action: object,
    generator: Optional[ShapeGenerator] = None,
    rules: Optional[ScoringRules] = None,
) -> GameState:
    """Return the state that follows ``state`` once ``action`` is applied.

    ``state`` is never modified. Illegal placements and unknown actions give
    back ``state`` itself.
    """
    generator = generator or pieces.default_generator
    rules = rules or DEFAULT_RULES

    if isinstance(action, (StartGame, Restart)):
        return replace(create_initial_state(state.high_score, generator), status=GameStatus.PLAYING)
    elif isinstance(action, PlaceShape):
        return _place_shape(state, action, generator, rules)
    elif isinstance(action, CheckGameOver):
        is_over = check_game_over(state.board, state.shapes)
        return replace(
            state,
            status=GameStatus.GAMEOVER if is_over else GameStatus.PLAYING,
            pending_game_over_check=False,
        )
    elif isinstance(action, SetHighScore):
        return replace(state, high_score=action.score)
    return state
