"""Game module for Block Blast RL.

Exports the 8x8 block-placement rules engine and supporting classes:
- Shape, GameState, GameStatus and the reducer actions
- ShapeGenerator: Catalog-based shape dealing with its own id counter and RNG
- can_place / place_shape_on_board: Placement check and commit
- check_and_clear_lines: Atomic row and column clearing
- ScoringRules / calculate_score: Placement and line-clear points
- check_game_over: Exhaustive search for a remaining legal move
- game_reducer: Pure state transition function
- GameSession: Single-player driver with the deferred game-over check
- HighScoreStore: JSON-backed high score persistence
"""

from .types import (
    BOARD_SIZE,
    COLORS,
    NUM_COLORS,
    SHAPES_PER_SET,
    CheckGameOver,
    GameState,
    GameStatus,
    PlaceShape,
    Restart,
    SetHighScore,
    Shape,
    StartGame,
)
from .pieces import SHAPE_CATALOG, ShapeGenerator, create_random_shape, create_shapes, rotate_cells, shape_mask
from .grid import (
    LineClearResult,
    can_place,
    check_and_clear_lines,
    check_game_over,
    create_empty_board,
    place_shape_on_board,
    valid_placements,
)
from .rules import ScoreResult, ScoringRules, calculate_score
from .core import create_initial_state, game_reducer
from .storage import HighScoreStore
from .session import GameSession

__all__ = [
    "BOARD_SIZE",
    "COLORS",
    "NUM_COLORS",
    "SHAPES_PER_SET",
    "CheckGameOver",
    "GameState",
    "GameStatus",
    "PlaceShape",
    "Restart",
    "SetHighScore",
    "Shape",
    "StartGame",
    "SHAPE_CATALOG",
    "ShapeGenerator",
    "create_random_shape",
    "create_shapes",
    "rotate_cells",
    "shape_mask",
    "LineClearResult",
    "can_place",
    "check_and_clear_lines",
    "check_game_over",
    "create_empty_board",
    "place_shape_on_board",
    "valid_placements",
    "ScoreResult",
    "ScoringRules",
    "calculate_score",
    "create_initial_state",
    "game_reducer",
    "HighScoreStore",
    "GameSession",
]
