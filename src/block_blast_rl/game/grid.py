from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from .types import BOARD_SIZE, Board, Shape


Coordinate = Tuple[int, int]


@dataclass
class LineClearResult:
    board: Board
    lines_cleared: int


def create_empty_board(size: int = BOARD_SIZE) -> Board:
    return np.zeros((size, size), dtype=np.int8)


def is_inside(board: Board, row: int, col: int) -> bool:
    height, width = board.shape
    return 0 <= row < height and 0 <= col < width


def can_place(board: Board, shape: Shape, row: int, col: int) -> bool:
    """Whether every cell of ``shape`` anchored at (row, col) is on the board and empty."""
    for dr, dc in shape.cells:
        r = row + dr
        c = col + dc
        if not is_inside(board, r, c):
            return False
        if board[r, c] != 0:
            return False
    return True


def place_shape_on_board(board: Board, shape: Shape, row: int, col: int) -> Board:
    """Return a copy of ``board`` with ``shape`` written at (row, col).

    Assumes the position was validated with ``can_place``; nothing is
    re-checked here.
    """
    new_board = board.copy()
    for dr, dc in shape.cells:
        new_board[row + dr, col + dc] = shape.color
    return new_board


def check_and_clear_lines(board: Board) -> LineClearResult:
    """Clear every full row and column of ``board``.

    Rows and columns are both judged on the board as given, so a row and a
    column crossing each other are cleared together.
    """
    filled = board != 0
    full_rows = np.flatnonzero(np.all(filled, axis=1))
    full_cols = np.flatnonzero(np.all(filled, axis=0))

    new_board = board.copy()
    new_board[full_rows, :] = 0
    new_board[:, full_cols] = 0
    return LineClearResult(board=new_board, lines_cleared=int(full_rows.size + full_cols.size))


def valid_placements(board: Board, shape: Shape) -> List[Coordinate]:
    """All (row, col) anchors where ``shape`` fits, in row-major order."""
    height, width = board.shape
    positions: List[Coordinate] = []
    for row in range(height):
        for col in range(width):
            if can_place(board, shape, row, col):
                positions.append((row, col))
    return positions


def check_game_over(board: Board, shapes: Sequence[Shape]) -> bool:
    # No shapes means a new set is about to be dealt, not that the game is lost
    if len(shapes) == 0:
        return False
    height, width = board.shape
    for shape in shapes:
        for row in range(height):
            for col in range(width):
                if can_place(board, shape, row, col):
                    return False
    return True
