from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

import numpy as np


BOARD_SIZE = 8
SHAPES_PER_SET = 3

COLORS = (
    "#FF6B6B",
    "#4ECDC4",
    "#45B7D1",
    "#96CEB4",
    "#FFEAA7",
    "#DDA0DD",
    "#F39C12",
)
NUM_COLORS = len(COLORS)


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    value = value.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


EMPTY_RGB = (30, 30, 36)
# Index 0 is the empty cell, 1..NUM_COLORS follow COLORS
PALETTE_RGB = (EMPTY_RGB,) + tuple(hex_to_rgb(c) for c in COLORS)

Board = np.ndarray
Cell = Tuple[int, int]


class GameStatus(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    GAMEOVER = "gameover"


@dataclass(frozen=True)
class Shape:
    """A piece offered to the player.

    ``cells`` are (row, col) offsets from the anchor, normalised so the
    smallest row offset and the smallest column offset are both 0.
    ``color`` is a 1-based index into ``COLORS``.
    """

    id: int
    cells: Tuple[Cell, ...]
    color: int

    @property
    def height(self) -> int:
        return max(r for r, _ in self.cells) + 1

    @property
    def width(self) -> int:
        return max(c for _, c in self.cells) + 1


@dataclass(frozen=True, eq=False)
class GameState:
    board: Board
    shapes: Tuple[Shape, ...]
    score: int = 0
    lines_cleared: int = 0
    status: GameStatus = GameStatus.IDLE
    high_score: int = 0
    pending_game_over_check: bool = False


# Actions dispatched to the reducer


@dataclass(frozen=True)
class StartGame:
    pass


@dataclass(frozen=True)
class PlaceShape:
    shape: Shape
    row: int
    col: int


@dataclass(frozen=True)
class CheckGameOver:
    pass


@dataclass(frozen=True)
class Restart:
    pass


@dataclass(frozen=True)
class SetHighScore:
    score: int
