from __future__ import annotations

import random
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .types import NUM_COLORS, Cell, Shape


Template = Tuple[Cell, ...]

SHAPE_CATALOG: Tuple[Template, ...] = (
    ((0, 0),),  # single
    ((0, 0), (0, 1)),  # domino horizontal
    ((0, 0), (1, 0)),  # domino vertical
    ((0, 0), (0, 1), (0, 2)),  # triple horizontal
    ((0, 0), (1, 0), (2, 0)),  # triple vertical
    ((0, 0), (1, 0), (1, 1)),  # small L
    ((0, 0), (0, 1), (1, 0)),  # small L mirrored
    ((0, 0), (0, 1), (1, 0), (1, 1)),  # 2x2 square
    ((0, 0), (0, 1), (0, 2), (1, 1)),  # T
    ((0, 1), (0, 2), (1, 0), (1, 1)),  # S
    ((0, 0), (0, 1), (1, 1), (1, 2)),  # Z
    ((0, 0), (0, 1), (0, 2), (0, 3)),  # line 4
    ((0, 0), (0, 1), (0, 2), (0, 3), (0, 4)),  # line 5
    ((0, 0), (1, 0), (2, 0), (2, 1)),  # big L
    ((0, 0), (0, 1), (0, 2), (1, 0)),  # big L mirrored
    ((0, 1), (1, 0), (1, 1), (1, 2), (2, 1)),  # cross
    ((0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)),  # 2x3 rectangle
    ((0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2), (2, 0), (2, 1), (2, 2)),  # 3x3 square
)

# Largest extent of any template in either axis (line 5)
MAX_SHAPE_EXTENT = 5


def normalize_cells(cells: Iterable[Cell]) -> Template:
    cells = list(cells)
    min_row = min(r for r, _ in cells)
    min_col = min(c for _, c in cells)
    return tuple((r - min_row, c - min_col) for r, c in cells)


def rotate_cells(cells: Sequence[Cell], quarter_turns: int) -> Template:
    """Rotate offsets by ``quarter_turns`` quarter turns and renormalise."""
    k = quarter_turns % 4
    rotated = list(cells)
    for _ in range(k):
        rotated = [(c, -r) for r, c in rotated]
    return normalize_cells(rotated)


def shape_mask(shape: Shape, size: int = MAX_SHAPE_EXTENT) -> np.ndarray:
    mask = np.zeros((size, size), dtype=np.int8)
    for r, c in shape.cells:
        mask[r, c] = 1
    return mask


class ShapeGenerator:
    """Produces shapes from the catalog.

    Holds its own id counter and random source, so two generators built with
    the same seed emit the same sequence of shapes.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        catalog: Sequence[Template] = SHAPE_CATALOG,
        num_colors: int = NUM_COLORS,
        allow_rotation: bool = False,
    ) -> None:
        if not catalog:
            raise ValueError("catalog must contain at least one template")
        if num_colors < 1:
            raise ValueError("num_colors must be >= 1")
        self.rng = rng or random.Random(seed)
        self.catalog = tuple(catalog)
        self.num_colors = int(num_colors)
        self.allow_rotation = allow_rotation
        self._next_id = 0

    def create_random_shape(self) -> Shape:
        cells = self.catalog[self.rng.randrange(len(self.catalog))]
        color = self.rng.randint(1, self.num_colors)
        if self.allow_rotation:
            cells = rotate_cells(cells, self.rng.randrange(4))
        self._next_id += 1
        return Shape(id=self._next_id, cells=tuple(cells), color=color)

    def create_shapes(self, count: int) -> List[Shape]:
        if count < 0:
            raise ValueError("count must be >= 0")
        return [self.create_random_shape() for _ in range(count)]


default_generator = ShapeGenerator()


def create_random_shape() -> Shape:
    return default_generator.create_random_shape()


def create_shapes(count: int) -> List[Shape]:
    return default_generator.create_shapes(count)
