from __future__ import annotations

from typing import Optional, Tuple

import pygame

from block_blast_rl.game import BOARD_SIZE, SHAPES_PER_SET, GameState, GameStatus, Shape, can_place
from block_blast_rl.game.pieces import MAX_SHAPE_EXTENT
from block_blast_rl.game.types import PALETTE_RGB


BACKGROUND = (15, 15, 20)
TEXT_COLOR = (230, 230, 230)
PREVIEW_INVALID = (220, 120, 120)


def color_for_value(v: int) -> Tuple[int, int, int]:
    return PALETTE_RGB[v] if 0 <= v < len(PALETTE_RGB) else (200, 200, 200)


class Renderer:
    """Draws a ``GameState`` and maps window pixels back to board cells and tray slots."""

    def __init__(self, cell_size: int = 40, margin: int = 20, header: int = 40) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.header = header
        self.tray_cell = cell_size // 2
        self._font: Optional[pygame.font.Font] = None

    # ---------- Geometry ----------
    @property
    def board_origin(self) -> Tuple[int, int]:
        return self.margin, self.margin + self.header

    @property
    def tray_origin(self) -> Tuple[int, int]:
        x0, y0 = self.board_origin
        return x0, y0 + BOARD_SIZE * self.cell_size + self.margin

    @property
    def slot_width(self) -> int:
        return (MAX_SHAPE_EXTENT + 1) * self.tray_cell

    def window_size(self) -> Tuple[int, int]:
        width = max(BOARD_SIZE * self.cell_size, SHAPES_PER_SET * self.slot_width) + self.margin * 2
        height = self.tray_origin[1] + MAX_SHAPE_EXTENT * self.tray_cell + self.margin
        return width, height

    def board_cell_at(self, px: int, py: int) -> Optional[Tuple[int, int]]:
        x0, y0 = self.board_origin
        col = (px - x0) // self.cell_size
        row = (py - y0) // self.cell_size
        if 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE:
            return int(row), int(col)
        return None

    def tray_slot_at(self, px: int, py: int) -> Optional[int]:
        x0, y0 = self.tray_origin
        if not (y0 <= py < y0 + MAX_SHAPE_EXTENT * self.tray_cell):
            return None
        slot = (px - x0) // self.slot_width
        if 0 <= slot < SHAPES_PER_SET:
            return int(slot)
        return None

    # ---------- Drawing ----------
    def _get_font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        return self._font

    def draw_board(self, surface: pygame.Surface, state: GameState) -> None:
        x0, y0 = self.board_origin
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                rect = pygame.Rect(
                    x0 + col * self.cell_size,
                    y0 + row * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surface, color_for_value(int(state.board[row, col])), rect)

    def draw_tray(self, surface: pygame.Surface, state: GameState, selected: Optional[int]) -> None:
        x0, y0 = self.tray_origin
        for slot, shape in enumerate(state.shapes):
            off_x = x0 + slot * self.slot_width
            for r, c in shape.cells:
                rect = pygame.Rect(
                    off_x + c * self.tray_cell, y0 + r * self.tray_cell, self.tray_cell - 1, self.tray_cell - 1
                )
                pygame.draw.rect(surface, color_for_value(shape.color), rect)
            if slot == selected:
                outline = pygame.Rect(off_x - 2, y0 - 2, shape.width * self.tray_cell + 4, shape.height * self.tray_cell + 4)
                pygame.draw.rect(surface, (255, 255, 255), outline, 2)

    def draw_preview(self, surface: pygame.Surface, state: GameState, shape: Shape, row: int, col: int) -> None:
        valid = can_place(state.board, shape, row, col)
        color = color_for_value(shape.color) if valid else PREVIEW_INVALID
        x0, y0 = self.board_origin
        for dr, dc in shape.cells:
            r, c = row + dr, col + dc
            if 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE:
                rect = pygame.Rect(x0 + c * self.cell_size, y0 + r * self.cell_size, self.cell_size - 1, self.cell_size - 1)
                pygame.draw.rect(surface, color, rect, 3)

    def draw_text(self, surface: pygame.Surface, text: str, pos: Tuple[int, int], color=TEXT_COLOR) -> None:
        surface.blit(self._get_font().render(text, True, color), pos)

    def draw_overlay(self, surface: pygame.Surface, lines: list[str]) -> None:
        shade = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 180))
        surface.blit(shade, (0, 0))
        font = self._get_font()
        cx, cy = surface.get_width() // 2, surface.get_height() // 2
        for i, line in enumerate(lines):
            img = font.render(line, True, TEXT_COLOR)
            surface.blit(img, img.get_rect(center=(cx, cy + (i - len(lines) // 2) * 32)))

    def draw(
        self,
        surface: pygame.Surface,
        state: GameState,
        selected: Optional[int] = None,
        hover: Optional[Tuple[int, int]] = None,
    ) -> None:
        surface.fill(BACKGROUND)
        self.draw_board(surface, state)
        if state.status == GameStatus.PLAYING:
            self.draw_tray(surface, state, selected)
            if selected is not None and hover is not None and 0 <= selected < len(state.shapes):
                self.draw_preview(surface, state, state.shapes[selected], hover[0], hover[1])
        self.draw_text(surface, f"Score: {state.score}", (self.margin, 10))
        self.draw_text(surface, f"Best: {state.high_score}", (surface.get_width() // 2, 10))
        if state.status == GameStatus.IDLE:
            self.draw_overlay(surface, ["Click to Start"])
        elif state.status == GameStatus.GAMEOVER:
            self.draw_overlay(surface, ["Game Over!", f"Score: {state.score}", "Click to Restart"])
