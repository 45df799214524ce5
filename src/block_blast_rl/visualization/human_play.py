from __future__ import annotations

import argparse
from typing import Optional

import pygame

from block_blast_rl.game import GameSession, GameStatus, HighScoreStore, ShapeGenerator
from .renderer import Renderer


KEY_TO_SLOT = {
    pygame.K_1: 0,
    pygame.K_2: 1,
    pygame.K_3: 2,
    pygame.K_KP1: 0,
    pygame.K_KP2: 1,
    pygame.K_KP3: 2,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--check_delay_ms", type=int, default=300,
                   help="Delay before checking for game over after a new set is dealt")
    p.add_argument("--high_score_file", type=str, default=None)
    return p


def run(seed: Optional[int] = None, check_delay_ms: int = 300, high_score_file: Optional[str] = None) -> None:
    session = GameSession(
        generator=ShapeGenerator(seed=seed),
        store=HighScoreStore(high_score_file),
        check_delay_ms=check_delay_ms,
    )
    renderer = Renderer()

    pygame.init()
    try:
        screen = pygame.display.set_mode(renderer.window_size())
        pygame.display.set_caption("Block Blast (8x8) - Human Play")
        clock = pygame.time.Clock()

        selected: Optional[int] = None
        running = True
        while running:
            now = pygame.time.get_ticks()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_n:
                        session.start(now)
                        selected = None
                    elif event.key in KEY_TO_SLOT and KEY_TO_SLOT[event.key] < len(session.state.shapes):
                        selected = KEY_TO_SLOT[event.key]
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    if session.state.status != GameStatus.PLAYING:
                        session.start(now)
                        selected = None
                        continue
                    slot = renderer.tray_slot_at(*event.pos)
                    cell = renderer.board_cell_at(*event.pos)
                    if slot is not None and slot < len(session.state.shapes):
                        selected = slot
                    elif cell is not None and selected is not None:
                        if session.place(selected, cell[0], cell[1], now):
                            selected = None

            session.update(now)

            hover = renderer.board_cell_at(*pygame.mouse.get_pos())
            renderer.draw(screen, session.state, selected, hover)
            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    run(args.seed, args.check_delay_ms, args.high_score_file)


if __name__ == "__main__":  # pragma: no cover
    main()
