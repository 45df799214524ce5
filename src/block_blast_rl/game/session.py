from __future__ import annotations

import logging
from typing import Optional

from .core import create_initial_state, game_reducer
from .pieces import ShapeGenerator
from .rules import ScoringRules
from .storage import HighScoreStore
from .types import CheckGameOver, GameState, GameStatus, PlaceShape, Restart, SetHighScore, StartGame

logger = logging.getLogger(__name__)


class GameSession:
    """Drives the reducer for a single player.

    Owns the latest ``GameState`` and dispatches one action at a time. When a
    placement deals a fresh set of shapes the reducer defers the game-over
    check; the session then schedules a single ``CheckGameOver`` that fires
    from ``update`` once ``check_delay_ms`` has elapsed. Times are plain
    millisecond ticks supplied by the caller (e.g. ``pygame.time.get_ticks``).
    """

    def __init__(
        self,
        generator: Optional[ShapeGenerator] = None,
        store: Optional[HighScoreStore] = None,
        rules: Optional[ScoringRules] = None,
        check_delay_ms: int = 300,
    ) -> None:
        self.generator = generator or ShapeGenerator()
        self.store = store
        self.rules = rules or ScoringRules()
        self.check_delay_ms = int(check_delay_ms)
        self._check_due_at: Optional[int] = None

        self._saved_high_score = store.load() if store is not None else 0
        self.state: GameState = create_initial_state(generator=self.generator)
        self.state = game_reducer(self.state, SetHighScore(self._saved_high_score), self.generator, self.rules)

    @property
    def check_scheduled(self) -> bool:
        return self._check_due_at is not None

    def dispatch(self, action: object, now_ms: int = 0) -> GameState:
        previous = self.state
        self.state = game_reducer(previous, action, self.generator, self.rules)
        if self.state is not previous:
            logger.debug("%s -> status=%s score=%d", type(action).__name__, self.state.status.value, self.state.score)
        if self.state.pending_game_over_check and self._check_due_at is None:
            self._check_due_at = now_ms + self.check_delay_ms
        self._persist_high_score()
        return self.state

    def start(self, now_ms: int = 0) -> GameState:
        """Start a game from idle, or restart from any other status."""
        self._check_due_at = None
        action = StartGame() if self.state.status == GameStatus.IDLE else Restart()
        return self.dispatch(action, now_ms)

    def place(self, slot: int, row: int, col: int, now_ms: int = 0) -> bool:
        """Place the shape in tray ``slot`` at (row, col). Returns whether it was placed."""
        if self._check_due_at is not None:
            # Never place against shapes that have not been checked yet
            self._run_check(now_ms)
        if self.state.status != GameStatus.PLAYING:
            return False
        if not 0 <= slot < len(self.state.shapes):
            return False
        previous = self.state
        shape = previous.shapes[slot]
        return self.dispatch(PlaceShape(shape, row, col), now_ms) is not previous

    def update(self, now_ms: int) -> GameState:
        if self._check_due_at is not None and now_ms >= self._check_due_at:
            self._run_check(now_ms)
        return self.state

    def _run_check(self, now_ms: int) -> None:
        self._check_due_at = None
        self.dispatch(CheckGameOver(), now_ms)
        if self.state.status == GameStatus.GAMEOVER:
            logger.debug("Game over with score %d", self.state.score)

    def _persist_high_score(self) -> None:
        if self.store is None:
            return
        if self.state.high_score > self._saved_high_score:
            self.store.save(self.state.high_score)
            self._saved_high_score = self.state.high_score
