from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

DATA_DIR_ENV_VAR = "BLOCK_BLAST_DATA_DIR"
DEFAULT_DATA_DIR = Path.home() / ".block_blast"
HIGH_SCORE_FILE = "high_score.json"


def default_high_score_path() -> Path:
    base = os.getenv(DATA_DIR_ENV_VAR)
    root = Path(base) if base else DEFAULT_DATA_DIR
    return root / HIGH_SCORE_FILE


class HighScoreStore:
    """Persists the best score as a small JSON document.

    A missing, unreadable or malformed file loads as 0; failed writes are
    logged and dropped so a broken disk never interrupts a game.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path) if path is not None else default_high_score_path()

    def load(self) -> int:
        if not self.path.exists():
            return 0
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Failed to load high score from %s: %s", self.path, exc)
            return 0
        value = data.get("high_score") if isinstance(data, dict) else None
        # bool is an int subclass but never a valid score
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            logger.warning("Ignoring malformed high score file %s", self.path)
            return 0
        return value

    def save(self, score: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({"high_score": int(score)}, f)
        except OSError as exc:
            logger.warning("Failed to save high score to %s: %s", self.path, exc)
