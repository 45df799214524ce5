from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ScoreResult:
    points: int
    is_combo: bool


@dataclass
class ScoringRules:
    points_per_block: int = 10
    points_per_line: int = 100
    # Indexed by lines cleared - 1; the last entry covers every larger clear
    combo_multipliers: tuple[float, float, float, float] = (1.0, 1.5, 2.0, 2.5)

    def multiplier(self, lines: int) -> float:
        if lines <= 0:
            return 0.0
        return self.combo_multipliers[min(lines, len(self.combo_multipliers)) - 1]

    def calculate_score(self, blocks_placed: int, lines_cleared: int) -> ScoreResult:
        points = blocks_placed * self.points_per_block
        if lines_cleared > 0:
            line_points = lines_cleared * self.points_per_line
            points += int(math.floor(line_points * self.multiplier(lines_cleared)))
        return ScoreResult(points=points, is_combo=lines_cleared > 1)


DEFAULT_RULES = ScoringRules()


def calculate_score(blocks_placed: int, lines_cleared: int) -> ScoreResult:
    return DEFAULT_RULES.calculate_score(blocks_placed, lines_cleared)
