from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .blocks import CellState
from .grid import GameGrid


@dataclass
class ScoringRules:
    line_clear_points: int = 100
    gold_credits: int = 5
    gamecoin_value: int = 1
    combo_step: float = 0.5
    max_combo_multiplier: float = 3.0

    def __post_init__(self) -> None:
        if min(self.line_clear_points, self.gold_credits, self.gamecoin_value) < 0:
            raise ValueError("Scoring values must be non-negative")
        if self.combo_step < 0 or self.max_combo_multiplier < 1:
            raise ValueError("Expected combo_step >= 0 and max_combo_multiplier >= 1")

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        return lines * self.line_clear_points

    def combo_multiplier(self, combo: int) -> float:
        return min(self.max_combo_multiplier, 1 + self.combo_step * combo)

    def apply_combo(self, credits: int, combo: int) -> int:
        return int(math.floor(credits * self.combo_multiplier(combo)))


@dataclass(frozen=True)
class ClearResult:
    credits_earned: int = 0
    gamecoins_earned: int = 0
    lines_cleared: int = 0
    rows: Tuple[int, ...] = ()
    cols: Tuple[int, ...] = ()

    @property
    def has_rewards(self) -> bool:
        return self.credits_earned > 0 or self.gamecoins_earned > 0


def _line_rewards(line: np.ndarray, rules: ScoringRules) -> Tuple[int, int]:
    golds = int(np.count_nonzero(line == CellState.GOLD))
    coins = int(np.count_nonzero(line == CellState.GAMECOIN))
    return golds * rules.gold_credits, coins * rules.gamecoin_value


def resolve(grid: GameGrid, rules: ScoringRules) -> ClearResult:
    """Clear every full row and column and tally the rewards they held.

    Full lines are detected on the grid as it stands before any clearing, so
    rows and columns are independent: a special cell at the crossing of a
    full row and a full column pays out once for each line.
    """
    rows = grid.full_rows()
    cols = grid.full_cols()
    if not rows and not cols:
        return ClearResult()

    credits = 0
    gamecoins = 0
    for row in rows:
        c, g = _line_rewards(grid.cells[row, :], rules)
        credits += c
        gamecoins += g
    for col in cols:
        c, g = _line_rewards(grid.cells[:, col], rules)
        credits += c
        gamecoins += g

    for row in rows:
        grid.clear_row(row)
    for col in cols:
        grid.clear_col(col)

    return ClearResult(
        credits_earned=credits,
        gamecoins_earned=gamecoins,
        lines_cleared=len(rows) + len(cols),
        rows=tuple(rows),
        cols=tuple(cols),
    )
