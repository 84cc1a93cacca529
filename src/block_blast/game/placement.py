from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass

from .blocks import Block
from .exceptions import GameOverError, InvalidPlacementError, UnknownBlockIndexError
from .rules import ClearResult, ScoringRules, resolve
from .state import SessionState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacementResult:
    block: Block
    row: int
    col: int
    pool_size: int
    clear: ClearResult
    score_gained: int
    combo: int
    refilled: bool = False
    game_over: bool = False


def attempt_placement(state: SessionState, index: int, row: int, col: int,
                      rules: ScoringRules, combo_enabled: bool = True) -> PlacementResult:
    """Place pool block `index` with its top-left cell at (row, col), then resolve clears.

    Rejected turns raise and leave `state` untouched. On success the block
    leaves the pool, so later pool indices shift down by one.
    """
    if state.game_over:
        raise GameOverError("Game is over. Start a new game to keep playing.")
    if not 0 <= index < len(state.pool):
        raise UnknownBlockIndexError(f"No block at pool index {index} (pool size {len(state.pool)})")

    block = state.pool[index]
    if not state.grid.can_place(block.shape, row, col):
        raise InvalidPlacementError(f"{block.shape.name} does not fit at ({row}, {col})")

    state.grid.place(block, row, col)
    state.pool.pop(index)

    clear = resolve(state.grid, rules)
    if combo_enabled:
        credits = rules.apply_combo(clear.credits_earned, state.combo)
        clear = dataclasses.replace(clear, credits_earned=credits)
        state.combo = state.combo + 1 if clear.lines_cleared > 0 else 0

    gained = rules.score_for_lines(clear.lines_cleared)
    state.score += gained
    state.lines_cleared_total += clear.lines_cleared
    state.credits_total += clear.credits_earned
    state.gamecoins_total += clear.gamecoins_earned
    state.blocks_placed += 1
    state.turns += 1

    logger.debug(
        "placed %s (%s) at (%d, %d): lines=%d credits=%d gamecoins=%d score=%d combo=%d",
        block.shape.name, block.tier.name, row, col, clear.lines_cleared,
        clear.credits_earned, clear.gamecoins_earned, state.score, state.combo,
    )
    return PlacementResult(
        block=block,
        row=row,
        col=col,
        pool_size=len(state.pool),
        clear=clear,
        score_gained=gained,
        combo=state.combo,
    )
