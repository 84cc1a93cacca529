from __future__ import annotations

import dataclasses
import logging
import random
from typing import List, Optional, Tuple

from .blocks import Block, BlockGenerator, RandomSource
from .config import GameConfig
from .exceptions import BlockBlastError
from .grid import GameGrid
from .placement import PlacementResult, attempt_placement
from .rewards import RewardCollector
from .rules import ScoringRules
from .state import SessionState

logger = logging.getLogger(__name__)


class BlockBlastGame:
    """Session controller: runs turns for one player's game.

    A turn is placement, clear resolution, reward emission, pool refill and
    the game-over check, in that order and without interruption.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 collector: Optional[RewardCollector] = None, rng: Optional[RandomSource] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.collector = collector
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.generator = BlockGenerator(self.rng, self.config)
        self.state = SessionState.fresh(self.config)
        self.new_game()

    @property
    def grid(self) -> GameGrid:
        return self.state.grid

    @property
    def pool(self) -> List[Block]:
        return self.state.pool

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def combo(self) -> int:
        return self.state.combo

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    def new_game(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng = random.Random(seed)
            self.generator.rng = self.rng
        self.state = SessionState.fresh(self.config)
        self.refill_pool()
        self.check_game_over()
        logger.info("new game: %dx%d grid, pool=%s", self.config.grid_size, self.config.grid_size,
                    [block.shape.name for block in self.state.pool])

    def refill_pool(self) -> None:
        missing = self.config.pieces_per_set - len(self.state.pool)
        if missing > 0:
            self.state.pool.extend(self.generator.generate_pool(missing))

    def can_place_any_block(self) -> bool:
        grid = self.state.grid
        return any(grid.has_room_for(block.shape) for block in self.state.pool)

    def check_game_over(self) -> bool:
        if not self.state.game_over and not self.can_place_any_block():
            self.state.mark_game_over()
            logger.info("game over: score=%d lines=%d blocks=%d", self.state.score,
                        self.state.lines_cleared_total, self.state.blocks_placed)
        return self.state.game_over

    def place_block(self, index: int, row: int, col: int) -> PlacementResult:
        result = attempt_placement(self.state, index, row, col, self.rules, self.config.combo_enabled)
        if result.clear.has_rewards:
            self._emit_rewards(result.clear.credits_earned, result.clear.gamecoins_earned)
        refilled = False
        if not self.state.pool:
            self.refill_pool()
            refilled = True
        game_over = self.check_game_over()
        return dataclasses.replace(result, refilled=refilled, game_over=game_over)

    def _emit_rewards(self, credits: int, gamecoins: int) -> None:
        if self.collector is None:
            return
        try:
            self.collector.collect(credits, gamecoins)
        except Exception:
            # no rollback: the clear stands even when collection fails
            logger.exception("reward collection failed: credits=%d gamecoins=%d", credits, gamecoins)

    def simulate_placement(self, index: int, row: int, col: int) -> Optional[PlacementResult]:
        """Play the turn on a copy of the session; None if the turn would be rejected."""
        trial = dataclasses.replace(self.state, grid=self.state.grid.copy(), pool=list(self.state.pool))
        try:
            return attempt_placement(trial, index, row, col, self.rules, self.config.combo_enabled)
        except BlockBlastError:
            return None

    def get_valid_actions(self) -> List[Tuple[int, int, int]]:
        """List of (pool_index, row, col) placements that are currently legal"""
        if self.state.game_over:
            return []
        actions: List[Tuple[int, int, int]] = []
        for idx, block in enumerate(self.state.pool):
            for row, col in self.state.grid.valid_anchors(block.shape):
                actions.append((idx, row, col))
        return actions

    def get_state(self) -> dict:
        state = self.state
        return {
            "grid": state.grid.cells.copy(),
            "colors": [[state.grid.color_at(r, c) for c in range(state.grid.size)]
                       for r in range(state.grid.size)],
            "pool": [block.describe() for block in state.pool],
            "pieces_remaining": len(state.pool),
            "score": state.score,
            "combo": state.combo,
            "game_over": state.game_over,
            "lines_cleared_total": state.lines_cleared_total,
            "blocks_placed": state.blocks_placed,
            "turns": state.turns,
            "filled_ratio": state.grid.filled_ratio(),
        }

    def get_game_stats(self) -> dict:
        state = self.state
        return {
            "final_score": state.score,
            "blocks_placed": state.blocks_placed,
            "lines_cleared": state.lines_cleared_total,
            "credits_earned": state.credits_total,
            "gamecoins_earned": state.gamecoins_total,
            "final_fill_ratio": state.grid.filled_ratio(),
            "avg_score_per_block": state.score / max(1, state.blocks_placed),
            "avg_lines_per_block": state.lines_cleared_total / max(1, state.blocks_placed),
        }
