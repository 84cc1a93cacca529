from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .blocks import Block
from .config import GameConfig
from .grid import GameGrid


@dataclass
class SessionState:
    """Everything that belongs to one player's active game."""
    grid: GameGrid
    pool: List[Block] = field(default_factory=list)
    score: int = 0
    combo: int = 0
    game_over: bool = False
    lines_cleared_total: int = 0
    blocks_placed: int = 0
    turns: int = 0
    credits_total: int = 0
    gamecoins_total: int = 0

    @classmethod
    def fresh(cls, config: GameConfig) -> "SessionState":
        return cls(grid=GameGrid(config.grid_size, config.palette))

    def mark_game_over(self) -> None:
        # one-way; only a new session leaves this state
        self.game_over = True
