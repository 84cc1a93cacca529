from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_PALETTE: Tuple[str, ...] = (
    "red",
    "orange",
    "yellow",
    "green",
    "blue",
    "purple",
)


@dataclass
class GameConfig:
    """Configuration for a block blast session"""
    grid_size: int = 10
    pieces_per_set: int = 3
    combo_enabled: bool = True
    colors_enabled: bool = True
    gold_threshold: float = 0.8
    coin_threshold: float = 0.95
    palette: Tuple[str, ...] = DEFAULT_PALETTE
    random_seed: Optional[int] = None
    max_episode_steps: int = 10000

    def __post_init__(self) -> None:
        if self.grid_size <= 0:
            raise ValueError(f"grid_size must be positive, got {self.grid_size}")
        if self.pieces_per_set <= 0:
            raise ValueError(f"pieces_per_set must be positive, got {self.pieces_per_set}")
        if not 0.0 <= self.gold_threshold <= self.coin_threshold <= 1.0:
            raise ValueError(
                "Expected 0 <= gold_threshold <= coin_threshold <= 1, "
                f"got gold={self.gold_threshold}, coin={self.coin_threshold}"
            )
        if self.colors_enabled and not self.palette:
            raise ValueError("colors_enabled requires a non-empty palette")
        # int8 color indices on the grid
        if len(self.palette) > 127:
            raise ValueError("palette supports at most 127 colors")
