from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Protocol, Sequence

from .config import GameConfig
from .shapes import SHAPE_CATALOG, Shape


class CellState(IntEnum):
    EMPTY = 0
    NORMAL = 1
    GOLD = 2
    GAMECOIN = 3


BLOCK_TIERS = (CellState.NORMAL, CellState.GOLD, CellState.GAMECOIN)


class RandomSource(Protocol):
    def random(self) -> float:
        ...


@dataclass(frozen=True)
class Block:
    """A shape offered in the pool, with its reward tier and display color."""
    shape: Shape
    tier: CellState = CellState.NORMAL
    color: Optional[str] = None

    def __post_init__(self) -> None:
        if self.tier not in BLOCK_TIERS:
            raise ValueError(f"Block tier must be one of {[t.name for t in BLOCK_TIERS]}, got {self.tier!r}")
        object.__setattr__(self, "tier", CellState(self.tier))
        if self.color is not None and self.tier != CellState.NORMAL:
            raise ValueError(f"Only NORMAL blocks carry a color, got {self.tier.name} with {self.color!r}")

    def describe(self) -> dict:
        return {
            "shape": self.shape.name,
            "tier": self.tier.name.lower(),
            "color": self.color,
        }


def _pick(items: Sequence, u: float):
    return items[min(int(u * len(items)), len(items) - 1)]


class BlockGenerator:
    """Draws blocks from the shape catalog with weighted reward tiers.

    Each block consumes, in order: one draw for the shape, one for the tier
    and, for colored NORMAL blocks only, one for the color.
    """

    def __init__(self, rng: Optional[RandomSource] = None, config: Optional[GameConfig] = None,
                 catalog: Sequence[Shape] = SHAPE_CATALOG) -> None:
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.catalog = tuple(catalog)
        if not self.catalog:
            raise ValueError("BlockGenerator needs at least one shape")

    def pick_tier(self, u: float) -> CellState:
        if u > self.config.coin_threshold:
            return CellState.GAMECOIN
        if u > self.config.gold_threshold:
            return CellState.GOLD
        return CellState.NORMAL

    def generate(self) -> Block:
        shape = _pick(self.catalog, self.rng.random())
        tier = self.pick_tier(self.rng.random())
        color = None
        if tier == CellState.NORMAL and self.config.colors_enabled:
            color = _pick(self.config.palette, self.rng.random())
        return Block(shape=shape, tier=tier, color=color)

    def generate_pool(self, count: int) -> List[Block]:
        return [self.generate() for _ in range(count)]
