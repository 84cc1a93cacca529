"""Block blast game engine.

Exports the session controller and the pieces it is built from:
- GameConfig / ScoringRules: session configuration and scoring
- Shape / SHAPE_CATALOG: fixed block shapes
- Block / BlockGenerator / CellState: weighted random pieces and cell tiers
- GameGrid: grid representation, placement validation and mutation
- resolve / ClearResult: line and column clearing with reward tally
- attempt_placement / PlacementResult: one validated turn
- BlockBlastGame / SessionState: turn orchestration and game-over detection
- Wallet / RewardCollector: reward collection boundary
"""

from .config import GameConfig
from .shapes import Shape, SHAPE_CATALOG, get_shape, shape_index
from .blocks import Block, BlockGenerator, CellState
from .grid import GameGrid
from .rules import ClearResult, ScoringRules, resolve
from .state import SessionState
from .placement import PlacementResult, attempt_placement
from .rewards import RewardCollector, RewardEvent, Wallet
from .exceptions import BlockBlastError, GameOverError, InvalidPlacementError, UnknownBlockIndexError
from .core import BlockBlastGame
from .display import format_grid, format_pool

__all__ = [
    "GameConfig",
    "Shape",
    "SHAPE_CATALOG",
    "get_shape",
    "shape_index",
    "Block",
    "BlockGenerator",
    "CellState",
    "GameGrid",
    "ClearResult",
    "ScoringRules",
    "resolve",
    "SessionState",
    "PlacementResult",
    "attempt_placement",
    "RewardCollector",
    "RewardEvent",
    "Wallet",
    "BlockBlastError",
    "GameOverError",
    "InvalidPlacementError",
    "UnknownBlockIndexError",
    "BlockBlastGame",
    "format_grid",
    "format_pool",
]
