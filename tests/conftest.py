"""
Fixtures shared by the engine and environment tests.
"""

from typing import Callable, List, Optional
from unittest.mock import Mock

import numpy as np
import pytest

from block_blast.game import (
    Block,
    BlockBlastGame,
    CellState,
    GameConfig,
    GameGrid,
    get_shape,
)


class SequenceSource:
    """Random source replaying fixed draws, to pin down generator decisions."""

    def __init__(self, draws: List[float]) -> None:
        self.draws = list(draws)
        self.calls = 0

    def random(self) -> float:
        value = self.draws[self.calls]
        self.calls += 1
        return value


@pytest.fixture
def sequence_source() -> Callable[[List[float]], SequenceSource]:
    return SequenceSource


@pytest.fixture
def collector() -> Mock:
    return Mock()


@pytest.fixture
def game(collector: Mock) -> BlockBlastGame:
    """Seeded 10x10 game with a mocked reward collector."""
    return BlockBlastGame(GameConfig(random_seed=1234), collector=collector)


@pytest.fixture
def block() -> Callable[..., Block]:
    """Call the inner function with a shape name, and optionally a tier and color."""

    def _block(name: str, tier: CellState = CellState.NORMAL, color: Optional[str] = None) -> Block:
        return Block(get_shape(name), tier, color)

    return _block


@pytest.fixture
def stage() -> Callable[..., None]:
    """Replace the grid and/or pool of a game to set up a scenario."""

    def _stage(game: BlockBlastGame, grid: Optional[np.ndarray] = None, pool: Optional[List[Block]] = None) -> None:
        if grid is not None:
            game.state.grid = GameGrid.from_array(grid, game.config.palette)
        if pool is not None:
            game.state.pool = list(pool)

    return _stage
