from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np

from .blocks import Block, CellState
from .config import DEFAULT_PALETTE
from .exceptions import InvalidPlacementError
from .shapes import Shape


Coordinate = Tuple[int, int]

NO_COLOR = -1


class GameGrid:
    """Square grid of cells for block placement.

    `cells` holds CellState values (0 is empty). `colors` holds a palette
    index for colored NORMAL cells and -1 everywhere else.
    """

    def __init__(self, size: int = 10, palette: Sequence[str] = DEFAULT_PALETTE) -> None:
        self.size = int(size)
        self.palette = tuple(palette)
        self.cells = np.zeros((self.size, self.size), dtype=np.int8)
        self.colors = np.full((self.size, self.size), NO_COLOR, dtype=np.int8)

    @classmethod
    def from_array(cls, states, palette: Sequence[str] = DEFAULT_PALETTE) -> "GameGrid":
        """Build a grid from a square 2D array-like of CellState values."""
        arr = np.asarray(states, dtype=np.int8)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise ValueError(f"Expected a square 2D array, got shape {arr.shape}")
        valid = [int(state) for state in CellState]
        if not np.isin(arr, valid).all():
            raise ValueError(f"Cell values must be one of {valid}")
        grid = cls(arr.shape[0], palette)
        grid.cells[:, :] = arr
        return grid

    def reset(self) -> None:
        self.cells.fill(CellState.EMPTY)
        self.colors.fill(NO_COLOR)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def cell(self, row: int, col: int) -> CellState:
        return CellState(int(self.cells[row, col]))

    def color_at(self, row: int, col: int) -> Optional[str]:
        idx = int(self.colors[row, col])
        if idx == NO_COLOR:
            return None
        return self.palette[idx]

    def can_place(self, shape: Shape, row: int, col: int) -> bool:
        """Check if every occupied offset of `shape` lands on an empty in-bounds cell"""
        for i, j in shape.offsets:
            r, c = row + i, col + j
            if not self.is_inside(r, c):
                return False
            if self.cells[r, c] != CellState.EMPTY:
                return False
        return True

    def place(self, block: Block, row: int, col: int) -> None:
        if not self.can_place(block.shape, row, col):
            raise InvalidPlacementError(
                f"{block.shape.name} does not fit at ({row}, {col}) on a {self.size}x{self.size} grid"
            )
        color_idx = NO_COLOR
        if block.color is not None:
            try:
                color_idx = self.palette.index(block.color)
            except ValueError:
                raise InvalidPlacementError(f"Color {block.color!r} is not in the grid palette") from None
        for r, c in block.shape.cells_at(row, col):
            self.cells[r, c] = int(block.tier)
            self.colors[r, c] = color_idx

    def full_rows(self) -> List[int]:
        return [int(r) for r in np.flatnonzero(np.all(self.cells != CellState.EMPTY, axis=1))]

    def full_cols(self) -> List[int]:
        return [int(c) for c in np.flatnonzero(np.all(self.cells != CellState.EMPTY, axis=0))]

    def clear_row(self, row: int) -> None:
        self.cells[row, :] = CellState.EMPTY
        self.colors[row, :] = NO_COLOR

    def clear_col(self, col: int) -> None:
        self.cells[:, col] = CellState.EMPTY
        self.colors[:, col] = NO_COLOR

    def valid_anchors(self, shape: Shape) -> List[Coordinate]:
        """All (row, col) anchors where `shape` fits"""
        anchors: List[Coordinate] = []
        for row in range(self.size - shape.rows + 1):
            for col in range(self.size - shape.cols + 1):
                if self.can_place(shape, row, col):
                    anchors.append((row, col))
        return anchors

    def has_room_for(self, shape: Shape) -> bool:
        for row in range(self.size - shape.rows + 1):
            for col in range(self.size - shape.cols + 1):
                if self.can_place(shape, row, col):
                    return True
        return False

    def filled_ratio(self) -> float:
        return float(np.count_nonzero(self.cells)) / float(self.size * self.size)

    def is_empty(self) -> bool:
        return not self.cells.any()

    def count(self, state: CellState) -> int:
        return int(np.count_nonzero(self.cells == state))

    def copy(self) -> "GameGrid":
        new_grid = GameGrid(self.size, self.palette)
        new_grid.cells = self.cells.copy()
        new_grid.colors = self.colors.copy()
        return new_grid
