from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import numpy as np


Offset = Tuple[int, int]


@dataclass(frozen=True, eq=False)
class Shape:
    """Immutable occupancy mask anchored at its top-left cell."""
    name: str
    mask: np.ndarray
    offsets: Tuple[Offset, ...] = field(init=False)

    def __post_init__(self) -> None:
        mask = np.array(self.mask, dtype=np.bool_)
        if mask.ndim != 2 or not mask.any():
            raise ValueError(f"Shape {self.name!r} needs a non-empty 2D mask")
        mask.setflags(write=False)
        object.__setattr__(self, "mask", mask)
        offsets = tuple((int(i), int(j)) for i, j in zip(*np.nonzero(mask)))
        object.__setattr__(self, "offsets", offsets)

    @property
    def rows(self) -> int:
        return int(self.mask.shape[0])

    @property
    def cols(self) -> int:
        return int(self.mask.shape[1])

    @property
    def size(self) -> int:
        """Number of occupied cells."""
        return len(self.offsets)

    def cells_at(self, row: int, col: int) -> List[Tuple[int, int]]:
        return [(row + i, col + j) for i, j in self.offsets]

    def __repr__(self) -> str:
        return f"Shape({self.name!r}, {self.rows}x{self.cols})"


SHAPE_CATALOG: Tuple[Shape, ...] = (
    Shape("single", np.array([[1]])),
    Shape("h2", np.array([[1, 1]])),
    Shape("v2", np.array([[1], [1]])),
    Shape("square", np.array([[1, 1], [1, 1]])),
    Shape("h3", np.array([[1, 1, 1]])),
    Shape("v3", np.array([[1], [1], [1]])),
    Shape("corner", np.array([[1, 0], [1, 1]])),
    Shape("corner_mirrored", np.array([[0, 1], [1, 1]])),
)

_SHAPES_BY_NAME: Dict[str, Shape] = {shape.name: shape for shape in SHAPE_CATALOG}


def get_shape(name: str) -> Shape:
    try:
        return _SHAPES_BY_NAME[name]
    except KeyError:
        raise KeyError(f"Unknown shape {name!r}. Pick one from {', '.join(_SHAPES_BY_NAME)}") from None


def shape_index(shape: Shape) -> int:
    """Catalog position of `shape`, or -1 for shapes outside the catalog."""
    for idx, candidate in enumerate(SHAPE_CATALOG):
        if candidate is shape or (candidate.name == shape.name and np.array_equal(candidate.mask, shape.mask)):
            return idx
    return -1
