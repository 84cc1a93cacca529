from __future__ import annotations

from typing import Iterable, List

from .blocks import Block, CellState
from .grid import GameGrid

SYMBOLS = {
    CellState.EMPTY: "·",
    CellState.NORMAL: "█",
    CellState.GOLD: "$",
    CellState.GAMECOIN: "◆",
}


def format_grid(grid: GameGrid, coordinates: bool = False) -> str:
    lines: List[str] = []
    if coordinates:
        lines.append("   " + "".join(str(c % 10) for c in range(grid.size)))
    for r in range(grid.size):
        row = "".join(SYMBOLS[CellState(int(v))] for v in grid.cells[r])
        lines.append(f"{r:>2} {row}" if coordinates else row)
    return "\n".join(lines)


def format_block(block: Block) -> str:
    symbol = SYMBOLS[block.tier]
    return "\n".join(
        "".join(symbol if cell else " " for cell in mask_row) for mask_row in block.shape.mask
    )


def format_pool(pool: Iterable[Block]) -> str:
    parts: List[str] = []
    for idx, block in enumerate(pool):
        label = block.tier.name.lower() if block.color is None else f"{block.tier.name.lower()}/{block.color}"
        parts.append(f"[{idx}] {block.shape.name} ({label})\n{format_block(block)}")
    return "\n".join(parts)
