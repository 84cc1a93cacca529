"""Terminal play loop.

Commands: `<piece> <row> <col>` places a piece, `n` starts a new game,
`q` quits.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from block_blast.game import (
    BlockBlastError,
    BlockBlastGame,
    GameConfig,
    Wallet,
    format_grid,
    format_pool,
)

logger = logging.getLogger(__name__)


def render(game: BlockBlastGame, wallet: Wallet) -> str:
    lines = [
        format_grid(game.grid, coordinates=True),
        "",
        format_pool(game.pool),
        "",
        f"Score: {game.score}  Combo: x{game.rules.combo_multiplier(game.combo):.1f}",
        f"Wallet: {wallet.credits} credits, {wallet.gamecoins} gamecoins",
    ]
    if game.game_over:
        lines.append(f"Game Over - final score {game.score}. Press n for a new game")
    return "\n".join(lines)


def parse_move(text: str) -> Optional[List[int]]:
    parts = text.split()
    if len(parts) != 3:
        return None
    try:
        return [int(p) for p in parts]
    except ValueError:
        return None


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play block blast in the terminal")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--size", type=int, default=10)
    p.add_argument("--no-combo", action="store_true", help="Disable the combo credit multiplier")
    p.add_argument("--no-colors", action="store_true", help="Disable colors on normal blocks")
    p.add_argument("--log-level", default="WARNING")
    return p


def run(game: BlockBlastGame, wallet: Wallet) -> None:
    while True:
        print(render(game, wallet))
        try:
            text = input("> ").strip().lower()
        except EOFError:
            return
        if text == "q":
            return
        if text == "n":
            game.new_game()
            continue
        move = parse_move(text)
        if move is None:
            print("Enter '<piece> <row> <col>', 'n' or 'q'")
            continue
        try:
            result = game.place_block(*move)
        except BlockBlastError as exc:
            print(f"Cannot place: {exc}")
            continue
        if result.clear.lines_cleared:
            print(f"Cleared {result.clear.lines_cleared} line(s): +{result.score_gained} points, "
                  f"+{result.clear.credits_earned} credits, +{result.clear.gamecoins_earned} gamecoins")


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    config = GameConfig(
        grid_size=args.size,
        combo_enabled=not args.no_combo,
        colors_enabled=not args.no_colors,
        random_seed=args.seed,
    )
    wallet = Wallet()
    game = BlockBlastGame(config, collector=wallet)
    run(game, wallet)
    logger.info("session stats: %s", game.get_game_stats())


if __name__ == "__main__":  # pragma: no cover
    main()
