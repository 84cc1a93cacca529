from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_blast.game import (
    SHAPE_CATALOG,
    BlockBlastGame,
    CellState,
    GameConfig,
    InvalidPlacementError,
    ScoringRules,
    Wallet,
    shape_index,
)
from block_blast.game.display import format_grid, format_pool


def _compute_action_mask(game: BlockBlastGame) -> np.ndarray:
    size = game.config.grid_size
    k = game.config.pieces_per_set
    mask = np.zeros((k, size, size), dtype=np.bool_)
    for idx, row, col in game.get_valid_actions():
        if 0 <= idx < k:
            mask[idx, row, col] = True
    return mask


class BlockBlastEnv(gym.Env):
    metadata = {"render_modes": ["ansi"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 render_mode: Optional[str] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 invalid_action_penalty: float = -0.1,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.wallet = Wallet()
        self.game = BlockBlastGame(config, rules, collector=self.wallet)
        self.render_mode = render_mode

        self.invalid_action_penalty = float(invalid_action_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.reward_weights: Dict[str, float] = {
            "lines": 1.0,        # per line cleared
            "score": 0.0,        # per engine score point
            "credits": 0.1,      # per credit collected
            "gamecoins": 0.5,    # per gamecoin collected
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        size = self.game.config.grid_size
        k = self.game.config.pieces_per_set

        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=len(CellState) - 1, shape=(size, size), dtype=np.int8),
                "pieces": spaces.Box(low=-1, high=len(SHAPE_CATALOG) - 1, shape=(k,), dtype=np.int8),
                "tiers": spaces.Box(low=0, high=len(CellState) - 1, shape=(k,), dtype=np.int8),
                "pieces_remaining": spaces.Discrete(k + 1),
            }
        )

        # Action: (pool index, row, col)
        self.action_space = spaces.MultiDiscrete((k, size, size))

    def _get_obs(self) -> Dict[str, Any]:
        k = self.game.config.pieces_per_set
        pieces = np.full((k,), -1, dtype=np.int8)
        tiers = np.zeros((k,), dtype=np.int8)
        for i, block in enumerate(self.game.pool[:k]):
            pieces[i] = shape_index(block.shape)
            tiers[i] = int(block.tier)
        return {
            "grid": self.game.grid.cells.copy(),
            "pieces": pieces,
            "tiers": tiers,
            "pieces_remaining": len(self.game.pool),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "valid_actions": self.game.get_valid_actions(),
            "score": self.game.score,
            "combo": self.game.combo,
            "turns": self.game.state.turns,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is None:
            seed = int(self.np_random.integers(0, 2**31 - 1))
        self.game.new_game(seed)
        obs = self._get_obs()
        return obs, self._get_info()

    def step(self, action):
        idx, row, col = map(int, action)

        reward_components: Dict[str, float] = {}
        lines = 0
        try:
            result = self.game.place_block(idx, row, col)
        except InvalidPlacementError:
            reward_components["invalid"] = self.invalid_action_penalty
        else:
            lines = result.clear.lines_cleared
            reward_components["lines"] = self.reward_weights["lines"] * float(lines)
            reward_components["score"] = self.reward_weights["score"] * float(result.score_gained)
            reward_components["credits"] = self.reward_weights["credits"] * float(result.clear.credits_earned)
            reward_components["gamecoins"] = self.reward_weights["gamecoins"] * float(result.clear.gamecoins_earned)

        terminated = bool(self.game.game_over)
        truncated = self.game.state.turns >= self.game.config.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        reward = float(sum(reward_components.values()))

        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        info["lines_cleared"] = lines
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[str]:
        if self.render_mode == "ansi":
            return "\n".join(
                [
                    format_grid(self.game.grid, coordinates=True),
                    format_pool(self.game.pool),
                    f"score {self.game.score}  combo {self.game.combo}",
                ]
            )
        return None

    def close(self) -> None:
        pass
