from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_blast_rl.game import (
    BOARD_SIZE,
    NUM_COLORS,
    SHAPES_PER_SET,
    CheckGameOver,
    GameState,
    GameStatus,
    PlaceShape,
    ScoringRules,
    ShapeGenerator,
    StartGame,
    can_place,
    create_initial_state,
    game_reducer,
    shape_mask,
)
from block_blast_rl.game.pieces import MAX_SHAPE_EXTENT
from block_blast_rl.game.types import PALETTE_RGB


@dataclass
class EnvConfig:
    max_episode_steps: int = 10000
    invalid_action_penalty: float = -1.0
    terminal_penalty: float = 0.0
    # Engine points are in the hundreds for a line clear; scale them down for PPO
    reward_scale: float = 0.01


def compute_action_mask(state: GameState) -> np.ndarray:
    """Boolean mask of shape (slots, rows, cols); True where placement is legal."""
    mask = np.zeros((SHAPES_PER_SET, BOARD_SIZE, BOARD_SIZE), dtype=np.bool_)
    if state.status != GameStatus.PLAYING:
        return mask
    for slot, shape in enumerate(state.shapes[:SHAPES_PER_SET]):
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                mask[slot, row, col] = can_place(state.board, shape, row, col)
    return mask


class BlockBlastEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[EnvConfig] = None,
        render_mode: Optional[str] = None,
        rules: Optional[ScoringRules] = None,
        allow_rotation: bool = False,
    ) -> None:
        super().__init__()
        self.config = config or EnvConfig()
        self.render_mode = render_mode
        self.rules = rules or ScoringRules()
        self.allow_rotation = allow_rotation
        self.generator = ShapeGenerator(allow_rotation=allow_rotation)
        self.state: GameState = create_initial_state(generator=self.generator)

        # Observation space: board colors, the tray as binary masks, and the tray size
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0, high=NUM_COLORS, shape=(BOARD_SIZE, BOARD_SIZE), dtype=np.int8),
                "shapes": spaces.Box(
                    low=0, high=1, shape=(SHAPES_PER_SET, MAX_SHAPE_EXTENT, MAX_SHAPE_EXTENT), dtype=np.int8
                ),
                "shapes_remaining": spaces.Discrete(SHAPES_PER_SET + 1),
            }
        )

        # Action: (slot, row, col)
        self.action_space = spaces.MultiDiscrete((SHAPES_PER_SET, BOARD_SIZE, BOARD_SIZE))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        shapes = np.zeros((SHAPES_PER_SET, MAX_SHAPE_EXTENT, MAX_SHAPE_EXTENT), dtype=np.int8)
        for slot, shape in enumerate(self.state.shapes[:SHAPES_PER_SET]):
            shapes[slot] = shape_mask(shape)
        return {
            "board": np.array(self.state.board, dtype=np.int8),
            "shapes": shapes,
            "shapes_remaining": len(self.state.shapes),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": compute_action_mask(self.state),
            "score": self.state.score,
            "lines_cleared": self.state.lines_cleared,
            "high_score": self.state.high_score,
            "steps": self._steps,
        }

    def get_action_mask(self) -> np.ndarray:
        return compute_action_mask(self.state)

    def _dispatch(self, action: object) -> GameState:
        self.state = game_reducer(self.state, action, self.generator, self.rules)
        return self.state

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.generator = ShapeGenerator(rng=random.Random(seed), allow_rotation=self.allow_rotation)
        self._steps = 0
        self._dispatch(StartGame())
        return self._get_obs(), self._get_info()

    def step(self, action: np.ndarray | Tuple[int, int, int]):
        slot, row, col = map(int, action)

        reward_components: Dict[str, float] = {}
        previous = self.state
        points = 0

        if 0 <= slot < len(previous.shapes) and previous.status == GameStatus.PLAYING:
            self._dispatch(PlaceShape(previous.shapes[slot], row, col))

        if self.state is previous:
            reward_components["invalid"] = self.config.invalid_action_penalty
        else:
            points = self.state.score - previous.score
            reward_components["points"] = self.config.reward_scale * float(points)
            if self.state.pending_game_over_check:
                # Nothing is drawn between steps, so resolve the deferred check now
                self._dispatch(CheckGameOver())

        self._steps += 1
        terminated = self.state.status == GameStatus.GAMEOVER
        truncated = self._steps >= self.config.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.config.terminal_penalty

        reward = float(sum(reward_components.values()))

        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        info["points"] = points
        info["lines"] = self.state.lines_cleared - previous.lines_cleared
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            board = self.state.board
            cell = 12
            h, w = board.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = PALETTE_RGB[int(board[y, x])]
            return img
        # human rendering lives in block_blast_rl.visualization
        return None

    def close(self) -> None:
        pass
