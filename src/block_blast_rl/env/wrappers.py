from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .block_blast_env import compute_action_mask


class FlattenDiscreteActionWrapper(gym.ActionWrapper):
    """Flattens MultiDiscrete (slot, row, col) -> Discrete(N) for PPO.

    Also exposes `get_action_mask()` returning a 1D boolean mask of shape (N,).
    Order: slot, row, col (C-order flattening).
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        assert isinstance(env.action_space, spaces.MultiDiscrete)
        self.nvec = tuple(int(n) for n in env.action_space.nvec)
        assert len(self.nvec) == 3, "Expected (slot, row, col) actions"
        self.n = int(np.prod(self.nvec))
        self.action_space = spaces.Discrete(self.n)

    def _unflatten(self, idx: int) -> tuple[int, int, int]:
        slot, row, col = np.unravel_index(int(idx), self.nvec)
        return int(slot), int(row), int(col)

    def action(self, action: int):  # type: ignore[override]
        return np.array(self._unflatten(int(action)), dtype=np.int64)

    def get_action_mask(self) -> np.ndarray:
        return compute_action_mask(self.env.unwrapped.state).reshape(-1)


class ResampleInvalidActionWrapper(gym.Wrapper):
    """If a sampled action is masked out, resample uniformly among legal ones.

    Useful when training with vanilla PPO (no action masking).
    """

    def step(self, action):  # type: ignore[override]
        if isinstance(self.action_space, spaces.Discrete):
            mask = self.get_action_mask()
            if 0 <= int(action) < mask.shape[0] and not bool(mask[int(action)]):
                legal = np.flatnonzero(mask)
                if legal.size > 0:
                    action = int(self.np_random.choice(legal))
        return self.env.step(action)

    def get_action_mask(self) -> np.ndarray:
        if hasattr(self.env, "get_action_mask"):
            return getattr(self.env, "get_action_mask")()
        raise AttributeError("Underlying env does not provide get_action_mask")
