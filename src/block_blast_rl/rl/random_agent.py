from __future__ import annotations

import argparse
from typing import List, Optional

import numpy as np
import gymnasium as gym

import block_blast_rl.env  # noqa: F401  ensure registration


def run_random(episodes: int = 5, seed: Optional[int] = None) -> List[int]:
    """Play ``episodes`` games choosing uniformly among legal placements."""
    env = gym.make("BlockBlast-8x8-v0")
    rng = np.random.default_rng(seed)
    scores: List[int] = []
    obs, info = env.reset(seed=seed)
    while len(scores) < episodes:
        legal = np.argwhere(info["action_mask"])
        if legal.size > 0:
            action = legal[rng.integers(len(legal))]
        else:
            action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        if terminated or truncated:
            scores.append(int(info["score"]))
            obs, info = env.reset()
    env.close()
    return scores


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--episodes", type=int, default=5)
    p.add_argument("--seed", type=int, default=None)
    return p


def main() -> None:
    args = build_parser().parse_args()
    scores = run_random(args.episodes, args.seed)
    for i, score in enumerate(scores):
        print(f"Episode {i}: score {score}")
    print(f"Random agent mean score: {float(np.mean(scores)):.1f}")


if __name__ == "__main__":  # pragma: no cover
    main()
