"""Gymnasium environments for Block Blast RL."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register the placement environment: MultiDiscrete (slot, row, col) actions
register(
    id="BlockBlast-8x8-v0",
    entry_point="block_blast_rl.env.block_blast_env:BlockBlastEnv",
)

__all__ = ["BlockBlast-8x8-v0"]
