"""Block Blast RL: 8x8 block-placement puzzle engine with gymnasium and pygame front ends."""

__version__ = "0.1.0"
