"""Gymnasium environment for the falling-block game."""
from .tetris_env import TetrisEnv

__all__ = [
    "TetrisEnv",
]
