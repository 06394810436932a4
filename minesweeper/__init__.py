# minesweeper/__init__.py
import importlib.metadata

from .board import MineSweeperBoard
from .game import (
    MineSweeperGame, GameConfig, GameStatus, Difficulty, DifficultyPreset,
    LossReason, RevealResult, get_preset, new_game
)

__version__ = importlib.metadata.version("minesweeper-timed")
