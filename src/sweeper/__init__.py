"""
Minesweeper game engine.

Provides the game-state engine plus the clock, text renderer and
Gymnasium collaborators that drive it.
"""
from .cell import Cell, CellState, CellView
from .board import (
    Board,
    BoardConfig,
    InvalidConfiguration,
    DEFAULT,
)
from .clock import Clock, NullClock, ManualClock, ThreadedClock
from .engine import GameSnapshot, GameState, MinesweeperEngine
from .renderer import TextRenderer
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "CellView",
    "Board",
    "BoardConfig",
    "InvalidConfiguration",
    "DEFAULT",
    "Clock",
    "NullClock",
    "ManualClock",
    "ThreadedClock",
    "GameSnapshot",
    "GameState",
    "MinesweeperEngine",
    "TextRenderer",
    "MinesweeperEnv",
]
