"""
Minefield game module.

Provides the grid-deduction game core: cell state, the game state
machine and a gymnasium environment over it.
"""
from .cell import Cell, CellState, CellView
from .board import (
    GameConfig,
    GameState,
    GameStatus,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    PRESETS,
    create,
)
from .errors import MinefieldError, InvalidConfigurationError, OutOfBoundsError
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "CellView",
    "GameConfig",
    "GameState",
    "GameStatus",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "PRESETS",
    "create",
    "MinefieldError",
    "InvalidConfigurationError",
    "OutOfBoundsError",
    "MinesweeperEnv",
]
