"""
Minesweeper game module.

Provides the minefield engine, the game session and its front ends.
"""
from .grid import Coordinate, Grid, GridRange
from .field import (
    ClickResult,
    DEFAULT_CONFIG,
    FieldCell,
    FieldConfig,
    InvalidConfigError,
    Minefield,
)
from .session import (
    Game,
    GameStatus,
    KeyEvent,
    Modifiers,
    MouseButton,
    PointerEvent,
    PointerKind,
)
from .environment import MinesweeperEnv

__all__ = [
    "Coordinate",
    "Grid",
    "GridRange",
    "ClickResult",
    "DEFAULT_CONFIG",
    "FieldCell",
    "FieldConfig",
    "InvalidConfigError",
    "Minefield",
    "Game",
    "GameStatus",
    "KeyEvent",
    "Modifiers",
    "MouseButton",
    "PointerEvent",
    "PointerKind",
    "MinesweeperEnv",
]
