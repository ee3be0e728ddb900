"""
Game session module for Minesweeper.

Holds the minefield and the win/loss status, and turns raw input events
into field operations.
"""
import logging
from dataclasses import dataclass
from enum import Enum, Flag, auto
from typing import Optional

import numpy as np

from .field import ClickResult, FieldConfig, Minefield
from .grid import Coordinate


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

# Each cell is drawn two characters wide.
CELL_WIDTH = 2
DEFAULT_ORIGIN = Coordinate(1, 1)


class GameStatus(Enum):
    """Possible states of the game."""

    IN_PROGRESS = auto()
    WIN = auto()
    LOSS = auto()


# ============================================================================
# Input Events
# ============================================================================

class Modifiers(Flag):
    """Keyboard modifiers held during an input event."""

    NONE = 0
    SHIFT = auto()
    CONTROL = auto()
    ALT = auto()


class MouseButton(Enum):
    LEFT = auto()
    RIGHT = auto()
    MIDDLE = auto()


class PointerKind(Enum):
    DOWN = auto()
    UP = auto()
    DRAG = auto()


@dataclass(frozen=True)
class KeyEvent:
    """A key press: character or key code plus modifiers."""

    code: str
    modifiers: Modifiers = Modifiers.NONE


@dataclass(frozen=True)
class PointerEvent:
    """
    A mouse action at an absolute screen position.

    Attributes:
        button: Button involved.
        kind: Press, release or drag.
        row: Screen row.
        column: Screen column.
        modifiers: Modifiers held.
    """

    button: MouseButton
    kind: PointerKind
    row: int
    column: int
    modifiers: Modifiers = Modifiers.NONE


# ============================================================================
# Game Class
# ============================================================================

class Game:
    """
    A single game of Minesweeper.

    Once the game is won or lost all further input is ignored.
    """

    def __init__(
        self,
        config: Optional[FieldConfig] = None,
        *,
        field: Optional[Minefield] = None,
        rng: Optional[np.random.Generator] = None,
        origin: Coordinate = DEFAULT_ORIGIN,
    ) -> None:
        """
        Initialize the game.

        Args:
            config: Field configuration, ignored when ``field`` is given.
            field: Prepared minefield to play on.
            rng: Random generator for mine placement.
            origin: Screen position of the top-left cell.
        """
        self.field = field if field is not None else Minefield(config, rng)
        self.origin = Coordinate(*origin)
        self.status = GameStatus.IN_PROGRESS

    # ========================================================================
    # Coordinate Translation
    # ========================================================================

    def translate(self, row: int, column: int) -> Optional[Coordinate]:
        """
        Convert a screen position to a field coordinate.

        Returns:
            The coordinate under the position, or None if it is outside
            the field.
        """
        if row < self.origin.row or column < self.origin.col:
            return None
        coord = Coordinate(
            row - self.origin.row, (column - self.origin.col) // CELL_WIDTH
        )
        if coord.row >= self.field.size.row or coord.col >= self.field.size.col:
            return None
        return coord

    # ========================================================================
    # Game Actions
    # ========================================================================

    def click(self, coord: Coordinate) -> Optional[ClickResult]:
        """Open a cell. Returns None if the game is already over."""
        if not self.is_playing:
            return None
        result = self.field.handle_click(coord)
        self._update_status(result)
        return result

    def toggle_flag(self, coord: Coordinate) -> Optional[ClickResult]:
        """Flag or unflag a cell. Returns None if the game is already over."""
        if not self.is_playing:
            return None
        result = self.field.handle_force_click(coord)
        self._update_status(result)
        return result

    def handle_pointer(self, event: PointerEvent) -> Optional[ClickResult]:
        """
        React to a mouse event.

        Left click opens a cell; right click or shift+left click toggles
        a flag. Other events and positions outside the field are ignored.

        Returns:
            Result of the field operation, or None if nothing happened.
        """
        if not self.is_playing or event.kind != PointerKind.DOWN:
            return None
        coord = self.translate(event.row, event.column)
        if coord is None:
            return None

        action = (event.button, event.modifiers)
        if action == (MouseButton.LEFT, Modifiers.NONE):
            return self.click(coord)
        if action in (
            (MouseButton.LEFT, Modifiers.SHIFT),
            (MouseButton.RIGHT, Modifiers.NONE),
        ):
            return self.toggle_flag(coord)
        return None

    def _update_status(self, result: ClickResult) -> None:
        """Apply the outcome of a click to the game status."""
        if result == ClickResult.EXPLODED:
            self.status = GameStatus.LOSS
            # Remaining mines stay hidden on loss.
            logger.info("Game lost")
        elif self.field.is_cleared():
            self.status = GameStatus.WIN
            logger.info("Game won")

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def is_playing(self) -> bool:
        return self.status == GameStatus.IN_PROGRESS

    @property
    def is_won(self) -> bool:
        return self.status == GameStatus.WIN

    @property
    def is_lost(self) -> bool:
        return self.status == GameStatus.LOSS

    def status_line(self) -> str:
        """One-line summary shown above the field."""
        if self.status == GameStatus.WIN:
            return "You won!"
        if self.status == GameStatus.LOSS:
            return "You lost!"
        return f"{self.field.flags_remaining} flags remaining"
