"""
Curses front end for Minesweeper.

Sets the terminal up for raw input with mouse capture, draws the field
and status line, and feeds mouse events into a Game until Ctrl+C.
"""
import curses
import logging
import sys
from typing import Dict, Optional, Tuple, Union

import numpy as np

from .field import FieldConfig
from .render import BASIC_COLORS, cell_colors, cell_glyph, status_color
from .session import (
    CELL_WIDTH,
    Game,
    KeyEvent,
    Modifiers,
    MouseButton,
    PointerEvent,
    PointerKind,
)


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

HELP_TEXT = "Left: open  Right/Shift+Left: flag  Ctrl+C: quit"

# Default terminal colour, as accepted by curses after use_default_colors().
DEFAULT_COLOR = -1

_MOUSE_BUTTONS = (
    (curses.BUTTON1_PRESSED, MouseButton.LEFT, PointerKind.DOWN),
    (curses.BUTTON3_PRESSED, MouseButton.RIGHT, PointerKind.DOWN),
    (curses.BUTTON2_PRESSED, MouseButton.MIDDLE, PointerKind.DOWN),
    (curses.BUTTON1_RELEASED, MouseButton.LEFT, PointerKind.UP),
    (curses.BUTTON3_RELEASED, MouseButton.RIGHT, PointerKind.UP),
    (curses.BUTTON2_RELEASED, MouseButton.MIDDLE, PointerKind.UP),
)

_MOUSE_MODIFIERS = (
    (curses.BUTTON_SHIFT, Modifiers.SHIFT),
    (curses.BUTTON_CTRL, Modifiers.CONTROL),
    (curses.BUTTON_ALT, Modifiers.ALT),
)


class TerminalError(RuntimeError):
    """Raised when the game cannot take over the terminal."""


# ============================================================================
# Event Translation
# ============================================================================

def pointer_event_from_mouse(
    x: int, y: int, bstate: int
) -> Optional[PointerEvent]:
    """
    Convert a curses mouse report to a PointerEvent.

    Args:
        x: Screen column.
        y: Screen row.
        bstate: curses button state bitmask.

    Returns:
        The event, or None for reports with no button press or release.
    """
    modifiers = Modifiers.NONE
    for mask, modifier in _MOUSE_MODIFIERS:
        if bstate & mask:
            modifiers |= modifier
    for mask, button, kind in _MOUSE_BUTTONS:
        if bstate & mask:
            return PointerEvent(button, kind, y, x, modifiers)
    return None


def key_event_from_code(code: int) -> KeyEvent:
    """Convert a curses key code to a KeyEvent."""
    # Control characters, except tab and enter, arrive as 1-26.
    if 1 <= code <= 26 and code not in (9, 10, 13):
        return KeyEvent(chr(ord("a") + code - 1), Modifiers.CONTROL)
    if 0 <= code < 256:
        return KeyEvent(chr(code))
    return KeyEvent(str(code))


def is_exit_key(event: KeyEvent) -> bool:
    """Ctrl+C quits the game."""
    return event.code == "c" and event.modifiers == Modifiers.CONTROL


# ============================================================================
# Screen
# ============================================================================

class TerminalScreen:
    """Draws a Game on a curses window and runs its event loop."""

    def __init__(self, stdscr, game: Game) -> None:
        self.stdscr = stdscr
        self.game = game
        self._pairs: Dict[Tuple[int, int], int] = {}
        self._colors = False

    def setup(self) -> None:
        """Switch to raw input with mouse capture and hide the cursor."""
        curses.raw()
        self.stdscr.keypad(True)
        curses.mousemask(curses.ALL_MOUSE_EVENTS)
        curses.mouseinterval(0)
        try:
            curses.curs_set(0)
        except curses.error:
            logger.debug("Terminal cannot hide the cursor")
        if curses.has_colors():
            curses.start_color()
            curses.use_default_colors()
            self._colors = True
            logger.debug("Terminal reports %d colours", curses.COLORS)

    def color_pair(self, foreground: int, background: int) -> int:
        """Attribute for a colour pair, allocating the pair on first use."""
        if not self._colors:
            return curses.A_NORMAL
        if curses.COLORS < 256:
            foreground = BASIC_COLORS.get(foreground, foreground)
            background = BASIC_COLORS.get(background, background)
        key = (foreground, background)
        if key not in self._pairs:
            number = len(self._pairs) + 1
            if number >= curses.COLOR_PAIRS:
                return curses.A_NORMAL
            curses.init_pair(number, foreground, background)
            self._pairs[key] = number
        return curses.color_pair(self._pairs[key])

    def _addstr(self, y: int, x: int, text: str, attr: int = 0) -> None:
        """addstr that ignores writes past the screen edge."""
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            pass

    def draw_status(self) -> None:
        attr = self.color_pair(status_color(self.game.status), DEFAULT_COLOR)
        self.stdscr.move(0, 0)
        self.stdscr.clrtoeol()
        self._addstr(0, 0, self.game.status_line(), attr)

    def draw_field(self) -> None:
        origin = self.game.origin
        for coord, cell in self.game.field.cells():
            attr = self.color_pair(*cell_colors(coord, cell))
            self._addstr(
                origin.row + coord.row,
                origin.col + CELL_WIDTH * coord.col,
                cell_glyph(cell),
                attr,
            )
        help_row = origin.row + self.game.field.size.row + 1
        self._addstr(help_row, 0, HELP_TEXT)

    def draw(self) -> None:
        self.draw_status()
        self.draw_field()
        self.stdscr.refresh()

    def read_event(self) -> Union[KeyEvent, PointerEvent, None]:
        """Block for the next input event."""
        code = self.stdscr.getch()
        if code == curses.KEY_MOUSE:
            try:
                _, x, y, _, bstate = curses.getmouse()
            except curses.error:
                return None
            return pointer_event_from_mouse(x, y, bstate)
        if code == curses.KEY_RESIZE:
            self.stdscr.clear()
            return None
        return key_event_from_code(code)

    def run(self) -> None:
        """Draw, read one event, apply it; repeat until the exit key."""
        self.setup()
        while True:
            self.draw()
            event = self.read_event()
            if isinstance(event, KeyEvent) and is_exit_key(event):
                break
            if isinstance(event, PointerEvent):
                self.game.handle_pointer(event)


# ============================================================================
# Entry Point
# ============================================================================

def play(
    config: Optional[FieldConfig] = None,
    rng: Optional[np.random.Generator] = None,
) -> Game:
    """
    Play one game in the current terminal.

    Returns:
        The finished (or abandoned) game.

    Raises:
        TerminalError: If stdout is not a terminal.
    """
    if not sys.stdout.isatty():
        raise TerminalError("not a tty!")

    game = Game(config, rng=rng)
    logger.info(
        "Starting %dx%d game with %d mines",
        game.field.size.row,
        game.field.size.col,
        game.field.num_mines,
    )
    curses.wrapper(lambda stdscr: TerminalScreen(stdscr, game).run())
    logger.info("Game ended with status %s", game.status.name)
    return game
