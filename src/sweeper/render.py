"""
Rendering helpers for Minesweeper.

Maps cell state to two-character glyphs and xterm-256 palette colours.
Kept free of terminal I/O so it can back both the curses front end and
plain-text output.
"""
from typing import Tuple

from .field import FieldCell, Minefield
from .grid import Coordinate
from .session import GameStatus


# ============================================================================
# Palette (xterm-256 indices)
# ============================================================================

BLUE = 21
RED = 196
GREEN = 46
WHITE = 231

WHITE_OPENED = 231
GREY_OPENED = 253
WHITE_CLOSED = 48
GREY_CLOSED = 41

# Nearest of the 8 basic colours for each palette entry. The two shades of
# each checkerboard keep distinct basic colours.
BASIC_COLORS = {
    BLUE: 4,
    RED: 1,
    GREEN: 2,
    WHITE: 7,
    GREY_OPENED: 6,
    WHITE_CLOSED: 3,
    GREY_CLOSED: 2,
}

BLANK_GLYPH = "  "
FLAG_GLYPH = " P"
MINE_GLYPH = " *"


# ============================================================================
# Cells
# ============================================================================

def cell_glyph(cell: FieldCell) -> str:
    """Two-character glyph for a cell."""
    if not cell.is_opened:
        return FLAG_GLYPH if cell.is_flagged else BLANK_GLYPH
    if cell.is_mined:
        return MINE_GLYPH
    if cell.neighbor_mines == 0:
        return BLANK_GLYPH
    return f" {cell.neighbor_mines}"


def background_color(coord: Coordinate, is_opened: bool) -> int:
    """Checkerboard background, lighter once a cell is opened."""
    even = (coord.row + coord.col) % 2 == 0
    if is_opened:
        return GREY_OPENED if even else WHITE_OPENED
    return GREY_CLOSED if even else WHITE_CLOSED


def cell_colors(coord: Coordinate, cell: FieldCell) -> Tuple[int, int]:
    """
    Foreground and background colours for a cell.

    Returns:
        (foreground, background) palette indices.
    """
    background = background_color(coord, cell.is_opened)
    if not cell.is_opened:
        foreground = RED if cell.is_flagged else background
    elif cell.is_mined:
        foreground = RED
    elif cell.neighbor_mines == 0:
        foreground = background
    else:
        foreground = BLUE
    return foreground, background


# ============================================================================
# Status and Text Output
# ============================================================================

def status_color(status: GameStatus) -> int:
    if status == GameStatus.WIN:
        return GREEN
    if status == GameStatus.LOSS:
        return RED
    return WHITE


def render_text(field: Minefield) -> str:
    """Render the field as plain text, one line per row."""
    lines = []
    for row in range(field.size.row):
        glyphs = []
        for col in range(field.size.col):
            cell = field.cell(Coordinate(row, col))
            glyph = cell_glyph(cell)
            if not cell.is_opened and not cell.is_flagged:
                glyph = " ."
            glyphs.append(glyph)
        lines.append("".join(glyphs))
    return "\n".join(lines)
