"""
Unit tests for rendering helpers.

Tests glyphs, checkerboard colours and plain-text output.
"""
import pytest
from sweeper import Coordinate, FieldCell, GameStatus, Minefield
from sweeper.render import (
    BLUE,
    GREEN,
    GREY_CLOSED,
    GREY_OPENED,
    RED,
    WHITE,
    WHITE_CLOSED,
    WHITE_OPENED,
    cell_colors,
    cell_glyph,
    render_text,
    status_color,
)


def make_cell(
    opened: bool = False,
    mined: bool = False,
    flagged: bool = False,
    count: int = 0,
) -> FieldCell:
    return FieldCell(
        is_opened=opened, is_mined=mined, is_flagged=flagged, neighbor_mines=count
    )


# ============================================================================
# Glyph Tests
# ============================================================================

class TestCellGlyph:
    """Test two-character cell glyphs."""

    def test_closed_cell_is_blank(self) -> None:
        """Closed cells show nothing, even over a mine."""
        assert cell_glyph(make_cell(mined=True, count=2)) == "  "

    def test_flagged_cell(self) -> None:
        """Flagged cells show the flag marker."""
        assert cell_glyph(make_cell(flagged=True)) == " P"

    def test_opened_mine(self) -> None:
        """Opened mines show the mine marker."""
        assert cell_glyph(make_cell(opened=True, mined=True, count=3)) == " *"

    def test_opened_zero_is_blank(self) -> None:
        """Opened cells without neighbours show nothing."""
        assert cell_glyph(make_cell(opened=True)) == "  "

    @pytest.mark.parametrize("count", range(1, 9))
    def test_opened_count(self, count: int) -> None:
        """Opened numbered cells show their count."""
        assert cell_glyph(make_cell(opened=True, count=count)) == f" {count}"

    def test_glyphs_are_two_wide(self) -> None:
        """Every glyph fills exactly one two-column cell."""
        cells = [
            make_cell(),
            make_cell(flagged=True),
            make_cell(opened=True, mined=True),
            make_cell(opened=True, count=8),
        ]
        assert all(len(cell_glyph(cell)) == 2 for cell in cells)


# ============================================================================
# Colour Tests
# ============================================================================

class TestCellColors:
    """Test foreground and checkerboard background colours."""

    def test_closed_checkerboard(self) -> None:
        """Closed cells alternate between the two closed shades."""
        cell = make_cell()
        assert cell_colors(Coordinate(0, 0), cell)[1] == GREY_CLOSED
        assert cell_colors(Coordinate(0, 1), cell)[1] == WHITE_CLOSED
        assert cell_colors(Coordinate(1, 1), cell)[1] == GREY_CLOSED

    def test_opened_checkerboard(self) -> None:
        """Opened cells alternate between the two opened shades."""
        cell = make_cell(opened=True, count=1)
        assert cell_colors(Coordinate(2, 2), cell)[1] == GREY_OPENED
        assert cell_colors(Coordinate(2, 3), cell)[1] == WHITE_OPENED

    def test_count_is_blue(self) -> None:
        assert cell_colors(Coordinate(0, 0), make_cell(opened=True, count=4))[0] == BLUE

    def test_flag_and_mine_are_red(self) -> None:
        assert cell_colors(Coordinate(0, 0), make_cell(flagged=True))[0] == RED
        assert cell_colors(Coordinate(0, 0), make_cell(opened=True, mined=True))[0] == RED

    @pytest.mark.parametrize(
        "status, expected",
        [
            (GameStatus.IN_PROGRESS, WHITE),
            (GameStatus.WIN, GREEN),
            (GameStatus.LOSS, RED),
        ],
    )
    def test_status_color(self, status: GameStatus, expected: int) -> None:
        assert status_color(status) == expected


# ============================================================================
# Text Output Tests
# ============================================================================

class TestRenderText:
    """Test plain-text field rendering."""

    def test_closed_field(self, corner_mine_field: Minefield) -> None:
        """Closed cells render as dots."""
        assert render_text(corner_mine_field) == "\n".join([" . . ."] * 3)

    def test_mixed_field(self, corner_mine_field: Minefield) -> None:
        """Counts, flags and mines appear in place."""
        corner_mine_field.handle_click(Coordinate(1, 1))
        corner_mine_field.handle_force_click(Coordinate(2, 2))
        corner_mine_field.handle_click(Coordinate(0, 0))
        assert render_text(corner_mine_field).split("\n") == [
            " * . .",
            " . 1 .",
            " . . P",
        ]
