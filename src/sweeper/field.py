"""
Minefield module for Minesweeper.

Implements mine placement, click handling and the flood-fill reveal on top
of three parallel boolean grids (mines, opened cells and flags).
"""
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Iterator, Optional, Sequence, Tuple

import numpy as np

from .grid import Coordinate, Grid


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

MINE_CHAR = "*"


class InvalidConfigError(ValueError):
    """Raised when a field configuration cannot produce a playable game."""


class ClickResult(Enum):
    """Outcome of a single click on the field."""

    SAFE = auto()
    EXPLODED = auto()


@dataclass
class FieldConfig:
    """
    Configuration for a minefield.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Total mines to place.
    """

    rows: int = 10
    cols: int = 10
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise InvalidConfigError("Field dimensions must be positive")
        if self.num_mines < 0:
            raise InvalidConfigError("Number of mines cannot be negative")
        if self.num_mines > self.total_cells:
            raise InvalidConfigError(
                f"Too many mines (field has {self.total_cells} cells)"
            )

    @property
    def size(self) -> Coordinate:
        return Coordinate(self.rows, self.cols)

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    @property
    def max_safe_zone(self) -> int:
        """Largest number of cells a first click can keep mine-free."""
        return min(self.rows, 3) * min(self.cols, 3)

    @property
    def max_mines(self) -> int:
        """Most mines that fit whichever cell is clicked first."""
        return self.total_cells - self.max_safe_zone


DEFAULT_CONFIG = FieldConfig(10, 10, 10)


# ============================================================================
# Field Cell
# ============================================================================

@dataclass(frozen=True)
class FieldCell:
    """
    Render-ready state of a single cell.

    Attributes:
        is_opened: Whether the cell has been opened.
        is_mined: Whether the cell holds a mine.
        is_flagged: Whether the player flagged the cell.
        neighbor_mines: Mines among the adjacent cells (0-8).
    """

    is_opened: bool
    is_mined: bool
    is_flagged: bool
    neighbor_mines: int

    def to_observation(self) -> int:
        """
        Convert cell to an observation value for agents.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Opened cell with adjacent mine count
            9: Opened mine
        """
        if self.is_flagged:
            return -2
        if not self.is_opened:
            return -1
        if self.is_mined:
            return 9
        return self.neighbor_mines


# ============================================================================
# Minefield Class
# ============================================================================

class Minefield:
    """
    Minesweeper field.

    Mines are allocated lazily on the first click so that the clicked cell
    and its neighbours are always safe.
    """

    def __init__(
        self,
        config: Optional[FieldConfig] = None,
        rng: Optional[np.random.Generator] = None,
        *,
        mines: Optional[Iterable[Coordinate]] = None,
    ) -> None:
        """
        Initialize the minefield.

        Args:
            config: Field configuration (default: 10x10 with 10 mines).
            rng: Random generator used for mine placement. A generator
                seeded from OS entropy is created when omitted.
            mines: Explicit mine layout. When given, the field starts with
                its mines already allocated.

        Raises:
            InvalidConfigError: If the mines cannot be placed.
        """
        self.config = config or FieldConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.mines_allocated = False

        self.mines = Grid(self.config.size)
        self.opened = Grid(self.config.size)
        self.flags = Grid(self.config.size)

        if mines is None:
            if self.config.num_mines > self.config.max_mines:
                raise InvalidConfigError(
                    f"Too many mines (max {self.config.max_mines} for a "
                    f"{self.config.rows}x{self.config.cols} field)"
                )
        else:
            self._place_layout(mines)

    @classmethod
    def from_layout(cls, layout: Sequence[str]) -> "Minefield":
        """
        Build a field from rows of text where ``*`` marks a mine.

        Args:
            layout: Equal-length strings, one per row.

        Returns:
            Field with its mines already allocated.
        """
        if not layout or len({len(line) for line in layout}) != 1:
            raise InvalidConfigError("Layout rows must be non-empty and equal")
        mines = [
            Coordinate(row, col)
            for row, line in enumerate(layout)
            for col, char in enumerate(line)
            if char == MINE_CHAR
        ]
        config = FieldConfig(len(layout), len(layout[0]), len(mines))
        return cls(config, mines=mines)

    # ========================================================================
    # Mine Placement (Low-level)
    # ========================================================================

    def _place_layout(self, mines: Iterable[Coordinate]) -> None:
        """Place an explicit set of mines."""
        positions = {Coordinate(*coord) for coord in mines}
        if len(positions) != self.config.num_mines:
            raise InvalidConfigError(
                f"Layout has {len(positions)} mines, "
                f"expected {self.config.num_mines}"
            )
        for coord in positions:
            if coord not in self.mines.all():
                raise InvalidConfigError(f"Mine {tuple(coord)} is off the field")
            self.mines.set(coord, True)
        self.mines_allocated = True

    def allocate_mines(self, starting_coord: Coordinate) -> None:
        """
        Place mines uniformly at random outside the safe zone.

        Args:
            starting_coord: First clicked cell. It and its neighbours stay
                mine-free.

        Raises:
            RuntimeError: If mines were already allocated.
        """
        if self.mines_allocated:
            raise RuntimeError("Mines are already allocated")

        excluded = self.mines.around(starting_coord)
        candidates = [
            coord for coord in self.mines.all() if coord not in excluded
        ]
        chosen = self.rng.choice(
            len(candidates), size=self.config.num_mines, replace=False
        )
        for position in chosen:
            self.mines.set(candidates[position], True)
        self.mines_allocated = True
        logger.debug(
            "Allocated %d mines around safe zone %s",
            self.config.num_mines,
            tuple(starting_coord),
        )

    # ========================================================================
    # Clicks (Mid-level)
    # ========================================================================

    def handle_click(self, coord: Coordinate) -> ClickResult:
        """
        Open a cell.

        Allocates mines on the first click. Clicking a flagged cell does
        nothing.

        Returns:
            EXPLODED if the opened cell is a mine, SAFE otherwise.
        """
        if not self.mines_allocated:
            self.allocate_mines(coord)
        if self.flags.get(coord):
            return ClickResult.SAFE
        self.open_at(coord)
        if self.mines.get(coord):
            return ClickResult.EXPLODED
        return ClickResult.SAFE

    def handle_force_click(self, coord: Coordinate) -> ClickResult:
        """Toggle the flag on an unopened cell."""
        if not self.opened.get(coord):
            self.flags.set(coord, not self.flags.get(coord))
        return ClickResult.SAFE

    def open_at(self, coord: Coordinate) -> None:
        """
        Open a cell and cascade through its empty region.

        Cells with no adjacent mines open all their unopened, non-mine
        neighbours; mines and numbered cells end the cascade. Opening a
        cell clears its flag. Re-opening an opened cell does nothing.
        """
        if self.opened.get(coord):
            return

        pending = [Coordinate(*coord)]
        queued = {pending[0]}
        while pending:
            current = pending.pop()
            self.opened.set(current, True)
            self.flags.set(current, False)
            if self.mines.get(current) or self.mines.sum_neighbors(current) > 0:
                continue
            for neighbor in self.opened.neighbors(current):
                if neighbor in queued:
                    continue
                if self.opened.get(neighbor) or self.mines.get(neighbor):
                    continue
                queued.add(neighbor)
                pending.append(neighbor)

        if len(queued) > 1:
            logger.debug(
                "Cascade from %s opened %d cells", tuple(coord), len(queued)
            )

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def size(self) -> Coordinate:
        return self.config.size

    @property
    def num_mines(self) -> int:
        return self.config.num_mines

    @property
    def opened_count(self) -> int:
        return self.opened.count()

    @property
    def flag_count(self) -> int:
        return self.flags.count()

    @property
    def flags_remaining(self) -> int:
        """Mines minus placed flags; negative when over-flagged."""
        return self.config.num_mines - self.flag_count

    def is_cleared(self) -> bool:
        """Check if every non-mine cell is opened."""
        safe_opened = int(np.count_nonzero(self.opened.data & ~self.mines.data))
        return safe_opened == self.config.total_cells - self.config.num_mines

    def neighbor_mines(self, coord: Coordinate) -> int:
        return self.mines.sum_neighbors(coord)

    def cell(self, coord: Coordinate) -> FieldCell:
        """Render-ready state of one cell."""
        return FieldCell(
            is_opened=self.opened.get(coord),
            is_mined=self.mines.get(coord),
            is_flagged=self.flags.get(coord),
            neighbor_mines=self.mines.sum_neighbors(coord),
        )

    def cells(self) -> Iterator[Tuple[Coordinate, FieldCell]]:
        """Every cell with its coordinate, in row-major order."""
        for coord in self.mines.all():
            yield coord, self.cell(coord)

    def to_observation(self) -> np.ndarray:
        """
        Get field state as a numpy array.

        Returns:
            2D int8 array, values as in ``FieldCell.to_observation``.
        """
        obs = np.zeros((self.config.rows, self.config.cols), dtype=np.int8)
        for coord, cell in self.cells():
            obs[coord.row, coord.col] = cell.to_observation()
        return obs
