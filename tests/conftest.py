"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

import numpy as np

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
# Repository root, for the command line entry point
sys.path.append(str(Path(__file__).parent.parent))

from sweeper import FieldConfig, Game, Grid, Minefield, Coordinate


# ============================================================================
# Grid Fixtures
# ============================================================================

@pytest.fixture
def square_grid() -> Grid:
    """Create an empty 5x5 grid."""
    return Grid(Coordinate(5, 5))


@pytest.fixture
def full_grid() -> Grid:
    """Create a 5x5 grid with every cell set."""
    grid = Grid(Coordinate(5, 5))
    for coord in grid.all():
        grid.set(coord, True)
    return grid


# ============================================================================
# Field Fixtures
# ============================================================================

@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator for reproducible mine placement."""
    return np.random.default_rng(1234)


@pytest.fixture
def default_field(rng: np.random.Generator) -> Minefield:
    """Create a default 10x10 field with 10 mines."""
    return Minefield(FieldConfig(), rng)


@pytest.fixture
def empty_field() -> Minefield:
    """Create a field with no mines for cascade testing."""
    return Minefield(FieldConfig(5, 5, 0))


@pytest.fixture
def corner_mine_field() -> Minefield:
    """3x3 field with a single mine in the top-left corner."""
    return Minefield.from_layout([
        "*..",
        "...",
        "...",
    ])


@pytest.fixture
def walled_field() -> Minefield:
    """
    Field split by a wall of mines.

    The open area on the left cascades; the right column stays closed.
    """
    return Minefield.from_layout([
        "...*.",
        "...*.",
        "...*.",
        "...*.",
    ])


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def default_game(rng: np.random.Generator) -> Game:
    """Create a default game with a seeded generator."""
    return Game(rng=rng)


@pytest.fixture
def small_game(corner_mine_field: Minefield) -> Game:
    """3x3 game with one mine at (0, 0)."""
    return Game(field=corner_mine_field)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> FieldConfig:
    """Create a valid field configuration."""
    return FieldConfig(10, 10, 10)
