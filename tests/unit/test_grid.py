"""
Unit tests for Grid and GridRange.

Tests storage, neighbourhood iteration at edges and corners, and
neighbour counting.
"""
import pytest
from sweeper import Coordinate, Grid, GridRange


# ============================================================================
# Coordinate Tests
# ============================================================================

class TestCoordinate:
    """Test coordinate value semantics."""

    def test_equal_by_value(self) -> None:
        """Coordinates with the same components are equal."""
        assert Coordinate(2, 3) == Coordinate(2, 3)
        assert Coordinate(2, 3) != Coordinate(3, 2)

    def test_hashable_by_value(self) -> None:
        """Equal coordinates collapse in a set."""
        assert len({Coordinate(1, 1), Coordinate(1, 1), Coordinate(0, 1)}) == 2


# ============================================================================
# Storage Tests
# ============================================================================

class TestGridStorage:
    """Test get/set on the flat storage."""

    def test_new_grid_is_all_false(self, square_grid: Grid) -> None:
        """New grid should hold False everywhere."""
        assert all(not square_grid.get(coord) for coord in square_grid.all())
        assert square_grid.count() == 0

    def test_set_then_get(self, square_grid: Grid) -> None:
        """A set cell reads back True, others stay False."""
        square_grid.set(Coordinate(2, 4), True)
        assert square_grid.get(Coordinate(2, 4)) is True
        assert square_grid.get(Coordinate(4, 2)) is False

    def test_storage_is_row_major(self) -> None:
        """Flat position is row * cols + col."""
        grid = Grid(Coordinate(3, 4))
        assert grid.position(Coordinate(0, 0)) == 0
        assert grid.position(Coordinate(1, 0)) == 4
        assert grid.position(Coordinate(2, 3)) == 11

    def test_count_after_sets(self, square_grid: Grid) -> None:
        """Count reflects set cells, including unsetting."""
        square_grid.set(Coordinate(0, 0), True)
        square_grid.set(Coordinate(1, 1), True)
        square_grid.set(Coordinate(0, 0), False)
        assert square_grid.count() == 1

    def test_as_array_shape(self) -> None:
        """2D view matches the grid size."""
        grid = Grid(Coordinate(3, 4))
        grid.set(Coordinate(2, 1), True)
        array = grid.as_array()
        assert array.shape == (3, 4)
        assert array[2, 1]


# ============================================================================
# Iteration Tests
# ============================================================================

class TestGridRange:
    """Test row-major and neighbourhood iteration."""

    def test_all_is_row_major(self) -> None:
        """All coordinates are produced row by row."""
        grid = Grid(Coordinate(2, 3))
        assert list(grid.all()) == [
            (0, 0), (0, 1), (0, 2),
            (1, 0), (1, 1), (1, 2),
        ]

    def test_range_is_restartable(self, square_grid: Grid) -> None:
        """Iterating the same range twice gives the same sequence."""
        block = square_grid.around(Coordinate(2, 2))
        assert list(block) == list(block)

    def test_around_interior_is_full_block(self, square_grid: Grid) -> None:
        """Interior cell has a full 3x3 block including itself."""
        block = square_grid.around(Coordinate(2, 2))
        assert len(block) == 9
        assert Coordinate(2, 2) in block

    def test_around_corner_is_clipped(self, square_grid: Grid) -> None:
        """Corner block is clipped, not wrapped."""
        assert set(square_grid.around(Coordinate(0, 0))) == {
            (0, 0), (0, 1), (1, 0), (1, 1),
        }
        assert set(square_grid.around(Coordinate(4, 4))) == {
            (3, 3), (3, 4), (4, 3), (4, 4),
        }

    def test_around_edge_is_clipped(self, square_grid: Grid) -> None:
        """Edge block has two rows of three cells."""
        block = square_grid.around(Coordinate(0, 2))
        assert len(block) == 6
        assert Coordinate(4, 2) not in block

    def test_contains_rejects_outside(self) -> None:
        """Membership checks both bounds."""
        block = GridRange(Coordinate(1, 1), Coordinate(3, 3))
        assert Coordinate(1, 1) in block
        assert Coordinate(3, 3) not in block
        assert Coordinate(0, 2) not in block
        assert "x" not in block

    def test_len_matches_iteration(self) -> None:
        """len() agrees with the number of yielded coordinates."""
        block = GridRange(Coordinate(1, 2), Coordinate(4, 5))
        assert len(block) == len(list(block)) == 9

    def test_neighbors_exclude_center(self, square_grid: Grid) -> None:
        """Neighbours never include the cell itself."""
        center = Coordinate(2, 2)
        neighbors = list(square_grid.neighbors(center))
        assert center not in neighbors
        assert len(neighbors) == 8


# ============================================================================
# Neighbour Count Tests
# ============================================================================

class TestSumNeighbors:
    """Test counting adjacent True cells."""

    @pytest.mark.parametrize(
        "coord, expected",
        [
            (Coordinate(0, 0), 3),
            (Coordinate(0, 4), 3),
            (Coordinate(4, 0), 3),
            (Coordinate(4, 4), 3),
            (Coordinate(0, 2), 5),
            (Coordinate(2, 0), 5),
            (Coordinate(4, 3), 5),
            (Coordinate(2, 2), 8),
            (Coordinate(1, 3), 8),
        ],
    )
    def test_full_grid_counts_by_position(
        self, full_grid: Grid, coord: Coordinate, expected: int
    ) -> None:
        """Corner, edge and interior cells see 3, 5 and 8 neighbours."""
        assert full_grid.sum_neighbors(coord) == expected

    def test_center_is_not_counted(self, square_grid: Grid) -> None:
        """A set cell does not count itself."""
        square_grid.set(Coordinate(2, 2), True)
        assert square_grid.sum_neighbors(Coordinate(2, 2)) == 0
        assert square_grid.sum_neighbors(Coordinate(1, 1)) == 1

    def test_distant_cells_are_not_counted(self, square_grid: Grid) -> None:
        """Only the adjacent ring is counted."""
        square_grid.set(Coordinate(0, 0), True)
        square_grid.set(Coordinate(4, 4), True)
        assert square_grid.sum_neighbors(Coordinate(2, 2)) == 0
