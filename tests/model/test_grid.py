"""Tests for model.grid module."""

import numpy as np
import pytest

import constants
from enums import Direction, Topology
from model.grid import Grid


class TestGridCreation:
    """Tests for allocating grids."""

    def test_starts_in_full_superposition(self):
        """Test that every cell holds every tile."""
        grid = Grid(2, 3, 4, Topology.TORUS)

        assert grid.shape == (2, 3)
        assert np.all(grid.get_cardinality_grid() == 4)
        assert grid.top_row == 0

    @pytest.mark.parametrize("rows, cols, tile_count", [(0, 3, 2), (3, 0, 2), (2, 2, 0)])
    def test_invalid_dimensions(self, rows: int, cols: int, tile_count: int):
        """Test that empty grids are rejected."""
        with pytest.raises(ValueError):
            Grid(rows, cols, tile_count, Topology.TORUS)


class TestGridAddressing:
    """Tests for toroidal addressing and the scrolling seam."""

    def test_wrap(self):
        """Test that coords wrap around on both axes."""
        grid = Grid(3, 4, 2, Topology.TORUS)

        assert grid.wrap(-1, 4) == (2, 0)
        assert grid.wrap(7, -5) == (1, 3)

    def test_contains(self):
        """Test the bounds check without wrapping."""
        grid = Grid(3, 4, 2, Topology.TORUS)

        assert grid.contains((2, 3))
        assert not grid.contains((3, 0))
        assert not grid.contains((0, -1))

    def test_torus_neighbors_wrap(self):
        """Test that border cells have neighbors on the opposite side in a torus."""
        grid = Grid(3, 4, 2, Topology.TORUS)

        assert dict(grid.neighbors((0, 0))) == {
            Direction.UP: (2, 0),
            Direction.DOWN: (1, 0),
            Direction.RIGHT: (0, 1),
            Direction.LEFT: (0, 3),
        }

    def test_single_row_torus_is_its_own_vertical_neighbor(self):
        """Test that a cell of a single-row torus is its own upper and lower neighbor."""
        grid = Grid(1, 2, 2, Topology.TORUS)

        assert grid.neighbor((0, 0), Direction.UP) == (0, 0)
        assert grid.neighbor((0, 0), Direction.DOWN) == (0, 0)
        assert grid.neighbor((0, 1), Direction.RIGHT) == (0, 0)

    def test_scrolling_seam_is_cut(self):
        """Test that the edge between the last and the top row is cut in the scrolling topology."""
        grid = Grid(3, 4, 2, Topology.SCROLLING)

        assert grid.neighbor((0, 1), Direction.UP) is None
        assert grid.neighbor((2, 1), Direction.DOWN) is None
        assert grid.neighbor((0, 1), Direction.DOWN) == (1, 1)
        assert grid.neighbor((0, 0), Direction.LEFT) == (0, 3)
        assert len(list(grid.neighbors((1, 1)))) == 4

    def test_seam_follows_top_row(self):
        """Test that the seam moves with the top row."""
        grid = Grid(3, 4, 2, Topology.SCROLLING)
        grid.top_row = 1

        assert grid.is_seam((1, 0), Direction.UP)
        assert grid.is_seam((0, 0), Direction.DOWN)
        assert grid.neighbor((0, 0), Direction.UP) == (2, 0)
        assert grid.neighbor((2, 0), Direction.DOWN) == (0, 0)

    def test_torus_has_no_seam(self):
        """Test that no edge is cut in the torus topology."""
        grid = Grid(3, 4, 2, Topology.TORUS)

        assert not any(grid.is_seam(coords, direction) for coords in grid.all_coords() for direction in Direction)

    def test_all_coords_row_major(self):
        """Test that all cells are listed row by row."""
        assert list(Grid(2, 2, 1, Topology.TORUS).all_coords()) == [(0, 0), (0, 1), (1, 0), (1, 1)]


class TestGridState:
    """Tests for candidate views, resets and tile grids."""

    def test_candidates_are_views(self):
        """Test that changing a candidate set changes the grid."""
        grid = Grid(2, 2, 3, Topology.TORUS)
        grid.candidates((1, 0)).collapse_to(2)

        assert grid.cardinality((1, 0)) == 1
        assert grid.candidates((1, 0)).forced_value() == 2

    def test_reset_row(self):
        """Test that resetting a row restores full superposition only there."""
        grid = Grid(2, 2, 3, Topology.TORUS)
        for coords in grid.all_coords():
            grid.candidates(coords).collapse_to(0)

        grid.reset_row(1)

        assert list(grid.get_cardinality_grid()[0]) == [1, 1]
        assert list(grid.get_cardinality_grid()[1]) == [3, 3]

    def test_reset_moves_seam_back(self):
        """Test that a full reset also restores the top row."""
        grid = Grid(2, 2, 3, Topology.SCROLLING)
        grid.candidates((0, 0)).collapse_to(1)
        grid.top_row = 1

        grid.reset()

        assert grid.top_row == 0
        assert np.all(grid.get_cardinality_grid() == 3)

    def test_tile_grid_markers(self):
        """Test that unresolved cells are marked in the tile grid."""
        grid = Grid(1, 3, 3, Topology.TORUS)
        grid.candidates((0, 0)).collapse_to(2)
        grid.candidates((0, 1)).assign(np.array([False, False, False]))

        assert list(grid.get_tile_grid()[0]) == [
            2,
            constants.CONTRADICTION_TILE_INDEX,
            constants.SUPERPOSED_TILE_INDEX,
        ]
