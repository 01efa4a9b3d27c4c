"""Tests for model.tileset module."""

import numpy as np
import pytest

from enums import Direction
from model.tileset import Tile, TileSet


class TestTileSetValidation:
    """Tests for the validation of tile definitions."""

    def test_empty_tileset_rejected(self):
        """Test that a tile set needs at least one tile."""
        with pytest.raises(ValueError):
            TileSet([])

    def test_tile_ids_must_match_positions(self):
        """Test that tile ids out of order are rejected."""
        with pytest.raises(ValueError, match="expected 0"):
            TileSet([Tile.create(1, [[0], [0], [0], [0]])])

    def test_four_projections_required(self):
        """Test that every tile needs one projection per direction."""
        with pytest.raises(ValueError, match="projections"):
            TileSet([Tile.create(0, [[0], [0], [0]])])

    def test_unknown_tile_ids_rejected(self):
        """Test that projections may only reference tiles of the set."""
        with pytest.raises(ValueError, match="unknown tile ids"):
            TileSet([Tile.create(0, [[0], [0], [0], [5]])])

    def test_non_positive_weight_rejected(self):
        """Test that weights have to be positive."""
        with pytest.raises(ValueError, match="weight"):
            TileSet([Tile.create(0, [[0], [0], [0], [0]], weight=0)])


class TestTileSetQueries:
    """Tests for looking up tiles and adjacency rules."""

    def test_len_iter_and_getitem(self, stripes_tileset: TileSet):
        """Test the sequence protocol of a tile set."""
        assert len(stripes_tileset) == 2
        assert [tile.id for tile in stripes_tileset] == [0, 1]
        assert stripes_tileset[1].projections[Direction.RIGHT.value] == frozenset({1})

    def test_get_compatible_tiles(self, stripes_tileset: TileSet):
        """Test that compatible tiles are listed per direction."""
        assert stripes_tileset.get_compatible_tiles(0, Direction.RIGHT) == [0]
        assert stripes_tileset.get_compatible_tiles(0, Direction.UP) == [0, 1]

    def test_weights(self, weighted_tileset: TileSet):
        """Test that weights are indexed by tile id and read-only."""
        assert list(weighted_tileset.weights) == [1, 1000]
        with pytest.raises(ValueError):
            weighted_tileset.weights[0] = 5

    def test_is_compatible_checks_both_sides(self):
        """Test that an adjacency only counts if both tiles permit it."""
        tileset = TileSet([Tile.create(0, [[0], [0], [0, 1], [0]]), Tile.create(1, [[1], [1], [1], [1]])])

        assert tileset.get_compatible_tiles(0, Direction.RIGHT) == [0, 1]
        assert not tileset.is_compatible(0, 1, Direction.RIGHT)
        assert tileset.is_compatible(0, 0, Direction.RIGHT)


class TestProjection:
    """Tests for projecting candidate masks into neighbor directions."""

    def test_projection_is_union_of_candidate_projections(self, stripes_tileset: TileSet):
        """Test that the projection contains the tiles allowed by any candidate."""
        both = np.array([True, True])
        only_one = np.array([False, True])

        assert list(stripes_tileset.projection(both, Direction.RIGHT)) == [True, True]
        assert list(stripes_tileset.projection(only_one, Direction.RIGHT)) == [False, True]

    def test_projection_of_empty_mask_is_empty(self, stripes_tileset: TileSet):
        """Test that a contradicted cell allows nothing."""
        assert not stripes_tileset.projection(np.array([False, False]), Direction.UP).any()

    def test_projection_is_cached_and_read_only(self, stripes_tileset: TileSet):
        """Test that repeated projections return the same read-only array."""
        mask = np.array([True, False])
        first = stripes_tileset.projection(mask, Direction.LEFT)
        second = stripes_tileset.projection(mask.copy(), Direction.LEFT)

        assert first is second
        assert not first.flags.writeable

    def test_projection_differs_per_direction(self, dead_end_tileset: TileSet):
        """Test that the cache distinguishes directions."""
        only_dead_end = np.array([False, True])

        assert not dead_end_tileset.projection(only_dead_end, Direction.RIGHT).any()
        assert dead_end_tileset.projection(only_dead_end, Direction.LEFT).all()
