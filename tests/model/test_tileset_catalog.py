"""Tests for model.tileset_catalog module."""

import numpy as np
import pytest

from enums import Direction, TileSetName, Topology
from helpers import assert_resolved_tiling_valid
from model.chooser import FirstChooser
from model.tileset_catalog import get_tileset
from model.wave_function import WaveFunction


@pytest.mark.parametrize("name", list(TileSetName))
class TestTilesetCatalog:
    """Tests for the built-in tile sets."""

    def test_tileset_is_built(self, name: TileSetName):
        """Test that every built-in tile set has drawable tiles with a projection per direction."""
        tileset = get_tileset(name)

        assert len(tileset) > 1
        for tile in tileset:
            assert len(tile.projections) == len(Direction)
            assert tile.glyph
            assert tile.weight > 0

    def test_first_tile_can_fill_the_grid(self, name: TileSetName):
        """Test that the first tile allows itself on every side."""
        tileset = get_tileset(name)

        for direction in Direction:
            assert tileset.is_compatible(0, 0, direction)

    @pytest.mark.parametrize("topology", list(Topology))
    def test_generation_with_first_choices_succeeds(self, name: TileSetName, topology: Topology):
        """Test that a grid resolves into a valid tiling when always picking the first option."""
        wave_function = WaveFunction(get_tileset(name), 6, 8, topology=topology, chooser=FirstChooser())

        wave_function.run_to_completion()

        assert wave_function.is_done()
        assert np.all(wave_function.tile_grid() >= 0)
        assert_resolved_tiling_valid(wave_function.grid, wave_function.tileset)
