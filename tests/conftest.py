"""Shared pytest fixtures for the generator tests."""

import pytest
from PyQt6 import QtCore as qtc

from model.tileset import Tile, TileSet


# =============================================================================
# Qt
# =============================================================================

@pytest.fixture(scope="session")
def qt_app() -> qtc.QCoreApplication:
    """A Qt application object, needed by timers of the generation manager."""
    return qtc.QCoreApplication.instance() or qtc.QCoreApplication([])


# =============================================================================
# Tile Sets
# =============================================================================

@pytest.fixture
def single_tileset() -> TileSet:
    """A single tile that allows itself in all directions."""
    return TileSet([Tile.create(0, [[0], [0], [0], [0]])])


@pytest.fixture
def free_tileset() -> TileSet:
    """Three tiles that may be placed next to each other in any combination."""
    everything = [0, 1, 2]
    return TileSet([Tile.create(tile_id, [everything] * 4) for tile_id in range(3)])


@pytest.fixture
def uniform_tileset() -> TileSet:
    """Two tiles that only allow themselves, so every tiling is uniform."""
    return TileSet([Tile.create(0, [[0], [0], [0], [0]]), Tile.create(1, [[1], [1], [1], [1]])])


@pytest.fixture
def stripes_tileset() -> TileSet:
    """Two tiles that only allow themselves horizontally and anything vertically."""
    return TileSet([Tile.create(0, [[0, 1], [0, 1], [0], [0]]), Tile.create(1, [[0, 1], [0, 1], [1], [1]])])


@pytest.fixture
def checker_tileset() -> TileSet:
    """Two tiles that only allow the other tile horizontally and anything vertically."""
    return TileSet([Tile.create(0, [[0, 1], [0, 1], [1], [1]]), Tile.create(1, [[0, 1], [0, 1], [0], [0]])])


@pytest.fixture
def dead_end_tileset() -> TileSet:
    """Two tiles where tile 1 allows no neighbor at all to its right."""
    return TileSet([Tile.create(0, [[0, 1], [0, 1], [0], [0, 1]]), Tile.create(1, [[0, 1], [0, 1], [], [0, 1]])])


@pytest.fixture
def weighted_tileset() -> TileSet:
    """Two freely combinable tiles where tile 1 is much more likely than tile 0."""
    everything = [0, 1]
    return TileSet([Tile.create(0, [everything] * 4, weight=1), Tile.create(1, [everything] * 4, weight=1000)])

