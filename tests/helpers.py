"""Test helpers shared by the generator tests."""

import numpy as np

from enums import Topology
from model.chooser import FirstChooser
from model.entropy_index import EntropyIndex
from model.grid import Grid
from model.propagation import PropagationEngine
from model.tileset import TileSet


class EngineParts:
    """A grid with its entropy index and propagation engine, wired together without an initial propagation pass."""

    def __init__(self, tileset: TileSet, rows: int, cols: int, topology: Topology = Topology.TORUS) -> None:
        self.tileset = tileset
        self.events = []
        self.grid = Grid(rows, cols, tileset.tile_count, topology)
        self.entropy_index = EntropyIndex(tileset.tile_count, self.grid.all_coords())
        self.propagation_engine = PropagationEngine(self.grid, self.entropy_index, tileset, self.events.append)
        self.chooser = FirstChooser()

    def restrict(self, coords: tuple[int, int], tile_ids: list[int]) -> None:
        """Overwrites the candidates of a cell (keeping the entropy index in sync) without propagating."""
        candidates = self.grid.candidates(coords)
        old_count = candidates.cardinality()
        mask = np.full(self.tileset.tile_count, False, dtype=bool)
        mask[tile_ids] = True
        candidates.assign(mask)
        self.entropy_index.record(coords, old_count, len(tile_ids))


# =============================================================================
# Assertions
# =============================================================================

def assert_arc_consistent(grid: Grid, tileset: TileSet) -> None:
    """Asserts that every candidate of every cell is supported by every (non-seam) neighbor."""
    for coords in grid.all_coords():
        mask = grid.candidates(coords).mask
        for direction, neighbor_coords in grid.neighbors(coords):
            neighbor_mask = grid.candidates(neighbor_coords).mask
            allowed = tileset.projection(mask, direction)
            assert not np.any(neighbor_mask & ~allowed), (
                f"{neighbor_coords} holds tiles not allowed {direction.name} of {coords}"
            )


def assert_resolved_tiling_valid(grid: Grid, tileset: TileSet) -> None:
    """Asserts that a fully resolved grid only contains compatible neighbors."""
    tile_grid = grid.get_tile_grid()
    assert np.all(tile_grid >= 0)
    for coords in grid.all_coords():
        for direction, neighbor_coords in grid.neighbors(coords):
            assert tileset.is_compatible(int(tile_grid[coords]), int(tile_grid[neighbor_coords]), direction)


def assert_buckets_consistent(grid: Grid, entropy_index: EntropyIndex) -> None:
    """Asserts that every cell is stored in the bucket of its cardinality."""
    for coords in grid.all_coords():
        assert entropy_index.bucket_of(coords) == grid.cardinality(coords)
    total = sum(entropy_index.bucket_size(count) for count in range(entropy_index.tile_count + 1))
    assert total == grid.rows * grid.cols

