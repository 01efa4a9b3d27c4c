"""Manages the generation settings: grid size, tile set, topology, tile size and random seed."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from PyQt6 import QtCore as qtc

import constants
from enums import TileSetName, Topology
from model.tileset_catalog import get_tileset
from model.wave_function import WaveFunction

if TYPE_CHECKING:
    from collections.abc import Iterable

    from model.generation_event import GenerationListener
    from model.tileset import TileSet


class GeneratorModel(qtc.QObject):
    """
    Manages the settings every generation run is created from.

    This class tracks the grid size, the selected built-in tile set, the grid topology, the tile size used for rendering
    and the random seed. It inherits from QObject to facilitate communication via signals, so the views can react to
    changes made elsewhere (e.g. on the command line or by another widget).

    Signals:
        grid_size_changed: Emitted when the grid height or width is changed.
        tileset_changed: Emitted when another tile set is selected.
        topology_changed: Emitted when the topology is changed.
        tile_size_changed: Emitted when the tile size is changed.
        random_seed_changed: Emitted when the random seed is changed.

    Attributes:
        grid_height: The number of rows of the grid.
        grid_width: The number of columns of the grid.
        tileset_name: The name of the selected built-in tile set.
        topology: Whether the seam of the grid is cut for scrolling or not.
        tile_size: The side length of a rendered tile in pixels.
        random_seed: The seed of the next generation run.
    """

    grid_size_changed = qtc.pyqtSignal(int, int)
    tileset_changed = qtc.pyqtSignal(TileSetName)
    topology_changed = qtc.pyqtSignal(Topology)
    tile_size_changed = qtc.pyqtSignal(int)
    random_seed_changed = qtc.pyqtSignal(int)

    grid_height: int
    grid_width: int

    tileset_name: TileSetName
    topology: Topology

    tile_size: int

    random_seed: int

    # The tile set built from 'tileset_name', cached until another tile set is selected.
    _tileset: TileSet

    def __init__(
        self,
        grid_height: int = constants.GRID_HEIGHT_DEFAULT,
        grid_width: int = constants.GRID_WIDTH_DEFAULT,
        tileset_name: TileSetName = constants.TILESET_DEFAULT,
        topology: Topology = constants.TOPOLOGY_DEFAULT,
        random_seed: int | None = None,
    ) -> None:
        """Initializes the model with the given settings.

        Args:
            grid_height: The number of rows of the grid.
            grid_width: The number of columns of the grid.
            tileset_name: The name of the built-in tile set to use.
            topology: Whether the seam of the grid is cut for scrolling or not.
            random_seed: The seed of the first generation run. If None, a random seed is drawn.
        """
        super().__init__()

        self.grid_height = grid_height
        self.grid_width = grid_width

        self.tileset_name = tileset_name
        self._tileset = get_tileset(tileset_name)
        self.topology = topology

        self.tile_size = constants.TILE_SIZE_DEFAULT

        self.random_seed = random_seed if random_seed is not None else random.randint(0, constants.RANDOM_SEED_MAX)

    def get_tileset(self) -> TileSet:
        """Returns the currently selected tile set."""
        return self._tileset

    def set_grid_size(self, grid_height: int, grid_width: int) -> None:
        """Sets the grid size.

        Args:
            grid_height: The new number of rows.
            grid_width: The new number of columns.
        """
        self.grid_height = grid_height
        self.grid_width = grid_width
        self.grid_size_changed.emit(grid_height, grid_width)

    def set_tileset(self, tileset_name: TileSetName) -> None:
        self.tileset_name = tileset_name
        self._tileset = get_tileset(tileset_name)
        self.tileset_changed.emit(tileset_name)

    def set_topology(self, topology: Topology) -> None:
        self.topology = topology
        self.topology_changed.emit(topology)

    def set_tile_size(self, tile_size: int) -> None:
        self.tile_size = tile_size
        self.tile_size_changed.emit(tile_size)

    def set_random_seed(self, random_seed: int) -> None:
        self.random_seed = random_seed
        self.random_seed_changed.emit(random_seed)

    def new_random_seed(self) -> int:
        """Draws a new random seed, stores it and returns it."""
        self.set_random_seed(random.randint(0, constants.RANDOM_SEED_MAX))
        return self.random_seed

    def create_wave_function(self, listeners: Iterable[GenerationListener] = ()) -> WaveFunction:
        """Creates a new generation session from the current settings.

        Args:
            listeners: Callbacks receiving all notifications of the session, including those of its initial pass.
        """
        return WaveFunction(
            self._tileset,
            self.grid_height,
            self.grid_width,
            topology=self.topology,
            seed=self.random_seed,
            listeners=listeners,
        )
