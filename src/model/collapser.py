"""Implements the observation (collapse) phase of the WFC algorithm."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from enums import StepResult
from model.errors import InvalidCollapseError
from model.generation_event import GenerationEvent

if TYPE_CHECKING:
    from model.chooser import Chooser
    from model.entropy_index import EntropyIndex
    from model.generation_event import GenerationListener
    from model.grid import Grid
    from model.propagation import PropagationEngine
    from model.tileset import TileSet

logger = logging.getLogger(__name__)


class Collapser:
    """Selects the next cell to resolve, collapses it to a single tile and triggers the propagation."""

    # The grid holding the candidate sets.
    _grid: Grid
    # The bucket index used to find the cell with the lowest entropy.
    _entropy_index: EntropyIndex
    # The engine restoring arc consistency after each collapse.
    _propagation_engine: PropagationEngine
    # The tile set providing the collapse weights.
    _tileset: TileSet
    # Strategy for breaking entropy ties and picking the tile of a collapsed cell.
    _chooser: Chooser
    # Callback receiving 'cell resolved' notifications.
    _notify: GenerationListener

    def __init__(
        self,
        grid: Grid,
        entropy_index: EntropyIndex,
        propagation_engine: PropagationEngine,
        tileset: TileSet,
        chooser: Chooser,
        notify: GenerationListener,
    ) -> None:
        self._grid = grid
        self._entropy_index = entropy_index
        self._propagation_engine = propagation_engine
        self._tileset = tileset
        self._chooser = chooser
        self._notify = notify

    @property
    def chooser(self) -> Chooser:
        return self._chooser

    @chooser.setter
    def chooser(self, chooser: Chooser) -> None:
        self._chooser = chooser

    def collapse(self, coords: tuple[int, int], tile_id: int | None = None) -> bool:
        """Collapses a superposed cell and propagates the consequences.

        Args:
            coords: The coords of the cell to collapse. The cell may already be reserved in bucket 1 of the entropy
                index.
            tile_id: The tile to collapse to. If None, the chooser picks one of the remaining candidates.

        Returns:
            False if the propagation ran into a contradiction, True otherwise.

        Raises:
            InvalidCollapseError: If the coords are outside of the grid, the cell is not superposed or the forced tile
                is not a candidate.
        """
        if not self._grid.contains(coords):
            raise InvalidCollapseError(f"Cell {coords} is outside of the {self._grid.rows}x{self._grid.cols} grid")

        candidates = self._grid.candidates(coords)
        if tile_id is None:
            tile_id = candidates.collapse_to_arbitrary(self._chooser, self._tileset.weights)
        else:
            candidates.collapse_to(tile_id)

        self._entropy_index.record(coords, self._entropy_index.bucket_of(coords), 1)
        logger.debug("Collapsed %s to tile %d", coords, tile_id)
        self._notify(GenerationEvent.cell_resolved(coords, tile_id))

        return self._propagation_engine.propagate_from(coords)

    def step(self) -> StepResult:
        """Collapses the superposed cell with the lowest entropy.

        Returns:
            DONE if no superposed cell is left, CONTRADICTION if the grid is (or just became) contradicted, COLLAPSED
                otherwise.
        """
        if self._entropy_index.has_contradiction():
            return StepResult.CONTRADICTION

        coords = self._entropy_index.pick_lowest_entropy(self._chooser)
        if coords is None:
            return StepResult.DONE

        if not self.collapse(coords):
            return StepResult.CONTRADICTION
        return StepResult.COLLAPSED
