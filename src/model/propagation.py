"""Implements the constraint propagation of the WFC algorithm."""

from __future__ import annotations

from collections.abc import Iterable
import logging
from typing import TYPE_CHECKING

from model.generation_event import GenerationEvent

if TYPE_CHECKING:
    from model.entropy_index import EntropyIndex
    from model.generation_event import GenerationListener
    from model.grid import Grid
    from model.tileset import TileSet

logger = logging.getLogger(__name__)


class PropagationEngine:
    """Shrinks neighboring candidate sets until the grid is arc consistent again.

    Whenever a cell loses candidates, every neighbor of that cell is intersected with the set of tiles the cell still
    allows in the neighbor's direction. Neighbors that shrink are processed the same way, until no cell changes any
    more. Cardinalities only ever decrease during propagation, so the process terminates after at most
    cells * tiles reductions. Changed cells are kept on an explicit stack instead of recursing, so the depth of the
    propagation is not limited by the size of the grid.

    Resolved neighbors are intersected as well: if two resolved cells turn out to be incompatible, the neighbor drops
    to zero candidates and the propagation reports a contradiction.
    """

    # The grid holding the candidate sets.
    _grid: Grid
    # The bucket index that has to mirror every change of a cardinality.
    _entropy_index: EntropyIndex
    # The tile set providing the projections.
    _tileset: TileSet
    # Callback receiving 'cell resolved' and 'contradiction' notifications.
    _notify: GenerationListener

    # Stack of cell coords whose candidate sets changed and whose neighbors still have to be updated.
    _changed_cells_coords: list[tuple[int, int]]
    # The coords of the cell that ran out of candidates during the last propagation, None if there was none.
    contradiction_coords: tuple[int, int] | None

    def __init__(self, grid: Grid, entropy_index: EntropyIndex, tileset: TileSet, notify: GenerationListener) -> None:
        """Initializes the engine.

        Args:
            grid: The grid holding the candidate sets.
            entropy_index: The bucket index that has to mirror every change of a cardinality.
            tileset: The tile set providing the projections.
            notify: Callback receiving 'cell resolved' and 'contradiction' notifications.
        """
        self._grid = grid
        self._entropy_index = entropy_index
        self._tileset = tileset
        self._notify = notify

        self._changed_cells_coords = []
        self.contradiction_coords = None

    def propagate_from(self, coords: tuple[int, int]) -> bool:
        """Propagates the constraints of a single changed cell to a fixpoint.

        Args:
            coords: The coords of the cell whose candidate set changed.

        Returns:
            False if a cell ran out of candidates (contradiction), True otherwise.
        """
        return self.propagate_from_many([coords])

    def propagate_from_many(self, coords: Iterable[tuple[int, int]]) -> bool:
        """Propagates the constraints of several cells to a common fixpoint.

        Args:
            coords: The coords of all cells whose constraints have to be (re)applied to their neighbors.

        Returns:
            False if a cell ran out of candidates (contradiction), True otherwise.
        """
        self.contradiction_coords = None
        # Pushed in reverse so that the cells are popped in the order they were given.
        self._changed_cells_coords.extend(reversed(list(coords)))
        return self._propagate()

    def _propagate(self) -> bool:
        """Processes the stack of changed cells until it is empty."""
        while self._changed_cells_coords:
            coords = self._changed_cells_coords.pop()
            source_mask = self._grid.candidates(coords).mask

            for direction, neighbor_coords in self._grid.neighbors(coords):
                neighbor = self._grid.candidates(neighbor_coords)
                old_count = neighbor.cardinality()
                if old_count == 0:
                    continue

                reduced_mask = neighbor.intersect(self._tileset.projection(source_mask, direction))
                new_count = int(reduced_mask.sum())

                # The neighbor didn't shrink, so the propagation along this edge has reached its fixpoint.
                if new_count == old_count:
                    continue

                neighbor.assign(reduced_mask)
                self._entropy_index.record(neighbor_coords, old_count, new_count)

                if new_count == 0:
                    logger.debug("Contradiction at %s while propagating from %s", neighbor_coords, coords)
                    self._changed_cells_coords.clear()
                    self.contradiction_coords = neighbor_coords
                    self._notify(GenerationEvent.contradiction(neighbor_coords))
                    return False

                if new_count == 1:
                    self._notify(GenerationEvent.cell_resolved(neighbor_coords, neighbor.forced_value()))

                self._changed_cells_coords.append(neighbor_coords)

        return True
