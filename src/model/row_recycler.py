"""Implements the row recycling used for endless vertical scrolling."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from enums import Topology
from model.generation_event import GenerationEvent

if TYPE_CHECKING:
    from model.entropy_index import EntropyIndex
    from model.generation_event import GenerationListener
    from model.grid import Grid
    from model.propagation import PropagationEngine

logger = logging.getLogger(__name__)


class RowRecycler:
    """Resets the oldest row of the grid so that it can be generated again.

    The grid is treated as a ring of rows, shown in display order starting at 'Grid.top_row'. Recycling resets the top
    row to full superposition and advances 'top_row', which turns the reset row into the last row in display order.
    The reset row is then constrained again by its real neighbor, the previously last row, and by the rules between its
    own cells, so collapsing it continues the tiling seamlessly. Repeating this produces an unbounded sequence of rows
    in fixed storage.
    """

    # The grid holding the candidate sets.
    _grid: Grid
    # The bucket index that has to mirror the reset cardinalities.
    _entropy_index: EntropyIndex
    # The engine re-establishing arc consistency for the reset row.
    _propagation_engine: PropagationEngine
    # Callback receiving 'row recycled' notifications.
    _notify: GenerationListener

    def __init__(
        self,
        grid: Grid,
        entropy_index: EntropyIndex,
        propagation_engine: PropagationEngine,
        notify: GenerationListener,
    ) -> None:
        self._grid = grid
        self._entropy_index = entropy_index
        self._propagation_engine = propagation_engine
        self._notify = notify

    def recycle_edge_row(self) -> bool:
        """Resets the top row, moves it to the end of the display order and propagates into it.

        Returns:
            False if the propagation into the reset row ran into a contradiction, True otherwise.
        """
        row = self._grid.top_row

        for col in range(self._grid.cols):
            coords = (row, col)
            self._entropy_index.record(coords, self._entropy_index.bucket_of(coords), self._grid.tile_count)
        self._grid.reset_row(row)
        self._grid.top_row = (row + 1) % self._grid.rows

        logger.debug("Recycled row %d, top row is now %d", row, self._grid.top_row)
        self._notify(GenerationEvent.row_recycled(row))

        # The row above the reset row is its real neighbor. In the torus topology the row below (the new top row) is
        # adjacent as well, because the seam is not cut.
        seed_rows = [(row - 1) % self._grid.rows]
        if self._grid.topology == Topology.TORUS:
            seed_rows.append((row + 1) % self._grid.rows)

        # The reset row itself is a seed as well, so tiles without horizontal support are removed again, as in the
        # initial pass of a session.
        seed_rows.append(row)
        seed_coords = [(seed_row, col) for seed_row in dict.fromkeys(seed_rows) for col in range(self._grid.cols)]
        return self._propagation_engine.propagate_from_many(seed_coords)
