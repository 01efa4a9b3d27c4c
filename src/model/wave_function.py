"""Implements a single WFC generation session on a toroidal grid."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING

import numpy as np

from enums import CellStatus, StepResult
from model.chooser import RandomChooser
from model.collapser import Collapser
from model.entropy_index import EntropyIndex
from model.errors import ContradictionError, InvalidCollapseError
from model.grid import Grid
from model.propagation import PropagationEngine
from model.row_recycler import RowRecycler

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from enums import Topology
    from model.chooser import Chooser
    from model.generation_event import GenerationEvent, GenerationListener
    from model.tileset import TileSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CellState:
    """Read-only snapshot of a single cell.

    Attributes:
        status: Whether the cell is resolved, superposed or contradicted.
        tile_id: The tile of a resolved cell, None otherwise.
        count: The number of remaining candidate tiles.
    """

    status: CellStatus
    tile_id: int | None
    count: int


class WaveFunction:
    """A generation session that tiles a grid with the WFC algorithm.

    The session owns the grid, the entropy index and the components operating on them. Every cell starts in full
    superposition. An initial propagation pass removes all tiles that can never be supported by a neighbor, after that
    the grid is arc consistent. Each step collapses one of the cells with the fewest candidates and propagates the
    consequences, until every cell is resolved or a cell runs out of candidates (contradiction). There is no
    backtracking: a contradicted session stays contradicted until it is reset.

    For endless scrolling, 'recycle_edge_row()' resets the oldest row, after which stepping continues and generates
    it again, consistent with its neighbor. Listeners receive a notification for every resolved cell, every
    contradiction and every recycled row. The session is not thread-safe and must only be used by a single caller.

    Attributes:
        tileset: The tiles and adjacency rules used for generation.
    """

    tileset: TileSet

    # The grid holding the candidate sets.
    _grid: Grid
    # The bucket index used to find the cell with the lowest entropy.
    _entropy_index: EntropyIndex
    # Callbacks receiving the generation notifications.
    _listeners: list[GenerationListener]
    # The engine restoring arc consistency.
    _propagation_engine: PropagationEngine
    # The component choosing and collapsing cells.
    _collapser: Collapser
    # The component resetting rows for scrolling.
    _row_recycler: RowRecycler

    def __init__(
        self,
        tileset: TileSet,
        rows: int,
        cols: int,
        *,
        topology: Topology,
        chooser: Chooser | None = None,
        seed: int | None = None,
        listeners: Iterable[GenerationListener] = (),
    ) -> None:
        """Creates the session and runs the initial propagation pass.

        Args:
            tileset: The tiles and adjacency rules used for generation.
            rows: The number of rows of the grid (at least 1).
            cols: The number of columns of the grid (at least 1).
            topology: Whether the vertical seam at the top row is cut (scrolling) or not (torus).
            chooser: Strategy for all arbitrary choices. Defaults to a 'RandomChooser' seeded with 'seed'.
            seed: Seed for the default chooser. Ignored if a chooser is given.
            listeners: Callbacks registered before the initial propagation pass, so that they also receive the cells
                resolved by it.

        Raises:
            ValueError: If a grid dimension is smaller than 1.
        """
        self.tileset = tileset

        self._grid = Grid(rows, cols, tileset.tile_count, topology)
        self._entropy_index = EntropyIndex(tileset.tile_count, self._grid.all_coords())
        self._listeners = list(listeners)

        self._propagation_engine = PropagationEngine(self._grid, self._entropy_index, tileset, self._emit)
        self._collapser = Collapser(
            self._grid,
            self._entropy_index,
            self._propagation_engine,
            tileset,
            chooser if chooser is not None else RandomChooser(seed),
            self._emit,
        )
        self._row_recycler = RowRecycler(self._grid, self._entropy_index, self._propagation_engine, self._emit)

        self._initialize()

    @property
    def rows(self) -> int:
        return self._grid.rows

    @property
    def cols(self) -> int:
        return self._grid.cols

    @property
    def topology(self) -> Topology:
        return self._grid.topology

    @property
    def top_row(self) -> int:
        """The row shown first in display order."""
        return self._grid.top_row

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def entropy_index(self) -> EntropyIndex:
        return self._entropy_index

    @property
    def contradiction_coords(self) -> tuple[int, int] | None:
        """The coords of a contradicted cell (the lowest ones if there are several), None if there is none."""
        contradicted = self._entropy_index.bucket(0)
        return min(contradicted) if contradicted else None

    def add_listener(self, listener: GenerationListener) -> None:
        """Registers a callback for all further generation notifications.

        Cells resolved by the initial propagation pass are only reported to listeners passed to the constructor.
        """
        self._listeners.append(listener)

    def remove_listener(self, listener: GenerationListener) -> None:
        self._listeners.remove(listener)

    def is_done(self) -> bool:
        """Checks whether every cell is resolved."""
        return not self.is_contradicted() and self._entropy_index.unresolved_count() == 0

    def is_contradicted(self) -> bool:
        return self._entropy_index.has_contradiction()

    def cell_state(self, coords: tuple[int, int]) -> CellState:
        """Returns a snapshot of a cell. Coords wrap around on both axes."""
        coords = self._grid.wrap(*coords)
        candidates = self._grid.candidates(coords)
        count = candidates.cardinality()
        if count == 0:
            return CellState(CellStatus.CONTRADICTION, None, 0)
        if count == 1:
            return CellState(CellStatus.RESOLVED, candidates.forced_value(), 1)
        return CellState(CellStatus.SUPERPOSED, None, count)

    def step(self) -> StepResult:
        """Collapses the cell with the lowest entropy and propagates the consequences."""
        result = self._collapser.step()
        if result == StepResult.CONTRADICTION:
            logger.warning("Generation ran into a contradiction at %s", self.contradiction_coords)
        return result

    def collapse(self, coords: tuple[int, int], tile_id: int | None = None) -> StepResult:
        """Collapses a specific cell (optionally to a specific tile) and propagates the consequences.

        Args:
            coords: The coords of the superposed cell to collapse.
            tile_id: The tile to collapse to. If None, the chooser picks one.

        Returns:
            COLLAPSED, or CONTRADICTION if the propagation ran into a contradiction.

        Raises:
            InvalidCollapseError: If the session is contradicted, the coords are outside of the grid, the cell is not
                superposed or the tile is not a candidate of the cell.
        """
        if self.is_contradicted():
            raise InvalidCollapseError("Cannot collapse cells of a contradicted grid, reset it first")
        if not self._collapser.collapse(coords, tile_id):
            logger.warning("Collapsing %s ran into a contradiction at %s", coords, self.contradiction_coords)
            return StepResult.CONTRADICTION
        return StepResult.COLLAPSED

    def run_to_completion(self) -> int:
        """Steps until the grid is fully resolved.

        Returns:
            The number of cells collapsed by this call.

        Raises:
            ContradictionError: If a cell ran out of candidates. The grid has to be reset afterwards.
        """
        collapsed_cells = 0
        while True:
            result = self.step()
            if result == StepResult.DONE:
                logger.info("Resolved %dx%d grid after %d collapses", self.rows, self.cols, collapsed_cells)
                return collapsed_cells
            if result == StepResult.CONTRADICTION:
                raise ContradictionError(self.contradiction_coords)
            collapsed_cells += 1

    def recycle_edge_row(self) -> int:
        """Resets the oldest row to full superposition, so that the next steps generate it again.

        Returns:
            The index of the recycled row (now the last row in display order).

        Raises:
            ContradictionError: If the grid is already contradicted, or if the reset row cannot be made consistent with
                its neighbor.
        """
        if self.is_contradicted():
            raise ContradictionError(self.contradiction_coords)
        row = self._grid.top_row
        if not self._row_recycler.recycle_edge_row():
            logger.warning("Recycling row %d ran into a contradiction at %s", row, self.contradiction_coords)
            raise ContradictionError(self.contradiction_coords)
        return row

    def reset(self, seed: int | None = None) -> None:
        """Restores full superposition for the whole grid.

        Args:
            seed: If given, the chooser is replaced with a new 'RandomChooser' using this seed.
        """
        self._grid.reset()
        self._entropy_index.reset(self._grid.all_coords())
        if seed is not None:
            self._collapser.chooser = RandomChooser(seed)
        self._initialize()

    def tile_grid(self, display_order: bool = False) -> NDArray[np.int_]:
        """Returns the tile ids of all cells.

        Args:
            display_order: If True, the rows are rotated so that the top row comes first.

        Returns:
            A 2D array of tile ids, with 'constants.SUPERPOSED_TILE_INDEX' for superposed and
                'constants.CONTRADICTION_TILE_INDEX' for contradicted cells.
        """
        tile_grid = self._grid.get_tile_grid()
        if display_order:
            tile_grid = np.roll(tile_grid, -self._grid.top_row, axis=0)
        return tile_grid

    def _initialize(self) -> None:
        """Propagates the constraints of all cells once, starting from full superposition."""
        if not self._propagation_engine.propagate_from_many(self._grid.all_coords()):
            logger.warning(
                "Initial propagation of a %dx%d grid with %d tiles ran into a contradiction at %s",
                self.rows,
                self.cols,
                self.tileset.tile_count,
                self.contradiction_coords,
            )

    def _emit(self, event: GenerationEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
