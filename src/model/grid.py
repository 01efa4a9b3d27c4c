"""Contains the toroidal grid storing the candidate sets of all cells."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

import numpy as np

import constants
from enums import Direction, Topology
from model.candidate_set import CandidateSet

if TYPE_CHECKING:
    from numpy.typing import NDArray


class Grid:
    """A dense 2D array of candidate sets with toroidal addressing.

    All candidate sets live in one 3D boolean array of shape (rows, cols, tile_count) that is allocated once and
    mutated in place for the lifetime of a generation session. Columns always wrap around. Rows wrap around as well,
    except in the scrolling topology, where the edge between the row above 'top_row' and 'top_row' itself is cut. This
    seam keeps a freshly recycled row from being coupled to the stale row that is going to be recycled next.

    Attributes:
        rows: The number of rows of the grid.
        cols: The number of columns of the grid.
        tile_count: The number of tiles of the tile set (length of every candidate mask).
        topology: Whether the vertical seam at 'top_row' is cut.
        top_row: The row shown first in display order. Advanced by row recycling.
    """

    rows: int
    cols: int
    tile_count: int
    topology: Topology
    top_row: int

    # The 3D boolean array [row, col, tile_id] which is True for each tile that is still possible at a cell.
    _cells: NDArray[np.bool_]

    def __init__(self, rows: int, cols: int, tile_count: int, topology: Topology) -> None:
        """Allocates the grid in full superposition.

        Raises:
            ValueError: If a dimension or the tile count is smaller than 1.
        """
        if rows < 1 or cols < 1:
            raise ValueError(f"Grid dimensions must be at least 1x1, got {rows}x{cols}")
        if tile_count < 1:
            raise ValueError("A grid needs at least one tile")

        self.rows = rows
        self.cols = cols
        self.tile_count = tile_count
        self.topology = topology
        self.top_row = 0

        self._cells = np.full((rows, cols, tile_count), True, dtype=bool)

    @property
    def shape(self) -> tuple[int, int]:
        """The (rows, cols) size of the grid."""
        return self.rows, self.cols

    def contains(self, coords: tuple[int, int]) -> bool:
        """Checks whether coords address a cell without wrapping around."""
        return 0 <= coords[0] < self.rows and 0 <= coords[1] < self.cols

    def wrap(self, row: int, col: int) -> tuple[int, int]:
        """Maps arbitrary coords onto the torus."""
        return row % self.rows, col % self.cols

    def candidates(self, coords: tuple[int, int]) -> CandidateSet:
        """Returns the candidate set of a cell (a live view into the grid)."""
        return CandidateSet(self._cells[coords[0], coords[1]])

    def cardinality(self, coords: tuple[int, int]) -> int:
        """Returns the number of candidates of a cell."""
        return int(np.count_nonzero(self._cells[coords[0], coords[1]]))

    def is_seam(self, coords: tuple[int, int], direction: Direction) -> bool:
        """Checks whether the edge leaving a cell in a direction is cut by the scrolling seam."""
        if self.topology != Topology.SCROLLING:
            return False
        match direction:
            case Direction.UP:
                return coords[0] == self.top_row
            case Direction.DOWN:
                return (coords[0] + 1) % self.rows == self.top_row
            case _:
                return False

    def neighbor(self, coords: tuple[int, int], direction: Direction) -> tuple[int, int] | None:
        """Returns the coords of the neighbor in a direction, or None if the edge is cut by the seam."""
        if self.is_seam(coords, direction):
            return None
        vector = direction.to_vector()
        return self.wrap(coords[0] + vector[0], coords[1] + vector[1])

    def neighbors(self, coords: tuple[int, int]) -> Iterator[tuple[Direction, tuple[int, int]]]:
        """Yields (direction, coords) for every edge of a cell that is not cut by the seam."""
        for direction in Direction:
            neighbor_coords = self.neighbor(coords, direction)
            if neighbor_coords is not None:
                yield direction, neighbor_coords

    def all_coords(self) -> Iterator[tuple[int, int]]:
        """Yields the coords of all cells in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield row, col

    def reset_row(self, row: int) -> None:
        """Restores full superposition for every cell of a row."""
        self._cells[row] = True

    def reset(self) -> None:
        """Restores full superposition for the whole grid and moves the seam back to row 0."""
        self._cells[:] = True
        self.top_row = 0

    def get_cardinality_grid(self) -> NDArray[np.int_]:
        """Returns a 2D array holding the number of candidates of every cell."""
        return np.count_nonzero(self._cells, axis=2)

    def get_tile_grid(self) -> NDArray[np.int_]:
        """Converts the grid into a 2D array of tile ids.

        Resolved cells hold their tile id, superposed cells 'constants.SUPERPOSED_TILE_INDEX' and contradicted cells
        'constants.CONTRADICTION_TILE_INDEX'.
        """
        cardinalities = self.get_cardinality_grid()
        tile_grid = np.where(cardinalities == 1, np.argmax(self._cells, axis=2), constants.SUPERPOSED_TILE_INDEX)
        tile_grid[cardinalities == 0] = constants.CONTRADICTION_TILE_INDEX
        return tile_grid.astype(np.int_)
