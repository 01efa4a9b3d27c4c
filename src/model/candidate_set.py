"""Contains the class representing the remaining possibilities of a single cell."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

from model.errors import InvalidCollapseError, UnresolvedCellError

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from model.chooser import Chooser


class CandidateSet:
    """The set of tile ids that are still possible at one cell.

    The set is a boolean mask with one entry per tile of the tile set (True for each tile that is still possible). A
    candidate set created by the grid wraps a view into the grid's dense storage, so changes to the set are changes to
    the grid. A cardinality of 0 signals a contradiction, a cardinality of 1 means that the cell is resolved.
    """

    # Boolean array which contains True for each id of a tile that is still possible, False otherwise.
    _mask: NDArray[np.bool_]

    def __init__(self, mask: NDArray[np.bool_]) -> None:
        """Wraps an existing boolean mask (without copying it)."""
        self._mask = mask

    @classmethod
    def full(cls, tile_count: int) -> CandidateSet:
        """Creates a standalone candidate set in full superposition."""
        return cls(np.full(tile_count, True, dtype=bool))

    @classmethod
    def from_tile_ids(cls, tile_ids: Iterable[int], tile_count: int) -> CandidateSet:
        """Creates a standalone candidate set containing the given tile ids."""
        mask = np.full(tile_count, False, dtype=bool)
        mask[list(tile_ids)] = True
        return cls(mask)

    def __contains__(self, tile_id: object) -> bool:
        return isinstance(tile_id, (int, np.integer)) and 0 <= tile_id < len(self._mask) and bool(self._mask[tile_id])

    def __repr__(self) -> str:
        return f"CandidateSet({self.tile_ids()})"

    @property
    def mask(self) -> NDArray[np.bool_]:
        """The boolean candidate mask."""
        return self._mask

    def intersect(self, allowed: NDArray[np.bool_]) -> NDArray[np.bool_]:
        """Returns the intersection of this set with an allowed mask, leaving this set unchanged."""
        return self._mask & allowed

    def cardinality(self) -> int:
        """Returns the number of tiles that are still possible."""
        return int(np.count_nonzero(self._mask))

    def tile_ids(self) -> list[int]:
        """Returns the sorted ids of all tiles that are still possible."""
        return [int(tile_id) for tile_id in np.flatnonzero(self._mask)]

    def forced_value(self) -> int:
        """Returns the single remaining tile id.

        Raises:
            UnresolvedCellError: If the set does not contain exactly one tile id.
        """
        tile_ids = np.flatnonzero(self._mask)
        if len(tile_ids) != 1:
            raise UnresolvedCellError(f"Cell has {len(tile_ids)} candidates, a forced value needs exactly one")
        return int(tile_ids[0])

    def assign(self, mask: NDArray[np.bool_]) -> None:
        """Overwrites the set in place with the given mask."""
        self._mask[:] = mask

    def reset(self) -> None:
        """Restores full superposition in place."""
        self._mask[:] = True

    def collapse_to(self, tile_id: int) -> int:
        """Reduces the set to the given tile id.

        Raises:
            InvalidCollapseError: If the set is not superposed or the tile id is not a candidate.
        """
        if self.cardinality() < 2:
            raise InvalidCollapseError(f"Only superposed cells can be collapsed, cell holds {self.tile_ids()}")
        if tile_id not in self:
            raise InvalidCollapseError(f"Tile {tile_id} is not a candidate of {self.tile_ids()}")
        self._mask[:] = False
        self._mask[tile_id] = True
        return tile_id

    def collapse_to_arbitrary(self, chooser: Chooser, weights: NDArray[np.int_]) -> int:
        """Reduces the set to one tile picked by the chooser.

        Args:
            chooser: The strategy that picks the tile among the remaining candidates.
            weights: The collapse weights of all tiles of the tile set, indexed by tile id.

        Returns:
            The id of the tile the set was reduced to.

        Raises:
            InvalidCollapseError: If the set is not superposed.
        """
        if self.cardinality() < 2:
            raise InvalidCollapseError(f"Only superposed cells can be collapsed, cell holds {self.tile_ids()}")
        tile_ids = self.tile_ids()
        tile_id = chooser.choose_tile(tile_ids, [int(weights[i]) for i in tile_ids])
        return self.collapse_to(tile_id)
