"""Contains the bucket index used to find the cell with the lowest entropy."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from model.chooser import Chooser


class EntropyIndex:
    """Buckets of cell coords, grouped by the number of candidates of each cell.

    Bucket k holds the coords of all cells whose candidate set currently has cardinality k, for k in 0..tile_count.
    Every cell is in exactly one bucket at any time. Bucket 0 holds contradicted cells and bucket 1 resolved cells
    (including cells reserved for an imminent collapse), neither of them is ever picked for collapsing.
    """

    # The highest possible cardinality (the number of tiles in the tile set).
    _tile_count: int
    # The buckets, indexed by cardinality.
    _buckets: list[set[tuple[int, int]]]
    # The index of the bucket each cell is currently stored in.
    _bucket_of: dict[tuple[int, int], int]

    def __init__(self, tile_count: int, coords: Iterable[tuple[int, int]]) -> None:
        """Creates the index with all given coords in the top bucket (full superposition)."""
        self._tile_count = tile_count
        self._buckets = [set() for _ in range(tile_count + 1)]
        self._bucket_of = {}
        self.reset(coords)

    def reset(self, coords: Iterable[tuple[int, int]]) -> None:
        """Empties all buckets and puts the given coords into the top bucket."""
        for bucket in self._buckets:
            bucket.clear()
        self._bucket_of.clear()
        for cell_coords in coords:
            self._buckets[self._tile_count].add(cell_coords)
            self._bucket_of[cell_coords] = self._tile_count

    @property
    def tile_count(self) -> int:
        """The index of the top bucket."""
        return self._tile_count

    def record(self, coords: tuple[int, int], old_count: int, new_count: int) -> None:
        """Moves a cell from the bucket of its old cardinality to the bucket of its new one.

        Raises:
            KeyError: If the cell is not stored in the bucket 'old_count'.
        """
        if old_count == new_count:
            return
        self._buckets[old_count].remove(coords)
        self._buckets[new_count].add(coords)
        self._bucket_of[coords] = new_count

    def bucket_of(self, coords: tuple[int, int]) -> int:
        """Returns the index of the bucket a cell is currently stored in."""
        return self._bucket_of[coords]

    def bucket(self, count: int) -> frozenset[tuple[int, int]]:
        """Returns a read-only copy of the bucket for a cardinality."""
        return frozenset(self._buckets[count])

    def bucket_size(self, count: int) -> int:
        """Returns the number of cells in the bucket for a cardinality."""
        return len(self._buckets[count])

    def unresolved_count(self) -> int:
        """Returns the number of cells that still have two or more candidates."""
        return sum(len(bucket) for bucket in self._buckets[2:])

    def has_contradiction(self) -> bool:
        """Checks whether any cell has run out of candidates."""
        return bool(self._buckets[0])

    def pick_lowest_entropy(self, chooser: Chooser) -> tuple[int, int] | None:
        """Picks and reserves one of the superposed cells with the fewest candidates.

        The chosen cell is moved into bucket 1 immediately, so it cannot be picked again before it is collapsed.

        Args:
            chooser: The strategy that breaks ties between cells with the same number of candidates.

        Returns:
            The coords of the reserved cell, or None if no cell has more than one candidate.
        """
        for count in range(2, self._tile_count + 1):
            bucket = self._buckets[count]
            if bucket:
                coords = chooser.choose_cell(sorted(bucket))
                self.record(coords, count, 1)
                return coords
        return None
