"""Manages tile definitions and adjacency rules for the WFC algorithm."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from enums import Direction

if TYPE_CHECKING:
    from numpy.typing import NDArray


@dataclass(frozen=True)
class Tile:
    """A single tile (basis state) a cell can resolve to.

    Attributes:
        id: The index of the tile within its tile set.
        projections: For each direction (indexed by 'Direction.value'), the ids of the tiles allowed to occupy the
            neighboring cell in that direction.
        glyph: The character used to draw the tile.
        color_rgb: The color used to draw the glyph.
        background_rgb: The color used to fill the cell behind the glyph.
        weight: The relative probability of the tile being picked when a cell is collapsed at random.
    """

    id: int
    projections: tuple[frozenset[int], ...]
    glyph: str = "?"
    color_rgb: tuple[int, int, int] = (255, 255, 255)
    background_rgb: tuple[int, int, int] = (0, 0, 0)
    weight: int = 1

    @classmethod
    def create(
        cls,
        id: int,
        projections: Sequence[Iterable[int]],
        glyph: str = "?",
        color_rgb: tuple[int, int, int] = (255, 255, 255),
        background_rgb: tuple[int, int, int] = (0, 0, 0),
        weight: int = 1,
    ) -> Tile:
        """Creates a tile from plain id lists, ordered up, down, right, left."""
        return cls(id, tuple(frozenset(allowed) for allowed in projections), glyph, color_rgb, background_rgb, weight)


class TileSet:
    """Immutable catalog of tiles and their adjacency rules.

    The adjacency rules are stored as a 3D boolean array, so that the set of tiles allowed next to any combination of
    tiles can be computed with a single vectorized reduction. The rules do not have to be symmetric: the propagation
    always projects both cells of an edge into each other, so an adjacency is only kept if both sides permit it.

    Attributes:
        tile_count: The number of tiles in the set.
    """

    tile_count: int

    # The tiles, where the list index is equal to the tile id.
    _tiles: tuple[Tile, ...]
    # The 3D boolean array defining compatibility: [p1, p2, direction] is True exactly if tile p2 can be placed next to
    # tile p1 in the specified direction.
    _adjacency_rules: NDArray[np.bool_]
    # The collapse weights of all tiles, indexed by tile id.
    _weights: NDArray[np.int_]
    # Cache of already computed projections, keyed by the packed candidate mask and the direction value.
    _projection_cache: dict[tuple[bytes, int], NDArray[np.bool_]]

    def __init__(self, tiles: Sequence[Tile]) -> None:
        """Validates the tile definitions and builds the adjacency rules.

        Args:
            tiles: The tiles of the set. Tile ids have to be equal to their position in the sequence.

        Raises:
            ValueError: If the set is empty, a tile id is out of order, a tile has not exactly four projections, a
                projection references an unknown tile or a weight is not positive.
        """
        if not tiles:
            raise ValueError("A tile set needs at least one tile")

        self._tiles = tuple(tiles)
        self.tile_count = len(self._tiles)

        for index, tile in enumerate(self._tiles):
            if tile.id != index:
                raise ValueError(f"Tile at position {index} has id {tile.id}, expected {index}")
            if len(tile.projections) != len(Direction):
                raise ValueError(f"Tile {tile.id} has {len(tile.projections)} projections, expected {len(Direction)}")
            if tile.weight <= 0:
                raise ValueError(f"Tile {tile.id} has a non-positive weight {tile.weight}")
            for allowed in tile.projections:
                unknown = [other_id for other_id in allowed if not 0 <= other_id < self.tile_count]
                if unknown:
                    raise ValueError(f"Tile {tile.id} references unknown tile ids {sorted(unknown)}")

        self._adjacency_rules = np.full((self.tile_count, self.tile_count, len(Direction)), False, dtype=bool)
        for tile in self._tiles:
            for direction in Direction:
                for other_id in tile.projections[direction.value]:
                    self._adjacency_rules[tile.id, other_id, direction.value] = True
        self._adjacency_rules.setflags(write=False)

        self._weights = np.array([tile.weight for tile in self._tiles], dtype=np.int_)
        self._weights.setflags(write=False)

        self._projection_cache = {}

    def __len__(self) -> int:
        return self.tile_count

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles)

    def __getitem__(self, tile_id: int) -> Tile:
        return self._tiles[tile_id]

    @property
    def weights(self) -> NDArray[np.int_]:
        """The collapse weights of all tiles, indexed by tile id."""
        return self._weights

    def get_compatible_tiles(self, tile_id: int, direction: Direction) -> list[int]:
        """Returns all tile ids that may be placed next to a tile in a direction.

        Args:
            tile_id: The id of the tile to check compatibility for.
            direction: The direction to check compatibility for.

        Returns:
            A sorted list of all tile ids that can legally be placed adjacent to the tile with the specified id in the
                specified direction.
        """
        return [int(other_id) for other_id in np.flatnonzero(self._adjacency_rules[tile_id, :, direction.value])]

    def projection(self, mask: NDArray[np.bool_], direction: Direction) -> NDArray[np.bool_]:
        """Computes the tiles allowed next to a cell in the given direction.

        The result is the union of the projections of all tiles that are still candidates in the mask. Results are
        cached and returned as read-only arrays.

        Args:
            mask: The boolean candidate mask of the source cell.
            direction: The direction from the source cell towards the neighbor.

        Returns:
            A boolean mask of all tiles that the neighbor cell may still hold.
        """
        key = (np.packbits(mask).tobytes(), direction.value)
        allowed = self._projection_cache.get(key)
        if allowed is None:
            allowed = self._adjacency_rules[mask, :, direction.value].any(axis=0)
            allowed.setflags(write=False)
            self._projection_cache[key] = allowed
        return allowed

    def is_compatible(self, tile_id: int, other_id: int, direction: Direction) -> bool:
        """Checks whether a tile may be placed next to another one in both directions of the edge."""
        return bool(
            self._adjacency_rules[tile_id, other_id, direction.value]
            and self._adjacency_rules[other_id, tile_id, direction.reverse().value]
        )
