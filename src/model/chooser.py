"""Contains the strategies used for every arbitrary choice the WFC engine makes."""

from __future__ import annotations

from abc import ABC, abstractmethod
import random
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class Chooser(ABC):
    """Abstract base class for the choice strategies of the WFC engine.

    The engine makes two kinds of arbitrary choices: which of several equally constrained cells to collapse next, and
    which tile a cell collapses to. Both go through a chooser, so that tests can fix them and generation runs can be
    reproduced.
    """

    @abstractmethod
    def choose_cell(self, coords: Sequence[tuple[int, int]]) -> tuple[int, int]:
        """Picks one of several cells with equal entropy.

        Args:
            coords: The sorted, non-empty list of candidate cell coords.

        Returns:
            One element of 'coords'.
        """

    @abstractmethod
    def choose_tile(self, tile_ids: Sequence[int], weights: Sequence[int]) -> int:
        """Picks the tile a cell collapses to.

        Args:
            tile_ids: The sorted, non-empty list of remaining candidate tile ids.
            weights: The positive weight of each tile id in 'tile_ids'.

        Returns:
            One element of 'tile_ids'.
        """


class RandomChooser(Chooser):
    """Chooser backed by its own seeded pseudo-random number generator.

    Cells are picked uniformly, tiles are picked proportionally to their weights. Two choosers created with the same
    seed produce the same sequence of choices.
    """

    # Seed used for random number generation. None means the generator is seeded from the operating system.
    seed: int | None

    # The random number generator owned by this chooser.
    _random: random.Random

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._random = random.Random(seed)

    def choose_cell(self, coords: Sequence[tuple[int, int]]) -> tuple[int, int]:
        return self._random.choice(coords)

    def choose_tile(self, tile_ids: Sequence[int], weights: Sequence[int]) -> int:
        remaining = self._random.randrange(sum(weights))
        for tile_id, weight in zip(tile_ids, weights):
            if remaining >= weight:
                remaining -= weight
            else:
                return tile_id
        # Unreachable for positive weights, the loop always returns.
        return tile_ids[-1]


class FirstChooser(Chooser):
    """Deterministic chooser that always picks the first option (lowest coords / lowest tile id)."""

    def choose_cell(self, coords: Sequence[tuple[int, int]]) -> tuple[int, int]:
        return coords[0]

    def choose_tile(self, tile_ids: Sequence[int], weights: Sequence[int]) -> int:
        return tile_ids[0]
