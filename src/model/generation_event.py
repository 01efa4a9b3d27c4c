"""Contains the notification type sent from a generation session to its listeners."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from enums import GenerationEventType


@dataclass(frozen=True)
class GenerationEvent:
    """A single notification about a change of the grid.

    Attributes:
        event_type: What happened.
        coords: The (row, col) coords of the affected cell (None for row events).
        tile_id: The tile a resolved cell holds (None for all other events).
        row: The affected row for row events (None for cell events).
    """

    event_type: GenerationEventType
    coords: tuple[int, int] | None = None
    tile_id: int | None = None
    row: int | None = None

    @classmethod
    def cell_resolved(cls, coords: tuple[int, int], tile_id: int) -> GenerationEvent:
        return cls(GenerationEventType.CELL_RESOLVED, coords=coords, tile_id=tile_id)

    @classmethod
    def contradiction(cls, coords: tuple[int, int]) -> GenerationEvent:
        return cls(GenerationEventType.CONTRADICTION, coords=coords)

    @classmethod
    def row_recycled(cls, row: int) -> GenerationEvent:
        return cls(GenerationEventType.ROW_RECYCLED, row=row)


GenerationListener = Callable[[GenerationEvent], None]
