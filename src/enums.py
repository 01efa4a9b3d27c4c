"""Contains all global enumeration classes used throughout the project."""

from __future__ import annotations

from enum import Enum


class Direction(Enum):
    """Defines the cardinal directions used for tile adjacency and propagation.

    The values double as the index into a tile's projections, so their order is part of the tile table format.
    """

    UP = 0
    """Upward direction (towards the previous row)."""
    DOWN = 1
    """Downward direction (towards the next row)."""
    RIGHT = 2
    """Right direction (towards the next column)."""
    LEFT = 3
    """Left direction (towards the previous column)."""

    def reverse(self) -> Direction:
        """Returns the opposite direction of the current direction."""
        match self:
            case Direction.UP:
                return Direction.DOWN
            case Direction.DOWN:
                return Direction.UP
            case Direction.RIGHT:
                return Direction.LEFT
            case Direction.LEFT:
                return Direction.RIGHT

    def to_vector(self) -> tuple[int, int]:
        """Returns the (row, col) vector representation for the direction."""
        match self:
            case Direction.UP:
                return (-1, 0)
            case Direction.DOWN:
                return (1, 0)
            case Direction.RIGHT:
                return (0, 1)
            case Direction.LEFT:
                return (0, -1)


class Topology(Enum):
    """Defines how the grid wraps around at its vertical boundary."""

    TORUS = "Torus"
    """Rows and columns both wrap around. The last row is adjacent to the first one."""
    SCROLLING = "Scrolling"
    """Columns wrap around, but the edge between the last and the top row is cut so recycled rows stay independent."""


class StepResult(Enum):
    """Defines the outcomes of a single collapse step."""

    COLLAPSED = 0
    """A cell was collapsed and its constraints were propagated without contradiction."""
    DONE = 1
    """No cell with more than one candidate remains, so the grid is fully resolved."""
    CONTRADICTION = 2
    """A cell ran out of candidates. The grid has to be reset before it can be used again."""


class CellStatus(Enum):
    """Defines the states a single cell can be observed in."""

    RESOLVED = 0
    """Exactly one candidate tile remains."""
    SUPERPOSED = 1
    """Two or more candidate tiles remain."""
    CONTRADICTION = 2
    """No candidate tile remains."""


class GenerationEventType(Enum):
    """Defines the types of notifications a generation session sends to its listeners."""

    CELL_RESOLVED = 0
    """Used when a cell has been reduced to a single tile (by collapse or by propagation)."""
    CONTRADICTION = 1
    """Used when a cell has lost its last candidate tile."""
    ROW_RECYCLED = 2
    """Used when a row has been reset to full superposition for scrolling."""


class UpdateMode(Enum):
    """Defines the frequency at which the shown output should be updated."""

    ON_RESOLVED_CELL = "On Each Resolved Cell"
    """Updates the UI whenever a cell gets resolved. Considerably slows down generation."""
    ON_FINISHED_SCENE = "On Each Finished Scene"
    """Updates the UI once per finished scene or recycled row."""


class TileSetName(Enum):
    """Defines the built-in tile set catalogs."""

    MAZE = "Maze"
    """Thin red walls with corners and junctions on a dark floor."""
    PIPES = "Pipes"
    """Blue pipe network including dead ends."""
    ULTIMA = "Ultima"
    """Terrain gradient from deep water over grass to snow."""
    CIRCUIT_BOARD = "Circuit Board"
    """Rectangular chips on a green board, connected by traces."""
    DUNGEON = "Dungeon"
    """Rooms with walls and corridors in the style of old terminal dungeon crawlers."""
