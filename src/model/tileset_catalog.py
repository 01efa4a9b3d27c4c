"""Contains the built-in tile set catalogs.

Each catalog is a plain data table: for every tile its glyph, its colors and the tiles it allows above, below, to the
right and to the left of it (in this order, matching 'Direction').
"""

from __future__ import annotations

from collections.abc import Callable

from enums import TileSetName
from model.tileset import Tile, TileSet

_BLACK = (0, 0, 0)
_BLUE = (0, 0, 170)
_BRIGHT_BLUE = (85, 85, 255)
_BROWN = (170, 85, 0)
_GREEN = (0, 170, 0)
_BRIGHT_GREEN = (85, 255, 85)
_CYAN = (0, 170, 170)
_RED = (170, 0, 0)
_BRIGHT_RED = (255, 85, 85)
_GRAY = (85, 85, 85)
_LIGHT_GRAY = (170, 170, 170)
_WHITE = (255, 255, 255)

_BLOCK = "◼"

# Rooms connected by corridors, shared by the circuit board and the dungeon tile sets. Tile 0 is the space outside of
# rooms, 1-4 are the corners (upper left, upper right, lower left, lower right), 5-8 the walls (upper, lower, right,
# left), 9 the space inside of rooms and 10-12 the corridors (vertical, horizontal, crossing).
_ROOM_PROJECTIONS: list[list[list[int]]] = [
    [[0, 3, 4, 6, 11], [0, 1, 2, 5, 11], [0, 1, 3, 8, 10], [0, 2, 4, 7, 10]],
    [[0], [8], [5], [0]],
    [[0], [7], [0], [5]],
    [[8], [0], [6], [0]],
    [[7], [0], [0], [6]],
    [[0, 10], [9], [2, 5], [1, 5]],
    [[9], [0, 10], [4, 6], [3, 6]],
    [[2, 7], [4, 7], [0, 11], [9]],
    [[1, 8], [3, 8], [9], [0, 11]],
    [[5, 9], [6, 9], [7, 9], [8, 9]],
    [[6, 10, 12], [5, 10, 12], [0], [0]],
    [[0], [0], [8, 11, 12], [7, 11, 12]],
    [[10], [10], [11], [11]],
]


def maze() -> TileSet:
    """Thin walls with corners and T-junctions on a dark floor."""
    wall = _BRIGHT_RED
    return TileSet(
        [
            Tile.create(
                0,
                [[0, 2, 4, 5, 6, 9], [0, 2, 4, 7, 8, 11], [0, 1, 3, 5, 8, 12], [0, 1, 3, 6, 7, 10]],
                ".",
                _GRAY,
            ),
            Tile.create(1, [[1, 3, 7, 8, 10, 11, 12], [1, 3, 5, 6, 9, 10, 12], [0], [0]], "|", wall),
            Tile.create(2, [[0], [0], [2, 4, 6, 7, 9, 10], [2, 4, 5, 8, 9, 12]], "-", wall),
            # Wall pieces that only continue straight.
            Tile.create(3, [[1], [1], [0], [0]], "|", wall),
            Tile.create(4, [[0], [0], [2], [2]], "-", wall),
            # Corners.
            Tile.create(5, [[1], [0], [2], [0]], "#", wall),
            Tile.create(6, [[1], [0], [0], [2]], "#", wall),
            Tile.create(7, [[0], [1], [0], [2]], "#", wall),
            Tile.create(8, [[0], [1], [2], [0]], "#", wall),
            # T-junctions.
            Tile.create(9, [[1], [0], [2], [2]], "-", wall),
            Tile.create(10, [[1], [1], [0], [2]], "|", wall),
            Tile.create(11, [[0], [1], [2], [2]], "-", wall),
            Tile.create(12, [[1], [1], [2], [0]], "|", wall),
        ]
    )


def pipes() -> TileSet:
    """Pipe network with straight pieces, bends, junctions, a crossing and dead ends."""
    pipe = _BRIGHT_BLUE
    return TileSet(
        [
            Tile.create(
                0,
                [
                    [0, 2, 4, 7, 8, 9, 15, 16, 17],
                    [0, 2, 4, 5, 6, 11, 14, 16, 17],
                    [0, 1, 3, 5, 7, 12, 14, 15, 16],
                    [0, 1, 3, 6, 8, 10, 14, 15, 17],
                ],
                " ",
            ),
            Tile.create(1, [[3, 5, 6, 10, 11, 12, 13, 14], [3, 7, 8, 9, 10, 12, 13, 15], [0], [0]], "|", pipe, _BLUE),
            Tile.create(2, [[0], [0], [4, 6, 8, 9, 10, 11, 13, 17], [4, 5, 7, 9, 11, 12, 13, 16]], "-", pipe, _BLUE),
            Tile.create(3, [[1], [1], [0], [0]], "+", pipe, _BLUE),
            Tile.create(4, [[0], [0], [2], [2]], "+", pipe, _BLUE),
            # Bends.
            Tile.create(5, [[0], [1], [2], [0]], "+", pipe, _BLUE),
            Tile.create(6, [[0], [1], [0], [2]], "+", pipe, _BLUE),
            Tile.create(7, [[1], [0], [2], [0]], "+", pipe, _BLUE),
            Tile.create(8, [[1], [0], [0], [2]], "+", pipe, _BLUE),
            # Junctions and the crossing.
            Tile.create(9, [[1], [0], [2], [2]], "+", pipe, _BLUE),
            Tile.create(10, [[1], [1], [0], [2]], "+", pipe, _BLUE),
            Tile.create(11, [[0], [1], [2], [2]], "+", pipe, _BLUE),
            Tile.create(12, [[1], [1], [2], [0]], "+", pipe, _BLUE),
            Tile.create(13, [[1], [1], [2], [2]], "+", pipe, _BLUE),
            # Dead ends, open to the bottom, top, right and left.
            Tile.create(14, [[0], [1], [0], [0]], "+", pipe, _BLUE),
            Tile.create(15, [[1], [0], [0], [0]], "+", pipe, _BLUE),
            Tile.create(16, [[0], [0], [2], [0]], "+", pipe, _BLUE),
            Tile.create(17, [[0], [0], [0], [2]], "+", pipe, _BLUE),
        ]
    )


def ultima() -> TileSet:
    """Terrain gradient: each terrain may only border itself and the next lower and higher terrain."""
    colors = [_BLUE, _BRIGHT_BLUE, _BROWN, _BRIGHT_GREEN, _LIGHT_GRAY, _WHITE]
    last = len(colors) - 1
    tiles = []
    for tile_id, color in enumerate(colors):
        allowed = list(range(max(tile_id - 1, 0), min(tile_id + 1, last) + 1))
        tiles.append(Tile.create(tile_id, [allowed] * 4, _BLOCK, color))
    return TileSet(tiles)


def circuit_board() -> TileSet:
    """Dark chips with white pins on a green board, connected by traces."""
    looks = [
        (" ", _GREEN, _GREEN),
        ("=", _WHITE, _GREEN),
        ("=", _WHITE, _GREEN),
        ("=", _WHITE, _GREEN),
        ("=", _WHITE, _GREEN),
        (" ", _RED, _BLACK),
        (" ", _RED, _BLACK),
        ("=", _WHITE, _GREEN),
        ("=", _WHITE, _GREEN),
        (" ", _RED, _BLACK),
        ("|", _BRIGHT_GREEN, _GREEN),
        ("-", _BRIGHT_GREEN, _GREEN),
        ("+", _BRIGHT_GREEN, _GREEN),
    ]
    return _rooms(looks)


def dungeon() -> TileSet:
    """Rooms with walls, connected by corridors, in the style of old terminal dungeon crawlers."""
    looks = [
        (":", _GREEN, _BLACK),
        ("#", _BRIGHT_RED, _BLACK),
        ("#", _BRIGHT_RED, _BLACK),
        ("#", _BRIGHT_RED, _BLACK),
        ("#", _BRIGHT_RED, _BLACK),
        ("-", _BRIGHT_RED, _BLACK),
        ("-", _BRIGHT_RED, _BLACK),
        ("|", _BRIGHT_RED, _BLACK),
        ("|", _BRIGHT_RED, _BLACK),
        ("@", _GRAY, _BLACK),
        ("#", _CYAN, _BLACK),
        ("=", _BRIGHT_BLUE, _BLACK),
        ("#", _CYAN, _BLACK),
    ]
    return _rooms(looks)


def _rooms(looks: list[tuple[str, tuple[int, int, int], tuple[int, int, int]]]) -> TileSet:
    """Combines the shared room adjacency rules with a (glyph, color, background) entry per tile."""
    return TileSet(
        [
            Tile.create(tile_id, projections, glyph, color_rgb, background_rgb)
            for tile_id, (projections, (glyph, color_rgb, background_rgb)) in enumerate(zip(_ROOM_PROJECTIONS, looks))
        ]
    )


_TILESET_FACTORIES: dict[TileSetName, Callable[[], TileSet]] = {
    TileSetName.MAZE: maze,
    TileSetName.PIPES: pipes,
    TileSetName.ULTIMA: ultima,
    TileSetName.CIRCUIT_BOARD: circuit_board,
    TileSetName.DUNGEON: dungeon,
}


def get_tileset(name: TileSetName) -> TileSet:
    """Builds the built-in tile set with the given name."""
    return _TILESET_FACTORIES[name]()
