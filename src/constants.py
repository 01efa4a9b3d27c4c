"""Contains global constants and default values used throughout the project."""

from enums import Topology, TileSetName


# === MODEL CONSTANTS ===

GRID_HEIGHT_DEFAULT: int = 25
GRID_HEIGHT_MIN_LIMIT: int = 1
GRID_HEIGHT_MAX_LIMIT: int = 200

GRID_WIDTH_DEFAULT: int = 80
GRID_WIDTH_MIN_LIMIT: int = 1
GRID_WIDTH_MAX_LIMIT: int = 300

TILESET_DEFAULT: TileSetName = TileSetName.MAZE
TOPOLOGY_DEFAULT: Topology = Topology.SCROLLING

RANDOM_SEED_MAX: int = 999999999

# Number of fresh attempts (each with a new seed) before a scene is reported as unsolvable.
MAX_GENERATION_ATTEMPTS: int = 10

# Tile id values used in tile grids for cells that are not resolved.
SUPERPOSED_TILE_INDEX: int = -1
CONTRADICTION_TILE_INDEX: int = -2

# === DRIVER CONSTANTS ===

# Collapse steps executed per timer tick, so the GUI stays responsive during generation.
STEPS_PER_TICK: int = 200
SCROLL_INTERVAL_MS: int = 150

# === RENDER CONSTANTS ===

TILE_SIZE_DEFAULT: int = 12
TILE_SIZE_MIN_LIMIT: int = 6
TILE_SIZE_MAX_LIMIT: int = 64

TILE_BACKGROUND_RGB: tuple[int, int, int] = (0, 0, 0)
SUPERPOSED_TILE_RGB: tuple[int, int, int] = (0, 0, 0)
CONTRADICTION_TILE_RGB: tuple[int, int, int] = (255, 255, 0)
TILESET_PREVIEW_SPACING: int = 2

# Glyphs drawn as a filled square instead of as text, because the default font has no shape for them.
BLOCK_GLYPHS: frozenset[str] = frozenset({"◼", "■", "█"})

# === VIEW CONSTANTS ===

LAYOUT_LEFT_SIDE_MAX_WIDTH: int = 350
LAYOUT_LEFT_SIDE_VBOX_SPACING: int = 20
LAYOUT_GRID_MIDDLE_COLUMN_MIN_WIDTH: int = 20
LAYOUT_GRID_RIGHT_COLUMN_MIN_WIDTH: int = 150
