"""Manages the visual representation of tile sets and tilemaps."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PIL import Image, ImageDraw, ImageFont

import constants

if TYPE_CHECKING:
    import numpy as np
    from numpy.typing import NDArray

    from model.tileset import Tile, TileSet


class TilesetRenderer:
    """Renders tiles, tile sets and tilemaps as PIL images.

    Every tile is drawn once as a small image (its glyph in its color on its background color) when the tile set is
    set. Tilemaps (2D arrays of tile ids) are then assembled by pasting these tile images onto a canvas. Superposed
    cells are drawn as plain superposed-colored tiles and contradicted cells as plain contradiction-colored tiles.
    """

    # The dimensions (width, height) of a single tile in pixels.
    _tile_size: tuple[int, int]
    # A plain tile image used to represent superposed (undetermined) cells.
    _superposed_tile: Image.Image
    # A plain tile image used to represent contradicted cells.
    _contradiction_tile: Image.Image
    # A dictionary mapping tile ids (int) to their corresponding PIL Image objects.
    _tiles: dict[int, Image.Image]
    # A preview image showing all tiles of the tile set next to each other.
    _tileset_img: Image.Image

    def __init__(self, tileset: TileSet, tile_size: tuple[int, int]) -> None:
        """Initializes the renderer by setting the initial tile set.

        Args:
            tileset: The tile set whose tiles should be rendered.
            tile_size: The dimensions (width, height) of a single tile in pixels.
        """
        self.set_tileset(tileset, tile_size)

    @property
    def tile_size(self) -> tuple[int, int]:
        return self._tile_size

    def set_tileset(self, tileset: TileSet, tile_size: tuple[int, int]) -> None:
        """Draws the tile images of a new tile set.

        Args:
            tileset: The tile set whose tiles should be rendered.
            tile_size: The dimensions (width, height) of a single tile in pixels.
        """
        self._tile_size = tile_size

        self._superposed_tile = Image.new("RGB", self._tile_size, constants.SUPERPOSED_TILE_RGB)
        self._contradiction_tile = Image.new("RGB", self._tile_size, constants.CONTRADICTION_TILE_RGB)

        font = ImageFont.load_default()
        self._tiles = {tile.id: self._draw_tile(tile, font) for tile in tileset}

        spacing = constants.TILESET_PREVIEW_SPACING
        preview_size = (len(self._tiles) * (self._tile_size[0] + spacing) - spacing, self._tile_size[1])
        self._tileset_img = Image.new("RGB", preview_size, constants.TILE_BACKGROUND_RGB)
        for tile_id, tile_img in self._tiles.items():
            self._tileset_img.paste(tile_img, (tile_id * (self._tile_size[0] + spacing), 0))

    def get_tileset_img(self) -> Image.Image:
        """Returns the preview image showing all tiles of the tile set next to each other."""
        return self._tileset_img

    def get_tile_img(self, tile_id: int) -> Image.Image:
        """Returns the image of a tile id (including the superposed and contradiction placeholders)."""
        if tile_id == constants.SUPERPOSED_TILE_INDEX:
            return self._superposed_tile
        if tile_id == constants.CONTRADICTION_TILE_INDEX:
            return self._contradiction_tile
        return self._tiles[tile_id]

    def get_tilemap_img(self, tile_grid: NDArray[np.int_]) -> Image.Image:
        """Renders a tile grid into a complete PIL Image object.

        Args:
            tile_grid: A 2D array containing tile ids (or the superposed/contradiction placeholder values).

        Returns:
            A PIL Image representing the visual tilemap.
        """
        tilemap_img = self.get_initial_tilemap_img((tile_grid.shape[0], tile_grid.shape[1]))
        for row in range(tile_grid.shape[0]):
            for col in range(tile_grid.shape[1]):
                tilemap_img.paste(self.get_tile_img(int(tile_grid[row, col])), self._get_box((row, col)))
        return tilemap_img

    def get_initial_tilemap_img(self, tilemap_size: tuple[int, int]) -> Image.Image:
        """Creates an empty (superposed-colored) canvas for a tilemap of the given (rows, cols) size."""
        # tile_size is (width, height) while tilemap_size is (rows, cols), so the indices have to be swapped.
        img_size = (tilemap_size[1] * self._tile_size[0], tilemap_size[0] * self._tile_size[1])
        return Image.new("RGB", img_size, constants.SUPERPOSED_TILE_RGB)

    def update_tilemap_img_tile(
        self, tilemap_img: Image.Image, tile_id: int, tile_coords: tuple[int, int]
    ) -> Image.Image:
        """Updates a single tile at the given (row, col) coords on an existing image.

        Returns:
            The modified image canvas (the input image, as the operation is in-place).
        """
        tilemap_img.paste(self.get_tile_img(tile_id), self._get_box(tile_coords))
        return tilemap_img

    def save_tilemap_img(self, tilemap_img: Image.Image, file_path: str) -> None:
        """Saves a rendered tilemap image to the specified file path."""
        tilemap_img.save(file_path)

    def _get_box(self, tile_coords: tuple[int, int]) -> tuple[int, int, int, int]:
        """Returns the pixel box (left, upper, right, lower) of a cell."""
        return (
            tile_coords[1] * self._tile_size[0],
            tile_coords[0] * self._tile_size[1],
            (tile_coords[1] + 1) * self._tile_size[0],
            (tile_coords[0] + 1) * self._tile_size[1],
        )

    def _draw_tile(self, tile: Tile, font: ImageFont.ImageFont | ImageFont.FreeTypeFont) -> Image.Image:
        """Draws the glyph of a tile centered on its background color."""
        tile_img = Image.new("RGB", self._tile_size, tile.background_rgb)
        draw = ImageDraw.Draw(tile_img)
        width, height = self._tile_size

        if tile.glyph in constants.BLOCK_GLYPHS:
            draw.rectangle((1, 1, width - 2, height - 2), fill=tile.color_rgb)
        elif tile.glyph.strip():
            left, top, right, bottom = font.getbbox(tile.glyph)
            position = ((width - (right - left)) / 2 - left, (height - (bottom - top)) / 2 - top)
            draw.text(position, tile.glyph, fill=tile.color_rgb, font=font)

        return tile_img
