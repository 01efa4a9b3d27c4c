"""Contains the widget class for the generation settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PIL.ImageQt import ImageQt
from PyQt6 import QtCore as qtc
from PyQt6 import QtGui as qtg
from PyQt6 import QtWidgets as qtw

import constants
from enums import TileSetName, Topology
from view.int_spin_box import IntSpinBox

if TYPE_CHECKING:
    from model.generator_model import GeneratorModel
    from model.tileset_renderer import TilesetRenderer


class SettingsWidget(qtw.QWidget):
    """The widget class for the generation settings.

    This widget contains the tile set selection (with a preview of all tiles of the selected set), the tile size used
    for rendering, the grid size, the grid topology and the random seed of the next generation run.
    """

    # The generator model holding the generation settings.
    _model: GeneratorModel
    # The renderer responsible for drawing tiles and tilemaps.
    _renderer: TilesetRenderer

    # Selection for the built-in tile set.
    _tileset_combobox: qtw.QComboBox
    # Input for the side length of rendered tiles (in pixels).
    _tile_size_input: IntSpinBox

    # Input for the number of rows of the grid.
    _grid_height_input: IntSpinBox
    # Input for the number of columns of the grid.
    _grid_width_input: IntSpinBox
    # Selection for the grid topology (torus or scrolling).
    _topology_combobox: qtw.QComboBox

    # Input for the random seed.
    _random_seed_input: IntSpinBox
    # Button to draw a new random seed.
    _new_random_seed_button: qtw.QPushButton

    # Label used to display the tile set preview.
    _tileset_img_label: qtw.QLabel

    def __init__(self, model: GeneratorModel, renderer: TilesetRenderer) -> None:
        """Initializes the widget and sets up the GUI elements and connections.

        Args:
            model: The generator model holding the generation settings.
            renderer: The renderer responsible for drawing tiles and tilemaps.
        """
        super().__init__()

        self._model = model
        self._renderer = renderer

        # === LEFT SIDE - WIDGETS ===

        self._tileset_combobox = qtw.QComboBox()
        self._tileset_combobox.addItems([option.value for option in TileSetName])
        self._tileset_combobox.setCurrentText(self._model.tileset_name.value)
        self._tileset_combobox.currentTextChanged.connect(self.on_tileset_combobox_changed)

        self._tile_size_input = IntSpinBox(
            self._model.tile_size, constants.TILE_SIZE_MIN_LIMIT, constants.TILE_SIZE_MAX_LIMIT, 1
        )
        self._tile_size_input.value_change_committed.connect(self._model.set_tile_size)

        self._grid_height_input = IntSpinBox(
            self._model.grid_height, constants.GRID_HEIGHT_MIN_LIMIT, constants.GRID_HEIGHT_MAX_LIMIT, 5
        )
        self._grid_height_input.value_change_committed.connect(self.on_grid_size_input_changed)
        self._grid_width_input = IntSpinBox(
            self._model.grid_width, constants.GRID_WIDTH_MIN_LIMIT, constants.GRID_WIDTH_MAX_LIMIT, 10
        )
        self._grid_width_input.value_change_committed.connect(self.on_grid_size_input_changed)

        self._topology_combobox = qtw.QComboBox()
        self._topology_combobox.addItems([option.value for option in Topology])
        self._topology_combobox.setCurrentText(self._model.topology.value)
        self._topology_combobox.currentTextChanged.connect(lambda text: self._model.set_topology(Topology(text)))

        self._random_seed_input = IntSpinBox(self._model.random_seed, 0, constants.RANDOM_SEED_MAX, 1)
        self._random_seed_input.value_change_committed.connect(self._model.set_random_seed)
        self._new_random_seed_button = qtw.QPushButton("New Random Seed")
        self._new_random_seed_button.clicked.connect(self._model.new_random_seed)

        # === LEFT SIDE - LAYOUT ===

        container_tileset_settings = qtw.QGroupBox("Tileset Settings")
        container_tileset_settings_layout = self._create_settings_grid_layout(container_tileset_settings)
        container_tileset_settings_layout.addWidget(qtw.QLabel("Tileset"), 0, 0)
        container_tileset_settings_layout.addWidget(self._tileset_combobox, 0, 2)
        container_tileset_settings_layout.addWidget(qtw.QLabel("Tile Size (in px)"), 1, 0)
        container_tileset_settings_layout.addWidget(self._tile_size_input, 1, 2)

        container_grid_settings = qtw.QGroupBox("Grid Settings")
        container_grid_settings_layout = self._create_settings_grid_layout(container_grid_settings)
        container_grid_settings_layout.addWidget(qtw.QLabel("Grid Height"), 0, 0)
        container_grid_settings_layout.addWidget(self._grid_height_input, 0, 2)
        container_grid_settings_layout.addWidget(qtw.QLabel("Grid Width"), 1, 0)
        container_grid_settings_layout.addWidget(self._grid_width_input, 1, 2)
        container_grid_settings_layout.addWidget(qtw.QLabel("Topology"), 2, 0)
        container_grid_settings_layout.addWidget(self._topology_combobox, 2, 2)

        container_seed_settings = qtw.QGroupBox("Random Seed")
        container_seed_settings_layout = self._create_settings_grid_layout(container_seed_settings)
        container_seed_settings_layout.addWidget(qtw.QLabel("Seed"), 0, 0)
        container_seed_settings_layout.addWidget(self._random_seed_input, 0, 2)
        container_seed_settings_layout.addWidget(self._new_random_seed_button, 1, 0, 1, -1)

        container_left = qtw.QWidget()
        container_left.setMaximumWidth(constants.LAYOUT_LEFT_SIDE_MAX_WIDTH)
        container_left_layout = qtw.QVBoxLayout()
        container_left.setLayout(container_left_layout)
        container_left_layout.setSpacing(constants.LAYOUT_LEFT_SIDE_VBOX_SPACING)
        container_left_layout.addWidget(container_tileset_settings)
        container_left_layout.addWidget(container_grid_settings)
        container_left_layout.addWidget(container_seed_settings)
        container_left_layout.addStretch()

        # === RIGHT SIDE ===

        self._tileset_img_label = qtw.QLabel()
        self._tileset_img_label.setAlignment(qtc.Qt.AlignmentFlag.AlignCenter)

        container_right = qtw.QWidget()
        container_right_layout = qtw.QVBoxLayout()
        container_right.setLayout(container_right_layout)
        container_right_layout.addWidget(self._tileset_img_label)

        # === COMBINE SIDES ===

        layout = qtw.QHBoxLayout()
        self.setLayout(layout)
        layout.addWidget(container_left)
        layout.addWidget(container_right)

        self._model.tileset_changed.connect(self.on_model_tileset_changed)
        self._model.tile_size_changed.connect(self.on_model_tile_size_changed)
        self._model.random_seed_changed.connect(self._random_seed_input.set_committed_value)

        self._draw_tileset_img()

    def on_tileset_combobox_changed(self, text: str) -> None:
        self._model.set_tileset(TileSetName(text))

    def on_grid_size_input_changed(self) -> None:
        """Updates the model's grid size when the input values change."""
        self._model.set_grid_size(self._grid_height_input.value(), self._grid_width_input.value())

    def on_model_tileset_changed(self) -> None:
        """Renders the tiles of the newly selected tile set and shows its preview."""
        self._renderer.set_tileset(self._model.get_tileset(), (self._model.tile_size, self._model.tile_size))
        self._draw_tileset_img()

    def on_model_tile_size_changed(self, tile_size: int) -> None:
        """Renders the tiles of the tile set in the new size and shows its preview."""
        self._renderer.set_tileset(self._model.get_tileset(), (tile_size, tile_size))
        self._draw_tileset_img()

    def _draw_tileset_img(self) -> None:
        """Converts the tile set preview to a QPixmap and displays it in the label."""
        tileset_img_pixmap = qtg.QPixmap.fromImage(ImageQt(self._renderer.get_tileset_img()).copy())
        self._tileset_img_label.setPixmap(tileset_img_pixmap)

    @staticmethod
    def _create_settings_grid_layout(container: qtw.QGroupBox) -> qtw.QGridLayout:
        """Creates the label/input grid layout shared by all setting groups and installs it on the container."""
        container_layout = qtw.QGridLayout()
        container.setLayout(container_layout)
        container_layout.setColumnStretch(0, 1)
        container_layout.setColumnMinimumWidth(1, constants.LAYOUT_GRID_MIDDLE_COLUMN_MIN_WIDTH)
        container_layout.setColumnMinimumWidth(2, constants.LAYOUT_GRID_RIGHT_COLUMN_MIN_WIDTH)
        return container_layout
