"""Contains the widget class for generating/displaying the output tilemap."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from PIL.ImageQt import ImageQt
from PyQt6 import QtCore as qtc
from PyQt6 import QtGui as qtg
from PyQt6 import QtWidgets as qtw

import constants
from enums import UpdateMode

if TYPE_CHECKING:
    from numpy.typing import NDArray
    from PIL import Image

    from model.generation_manager import GenerationManager
    from model.tileset_renderer import TilesetRenderer


class OutputWidget(qtw.QWidget):
    """The widget class for generating/displaying the output tilemap.

    This widget starts, scrolls and aborts generation runs and displays the resulting tilemap. It also provides options
    for saving the last finished tilemap (.csv format) and its visual representation (.png format).
    """

    # The generation manager running the generation sessions.
    _generation_manager: GenerationManager
    # The renderer responsible for drawing tiles and tilemaps.
    _renderer: TilesetRenderer

    # Selection for how often the tilemap image is updated.
    _tilemap_image_update_mode_combobox: qtw.QComboBox
    # Checkbox to keep scrolling finished scenes instead of stopping.
    _scrolling_checkbox: qtw.QCheckBox
    # Button to start generating the output tilemap via WFC.
    _generate_tilemap_button: qtw.QPushButton
    # Button to stop the ongoing generation.
    _abort_tilemap_generation_button: qtw.QPushButton
    # Label showing the state of the current run (e.g., the number of failed attempts).
    _status_label: qtw.QLabel

    # Button to save the raw tilemap data (.csv format).
    _save_tilemap_button: qtw.QPushButton
    # Button to save the tilemap image (.png format).
    _save_tilemap_image_button: qtw.QPushButton

    # Label to display the tilemap image.
    _tilemap_img_label: qtw.QLabel

    # The last finished tilemap, None before the first scene is finished.
    tilemap: NDArray[np.int_] | None
    # The image of the last finished tilemap.
    tilemap_img: Image.Image | None

    def __init__(self, generation_manager: GenerationManager, renderer: TilesetRenderer) -> None:
        """Initializes the widget and sets up the GUI elements and connections.

        Args:
            generation_manager: The generation manager running the generation sessions.
            renderer: The renderer responsible for drawing tiles and tilemaps.
        """
        super().__init__()

        self._generation_manager = generation_manager
        self._renderer = renderer

        self.tilemap = None
        self.tilemap_img = None

        # === LEFT SIDE - WIDGETS ===

        tilemap_image_update_mode_label = qtw.QLabel("Tilemap Image Update Mode")
        tilemap_image_update_mode_label.setWordWrap(True)
        tilemap_image_update_mode_label.setMinimumHeight(32)

        self._tilemap_image_update_mode_combobox = qtw.QComboBox()
        self._tilemap_image_update_mode_combobox.addItems([option.value for option in UpdateMode])
        self._tilemap_image_update_mode_combobox.setCurrentText(UpdateMode.ON_FINISHED_SCENE.value)

        self._scrolling_checkbox = qtw.QCheckBox()

        self._generate_tilemap_button = qtw.QPushButton("Generate Tilemap")
        self._generate_tilemap_button.clicked.connect(self.on_generate_tilemap_button_clicked)

        self._abort_tilemap_generation_button = qtw.QPushButton("Abort")
        self._abort_tilemap_generation_button.setEnabled(False)
        self._abort_tilemap_generation_button.clicked.connect(self.on_abort_tilemap_generation_button_clicked)

        self._status_label = qtw.QLabel()
        self._status_label.setWordWrap(True)

        self._save_tilemap_button = qtw.QPushButton("Save Tilemap (to CSV File)")
        self._save_tilemap_button.setEnabled(False)
        self._save_tilemap_button.clicked.connect(self.save_tilemap)

        self._save_tilemap_image_button = qtw.QPushButton("Save Tilemap Image")
        self._save_tilemap_image_button.setEnabled(False)
        self._save_tilemap_image_button.clicked.connect(self.save_tilemap_image)

        # === LEFT SIDE - LAYOUT ===

        container_tilemap_generation = qtw.QGroupBox("Tilemap Generation")
        container_tilemap_generation_layout = qtw.QGridLayout()
        container_tilemap_generation.setLayout(container_tilemap_generation_layout)
        container_tilemap_generation_layout.setColumnStretch(0, 1)
        container_tilemap_generation_layout.setColumnMinimumWidth(1, constants.LAYOUT_GRID_MIDDLE_COLUMN_MIN_WIDTH)
        container_tilemap_generation_layout.setColumnMinimumWidth(2, constants.LAYOUT_GRID_RIGHT_COLUMN_MIN_WIDTH)
        container_tilemap_generation_layout.addWidget(tilemap_image_update_mode_label, 0, 0)
        container_tilemap_generation_layout.addWidget(self._tilemap_image_update_mode_combobox, 0, 2)
        container_tilemap_generation_layout.addWidget(qtw.QLabel("Keep Scrolling?"), 1, 0)
        container_tilemap_generation_layout.addWidget(self._scrolling_checkbox, 1, 2)
        container_tilemap_generation_layout.addWidget(self._generate_tilemap_button, 2, 0)
        container_tilemap_generation_layout.addWidget(self._abort_tilemap_generation_button, 2, 2)
        container_tilemap_generation_layout.addWidget(self._status_label, 3, 0, 1, -1)

        container_tilemap_storage = qtw.QGroupBox("Tilemap Storage")
        container_tilemap_storage_layout = qtw.QGridLayout()
        container_tilemap_storage.setLayout(container_tilemap_storage_layout)
        container_tilemap_storage_layout.addWidget(self._save_tilemap_button, 0, 0, 1, -1)
        container_tilemap_storage_layout.addWidget(self._save_tilemap_image_button, 1, 0, 1, -1)

        container_left = qtw.QWidget()
        container_left.setMaximumWidth(constants.LAYOUT_LEFT_SIDE_MAX_WIDTH)
        container_left_layout = qtw.QVBoxLayout()
        container_left.setLayout(container_left_layout)
        container_left_layout.setSpacing(constants.LAYOUT_LEFT_SIDE_VBOX_SPACING)
        container_left_layout.addWidget(container_tilemap_generation)
        container_left_layout.addWidget(container_tilemap_storage)
        container_left_layout.addStretch()

        # === RIGHT SIDE ===

        self._tilemap_img_label = qtw.QLabel()
        self._tilemap_img_label.setAlignment(qtc.Qt.AlignmentFlag.AlignCenter)

        container_right = qtw.QWidget()
        container_right_layout = qtw.QVBoxLayout()
        container_right.setLayout(container_right_layout)
        container_right_layout.addWidget(self._tilemap_img_label)

        # === COMBINE SIDES ===

        layout = qtw.QHBoxLayout()
        self.setLayout(layout)
        layout.addWidget(container_left)
        layout.addWidget(container_right)

        self._generation_manager.tilemap_img_updated.connect(self.on_generation_manager_tilemap_img_updated)
        self._generation_manager.finished.connect(self.on_generation_manager_finished)
        self._generation_manager.attempt_failed.connect(self.on_generation_manager_attempt_failed)
        self._generation_manager.failed.connect(self.on_generation_manager_failed)

    def on_generate_tilemap_button_clicked(self) -> None:
        """Orders the generation manager to start a new run.

        Disables the 'Generate' button and enables the 'Abort' button.
        """
        self._generate_tilemap_button.setEnabled(False)
        self._abort_tilemap_generation_button.setEnabled(True)
        self._status_label.setText("Generating...")

        self._generation_manager.generate_tilemap(
            UpdateMode(self._tilemap_image_update_mode_combobox.currentText()),
            scrolling=self._scrolling_checkbox.isChecked(),
        )

    def on_abort_tilemap_generation_button_clicked(self) -> None:
        """Aborts the current run.

        Enables the 'Generate' button and disables the 'Abort' button.
        """
        self._generation_manager.abort_tilemap_generation()
        self._status_label.setText("Aborted.")

        self._generate_tilemap_button.setEnabled(True)
        self._abort_tilemap_generation_button.setEnabled(False)

    def on_generation_manager_tilemap_img_updated(self, tilemap_img: Image.Image) -> None:
        self._draw_tilemap_img(tilemap_img)

    def on_generation_manager_finished(self, tilemap: NDArray[np.int_], tilemap_img: Image.Image) -> None:
        """Stores the finished tilemap and its image, so that they can be saved.

        Unless the run keeps scrolling, the 'Generate' button is enabled and the 'Abort' button is disabled.

        Args:
            tilemap: The finished 2D array of tile ids (in display order).
            tilemap_img: The rendered image of the finished tilemap.
        """
        self.tilemap = tilemap
        self.tilemap_img = tilemap_img
        self._draw_tilemap_img(tilemap_img)

        self._save_tilemap_button.setEnabled(True)
        self._save_tilemap_image_button.setEnabled(True)

        if not self._generation_manager.is_running():
            self._status_label.setText("Finished.")
            self._generate_tilemap_button.setEnabled(True)
            self._abort_tilemap_generation_button.setEnabled(False)

    def on_generation_manager_attempt_failed(self, attempt: int, coords: tuple[int, int] | None) -> None:
        self._status_label.setText(f"Attempt {attempt} ran into a contradiction at {coords}, retrying...")

    def on_generation_manager_failed(self, attempts: int) -> None:
        """Reports the given up run and enables the 'Generate' button again."""
        self._status_label.setText(f"Gave up after {attempts} failed attempts. Try another seed or tileset.")
        self._generate_tilemap_button.setEnabled(True)
        self._abort_tilemap_generation_button.setEnabled(False)

    def save_tilemap(self) -> None:
        """Opens a file dialog and saves the tilemap data as a .csv file."""
        if self.tilemap is None:
            return
        file_path, _ = qtw.QFileDialog.getSaveFileName(self, "Save Tilemap to...", "tilemap", "CSV Files (*.csv)")
        if file_path:
            np.savetxt(file_path, self.tilemap, fmt="%i", delimiter=",")

    def save_tilemap_image(self) -> None:
        """Opens a file dialog and saves the tilemap image as a .png file."""
        if self.tilemap_img is None:
            return
        file_path, _ = qtw.QFileDialog.getSaveFileName(self, "Save Tilemap Image to...", "tilemap", "PNG Files (*.png)")
        if file_path:
            self._renderer.save_tilemap_img(self.tilemap_img, file_path)

    def _draw_tilemap_img(self, tilemap_img: Image.Image) -> None:
        """Converts the PIL Image to a QPixmap and displays it in the label."""
        tilemap_img_pixmap = qtg.QPixmap.fromImage(ImageQt(tilemap_img).copy())
        if (
            tilemap_img_pixmap.width() > self._tilemap_img_label.width()
            or tilemap_img_pixmap.height() > self._tilemap_img_label.height()
        ):
            # One pixel less than the label height, otherwise the label grows by one pixel per draw.
            tilemap_img_pixmap = tilemap_img_pixmap.scaled(
                self._tilemap_img_label.width(),
                self._tilemap_img_label.height() - 1,
                qtc.Qt.AspectRatioMode.KeepAspectRatio,
            )
        self._tilemap_img_label.setPixmap(tilemap_img_pixmap)
