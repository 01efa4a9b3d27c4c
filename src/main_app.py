"""Serves as the entry point and initializer for the scrolling WFC tilemap generator."""

from __future__ import annotations

import argparse
from collections.abc import Callable
from enum import Enum
import logging
import sys
from typing import TypeVar

from PyQt6 import QtWidgets as qtw

import constants
from enums import TileSetName, Topology
from logging_config import setup_logging
from model.generation_manager import GenerationManager
from model.generator_model import GeneratorModel
from model.tileset_renderer import TilesetRenderer
from view.main_window import MainWindow
from view.output_widget import OutputWidget
from view.settings_widget import SettingsWidget

logger = logging.getLogger(__name__)

EnumT = TypeVar("EnumT", bound=Enum)


def _enum_converter(enum_class: type[EnumT]) -> Callable[[str], EnumT]:
    """Returns an argparse type matching the values of an enum, ignoring case (e.g. "circuit-board")."""

    def convert(text: str) -> EnumT:
        key = text.strip().lower().replace("-", " ").replace("_", " ")
        for option in enum_class:
            if option.value.lower() == key:
                return option
        raise argparse.ArgumentTypeError(f"invalid choice: '{text}'")

    return convert


def parse_args(argv: list[str]) -> tuple[argparse.Namespace, list[str]]:
    """Parses the generator options, leaving all unknown (Qt) arguments to the QApplication.

    Args:
        argv: Command line arguments without the program name.

    Returns:
        The parsed options and the remaining arguments.
    """
    parser = argparse.ArgumentParser(description="Generates scrolling tilemaps with Wave Function Collapse.")
    parser.add_argument(
        "height", nargs="?", type=int, default=constants.GRID_HEIGHT_DEFAULT, help="number of rows of the grid"
    )
    parser.add_argument(
        "width", nargs="?", type=int, default=constants.GRID_WIDTH_DEFAULT, help="number of columns of the grid"
    )
    parser.add_argument(
        "--tileset",
        type=_enum_converter(TileSetName),
        default=constants.TILESET_DEFAULT,
        metavar="NAME",
        help=f"built-in tile set ({', '.join(option.value for option in TileSetName)})",
    )
    parser.add_argument(
        "--topology",
        type=_enum_converter(Topology),
        default=constants.TOPOLOGY_DEFAULT,
        metavar="NAME",
        help=f"grid topology ({', '.join(option.value for option in Topology)})",
    )
    parser.add_argument("--seed", type=int, default=None, help="random seed of the first run")
    parser.add_argument("--log-file", default=None, help="additionally write a debug log to this file")
    parser.add_argument("--debug", action="store_true", help="log debug messages to the console")
    options, remaining_args = parser.parse_known_args(argv)

    if not constants.GRID_HEIGHT_MIN_LIMIT <= options.height <= constants.GRID_HEIGHT_MAX_LIMIT:
        parser.error(
            f"height must be between {constants.GRID_HEIGHT_MIN_LIMIT} and {constants.GRID_HEIGHT_MAX_LIMIT}"
        )
    if not constants.GRID_WIDTH_MIN_LIMIT <= options.width <= constants.GRID_WIDTH_MAX_LIMIT:
        parser.error(f"width must be between {constants.GRID_WIDTH_MIN_LIMIT} and {constants.GRID_WIDTH_MAX_LIMIT}")
    return options, remaining_args


class MainApp(qtw.QApplication):
    """The application initializer and integrator for the tilemap generator.

    Inherits from PyQt's QApplication. It handles the initial setup of the application's model and view components (the
    latter being PyQt Widgets), and the signal/slot connections that define the application's reactivity and data flow.
    """

    # The top-level window of the application, which holds all widgets.
    _main_window: MainWindow

    def __init__(self, argv: list[str], options: argparse.Namespace) -> None:
        """Initializes the PyQt application and all application components.

        Args:
            argv: Command line arguments passed on to Qt.
            options: The parsed generator options.
        """
        super().__init__(argv)

        model = GeneratorModel(options.height, options.width, options.tileset, options.topology, options.seed)
        renderer = TilesetRenderer(model.get_tileset(), (model.tile_size, model.tile_size))
        generation_manager = GenerationManager(model, renderer)

        settings_widget = SettingsWidget(model, renderer)
        output_widget = OutputWidget(generation_manager, renderer)

        self.aboutToQuit.connect(generation_manager.abort_tilemap_generation)

        self._main_window = MainWindow(settings_widget, output_widget)
        self._main_window.show()


def main() -> int:
    options, qt_args = parse_args(sys.argv[1:])
    setup_logging(logging.DEBUG if options.debug else logging.INFO, options.log_file)
    logger.info("Starting with options %s", vars(options))

    app = MainApp(sys.argv[:1] + qt_args, options)
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
