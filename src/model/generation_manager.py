"""Contains the class that drives WFC generation sessions from the Qt event loop."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
from PyQt6 import QtCore as qtc

import constants
from enums import GenerationEventType, StepResult, UpdateMode
from model.errors import ContradictionError

if TYPE_CHECKING:
    from numpy.typing import NDArray
    from PIL import Image

    from model.generation_event import GenerationEvent
    from model.generator_model import GeneratorModel
    from model.tileset_renderer import TilesetRenderer
    from model.wave_function import WaveFunction

logger = logging.getLogger(__name__)


class GenerationManager(qtc.QObject):
    """Runs generation sessions in small batches of steps, retries failed scenes and scrolls finished ones.

    The manager creates a session from the settings of the generator model and advances it on every tick of a QTimer,
    executing at most 'constants.STEPS_PER_TICK' steps per tick so that the GUI thread stays responsive. Aborting
    simply stops the timer, so it always takes effect between two steps.

    A scene that runs into a contradiction is reset with a new random seed and generated again, up to
    'constants.MAX_GENERATION_ATTEMPTS' times in a row. In scrolling mode a finished scene is not the end of the run:
    after a short pause the oldest row is recycled and generated again, which scrolls the tilemap by one row.

    Signals:
        tilemap_img_updated: Emitted when the tilemap image has been updated (e.g., cells resolved, scene finished).
        finished: Emitted for every finished scene, with the tile grid (in display order) and its image.
        attempt_failed: Emitted when a scene ran into a contradiction, with the attempt number and the coords of the
            contradicted cell.
        failed: Emitted when the run is given up after too many failed attempts in a row.
    """

    tilemap_img_updated = qtc.pyqtSignal(object)
    finished = qtc.pyqtSignal(np.ndarray, object)
    attempt_failed = qtc.pyqtSignal(int, object)
    failed = qtc.pyqtSignal(int)

    # The generator model holding the generation settings.
    _model: GeneratorModel
    # The renderer responsible for drawing tiles and tilemaps.
    _renderer: TilesetRenderer

    # The timer calling 'advance()' from the Qt event loop.
    _timer: qtc.QTimer

    # The session of the current run, None before the first run.
    _wave_function: WaveFunction | None
    # Defines how often the tilemap image is sent to the GUI.
    _update_mode: UpdateMode
    # Whether finished scenes are scrolled (by recycling rows) instead of ending the run.
    _scrolling: bool
    # The number of the current attempt at generating a scene, starting at 1.
    _attempt: int
    # The number of scenes finished in the current run.
    _finished_scenes: int
    # Whether cells were drawn onto the tilemap image since it was last sent to the GUI.
    _tilemap_img_changed: bool

    # The PIL image representation of the current tilemap state (in display order).
    _tilemap_img: Image.Image

    def __init__(self, model: GeneratorModel, renderer: TilesetRenderer) -> None:
        """Initializes the generation manager.

        Args:
            model: The generator model holding the generation settings.
            renderer: The renderer responsible for drawing tiles and tilemaps.
        """
        super().__init__()

        self._model = model
        self._renderer = renderer

        self._timer = qtc.QTimer(self)
        self._timer.timeout.connect(self.advance)

        self._wave_function = None
        self._update_mode = UpdateMode.ON_FINISHED_SCENE
        self._scrolling = False
        self._attempt = 1
        self._finished_scenes = 0
        self._tilemap_img_changed = False

    @property
    def wave_function(self) -> WaveFunction | None:
        return self._wave_function

    def is_running(self) -> bool:
        return self._timer.isActive()

    def generate_tilemap(
        self, update_mode: UpdateMode = UpdateMode.ON_FINISHED_SCENE, scrolling: bool = False
    ) -> None:
        """Starts a new run with the current settings of the generator model.

        Any run still in progress is aborted first. The initial (superposed) tilemap image is emitted right away, the
        steps themselves are executed by the timer.

        Args:
            update_mode: Defines how often the tilemap image is sent to the GUI. Defaults to
                UpdateMode.ON_FINISHED_SCENE.
            scrolling: If True, finished scenes are scrolled endlessly until the run is aborted.
        """
        self.abort_tilemap_generation()

        self._update_mode = update_mode
        self._scrolling = scrolling
        self._attempt = 1
        self._finished_scenes = 0

        # Cells resolved by the initial pass of the new session are drawn by the full redraw below.
        self._wave_function = None
        self._wave_function = self._model.create_wave_function(listeners=[self.on_generation_event])
        logger.info(
            "Starting generation: %dx%d, tile set '%s', %s topology, seed %d, scrolling %s",
            self._wave_function.rows,
            self._wave_function.cols,
            self._model.tileset_name.value,
            self._wave_function.topology.value,
            self._model.random_seed,
            scrolling,
        )

        self._redraw_tilemap_img()
        self._timer.start(0)

    def abort_tilemap_generation(self) -> None:
        """Stops the current run. The session keeps its partially generated state."""
        if self._timer.isActive():
            logger.info("Generation aborted")
        self._timer.stop()

    def get_tilemap(self) -> NDArray[np.int_] | None:
        """Returns the tile grid (in display order) of the current session, None before the first run."""
        if self._wave_function is None:
            return None
        return self._wave_function.tile_grid(display_order=True)

    def advance(self) -> None:
        """Executes one batch of steps of the current run (called by the timer)."""
        if self._wave_function is None:
            return

        if self._wave_function.is_done():
            # In scrolling mode, the first tick after the pause following a finished scene.
            if self._scrolling:
                self._recycle_edge_row()
            return

        for _ in range(constants.STEPS_PER_TICK):
            result = self._wave_function.step()
            if result == StepResult.DONE:
                self._on_scene_finished()
                return
            if result == StepResult.CONTRADICTION:
                self._retry()
                return

        if self._tilemap_img_changed:
            self._emit_tilemap_img()

    def on_generation_event(self, event: GenerationEvent) -> None:
        """Draws resolved and contradicted cells onto the tilemap image (only in per-cell update mode)."""
        if self._update_mode != UpdateMode.ON_RESOLVED_CELL or self._wave_function is None:
            return

        match event.event_type:
            case GenerationEventType.CELL_RESOLVED:
                tile_id = event.tile_id
            case GenerationEventType.CONTRADICTION:
                tile_id = constants.CONTRADICTION_TILE_INDEX
            case _:
                return

        assert event.coords is not None and tile_id is not None
        row, col = event.coords
        display_coords = ((row - self._wave_function.top_row) % self._wave_function.rows, col)
        self._tilemap_img = self._renderer.update_tilemap_img_tile(self._tilemap_img, tile_id, display_coords)
        self._tilemap_img_changed = True

    def _on_scene_finished(self) -> None:
        """Emits the finished scene and either ends the run or schedules the next scroll step."""
        assert self._wave_function is not None

        self._attempt = 1
        self._finished_scenes += 1
        logger.info("Scene %d finished", self._finished_scenes)

        # The timer state is updated first, so receivers of 'finished' can tell whether the run goes on.
        if self._scrolling:
            self._timer.setInterval(constants.SCROLL_INTERVAL_MS)
        else:
            self._timer.stop()

        tilemap = self._wave_function.tile_grid(display_order=True)
        self._tilemap_img = self._renderer.get_tilemap_img(tilemap)
        self._emit_tilemap_img()
        self.finished.emit(tilemap, self._tilemap_img)

    def _recycle_edge_row(self) -> None:
        """Scrolls the finished scene by one row and resumes stepping without delay."""
        assert self._wave_function is not None

        try:
            self._wave_function.recycle_edge_row()
        except ContradictionError:
            self._retry()
            return

        self._timer.setInterval(0)
        if self._update_mode == UpdateMode.ON_RESOLVED_CELL:
            self._redraw_tilemap_img()

    def _retry(self) -> None:
        """Reports the failed attempt and restarts the scene with a new seed, or gives up after too many attempts."""
        assert self._wave_function is not None

        coords = self._wave_function.contradiction_coords
        logger.warning("Attempt %d ran into a contradiction at %s", self._attempt, coords)
        self.attempt_failed.emit(self._attempt, coords)

        if self._attempt >= constants.MAX_GENERATION_ATTEMPTS:
            logger.error("Giving up after %d failed attempts", self._attempt)
            self._timer.stop()
            self._redraw_tilemap_img()
            self.failed.emit(self._attempt)
            return

        self._attempt += 1
        self._wave_function.reset(self._model.new_random_seed())
        self._timer.setInterval(0)
        self._redraw_tilemap_img()

    def _redraw_tilemap_img(self) -> None:
        """Renders the whole tilemap image from the session and emits it."""
        assert self._wave_function is not None
        self._tilemap_img = self._renderer.get_tilemap_img(self._wave_function.tile_grid(display_order=True))
        self._emit_tilemap_img()

    def _emit_tilemap_img(self) -> None:
        self._tilemap_img_changed = False
        self.tilemap_img_updated.emit(self._tilemap_img)
