"""Tests for model.generation_manager module."""

import numpy as np
import pytest

import constants
from enums import TileSetName, Topology, UpdateMode
from model.generation_manager import GenerationManager
from model.generator_model import GeneratorModel
from model.tileset import TileSet
from model.tileset_renderer import TilesetRenderer
from model.wave_function import WaveFunction

MAX_TICKS = 1000


class Recorder:
    """Collects everything the manager emits."""

    def __init__(self, manager: GenerationManager) -> None:
        self.images = []
        self.finished = []
        self.attempts = []
        self.failed = []
        manager.tilemap_img_updated.connect(self.images.append)
        manager.finished.connect(lambda tilemap, img: self.finished.append(tilemap))
        manager.attempt_failed.connect(lambda attempt, coords: self.attempts.append((attempt, coords)))
        manager.failed.connect(self.failed.append)


def make_manager(monkeypatch, tileset: TileSet, rows: int, cols: int, topology: Topology):
    model = GeneratorModel(rows, cols, TileSetName.MAZE, topology, random_seed=1)
    monkeypatch.setattr(
        model,
        "create_wave_function",
        lambda listeners=(): WaveFunction(
            tileset, rows, cols, topology=topology, seed=model.random_seed, listeners=listeners
        ),
    )
    manager = GenerationManager(model, TilesetRenderer(tileset, (4, 4)))
    return manager, Recorder(manager)


def run_until_stopped(manager: GenerationManager) -> None:
    for _ in range(MAX_TICKS):
        if not manager.is_running():
            return
        manager.advance()
    pytest.fail("Generation did not stop")


@pytest.mark.usefixtures("qt_app")
class TestGenerationManager:
    """Tests for driving sessions from the event loop."""

    def test_no_tilemap_before_first_run(self, monkeypatch, free_tileset: TileSet):
        """Test that there is nothing to show before the first run."""
        manager, _ = make_manager(monkeypatch, free_tileset, 2, 2, Topology.TORUS)

        assert manager.get_tilemap() is None
        assert manager.wave_function is None
        manager.advance()
        assert not manager.is_running()

    def test_generate_until_finished(self, monkeypatch, free_tileset: TileSet):
        """Test that a run emits the initial image, then the finished scene, and stops."""
        manager, recorder = make_manager(monkeypatch, free_tileset, 5, 6, Topology.TORUS)

        manager.generate_tilemap()

        assert manager.is_running()
        assert recorder.images[0].size == (24, 20)
        run_until_stopped(manager)

        assert len(recorder.finished) == 1
        assert np.all(recorder.finished[0] >= 0)
        assert np.array_equal(recorder.finished[0], manager.get_tilemap())
        assert manager.wave_function.is_done()

    def test_per_cell_updates_match_full_render(self, monkeypatch, free_tileset: TileSet):
        """Test that drawing resolved cells one by one keeps the image equal to a full render."""
        monkeypatch.setattr(constants, "STEPS_PER_TICK", 1)
        manager, recorder = make_manager(monkeypatch, free_tileset, 3, 4, Topology.TORUS)
        renderer = TilesetRenderer(free_tileset, (4, 4))

        manager.generate_tilemap(UpdateMode.ON_RESOLVED_CELL)
        manager.advance()
        manager.advance()

        expected = renderer.get_tilemap_img(manager.get_tilemap())
        assert len(recorder.images) == 3
        assert np.array_equal(np.asarray(recorder.images[-1]), np.asarray(expected))

    def test_scrolling_keeps_generating(self, monkeypatch, stripes_tileset: TileSet):
        """Test that finished scenes are scrolled by recycling rows until the run is aborted."""
        manager, recorder = make_manager(monkeypatch, stripes_tileset, 3, 2, Topology.SCROLLING)
        manager.generate_tilemap(scrolling=True)

        for _ in range(MAX_TICKS):
            manager.advance()
            if len(recorder.finished) == 3:
                break

        assert manager.is_running()
        assert manager.wave_function.top_row == 2
        manager.abort_tilemap_generation()
        assert not manager.is_running()
        assert manager.wave_function.is_done()

    def test_contradictions_are_retried_until_given_up(self, monkeypatch, checker_tileset: TileSet):
        """Test that a scene that always contradicts is retried with new seeds and finally given up."""
        manager, recorder = make_manager(monkeypatch, checker_tileset, 1, 3, Topology.TORUS)
        seeds = []
        manager._model.random_seed_changed.connect(seeds.append)

        manager.generate_tilemap()
        run_until_stopped(manager)

        assert [attempt for attempt, _ in recorder.attempts] == list(range(1, constants.MAX_GENERATION_ATTEMPTS + 1))
        assert all(coords is not None for _, coords in recorder.attempts)
        assert len(seeds) == constants.MAX_GENERATION_ATTEMPTS - 1
        assert recorder.failed == [constants.MAX_GENERATION_ATTEMPTS]
        assert recorder.finished == []

    def test_abort_keeps_partial_state(self, monkeypatch, free_tileset: TileSet):
        """Test that aborting stops the run between two steps."""
        monkeypatch.setattr(constants, "STEPS_PER_TICK", 2)
        manager, recorder = make_manager(monkeypatch, free_tileset, 3, 3, Topology.TORUS)

        manager.generate_tilemap()
        manager.advance()
        manager.abort_tilemap_generation()

        assert not manager.is_running()
        assert np.count_nonzero(manager.get_tilemap() >= 0) == 2
        assert recorder.finished == []

    def test_cells_resolved_on_creation_are_drawn(self, monkeypatch, dead_end_tileset: TileSet):
        """Test that cells resolved while the session is created show up in the first image and the finished scene."""
        manager, recorder = make_manager(monkeypatch, dead_end_tileset, 2, 3, Topology.TORUS)
        renderer = TilesetRenderer(dead_end_tileset, (4, 4))

        manager.generate_tilemap(UpdateMode.ON_RESOLVED_CELL)

        expected = renderer.get_tilemap_img(np.zeros((2, 3), dtype=np.int_))
        assert np.array_equal(np.asarray(recorder.images[0]), np.asarray(expected))
        run_until_stopped(manager)
        assert np.all(recorder.finished[0] == 0)
