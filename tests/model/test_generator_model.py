"""Tests for model.generator_model module."""

import constants
from enums import TileSetName, Topology
from model.generator_model import GeneratorModel


class TestGeneratorModel:
    """Tests for the generation settings."""

    def test_defaults(self):
        """Test that a new model starts with the default settings and a seed in range."""
        model = GeneratorModel()

        assert (model.grid_height, model.grid_width) == (constants.GRID_HEIGHT_DEFAULT, constants.GRID_WIDTH_DEFAULT)
        assert model.tileset_name == constants.TILESET_DEFAULT
        assert model.topology == constants.TOPOLOGY_DEFAULT
        assert model.tile_size == constants.TILE_SIZE_DEFAULT
        assert 0 <= model.random_seed <= constants.RANDOM_SEED_MAX

    def test_setters_emit_signals(self, qt_app):
        """Test that every setter stores the value and tells the views about it."""
        model = GeneratorModel(random_seed=1)
        received = []
        model.grid_size_changed.connect(lambda height, width: received.append(("grid", height, width)))
        model.tileset_changed.connect(lambda name: received.append(("tileset", name)))
        model.topology_changed.connect(lambda topology: received.append(("topology", topology)))
        model.tile_size_changed.connect(lambda size: received.append(("tile_size", size)))
        model.random_seed_changed.connect(lambda seed: received.append(("seed", seed)))

        model.set_grid_size(7, 9)
        model.set_tileset(TileSetName.PIPES)
        model.set_topology(Topology.TORUS)
        model.set_tile_size(20)
        model.set_random_seed(42)

        assert received == [
            ("grid", 7, 9),
            ("tileset", TileSetName.PIPES),
            ("topology", Topology.TORUS),
            ("tile_size", 20),
            ("seed", 42),
        ]
        assert model.get_tileset()[17].glyph == "+"
        assert model.random_seed == 42

    def test_new_random_seed(self, qt_app):
        """Test that a new seed is stored, emitted and returned."""
        model = GeneratorModel(random_seed=5)
        seeds = []
        model.random_seed_changed.connect(seeds.append)

        seed = model.new_random_seed()

        assert seeds == [seed]
        assert model.random_seed == seed

    def test_create_wave_function(self):
        """Test that sessions are created from the current settings."""
        model = GeneratorModel(4, 6, TileSetName.ULTIMA, Topology.TORUS, random_seed=3)

        wave_function = model.create_wave_function()

        assert (wave_function.rows, wave_function.cols) == (4, 6)
        assert wave_function.topology == Topology.TORUS
        assert wave_function.tileset is model.get_tileset()

    def test_create_wave_function_with_listeners(self):
        """Test that listeners passed on creation are registered with the session."""
        model = GeneratorModel(1, 1, TileSetName.ULTIMA, Topology.TORUS, random_seed=3)
        events = []

        wave_function = model.create_wave_function(listeners=[events.append])
        wave_function.run_to_completion()

        assert [event.coords for event in events] == [(0, 0)]
