"""Tests for model.chooser module."""

from model.chooser import FirstChooser, RandomChooser


class TestRandomChooser:
    """Tests for the seeded random chooser."""

    def test_same_seed_same_choices(self):
        """Test that two choosers with the same seed make the same choices."""
        first = RandomChooser(42)
        second = RandomChooser(42)
        coords = [(0, 0), (0, 1), (1, 0), (1, 1)]

        for _ in range(10):
            assert first.choose_cell(coords) == second.choose_cell(coords)
            assert first.choose_tile([0, 1, 2], [1, 2, 3]) == second.choose_tile([0, 1, 2], [1, 2, 3])

    def test_choices_are_options(self):
        """Test that only given options are picked."""
        chooser = RandomChooser(7)

        for _ in range(50):
            assert chooser.choose_cell([(2, 3), (4, 5)]) in ((2, 3), (4, 5))
            assert chooser.choose_tile([3, 8], [1, 1]) in (3, 8)

    def test_tile_choice_follows_weights(self):
        """Test that a tile with an overwhelming weight is picked nearly always."""
        chooser = RandomChooser(3)

        picks = [chooser.choose_tile([0, 1], [1, 1_000_000]) for _ in range(50)]

        assert picks.count(1) >= 49

    def test_single_option(self):
        """Test that a single option is always picked."""
        assert RandomChooser(0).choose_tile([5], [2]) == 5

    def test_seed_is_kept(self):
        """Test that the seed stays readable for reproducing runs."""
        assert RandomChooser(12).seed == 12
        assert RandomChooser().seed is None


class TestFirstChooser:
    """Tests for the deterministic chooser."""

    def test_picks_first_options(self):
        """Test that the lowest coords and the lowest tile id are picked."""
        chooser = FirstChooser()

        assert chooser.choose_cell([(0, 3), (1, 0)]) == (0, 3)
        assert chooser.choose_tile([2, 4], [1, 100]) == 2
