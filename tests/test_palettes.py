import pytest

from trimosaic.palettes import ColorLibrary, Palette, get_palette_source, library_names
from trimosaic.random_source import MAX_SEED, RandomSource, get_random_seed


class TestRandomSource:
    """Test cases for the seeded random source."""

    def test_same_seed_same_sequence(self):
        a = RandomSource(1234)
        b = RandomSource(1234)
        assert [a.value() for _ in range(5)] == [b.value() for _ in range(5)]
        assert a.gaussian(2, 5) == b.gaussian(2, 5)
        assert a.pick('abcdef') == b.pick('abcdef')

    def test_set_seed_restarts_sequence(self):
        rng = RandomSource(5)
        first = [rng.range(-180, 180) for _ in range(3)]
        rng.set_seed(5)
        assert [rng.range(-180, 180) for _ in range(3)] == first

    def test_ranges(self):
        rng = RandomSource(9)
        for _ in range(200):
            assert -180 <= rng.range(-180, 180) < 180
            assert 1 <= rng.range_int(1, 3) <= 3
            assert rng.sign() in (-1, 1)
            assert 0 <= rng.value() < 1

    def test_range_int_inclusive(self):
        rng = RandomSource(9)
        assert {rng.range_int(1, 2) for _ in range(200)} == {1, 2}

    def test_pick_empty(self):
        with pytest.raises(ValueError):
            RandomSource(1).pick([])

    def test_noise_is_coherent(self):
        """Test that noise depends only on seed and coordinates."""
        rng = RandomSource(77)
        value = rng.noise2d(3, 4)
        rng.value()
        assert rng.noise2d(3, 4) == value
        assert RandomSource(77).noise2d(3, 4) == value
        assert -1.5 <= value <= 1.5
        assert type(value) is float
        assert rng.noise2d(3, 4, amplitude=2) == pytest.approx(2 * value)

    def test_random_seed_range(self):
        for _ in range(20):
            assert 0 <= get_random_seed() <= MAX_SEED


class TestPalettes:
    """Test cases for palette libraries."""

    @pytest.mark.parametrize("name", library_names())
    def test_library_contents(self, name):
        source = get_palette_source(name)
        palettes = source.get_all()
        assert len(palettes) == len(source) > 0
        for palette in palettes:
            assert isinstance(palette, Palette)
            assert len(palette.colors) >= 2
            assert all(color.startswith('#') for color in palette.colors)

    def test_get_random_is_member(self):
        source = get_palette_source(ColorLibrary.CHROMOTOME)
        names = [palette.name for palette in source.get_all()]
        assert source.get_random(RandomSource(3)).name in names

    def test_get_random_is_reproducible(self):
        source = get_palette_source('nice_color_palettes')
        assert source.get_random(RandomSource(3)) == source.get_random(RandomSource(3))

    def test_chromotome_extras(self):
        palettes = get_palette_source('chromotome').get_all()
        assert all(palette.background is not None for palette in palettes)
        assert any(palette.stroke is not None for palette in palettes)

    def test_unknown_library(self):
        with pytest.raises(KeyError):
            get_palette_source('no-such-library')

    def test_get_all_returns_copy(self):
        source = get_palette_source('chromotome')
        source.get_all().clear()
        assert len(source.get_all()) > 0
