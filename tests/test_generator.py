import logging

import numpy as np
import pytest

from noise_generator.config import FieldConfig
from noise_generator.errors import ConfigurationError
from noise_generator.generator import NoiseFieldGenerator
from noise_generator.noise import perlin


@pytest.fixture
def logger():
    return logging.getLogger("test_generator")


@pytest.fixture
def small_config():
    return FieldConfig(output_width=48, output_height=30, cell_size=8, seed=1234, octaves=3)


def test_accepts_dict_config(logger):
    gen = NoiseFieldGenerator({'output_width': 16, 'output_height': 16, 'cell_size': 4}, logger)
    assert gen.width == 16
    assert gen.config.cell_size == 4


def test_invalid_config_fails_before_grid_is_built(logger):
    with pytest.raises(ConfigurationError):
        NoiseFieldGenerator({'cell_size': 0}, logger)


def test_two_generations_are_pixel_identical(small_config, logger):
    a = NoiseFieldGenerator(small_config, logger).get_color_array()
    b = NoiseFieldGenerator(small_config, logger).get_color_array()
    assert np.array_equal(a, b)


def test_different_seeds_give_different_fields(small_config, logger):
    a = NoiseFieldGenerator(small_config, logger).get_noise_array()
    b = NoiseFieldGenerator(small_config.replace(seed=4321), logger).get_noise_array()
    assert not np.array_equal(a, b)


def test_array_shapes(small_config, logger):
    gen = NoiseFieldGenerator(small_config, logger)
    assert gen.get_noise_array().shape == (30, 48)
    assert gen.get_color_array().shape == (30, 48, 3)
    assert gen.get_color_array(5, 9).shape == (4, 48, 3)


def test_per_pixel_values_match_raster(small_config, logger):
    gen = NoiseFieldGenerator(small_config, logger)
    noise_array = gen.get_noise_array()
    color_array = gen.get_color_array()
    for px, py in [(0, 0), (47, 29), (13, 7), (24, 15), (47, 0), (0, 29)]:
        assert gen.get_noise(px, py) == noise_array[py, px]
        assert gen.get_color(px, py) == tuple(int(c) for c in color_array[py, px])


def test_row_bands_stitch_into_full_raster(small_config, logger):
    gen = NoiseFieldGenerator(small_config, logger)
    stitched = np.concatenate([gen.get_noise_array(0, 11), gen.get_noise_array(11, 30)])
    assert np.array_equal(stitched, gen.get_noise_array())


def test_iter_pixels_is_row_major_from_top_left(logger):
    config = FieldConfig(output_width=5, output_height=3, cell_size=2, octaves=2)
    gen = NoiseFieldGenerator(config, logger)
    pixels = list(gen.iter_pixels())
    assert [coord for coord, _ in pixels] == [(px, py) for py in range(3) for px in range(5)]
    colors = gen.get_color_array()
    for (px, py), color in pixels:
        assert color == tuple(int(c) for c in colors[py, px])


def test_normalized_field_in_unit_range(logger):
    config = FieldConfig(output_width=120, output_height=90, cell_size=10, octaves=5)
    values = NoiseFieldGenerator(config, logger).get_normalized_array()
    assert values.min() >= 0.0
    assert values.max() <= 1.0


@pytest.mark.parametrize("width, height, cell_size, octaves", [
    (100, 100, 30, 4),
    (1280, 720, 40, 5),
    (37, 53, 7, 6),
    (1, 1, 1, 1),
    (17, 9, 50, 3),
])
def test_grid_covers_every_sampled_coordinate(width, height, cell_size, octaves, logger):
    config = FieldConfig(
        output_width=width, output_height=height, cell_size=cell_size, octaves=octaves
    )
    gen = NoiseFieldGenerator(config, logger)
    # The bottom-right pixel reaches furthest into the grid at every octave.
    gen.get_noise(width - 1, height - 1)
    max_x, max_y = gen.pixel_to_grid(width - 1, height - 1)
    frequency = 2.0 ** (octaves - 1)
    assert gen.grid.covers(int(np.floor(max_x * frequency)), int(np.floor(max_y * frequency)))


def test_single_octave_field_is_plain_perlin(logger):
    config = FieldConfig(output_width=20, output_height=20, cell_size=5, octaves=1)
    gen = NoiseFieldGenerator(config, logger)
    for px, py in [(0, 0), (5, 5), (3, 17), (19, 19)]:
        x, y = gen.pixel_to_grid(px, py)
        assert gen.get_noise(px, py) == perlin(x, y, gen.grid)


def test_lattice_pixels_are_mid_gray_in_grayscale(logger):
    config = FieldConfig(output_width=21, output_height=21, cell_size=10, octaves=1, color_mode="grayscale")
    gen = NoiseFieldGenerator(config, logger)
    for px, py in [(0, 0), (10, 0), (0, 20), (20, 10)]:
        assert gen.get_color(px, py) == (128, 128, 128)


def test_pixel_access_outside_field_raises(small_config, logger):
    gen = NoiseFieldGenerator(small_config, logger)
    with pytest.raises(IndexError):
        gen.get_noise(48, 0)
    with pytest.raises(IndexError):
        gen.get_color(0, -1)
    with pytest.raises(IndexError):
        gen.get_noise_array(10, 31)


def test_logs_initialization(small_config, caplog):
    with caplog.at_level(logging.INFO, logger="test_generator"):
        NoiseFieldGenerator(small_config, logging.getLogger("test_generator"))
    assert "seed: 1234" in caplog.text
