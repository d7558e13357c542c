import json
import logging
import os

import numpy as np
import pytest
from PIL import Image

import bake_field
from noise_generator.config import FieldConfig
from noise_generator.generator import NoiseFieldGenerator


@pytest.fixture
def logger():
    return logging.getLogger("test_bake")


@pytest.fixture
def config():
    return FieldConfig(output_width=40, output_height=70, cell_size=10, seed=77, octaves=3)


def test_split_rows_covers_height_in_order():
    bands = bake_field.split_rows(70, rows_per_band=32)
    assert bands == [(0, 32), (32, 64), (64, 70)]


def test_split_rows_exact_multiple():
    assert bake_field.split_rows(64, rows_per_band=32) == [(0, 32), (32, 64)]


def test_sequential_bake_matches_generator(config, logger):
    expected = NoiseFieldGenerator(config, logger).get_color_array()
    colors = bake_field.generate_field(config, num_workers=1, logger=logger)
    assert np.array_equal(colors, expected)


def test_parallel_bake_matches_sequential(config, logger):
    sequential = bake_field.generate_field(config, num_workers=1, logger=logger)
    parallel = bake_field.generate_field(config, num_workers=2, logger=logger)
    assert np.array_equal(parallel, sequential)


def test_bake_writes_image_and_generation_config(config, logger, tmp_path):
    image_path = bake_field.bake_field(config, str(tmp_path), logger, num_workers=1)
    assert os.path.basename(image_path) == bake_field.IMAGE_FILENAME

    with Image.open(image_path) as img:
        assert img.size == (40, 70)
        pixels = np.array(img.convert('RGB'))
    assert np.array_equal(pixels, NoiseFieldGenerator(config, logger).get_color_array())

    with open(tmp_path / bake_field.GENERATION_CONFIG_FILENAME) as f:
        assert FieldConfig.from_dict(json.load(f)) == config


def test_load_config_reads_sectioned_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"field_generation_parameters": {"seed": 5, "octaves": 2}}))
    config = bake_field.load_config(str(path))
    assert config.seed == 5
    assert config.octaves == 2


def test_main_rejects_invalid_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"cell_size": -4}))
    assert bake_field.main(["--config", str(path), "--output", str(tmp_path / "out")]) == 1
    assert not (tmp_path / "out").exists()


def test_main_reports_missing_config(tmp_path):
    assert bake_field.main(["--config", str(tmp_path / "missing.json")]) == 1


def test_main_bakes_with_seed_override(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"output_width": 16, "output_height": 12, "cell_size": 4, "octaves": 2}))
    out_dir = tmp_path / "out"
    assert bake_field.main(["--config", str(path), "--output", str(out_dir), "--workers", "1", "--seed", "9"]) == 0
    with open(out_dir / bake_field.GENERATION_CONFIG_FILENAME) as f:
        assert json.load(f)["seed"] == 9
    assert (out_dir / bake_field.IMAGE_FILENAME).exists()
