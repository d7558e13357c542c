import pytest

from noise_generator import config as DEFAULTS
from noise_generator.config import FieldConfig
from noise_generator.errors import ConfigurationError


def test_defaults_match_module_constants():
    config = FieldConfig()
    assert config.output_width == DEFAULTS.DEFAULT_OUTPUT_WIDTH
    assert config.output_height == DEFAULTS.DEFAULT_OUTPUT_HEIGHT
    assert config.cell_size == DEFAULTS.DEFAULT_CELL_SIZE
    assert config.seed == DEFAULTS.DEFAULT_SEED
    assert config.octaves == DEFAULTS.DEFAULT_OCTAVES
    assert config.persistence == DEFAULTS.DEFAULT_PERSISTENCE


def test_from_dict_merges_over_defaults():
    config = FieldConfig.from_dict({'seed': 7, 'octaves': 2})
    assert config.seed == 7
    assert config.octaves == 2
    assert config.cell_size == DEFAULTS.DEFAULT_CELL_SIZE


def test_from_file_data_accepts_sectioned_and_flat_dicts():
    sectioned = {DEFAULTS.CONFIG_FILE_SECTION: {'seed': 3}}
    assert FieldConfig.from_file_data(sectioned).seed == 3
    assert FieldConfig.from_file_data({'seed': 4}).seed == 4


def test_config_is_immutable():
    config = FieldConfig()
    with pytest.raises(AttributeError):
        config.seed = 5


def test_replace_revalidates():
    config = FieldConfig()
    assert config.replace(seed=99).seed == 99
    with pytest.raises(ConfigurationError):
        config.replace(cell_size=0)


def test_round_trips_through_dict():
    config = FieldConfig(seed=5, color_mode="grayscale")
    assert FieldConfig.from_dict(config.to_dict()) == config


def test_unknown_keys_are_rejected():
    with pytest.raises(ConfigurationError):
        FieldConfig.from_dict({'octave_count': 3})


@pytest.mark.parametrize("overrides", [
    {'output_width': 0},
    {'output_height': -10},
    {'output_width': 12.5},
    {'cell_size': 0},
    {'octaves': 0},
    {'persistence': 0.0},
    {'persistence': 1.01},
    {'persistence': "half"},
    {'base_frequency': -1.0},
    {'seed': -1},
    {'seed': "1234"},
    {'color_mode': "sepia"},
    {'palette': "volcano"},
])
def test_invalid_parameters_are_rejected(overrides):
    with pytest.raises(ConfigurationError):
        FieldConfig.from_dict(overrides)


def test_palette_is_ignored_in_grayscale_mode():
    config = FieldConfig(color_mode="grayscale", palette="volcano")
    assert config.color_mode == "grayscale"


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        FieldConfig(octaves=-3)
