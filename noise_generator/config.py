# noise_generator/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback constants for the noise field
generator and the immutable FieldConfig value that carries them into a
generation session. Defaults are used for any parameter the user's
configuration dictionary does not provide.

DO NOT MODIFY THIS FILE FOR A SPECIFIC FIELD.
Instead, pass a configuration dictionary to FieldConfig.from_dict().

Data Contract:
---------------
- Inputs:
    - user_config (dict): Parameters overriding the defaults below.
- Outputs:
    - FieldConfig: A frozen, validated configuration value.
- Side Effects: None.
- Invariants: Every FieldConfig instance that exists has passed validation.
================================================================================
"""
from dataclasses import dataclass, asdict, fields

from .errors import ConfigurationError

# --- Output Raster ---
DEFAULT_OUTPUT_WIDTH = 1280   # Pixels
DEFAULT_OUTPUT_HEIGHT = 720   # Pixels
# The number of pixels covered by one lattice cell at the base octave.
DEFAULT_CELL_SIZE = 40

# --- Noise Generation ---
DEFAULT_SEED = 1234
DEFAULT_OCTAVES = 5
# Each octave's amplitude is the previous one multiplied by this factor.
DEFAULT_PERSISTENCE = 0.5
DEFAULT_BASE_FREQUENCY = 1.0
# Frequency multiplier between successive octaves (Rule 1).
OCTAVE_FREQUENCY_GROWTH = 2.0

# --- Color Mapping ---
COLOR_MODE_GRAYSCALE = "grayscale"
COLOR_MODE_BANDED = "banded"
COLOR_MODES = (COLOR_MODE_GRAYSCALE, COLOR_MODE_BANDED)
DEFAULT_COLOR_MODE = COLOR_MODE_BANDED
DEFAULT_PALETTE = "forest"

# Top-level key under which JSON config files store the parameters.
CONFIG_FILE_SECTION = "field_generation_parameters"


def _require_positive_int(name: str, value) -> None:
    # bool is an int subclass, but True is never a meaningful size.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"'{name}' must be an integer, got {value!r}")
    if value <= 0:
        raise ConfigurationError(f"'{name}' must be positive, got {value}")


def _require_number(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"'{name}' must be a number, got {value!r}")


def validate_octave_settings(octaves, persistence, base_frequency) -> None:
    """Shared validation for the fractal compositor's parameters."""
    _require_positive_int('octaves', octaves)
    _require_number('persistence', persistence)
    if not 0.0 < persistence <= 1.0:
        raise ConfigurationError(f"'persistence' must be in (0, 1], got {persistence}")
    _require_number('base_frequency', base_frequency)
    if base_frequency <= 0:
        raise ConfigurationError(f"'base_frequency' must be positive, got {base_frequency}")


@dataclass(frozen=True)
class FieldConfig:
    """Immutable parameters for a single generated noise field."""
    output_width: int = DEFAULT_OUTPUT_WIDTH
    output_height: int = DEFAULT_OUTPUT_HEIGHT
    cell_size: int = DEFAULT_CELL_SIZE
    seed: int = DEFAULT_SEED
    octaves: int = DEFAULT_OCTAVES
    persistence: float = DEFAULT_PERSISTENCE
    base_frequency: float = DEFAULT_BASE_FREQUENCY
    color_mode: str = DEFAULT_COLOR_MODE
    palette: str = DEFAULT_PALETTE

    def __post_init__(self):
        _require_positive_int('output_width', self.output_width)
        _require_positive_int('output_height', self.output_height)
        _require_positive_int('cell_size', self.cell_size)
        if isinstance(self.seed, bool) or not isinstance(self.seed, int):
            raise ConfigurationError(f"'seed' must be an integer, got {self.seed!r}")
        if self.seed < 0:
            # numpy's SeedSequence only accepts non-negative entropy.
            raise ConfigurationError(f"'seed' must be non-negative, got {self.seed}")
        validate_octave_settings(self.octaves, self.persistence, self.base_frequency)

        if self.color_mode not in COLOR_MODES:
            raise ConfigurationError(
                f"'color_mode' must be one of {COLOR_MODES}, got {self.color_mode!r}"
            )
        # Imported here to avoid a cycle: color_maps reads the defaults above.
        from .color_maps import PALETTES
        if self.color_mode == COLOR_MODE_BANDED and self.palette not in PALETTES:
            raise ConfigurationError(
                f"Unknown palette {self.palette!r}. Available: {sorted(PALETTES)}"
            )

    @classmethod
    def from_dict(cls, user_config: dict) -> "FieldConfig":
        """
        Builds a FieldConfig from a user dictionary, falling back to the
        module defaults for every key the dictionary omits.

        Raises:
            ConfigurationError: On unknown keys or invalid values.
        """
        known_keys = {f.name for f in fields(cls)}
        unknown = set(user_config) - known_keys
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")

        return cls(
            output_width=user_config.get('output_width', DEFAULT_OUTPUT_WIDTH),
            output_height=user_config.get('output_height', DEFAULT_OUTPUT_HEIGHT),
            cell_size=user_config.get('cell_size', DEFAULT_CELL_SIZE),
            seed=user_config.get('seed', DEFAULT_SEED),
            octaves=user_config.get('octaves', DEFAULT_OCTAVES),
            persistence=user_config.get('persistence', DEFAULT_PERSISTENCE),
            base_frequency=user_config.get('base_frequency', DEFAULT_BASE_FREQUENCY),
            color_mode=user_config.get('color_mode', DEFAULT_COLOR_MODE),
            palette=user_config.get('palette', DEFAULT_PALETTE),
        )

    @classmethod
    def from_file_data(cls, file_data: dict) -> "FieldConfig":
        """Accepts either a sectioned config file or a flat parameter dict."""
        if CONFIG_FILE_SECTION in file_data:
            return cls.from_dict(file_data[CONFIG_FILE_SECTION])
        return cls.from_dict(file_data)

    def replace(self, **overrides) -> "FieldConfig":
        """Returns a new, re-validated config with some fields overridden."""
        settings = self.to_dict()
        settings.update(overrides)
        return FieldConfig.from_dict(settings)

    def to_dict(self) -> dict:
        return asdict(self)
