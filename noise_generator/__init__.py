# noise_generator/__init__.py

# This file makes the 'noise_generator' directory a Python package.
# We also use it to define the public API of the package.

from .config import FieldConfig
from .errors import NoiseGeneratorError, ConfigurationError, GridBoundsError
from .gradients import GradientGrid, GradientVector, required_extent
from .noise import OctaveParameters, fade, lerp, perlin, fractal_noise, fractal_noise_2d, normalize
from .color_maps import ColorBand, BandedPalette, get_palette, grayscale_color
from .generator import NoiseFieldGenerator

__all__ = [
    "FieldConfig",
    "NoiseGeneratorError", "ConfigurationError", "GridBoundsError",
    "GradientGrid", "GradientVector", "required_extent",
    "OctaveParameters", "fade", "lerp", "perlin", "fractal_noise", "fractal_noise_2d", "normalize",
    "ColorBand", "BandedPalette", "get_palette", "grayscale_color",
    "NoiseFieldGenerator",
]
