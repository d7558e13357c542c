# noise_generator/color_maps.py

"""
================================================================================
SHARED COLOR MAPPING UTILITIES
================================================================================
This module contains the palettes and functions for converting normalized
noise values into RGB colors, one value at a time or as whole arrays.

It is designed to be a pure, stateless utility with no dependencies on Pygame,
allowing it to be used by both the real-time viewer and the offline baker.

Data Contract:
---------------
- Inputs:
    - Normalized noise values in [0, 1] (scalars or NumPy arrays). Values
      outside that range are clamped at this boundary.
- Outputs:
    - RGB tuples, or uint8 arrays of shape (..., 3).
- Side Effects: None.
- Invariants: The scalar and array functions return identical colors for the
  same input value.
================================================================================
"""
from typing import Callable, NamedTuple

import numpy as np

from . import config as DEFAULTS
from .errors import ConfigurationError

RGB = tuple[int, int, int]

# The largest 8-bit channel value (Rule 1).
MAX_CHANNEL_VALUE = 255


class ColorBand(NamedTuple):
    """One classification band: values below upper_threshold take this color."""
    upper_threshold: float
    color: RGB


class BandedPalette:
    """
    An ordered set of color bands, evaluated in ascending threshold order.
    The first band whose threshold exceeds the value wins; values at or above
    the last threshold fall through to the final band's color.
    """

    def __init__(self, name: str, bands, catch_all: RGB):
        self.name = name
        self.bands = tuple(ColorBand(float(t), tuple(c)) for t, c in bands)
        self.catch_all = tuple(catch_all)

        thresholds = [band.upper_threshold for band in self.bands]
        if any(not 0.0 <= t <= 1.0 for t in thresholds):
            raise ConfigurationError(f"Palette '{name}' has thresholds outside [0, 1]: {thresholds}")
        if any(a >= b for a, b in zip(thresholds, thresholds[1:])):
            raise ConfigurationError(f"Palette '{name}' thresholds must be strictly ascending: {thresholds}")

        self._thresholds = np.array(thresholds, dtype=np.float64)
        # Index i holds band i's color; the final index is the catch-all.
        self._lut = np.array([band.color for band in self.bands] + [self.catch_all], dtype=np.uint8)

    @property
    def colors(self) -> list:
        return [band.color for band in self.bands] + [self.catch_all]

    def band_index(self, n: float) -> int:
        n = min(max(n, 0.0), 1.0)
        for i, band in enumerate(self.bands):
            if n < band.upper_threshold:
                return i
        return len(self.bands)

    def color_for(self, n: float) -> RGB:
        return self.colors[self.band_index(n)]

    def band_index_array(self, values: np.ndarray) -> np.ndarray:
        """Vectorized band_index(): a right-sided search finds the first threshold > n."""
        clamped = np.clip(values, 0.0, 1.0)
        return np.searchsorted(self._thresholds, clamped, side='right')

    def color_array(self, values: np.ndarray) -> np.ndarray:
        return self._lut[self.band_index_array(values)]

    def __repr__(self):
        return f"BandedPalette({self.name!r}, {len(self.bands) + 1} colors)"


# --- Default Palettes ---
# Forest landscape: lakes, marsh, grassland, forest, rocky hills, snowy peaks.
FOREST_PALETTE = BandedPalette(
    "forest",
    bands=[
        (0.3, (20, 40, 100)),     # Deep lake
        (0.4, (60, 100, 100)),    # Marsh / shallow lake
        (0.5, (100, 180, 100)),   # Grassland
        (0.65, (40, 100, 40)),    # Forest (dark green)
        (0.8, (100, 80, 50)),     # Rocky hills
    ],
    catch_all=(220, 220, 220),    # Peaks / snow
)

# Elevation-style palette: water, beach, lowland, highland, mountain.
TERRAIN_PALETTE = BandedPalette(
    "terrain",
    bands=[
        (0.35, (26, 102, 255)),   # Water
        (0.4, (240, 230, 140)),   # Sand
        (0.6, (34, 139, 34)),     # Grass
        (0.75, (139, 69, 19)),    # Dirt
    ],
    catch_all=(112, 128, 144),    # Mountain
)

PALETTES = {
    FOREST_PALETTE.name: FOREST_PALETTE,
    TERRAIN_PALETTE.name: TERRAIN_PALETTE,
}


def get_palette(name: str) -> BandedPalette:
    try:
        return PALETTES[name]
    except KeyError:
        raise ConfigurationError(f"Unknown palette {name!r}. Available: {sorted(PALETTES)}") from None


# --- Grayscale ---
def grayscale_color(n: float) -> RGB:
    """Maps a normalized value to an identical R, G and B level."""
    n = min(max(n, 0.0), 1.0)
    level = int(round(n * MAX_CHANNEL_VALUE))
    return (level, level, level)


def get_grayscale_color_array(values: np.ndarray) -> np.ndarray:
    """Converts normalized data [0, 1] into a grayscale RGB color array."""
    # np.rint rounds half to even, matching Python's round().
    gray_values = np.rint(np.clip(values, 0.0, 1.0) * MAX_CHANNEL_VALUE).astype(np.uint8)
    return np.stack([gray_values] * 3, axis=-1)


def get_banded_color_array(values: np.ndarray, palette: BandedPalette) -> np.ndarray:
    """Converts normalized data [0, 1] into an RGB array using a banded palette."""
    return palette.color_array(values)


# --- Mapper Selection ---
ColorMapper = Callable[[np.ndarray], np.ndarray]


def make_color_mapper(field_config) -> ColorMapper:
    """Returns the array mapper selected by the config's color mode."""
    if field_config.color_mode == DEFAULTS.COLOR_MODE_GRAYSCALE:
        return get_grayscale_color_array
    palette = get_palette(field_config.palette)
    return palette.color_array


def make_pixel_mapper(field_config) -> Callable[[float], RGB]:
    """Scalar counterpart of make_color_mapper()."""
    if field_config.color_mode == DEFAULTS.COLOR_MODE_GRAYSCALE:
        return grayscale_color
    return get_palette(field_config.palette).color_for
