# noise_generator/noise.py

"""
================================================================================
NOISE GENERATION UTILITIES
================================================================================
This module provides single-octave Perlin noise and its fractal (multi-octave)
composite, evaluated against a GradientGrid. It is designed to be a pure,
stateless utility.

Data Contract:
---------------
- Inputs:
    - grid: A GradientGrid (or its flat vector array plus width for the
      JIT kernels).
    - x, y: Coordinates in grid space, as scalars or NumPy arrays.
    - OctaveParameters: octaves, persistence, base_frequency.
- Outputs:
    - Noise values, nominally in the range [-1, 1].
- Side Effects: None.
- Invariants:
    - perlin() is exactly 0 on every lattice point.
    - fractal_noise() with a single octave at base frequency 1 equals perlin().
    - The JIT kernels never check bounds. The public scalar functions do, and
      the generator sizes its grid so the batch kernel never needs to.
================================================================================
"""
import math
from dataclasses import dataclass

import numpy as np
from numba import njit

from . import config as DEFAULTS
from .gradients import GradientGrid

# Module-level so Numba freezes it into the kernels as a constant.
_FREQUENCY_GROWTH = DEFAULTS.OCTAVE_FREQUENCY_GROWTH


@dataclass(frozen=True)
class OctaveParameters:
    """Fractal compositing parameters. Validated on construction."""
    octaves: int = 1
    persistence: float = DEFAULTS.DEFAULT_PERSISTENCE
    base_frequency: float = DEFAULTS.DEFAULT_BASE_FREQUENCY

    def __post_init__(self):
        DEFAULTS.validate_octave_settings(self.octaves, self.persistence, self.base_frequency)

    def highest_frequency(self) -> float:
        # Repeated doubling, exactly as the compositor computes it.
        frequency = self.base_frequency
        for _ in range(self.octaves - 1):
            frequency *= _FREQUENCY_GROWTH
        return frequency


@njit
def lerp(a, b, t):
    "Linear interpolation."
    return a + t * (b - a)


@njit
def fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)


@njit
def _dot_grid_gradient(vectors, grid_width, ix, iy, x, y):
    """Dot product of the offset from lattice point (ix, iy) with its gradient."""
    g = vectors[iy * grid_width + ix]
    return (x - ix) * g[0] + (y - iy) * g[1]


@njit
def _perlin(vectors, grid_width, x, y):
    x0 = int(np.floor(x))
    y0 = int(np.floor(y))
    x1 = x0 + 1
    y1 = y0 + 1

    sx = fade(x - x0)
    sy = fade(y - y0)

    n0 = _dot_grid_gradient(vectors, grid_width, x0, y0, x, y)
    n1 = _dot_grid_gradient(vectors, grid_width, x1, y0, x, y)
    ix0 = lerp(n0, n1, sx)

    n2 = _dot_grid_gradient(vectors, grid_width, x0, y1, x, y)
    n3 = _dot_grid_gradient(vectors, grid_width, x1, y1, x, y)
    ix1 = lerp(n2, n3, sx)

    return lerp(ix0, ix1, sy)


@njit
def _fractal(vectors, grid_width, x, y, octaves, persistence, base_frequency):
    total = 0.0
    frequency = base_frequency
    amplitude = 1.0
    max_value = 0.0

    for _ in range(octaves):
        total += _perlin(vectors, grid_width, x * frequency, y * frequency) * amplitude
        max_value += amplitude
        amplitude *= persistence
        frequency *= _FREQUENCY_GROWTH

    # Dividing by the summed amplitudes keeps the result in the single-octave range.
    return total / max_value


@njit
def fractal_noise_2d(vectors, grid_width, x, y, octaves=1, persistence=0.5, base_frequency=1.0):
    """
    Evaluate fractal Perlin noise over 2D coordinate arrays.
    This function is JIT-compiled with Numba and uses explicit loops, which
    Numba compiles to efficient machine code. The caller guarantees that the
    grid covers every coordinate at the highest octave.
    """
    rows, cols = x.shape
    result = np.empty((rows, cols))

    for i in range(rows):
        for j in range(cols):
            result[i, j] = _fractal(
                vectors, grid_width, x[i, j], y[i, j], octaves, persistence, base_frequency
            )

    return result


def _require_coverage(grid: GradientGrid, x: float, y: float) -> None:
    grid.require_cell(math.floor(x), math.floor(y))


def perlin(x: float, y: float, grid: GradientGrid) -> float:
    """
    Single-octave Perlin noise at grid-space coordinate (x, y).

    Raises:
        GridBoundsError: If the enclosing cell is not fully inside the grid.
    """
    _require_coverage(grid, x, y)
    return float(_perlin(grid.vectors, grid.width, float(x), float(y)))


def fractal_noise(x: float, y: float, grid: GradientGrid, params: OctaveParameters = None) -> float:
    """
    Fractal noise at grid-space coordinate (x, y), normalized by the sum of
    the octave amplitudes so the result stays in the single-octave range.

    Raises:
        GridBoundsError: If the highest octave reads outside the grid.
    """
    if params is None:
        params = OctaveParameters()

    # Octave coordinates grow monotonically, so checking the first and the
    # last octave covers all of them.
    max_frequency = params.highest_frequency()
    _require_coverage(grid, x * params.base_frequency, y * params.base_frequency)
    _require_coverage(grid, x * max_frequency, y * max_frequency)

    return float(_fractal(
        grid.vectors, grid.width, float(x), float(y),
        params.octaves, float(params.persistence), float(params.base_frequency)
    ))


def normalize(noise_values):
    """Remaps noise from [-1, 1] to [0, 1]."""
    return (noise_values + 1.0) / 2.0
