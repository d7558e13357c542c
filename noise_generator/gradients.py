# noise_generator/gradients.py

"""
================================================================================
GRADIENT GRID
================================================================================
This module provides the lattice of random unit vectors that Perlin noise is
built from. One vector is stored per integer lattice point.

Data Contract:
---------------
- Inputs:
    - width, height: Lattice dimensions (number of points per axis).
    - seed: Integer seed for the pseudo-random angles.
- Outputs:
    - GradientGrid: A read-only container with a flat, row-major backing
      array of shape (width * height, 2).
- Side Effects: None.
- Invariants:
    - The same (width, height, seed) always produces identical vectors.
    - Every stored vector has unit length.
    - The backing array is not writeable once build() returns.
================================================================================
"""
import math
from typing import NamedTuple

import numpy as np

from .errors import ConfigurationError, GridBoundsError

TWO_PI = 2.0 * np.pi


def _is_integer(value) -> bool:
    # bool is an int subclass, but never a meaningful size or index.
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


class GradientVector(NamedTuple):
    gx: float
    gy: float


def required_extent(output_size: int, cell_size: int, octaves: int, base_frequency: float = 1.0) -> int:
    """
    Number of lattice points needed along one axis so that every pixel in
    [0, output_size) can be sampled at every octave.

    The deepest octave samples pixel coordinate p at grid coordinate
    (p / cell_size) * base_frequency * 2**(octaves - 1). The largest such
    coordinate needs its own cell plus the neighbor to the right, hence +2.
    """
    max_frequency = base_frequency * (2.0 ** (octaves - 1))
    max_coord = ((output_size - 1) / cell_size) * max_frequency
    return int(math.floor(max_coord)) + 2


class GradientGrid:
    """A fixed-size, read-only lattice of unit gradient vectors."""

    def __init__(self, width: int, height: int, seed: int, vectors: np.ndarray):
        if vectors.shape != (width * height, 2):
            raise ConfigurationError(
                f"Backing array shape {vectors.shape} does not match a {width}x{height} grid"
            )
        self._width = width
        self._height = height
        self._seed = seed
        self._vectors = vectors
        self._vectors.flags.writeable = False

    @classmethod
    def build(cls, width: int, height: int, seed: int) -> "GradientGrid":
        """
        Populates a new grid with one random unit vector per lattice point.

        The random generator lives only for the duration of this call.
        Angles are drawn in row-major order, so the vector at (ix, iy) is the
        (iy * width + ix)-th draw.
        """
        for name, value in (('width', width), ('height', height)):
            if not _is_integer(value) or value <= 0:
                raise ConfigurationError(f"Grid {name} must be a positive integer, got {value!r}")
        # The same seed must always give the same grid, so OS entropy (None)
        # is not accepted.
        if not _is_integer(seed) or seed < 0:
            raise ConfigurationError(f"Grid seed must be a non-negative integer, got {seed!r}")

        rng = np.random.default_rng(seed)
        angles = rng.uniform(0.0, TWO_PI, size=width * height)
        vectors = np.column_stack((np.cos(angles), np.sin(angles)))
        return cls(int(width), int(height), seed, np.ascontiguousarray(vectors, dtype=np.float64))

    # --- Public Properties ---
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def vectors(self) -> np.ndarray:
        """The flat (width * height, 2) backing array, for the noise kernels."""
        return self._vectors

    # --- Bounds-Checked Access ---
    def _index(self, ix: int, iy: int) -> int:
        if not (_is_integer(ix) and _is_integer(iy)):
            raise GridBoundsError(f"Lattice point ({ix!r}, {iy!r}) must have integer coordinates")
        if not (0 <= ix < self._width and 0 <= iy < self._height):
            raise GridBoundsError(
                f"Lattice point ({ix}, {iy}) is outside the {self._width}x{self._height} grid"
            )
        return iy * self._width + ix

    def at(self, ix: int, iy: int) -> GradientVector:
        gx, gy = self._vectors[self._index(ix, iy)]
        return GradientVector(float(gx), float(gy))

    def covers(self, x0: int, y0: int) -> bool:
        """True if all four corners of the cell at (x0, y0) exist."""
        return 0 <= x0 and 0 <= y0 and x0 + 1 < self._width and y0 + 1 < self._height

    def require_cell(self, x0: int, y0: int) -> None:
        if not self.covers(x0, y0):
            raise GridBoundsError(
                f"Cell ({x0}, {y0}) needs lattice points up to ({x0 + 1}, {y0 + 1}), "
                f"but the grid is only {self._width}x{self._height}"
            )

    def __eq__(self, other):
        if not isinstance(other, GradientGrid):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and np.array_equal(self._vectors, other._vectors)
        )

    __hash__ = None

    def __repr__(self):
        return f"GradientGrid(width={self._width}, height={self._height}, seed={self._seed})"
