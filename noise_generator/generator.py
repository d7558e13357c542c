# noise_generator/generator.py

"""
================================================================================
CORE NOISE FIELD GENERATOR
================================================================================
This module contains the main NoiseFieldGenerator class, responsible for
building the gradient grid for one field and providing access to its noise
values and colors, per pixel or as whole rasters.

Data Contract:
---------------
- Inputs (on initialization):
    - config (FieldConfig or dict): Generation parameters. A dict is merged
      over the internal defaults and validated.
    - logger: A configured Python logging object for runtime messages.
- Outputs (from methods):
    - Raw noise in [-1, 1], normalized noise in [0, 1], RGB colors.
    - Arrays are indexed [row, column], i.e. (height, width).
- Side Effects: Logs messages using the provided logger.
- Invariants:
    - Given the same configuration, the output is deterministic.
    - The gradient grid covers every pixel at every octave. This is checked
      once, right after the grid is built.
================================================================================
"""
import logging
import math
import time

import numpy as np

from .config import FieldConfig
from .gradients import GradientGrid, required_extent
from . import noise
from . import color_maps


class NoiseFieldGenerator:
    """
    Generates one deterministic noise field and maps it to colors.
    This class is backend-only and does not handle any visualization.
    """
    def __init__(self, config, logger: logging.Logger = None):
        """
        Initializes the generator and builds its gradient grid.

        Args:
            config (FieldConfig | dict): Generation parameters.
            logger (logging.Logger, optional): The logger for all output.

        Raises:
            ConfigurationError: If any parameter is invalid. Raised before
                any grid work begins.
        """
        self.logger = logger if logger is not None else logging.getLogger(__name__)

        # --- Consolidate Configuration ---
        if isinstance(config, dict):
            config = FieldConfig.from_dict(config)
        self.config = config
        self.octave_parameters = noise.OctaveParameters(
            octaves=config.octaves,
            persistence=config.persistence,
            base_frequency=config.base_frequency,
        )
        self._pixel_mapper = color_maps.make_pixel_mapper(config)
        self._color_mapper = color_maps.make_color_mapper(config)

        # --- Public Properties for easy access ---
        self.seed = config.seed
        self.width = config.output_width
        self.height = config.output_height

        # --- Build the Gradient Grid ---
        grid_width = required_extent(config.output_width, config.cell_size, config.octaves, config.base_frequency)
        grid_height = required_extent(config.output_height, config.cell_size, config.octaves, config.base_frequency)
        self.logger.debug(f"Building {grid_width}x{grid_height} gradient grid.")
        self.grid = GradientGrid.build(grid_width, grid_height, config.seed)
        self._verify_coverage()

        self.logger.info(f"NoiseFieldGenerator initialized with seed: {self.seed}")
        self.logger.info(
            f"Field: {self.width}x{self.height} px, cell size {config.cell_size}, "
            f"{config.octaves} octave(s) at persistence {config.persistence}, "
            f"grid {self.grid.width}x{self.grid.height}"
        )

    def _verify_coverage(self):
        """Fails loudly if the deepest octave would read outside the grid."""
        max_x, max_y = self.pixel_to_grid(self.width - 1, self.height - 1)
        max_frequency = self.octave_parameters.highest_frequency()
        self.grid.require_cell(math.floor(max_x * max_frequency), math.floor(max_y * max_frequency))

    # --- Coordinate Conversion ---
    def pixel_to_grid(self, px: int, py: int) -> tuple[float, float]:
        """Converts a pixel coordinate to base-octave grid space."""
        return px / self.config.cell_size, py / self.config.cell_size

    def _check_pixel(self, px: int, py: int):
        if not (0 <= px < self.width and 0 <= py < self.height):
            raise IndexError(f"Pixel ({px}, {py}) is outside the {self.width}x{self.height} field")

    # --- Per-Pixel Access ---
    def get_noise(self, px: int, py: int) -> float:
        """Raw fractal noise at a pixel, nominally in [-1, 1]."""
        self._check_pixel(px, py)
        x, y = self.pixel_to_grid(px, py)
        return noise.fractal_noise(x, y, self.grid, self.octave_parameters)

    def get_normalized(self, px: int, py: int) -> float:
        return noise.normalize(self.get_noise(px, py))

    def get_color(self, px: int, py: int) -> tuple[int, int, int]:
        return self._pixel_mapper(self.get_normalized(px, py))

    # --- Whole-Raster Access ---
    def get_noise_array(self, row_start: int = 0, row_stop: int = None) -> np.ndarray:
        """
        Raw fractal noise for the rows [row_start, row_stop) of the field.
        Returns an array of shape (rows, width).
        """
        if row_stop is None:
            row_stop = self.height
        if not 0 <= row_start <= row_stop <= self.height:
            raise IndexError(f"Row range [{row_start}, {row_stop}) is outside the field height {self.height}")

        # Same division as pixel_to_grid() so per-pixel and batch results agree.
        xs = np.arange(self.width, dtype=np.float64) / self.config.cell_size
        ys = np.arange(row_start, row_stop, dtype=np.float64) / self.config.cell_size
        x_grid, y_grid = np.meshgrid(xs, ys)

        params = self.octave_parameters
        return noise.fractal_noise_2d(
            self.grid.vectors, self.grid.width, x_grid, y_grid,
            params.octaves, float(params.persistence), float(params.base_frequency)
        )

    def get_normalized_array(self, row_start: int = 0, row_stop: int = None) -> np.ndarray:
        return noise.normalize(self.get_noise_array(row_start, row_stop))

    def get_color_array(self, row_start: int = 0, row_stop: int = None) -> np.ndarray:
        """RGB colors for a row band, as a uint8 array of shape (rows, width, 3)."""
        start_time = time.perf_counter()
        colors = self._color_mapper(self.get_normalized_array(row_start, row_stop))
        elapsed = time.perf_counter() - start_time
        self.logger.debug(f"Generated {colors.shape[0]}x{colors.shape[1]} colors in {elapsed:.3f}s.")
        return colors

    def iter_pixels(self):
        """
        Yields ((px, py), (r, g, b)) for every pixel in row-major order,
        starting at the top-left corner.
        """
        for py in range(self.height):
            row = self.get_color_array(py, py + 1)[0]
            for px in range(self.width):
                r, g, b = row[px]
                yield (px, py), (int(r), int(g), int(b))
