# noise_generator/errors.py

"""Exception types raised by the noise field generator."""


class NoiseGeneratorError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(NoiseGeneratorError, ValueError):
    """A generation parameter is missing, malformed or out of range."""


class GridBoundsError(NoiseGeneratorError, IndexError):
    """
    A lattice coordinate falls outside the gradient grid.

    This signals a sizing defect between the caller and the grid, never a
    condition to recover from. The grid is sized by construction to cover
    every coordinate the generator samples.
    """
