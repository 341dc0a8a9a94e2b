"""
Builder for sampling a 2D field onto a regular grid.

The bounds rectangle does not have to match the grid size: the step along
each axis is ``extent / dimension`` and cell ``i`` samples ``min + i * step``.
Sampling starts on the minimum edge and stops one step short of the maximum
edge, so the last row and column never reach ``max_x`` / ``max_y``.
"""

import logging
from dataclasses import dataclass

import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class Builder2DBounds:
    """Rectangle in field space mapped onto the grid. May be degenerate or inverted."""

    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float = 1.0
    max_y: float = 1.0


class Builder2D:
    """
    Evaluate a Source2D at every cell of a width x height grid.

    Args:
        source: Field exposing ``get_2d(x, y)``
        width: Number of columns
        height: Number of rows
        bounds: Builder2DBounds, defaults to the unit square

    Attributes:
        values: float64 array of shape (height, width), row-major
    """

    def __init__(self, source, width: int, height: int, bounds: Builder2DBounds = None):
        if int(width) != width or int(height) != height or width < 0 or height < 0:
            raise ValueError(f"Grid size must be non-negative integers, got {width}x{height}")
        self.source = source
        self.width = int(width)
        self.height = int(height)
        self.bounds = bounds if bounds is not None else Builder2DBounds()
        self.values = np.zeros((self.height, self.width), dtype=np.float64)

    def coordinates(self):
        """
        Sample coordinates along each axis.

        Returns:
            Tuple (xs, ys) of 1D arrays with ``width`` and ``height`` entries
        """
        b = self.bounds
        x_delta = (b.max_x - b.min_x) / self.width if self.width else 0.0
        y_delta = (b.max_y - b.min_y) / self.height if self.height else 0.0
        xs = b.min_x + np.arange(self.width, dtype=np.float64) * x_delta
        ys = b.min_y + np.arange(self.height, dtype=np.float64) * y_delta
        return xs, ys

    def build(self) -> np.ndarray:
        """Fill ``values`` from the source and return it."""
        xs, ys = self.coordinates()
        logger.debug("Building %dx%d grid over %s", self.width, self.height, self.bounds)

        get_2d = self.source.get_2d
        values = np.empty((self.height, self.width), dtype=np.float64)
        for j, y in enumerate(ys.tolist()):
            row = values[j]
            for i, x in enumerate(xs.tolist()):
                row[i] = get_2d(x, y)

        self.values = values
        return values

    def get_min_max(self):
        """
        Lowest and highest value in ``values``.

        Raises:
            ValueError: If the grid has no cells
        """
        if self.values.size == 0:
            raise ValueError("Cannot compute the range of an empty grid")
        return float(self.values.min()), float(self.values.max())
