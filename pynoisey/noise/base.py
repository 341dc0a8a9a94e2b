"""
Field capabilities shared by every generator and module in pynoisey.

A field is anything that can be evaluated at a coordinate. Base generators,
fractal sums, selectors and scalers all implement the same capability, so they
can be nested freely without knowing each other's concrete type.
"""

import logging
from abc import ABC, abstractmethod

import numpy as np

logger = logging.getLogger(__name__)

TABLE_SIZE = 256
TABLE_MASK = TABLE_SIZE - 1


class Source2D(ABC):
    """A scalar field over the plane."""

    @abstractmethod
    def get_2d(self, x: float, y: float) -> float:
        """Evaluate the field at (x, y)."""

    def sample_2d(self, xs, ys) -> np.ndarray:
        """
        Evaluate the field element-wise over two coordinate arrays.

        Args:
            xs, ys: Array-likes of identical shape

        Returns:
            float64 array with the shape of the inputs
        """
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        if xs.shape != ys.shape:
            raise ValueError(f"Coordinate shapes differ: {xs.shape} vs {ys.shape}")

        out = np.empty(xs.shape, dtype=np.float64)
        for idx in np.ndindex(xs.shape):
            out[idx] = self.get_2d(float(xs[idx]), float(ys[idx]))
        return out


class Source3D(ABC):
    """A scalar field over 3D space."""

    @abstractmethod
    def get_3d(self, x: float, y: float, z: float) -> float:
        """Evaluate the field at (x, y, z)."""


def build_permutation_table(rng) -> np.ndarray:
    """
    Draw a permutation of 0..255 from a random source and freeze it.

    Raises:
        ValueError: If the source returns anything but a bijection on 0..255
    """
    perm = np.asarray(rng.permutation(TABLE_SIZE), dtype=np.int64)
    if perm.shape != (TABLE_SIZE,) or not np.array_equal(np.sort(perm), np.arange(TABLE_SIZE)):
        raise ValueError(
            f"Random source returned an invalid permutation of {TABLE_SIZE} values"
        )
    perm.flags.writeable = False
    logger.debug("Built permutation table from %r", rng)
    return perm
