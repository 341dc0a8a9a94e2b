"""
Perlin (gradient) noise generators.

Two distinct algorithms live here and they are not numerically
interchangeable:

- PerlinGenerator2D: classic gradient noise with random unit gradients and a
  selectable interpolation curve (fast / standard / high quality).
- PerlinGenerator: fixed lattice gradients blended with a radial attenuation
  kernel instead of interpolation, available in 2D and 3D. Its output is
  shifted and rescaled by empirical constants to land roughly in [-1, 1].

References:
* http://webstaff.itn.liu.se/~stegu/TNM022-2005/perlinnoiselinks/perlin-noise-math-faq.html
* http://libnoise.sourceforge.net/noisegen/index.html
"""

import logging
import math
from enum import IntEnum

import numpy as np

from ..misc.interpolation import cubic_s_curve, lerp, linear_curve, quintic_s_curve
from .base import TABLE_MASK, TABLE_SIZE, Source2D, Source3D, build_permutation_table

logger = logging.getLogger(__name__)


class Quality(IntEnum):
    """Interpolation curve used between lattice corners."""

    FAST = 0
    STANDARD = 1
    HIGH = 2


FAST_QUALITY = Quality.FAST
STANDARD_QUALITY = Quality.STANDARD
HIGH_QUALITY = Quality.HIGH

_QUALITY_CURVES = {
    Quality.FAST: linear_curve,
    Quality.STANDARD: cubic_s_curve,
    Quality.HIGH: quintic_s_curve,
}

# 12 cube-edge directions, listed twice, then the 8 cube corners.
# No entry is (0, 0, +-1) so every 2D projection is non-zero.
_EDGE_GRADIENTS = [
    (1, 1, 0), (-1, 1, 0), (1, -1, 0), (-1, -1, 0),
    (1, 0, 1), (-1, 0, 1), (1, 0, -1), (-1, 0, -1),
    (0, 1, 1), (0, -1, 1), (0, 1, -1), (0, -1, -1),
]
_CORNER_GRADIENTS = [
    (1, 1, 1), (-1, 1, 1), (1, -1, 1), (-1, -1, 1),
    (1, 1, -1), (-1, 1, -1), (1, -1, -1), (-1, -1, -1),
]
GRADIENTS_3D = np.array(_EDGE_GRADIENTS * 2 + _CORNER_GRADIENTS, dtype=np.float64)
GRADIENTS_3D.flags.writeable = False
_GRADIENT_MASK = len(GRADIENTS_3D) - 1

# Empirical correction mapping the summed kernel output into about [-1, 1]
KERNEL_OFFSET = 0.053179
KERNEL_SCALE = 1.056165


class PerlinGenerator2D(Source2D):
    """
    Quality-interpolated 2D Perlin noise.

    Each lattice corner gets a random unit gradient; the corner dot products
    are blended along x then y with the curve picked by ``quality``. The
    output is exactly 0 on integer lattice points.

    Args:
        rng: RandomSource used once to build the permutation and gradient tables
        quality: FAST_QUALITY, STANDARD_QUALITY or HIGH_QUALITY (0, 1, 2)
    """

    def __init__(self, rng, quality=STANDARD_QUALITY):
        try:
            self.quality = Quality(quality)
        except ValueError:
            raise ValueError(f"Unknown Perlin quality: {quality!r}") from None
        self._curve = _QUALITY_CURVES[self.quality]

        self.permutations = build_permutation_table(rng)

        angles = np.array([rng.uniform() * 2.0 * math.pi for _ in range(TABLE_SIZE)])
        self.gradients = np.column_stack((np.cos(angles), np.sin(angles)))
        self.gradients.flags.writeable = False

        # plain lists index faster than numpy arrays from scalar code
        self._perm = self.permutations.tolist()
        self._grad = [tuple(g) for g in self.gradients.tolist()]
        logger.debug("PerlinGenerator2D created with quality %s", self.quality.name)

    def _gradient(self, ix: int, iy: int):
        perm = self._perm
        return self._grad[perm[(perm[ix & TABLE_MASK] + iy) & TABLE_MASK]]

    def get_2d(self, x: float, y: float) -> float:
        x0f = math.floor(x)
        y0f = math.floor(y)
        x0 = int(x0f)
        y0 = int(y0f)

        fx = x - x0f
        fy = y - y0f

        g00 = self._gradient(x0, y0)
        g10 = self._gradient(x0 + 1, y0)
        g01 = self._gradient(x0, y0 + 1)
        g11 = self._gradient(x0 + 1, y0 + 1)

        v00 = g00[0] * fx + g00[1] * fy
        v10 = g10[0] * (fx - 1.0) + g10[1] * fy
        v01 = g01[0] * fx + g01[1] * (fy - 1.0)
        v11 = g11[0] * (fx - 1.0) + g11[1] * (fy - 1.0)

        u = self._curve(fx)
        v = self._curve(fy)
        return lerp(lerp(v00, v10, u), lerp(v01, v11, u), v)


class PerlinGenerator(Source2D, Source3D):
    """
    Attenuated-kernel Perlin noise in 2D and 3D.

    Every corner of the surrounding lattice cell contributes
    ``max(0, 1 - |d|^2)^2 * dot(d, g)`` where ``d`` is the offset from the
    corner to the sample point and ``g`` a fixed lattice direction chosen by
    hashing the corner through the permutation table. The summed
    contributions are corrected with ``(sum + 0.053179) * 1.056165``.
    """

    def __init__(self, rng):
        self.permutations = build_permutation_table(rng)
        self.gradients = GRADIENTS_3D
        self._perm = self.permutations.tolist()
        self._grad = [tuple(g) for g in GRADIENTS_3D.tolist()]
        logger.debug("PerlinGenerator created")

    def _hash2(self, ix: int, iy: int) -> int:
        perm = self._perm
        return perm[(perm[ix & TABLE_MASK] + iy) & TABLE_MASK] & _GRADIENT_MASK

    def _hash3(self, ix: int, iy: int, iz: int) -> int:
        perm = self._perm
        h = perm[(perm[(perm[ix & TABLE_MASK] + iy) & TABLE_MASK] + iz) & TABLE_MASK]
        return h & _GRADIENT_MASK

    def get_2d(self, x: float, y: float) -> float:
        x0f = math.floor(x)
        y0f = math.floor(y)
        x0 = int(x0f)
        y0 = int(y0f)
        fx = x - x0f
        fy = y - y0f

        total = 0.0
        for cx in (0, 1):
            dx = fx - cx
            for cy in (0, 1):
                dy = fy - cy
                attn = 1.0 - dx * dx - dy * dy
                if attn > 0.0:
                    gx, gy, _ = self._grad[self._hash2(x0 + cx, y0 + cy)]
                    total += attn * attn * (gx * dx + gy * dy)

        return (total + KERNEL_OFFSET) * KERNEL_SCALE

    def get_3d(self, x: float, y: float, z: float) -> float:
        x0f = math.floor(x)
        y0f = math.floor(y)
        z0f = math.floor(z)
        x0 = int(x0f)
        y0 = int(y0f)
        z0 = int(z0f)
        fx = x - x0f
        fy = y - y0f
        fz = z - z0f

        total = 0.0
        for cx in (0, 1):
            dx = fx - cx
            for cy in (0, 1):
                dy = fy - cy
                for cz in (0, 1):
                    dz = fz - cz
                    attn = 1.0 - dx * dx - dy * dy - dz * dz
                    if attn > 0.0:
                        gx, gy, gz = self._grad[self._hash3(x0 + cx, y0 + cy, z0 + cz)]
                        total += attn * attn * (gx * dx + gy * dy + gz * dz)

        return (total + KERNEL_OFFSET) * KERNEL_SCALE
