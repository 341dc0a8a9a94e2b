"""
Coherent noise generators for pynoisey.

All generators are seeded once from a RandomSource at construction time and
are pure functions of the coordinate afterwards, so a single instance can be
evaluated from several threads without locking.

Noise Types:
- PerlinGenerator2D: Classic gradient noise with fast/standard/high interpolation
- PerlinGenerator: Gradient noise blended with an attenuation kernel (2D and 3D)
- OpenSimplexGenerator: OpenSimplex noise (2D and 3D)

Usage:
    import pynoisey as pn

    rng = pn.NumpyRandomSource(1)
    perlin = pn.noise.PerlinGenerator2D(rng, pn.noise.HIGH_QUALITY)
    value = perlin.get_2d(0.5, 1.25)
"""

from .base import TABLE_SIZE, Source2D, Source3D, build_permutation_table
from .open_simplex import OpenSimplexGenerator
from .perlin import (
    FAST_QUALITY,
    HIGH_QUALITY,
    STANDARD_QUALITY,
    PerlinGenerator,
    PerlinGenerator2D,
    Quality,
)

__all__ = [
    "TABLE_SIZE",
    "Source2D",
    "Source3D",
    "build_permutation_table",
    "Quality",
    "FAST_QUALITY",
    "STANDARD_QUALITY",
    "HIGH_QUALITY",
    "PerlinGenerator2D",
    "PerlinGenerator",
    "OpenSimplexGenerator",
]
