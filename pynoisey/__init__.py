"""
pynoisey: coherent noise generation and composition.

Provides seeded Perlin and OpenSimplex noise, composition modules (fractal
Brownian motion, select, scale) that nest into arbitrary graphs, a grid
builder that samples any field onto a regular grid, and a JSON document
format that wires seeds, sources and generators together by name.

Usage:
    import pynoisey as pn

    rng = pn.NumpyRandomSource(1)
    perlin = pn.PerlinGenerator2D(rng, pn.STANDARD_QUALITY)
    fbm = pn.FBMGenerator2D(perlin, octaves=5, persistence=0.25, frequency=1.13)

    builder = pn.Builder2D(fbm, 256, 256, pn.Builder2DBounds(0.0, 0.0, 6.0, 6.0))
    values = builder.build()
    vmin, vmax = builder.get_min_max()
"""

import logging

from . import config, grid, misc, modules, noise, rng
from .config import NoiseConfigError, NoiseJSON
from .grid import Builder2D, Builder2DBounds
from .modules import FBMGenerator2D, FBMGenerator3D, Scale2D, Scale3D, Select2D, Select3D
from .noise import (
    FAST_QUALITY,
    HIGH_QUALITY,
    STANDARD_QUALITY,
    OpenSimplexGenerator,
    PerlinGenerator,
    PerlinGenerator2D,
    Quality,
    Source2D,
    Source3D,
)
from .rng import NumpyRandomSource, RandomSource

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "config",
    "grid",
    "misc",
    "modules",
    "noise",
    "rng",
    "RandomSource",
    "NumpyRandomSource",
    "Source2D",
    "Source3D",
    "Quality",
    "FAST_QUALITY",
    "STANDARD_QUALITY",
    "HIGH_QUALITY",
    "PerlinGenerator2D",
    "PerlinGenerator",
    "OpenSimplexGenerator",
    "FBMGenerator2D",
    "FBMGenerator3D",
    "Select2D",
    "Select3D",
    "Scale2D",
    "Scale3D",
    "Builder2D",
    "Builder2DBounds",
    "NoiseJSON",
    "NoiseConfigError",
]
