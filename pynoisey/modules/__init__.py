"""
Composition modules for pynoisey.

Each module is itself a field wrapping one or more other fields, so modules
nest arbitrarily.

Available Classes:
- FBMGenerator2D / FBMGenerator3D: Fractal Brownian motion (octave summation)
- Select2D / Select3D: Threshold selection with optional smoothed edges
- Scale2D / Scale3D: Linear rescale and bias
"""

from .fbm import FBMGenerator2D, FBMGenerator3D
from .scale import Scale2D, Scale3D
from .select import Select2D, Select3D

__all__ = [
    "FBMGenerator2D",
    "FBMGenerator3D",
    "Select2D",
    "Select3D",
    "Scale2D",
    "Scale3D",
]
