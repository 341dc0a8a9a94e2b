"""
Grid sampling for pynoisey.

Available Classes:
- Builder2DBounds: Field-space rectangle mapped onto the grid
- Builder2D: Samples a 2D field over a width x height grid
"""

from .builder import Builder2D, Builder2DBounds

__all__ = ["Builder2D", "Builder2DBounds"]
