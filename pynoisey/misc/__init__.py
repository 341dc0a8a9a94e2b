"""
Miscellaneous numeric utilities for pynoisey.

Available Functions:
- lerp: Linear interpolation between two values
- linear_curve, cubic_s_curve, quintic_s_curve: Easing curves on [0, 1]
"""

from .interpolation import cubic_s_curve, lerp, linear_curve, quintic_s_curve

__all__ = [
    "lerp",
    "linear_curve",
    "cubic_s_curve",
    "quintic_s_curve",
]
