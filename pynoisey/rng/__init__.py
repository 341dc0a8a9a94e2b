"""
Random sources for pynoisey.

Available Classes:
- RandomSource: Protocol for uniform draws and permutations
- NumpyRandomSource: Seeded implementation on top of numpy.random.default_rng
"""

from .random_source import NumpyRandomSource, RandomSource

__all__ = ["RandomSource", "NumpyRandomSource"]
