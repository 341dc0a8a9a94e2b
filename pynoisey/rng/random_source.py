"""
Random sources for seeding the noise generators.

A random source only has to offer two draws: a uniform float in [0, 1) and a
random permutation of the first n integers. Generators consume both at
construction time and never touch the source again, so determinism of every
generator reduces to determinism of its source.
"""

from typing import Optional, Protocol, Sequence, runtime_checkable

import numpy as np


@runtime_checkable
class RandomSource(Protocol):
    """Capability the noise generators need from a random number generator."""

    def uniform(self) -> float:
        ...

    def permutation(self, n: int) -> Sequence[int]:
        ...


class NumpyRandomSource:
    """
    RandomSource backed by a NumPy ``Generator``.

    Args:
        seed: Seed for ``numpy.random.default_rng``. Two sources built from the
            same seed produce the same stream of draws.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def uniform(self) -> float:
        return float(self._rng.random())

    def permutation(self, n: int) -> np.ndarray:
        return self._rng.permutation(n)

    def __repr__(self):
        return f"NumpyRandomSource(seed={self.seed!r})"
