"""
Fractal Brownian motion.

Sums several octaves of an underlying field. Each octave samples at a higher
frequency (times ``lacunarity``) and a smaller amplitude (times
``persistence``) than the previous one.

Reference material:
* http://libnoise.sourceforge.net/glossary/
"""

from ..noise.base import Source2D, Source3D


class _FBMBase:
    def __init__(self, source, octaves=1, persistence=0.5, lacunarity=2.0, frequency=1.0):
        if octaves < 0:
            raise ValueError(f"octaves must be >= 0, got {octaves}")
        self.source = source
        self.octaves = int(octaves)
        self.persistence = persistence
        self.lacunarity = lacunarity
        self.frequency = frequency

    def __repr__(self):
        return (
            f"{type(self).__name__}(octaves={self.octaves}, persistence={self.persistence}, "
            f"lacunarity={self.lacunarity}, frequency={self.frequency})"
        )


class FBMGenerator2D(_FBMBase, Source2D):
    """
    Fractal Brownian motion over a 2D field.

    Args:
        source: Underlying Source2D
        octaves: Number of octaves to sum (0 yields a constant 0)
        persistence: Amplitude multiplier applied after each octave
        lacunarity: Frequency multiplier applied after each octave
        frequency: Frequency of the first octave
    """

    def get_2d(self, x: float, y: float) -> float:
        value = 0.0
        amplitude = 1.0
        x *= self.frequency
        y *= self.frequency

        for _ in range(self.octaves):
            value += self.source.get_2d(x, y) * amplitude
            x *= self.lacunarity
            y *= self.lacunarity
            amplitude *= self.persistence

        return value


class FBMGenerator3D(_FBMBase, Source3D):
    """Fractal Brownian motion over a 3D field. Same parameters as FBMGenerator2D."""

    def get_3d(self, x: float, y: float, z: float) -> float:
        value = 0.0
        amplitude = 1.0
        x *= self.frequency
        y *= self.frequency
        z *= self.frequency

        for _ in range(self.octaves):
            value += self.source.get_3d(x, y, z) * amplitude
            x *= self.lacunarity
            y *= self.lacunarity
            z *= self.lacunarity
            amplitude *= self.persistence

        return value
