"""Scale module: multiply a field by a constant and add a bias."""

from ..noise.base import Source2D, Source3D


class Scale2D(Source2D):
    """Output ``source.get_2d(x, y) * scale + bias``."""

    def __init__(self, source, scale=1.0, bias=0.0):
        self.source = source
        self.scale = scale
        self.bias = bias

    def get_2d(self, x: float, y: float) -> float:
        return self.source.get_2d(x, y) * self.scale + self.bias


class Scale3D(Source3D):
    """Output ``source.get_3d(x, y, z) * scale + bias``."""

    def __init__(self, source, scale=1.0, bias=0.0):
        self.source = source
        self.scale = scale
        self.bias = bias

    def get_3d(self, x: float, y: float, z: float) -> float:
        return self.source.get_3d(x, y, z) * self.scale + self.bias
