"""
Select module: switch between two fields depending on a control field.

Where the control value lies strictly inside (lower_bound, upper_bound) the
output comes from ``source_b``; elsewhere it comes from ``source_a``. With a
positive ``edge_falloff`` the switch is smoothed over a window of half-width
``edge_falloff`` centred on each bound, using the cubic s-curve.
When the range is narrower than two falloffs the falloff is reduced to half
the range, so the two windows meet in the middle and the output stays
continuous.
"""

from ..misc.interpolation import cubic_s_curve, lerp
from ..noise.base import Source2D, Source3D


class _SelectBase:
    def __init__(self, source_a, source_b, control, lower_bound, upper_bound, edge_falloff=0.0):
        if edge_falloff < 0:
            raise ValueError(f"edge_falloff must be >= 0, got {edge_falloff}")
        self.source_a = source_a
        self.source_b = source_b
        self.control = control
        self.lower_bound = lower_bound
        self.upper_bound = upper_bound
        self.edge_falloff = edge_falloff

    def _select(self, control, get_a, get_b):
        """Combine the two sources for a control value; get_a/get_b evaluate lazily."""
        lower = self.lower_bound
        upper = self.upper_bound
        # windows never overlap: falloff is capped at half the bound range
        falloff = min(self.edge_falloff, (upper - lower) / 2.0)

        if falloff <= 0.0:
            if lower < control < upper:
                return get_b()
            return get_a()

        if control < lower - falloff:
            return get_a()
        if control < lower + falloff:
            alpha = cubic_s_curve((control - (lower - falloff)) / (2.0 * falloff))
            return lerp(get_a(), get_b(), alpha)
        if control < upper - falloff:
            return get_b()
        if control < upper + falloff:
            alpha = cubic_s_curve((control - (upper - falloff)) / (2.0 * falloff))
            return lerp(get_b(), get_a(), alpha)
        return get_a()


class Select2D(_SelectBase, Source2D):
    """
    Select between two 2D fields.

    Args:
        source_a: Field used outside the bounds
        source_b: Field used inside the bounds
        control: Field whose value is compared against the bounds
        lower_bound, upper_bound: Exclusive range selecting source_b
        edge_falloff: Half-width of the blend window around each bound (0 = hard switch)
    """

    def get_2d(self, x: float, y: float) -> float:
        return self._select(
            self.control.get_2d(x, y),
            lambda: self.source_a.get_2d(x, y),
            lambda: self.source_b.get_2d(x, y),
        )


class Select3D(_SelectBase, Source3D):
    """Select between two 3D fields. Same parameters as Select2D."""

    def get_3d(self, x: float, y: float, z: float) -> float:
        return self._select(
            self.control.get_3d(x, y, z),
            lambda: self.source_a.get_3d(x, y, z),
            lambda: self.source_b.get_3d(x, y, z),
        )
