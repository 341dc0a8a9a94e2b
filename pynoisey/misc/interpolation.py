"""
Interpolation helpers shared by the noise generators and the blending modules.

Every curve maps [0, 1] onto [0, 1] and is a pure function of its inputs, so
the same helpers serve the Perlin quality levels and the select module's edge
falloff.
"""


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation from a (t=0) to b (t=1)."""
    return a * (1.0 - t) + b * t


def linear_curve(t: float) -> float:
    """Identity easing, used by the fast quality level."""
    return t


def cubic_s_curve(t: float) -> float:
    """Cubic smoothstep: 3t^2 - 2t^3"""
    return t * t * (3.0 - 2.0 * t)


def quintic_s_curve(t: float) -> float:
    """Quintic smoothstep: 6t^5 - 15t^4 + 10t^3"""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)
