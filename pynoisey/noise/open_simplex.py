"""
OpenSimplex noise in 2D and 3D.

Input coordinates are stretched onto a simplectic lattice, the containing
simplex is found from the fractional lattice coordinates, and every nearby
lattice vertex adds a radially attenuated gradient contribution. The sum is
divided by a fixed constant so the output stays within about [-1, 1].

References:
* http://uniblock.tumblr.com/post/97868843242/noise
* https://gist.github.com/KdotJPG/b1270127455a94ac5d19
"""

import logging
import math

import numpy as np

from .base import TABLE_MASK, Source2D, Source3D, build_permutation_table

logger = logging.getLogger(__name__)

STRETCH_2D = -0.211324865405187  # (1 / sqrt(2 + 1) - 1) / 2
SQUISH_2D = 0.366025403784439  # (sqrt(2 + 1) - 1) / 2
STRETCH_3D = -1.0 / 6.0  # (1 / sqrt(3 + 1) - 1) / 3
SQUISH_3D = 1.0 / 3.0  # (sqrt(3 + 1) - 1) / 3
NORM_2D = 47.0
NORM_3D = 103.0

# Directions to the vertices of an octagon
GRADIENTS_2D = np.array([
    5, 2, 2, 5,
    -5, 2, -2, 5,
    5, -2, 2, -5,
    -5, -2, -2, -5,
], dtype=np.int64)
GRADIENTS_2D.flags.writeable = False

# Directions to the vertices of a rhombicuboctahedron, skewed so the
# triangular and square facets fit circles of the same radius
GRADIENTS_3D = np.array([
    -11, 4, 4, -4, 11, 4, -4, 4, 11,
    11, 4, 4, 4, 11, 4, 4, 4, 11,
    -11, -4, 4, -4, -11, 4, -4, -4, 11,
    11, -4, 4, 4, -11, 4, 4, -4, 11,
    -11, 4, -4, -4, 11, -4, -4, 4, -11,
    11, 4, -4, 4, 11, -4, 4, 4, -11,
    -11, -4, -4, -4, -11, -4, -4, -4, -11,
    11, -4, -4, 4, -11, -4, 4, -4, -11,
], dtype=np.int64)
GRADIENTS_3D.flags.writeable = False


class OpenSimplexGenerator(Source2D, Source3D):
    """
    OpenSimplex noise generator.

    Args:
        rng: RandomSource used once to build the permutation table
    """

    def __init__(self, rng):
        self.permutations = build_permutation_table(rng)

        n_grad_3d = len(GRADIENTS_3D) // 3
        self.perm_grad_index_3d = (self.permutations % n_grad_3d) * 3
        self.perm_grad_index_3d.flags.writeable = False

        self._perm = self.permutations.tolist()
        self._grad_index_3d = self.perm_grad_index_3d.tolist()
        self._grad_2d = GRADIENTS_2D.tolist()
        self._grad_3d = GRADIENTS_3D.tolist()
        logger.debug("OpenSimplexGenerator created")

    def _extrapolate2(self, xsb: int, ysb: int, dx: float, dy: float) -> float:
        perm = self._perm
        index = perm[(perm[xsb & TABLE_MASK] + ysb) & TABLE_MASK] & 0x0E
        g = self._grad_2d
        return g[index] * dx + g[index + 1] * dy

    def _extrapolate3(self, xsb: int, ysb: int, zsb: int, dx: float, dy: float, dz: float) -> float:
        perm = self._perm
        px = perm[xsb & TABLE_MASK]
        py = perm[(px + ysb) & TABLE_MASK]
        index = self._grad_index_3d[(py + zsb) & TABLE_MASK]
        g = self._grad_3d
        return g[index] * dx + g[index + 1] * dy + g[index + 2] * dz

    def _vertex2(self, xsv: int, ysv: int, dx: float, dy: float) -> float:
        attn = 2.0 - dx * dx - dy * dy
        if attn <= 0.0:
            return 0.0
        attn *= attn
        return attn * attn * self._extrapolate2(xsv, ysv, dx, dy)

    def _vertex3(self, xsv: int, ysv: int, zsv: int, dx: float, dy: float, dz: float) -> float:
        attn = 2.0 - dx * dx - dy * dy - dz * dz
        if attn <= 0.0:
            return 0.0
        attn *= attn
        return attn * attn * self._extrapolate3(xsv, ysv, zsv, dx, dy, dz)

    def get_2d(self, x: float, y: float) -> float:
        # place the input on the stretched lattice
        stretch_offset = (x + y) * STRETCH_2D
        xs = x + stretch_offset
        ys = y + stretch_offset

        # rhombus super-cell origin, in lattice and in real space
        xsb = math.floor(xs)
        ysb = math.floor(ys)
        squish_offset = (xsb + ysb) * SQUISH_2D
        xb = xsb + squish_offset
        yb = ysb + squish_offset

        xins = xs - xsb
        yins = ys - ysb
        in_sum = xins + yins

        dx0 = x - xb
        dy0 = y - yb

        # (1, 0) and (0, 1) always contribute
        value = self._vertex2(xsb + 1, ysb, dx0 - 1 - SQUISH_2D, dy0 - SQUISH_2D)
        value += self._vertex2(xsb, ysb + 1, dx0 - SQUISH_2D, dy0 - 1 - SQUISH_2D)

        if in_sum <= 1:
            # triangle at (0, 0)
            zins = 1 - in_sum
            if zins > xins or zins > yins:
                # (0, 0) is one of the closest two triangle vertices
                if xins > yins:
                    xsv_ext, ysv_ext = xsb + 1, ysb - 1
                    dx_ext, dy_ext = dx0 - 1, dy0 + 1
                else:
                    xsv_ext, ysv_ext = xsb - 1, ysb + 1
                    dx_ext, dy_ext = dx0 + 1, dy0 - 1
            else:
                # (1, 0) and (0, 1) are the closest two vertices
                xsv_ext, ysv_ext = xsb + 1, ysb + 1
                dx_ext = dx0 - 1 - 2 * SQUISH_2D
                dy_ext = dy0 - 1 - 2 * SQUISH_2D
        else:
            # triangle at (1, 1)
            zins = 2 - in_sum
            if zins < xins or zins < yins:
                # (1, 1) is one of the closest two triangle vertices
                if xins > yins:
                    xsv_ext, ysv_ext = xsb + 2, ysb
                    dx_ext = dx0 - 2 - 2 * SQUISH_2D
                    dy_ext = dy0 - 2 * SQUISH_2D
                else:
                    xsv_ext, ysv_ext = xsb, ysb + 2
                    dx_ext = dx0 - 2 * SQUISH_2D
                    dy_ext = dy0 - 2 - 2 * SQUISH_2D
            else:
                # (1, 0) and (0, 1) are the closest two vertices
                xsv_ext, ysv_ext = xsb, ysb
                dx_ext, dy_ext = dx0, dy0
            xsb += 1
            ysb += 1
            dx0 = dx0 - 1 - 2 * SQUISH_2D
            dy0 = dy0 - 1 - 2 * SQUISH_2D

        # (0, 0) or (1, 1), then the extra vertex
        value += self._vertex2(xsb, ysb, dx0, dy0)
        value += self._vertex2(xsv_ext, ysv_ext, dx_ext, dy_ext)

        return value / NORM_2D

    def get_3d(self, x: float, y: float, z: float) -> float:
        # place the input on the simplectic honeycomb
        stretch_offset = (x + y + z) * STRETCH_3D
        xs = x + stretch_offset
        ys = y + stretch_offset
        zs = z + stretch_offset

        # rhombohedron super-cell origin, in lattice and in real space
        xsb = math.floor(xs)
        ysb = math.floor(ys)
        zsb = math.floor(zs)
        squish_offset = (xsb + ysb + zsb) * SQUISH_3D
        xb = xsb + squish_offset
        yb = ysb + squish_offset
        zb = zsb + squish_offset

        xins = xs - xsb
        yins = ys - ysb
        zins = zs - zsb
        in_sum = xins + yins + zins

        dx0 = x - xb
        dy0 = y - yb
        dz0 = z - zb

        if in_sum <= 1:
            value, ext0, ext1 = self._tetrahedron_near(
                xsb, ysb, zsb, xins, yins, zins, in_sum, dx0, dy0, dz0
            )
        elif in_sum >= 2:
            value, ext0, ext1 = self._tetrahedron_far(
                xsb, ysb, zsb, xins, yins, zins, in_sum, dx0, dy0, dz0
            )
        else:
            value, ext0, ext1 = self._octahedron(
                xsb, ysb, zsb, xins, yins, zins, dx0, dy0, dz0
            )

        value += self._vertex3(*ext0)
        value += self._vertex3(*ext1)
        return value / NORM_3D

    def _tetrahedron_near(self, xsb, ysb, zsb, xins, yins, zins, in_sum, dx0, dy0, dz0):
        """Tetrahedron at (0,0,0): four cell vertices plus two extra lattice points."""
        # closest two of (1,0,0), (0,1,0), (0,0,1)
        a_point, a_score = 0x01, xins
        b_point, b_score = 0x02, yins
        if a_score >= b_score and zins > b_score:
            b_score, b_point = zins, 0x04
        elif a_score < b_score and zins > a_score:
            a_score, a_point = zins, 0x04

        wins = 1 - in_sum
        if wins > a_score or wins > b_score:
            # (0,0,0) is one of the closest two vertices
            c = b_point if b_score > a_score else a_point

            if c & 0x01 == 0:
                xsv0, xsv1 = xsb - 1, xsb
                dx_ext0, dx_ext1 = dx0 + 1, dx0
            else:
                xsv0 = xsv1 = xsb + 1
                dx_ext0 = dx_ext1 = dx0 - 1

            if c & 0x02 == 0:
                ysv0 = ysv1 = ysb
                dy_ext0 = dy_ext1 = dy0
                if c & 0x01 == 0:
                    ysv1 -= 1
                    dy_ext1 += 1
                else:
                    ysv0 -= 1
                    dy_ext0 += 1
            else:
                ysv0 = ysv1 = ysb + 1
                dy_ext0 = dy_ext1 = dy0 - 1

            if c & 0x04 == 0:
                zsv0, zsv1 = zsb, zsb - 1
                dz_ext0, dz_ext1 = dz0, dz0 + 1
            else:
                zsv0 = zsv1 = zsb + 1
                dz_ext0 = dz_ext1 = dz0 - 1
        else:
            # the two extra vertices follow from the closest two
            c = a_point | b_point

            if c & 0x01 == 0:
                xsv0, xsv1 = xsb, xsb - 1
                dx_ext0 = dx0 - 2 * SQUISH_3D
                dx_ext1 = dx0 + 1 - SQUISH_3D
            else:
                xsv0 = xsv1 = xsb + 1
                dx_ext0 = dx0 - 1 - 2 * SQUISH_3D
                dx_ext1 = dx0 - 1 - SQUISH_3D

            if c & 0x02 == 0:
                ysv0, ysv1 = ysb, ysb - 1
                dy_ext0 = dy0 - 2 * SQUISH_3D
                dy_ext1 = dy0 + 1 - SQUISH_3D
            else:
                ysv0 = ysv1 = ysb + 1
                dy_ext0 = dy0 - 1 - 2 * SQUISH_3D
                dy_ext1 = dy0 - 1 - SQUISH_3D

            if c & 0x04 == 0:
                zsv0, zsv1 = zsb, zsb - 1
                dz_ext0 = dz0 - 2 * SQUISH_3D
                dz_ext1 = dz0 + 1 - SQUISH_3D
            else:
                zsv0 = zsv1 = zsb + 1
                dz_ext0 = dz0 - 1 - 2 * SQUISH_3D
                dz_ext1 = dz0 - 1 - SQUISH_3D

        value = self._vertex3(xsb, ysb, zsb, dx0, dy0, dz0)

        dx1 = dx0 - 1 - SQUISH_3D
        dy1 = dy0 - SQUISH_3D
        dz1 = dz0 - SQUISH_3D
        value += self._vertex3(xsb + 1, ysb, zsb, dx1, dy1, dz1)

        dx2 = dx0 - SQUISH_3D
        dy2 = dy0 - 1 - SQUISH_3D
        value += self._vertex3(xsb, ysb + 1, zsb, dx2, dy2, dz1)

        dz3 = dz0 - 1 - SQUISH_3D
        value += self._vertex3(xsb, ysb, zsb + 1, dx2, dy1, dz3)

        return (
            value,
            (xsv0, ysv0, zsv0, dx_ext0, dy_ext0, dz_ext0),
            (xsv1, ysv1, zsv1, dx_ext1, dy_ext1, dz_ext1),
        )

    def _tetrahedron_far(self, xsb, ysb, zsb, xins, yins, zins, in_sum, dx0, dy0, dz0):
        """Tetrahedron at (1,1,1): four cell vertices plus two extra lattice points."""
        # closest two of (1,1,0), (1,0,1), (0,1,1)
        a_point, a_score = 0x06, xins
        b_point, b_score = 0x05, yins
        if a_score <= b_score and zins < b_score:
            b_score, b_point = zins, 0x03
        elif a_score > b_score and zins < a_score:
            a_score, a_point = zins, 0x03

        wins = 3 - in_sum
        if wins < a_score or wins < b_score:
            # (1,1,1) is one of the closest two vertices
            c = b_point if b_score < a_score else a_point

            if c & 0x01 != 0:
                xsv0, xsv1 = xsb + 2, xsb + 1
                dx_ext0 = dx0 - 2 - 3 * SQUISH_3D
                dx_ext1 = dx0 - 1 - 3 * SQUISH_3D
            else:
                xsv0 = xsv1 = xsb
                dx_ext0 = dx_ext1 = dx0 - 3 * SQUISH_3D

            if c & 0x02 != 0:
                ysv0 = ysv1 = ysb + 1
                dy_ext0 = dy_ext1 = dy0 - 1 - 3 * SQUISH_3D
                if c & 0x01 != 0:
                    ysv1 += 1
                    dy_ext1 -= 1
                else:
                    ysv0 += 1
                    dy_ext0 -= 1
            else:
                ysv0 = ysv1 = ysb
                dy_ext0 = dy_ext1 = dy0 - 3 * SQUISH_3D

            if c & 0x04 != 0:
                zsv0, zsv1 = zsb + 1, zsb + 2
                dz_ext0 = dz0 - 1 - 3 * SQUISH_3D
                dz_ext1 = dz0 - 2 - 3 * SQUISH_3D
            else:
                zsv0 = zsv1 = zsb
                dz_ext0 = dz_ext1 = dz0 - 3 * SQUISH_3D
        else:
            # the two extra vertices follow from the closest two
            c = a_point & b_point

            if c & 0x01 != 0:
                xsv0, xsv1 = xsb + 1, xsb + 2
                dx_ext0 = dx0 - 1 - SQUISH_3D
                dx_ext1 = dx0 - 2 - 2 * SQUISH_3D
            else:
                xsv0 = xsv1 = xsb
                dx_ext0 = dx0 - SQUISH_3D
                dx_ext1 = dx0 - 2 * SQUISH_3D

            if c & 0x02 != 0:
                ysv0, ysv1 = ysb + 1, ysb + 2
                dy_ext0 = dy0 - 1 - SQUISH_3D
                dy_ext1 = dy0 - 2 - 2 * SQUISH_3D
            else:
                ysv0 = ysv1 = ysb
                dy_ext0 = dy0 - SQUISH_3D
                dy_ext1 = dy0 - 2 * SQUISH_3D

            if c & 0x04 != 0:
                zsv0, zsv1 = zsb + 1, zsb + 2
                dz_ext0 = dz0 - 1 - SQUISH_3D
                dz_ext1 = dz0 - 2 - 2 * SQUISH_3D
            else:
                zsv0 = zsv1 = zsb
                dz_ext0 = dz0 - SQUISH_3D
                dz_ext1 = dz0 - 2 * SQUISH_3D

        dx3 = dx0 - 1 - 2 * SQUISH_3D
        dy3 = dy0 - 1 - 2 * SQUISH_3D
        dz3 = dz0 - 2 * SQUISH_3D
        value = self._vertex3(xsb + 1, ysb + 1, zsb, dx3, dy3, dz3)

        dy2 = dy0 - 2 * SQUISH_3D
        dz2 = dz0 - 1 - 2 * SQUISH_3D
        value += self._vertex3(xsb + 1, ysb, zsb + 1, dx3, dy2, dz2)

        dx1 = dx0 - 2 * SQUISH_3D
        value += self._vertex3(xsb, ysb + 1, zsb + 1, dx1, dy3, dz2)

        value += self._vertex3(
            xsb + 1, ysb + 1, zsb + 1,
            dx0 - 1 - 3 * SQUISH_3D, dy0 - 1 - 3 * SQUISH_3D, dz0 - 1 - 3 * SQUISH_3D,
        )

        return (
            value,
            (xsv0, ysv0, zsv0, dx_ext0, dy_ext0, dz_ext0),
            (xsv1, ysv1, zsv1, dx_ext1, dy_ext1, dz_ext1),
        )

    def _octahedron(self, xsb, ysb, zsb, xins, yins, zins, dx0, dy0, dz0):
        """Octahedron between the two tetrahedra: six cell vertices plus two extra points."""
        # decide between (0,0,1) and (1,1,0) as closest
        p1 = xins + yins
        if p1 > 1:
            a_score, a_point, a_further = p1 - 1, 0x03, True
        else:
            a_score, a_point, a_further = 1 - p1, 0x04, False

        # decide between (0,1,0) and (1,0,1) as closest
        p2 = xins + zins
        if p2 > 1:
            b_score, b_point, b_further = p2 - 1, 0x05, True
        else:
            b_score, b_point, b_further = 1 - p2, 0x02, False

        # the closer of (1,0,0) and (0,1,1) replaces the further of the two above
        p3 = yins + zins
        if p3 > 1:
            score = p3 - 1
            if a_score <= b_score and a_score < score:
                a_score, a_point, a_further = score, 0x06, True
            elif a_score > b_score and b_score < score:
                b_score, b_point, b_further = score, 0x06, True
        else:
            score = 1 - p3
            if a_score <= b_score and a_score < score:
                a_score, a_point, a_further = score, 0x01, False
            elif a_score > b_score and b_score < score:
                b_score, b_point, b_further = score, 0x01, False

        if a_further == b_further:
            if a_further:
                # both on the (1,1,1) side: (1,1,1) plus one point on the shared axis
                ext0 = (
                    xsb + 1, ysb + 1, zsb + 1,
                    dx0 - 1 - 3 * SQUISH_3D, dy0 - 1 - 3 * SQUISH_3D, dz0 - 1 - 3 * SQUISH_3D,
                )
                c = a_point & b_point
                if c & 0x01 != 0:
                    ext1 = (
                        xsb + 2, ysb, zsb,
                        dx0 - 2 - 2 * SQUISH_3D, dy0 - 2 * SQUISH_3D, dz0 - 2 * SQUISH_3D,
                    )
                elif c & 0x02 != 0:
                    ext1 = (
                        xsb, ysb + 2, zsb,
                        dx0 - 2 * SQUISH_3D, dy0 - 2 - 2 * SQUISH_3D, dz0 - 2 * SQUISH_3D,
                    )
                else:
                    ext1 = (
                        xsb, ysb, zsb + 2,
                        dx0 - 2 * SQUISH_3D, dy0 - 2 * SQUISH_3D, dz0 - 2 - 2 * SQUISH_3D,
                    )
            else:
                # both on the (0,0,0) side: (0,0,0) plus one point on the omitted axis
                ext0 = (xsb, ysb, zsb, dx0, dy0, dz0)
                c = a_point | b_point
                if c & 0x01 == 0:
                    ext1 = (
                        xsb - 1, ysb + 1, zsb + 1,
                        dx0 + 1 - SQUISH_3D, dy0 - 1 - SQUISH_3D, dz0 - 1 - SQUISH_3D,
                    )
                elif c & 0x02 == 0:
                    ext1 = (
                        xsb + 1, ysb - 1, zsb + 1,
                        dx0 - 1 - SQUISH_3D, dy0 + 1 - SQUISH_3D, dz0 - 1 - SQUISH_3D,
                    )
                else:
                    ext1 = (
                        xsb + 1, ysb + 1, zsb - 1,
                        dx0 - 1 - SQUISH_3D, dy0 - 1 - SQUISH_3D, dz0 + 1 - SQUISH_3D,
                    )
        else:
            # one point on each side
            if a_further:
                c1, c2 = a_point, b_point
            else:
                c1, c2 = b_point, a_point

            # a permutation of (1,1,-1)
            if c1 & 0x01 == 0:
                ext0 = (
                    xsb - 1, ysb + 1, zsb + 1,
                    dx0 + 1 - SQUISH_3D, dy0 - 1 - SQUISH_3D, dz0 - 1 - SQUISH_3D,
                )
            elif c1 & 0x02 == 0:
                ext0 = (
                    xsb + 1, ysb - 1, zsb + 1,
                    dx0 - 1 - SQUISH_3D, dy0 + 1 - SQUISH_3D, dz0 - 1 - SQUISH_3D,
                )
            else:
                ext0 = (
                    xsb + 1, ysb + 1, zsb - 1,
                    dx0 - 1 - SQUISH_3D, dy0 - 1 - SQUISH_3D, dz0 + 1 - SQUISH_3D,
                )

            # a permutation of (0,0,2)
            xsv1, ysv1, zsv1 = xsb, ysb, zsb
            dx_ext1 = dx0 - 2 * SQUISH_3D
            dy_ext1 = dy0 - 2 * SQUISH_3D
            dz_ext1 = dz0 - 2 * SQUISH_3D
            if c2 & 0x01 != 0:
                dx_ext1 -= 2
                xsv1 += 2
            elif c2 & 0x02 != 0:
                dy_ext1 -= 2
                ysv1 += 2
            else:
                dz_ext1 -= 2
                zsv1 += 2
            ext1 = (xsv1, ysv1, zsv1, dx_ext1, dy_ext1, dz_ext1)

        dx1 = dx0 - 1 - SQUISH_3D
        dy1 = dy0 - SQUISH_3D
        dz1 = dz0 - SQUISH_3D
        value = self._vertex3(xsb + 1, ysb, zsb, dx1, dy1, dz1)

        dx2 = dx0 - SQUISH_3D
        dy2 = dy0 - 1 - SQUISH_3D
        value += self._vertex3(xsb, ysb + 1, zsb, dx2, dy2, dz1)

        dz3 = dz0 - 1 - SQUISH_3D
        value += self._vertex3(xsb, ysb, zsb + 1, dx2, dy1, dz3)

        dx4 = dx0 - 1 - 2 * SQUISH_3D
        dy4 = dy0 - 1 - 2 * SQUISH_3D
        dz4 = dz0 - 2 * SQUISH_3D
        value += self._vertex3(xsb + 1, ysb + 1, zsb, dx4, dy4, dz4)

        dy5 = dy0 - 2 * SQUISH_3D
        dz5 = dz0 - 1 - 2 * SQUISH_3D
        value += self._vertex3(xsb + 1, ysb, zsb + 1, dx4, dy5, dz5)

        dx6 = dx0 - 2 * SQUISH_3D
        value += self._vertex3(xsb, ysb + 1, zsb + 1, dx6, dy4, dz5)

        return value, ext0, ext1
