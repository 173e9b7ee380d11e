"""Robust geometric predicates.

Every predicate evaluates its expression in floating point first and trusts
the sign when the result is farther from zero than the error bound of the
expression. Otherwise the same expression is evaluated exactly with Python
integers built from the 52-bit mantissas of the coordinates.

The exact stage of the orientation and in-circle tests is only valid for
coordinates in ``[1, 2)``, where the mantissa of ``x`` is exactly
``(x - 1) * 2**52``. Use :func:`robust_coordinates` to map a point set into
that range first. :func:`distance_compare` takes any finite coordinates.
"""

import math
import struct
import sys
from fractions import Fraction

import numpy as np

EPSILON = sys.float_info.epsilon

# Error bounds are relative to the magnitude of the terms of each expression.
# They are empirical and checked by the stress tests.
ORIENT_ERR = 12 * EPSILON
INCIRCLE_ERR = 12 * EPSILON
DISTANCE_ERR = 12 * EPSILON

_MANTISSA_MASK = 0x000FFFFFFFFFFFFF
_DOUBLE = struct.Struct("<d")
_UINT64 = struct.Struct("<Q")


def mantissa(x):
    """Return the 52-bit mantissa of the double ``x`` as an ``int``."""
    return _UINT64.unpack(_DOUBLE.pack(x))[0] & _MANTISSA_MASK


def _sign(v):
    return (v > 0) - (v < 0)


def robust_coordinates(points):
    """Map ``points`` uniformly into ``[1, 2)``.

    Point sets that already lie in ``[1, 2)`` are returned unchanged. Otherwise
    each axis is shifted by its finite minimum and both are scaled by the same
    power of two, so the larger side of the bounding box ends up below 0.5.
    Scaling by a power of two keeps integer and dyadic coordinates exact.
    Non-finite coordinates stay non-finite.
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    finite = np.isfinite(points).all(axis=1)
    if not finite.any():
        return points.copy()

    lo = points[finite].min(axis=0)
    hi = points[finite].max(axis=0)
    if lo.min() >= 1 and hi.max() < 2:
        return points.copy()

    span = float((hi - lo).max())
    scale = math.ldexp(1.0, -(math.frexp(span)[1] + 1))
    return 1 + (points - lo) * scale


def orient(a, b, c, robust=True):
    """True if ``a, b, c`` wind clockwise, i.e. their signed area is negative."""
    ax, ay = a
    bx, by = b
    cx, cy = c
    left = (by - ay) * (cx - bx)
    right = (bx - ax) * (cy - by)
    d = left - right
    if not robust:
        return d < 0

    bound = ORIENT_ERR * (abs(left) + abs(right))
    if d < -bound:
        return True
    if d > bound:
        return False

    ax, ay, bx, by, cx, cy = map(mantissa, (ax, ay, bx, by, cx, cy))
    return (by - ay) * (cx - bx) - (bx - ax) * (cy - by) < 0


def in_circle(a, b, c, p, robust=True):
    """True if ``p`` lies strictly inside the circle through ``a, b, c``.

    ``a, b, c`` must be wound the way the triangulator emits triangles.
    """
    dx = a[0] - p[0]
    dy = a[1] - p[1]
    ex = b[0] - p[0]
    ey = b[1] - p[1]
    fx = c[0] - p[0]
    fy = c[1] - p[1]

    ap = dx * dx + dy * dy
    bp = ex * ex + ey * ey
    cp = fx * fx + fy * fy

    d = dx * (ey * cp - bp * fy) - dy * (ex * cp - bp * fx) + ap * (ex * fy - ey * fx)
    if not robust:
        return d < 0

    permanent = (
        abs(dx) * (abs(ey * cp) + abs(bp * fy))
        + abs(dy) * (abs(ex * cp) + abs(bp * fx))
        + ap * (abs(ex * fy) + abs(ey * fx))
    )
    bound = INCIRCLE_ERR * permanent
    if d < -bound:
        return True
    if d > bound:
        return False

    px = mantissa(p[0])
    py = mantissa(p[1])
    dx = mantissa(a[0]) - px
    dy = mantissa(a[1]) - py
    ex = mantissa(b[0]) - px
    ey = mantissa(b[1]) - py
    fx = mantissa(c[0]) - px
    fy = mantissa(c[1]) - py

    ap = dx * dx + dy * dy
    bp = ex * ex + ey * ey
    cp = fx * fx + fy * fy

    return dx * (ey * cp - bp * fy) - dy * (ex * cp - bp * fx) + ap * (ex * fy - ey * fx) < 0


def distance_compare(p, a, b, robust=True):
    """Sign of ``|p - a|**2 - |p - b|**2``: -1, 0 or 1.

    ``p`` may lie anywhere; the exact stage works on the rational values of
    the coordinates.
    """
    dax = a[0] - p[0]
    day = a[1] - p[1]
    dbx = b[0] - p[0]
    dby = b[1] - p[1]
    da = dax * dax + day * day
    db = dbx * dbx + dby * dby
    d = da - db
    if not robust or abs(d) > DISTANCE_ERR * (da + db):
        return _sign(d)

    px = Fraction(p[0])
    py = Fraction(p[1])
    dax = Fraction(a[0]) - px
    day = Fraction(a[1]) - py
    dbx = Fraction(b[0]) - px
    dby = Fraction(b[1]) - py
    return _sign(dax * dax + day * day - dbx * dbx - dby * dby)


def cross2d(p, a, b, robust=True):
    """Sign of the cross product ``(a - p) x (b - p)``: -1, 0 or 1."""
    left = (a[0] - p[0]) * (b[1] - p[1])
    right = (a[1] - p[1]) * (b[0] - p[0])
    d = left - right
    if not robust or abs(d) > ORIENT_ERR * (abs(left) + abs(right)):
        return _sign(d)

    px = mantissa(p[0])
    py = mantissa(p[1])
    return _sign(
        (mantissa(a[0]) - px) * (mantissa(b[1]) - py)
        - (mantissa(a[1]) - py) * (mantissa(b[0]) - px)
    )
