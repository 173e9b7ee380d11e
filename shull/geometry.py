import math

import numpy as np

from .point import Point
from .predicates import cross2d, robust_coordinates


def area(a, b, c):
    """Signed doubled area of ``a, b, c``; positive for triangles the
    triangulator emits."""
    return (b[1] - a[1]) * (c[0] - b[0]) - (b[0] - a[0]) * (c[1] - b[1])


def circumradius(a, b, c):
    """Radius of the circle through ``a, b, c``.

    Coincident or collinear points give ``math.inf`` so they can never win a
    smallest-circle search.
    """
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    ex = c[0] - a[0]
    ey = c[1] - a[1]

    bl = dx * dx + dy * dy
    cl = ex * ex + ey * ey
    d = dx * ey - dy * ex
    if bl == 0 or cl == 0 or d == 0:
        return math.inf

    x = (ey * bl - dy * cl) * 0.5 / d
    y = (dx * cl - ex * bl) * 0.5 / d
    r = x * x + y * y
    if r == 0:
        return math.inf
    return math.sqrt(r)


def circumcenter(a, b, c):
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    ex = c[0] - a[0]
    ey = c[1] - a[1]

    bl = dx * dx + dy * dy
    cl = ex * ex + ey * ey
    d = dx * ey - dy * ex

    x = a[0] + (ey * bl - dy * cl) * 0.5 / d
    y = a[1] + (dx * cl - ex * bl) * 0.5 / d
    return Point(x, y)


def polygon_area(points):
    """Shoelace area of a closed polygon, positive in triangle winding order."""
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    if len(points) < 3:
        return 0.0
    x = points[:, 0]
    y = points[:, 1]
    return float(np.sum(np.roll(x, -1) * y - x * np.roll(y, -1)) / 2)


def convex_hull(points, robust=True):
    """Indices of the convex hull of ``points`` (monotone chain).

    The hull is returned in the same winding as triangulation hulls, without
    collinear points. Non-finite points are ignored.
    """
    coords = robust_coordinates(points)
    finite = np.flatnonzero(np.isfinite(coords).all(axis=1))
    coords = coords[finite]
    order = np.lexsort((coords[:, 1], coords[:, 0])).tolist()
    pts = list(map(tuple, coords.tolist()))

    if len(order) < 3:
        return finite[order].astype(np.int64)

    lower = []
    for i in order:
        while len(lower) >= 2 and cross2d(pts[lower[-2]], pts[lower[-1]], pts[i], robust) <= 0:
            lower.pop()
        lower.append(i)

    upper = []
    for i in reversed(order):
        while len(upper) >= 2 and cross2d(pts[upper[-2]], pts[upper[-1]], pts[i], robust) <= 0:
            upper.pop()
        upper.append(i)

    hull = lower[:-1] + upper[:-1]
    hull.reverse()
    return finite[hull].astype(np.int64)
