import math

import numpy as np

from .errors import ValidationError
from .geometry import convex_hull, polygon_area
from .predicates import in_circle, orient, robust_coordinates


def next_halfedge(e):
    return e - 2 if e % 3 == 2 else e + 1


def _frozen(array, dtype):
    array = np.array(array, dtype=dtype)
    array.setflags(write=False)
    return array


class Triangulation:
    """A finished Delaunay triangulation.

    ``triangles`` holds point indices, three per triangle. ``halfedges[e]`` is
    the twin of half-edge ``e`` (which runs from ``triangles[e]`` to
    ``triangles[next_halfedge(e)]``) in the neighbouring triangle, or -1 on the
    convex hull. ``hull`` lists the hull point indices in the same winding as
    the triangles.

    A point equal to an earlier one is left out of ``triangles`` and
    ``hull``. Equality is decided on the coordinates remapped into
    ``[1, 2)``, so distinct points closer together than the remap can
    resolve are left out as well; the triangulator logs a warning when that
    happens.
    """

    def __init__(self, points, triangles, halfedges, hull):
        self.points = _frozen(points, np.float64).reshape(-1, 2)
        self.triangles = _frozen(triangles, np.int64)
        self.halfedges = _frozen(halfedges, np.int64)
        self.hull = _frozen(hull, np.int64)

    def __repr__(self):
        return (f"{type(self).__name__}(points={len(self.points)}, "
                f"triangles={self.num_triangles()}, hull={len(self.hull)})")

    @property
    def convex_hull(self):
        return self.points[self.hull]

    @property
    def simplices(self):
        return self.triangles.reshape(-1, 3)

    def num_triangles(self):
        return len(self.triangles) // 3

    def _corners(self):
        return (self.points[self.triangles[0::3]],
                self.points[self.triangles[1::3]],
                self.points[self.triangles[2::3]])

    def circumcenters(self):
        """Circumcenter of every triangle, as an ``(m, 2)`` array."""
        a, b, c = self._corners()
        dx = b[:, 0] - a[:, 0]
        dy = b[:, 1] - a[:, 1]
        ex = c[:, 0] - a[:, 0]
        ey = c[:, 1] - a[:, 1]

        bl = dx * dx + dy * dy
        cl = ex * ex + ey * ey
        d = dx * ey - dy * ex

        with np.errstate(divide="ignore", invalid="ignore"):
            x = a[:, 0] + (ey * bl - dy * cl) * 0.5 / d
            y = a[:, 1] + (dx * cl - ex * bl) * 0.5 / d
        return np.column_stack((x, y))

    def voronoi_edges(self):
        """Voronoi edges as a ``(k, 2, 2)`` array of circumcenter pairs.

        One edge per interior undirected edge of the triangulation.
        """
        e = np.arange(len(self.halfedges))
        inner = e < self.halfedges
        centers = self.circumcenters()
        return np.stack((centers[e[inner] // 3], centers[self.halfedges[inner] // 3]), axis=1)

    def edges_around_point(self, start):
        """Incoming half-edges around the point that half-edge ``start`` ends at."""
        halfedges = self.halfedges
        result = []
        incoming = start
        while True:
            result.append(incoming)
            incoming = int(halfedges[next_halfedge(incoming)])
            if incoming == -1 or incoming == start:
                break
        return result

    def _inedges(self):
        # for hull points the incoming hull edge starts a full rotation
        inedges = np.full(len(self.points), -1, dtype=np.int64)
        e = np.arange(len(self.triangles))
        ends = self.triangles[np.where(e % 3 == 2, e - 2, e + 1)]
        inedges[ends] = e
        hull_edges = e[self.halfedges == -1]
        inedges[ends[hull_edges]] = hull_edges
        return inedges

    def voronoi_cells(self):
        """One polygon of circumcenters per point.

        Cells of hull points are open polylines. Points left out of the
        triangulation as duplicates get an empty cell.
        """
        centers = self.circumcenters()
        cells = []
        for e in self._inedges().tolist():
            if e == -1:
                cells.append(np.zeros((0, 2)))
                continue
            cells.append(centers[[t // 3 for t in self.edges_around_point(e)]])
        return cells

    def area(self):
        """Total area of the triangles."""
        a, b, c = self._corners()
        doubled = (b[:, 1] - a[:, 1]) * (c[:, 0] - b[:, 0]) - (b[:, 0] - a[:, 0]) * (c[:, 1] - b[:, 1])
        return float(doubled.sum() / 2)

    def hull_area(self):
        return polygon_area(self.convex_hull)

    def validate(self, delaunay=True):
        """Check the triangulation and raise ``ValidationError`` on the first problem.

        Checks half-edge symmetry, triangle winding, that the hull area matches
        both the summed triangle area and an independently computed convex
        hull, and, if ``delaunay`` is set, that every interior edge is locally
        Delaunay.
        """
        triangles = self.triangles
        halfedges = self.halfedges
        n = len(halfedges)

        if len(triangles) % 3 or len(triangles) != n:
            raise ValidationError("Triangle and half-edge arrays do not match")

        e = np.arange(n)
        inner = halfedges != -1
        twins = halfedges[inner]
        if ((twins < 0) | (twins >= n)).any():
            raise ValidationError("Half-edge index out of range")
        if not np.array_equal(halfedges[twins], e[inner]):
            bad = int(e[inner][halfedges[twins] != e[inner]][0])
            raise ValidationError(f"Invalid half-edge connection at edge {bad}")

        pts = list(map(tuple, robust_coordinates(self.points).tolist()))
        tris = triangles.tolist()
        for t in range(0, len(tris), 3):
            if orient(pts[tris[t]], pts[tris[t + 1]], pts[tris[t + 2]]):
                raise ValidationError(f"Triangle {t // 3} is wound the wrong way")

        if n:
            hull_area = self.hull_area()
            reference = polygon_area(self.points[convex_hull(self.points)])
            mesh_area = self.area()
            if not (math.isclose(hull_area, reference, rel_tol=1e-9, abs_tol=1e-9)
                    and math.isclose(hull_area, mesh_area, rel_tol=1e-9, abs_tol=1e-9)):
                raise ValidationError(
                    f"Hull areas disagree: {hull_area}, {reference}, {mesh_area}"
                )

        if delaunay:
            twins = halfedges.tolist()
            for a, b in enumerate(twins):
                if b < a:
                    continue
                a0 = a - a % 3
                p = tris[b - b % 3 + (b + 2) % 3]
                if in_circle(pts[tris[a0]], pts[tris[a0 + 1]], pts[tris[a0 + 2]], pts[p]):
                    raise ValidationError(f"Edge {a} is not locally Delaunay")
