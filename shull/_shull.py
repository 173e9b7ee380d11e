"""Sweep-hull Delaunay triangulation.

Points are inserted in order of distance from the circumcenter of a seed
triangle. Each new point lies outside the region triangulated so far, so it
is connected to the front edges it can see, and every new interior edge is
legalized by edge flips.

All predicates run on the point set remapped into ``[1, 2)`` so that their
exact fallback applies; the caller's coordinates are never modified.
"""

import math
from functools import cmp_to_key

import numpy as np
import structlog

from .errors import DegenerateInputError
from .front import AdvancingFront
from .geometry import circumcenter, circumradius
from .options import TriangulationOptions
from .point import Point
from .predicates import DISTANCE_ERR, distance_compare, in_circle, orient, robust_coordinates

logger = structlog.get_logger()


def calculate_shull_2d(points, options=None):
    """Triangulate an ``(n, 2)`` array of points.

    Returns ``(triangles, halfedges, hull)`` as ``int64`` arrays.
    """
    return Triangulator(points, options).triangulate()


class Triangulator:
    """Owns the working state of a single triangulation."""

    def __init__(self, points, options=None):
        self.points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        self.options = options or TriangulationOptions()
        self.robust = self.options.robust

        self.coords = []
        self.center = None
        self.front = None
        self.triangles = []
        self.halfedges = []
        self.triangles_len = 0
        self.duplicates = 0
        self.merged = 0
        self.near_ties = 0

    def triangulate(self):
        n = len(self.points)
        if n == 0:
            return (np.zeros(0, dtype=np.int64), np.zeros(0, dtype=np.int64),
                    np.zeros(0, dtype=np.int64))

        coords = robust_coordinates(self.points)
        self.coords = list(map(tuple, coords.tolist()))

        i0, i1, i2 = self._select_seeds(coords)
        self.center = circumcenter(self.coords[i0], self.coords[i1], self.coords[i2])

        ids = self._sort(coords)

        # the front starts as the seed triangle
        front = self.front = AdvancingFront(self.coords, self.center)
        front.start(i0)
        front.insert_after(i0, i1)
        front.insert_after(i1, i2)
        front.tri[i0] = 0
        front.tri[i1] = 1
        front.tri[i2] = 2
        for node in (i0, i1, i2):
            front.hash_edge(node)

        max_triangles = 2 * n - 5
        self.triangles = [0] * (max_triangles * 3)
        self.halfedges = [-1] * (max_triangles * 3)
        self.triangles_len = 0
        self._add_triangle(i0, i1, i2, -1, -1, -1)

        self._sweep(ids, i0, i1, i2)

        size = self.triangles_len
        triangles = np.array(self.triangles[:size], dtype=np.int64)
        halfedges = np.array(self.halfedges[:size], dtype=np.int64)
        hull = np.fromiter(front, dtype=np.int64)

        logger.info(
            "Triangulation complete",
            points=n,
            triangles=size // 3,
            hull=len(hull),
            duplicates=self.duplicates,
            near_ties=self.near_ties,
        )
        if self.merged:
            logger.warning(
                "Distinct points merged by the coordinate remap",
                merged=self.merged,
            )
        return triangles, halfedges, hull

    def _select_seeds(self, coords):
        pts = self.coords

        finite = np.isfinite(coords).all(axis=1)
        if not finite.any():
            raise DegenerateInputError("No Delaunay triangulation exists: no point has finite coordinates")
        lo = coords[finite].min(axis=0)
        hi = coords[finite].max(axis=0)
        mid = Point(*((lo + hi) / 2).tolist())

        # pick a seed point close to the midpoint
        i0 = 0
        min_dist = math.inf
        for i, p in enumerate(pts):
            d = mid.distance(p)
            if d < min_dist:
                i0 = i
                min_dist = d
        p0 = Point(*pts[i0])

        # find the point closest to the seed
        i1 = -1
        min_dist = math.inf
        for i, p in enumerate(pts):
            if i == i0:
                continue
            d = p0.distance(p)
            if 0 < d < min_dist:
                i1 = i
                min_dist = d
        if i1 == -1:
            raise DegenerateInputError("No Delaunay triangulation exists: fewer than two distinct points")
        p1 = pts[i1]

        # find the third point which forms the smallest circumcircle with the first two
        i2 = -1
        min_radius = math.inf
        for i, p in enumerate(pts):
            if i == i0 or i == i1:
                continue
            r = circumradius(p0, p1, p)
            if r < min_radius:
                i2 = i
                min_radius = r
        if i2 == -1:
            raise DegenerateInputError("No Delaunay triangulation exists: all points are collinear")

        # swap the order of the seed points so the seed triangle is not clockwise
        if orient(pts[i0], pts[i1], pts[i2], self.robust):
            i1, i2 = i2, i1
        return i0, i1, i2

    def _sort(self, coords):
        """Point indices by distance from the center, then x, then y."""
        cx, cy = self.center
        x = coords[:, 0]
        y = coords[:, 1]
        with np.errstate(invalid="ignore", over="ignore"):
            dists = (x - cx) ** 2 + (y - cy) ** 2
            order = np.lexsort((y, x, dists))
            d = dists[order]
            close = (np.diff(d) <= DISTANCE_ERR * (d[1:] + d[:-1])) & np.isfinite(d[1:])
        ids = order.tolist()

        # float distances this close may be misordered; settle them exactly
        close = np.flatnonzero(close)
        if len(close):
            key = cmp_to_key(self._compare)
            for run in np.split(close, np.flatnonzero(np.diff(close) > 1) + 1):
                lo = int(run[0])
                hi = int(run[-1]) + 2
                ids[lo:hi] = sorted(ids[lo:hi], key=key)
        self.near_ties = len(close)
        return ids

    def _compare(self, i, j):
        p = self.coords[i]
        q = self.coords[j]
        c = distance_compare(self.center, p, q, self.robust)
        if c:
            return c
        if p[0] != q[0]:
            return -1 if p[0] < q[0] else 1
        if p[1] != q[1]:
            return -1 if p[1] < q[1] else 1
        return 0

    def _sweep(self, ids, i0, i1, i2):
        pts = self.coords
        front = self.front
        nxt = front.next
        prv = front.prev
        tri = front.tri
        robust = self.robust

        pp = None
        prev_id = -1
        for i in ids:
            p = pts[i]

            # skip a point identical to the one before it
            if p == pp:
                self.duplicates += 1
                if not np.array_equal(self.points[i], self.points[prev_id]):
                    self.merged += 1
                continue
            pp = p
            prev_id = i

            if i == i0 or i == i1 or i == i2:
                continue

            e, walk_back = front.find_visible_edge(p, robust)

            # add the first triangle from the point
            t = self._add_triangle(e, i, nxt[e], -1, -1, tri[e])
            tri[e] = t
            front.insert_after(e, i)
            tri[i] = self._legalize(t + 2)

            # walk forward through the front, adding more triangles and flipping
            q = nxt[i]
            while orient(p, pts[q], pts[nxt[q]], robust):
                t = self._add_triangle(q, i, nxt[q], tri[i], -1, tri[q])
                tri[i] = self._legalize(t + 2)
                front.remove(q)
                q = nxt[q]

            if walk_back:
                # walk backward from the other side, adding more triangles and flipping
                q = prv[i]
                while orient(p, pts[prv[q]], pts[q], robust):
                    t = self._add_triangle(prv[q], i, q, -1, tri[q], tri[prv[q]])
                    self._legalize(t + 2)
                    tri[prv[q]] = t
                    q = front.remove(q)

            # save the two new edges in the hash table
            front.hash_edge(i)
            front.hash_edge(prv[i])

    def _add_triangle(self, i0, i1, i2, a, b, c):
        t = self.triangles_len
        triangles = self.triangles
        triangles[t] = i0
        triangles[t + 1] = i1
        triangles[t + 2] = i2
        self._link(t, a)
        self._link(t + 1, b)
        self._link(t + 2, c)
        self.triangles_len += 3
        return t

    def _link(self, a, b):
        self.halfedges[a] = b
        if b != -1:
            self.halfedges[b] = a

    def _legalize(self, a):
        """Flip edges from ``a`` outwards until they are locally Delaunay.

        Returns the half-edge that ends up on the front next to the new point.
        """
        triangles = self.triangles
        halfedges = self.halfedges
        pts = self.coords
        robust = self.robust
        stack = []

        while True:
            b = halfedges[a]
            a0 = a - a % 3
            ar = a0 + (a + 2) % 3

            if b == -1:
                # front edge, nothing to flip against
                if not stack:
                    break
                a = stack.pop()
                continue

            b0 = b - b % 3
            al = a0 + (a + 1) % 3
            bl = b0 + (b + 2) % 3

            p0 = triangles[ar]
            pr = triangles[a]
            pl = triangles[al]
            p1 = triangles[bl]

            if in_circle(pts[p0], pts[pr], pts[pl], pts[p1], robust):
                triangles[a] = p1
                triangles[b] = p0

                hbl = halfedges[bl]
                if hbl == -1:
                    # the flip moved a front edge from bl to a
                    self.front.retrack(bl, a)
                self._link(a, hbl)
                self._link(b, halfedges[ar])
                self._link(ar, bl)

                stack.append(b0 + (b + 1) % 3)
            else:
                if not stack:
                    break
                a = stack.pop()

        return ar
