"""Tests for plain geometry helpers."""

import math

import numpy as np

from shull.geometry import area, circumcenter, circumradius, convex_hull, polygon_area

from conftest import uniform


class TestTriangleGeometry:
    """Test per-triangle measures."""

    def test_area_sign(self):
        assert area((0, 0), (0, 1), (1, 0)) == 1
        assert area((0, 0), (1, 0), (0, 1)) == -1

    def test_circumradius(self):
        assert math.isclose(circumradius((0, 0), (2, 0), (0, 2)), math.sqrt(2))

    def test_circumradius_degenerate(self):
        """Degenerate triples report an infinite radius instead of dividing by zero."""
        assert circumradius((0, 0), (1, 1), (2, 2)) == math.inf
        assert circumradius((0, 0), (0, 0), (1, 0)) == math.inf
        assert circumradius((0, 0), (1, 0), (0, 0)) == math.inf
        assert circumradius((1, 1), (1, 1), (1, 1)) == math.inf

    def test_circumcenter(self):
        assert circumcenter((0, 0), (2, 0), (0, 2)) == (1, 1)


class TestPolygonArea:
    """Test shoelace area."""

    def test_square(self):
        square = [(0, 0), (0, 1), (1, 1), (1, 0)]
        assert polygon_area(square) == 1
        assert polygon_area(square[::-1]) == -1

    def test_degenerate(self):
        assert polygon_area([]) == 0
        assert polygon_area([(0, 0), (1, 1)]) == 0


class TestConvexHull:
    """Test the standalone monotone chain hull."""

    def test_square_with_inner_points(self):
        points = [(0, 0), (1, 0), (1, 1), (0, 1), (0.5, 0.5), (0.5, 0), (0.25, 0.75)]
        hull = convex_hull(points)
        assert sorted(hull.tolist()) == [0, 1, 2, 3]
        assert polygon_area(np.asarray(points)[hull]) == 1

    def test_random_points_inside_hull(self):
        points = uniform(300)
        polygon = points[convex_hull(points)]
        xy = (points[:, 0], points[:, 1])
        # every point is on the inner side of every hull edge
        for a, b in zip(polygon, np.roll(polygon, -1, axis=0)):
            assert np.all(area(a, b, xy) >= -1e-12)
        assert polygon_area(polygon) > 0

    def test_collinear(self):
        hull = convex_hull([(0, 0), (1, 1), (2, 2), (3, 3)])
        assert sorted(hull.tolist()) == [0, 3]

    def test_non_finite_ignored(self):
        hull = convex_hull([(0, 0), (1, 0), (0, 1), (math.inf, 0), (math.nan, 0)])
        assert sorted(hull.tolist()) == [0, 1, 2]
