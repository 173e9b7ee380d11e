import numpy as np

from shull import _shull
from shull.errors import (DegenerateInputError, MalformedWalkError, TriangulationError,
                          ValidationError)
from shull.options import TriangulationOptions
from shull.point import Point
from shull.triangulation import Triangulation

__all__ = ['Delaunay', 'triangulate', 'Triangulation', 'TriangulationOptions', 'Point',
           'TriangulationError', 'DegenerateInputError', 'MalformedWalkError',
           'ValidationError']


class Delaunay(Triangulation):
    def __init__(self, points, options=None):
        points = np.asarray(points, dtype=np.float64)
        if points.size == 0:
            points = points.reshape(0, 2)
        if points.ndim != 2 or points.shape[1] != 2:
            raise ValueError(f"Expected points of shape (n, 2), got {points.shape}")
        options = options or TriangulationOptions()

        triangles, halfedges, hull = _shull.calculate_shull_2d(points, options)
        super().__init__(points, triangles, halfedges, hull)
        if options.validate:
            self.validate()


def triangulate(points, options=None):
    """Delaunay triangulation of a sequence of ``(x, y)`` points."""
    return Delaunay(points, options)
