"""Point sets shared by the test modules."""

import math

import numpy as np
import pytest


def uniform(n, seed=99):
    rng = np.random.default_rng(seed)
    return rng.random((n, 2))


def normal(n, seed=99):
    rng = np.random.default_rng(seed)
    return rng.standard_normal((n, 2))


def circle(n, seed=99):
    rng = np.random.default_rng(seed)
    a = rng.random(n) * math.pi * 2
    r = 1 + rng.standard_normal(n) * 0.1
    return np.column_stack((np.cos(a) * r, np.sin(a) * r))


def grid(side):
    ys, xs = np.mgrid[0:side, 0:side]
    return np.column_stack((xs.ravel(), ys.ravel())).astype(np.float64)


def perturbed_pairs(n, seed=99):
    """``n`` uniform points followed by a copy of each moved a few ulps."""
    rng = np.random.default_rng(seed)
    points = rng.random((n, 2))
    steps = rng.integers(1, 4, size=(n, 2))
    moved = points.copy()
    for _ in range(3):
        moved = np.where(steps > 0, np.nextafter(moved, 2.0), moved)
        steps -= 1
    return np.concatenate((points, moved))


@pytest.fixture
def unit_square():
    return [(0, 0), (1, 0), (1, 1), (0, 1)]


@pytest.fixture
def rhombus():
    """Tall rhombus whose Delaunay diagonal is the short one, 0-2."""
    return [(-1, 0), (0, -3), (1, 0), (0, 3)]
