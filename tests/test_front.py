"""Tests for the advancing front."""

import math

import pytest

from shull.errors import MalformedWalkError
from shull.front import AdvancingFront

# a seed triangle in emitted winding, its circumcenter, and two spare points
POINTS = [(1.0, 1.0), (1.0, 1.5), (1.5, 1.0), (1.6, 1.6), (1.1, 1.1)]
CENTER = (1.25, 1.25)


@pytest.fixture
def front():
    front = AdvancingFront(POINTS, CENTER)
    front.start(0)
    front.insert_after(0, 1)
    front.insert_after(1, 2)
    for node in (0, 1, 2):
        front.hash_edge(node)
    return front


class TestLinkedList:
    """Test circular list maintenance."""

    def test_iteration_order(self, front):
        assert list(front) == [0, 1, 2]
        assert len(front) == 3

    def test_insert_after(self, front):
        front.insert_after(1, 3)
        assert list(front) == [0, 1, 3, 2]
        assert front.prev[2] == 3
        assert front.next[1] == 3

    def test_remove(self, front):
        assert front.remove(1) == 0
        assert list(front) == [0, 2]
        assert front.removed[1]
        # removed nodes keep their own links so walks can continue from them
        assert front.next[1] == 2
        assert front.prev[1] == 0

    def test_remove_head(self, front):
        front.remove(0)
        assert front.head == 2
        assert list(front) == [2, 1]


class TestHash:
    """Test the pseudo-angle hash."""

    def test_keys_in_range(self, front):
        size = len(front.hash)
        for angle in range(0, 360, 5):
            a = math.radians(angle)
            point = (CENTER[0] + math.cos(a) * 0.1, CENTER[1] + math.sin(a) * 0.1)
            assert 0 <= front.hash_key(point) < size

    def test_left_of_center(self, front):
        """The pseudo-angle wraps around instead of running past the last bucket."""
        assert front.hash_key((1.0, 1.25)) == 0

    def test_center(self, front):
        assert front.hash_key(CENTER) == 0

    def test_monotonic_in_angle(self):
        front = AdvancingFront([(1.0, 1.0)] * 100, CENTER)
        keys = []
        for angle in range(-179, 180, 2):
            a = math.radians(angle)
            keys.append(front.hash_key((CENTER[0] + math.cos(a) * 0.1,
                                        CENTER[1] + math.sin(a) * 0.1)))
        assert keys == sorted(keys)

    def test_hash_edge(self, front):
        assert front.hash == [0, 2, 1]


class TestFindVisibleEdge:
    """Test locating a visible front edge."""

    def test_visible_edge(self, front):
        node, walk_back = front.find_visible_edge(POINTS[3])
        assert node == 1
        assert not walk_back

    def test_start_from_removed_bucket(self, front):
        front.remove(2)
        node, walk_back = front.find_visible_edge(POINTS[3])
        assert node == 1
        assert walk_back

    def test_point_inside_raises(self, front):
        with pytest.raises(MalformedWalkError):
            front.find_visible_edge(POINTS[4])

    @pytest.mark.parametrize("point", [(math.nan, 1.5), (1.5, math.inf), (-math.inf, 1.0)])
    def test_non_finite_raises(self, front, point):
        with pytest.raises(MalformedWalkError):
            front.find_visible_edge(point)


class TestRetrack:
    """Test moving a tracked boundary half-edge."""

    def test_retrack(self, front):
        front.tri[0] = 0
        front.tri[1] = 4
        front.tri[2] = 2
        front.retrack(4, 7)
        assert front.tri == [0, 7, 2, -1, -1]

    def test_retrack_missing(self, front):
        front.tri[:3] = [0, 1, 2]
        front.retrack(9, 7)
        assert front.tri[:3] == [0, 1, 2]
