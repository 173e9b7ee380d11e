"""The advancing front of the sweep.

The front is the boundary of the region triangulated so far, kept as a
circular doubly linked list. Nodes live in an arena addressed by the global
index of their point, so a node is just an ``int``. Removal is logical: the
node is flagged and unlinked, and its own ``prev``/``next`` keep pointing at
the neighbours it had, which lets callers keep walking from it.

A pseudo-angle hash around the sweep center gives an O(1) amortized starting
node for the visibility search.
"""

import math

from .errors import MalformedWalkError
from .predicates import orient


class AdvancingFront:

    def __init__(self, points, center):
        n = len(points)
        self.points = points
        self.center = center
        self.prev = [-1] * n
        self.next = [-1] * n
        # Half-edge of the boundary triangle on the edge node -> next
        self.tri = [-1] * n
        self.removed = [False] * n
        self.hash = [-1] * max(int(math.ceil(math.sqrt(n))), 1)
        self.head = -1

    def __iter__(self):
        if self.head == -1:
            return
        node = self.head
        while True:
            yield node
            node = self.next[node]
            if node == self.head:
                break

    def __len__(self):
        return sum(1 for _ in self)

    def hash_key(self, point):
        dx = point[0] - self.center[0]
        dy = point[1] - self.center[1]
        s = abs(dx) + abs(dy)
        if s == 0:
            return 0
        # pseudo-angle: monotonic in the real angle, no trigonometry
        p = 1 - dx / s
        if dy < 0:
            p = -p
        size = len(self.hash)
        return int(math.floor((2 + p) / 4 * size)) % size

    def hash_edge(self, node):
        self.hash[self.hash_key(self.points[node])] = node

    def start(self, node):
        self.prev[node] = node
        self.next[node] = node
        self.removed[node] = False
        self.head = node

    def insert_after(self, prev, node):
        nxt = self.next[prev]
        self.next[node] = nxt
        self.prev[node] = prev
        self.prev[nxt] = node
        self.next[prev] = node
        self.removed[node] = False

    def remove(self, node):
        prev = self.prev[node]
        nxt = self.next[node]
        self.next[prev] = nxt
        self.prev[nxt] = prev
        self.removed[node] = True
        if node == self.head:
            self.head = prev
        return prev

    def find_visible_edge(self, point, robust=True):
        """Find a front edge ``node -> next`` that ``point`` sees from outside.

        Returns ``(node, walk_back)``. ``walk_back`` is True when the hashed
        starting node was already visible, so visible edges may also lie
        behind it.
        """
        if not (math.isfinite(point[0]) and math.isfinite(point[1])):
            raise MalformedWalkError(f"Cannot locate non-finite point {tuple(point)} on the front")

        size = len(self.hash)
        key = self.hash_key(point)
        start = -1
        for _ in range(size):
            start = self.hash[key]
            if start != -1 and not self.removed[start]:
                break
            key += 1
            if key >= size:
                key = 0
        if start == -1 or self.removed[start]:
            start = self.head

        points = self.points
        nxt = self.next
        node = start
        while not orient(point, points[node], points[nxt[node]], robust):
            node = nxt[node]
            if node == start:
                raise MalformedWalkError(
                    f"No front edge is visible from {tuple(point)}; the input points are inconsistent"
                )
        return node, node == start

    def retrack(self, old, new):
        """Point the node tracking boundary half-edge ``old`` at ``new``."""
        node = self.head
        while True:
            if self.tri[node] == old:
                self.tri[node] = new
                return
            node = self.prev[node]
            if node == self.head:
                return
