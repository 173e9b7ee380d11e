import math
from typing import NamedTuple


class Point(NamedTuple):
    x: float
    y: float

    def squared_distance(self, other) -> float:
        dx = self.x - other[0]
        dy = self.y - other[1]
        return dx * dx + dy * dy

    def distance(self, other) -> float:
        return math.hypot(self.x - other[0], self.y - other[1])

    def subtract(self, other) -> "Point":
        return Point(self.x - other[0], self.y - other[1])
