class TriangulationError(Exception):
    """Base class for errors raised while building or checking a triangulation."""


class DegenerateInputError(TriangulationError):
    """Fewer than three distinct, non-collinear points were given."""


class MalformedWalkError(TriangulationError):
    """The advancing front could not be walked to an edge visible from a point.

    Usually caused by non-finite coordinates.
    """


class ValidationError(TriangulationError):
    """A finished triangulation failed one of its self-checks."""
