from dataclasses import dataclass


@dataclass
class TriangulationOptions:
    """Per-call switches for the triangulator."""

    # Fall back to exact integer arithmetic when a predicate is too close to call
    robust: bool = True
    # Run Triangulation.validate() on the result before returning it
    validate: bool = False
