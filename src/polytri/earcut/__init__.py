from ..errors import InvalidHoleIndices
from .diagnostics import deviation, flatten, signed_area
from .triangulator import HASH_THRESHOLD, Pass, earcut

__all__ = [
    "HASH_THRESHOLD",
    "Pass",
    "deviation",
    "earcut",
    "flatten",
    "signed_area",
    "validate_hole_indices",
]


def validate_hole_indices(hole_indices, num_vertices: int) -> None:
    """Check the precondition ``earcut`` leaves to its callers.

    Hole offsets must be strictly increasing vertex ordinals, each inside
    ``(0, num_vertices)``.
    """
    last = 0
    for h in hole_indices:
        if h <= last:
            raise InvalidHoleIndices(f"hole offset {h} does not follow {last}")
        if h >= num_vertices:
            raise InvalidHoleIndices(f"hole offset {h} is outside {num_vertices} vertices")
        last = h
