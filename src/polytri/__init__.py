from .earcut import deviation, earcut, flatten
from .errors import InvalidHoleIndices, InvalidPolygon, PolytriError

__version__ = "0.1.0"
