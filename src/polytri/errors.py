class PolytriError(Exception):
    """Base class for errors raised by polytri"""


class InvalidHoleIndices(PolytriError, ValueError):
    """Hole offsets are not strictly increasing or fall outside the vertex range"""


class InvalidPolygon(PolytriError, ValueError):
    """Input cannot be read as a list of rings"""
