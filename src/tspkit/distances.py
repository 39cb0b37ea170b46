"""Edge weight functions defined by the TSPLIB format.

Every function returns an integer weight and reproduces the rounding rules of the TSPLIB 95
documentation exactly: ``nint(x) = floor(x + 0.5)``, never round-half-even.
"""
import math
from typing import Callable, Dict, Sequence

from tspkit.exceptions import UnsupportedEdgeWeightTypeError
from tspkit.formats import EdgeWeightType

# Constants of the GEO metric, kept as published
EARTH_RADIUS = 6378.388
PI = 3.141592

PointDistance = Callable[[Sequence[float], Sequence[float]], int]


def nint(x: float) -> int:
    """Round to the nearest integer, halves rounded up."""
    return int(math.floor(x + 0.5))


def rounded_euclidean_distance(x1: float, y1: float, x2: float, y2: float) -> int:
    """EUC_2D: Euclidean distance rounded to the nearest integer."""
    dx = x1 - x2
    dy = y1 - y2
    return nint(math.sqrt(dx * dx + dy * dy))


def rounded_euclidean_distance_3d(
    x1: float, y1: float, z1: float, x2: float, y2: float, z2: float
) -> int:
    """EUC_3D: Euclidean distance rounded to the nearest integer."""
    dx = x1 - x2
    dy = y1 - y2
    dz = z1 - z2
    return nint(math.sqrt(dx * dx + dy * dy + dz * dz))


def pseudo_euclidean_distance(x1: float, y1: float, x2: float, y2: float) -> int:
    """
    ATT: pseudo-Euclidean distance used by att48 and att532.

    The scaled distance is rounded to the nearest integer and bumped by one when rounding went
    down, which is not the same as taking its ceiling.
    """
    dx = x1 - x2
    dy = y1 - y2
    r = math.sqrt((dx * dx + dy * dy) / 10.0)
    t = nint(r)
    return t + 1 if t < r else t


def ceil_euclidean_distance(x1: float, y1: float, x2: float, y2: float) -> int:
    """CEIL_2D: Euclidean distance rounded up."""
    dx = x1 - x2
    dy = y1 - y2
    return int(math.ceil(math.sqrt(dx * dx + dy * dy)))


def rounded_manhattan_distance(x1: float, y1: float, x2: float, y2: float) -> int:
    """MAN_2D: L1 distance rounded to the nearest integer."""
    return nint(abs(x1 - x2) + abs(y1 - y2))


def rounded_manhattan_distance_3d(
    x1: float, y1: float, z1: float, x2: float, y2: float, z2: float
) -> int:
    """MAN_3D: L1 distance rounded to the nearest integer."""
    return nint(abs(x1 - x2) + abs(y1 - y2) + abs(z1 - z2))


def rounded_chebyshev_distance(x1: float, y1: float, x2: float, y2: float) -> int:
    """MAX_2D: each axis delta is rounded before taking the maximum."""
    return max(nint(abs(x1 - x2)), nint(abs(y1 - y2)))


def rounded_chebyshev_distance_3d(
    x1: float, y1: float, z1: float, x2: float, y2: float, z2: float
) -> int:
    """MAX_3D: each axis delta is rounded before taking the maximum."""
    return max(nint(abs(x1 - x2)), nint(abs(y1 - y2)), nint(abs(z1 - z2)))


def ddmm_to_radians(angle: float) -> float:
    """Convert an angle written as ``DDD.MM`` (degrees and minutes) to radians."""
    degrees = int(angle)
    minutes = angle - degrees
    return PI * (degrees + 5.0 * minutes / 3.0) / 180.0


def geographic_distance(x1: float, y1: float, x2: float, y2: float) -> int:
    """
    GEO: distance in km between two points on the idealized earth sphere.

    Args:
        x1: latitude of the first point, ``DDD.MM``
        y1: longitude of the first point, ``DDD.MM``
        x2: latitude of the second point, ``DDD.MM``
        y2: longitude of the second point, ``DDD.MM``

    Returns:
        The distance truncated to an integer.
    """
    lat1 = ddmm_to_radians(x1)
    lon1 = ddmm_to_radians(y1)
    lat2 = ddmm_to_radians(x2)
    lon2 = ddmm_to_radians(y2)

    q1 = math.cos(lon1 - lon2)
    q2 = math.cos(lat1 - lat2)
    q3 = math.cos(lat1 + lat2)
    # Clamp floating point noise that would push acos outside its domain
    cosine = max(-1.0, min(1.0, 0.5 * ((1.0 + q1) * q2 - (1.0 - q1) * q3)))
    return int(EARTH_RADIUS * math.acos(cosine) + 1.0)


def _planar(func) -> PointDistance:
    def distance(a: Sequence[float], b: Sequence[float]) -> int:
        return func(a[0], a[1], b[0], b[1])
    return distance


def _spatial(func) -> PointDistance:
    def distance(a: Sequence[float], b: Sequence[float]) -> int:
        return func(a[0], a[1], a[2], b[0], b[1], b[2])
    return distance


POINT_DISTANCES: Dict[EdgeWeightType, PointDistance] = {
    EdgeWeightType.EUC_2D: _planar(rounded_euclidean_distance),
    EdgeWeightType.EUC_3D: _spatial(rounded_euclidean_distance_3d),
    EdgeWeightType.MAX_2D: _planar(rounded_chebyshev_distance),
    EdgeWeightType.MAX_3D: _spatial(rounded_chebyshev_distance_3d),
    EdgeWeightType.MAN_2D: _planar(rounded_manhattan_distance),
    EdgeWeightType.MAN_3D: _spatial(rounded_manhattan_distance_3d),
    EdgeWeightType.CEIL_2D: _planar(ceil_euclidean_distance),
    EdgeWeightType.GEO: _planar(geographic_distance),
    EdgeWeightType.ATT: _planar(pseudo_euclidean_distance),
}

# Coordinate components each function reads
REQUIRED_COMPONENTS: Dict[EdgeWeightType, int] = {
    weight_type: 3 if weight_type.value.endswith("_3D") else 2
    for weight_type in POINT_DISTANCES
}


def point_distance(edge_weight_type: EdgeWeightType) -> PointDistance:
    """
    Return the function computing weights between two coordinate tuples.

    Raises:
        UnsupportedEdgeWeightTypeError: for types that are not computed from node coordinates
            (EXPLICIT, SPECIAL) or that have no implementation (XRAY1, XRAY2).
    """
    try:
        return POINT_DISTANCES[edge_weight_type]
    except KeyError:
        raise UnsupportedEdgeWeightTypeError(
            f"No coordinate based weight function for edge weight type {edge_weight_type.value}"
        ) from None
