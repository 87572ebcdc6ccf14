"""
Point Containment Module
========================

Stateless even-odd test for a point against a polygon ring.

Design:
- Pure function (no state, no allocation beyond the loop)
- Ray cast along the query longitude, counting latitude crossings
- Exact float64 comparisons, no epsilon
- Winding-direction agnostic

Boundary behaviour:
    The crossing predicate pairs a strict ``<`` with an inclusive ``>=``, so
    classification is half-open. Points on the low-latitude or low-longitude
    sides of a ring fall outside, points on the high sides fall inside.

Vertical edges:
    An edge whose endpoints share a longitude cannot satisfy the crossing
    predicate, so the interpolation never divides by zero.
"""

from typing import Sequence, Tuple

Vertex = Tuple[float, float]


def point_in_polygon(vertices: Sequence[Vertex], lat: float, lon: float) -> bool:
    """
    Check if (lat, lon) lies inside the ring described by vertices.

    Args:
        vertices: Ordered ring of (lat, lon) pairs, implicitly closed
        lat: Query latitude in degrees
        lon: Query longitude in degrees

    Returns:
        True if an odd number of edges cross below the query point
    """
    inside = False
    j = len(vertices) - 1

    for i in range(len(vertices)):
        lat_i, lon_i = vertices[i]
        lat_j, lon_j = vertices[j]

        if (lon_i < lon <= lon_j) or (lon_j < lon <= lon_i):
            crossing_lat = lat_i + (lon - lon_i) / (lon_j - lon_i) * (lat_j - lat_i)
            if crossing_lat < lat:
                inside = not inside

        j = i

    return inside
