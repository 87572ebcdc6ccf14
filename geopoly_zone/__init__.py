"""
GeoPoly Zone
============

Bounded Context: Geographic polygon geometry.

Architecture:

    geopoly_zone/
    └── geometry/          # Pure geometry (immutable, stateless)
        ├── shapes.py      # GeoPoint, GeoBounds, GeoPolygon
        └── containment.py # point_in_polygon (even-odd ray casting)

Usage:

    from geopoly_zone import GeoPolygon

    square = GeoPolygon.from_points([(0, 0), (0, 10), (10, 10), (10, 0)])
    square.contains(5, 5)    # True
    square.contains(15, 15)  # False
"""

from geopoly_zone.geometry.shapes import GeoPoint, GeoBounds, GeoPolygon
from geopoly_zone.geometry.containment import point_in_polygon

__all__ = [
    "GeoPoint",
    "GeoBounds",
    "GeoPolygon",
    "point_in_polygon",
]

__version__ = "1.0.0"
