"""
Geometry Layer
==============

Bounded Context: Pure geographic shapes and containment queries.

Responsibilities:
- Shape representation (immutable)
- Point-in-polygon tests
- NO state, NO document access, NO logging

Design Philosophy:
- Pure functions where possible
- Immutable data structures
- Fail-fast validation
- Zero side effects
"""

from geopoly_zone.geometry.shapes import GeoPoint, GeoBounds, GeoPolygon
from geopoly_zone.geometry.containment import point_in_polygon

__all__ = [
    "GeoPoint",
    "GeoBounds",
    "GeoPolygon",
    "point_in_polygon",
]
