"""
Geographic Shapes Module
========================

Pure geographic representations - NO state, NO side effects.

Design:
- Immutable shapes (frozen dataclass pattern)
- Vertices stored as a read-only float64 array
- Ray-casting containment delegated to geometry.containment
- Thread-safe by design (immutability)

Coordinates are always (lat, lon) in degrees.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple, Union

import numpy as np

from geopoly_zone.geometry.containment import point_in_polygon


@dataclass(frozen=True)
class GeoPoint:
    """
    Immutable geographic point.

    Attributes:
        lat: Latitude in degrees
        lon: Longitude in degrees
    """

    lat: float
    lon: float

    def __post_init__(self):
        object.__setattr__(self, "lat", float(self.lat))
        object.__setattr__(self, "lon", float(self.lon))

    def as_tuple(self) -> Tuple[float, float]:
        return (self.lat, self.lon)

    def __str__(self) -> str:
        return f"[{self.lat}, {self.lon}]"


PointLike = Union[GeoPoint, Tuple[float, float]]


@dataclass(frozen=True)
class GeoBounds:
    """Axis-aligned bounding box of a polygon ring."""

    min_lat: float
    min_lon: float
    max_lat: float
    max_lon: float

    def covers(self, lat: float, lon: float) -> bool:
        """Check if (lat, lon) lies inside or on the box."""
        return (
            self.min_lat <= lat <= self.max_lat
            and self.min_lon <= lon <= self.max_lon
        )


@dataclass(frozen=True)
class GeoPolygon:
    """
    Immutable polygon ring with ray-casting point-in-polygon.

    Design:
    - Vertices validated once at init, then frozen read-only
    - Vertex tuples cached for the scalar hot path
    - No simplicity or winding validation (degenerate rings are allowed)

    Attributes:
        vertices: Nx2 array of (lat, lon) polygon vertices, N >= 3
    """

    vertices: np.ndarray

    def __post_init__(self):
        """Validate vertices and freeze them."""
        if not isinstance(self.vertices, np.ndarray):
            raise TypeError(f"vertices must be np.ndarray, got {type(self.vertices)}")
        if self.vertices.ndim != 2 or self.vertices.shape[1] != 2:
            raise ValueError(f"vertices must be Nx2 array, got shape {self.vertices.shape}")
        if len(self.vertices) < 3:
            raise ValueError(f"Polygon must have at least 3 vertices, got {len(self.vertices)}")

        try:
            vertices = self.vertices.astype(np.float64)
        except (TypeError, ValueError) as e:
            raise ValueError(f"vertices must be numeric: {e}") from e
        if not np.isfinite(vertices).all():
            raise ValueError("vertices must contain only finite coordinates")

        vertices.flags.writeable = False
        object.__setattr__(self, "vertices", vertices)
        object.__setattr__(self, "_ring", tuple(map(tuple, vertices.tolist())))

    @classmethod
    def from_points(cls, points: Iterable[PointLike]) -> "GeoPolygon":
        """
        Build a polygon from (lat, lon) pairs or GeoPoints.

        Raises:
            ValueError: If a point is not a (lat, lon) pair
        """
        rows = []
        for point in points:
            if isinstance(point, GeoPoint):
                rows.append(point.as_tuple())
                continue
            try:
                lat, lon = point
            except (TypeError, ValueError) as e:
                raise ValueError(f"Expected (lat, lon) pair, got {point!r}") from e
            rows.append((lat, lon))

        return cls(vertices=np.array(rows, dtype=object).reshape(-1, 2))

    @property
    def points(self) -> Tuple[GeoPoint, ...]:
        return tuple(GeoPoint(lat, lon) for lat, lon in self._ring)

    @property
    def bounds(self) -> GeoBounds:
        mins = self.vertices.min(axis=0)
        maxs = self.vertices.max(axis=0)
        return GeoBounds(
            min_lat=float(mins[0]),
            min_lon=float(mins[1]),
            max_lat=float(maxs[0]),
            max_lon=float(maxs[1]),
        )

    def contains(self, lat: float, lon: float) -> bool:
        """
        Check if (lat, lon) is inside the polygon (O(N) in vertices).

        NaN coordinates are never inside.
        """
        return point_in_polygon(self._ring, lat, lon)

    def contains_point(self, point: GeoPoint) -> bool:
        return point_in_polygon(self._ring, point.lat, point.lon)

    def reversed(self) -> "GeoPolygon":
        """Same ring walked in the opposite direction."""
        return GeoPolygon(vertices=self.vertices[::-1].copy())

    def translated(self, d_lat: float, d_lon: float) -> "GeoPolygon":
        """Same ring shifted by a constant offset."""
        return GeoPolygon(vertices=self.vertices + np.array([d_lat, d_lon]))

    def __len__(self) -> int:
        return len(self._ring)

    def __eq__(self, other) -> bool:
        if not isinstance(other, GeoPolygon):
            return NotImplemented
        return self._ring == other._ring

    def __hash__(self) -> int:
        return hash(self._ring)

    def __str__(self) -> str:
        return "[" + ", ".join(f"[{lat}, {lon}]" for lat, lon in self._ring) + "]"

    def __repr__(self) -> str:
        return f"GeoPolygon(vertices={len(self._ring)}, bounds={self.bounds})"
