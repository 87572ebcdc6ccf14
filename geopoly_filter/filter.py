"""
Polygon Filter Module
=====================

Binds a validated polygon and field name to segments.

A GeoPolygonFilter is built once per query and bound to each segment
with get_match_set(), which resolves field data through the shared
FieldDataCache and returns a lazy GeoPolygonMatchSet.
"""

from typing import Iterable, Optional, Tuple

from geopoly_zone import GeoPoint, GeoPolygon
from geopoly_zone.geometry.shapes import PointLike
from geopoly_filter.errors import InvalidFieldError, InvalidPolygonError
from geopoly_filter.fielddata import AcceptedDocs
from geopoly_filter.logging import LogEvent, create_logger
from geopoly_filter.match_set import GeoPolygonMatchSet
from geopoly_filter.segment import FieldDataCache, SegmentReader

logger = create_logger("filter")


class GeoPolygonFilter:
    """
    Filter documents whose geo field has a point inside a polygon.

    Attributes:
        polygon: Validated immutable polygon
        field_name: Geo point field to read
        field_data_cache: Shared cache of per-segment field data

    Raises (construction):
        InvalidPolygonError: Fewer than 3 vertices or non-numeric coordinates
        InvalidFieldError: Empty field name

    Usage:
        geo_filter = GeoPolygonFilter(
            points=[(0, 0), (0, 10), (10, 10), (10, 0)],
            field_name="location",
        )
        match_set = geo_filter.get_match_set(reader)
    """

    def __init__(
        self,
        points: Iterable[PointLike],
        field_name: str,
        field_data_cache: Optional[FieldDataCache] = None
    ):
        if not field_name or not isinstance(field_name, str):
            logger.error(
                event=LogEvent.INVALID_FIELD_ERROR,
                message="Rejected polygon filter field name",
                metadata={'field': field_name}
            )
            raise InvalidFieldError(f"field_name must be a non-empty string, got {field_name!r}")

        try:
            polygon = GeoPolygon.from_points(points)
        except (TypeError, ValueError) as e:
            logger.error(
                event=LogEvent.INVALID_POLYGON_ERROR,
                message="Rejected polygon filter vertices",
                metadata={'field': field_name},
                exc_info=e
            )
            raise InvalidPolygonError(str(e)) from e

        self._polygon = polygon
        self._field_name = field_name
        self._field_data_cache = (
            field_data_cache if field_data_cache is not None else FieldDataCache()
        )

        logger.debug(
            event=LogEvent.FILTER_CREATED,
            message="Polygon filter created",
            metadata={'field': field_name, 'vertices': len(polygon)}
        )

    @property
    def polygon(self) -> GeoPolygon:
        return self._polygon

    @property
    def points(self) -> Tuple[GeoPoint, ...]:
        return self._polygon.points

    @property
    def field_name(self) -> str:
        return self._field_name

    @property
    def field_data_cache(self) -> FieldDataCache:
        return self._field_data_cache

    def get_match_set(
        self,
        reader: SegmentReader,
        accepted_docs: Optional[AcceptedDocs] = None
    ) -> GeoPolygonMatchSet:
        """
        Bind the filter to one segment.

        Args:
            reader: Segment snapshot to read
            accepted_docs: Mask of docs to consider (default: reader.live_docs)

        Returns:
            Lazy match set over [0, reader.max_doc)

        Raises:
            UnknownFieldError: If the segment has no such field
        """
        field_data = self._field_data_cache.load(reader, self._field_name)
        if accepted_docs is None:
            accepted_docs = reader.live_docs

        match_set = GeoPolygonMatchSet(
            polygon=self._polygon,
            field_name=self._field_name,
            field_data=field_data,
            max_doc=reader.max_doc,
            accepted_docs=accepted_docs,
        )

        logger.debug(
            event=LogEvent.FILTER_BOUND,
            message="Polygon filter bound to segment",
            metadata={
                'field': self._field_name,
                'segment_id': reader.segment_id,
                'max_doc': reader.max_doc,
                'masked': accepted_docs is not None,
            }
        )
        return match_set

    def __eq__(self, other) -> bool:
        if not isinstance(other, GeoPolygonFilter):
            return NotImplemented
        return self._field_name == other._field_name and self._polygon == other._polygon

    def __hash__(self) -> int:
        return hash((self._field_name, self._polygon))

    def __str__(self) -> str:
        return f"GeoPolygonFilter({self._field_name}, {self._polygon})"

    def __repr__(self) -> str:
        return str(self)
