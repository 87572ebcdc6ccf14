"""
GeoPoly Filter
==============

Bounded Context: Polygon filtering of documents by geo point fields.

Architecture:

    geopoly_filter/
    ├── filter.py          # GeoPolygonFilter (validated polygon + field, binds segments)
    ├── match_set.py       # GeoPolygonMatchSet (lazy per-doc match), MatchSetIterator
    ├── fielddata.py       # GeoPointFieldData / AcceptedDocs protocols, in-memory impls
    ├── segment.py         # SegmentReader snapshot, FieldDataCache
    ├── config.py          # FilterConfig (YAML)
    ├── errors.py          # Error taxonomy
    └── logging/           # Structured JSON logging

Usage:

    from geopoly_filter import (
        GeoPolygonFilter, InMemoryGeoPointFieldData, FixedBitSet, SegmentReader,
    )

    field = InMemoryGeoPointFieldData.from_documents([(5, 5), None, [(10, 10), (1, 1)]])
    reader = SegmentReader(segment_id="s0", max_doc=3, fields={"location": field})

    geo_filter = GeoPolygonFilter([(0, 0), (0, 10), (10, 10), (10, 0)], "location")
    match_set = geo_filter.get_match_set(reader)

    match_set.matches(0)   # True
    list(match_set)        # [0, 2]
"""

from geopoly_filter.errors import (
    GeoPolyFilterError,
    InvalidPolygonError,
    InvalidFieldError,
    UnknownFieldError,
    GeoValueRetrievalError,
    DocumentOutOfRangeError,
)
from geopoly_filter.fielddata import (
    GeoPointFieldData,
    AcceptedDocs,
    InMemoryGeoPointFieldData,
    FixedBitSet,
)
from geopoly_filter.segment import SegmentReader, FieldDataCache
from geopoly_filter.match_set import (
    MatchSet,
    GeoPolygonMatchSet,
    MatchSetIterator,
    NO_MORE_DOCS,
)
from geopoly_filter.filter import GeoPolygonFilter
from geopoly_filter.config import FilterConfig

__all__ = [
    # Errors
    "GeoPolyFilterError",
    "InvalidPolygonError",
    "InvalidFieldError",
    "UnknownFieldError",
    "GeoValueRetrievalError",
    "DocumentOutOfRangeError",
    # Field data
    "GeoPointFieldData",
    "AcceptedDocs",
    "InMemoryGeoPointFieldData",
    "FixedBitSet",
    # Segments
    "SegmentReader",
    "FieldDataCache",
    # Matching
    "MatchSet",
    "GeoPolygonMatchSet",
    "MatchSetIterator",
    "NO_MORE_DOCS",
    "GeoPolygonFilter",
    # Config
    "FilterConfig",
]

__version__ = "1.0.0"
