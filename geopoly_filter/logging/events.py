"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for structured logging.

Event Naming Convention:
    <component>.<action>

    component: filter, fielddata, config, error
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - filter.*: Filter binding to a segment
    - fielddata.*: Field data cache activity
    - config.*: Configuration loading
    - error.*: Error conditions
    """

    # ========== Filter Events ==========
    FILTER_CREATED = "filter.created"
    """Polygon filter constructed and validated."""

    FILTER_BOUND = "filter.bound"
    """Filter bound to a segment, match set produced."""

    # ========== Field Data Events ==========
    FIELDDATA_LOADED = "fielddata.loaded"
    """Field data loaded from a segment into the cache."""

    FIELDDATA_CACHE_HIT = "fielddata.cache_hit"
    """Field data served from the cache."""

    FIELDDATA_EVICTED = "fielddata.evicted"
    """Cached field data dropped for a segment."""

    # ========== Config Events ==========
    CONFIG_LOADED = "config.loaded"
    """Filter configuration loaded from YAML."""

    # ========== Error Events ==========
    INVALID_POLYGON_ERROR = "error.invalid_polygon"
    """Polygon rejected at construction."""

    INVALID_FIELD_ERROR = "error.invalid_field"
    """Field name rejected at construction."""

    UNKNOWN_FIELD_ERROR = "error.unknown_field"
    """Segment has no data for the requested field."""

    GEO_VALUE_RETRIEVAL_ERROR = "error.geo_value_retrieval"
    """Field data claimed a value it could not supply."""


FILTER_EVENTS = {
    LogEvent.FILTER_CREATED,
    LogEvent.FILTER_BOUND,
}

FIELDDATA_EVENTS = {
    LogEvent.FIELDDATA_LOADED,
    LogEvent.FIELDDATA_CACHE_HIT,
    LogEvent.FIELDDATA_EVICTED,
}

ERROR_EVENTS = {
    LogEvent.INVALID_POLYGON_ERROR,
    LogEvent.INVALID_FIELD_ERROR,
    LogEvent.UNKNOWN_FIELD_ERROR,
    LogEvent.GEO_VALUE_RETRIEVAL_ERROR,
}
