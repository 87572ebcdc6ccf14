"""
Segment Snapshot and Field Data Cache
=====================================

Bounded Context: Immutable document snapshots and cached field data.

A SegmentReader is one immutable snapshot of documents: a doc count, the
geo point field data per field name and an optional live-docs mask.
FieldDataCache memoises field data per (segment, field) so every filter
bound against the same segment shares one copy.

Thread Safety:
- SegmentReader is immutable (frozen dataclass, read-only field data)
- FieldDataCache uses threading.Lock for its dict
"""

import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional, Tuple

from geopoly_filter.errors import UnknownFieldError
from geopoly_filter.fielddata import AcceptedDocs, GeoPointFieldData
from geopoly_filter.logging import LogEvent, create_logger

logger = create_logger("fielddata")


@dataclass(frozen=True)
class SegmentReader:
    """
    Immutable document snapshot.

    Attributes:
        segment_id: Unique identifier of the snapshot
        max_doc: Number of documents, valid doc ids are [0, max_doc)
        fields: Mapping of field name to geo point field data
        live_docs: Optional mask of non-deleted documents
    """

    segment_id: str
    max_doc: int
    fields: Mapping[str, GeoPointFieldData] = field(default_factory=dict)
    live_docs: Optional[AcceptedDocs] = None

    def __post_init__(self):
        if not self.segment_id:
            raise ValueError("segment_id cannot be empty")
        if self.max_doc < 0:
            raise ValueError(f"max_doc must be >= 0, got {self.max_doc}")
        if self.live_docs is not None and len(self.live_docs) != self.max_doc:
            raise ValueError(
                f"live_docs covers {len(self.live_docs)} docs, "
                f"segment has {self.max_doc}"
            )
        object.__setattr__(self, "fields", dict(self.fields))

    def field_data(self, field_name: str) -> GeoPointFieldData:
        """
        Get field data for a field.

        Raises:
            UnknownFieldError: If the segment has no such field
        """
        try:
            return self.fields[field_name]
        except KeyError:
            raise UnknownFieldError(
                f"Segment '{self.segment_id}' has no field '{field_name}'. "
                f"Available: {sorted(self.fields)}"
            ) from None


class FieldDataCache:
    """
    Thread-safe cache of field data keyed by (segment_id, field_name).

    Usage:
        cache = FieldDataCache()
        field_data = cache.load(reader, "location")   # miss, loads
        field_data = cache.load(reader, "location")   # hit
        cache.evict(reader.segment_id)
    """

    def __init__(
        self,
        loader: Optional[Callable[[SegmentReader, str], GeoPointFieldData]] = None
    ):
        """
        Args:
            loader: Builds field data for a segment/field pair
                    (default: SegmentReader.field_data)
        """
        self._loader = loader or SegmentReader.field_data
        self._entries: Dict[Tuple[str, str], GeoPointFieldData] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def load(self, reader: SegmentReader, field_name: str) -> GeoPointFieldData:
        """
        Get field data for a segment, loading it on first access.

        Raises:
            UnknownFieldError: If the loader cannot find the field
        """
        key = (reader.segment_id, field_name)

        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self._hits += 1
        if cached is not None:
            logger.debug(
                event=LogEvent.FIELDDATA_CACHE_HIT,
                message="Field data served from cache",
                metadata={'segment_id': reader.segment_id, 'field': field_name}
            )
            return cached

        try:
            loaded = self._loader(reader, field_name)
        except UnknownFieldError as e:
            logger.error(
                event=LogEvent.UNKNOWN_FIELD_ERROR,
                message="Field missing from segment",
                metadata={'segment_id': reader.segment_id, 'field': field_name},
                exc_info=e
            )
            raise

        with self._lock:
            # Another thread may have loaded it meanwhile, keep the first copy
            current = self._entries.setdefault(key, loaded)
            self._misses += 1

        logger.debug(
            event=LogEvent.FIELDDATA_LOADED,
            message="Field data loaded",
            metadata={'segment_id': reader.segment_id, 'field': field_name}
        )
        return current

    def evict(self, segment_id: str) -> int:
        """
        Drop every cached field of a segment.

        Returns:
            Number of entries removed
        """
        with self._lock:
            stale = [key for key in self._entries if key[0] == segment_id]
            for key in stale:
                del self._entries[key]

        if stale:
            logger.debug(
                event=LogEvent.FIELDDATA_EVICTED,
                message="Field data evicted",
                metadata={'segment_id': segment_id, 'entries': len(stale)}
            )
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    @property
    def hits(self) -> int:
        with self._lock:
            return self._hits

    @property
    def misses(self) -> int:
        with self._lock:
            return self._misses

    def __contains__(self, key: Tuple[str, str]) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __repr__(self) -> str:
        return f"FieldDataCache(entries={len(self)}, hits={self.hits}, misses={self.misses})"
