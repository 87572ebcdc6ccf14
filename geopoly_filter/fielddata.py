"""
Field Data Module
=================

Bounded Context: Per-document geo point values and accepted-docs masks.

The match set depends on these Protocols only. The in-memory
implementations below are column-oriented, numpy-backed and read-only,
so they are safe for concurrent reads.

Column layout (InMemoryGeoPointFieldData):

    lats        = [ 1.0, 10.0, 2.0, 3.0 ]
    lons        = [ 1.0, 10.0, 2.0, 3.0 ]
    doc_offsets = [ 0, 2, 2, 4 ]

    doc 0 -> values 0:2 (two points)
    doc 1 -> values 2:2 (no value)
    doc 2 -> values 2:4 (two points)
"""

from numbers import Real
from typing import Iterable, List, Optional, Protocol, Sequence, runtime_checkable

import numpy as np

from geopoly_zone import GeoPoint


@runtime_checkable
class GeoPointFieldData(Protocol):
    """Protocol for per-document geo point values of one field."""

    def has_value(self, doc: int) -> bool:
        """Check if the document has at least one value."""
        ...

    def is_multi_valued(self) -> bool:
        """Check if any document of the field has more than one value."""
        ...

    def single_value(self, doc: int) -> GeoPoint:
        """Return the (first) value of a document that has one."""
        ...

    def all_values(self, doc: int) -> Sequence[GeoPoint]:
        """Return every value of a document (empty if none)."""
        ...


@runtime_checkable
class AcceptedDocs(Protocol):
    """Protocol for an accepted-docs bit mask over [0, len)."""

    def is_accepted(self, doc: int) -> bool:
        ...

    def __len__(self) -> int:
        ...


def _is_pair(value) -> bool:
    return (
        isinstance(value, (tuple, list, np.ndarray))
        and len(value) == 2
        and all(isinstance(v, (Real, np.number)) for v in value)
    )


def _to_point(value) -> GeoPoint:
    if isinstance(value, GeoPoint):
        return value
    if _is_pair(value):
        return GeoPoint(value[0], value[1])
    raise ValueError(f"Expected GeoPoint or (lat, lon) pair, got {value!r}")


class InMemoryGeoPointFieldData:
    """
    Immutable column store of geo points for one field of one segment.

    Attributes:
        lats: Flat float64 latitudes of every value
        lons: Flat float64 longitudes of every value
        doc_offsets: int64 offsets, length max_doc + 1
    """

    def __init__(self, lats: np.ndarray, lons: np.ndarray, doc_offsets: np.ndarray):
        lats = np.asarray(lats, dtype=np.float64)
        lons = np.asarray(lons, dtype=np.float64)
        doc_offsets = np.asarray(doc_offsets, dtype=np.int64)

        if lats.ndim != 1 or lons.ndim != 1 or lats.shape != lons.shape:
            raise ValueError(
                f"lats and lons must be 1-D arrays of equal length, "
                f"got {lats.shape} and {lons.shape}"
            )
        if doc_offsets.ndim != 1 or len(doc_offsets) == 0:
            raise ValueError("doc_offsets must be a non-empty 1-D array")
        if doc_offsets[0] != 0 or doc_offsets[-1] != len(lats):
            raise ValueError(
                f"doc_offsets must start at 0 and end at {len(lats)}, "
                f"got {doc_offsets[0]}..{doc_offsets[-1]}"
            )
        if (np.diff(doc_offsets) < 0).any():
            raise ValueError("doc_offsets must be non-decreasing")

        for array in (lats, lons, doc_offsets):
            array.flags.writeable = False

        self.lats = lats
        self.lons = lons
        self.doc_offsets = doc_offsets
        self._multi_valued = bool((np.diff(doc_offsets) > 1).any())

    @classmethod
    def from_documents(cls, documents: Iterable) -> "InMemoryGeoPointFieldData":
        """
        Build field data from per-document values.

        Each entry is one of:
        - None or [] : no value
        - GeoPoint or (lat, lon) : one value
        - list of GeoPoint / (lat, lon) : many values

        Example:
            >>> field = InMemoryGeoPointFieldData.from_documents([
            ...     (5, 5),
            ...     None,
            ...     [(10, 10), (1, 1)],
            ... ])
        """
        lats: List[float] = []
        lons: List[float] = []
        offsets = [0]

        for value in documents:
            if value is None:
                points = []
            elif isinstance(value, GeoPoint) or _is_pair(value):
                points = [_to_point(value)]
            else:
                points = [_to_point(v) for v in value]

            for point in points:
                lats.append(point.lat)
                lons.append(point.lon)
            offsets.append(len(lats))

        return cls(
            lats=np.array(lats, dtype=np.float64),
            lons=np.array(lons, dtype=np.float64),
            doc_offsets=np.array(offsets, dtype=np.int64),
        )

    @property
    def max_doc(self) -> int:
        return len(self.doc_offsets) - 1

    def _span(self, doc: int):
        if not 0 <= doc < self.max_doc:
            raise IndexError(f"doc {doc} out of range [0, {self.max_doc})")
        return int(self.doc_offsets[doc]), int(self.doc_offsets[doc + 1])

    def has_value(self, doc: int) -> bool:
        start, end = self._span(doc)
        return end > start

    def value_count(self, doc: int) -> int:
        start, end = self._span(doc)
        return end - start

    def is_multi_valued(self) -> bool:
        return self._multi_valued

    def single_value(self, doc: int) -> GeoPoint:
        start, end = self._span(doc)
        if end == start:
            raise IndexError(f"doc {doc} has no value")
        return GeoPoint(self.lats[start], self.lons[start])

    def all_values(self, doc: int) -> List[GeoPoint]:
        start, end = self._span(doc)
        return [GeoPoint(self.lats[k], self.lons[k]) for k in range(start, end)]

    def __len__(self) -> int:
        return self.max_doc

    def __repr__(self) -> str:
        return (
            f"InMemoryGeoPointFieldData(max_doc={self.max_doc}, "
            f"values={len(self.lats)}, multi_valued={self._multi_valued})"
        )


def _checked_indices(max_doc: int, docs: Iterable[int]) -> List[int]:
    # numpy would wrap negative ids around to the end of the mask
    indices = [int(doc) for doc in docs]
    for doc in indices:
        if not 0 <= doc < max_doc:
            raise IndexError(f"doc {doc} out of range [0, {max_doc})")
    return indices


class FixedBitSet:
    """
    Immutable accepted-docs mask backed by a numpy bool array.

    Usage:
        live = FixedBitSet.excluding(max_doc=5, excluded=[2])
        live.is_accepted(2)  # False
    """

    def __init__(self, bits: np.ndarray):
        bits = np.array(bits, dtype=bool)
        if bits.ndim != 1:
            raise ValueError(f"bits must be a 1-D array, got shape {bits.shape}")
        bits.flags.writeable = False
        self.bits = bits

    @classmethod
    def all(cls, max_doc: int) -> "FixedBitSet":
        return cls(np.ones(max_doc, dtype=bool))

    @classmethod
    def from_indices(cls, max_doc: int, accepted: Iterable[int]) -> "FixedBitSet":
        bits = np.zeros(max_doc, dtype=bool)
        bits[_checked_indices(max_doc, accepted)] = True
        return cls(bits)

    @classmethod
    def excluding(cls, max_doc: int, excluded: Iterable[int]) -> "FixedBitSet":
        bits = np.ones(max_doc, dtype=bool)
        bits[_checked_indices(max_doc, excluded)] = False
        return cls(bits)

    def is_accepted(self, doc: int) -> bool:
        if not 0 <= doc < len(self.bits):
            raise IndexError(f"doc {doc} out of range [0, {len(self.bits)})")
        return bool(self.bits[doc])

    def cardinality(self) -> int:
        return int(self.bits.sum())

    def next_set_bit(self, start: int) -> Optional[int]:
        """First accepted doc >= start, or None."""
        if start >= len(self.bits):
            return None
        hits = np.flatnonzero(self.bits[max(start, 0):])
        if len(hits) == 0:
            return None
        return int(hits[0]) + max(start, 0)

    def __len__(self) -> int:
        return len(self.bits)

    def __repr__(self) -> str:
        return f"FixedBitSet(len={len(self.bits)}, accepted={self.cardinality()})"
