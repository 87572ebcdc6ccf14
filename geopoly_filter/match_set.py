"""
Match Set Module
================

Lazy per-document polygon matching over one segment.

Design:
- matches(doc) is a pure function of immutable construction parameters
- Nothing is materialised or memoised; every call recomputes
- The hosting engine drives traversal (MatchSetIterator, or its own loop)
- Thread-safe given thread-safe field data and accepted docs

Per-document policy:
    1. doc excluded by accepted docs -> False (field data not read)
    2. doc has no value              -> False
    3. multi-valued field            -> True on the first contained value
    4. single-valued field           -> containment of that value
"""

from typing import Iterator, Optional, Protocol, runtime_checkable

import numpy as np

from geopoly_zone import GeoPolygon
from geopoly_filter.errors import DocumentOutOfRangeError, GeoValueRetrievalError
from geopoly_filter.fielddata import AcceptedDocs, GeoPointFieldData
from geopoly_filter.logging import LogEvent, create_logger

logger = create_logger("match_set")

NO_MORE_DOCS = 2**31 - 1


@runtime_checkable
class MatchSet(Protocol):
    """Protocol the hosting search layer depends on."""

    @property
    def max_doc(self) -> int:
        ...

    @property
    def is_cacheable(self) -> bool:
        ...

    def matches(self, doc: int) -> bool:
        ...


class GeoPolygonMatchSet:
    """
    Documents with at least one geo point inside a polygon.

    Attributes:
        polygon: Immutable polygon ring
        field_name: Field the values were read from
        field_data: Per-document geo point values
        max_doc: Valid doc ids are [0, max_doc)
        accepted_docs: Optional mask, None accepts every doc

    Usage:
        match_set = GeoPolygonMatchSet(polygon, "location", field_data, max_doc=5)
        match_set.matches(3)
        for doc in match_set:
            ...
    """

    def __init__(
        self,
        polygon: GeoPolygon,
        field_name: str,
        field_data: GeoPointFieldData,
        max_doc: int,
        accepted_docs: Optional[AcceptedDocs] = None
    ):
        if max_doc < 0:
            raise ValueError(f"max_doc must be >= 0, got {max_doc}")
        if accepted_docs is not None and len(accepted_docs) != max_doc:
            raise ValueError(
                f"accepted_docs covers {len(accepted_docs)} docs, expected {max_doc}"
            )

        self._polygon = polygon
        self._field_name = field_name
        self._field_data = field_data
        self._max_doc = max_doc
        self._accepted_docs = accepted_docs

    @property
    def polygon(self) -> GeoPolygon:
        return self._polygon

    @property
    def field_name(self) -> str:
        return self._field_name

    @property
    def max_doc(self) -> int:
        return self._max_doc

    @property
    def accepted_docs(self) -> Optional[AcceptedDocs]:
        return self._accepted_docs

    @property
    def is_cacheable(self) -> bool:
        """Result depends only on the polygon and the snapshot's values."""
        return True

    def is_accepted(self, doc: int) -> bool:
        return self._accepted_docs is None or self._accepted_docs.is_accepted(doc)

    def matches(self, doc: int) -> bool:
        """
        Check if a document matches.

        Raises:
            DocumentOutOfRangeError: If doc is outside [0, max_doc)
            GeoValueRetrievalError: If field data fails to supply a value
        """
        if not 0 <= doc < self._max_doc:
            raise DocumentOutOfRangeError(doc, self._max_doc)
        if not self.is_accepted(doc):
            return False

        try:
            return self._match_doc(doc)
        except GeoValueRetrievalError:
            raise
        except Exception as e:
            logger.error(
                event=LogEvent.GEO_VALUE_RETRIEVAL_ERROR,
                message="Field data failed to supply a value",
                metadata={'field': self._field_name, 'doc': doc},
                exc_info=e
            )
            raise GeoValueRetrievalError(self._field_name, doc, str(e)) from e

    def _match_doc(self, doc: int) -> bool:
        field_data = self._field_data
        if not field_data.has_value(doc):
            return False

        polygon = self._polygon
        if field_data.is_multi_valued():
            for point in field_data.all_values(doc):
                if polygon.contains(point.lat, point.lon):
                    return True
            return False

        point = field_data.single_value(doc)
        return polygon.contains(point.lat, point.lon)

    def iterator(self) -> "MatchSetIterator":
        return MatchSetIterator(self)

    def __iter__(self) -> Iterator[int]:
        return iter(self.iterator())

    def to_mask(self) -> np.ndarray:
        """
        Evaluate every doc into a bool array of length max_doc.

        Opt-in and eager, matches() never calls it.
        """
        mask = np.zeros(self._max_doc, dtype=bool)
        for doc in self:
            mask[doc] = True
        return mask

    def count(self) -> int:
        return sum(1 for _ in self)

    def describe(self) -> str:
        return f"GeoPolygonMatchSet({self._field_name}, {self._polygon}, max_doc={self._max_doc})"

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return (
            f"GeoPolygonMatchSet(field={self._field_name!r}, "
            f"vertices={len(self._polygon)}, max_doc={self._max_doc}, "
            f"masked={self._accepted_docs is not None})"
        )


class MatchSetIterator:
    """
    Forward-only cursor over matching doc ids.

    Docs rejected by the accepted-docs mask are skipped before matches()
    is consulted. doc_id is -1 before the first call and NO_MORE_DOCS once
    exhausted.

    Usage:
        it = match_set.iterator()
        doc = it.next_doc()
        while doc != NO_MORE_DOCS:
            ...
            doc = it.next_doc()
    """

    def __init__(self, match_set: GeoPolygonMatchSet):
        self._match_set = match_set
        self._doc = -1
        # Masks exposing next_set_bit let the cursor jump over rejected runs
        self._next_accepted = getattr(match_set.accepted_docs, "next_set_bit", None)

    @property
    def doc_id(self) -> int:
        return self._doc

    def next_doc(self) -> int:
        if self._doc == NO_MORE_DOCS:
            return NO_MORE_DOCS
        return self.advance(self._doc + 1)

    def advance(self, target: int) -> int:
        """
        Move to the first matching doc >= target.

        Targets at or behind the current doc move forward by one instead.
        """
        if self._doc == NO_MORE_DOCS:
            return NO_MORE_DOCS

        match_set = self._match_set
        doc = max(target, self._doc + 1, 0)
        while doc < match_set.max_doc:
            if self._next_accepted is not None:
                doc = self._next_accepted(doc)
                if doc is None:
                    break
            elif not match_set.is_accepted(doc):
                doc += 1
                continue
            if match_set.matches(doc):
                self._doc = doc
                return doc
            doc += 1

        self._doc = NO_MORE_DOCS
        return NO_MORE_DOCS

    def __iter__(self) -> "MatchSetIterator":
        return self

    def __next__(self) -> int:
        doc = self.next_doc()
        if doc == NO_MORE_DOCS:
            raise StopIteration
        return doc
