"""
Filter Errors
=============

Bounded Context: Error taxonomy for polygon filtering.

All errors surface synchronously from the call that triggered them.
The hosting engine decides whether a per-document error aborts the pass.
"""


class GeoPolyFilterError(Exception):
    """Base class for all geopoly_filter errors"""
    pass


class InvalidPolygonError(GeoPolyFilterError, ValueError):
    """Raised when polygon vertices cannot form a ring (fewer than 3, non-numeric)"""
    pass


class InvalidFieldError(GeoPolyFilterError, ValueError):
    """Raised when the field name is empty or missing"""
    pass


class UnknownFieldError(GeoPolyFilterError, KeyError):
    """Raised when a segment holds no data for the requested field"""

    def __str__(self) -> str:
        # KeyError quotes its argument, keep the plain message
        return str(self.args[0]) if self.args else ""


class GeoValueRetrievalError(GeoPolyFilterError):
    """Raised when field data reports a value but cannot supply it"""

    def __init__(self, field_name: str, doc: int, reason: str):
        self.field_name = field_name
        self.doc = doc
        self.reason = reason
        super().__init__(
            f"Failed to read '{field_name}' for doc {doc}: {reason}"
        )


class DocumentOutOfRangeError(GeoPolyFilterError, IndexError):
    """Raised when a doc id falls outside [0, max_doc)"""

    def __init__(self, doc: int, max_doc: int):
        self.doc = doc
        self.max_doc = max_doc
        super().__init__(f"doc {doc} out of range [0, {max_doc})")
