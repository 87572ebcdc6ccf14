"""
Structured Logging for GeoPoly Filter
=====================================

Bounded Context: Observability

JSON-structured logging for filter binding, field data and errors.

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function

Example:
    >>> from geopoly_filter.logging import StructuredLogger, LogEvent
    >>> logger = StructuredLogger(component="filter")
    >>> logger.info(
    ...     event=LogEvent.FILTER_BOUND,
    ...     message="Bound polygon filter",
    ...     metadata={'field': 'location', 'max_doc': 1000}
    ... )
"""

from .events import LogEvent
from .structured import StructuredLogger, JSONFormatter, create_logger

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'JSONFormatter',
    'create_logger',
]
