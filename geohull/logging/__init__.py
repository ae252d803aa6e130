"""
Structured Logging for geohull
==============================

Bounded Context: Observability

JSON-structured logging attached at the aggregation boundary (factory,
build, release, pipeline). Never called from the per-document collect loop.

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function
    level_from_name: "INFO" -> logging.INFO
"""

from .events import LogEvent
from .structured import StructuredLogger, create_logger, level_from_name

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'create_logger',
    'level_from_name',
]
