"""
Result Schemas
==============

Bounded Context: Data structures handed to downstream serializers.

Public API
----------
    ConvexHullResult: Named per-bucket result
"""

from .result import ConvexHullResult

__all__ = [
    'ConvexHullResult',
]
