"""
Storage Layer
=============

Bounded Context: Per-bucket point accumulation (stateful).

Components:
- BucketedPointStore: sparse ordinal -> set of Coordinate
"""

from geohull.storage.point_store import (
    BucketedPointStore,
    DEFAULT_GROWTH_FACTOR,
    DEFAULT_INITIAL_CAPACITY,
)

__all__ = [
    "BucketedPointStore",
    "DEFAULT_GROWTH_FACTOR",
    "DEFAULT_INITIAL_CAPACITY",
]
