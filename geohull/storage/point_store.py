"""
Bucketed Point Store Module
===========================

Stateful, sparse accumulator of distinct coordinates per bucket ordinal.

Design:
- List of optional slots indexed by bucket ordinal (arena + index)
- Slots start as None; a set is created on first insert only
- Geometric growth, all-or-nothing (new list built before swap)
- Reads hand out frozen copies; the store is the sole owner of its sets
- NOT thread-safe: one writer per store (caller must synchronize)
"""

import math
from typing import FrozenSet, Iterable, Iterator, List, Optional, Set

from geohull.geometry.coordinate import Coordinate

DEFAULT_INITIAL_CAPACITY = 10
DEFAULT_GROWTH_FACTOR = 1.125


class BucketedPointStore:
    """
    Sparse, growable mapping from bucket ordinal to a set of coordinates.

    Invariant:
        slot i is None (never collected) or a set with at least one member

    Usage:
        store = BucketedPointStore()

        # Collection phase
        store.collect(3, Coordinate(2.0, 3.0))
        store.collect_many(7, [Coordinate(0.0, 0.0), Coordinate(1.0, 1.0)])

        # Build phase (read-only)
        points = store.get(3)   # frozenset or None

        # End of execution
        store.release()
    """

    def __init__(
        self,
        initial_capacity: int = DEFAULT_INITIAL_CAPACITY,
        growth_factor: float = DEFAULT_GROWTH_FACTOR
    ):
        """
        Initialize an empty store.

        Args:
            initial_capacity: Number of addressable slots up front
            growth_factor: Over-size factor applied when growing (> 1.0)

        Raises:
            ValueError: If initial_capacity < 0 or growth_factor <= 1.0
        """
        if initial_capacity < 0:
            raise ValueError(
                f"initial_capacity must be >= 0, got {initial_capacity}"
            )
        if not growth_factor > 1.0:
            raise ValueError(
                f"growth_factor must be > 1.0, got {growth_factor}"
            )

        self.growth_factor = growth_factor
        self._slots: List[Optional[Set[Coordinate]]] = [None] * initial_capacity
        self._populated = 0

    @property
    def capacity(self) -> int:
        """Number of addressable bucket ordinals."""
        return len(self._slots)

    def ensure_capacity(self, min_size: int) -> None:
        """
        Make ordinals 0..min_size-1 addressable.

        Existing slots are kept; new slots are None. The replacement list is
        fully built before it is swapped in, so a MemoryError leaves the
        store exactly as it was.

        Args:
            min_size: Minimum number of addressable slots

        Raises:
            ValueError: If min_size is negative
        """
        if min_size < 0:
            raise ValueError(f"min_size must be >= 0, got {min_size}")

        size = len(self._slots)
        if min_size <= size:
            return

        new_size = max(min_size, size + 1, math.ceil(size * self.growth_factor))
        grown = self._slots + [None] * (new_size - size)
        self._slots = grown

    def collect(self, bucket_id: int, coordinate: Coordinate) -> None:
        """
        Insert one coordinate into a bucket's set.

        Exact duplicates are no-ops.

        Raises:
            ValueError: If bucket_id is negative
        """
        self._set_for(bucket_id).add(coordinate)

    def collect_many(self, bucket_id: int, coordinates: Iterable[Coordinate]) -> None:
        """
        Insert every coordinate of one document into a bucket's set.

        An empty iterable leaves an absent bucket absent.

        Raises:
            ValueError: If bucket_id is negative
        """
        iterator = iter(coordinates)
        first = next(iterator, None)
        if first is None:
            if bucket_id < 0:
                raise ValueError(f"bucket_id must be >= 0, got {bucket_id}")
            return

        points = self._set_for(bucket_id)
        points.add(first)
        points.update(iterator)

    def _set_for(self, bucket_id: int) -> Set[Coordinate]:
        """Slot for bucket_id, growing and creating the set on demand."""
        if bucket_id < 0:
            raise ValueError(f"bucket_id must be >= 0, got {bucket_id}")

        if bucket_id >= len(self._slots):
            self.ensure_capacity(bucket_id + 1)

        points = self._slots[bucket_id]
        if points is None:
            points = set()
            self._slots[bucket_id] = points
            self._populated += 1
        return points

    def get(self, bucket_id: int) -> Optional[FrozenSet[Coordinate]]:
        """
        Read a bucket's points.

        Returns:
            Frozen copy of the bucket's set, or None when bucket_id is out of
            range (including negative) or was never collected into
        """
        if not 0 <= bucket_id < len(self._slots):
            return None
        points = self._slots[bucket_id]
        if points is None:
            return None
        return frozenset(points)

    def populated_buckets(self) -> Iterator[int]:
        """Ordinals holding a set, ascending."""
        for bucket_id, points in enumerate(self._slots):
            if points is not None:
                yield bucket_id

    def release(self) -> None:
        """Drop every set and the slot list. Idempotent."""
        self._slots = []
        self._populated = 0

    def __contains__(self, bucket_id: object) -> bool:
        if not isinstance(bucket_id, int) or not 0 <= bucket_id < len(self._slots):
            return False
        return self._slots[bucket_id] is not None

    def __len__(self) -> int:
        """Return number of populated buckets."""
        return self._populated

    def __repr__(self) -> str:
        return (
            f"BucketedPointStore(capacity={len(self._slots)}, "
            f"populated={self._populated})"
        )
