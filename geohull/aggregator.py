"""
Convex Hull Aggregator Module
=============================

Bounded Context: Per-bucket convex hull aggregation.

Design:
- Composition over inheritance: Collector + Builder protocols, driven by
  whatever loop an outer framework supplies
- Unmapped field decided once, at construction (value_source is None)
- One BucketedPointStore per aggregator; released at end of execution
- collect() is the hot loop and never logs; build/release/factory do
- One logger per aggregation name (geohull.aggregator.<name>) at the
  configured level; hull rejections are logged through it

Lifecycle:

    factory = ConvexHullAggregatorFactory(name="hull")
    with factory.create(value_source) as aggregator:
        for doc_id, bucket_id in assignments:      # collection phase
            aggregator.collect(doc_id, bucket_id)
        result = aggregator.build(bucket_id)       # build phase
    # store released here; results built above stay valid
"""

from typing import Any, Dict, Optional, Protocol

from geohull.config import AggregatorConfig
from geohull.geometry.hull import compute_convex_hull
from geohull.logging import LogEvent, create_logger
from geohull.schemas.result import ConvexHullResult
from geohull.storage.point_store import BucketedPointStore
from geohull.value_source import GeoPointValueSource


class Collector(Protocol):
    """Collection capability: feed one document into one bucket."""

    def collect(self, doc_id: int, bucket_id: int) -> None:
        ...


class Builder(Protocol):
    """Build capability: produce the result of one bucket."""

    def build(self, bucket_id: int) -> ConvexHullResult:
        ...

    def build_empty(self) -> ConvexHullResult:
        ...


class ConvexHullAggregator:
    """
    Collects geo-points per bucket and builds their convex hulls.

    Design:
    - Implements Collector and Builder
    - Mutable state is the point store only
    - NOT thread-safe: one driver thread per aggregator

    Usage:
        aggregator = ConvexHullAggregator("hull", source)
        aggregator.collect(doc_id=0, bucket_id=3)
        aggregator.build(3)        # ConvexHullResult
        aggregator.build(99)       # empty result (never collected)
        aggregator.release()
    """

    def __init__(
        self,
        name: str,
        value_source: Optional[GeoPointValueSource],
        config: Optional[AggregatorConfig] = None,
        metadata: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize aggregator.

        Args:
            name: Aggregation name, copied into every result
            value_source: Geo-point source, or None when the field is unmapped
            config: Store sizing and log level (default: AggregatorConfig())
            metadata: Passed through unchanged into every result
        """
        self.name = name
        self.config = config or AggregatorConfig(name=name)
        self.metadata = dict(metadata or {})
        self._value_source = value_source
        self._store = BucketedPointStore(
            initial_capacity=self.config.store.initial_capacity,
            growth_factor=self.config.store.growth_factor
        )
        self._released = False
        self.logger = create_logger(
            "aggregator",
            level=self.config.logging_level,
            logger_name=f"geohull.aggregator.{name}"
        )

    @property
    def is_mapped(self) -> bool:
        """False when the aggregated field is unmapped for this context."""
        return self._value_source is not None

    @property
    def store(self) -> BucketedPointStore:
        """Underlying point store (read access for drivers and tests)."""
        return self._store

    def collect(self, doc_id: int, bucket_id: int) -> None:
        """
        Add the document's points to the bucket's set.

        No-op when the field is unmapped.
        """
        if self._value_source is None:
            return
        self._store.collect_many(bucket_id, self._value_source.points(doc_id))

    def build(self, bucket_id: int) -> ConvexHullResult:
        """
        Build the result of one bucket.

        Returns:
            Empty result when the field is unmapped (store not consulted) or
            the bucket was never collected into; hull result otherwise
        """
        if self._value_source is None:
            return self.build_empty()

        points = self._store.get(bucket_id)
        if not points:
            self.logger.debug(
                event=LogEvent.BUCKET_EMPTY,
                message=f"Bucket {bucket_id} has no points",
                metadata={'name': self.name, 'bucket_id': bucket_id}
            )
            return self.build_empty()

        geometry = compute_convex_hull(points, logger=self.logger)
        self.logger.debug(
            event=LogEvent.BUCKET_BUILT,
            message=f"Built hull for bucket {bucket_id}",
            metadata={
                'name': self.name,
                'bucket_id': bucket_id,
                'point_count': len(points),
                'geometry_type': geometry.type.value if geometry else None,
            }
        )
        return ConvexHullResult(
            name=self.name,
            geometry=geometry,
            metadata=dict(self.metadata)
        )

    def build_empty(self) -> ConvexHullResult:
        """Result with no geometry, same shape as any absent bucket."""
        return ConvexHullResult(
            name=self.name,
            geometry=None,
            metadata=dict(self.metadata)
        )

    def release(self) -> None:
        """Release the point store. Idempotent."""
        if self._released:
            return
        populated = len(self._store)
        self._store.release()
        self._released = True
        self.logger.debug(
            event=LogEvent.STORE_RELEASED,
            message="Point store released",
            metadata={'name': self.name, 'populated_buckets': populated}
        )

    def __enter__(self) -> "ConvexHullAggregator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        return (
            f"ConvexHullAggregator(name={self.name!r}, "
            f"mapped={self.is_mapped}, store={self._store!r})"
        )


class ConvexHullAggregatorFactory:
    """
    Creates aggregators, choosing the unmapped variant when there is no
    value source for the field.

    Example:
        factory = ConvexHullAggregatorFactory(name="hull")
        aggregator = factory.create(InMemoryValueSource.from_documents(docs, "location"))
    """

    def __init__(
        self,
        name: str,
        config: Optional[AggregatorConfig] = None,
        metadata: Optional[Dict[str, Any]] = None
    ):
        self.name = name
        self.config = config or AggregatorConfig(name=name)
        self.metadata = dict(metadata or {})
        self.logger = create_logger(
            "factory",
            level=self.config.logging_level,
            logger_name=f"geohull.factory.{name}"
        )

    def create(
        self,
        value_source: Optional[GeoPointValueSource]
    ) -> ConvexHullAggregator:
        """Mapped aggregator for a source, unmapped one for None."""
        if value_source is None:
            return self.create_unmapped()

        self.logger.info(
            event=LogEvent.AGGREGATOR_CREATED,
            message=f"Created aggregator '{self.name}'",
            metadata={'name': self.name, 'field': self.config.geo_field}
        )
        return ConvexHullAggregator(
            self.name, value_source, config=self.config, metadata=self.metadata
        )

    def create_unmapped(self) -> ConvexHullAggregator:
        """Aggregator whose every build returns the empty result."""
        self.logger.info(
            event=LogEvent.AGGREGATOR_UNMAPPED,
            message=f"Field '{self.config.geo_field}' is unmapped; "
                    f"aggregator '{self.name}' returns empty results",
            metadata={'name': self.name, 'field': self.config.geo_field}
        )
        return ConvexHullAggregator(
            self.name, None, config=self.config, metadata=self.metadata
        )
