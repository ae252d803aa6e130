"""
geohull v1.0
============

Bounded Context: Per-bucket convex hull aggregation over geo-points.

Design Philosophy:
- Separation of Concerns: Geometry, Storage, Aggregation separated
- The hot loop (collect) stays free of logging and allocation beyond the
  bucket's first point
- Pragmatismo > Purismo: GEOS (shapely) computes the hull, we don't reinvent it

Architecture:

    geohull/
    ├── geometry/          # Pure geometry (immutable, stateless)
    │   ├── coordinate.py  # Coordinate (exact equality)
    │   ├── shapes.py      # HullGeometry, GeometryType
    │   └── hull.py        # compute_convex_hull
    │
    ├── storage/           # Point accumulation (stateful)
    │   └── point_store.py # BucketedPointStore
    │
    ├── schemas/           # Results handed to serializers
    │   └── result.py      # ConvexHullResult
    │
    ├── logging/           # Structured JSON logging
    ├── value_source.py    # GeoPointValueSource, InMemoryValueSource
    ├── aggregator.py      # ConvexHullAggregator (+ factory)
    ├── config.py          # AggregatorConfig (YAML)
    └── pipeline.py        # Orchestration (bucket driver)

Usage:

    from geohull import InMemoryValueSource, PipelineBuilder

    source = InMemoryValueSource({0: [(0, 0)], 1: [(1, 0)], 2: [(0, 1)]})
    results = (
        PipelineBuilder()
        .with_value_source(source)
        .add_documents([(0, 0), (1, 0), (2, 0)])
        .build()
        .process()
    )
    results[0].to_dict()
"""

# Geometry Layer (immutable, stateless)
from geohull.geometry import Coordinate, GeometryType, HullGeometry, compute_convex_hull

# Storage Layer (stateful)
from geohull.storage import BucketedPointStore

# Aggregation
from geohull.schemas import ConvexHullResult
from geohull.value_source import GeoPointValueSource, InMemoryValueSource
from geohull.aggregator import (
    Builder,
    Collector,
    ConvexHullAggregator,
    ConvexHullAggregatorFactory,
)
from geohull.config import AggregatorConfig, StoreConfig

# Pipeline (orchestration)
from geohull.pipeline import HullPipeline, PipelineBuilder

__all__ = [
    # Geometry
    "Coordinate",
    "GeometryType",
    "HullGeometry",
    "compute_convex_hull",
    # Storage
    "BucketedPointStore",
    # Aggregation
    "ConvexHullResult",
    "GeoPointValueSource",
    "InMemoryValueSource",
    "Builder",
    "Collector",
    "ConvexHullAggregator",
    "ConvexHullAggregatorFactory",
    "AggregatorConfig",
    "StoreConfig",
    # Pipeline
    "HullPipeline",
    "PipelineBuilder",
]

__version__ = "1.0.0"
