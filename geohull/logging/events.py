"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for the aggregation boundary (factory, build, release,
pipeline). The per-document collect loop never logs.

Event Naming Convention:
    <component>.<action>

    component: aggregator, bucket, store, pipeline, error

Example Log Query (CloudWatch Insights):
    fields @timestamp, event, metadata.bucket_id
    | filter event = "bucket.built"
    | stats count() by metadata.geometry_type
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - aggregator.*: Aggregator lifecycle
    - bucket.*: Per-bucket build results
    - store.*: Point store lifecycle
    - pipeline.*: Driver runs
    - error.*: Error conditions
    """

    # ========== Aggregator Events ==========
    AGGREGATOR_CREATED = "aggregator.created"
    """Aggregator created with a mapped value source."""

    AGGREGATOR_UNMAPPED = "aggregator.unmapped"
    """Aggregator created without a value source (field unmapped)."""

    # ========== Bucket Events ==========
    BUCKET_BUILT = "bucket.built"
    """Hull geometry built for a bucket."""

    BUCKET_EMPTY = "bucket.empty"
    """Bucket had no points; empty result returned."""

    # ========== Store Events ==========
    STORE_RELEASED = "store.released"
    """Point store storage released."""

    # ========== Pipeline Events ==========
    PIPELINE_STARTED = "pipeline.started"
    """Pipeline started collecting documents."""

    PIPELINE_COMPLETED = "pipeline.completed"
    """Pipeline built every bucket and released its aggregator."""

    # ========== Error Events ==========
    HULL_COMPUTATION_ERROR = "error.hull_computation"
    """Geometry engine rejected a point set."""
